import difflib
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rb_linter.autofix import AutoFixEngine
from rb_linter.engine import LinterEngine
from rb_linter.models import Severity
from rb_linter.registry import registry
from rb_tree_sitter import ParseError

from .config import ConfigError, LintConfig, find_config_file
from .converters import internal_issue_to_lint_issue
from .models import LintReport

app = typer.Typer(help="Ruby Performance Linter - Find and fix slow string calls in Ruby code")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")):
    """Ruby Performance Linter"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def collect_files(paths: list[Path], config: LintConfig) -> list[Path]:
    """Expand directories to their .rb files and drop excluded paths"""
    files = []
    for path in paths:
        candidates = sorted(path.rglob("*.rb")) if path.is_dir() else [path]
        files.extend(f for f in candidates if not config.is_excluded(f))
    return files


@app.command()
def lint(
    files: List[Path] = typer.Argument(None, help="Files or directories to lint"),
    config_file: Optional[Path] = typer.Option(
        None, "--config", help="Path to config file (default: .rb-lint.toml, then pyproject.toml)"
    ),
    severity: Severity = typer.Option(Severity.STYLE, case_sensitive=False, help="Minimum severity to show"),
    fix: bool = typer.Option(False, help="Automatically fix issues"),
    diff: bool = typer.Option(False, help="Print the fixes as a unified diff instead of writing them"),
    select: Optional[List[str]] = typer.Option(None, help="Rule ids/prefixes or names to enable"),
    ignore: Optional[List[str]] = typer.Option(None, help="Rule ids/prefixes or names to disable"),
    output_format: str = typer.Option("text", "--format", help="Output format: text or json"),
):
    """Run linter on Ruby files"""
    try:
        config = LintConfig(config_file or find_config_file())
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)
    config.override(select=select, ignore=ignore)

    if not files:
        typer.echo("Error: Provide files or directories to lint", err=True)
        raise typer.Exit(code=2)

    missing = [f for f in files if not f.exists()]
    if missing:
        typer.echo(f"Error: No such file or directory: {missing[0]}", err=True)
        raise typer.Exit(code=2)

    engine = LinterEngine(registry=registry, severity_overrides=config.severity_overrides)
    enabled_rules = config.apply_to_registry(registry)
    autofix = AutoFixEngine()
    targets = collect_files(files, config)

    all_issues = []
    fixed_total = 0
    for file_path in targets:
        try:
            if fix or diff:
                source = file_path.read_text(encoding="utf-8")
                result = autofix.fix_source(engine, source, file_path, enabled_rules)
                if result.modified and diff:
                    typer.echo(_unified_diff(source, result.source, file_path), nl=False)
                elif result.modified:
                    file_path.write_text(result.source, encoding="utf-8")
                    typer.echo(f"  🔧 Fixed {result.fixed_count} issue(s) in {file_path}")
                    fixed_total += result.fixed_count
                issues = engine.analyze_string(source, file_path, enabled_rules) if diff else result.remaining
            else:
                issues = engine.analyze_file(file_path, rules=enabled_rules)
        except (ParseError, OSError, UnicodeDecodeError) as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=2)
        all_issues.extend(issues)

    external_issues = [internal_issue_to_lint_issue(i) for i in all_issues]

    # Sort and filter by severity
    min_rank = severity.rank
    reported = [
        issue
        for issue in sorted(external_issues, key=lambda x: (x.file_path, x.line_number, x.column))
        if issue.severity.rank >= min_rank
    ]

    if output_format == "json":
        report = LintReport(issues=reported, files_checked=len(targets), fixed=fixed_total)
        typer.echo(report.model_dump_json(indent=2))
    else:
        for issue in reported:
            typer.echo(
                f"{issue.severity.value}: {issue.file_path}:{issue.line_number}:{issue.column} "
                f"[{issue.rule_id}] - {issue.message}"
            )
        typer.echo(f"\nTotal issues found: {len(external_issues)} ({len(reported)} reported)")

    if reported:
        raise typer.Exit(code=1)


@app.command()
def rules():
    """List available rules"""
    for rule in registry.get_all_rules():
        fix_marker = " (fixable)" if rule.auto_fixable else ""
        typer.echo(f"{rule.rule_id} {rule.name} [{rule.severity.value}]{fix_marker}")
        if rule.description:
            typer.echo(f"    {rule.description}")


def _unified_diff(before: str, after: str, file_path: Path) -> str:
    return "".join(
        difflib.unified_diff(
            before.splitlines(keepends=True),
            after.splitlines(keepends=True),
            fromfile=f"a/{file_path}",
            tofile=f"b/{file_path}",
        )
    )


if __name__ == "__main__":
    app()
