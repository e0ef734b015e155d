import logging
from dataclasses import replace
from pathlib import Path

from rb_tree_sitter import ParseResult, RubyParser

from .models import InternalIssue, Severity
from .registry import LintRule, RuleRegistry
from .rules.base import RuleContext

logger = logging.getLogger(__name__)


class LinterEngine:
    """Core engine for Ruby linting"""

    def __init__(self, registry: RuleRegistry | None = None, severity_overrides: dict[str, Severity] | None = None):
        self.parser = RubyParser()
        self.registry = registry or RuleRegistry()
        self.severity_overrides = severity_overrides or {}

    def analyze_string(
        self, source: str, file_path: Path = Path("<string>"), rules: list[LintRule] | None = None
    ) -> list[InternalIssue]:
        """Run lint checks on in-memory source"""
        return self._run_rules(self.parser.parse_string(source), file_path, rules)

    def analyze_file(self, file_path: Path, rules: list[LintRule] | None = None) -> list[InternalIssue]:
        """Run all lint checks on a file"""
        logger.info(f"Linting {file_path}")
        return self._run_rules(self.parser.parse_file(file_path), file_path, rules)

    def _run_rules(self, result: ParseResult, file_path: Path, rules: list[LintRule] | None) -> list[InternalIssue]:
        for error in result.errors:
            logger.warning(f"{file_path}: {error}")

        context = RuleContext(file_path=file_path, source=result.source, tree=result.tree, parse_errors=result.errors)
        issues: list[InternalIssue] = []
        for rule in rules if rules is not None else self.registry.get_all_rules():
            issues.extend(self._apply_overrides(rule, rule.check(context)))

        return sorted(issues, key=lambda x: (x.line, x.column, x.rule_id))

    def _apply_overrides(self, rule: LintRule, issues: list[InternalIssue]) -> list[InternalIssue]:
        severity = self.severity_overrides.get(rule.rule_id) or self.severity_overrides.get(rule.name)
        if severity is None:
            return issues
        return [replace(issue, severity=severity) for issue in issues]
