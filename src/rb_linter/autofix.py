import logging
from dataclasses import dataclass, field
from pathlib import Path

from .models import Edit, InternalIssue

logger = logging.getLogger(__name__)


@dataclass
class FixResult:
    """Outcome of iterative lint-and-fix passes over one source"""

    source: str
    modified: bool
    passes: int
    fixed_count: int
    remaining: list[InternalIssue] = field(default_factory=list)


class AutoFixEngine:
    """Apply the edits attached to auto-fixable issues"""

    def __init__(self, max_passes: int = 10):
        self.max_passes = max_passes

    def apply_fixes(self, source: str, issues: list[InternalIssue]) -> str:
        edits = [edit for issue in issues if issue.auto_fixable for edit in issue.fixes]
        if not edits:
            return source
        return self._apply_edits(source, edits)

    def fix_source(self, engine, source: str, file_path: Path = Path("<string>"), rules=None) -> FixResult:
        """Lint and fix until nothing fixable is left or max_passes is reached.

        Overlapping edits are skipped in a pass and picked up by the next one.
        """
        current = source
        fixed_count = 0
        passes = 0
        issues = engine.analyze_string(current, file_path, rules)

        while passes < self.max_passes:
            fixable = [i for i in issues if i.auto_fixable]
            if not fixable:
                break
            passes += 1

            new_source = self.apply_fixes(current, fixable)
            if new_source == current:
                break
            remaining = engine.analyze_string(new_source, file_path, rules)
            fixed_count += max(len(issues) - len(remaining), 0)
            current, issues = new_source, remaining

            if passes == self.max_passes:
                logger.warning(f"Reached max fix passes for {file_path}")

        return FixResult(
            source=current,
            modified=current != source,
            passes=passes,
            fixed_count=fixed_count,
            remaining=issues,
        )

    def fix_file(self, engine, file_path: Path, rules=None) -> FixResult:
        source = Path(file_path).read_text(encoding="utf-8")
        result = self.fix_source(engine, source, file_path, rules)
        if result.modified:
            Path(file_path).write_text(result.source, encoding="utf-8")
        return result

    @staticmethod
    def _apply_edits(source: str, edits: list[Edit]) -> str:
        """Applies non-overlapping byte-range edits in a single pass."""
        data = source.encode("utf-8")
        result = []
        last_offset = 0
        for edit in sorted(edits, key=lambda e: (e.start_byte, e.end_byte)):
            if edit.start_byte < last_offset:
                logger.debug(f"Skipping overlapping edit at byte {edit.start_byte}")
                continue
            result.append(data[last_offset : edit.start_byte])
            result.append(edit.replacement.encode("utf-8"))
            last_offset = edit.end_byte
        result.append(data[last_offset:])
        return b"".join(result).decode("utf-8")
