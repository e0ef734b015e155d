from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from tree_sitter import Node, Tree

from ..models import Edit, InternalIssue, Severity


@dataclass
class RuleContext:
    """Everything a rule needs to inspect one parsed file."""

    file_path: Path
    source: str
    tree: Tree
    parse_errors: list[str] = field(default_factory=list)

    def __post_init__(self):
        self.source_bytes = self.source.encode("utf-8")

    def position(self, byte_offset: int) -> tuple[int, int]:
        """1-based (line, column) of a byte offset, column counted in characters."""
        line_start = self.source_bytes.rfind(b"\n", 0, byte_offset) + 1
        line = self.source_bytes.count(b"\n", 0, byte_offset) + 1
        column = len(self.source_bytes[line_start:byte_offset].decode("utf-8", errors="replace")) + 1
        return line, column


class BaseRule(ABC):
    """Abstract base class for all linting rules."""

    @property
    @abstractmethod
    def rule_id(self) -> str:
        """Unique rule identifier (e.g., 'P001')."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable rule name (e.g., 'string-replacement')."""
        pass

    @property
    @abstractmethod
    def severity(self) -> Severity:
        """Default severity for this rule."""
        pass

    @property
    def auto_fixable(self) -> bool:
        """Can this rule automatically fix violations?"""
        return False

    @property
    def description(self) -> str:
        """Detailed description of what this rule checks."""
        return ""

    @abstractmethod
    def check(self, context: RuleContext) -> list[InternalIssue]:
        """Run the check and return found issues."""
        pass

    # Helper method for consistent issue creation
    def _create_issue(
        self,
        context: RuleContext,
        node: Node,
        message: str,
        start_byte: int | None = None,
        end_byte: int | None = None,
        fixes: list[Edit] | None = None,
    ) -> InternalIssue:
        """Helper to create an issue with rule defaults."""
        start = node.start_byte if start_byte is None else start_byte
        end = node.end_byte if end_byte is None else end_byte
        line, column = context.position(start)
        return InternalIssue(
            file_path=context.file_path,
            line=line,
            rule_id=self.rule_id,
            message=message,
            severity=self.severity,
            auto_fixable=self.auto_fixable and bool(fixes),
            context=context.source_bytes[start:end].decode("utf-8", errors="replace"),
            column=column,
            start_byte=start,
            end_byte=end,
            fixes=list(fixes or []),
        )
