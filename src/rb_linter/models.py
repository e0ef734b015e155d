from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class Severity(str, Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"
    STYLE = "STYLE"
    INFO = "INFO"

    @property
    def rank(self) -> int:
        return SEVERITY_RANK[self]


SEVERITY_RANK = {Severity.ERROR: 3, Severity.WARNING: 2, Severity.STYLE: 1, Severity.INFO: 0}


@dataclass(frozen=True)
class Edit:
    """Replace source bytes [start_byte, end_byte) with `replacement`."""

    start_byte: int
    end_byte: int
    replacement: str


@dataclass
class InternalIssue:
    """Internal representation of a linting issue"""

    file_path: Path
    line: int
    rule_id: str
    message: str
    severity: Severity
    auto_fixable: bool
    context: str | None = None
    column: int = 0
    start_byte: int = 0
    end_byte: int = 0
    fixes: list[Edit] = field(default_factory=list)
