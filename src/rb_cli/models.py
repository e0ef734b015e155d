from typing import Optional

from pydantic import BaseModel
from rb_linter.models import Severity


class LintIssue(BaseModel):
    severity: Severity
    file_path: str
    line_number: int
    column: int
    rule_id: str
    message: str
    suggestion: Optional[str] = None
    auto_fixable: bool = False


class LintReport(BaseModel):
    issues: list[LintIssue]
    files_checked: int
    fixed: int = 0
