"""
rb-lint - performance linting for Ruby source

This package provides:
- A tree-sitter backed linter engine and rule registry
- The string-replacement rule (`gsub` -> `tr` / `delete`)
- An autofix engine applying the rules' source edits
"""

__version__ = "0.1.0"

from .autofix import AutoFixEngine, FixResult
from .engine import LinterEngine
from .models import Edit, InternalIssue, Severity
from .registry import RuleRegistry

__all__ = [
    "AutoFixEngine",
    "Edit",
    "FixResult",
    "InternalIssue",
    "LinterEngine",
    "RuleRegistry",
    "Severity",
]
