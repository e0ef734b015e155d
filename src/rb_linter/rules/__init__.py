from .base import BaseRule, RuleContext
from .string_replacement import StringReplacementRule

__all__ = ["BaseRule", "RuleContext", "StringReplacementRule"]
