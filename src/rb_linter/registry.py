from typing import Protocol

from .models import InternalIssue
from .rules.base import RuleContext


class LintRule(Protocol):
    """Protocol for a linting rule"""

    rule_id: str
    name: str

    def check(self, context: RuleContext) -> list[InternalIssue]: ...


class RuleRegistry:
    """Registry for managing and loading linting rules"""

    def __init__(self):
        self._rules: list[LintRule] = []
        self._load_builtin_rules()

    def register(self, rule: LintRule):
        if self.get_rule(rule.rule_id) is not None:
            raise ValueError(f"Rule '{rule.rule_id}' is already registered")
        self._rules.append(rule)

    def get_all_rules(self) -> list[LintRule]:
        return self._rules

    def get_rule(self, key: str) -> LintRule | None:
        """Look a rule up by id ('P001') or name ('string-replacement')."""
        for rule in self._rules:
            if key in (rule.rule_id, rule.name):
                return rule
        return None

    def get_enabled_rules(self, select: list[str] | None = None, ignore: list[str] | None = None) -> list[LintRule]:
        """Rules whose id starts with a selected prefix (or whose name is selected), minus ignored ones."""
        select = select or []
        ignore = ignore or []
        return [
            rule
            for rule in self._rules
            if self._matches(rule, select) and not self._matches(rule, ignore)
        ]

    @staticmethod
    def _matches(rule: LintRule, keys: list[str]) -> bool:
        return any(key == "ALL" or key == rule.name or rule.rule_id.startswith(key) for key in keys)

    def _load_builtin_rules(self):
        from .rules.string_replacement import StringReplacementRule

        self.register(StringReplacementRule())


registry = RuleRegistry()
