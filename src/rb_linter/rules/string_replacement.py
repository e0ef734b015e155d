"""Flag `gsub` calls that can be replaced by the faster `tr` or `delete`.

    # bad
    'abc'.gsub('b', 'd')
    'abc'.gsub('a', '')
    'abc'.gsub(/a/, 'd')
    'abc'.gsub!('a', 'd')

    # good
    'abc'.gsub(/.*/, 'a')
    'abc'.gsub(/a+/, 'd')
    'abc'.tr('b', 'd')
    'a b c'.delete(' ')
"""

import logging
from dataclasses import dataclass
from typing import Union

from rb_tree_sitter import ASTWalker, CallSite, RubyPatterns
from tree_sitter import Node

from ..literals import (
    ArgumentResolver,
    DeterminismClassifier,
    Fixed,
    FixedEmpty,
    Indeterminate,
    QuoteStyle,
    SourceEncoder,
    StringLiteral,
)
from ..models import Edit, InternalIssue, Severity
from .base import BaseRule, RuleContext

logger = logging.getLogger(__name__)

MSG = "Use `{prefer}` instead of `{current}`."

SUBSTITUTE_METHODS = ("gsub", "gsub!")
TRANSLATE = "tr"
DELETE = "delete"
BANG = "!"


@dataclass(frozen=True)
class NoMatch:
    reason: str = ""


@dataclass(frozen=True)
class Translate:
    source: str
    target: str


@dataclass(frozen=True)
class Delete:
    source: str


Classification = Union[NoMatch, Translate, Delete]


class CallClassifier:
    """Decide whether a `gsub`/`gsub!` call is a one-character translate or delete."""

    def __init__(self, source: bytes | str):
        self.determinism = DeterminismClassifier(source)

    def classify(self, call: CallSite) -> Classification:
        if call.method_name not in SUBSTITUTE_METHODS:
            return NoMatch("not a substitute call")
        # receiverless gsub is Kernel#gsub, which has no tr counterpart
        if call.receiver is None or call.operator != ".":
            return NoMatch("no plain receiver")
        if call.has_block or call.has_block_pass:
            return NoMatch("call has a block")
        if len(call.arguments) != 2:
            return NoMatch(f"expected 2 arguments, got {len(call.arguments)}")

        pattern_node, replacement_node = call.arguments
        pattern = self.determinism.classify(pattern_node)
        if isinstance(pattern, FixedEmpty):
            return NoMatch("empty pattern")
        if isinstance(pattern, Indeterminate):
            return NoMatch(f"pattern: {pattern.reason}")

        replacement = self.determinism.classify_replacement(replacement_node)
        if isinstance(replacement, Fixed):
            return Translate(pattern.char, replacement.char)
        if isinstance(replacement, FixedEmpty):
            return Delete(pattern.char)
        return NoMatch(f"replacement: {replacement.reason}")


class RewriteEmitter:
    """Build the source edit turning a classified `gsub` call into `tr`/`delete`."""

    def __init__(self, source: bytes | str, encoder: SourceEncoder | None = None):
        self.resolver = ArgumentResolver(source)
        self.encoder = encoder or SourceEncoder()

    @staticmethod
    def replacement_method(call: CallSite, classification: Classification) -> str:
        if isinstance(classification, Translate):
            method = TRANSLATE
        elif isinstance(classification, Delete):
            method = DELETE
        else:
            raise ValueError("NoMatch has no replacement method")
        return f"{method}{BANG if call.is_bang else ''}"

    def emit(self, call: CallSite, classification: Classification) -> Edit:
        pattern_node, replacement_node = call.arguments
        if isinstance(classification, Translate):
            arguments = [
                self.encoder.literal(classification.source, self._quote_preference(pattern_node)),
                self.encoder.literal(classification.target, self._quote_preference(replacement_node)),
            ]
        elif isinstance(classification, Delete):
            arguments = [self.encoder.literal(classification.source, self._quote_preference(pattern_node))]
        else:
            raise ValueError("Cannot emit a rewrite for NoMatch")

        method = self.replacement_method(call, classification)
        joined = ", ".join(arguments)
        text = f"{method}({joined})" if call.parenthesized else f"{method} {joined}"
        start, end = call.rewrite_span
        return Edit(start_byte=start, end_byte=end, replacement=text)

    def _quote_preference(self, node: Node) -> QuoteStyle:
        """Reuse the quote family of a string argument; regexp patterns default to single quotes."""
        kind = self.resolver.resolve(node)
        if isinstance(kind, StringLiteral):
            return kind.quote
        return QuoteStyle.SINGLE


class StringReplacementRule(BaseRule):
    """Identifies `gsub` calls that can be `tr` or `delete`."""

    @property
    def rule_id(self) -> str:
        return "P001"

    @property
    def name(self) -> str:
        return "string-replacement"

    @property
    def severity(self) -> Severity:
        return Severity.WARNING

    @property
    def auto_fixable(self) -> bool:
        return True

    @property
    def description(self) -> str:
        return (
            "Use `tr` instead of `gsub` when replacing one character with another, "
            "and `delete` when removing one character."
        )

    def check(self, context: RuleContext) -> list[InternalIssue]:
        issues = []
        classifier = CallClassifier(context.source_bytes)
        emitter = RewriteEmitter(context.source_bytes)

        for node in ASTWalker.find_all_by_type(context.tree.root_node, "call"):
            call = RubyPatterns.call_site(node, context.source_bytes)
            if call is None or call.method_name not in SUBSTITUTE_METHODS:
                continue
            if context.parse_errors and RubyPatterns.is_inside_error(node):
                continue

            classification = classifier.classify(call)
            if isinstance(classification, NoMatch):
                logger.debug(f"{context.file_path}: {call.method_name} at byte {node.start_byte} kept: {classification.reason}")
                continue

            # the rewrite regenerates the argument list, which would drop comments
            start, end = call.rewrite_span
            fixes = [] if RubyPatterns.has_comment(node, start) else [emitter.emit(call, classification)]
            prefer = emitter.replacement_method(call, classification)
            issues.append(
                self._create_issue(
                    context,
                    node,
                    MSG.format(prefer=prefer, current=call.method_name),
                    start_byte=start,
                    end_byte=end,
                    fixes=fixes,
                )
            )

        return issues
