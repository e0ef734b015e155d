"""Reduce a resolved argument to the single character it denotes, if any."""

import logging
from dataclasses import dataclass
from typing import Union

from tree_sitter import Node

from .arguments import (
    ArgumentKind,
    ArgumentResolver,
    Dynamic,
    RegexConstructor,
    RegexLiteral,
    RegexSource,
    StringLiteral,
)
from .escapes import LiteralDecodeError, decode_regex_body

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Fixed:
    char: str


@dataclass(frozen=True)
class FixedEmpty:
    pass


@dataclass(frozen=True)
class Indeterminate:
    reason: str


CharacterFact = Union[Fixed, FixedEmpty, Indeterminate]


def fact_from_text(text: str) -> CharacterFact:
    if len(text) == 0:
        return FixedEmpty()
    if len(text) == 1:
        return Fixed(text)
    return Indeterminate("multi-character")


class CharacterExtractor:
    """Decode string and regexp literals into a CharacterFact."""

    def extract(self, kind: ArgumentKind) -> CharacterFact:
        if isinstance(kind, StringLiteral):
            return self._from_string(kind)
        if isinstance(kind, RegexLiteral):
            return self._from_regex(kind)
        if isinstance(kind, RegexConstructor):
            if kind.via is RegexSource.FROM_LITERAL:
                return self._from_regex(kind.source)
            return self._from_regex_source(kind.source)
        if isinstance(kind, Dynamic):
            return Indeterminate(kind.reason)
        raise TypeError(f"Unknown argument kind: {kind!r}")

    def _from_string(self, literal: StringLiteral) -> CharacterFact:
        if literal.decoded is None:
            return Indeterminate(literal.decode_error or "undecodable string")
        return fact_from_text(literal.decoded)

    def _from_regex(self, literal: RegexLiteral) -> CharacterFact:
        if literal.flags:
            return Indeterminate(f"regexp options {''.join(sorted(literal.flags))}")
        return self._scan(literal.raw_pattern)

    def _from_regex_source(self, literal: StringLiteral) -> CharacterFact:
        # Regexp.new('...') compiles the string value, so the decoded string is the pattern body
        if literal.decoded is None:
            return Indeterminate(literal.decode_error or "undecodable string")
        return self._scan(literal.decoded)

    @staticmethod
    def _scan(pattern: str) -> CharacterFact:
        try:
            return fact_from_text(decode_regex_body(pattern))
        except LiteralDecodeError as e:
            return Indeterminate(e.reason)


class DeterminismClassifier:
    """Answer whether an argument node is one fixed character (or empty)."""

    def __init__(self, source: bytes | str):
        self.resolver = ArgumentResolver(source)
        self.extractor = CharacterExtractor()

    def classify(self, node: Node) -> CharacterFact:
        fact = self.extractor.extract(self.resolver.resolve(node))
        if isinstance(fact, Indeterminate):
            logger.debug(f"Pattern at byte {node.start_byte} is indeterminate: {fact.reason}")
        return fact

    def classify_replacement(self, node: Node) -> CharacterFact:
        """Like classify, but only plain string literals qualify."""
        kind = self.resolver.resolve(node)
        if not isinstance(kind, StringLiteral):
            return Indeterminate("replacement is not a string literal")
        return self.extractor.extract(kind)
