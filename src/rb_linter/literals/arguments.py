"""Classify call argument nodes by their literal shape."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from rb_tree_sitter import ASTWalker, RubyPatterns
from tree_sitter import Node

from .encoder import QuoteStyle
from .escapes import LiteralDecodeError, closing_delimiter, decode_string_body

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StringLiteral:
    """A string literal without interpolation.

    `decoded` holds the string value and is only set when decoding is
    unambiguous; otherwise `decode_error` says why it is not.
    """

    raw_text: str
    quote: QuoteStyle
    body: str
    delimiters: tuple[str, str]
    decoded: Optional[str] = None
    decode_error: Optional[str] = None


@dataclass(frozen=True)
class RegexLiteral:
    raw_text: str
    raw_pattern: str
    flags: frozenset[str]
    delimiters: tuple[str, str]


class RegexSource(Enum):
    FROM_STRING = "string"
    FROM_LITERAL = "literal"


@dataclass(frozen=True)
class RegexConstructor:
    """`Regexp.new(x)` / `Regexp.compile(x)` around a literal."""

    source: Union[StringLiteral, RegexLiteral]
    via: RegexSource


@dataclass(frozen=True)
class Dynamic:
    reason: str


ArgumentKind = Union[StringLiteral, RegexLiteral, RegexConstructor, Dynamic]


class ArgumentResolver:
    """Resolve an argument node to an ArgumentKind.

    Only literal text is inspected; anything that needs evaluation
    (variables, method calls, interpolation) is Dynamic.
    """

    def __init__(self, source: bytes | str):
        self.source = source.encode("utf-8") if isinstance(source, str) else source

    def resolve(self, node: Node) -> ArgumentKind:
        if node.type == "string":
            return self._resolve_string(node)
        if node.type == "regex":
            return self._resolve_regex(node)
        if node.type == "call" and RubyPatterns.is_regexp_constructor(node, self.source):
            return self._resolve_constructor(node)
        return Dynamic(f"unsupported argument type '{node.type}'")

    def _resolve_string(self, node: Node) -> ArgumentKind:
        if RubyPatterns.has_interpolation(node):
            return Dynamic("string interpolation")

        text = ASTWalker.get_text(node, self.source)
        parts = split_string_literal(text)
        if parts is None:
            return Dynamic("unsupported string literal form")
        quote, body, delimiters = parts

        try:
            decoded = decode_string_body(body, quote, delimiters)
        except LiteralDecodeError as e:
            logger.debug(f"Cannot decode string literal {text!r}: {e.reason}")
            return StringLiteral(text, quote, body, delimiters, decode_error=e.reason)
        return StringLiteral(text, quote, body, delimiters, decoded=decoded)

    def _resolve_regex(self, node: Node) -> ArgumentKind:
        if RubyPatterns.has_interpolation(node):
            return Dynamic("regexp interpolation")

        text = ASTWalker.get_text(node, self.source)
        parts = split_regex_literal(text)
        if parts is None:
            return Dynamic("unsupported regexp literal form")
        pattern, flags, delimiters = parts
        return RegexLiteral(text, pattern, flags, delimiters)

    def _resolve_constructor(self, node: Node) -> ArgumentKind:
        call = RubyPatterns.call_site(node, self.source)
        inner = self.resolve(call.arguments[0])
        if isinstance(inner, StringLiteral):
            return RegexConstructor(inner, RegexSource.FROM_STRING)
        if isinstance(inner, RegexLiteral):
            return RegexConstructor(inner, RegexSource.FROM_LITERAL)
        return Dynamic("regexp constructor argument is not a literal")


def split_string_literal(text: str) -> Optional[tuple[QuoteStyle, str, tuple[str, str]]]:
    """Split `'..'`, `".."`, `%q(..)`, `%Q(..)` or `%(..)` into quote family, body and delimiters."""
    if len(text) < 2:
        return None

    if text[0] in "'\"":
        quote = QuoteStyle(text[0])
        start = 1
        opening = text[0]
    elif text.startswith(("%q", "%Q")) and len(text) > 3:
        quote = QuoteStyle.SINGLE if text[1] == "q" else QuoteStyle.DOUBLE
        start = 3
        opening = text[2]
    elif text[0] == "%" and not text[1].isalnum() and not text[1].isspace():
        quote = QuoteStyle.DOUBLE
        start = 2
        opening = text[1]
    else:
        return None

    closing = closing_delimiter(opening)
    if not text.endswith(closing) or len(text) <= start:
        return None
    return quote, text[start:-1], (opening, closing)


def split_regex_literal(text: str) -> Optional[tuple[str, frozenset[str], tuple[str, str]]]:
    """Split `/../flags` or `%r{..}flags` into pattern body, flags and delimiters."""
    if text.startswith("/"):
        opening, start = "/", 1
    elif text.startswith("%r") and len(text) > 3:
        opening, start = text[2], 3
    else:
        return None

    closing = closing_delimiter(opening)
    end = text.rfind(closing)
    if end < start:
        return None
    flags = text[end + 1 :]
    if flags and not flags.isalpha():
        return None
    return text[start:end], frozenset(flags), (opening, closing)
