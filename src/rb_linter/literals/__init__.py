from .arguments import (
    ArgumentKind,
    ArgumentResolver,
    Dynamic,
    RegexConstructor,
    RegexLiteral,
    RegexSource,
    StringLiteral,
)
from .characters import (
    CharacterExtractor,
    CharacterFact,
    DeterminismClassifier,
    Fixed,
    FixedEmpty,
    Indeterminate,
)
from .encoder import QuoteStyle, SourceEncoder
from .escapes import LiteralDecodeError, decode_literal, decode_regex_body, decode_string_body

__all__ = [
    "ArgumentKind",
    "ArgumentResolver",
    "CharacterExtractor",
    "CharacterFact",
    "DeterminismClassifier",
    "Dynamic",
    "Fixed",
    "FixedEmpty",
    "Indeterminate",
    "LiteralDecodeError",
    "QuoteStyle",
    "RegexConstructor",
    "RegexLiteral",
    "RegexSource",
    "SourceEncoder",
    "StringLiteral",
    "decode_literal",
    "decode_regex_body",
    "decode_string_body",
]
