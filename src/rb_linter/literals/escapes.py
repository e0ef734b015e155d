"""Character-by-character decoders for Ruby string and regexp literal bodies.

These are deliberately small scanners, not a regexp engine: a regexp body is
only decoded when every piece of it denotes one fixed character.
"""

from .encoder import QuoteStyle

CLOSING_DELIMITERS = {"(": ")", "[": "]", "{": "}", "<": ">"}

STRING_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "f": "\f",
    "v": "\v",
    "a": "\a",
    "b": "\b",
    "e": "\x1b",
    "s": " ",
}

# \b means a word boundary inside a regexp and \s a whitespace class
REGEX_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "f": "\f",
    "v": "\v",
    "a": "\a",
    "e": "\x1b",
}

REGEX_METACHARACTERS = frozenset("*+?{}^$.|[]()")

# Escapes with a meaning of their own in Ruby regexps (classes, anchors,
# properties, control/meta, octal, backreferences); any other escaped
# character stands for itself
REGEX_SPECIAL_ESCAPES = frozenset("abcdefghknoprstuvwxzABCDGHKMNOPRSWXZ123456789")

OCTAL_DIGITS = "01234567"
HEX_DIGITS = "0123456789abcdefABCDEF"


class LiteralDecodeError(ValueError):
    """A literal body does not decode to a fixed, known sequence of characters."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


def closing_delimiter(opening: str) -> str:
    return CLOSING_DELIMITERS.get(opening, opening)


def decode_string_body(body: str, quote: QuoteStyle, delimiters: tuple[str, str] = ("'", "'")) -> str:
    """Decode the text between the delimiters of a Ruby string literal."""
    if quote is QuoteStyle.SINGLE:
        return _decode_single_quoted(body, delimiters)
    return _decode_double_quoted(body)


def decode_literal(text: str) -> str:
    """Decode a complete `'...'` or `"..."` literal."""
    if len(text) < 2 or text[0] not in "'\"" or text[-1] != text[0]:
        raise LiteralDecodeError(f"not a quoted literal: {text!r}")
    quote = QuoteStyle(text[0])
    return decode_string_body(text[1:-1], quote, (quote.delimiter, quote.delimiter))


def decode_regex_body(body: str) -> str:
    """Decode a regexp body that matches one fixed character sequence.

    Raises LiteralDecodeError for any construct that can match more than one
    thing (metacharacters, classes, groups, anchors, backreferences, ...).
    """
    out = []
    i, n = 0, len(body)
    while i < n:
        ch = body[i]
        if ch in REGEX_METACHARACTERS:
            raise LiteralDecodeError(f"metacharacter {ch!r}")
        if ch == "#" and i + 1 < n and body[i + 1] in "{@$":
            raise LiteralDecodeError("interpolation")
        if ch != "\\":
            out.append(ch)
            i += 1
            continue

        if i + 1 >= n:
            raise LiteralDecodeError("trailing backslash")
        esc = body[i + 1]
        i += 2
        if esc in REGEX_ESCAPES:
            out.append(REGEX_ESCAPES[esc])
        elif esc == "0":
            char, i = _read_octal(body, i - 1)
            out.append(char)
        elif esc == "x":
            char, i = _read_hex(body, i)
            out.append(char)
        elif esc == "u":
            chars, i = _read_unicode(body, i)
            out.extend(chars)
        elif esc in REGEX_SPECIAL_ESCAPES:
            raise LiteralDecodeError(f"escape \\{esc}")
        elif esc == "\n":
            raise LiteralDecodeError("escaped newline")
        else:
            out.append(esc)
    return "".join(out)


def _decode_single_quoted(body: str, delimiters: tuple[str, str]) -> str:
    out = []
    i, n = 0, len(body)
    while i < n:
        ch = body[i]
        if ch == "\\" and i + 1 < n and (body[i + 1] == "\\" or body[i + 1] in delimiters):
            out.append(body[i + 1])
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def _decode_double_quoted(body: str) -> str:
    out = []
    i, n = 0, len(body)
    while i < n:
        ch = body[i]
        if ch == "#" and i + 1 < n and body[i + 1] in "{@$":
            raise LiteralDecodeError("interpolation")
        if ch != "\\":
            out.append(ch)
            i += 1
            continue

        if i + 1 >= n:
            raise LiteralDecodeError("trailing backslash")
        esc = body[i + 1]
        i += 2
        if esc in STRING_ESCAPES:
            out.append(STRING_ESCAPES[esc])
        elif esc == "\n":
            # line continuation
            continue
        elif esc in OCTAL_DIGITS:
            char, i = _read_octal(body, i - 1)
            out.append(char)
        elif esc == "x":
            char, i = _read_hex(body, i)
            out.append(char)
        elif esc == "u":
            chars, i = _read_unicode(body, i)
            out.extend(chars)
        elif esc in "cCM":
            raise LiteralDecodeError(f"control/meta escape \\{esc}")
        else:
            out.append(esc)
    return "".join(out)


def _read_octal(body: str, start: int) -> tuple[str, int]:
    """Read 1-3 octal digits starting at `start`."""
    end = start
    while end < len(body) and end - start < 3 and body[end] in OCTAL_DIGITS:
        end += 1
    code = int(body[start:end], 8)
    if code >= 0x80:
        # a raw byte, not a character of the source encoding
        raise LiteralDecodeError(f"octal escape \\{body[start:end]} is not ASCII")
    return chr(code), end


def _read_hex(body: str, start: int) -> tuple[str, int]:
    """Read 1-2 hex digits after `\\x`."""
    end = start
    while end < len(body) and end - start < 2 and body[end] in HEX_DIGITS:
        end += 1
    if end == start:
        raise LiteralDecodeError("invalid hex escape")
    code = int(body[start:end], 16)
    if code >= 0x80:
        raise LiteralDecodeError(f"hex escape \\x{body[start:end]} is not ASCII")
    return chr(code), end


def _read_unicode(body: str, start: int) -> tuple[list[str], int]:
    """Read `HHHH` or `{H...}` (several space separated code points) after `\\u`."""
    if start < len(body) and body[start] == "{":
        end = body.find("}", start)
        if end == -1:
            raise LiteralDecodeError("unterminated unicode escape")
        parts = body[start + 1 : end].split()
        if not parts:
            raise LiteralDecodeError("empty unicode escape")
        return [_codepoint(part) for part in parts], end + 1

    digits = body[start : start + 4]
    if len(digits) != 4:
        raise LiteralDecodeError("invalid unicode escape")
    return [_codepoint(digits)], start + 4


def _codepoint(digits: str) -> str:
    if not digits or any(d not in HEX_DIGITS for d in digits) or len(digits) > 6:
        raise LiteralDecodeError(f"invalid unicode escape {digits!r}")
    code = int(digits, 16)
    if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
        raise LiteralDecodeError(f"invalid code point U+{code:X}")
    return chr(code)
