"""Render single characters as Ruby string literal source text."""

from enum import Enum

# Control characters with a short escape inside double-quoted Ruby strings
SHORT_ESCAPES = {
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
    "\f": "\\f",
    "\v": "\\v",
    "\a": "\\a",
    "\b": "\\b",
    "\x1b": "\\e",
    "\0": "\\0",
}


class QuoteStyle(Enum):
    SINGLE = "'"
    DOUBLE = '"'

    @property
    def delimiter(self) -> str:
        return self.value

    @property
    def other(self) -> "QuoteStyle":
        return QuoteStyle.DOUBLE if self is QuoteStyle.SINGLE else QuoteStyle.SINGLE

    def wrap(self, body: str) -> str:
        return f"{self.delimiter}{body}{self.delimiter}"


class SourceEncoder:
    """Produce a literal that reads back as exactly one given character.

    The preferred quote style is kept whenever the character can be written
    in it; control characters force double quotes, and a character equal to
    the preferred delimiter flips to the other style. For a single character
    the other style is always safe, so an escaped delimiter is never needed.
    """

    def encode(self, char: str, preference: QuoteStyle = QuoteStyle.SINGLE) -> tuple[QuoteStyle, str]:
        if len(char) != 1:
            raise ValueError(f"Expected a single character, got {char!r}")

        if char in SHORT_ESCAPES:
            return QuoteStyle.DOUBLE, QuoteStyle.DOUBLE.wrap(SHORT_ESCAPES[char])

        if not char.isprintable():
            return QuoteStyle.DOUBLE, QuoteStyle.DOUBLE.wrap(self._codepoint_escape(char))

        style = preference
        if char == style.delimiter:
            style = style.other

        if char == "\\":
            return style, style.wrap("\\\\")

        return style, style.wrap(char)

    def literal(self, char: str, preference: QuoteStyle = QuoteStyle.SINGLE) -> str:
        """Shortcut returning only the literal text."""
        return self.encode(char, preference)[1]

    @staticmethod
    def _codepoint_escape(char: str) -> str:
        code = ord(char)
        if code < 0x80:
            return f"\\x{code:02X}"
        return f"\\u{{{code:X}}}"
