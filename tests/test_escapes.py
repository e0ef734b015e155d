import pytest
from rb_linter.literals import LiteralDecodeError, QuoteStyle, decode_literal, decode_regex_body, decode_string_body


@pytest.mark.parametrize(
    "body, expected",
    [
        ("a", "a"),
        (r"\n", "\\n"),
        (r"\\", "\\"),
        (r"\'", "'"),
        (r"\x", "\\x"),
        ("", ""),
    ],
)
def test_single_quoted(body, expected):
    assert decode_string_body(body, QuoteStyle.SINGLE) == expected


def test_single_quoted_percent_delimiters():
    assert decode_string_body(r"\)", QuoteStyle.SINGLE, ("(", ")")) == ")"
    assert decode_string_body(r"\'", QuoteStyle.SINGLE, ("(", ")")) == "\\'"


@pytest.mark.parametrize(
    "body, expected",
    [
        (r"\n", "\n"),
        (r"\t", "\t"),
        (r"\r", "\r"),
        (r"\e", "\x1b"),
        (r"\s", " "),
        (r"\0", "\0"),
        (r"\101", "A"),
        (r"\x41", "A"),
        (r"\x9", "\t"),
        (r"é", "é"),
        (r"\u{1F600}", "😀"),
        (r"\u{61 62}", "ab"),
        (r"\"", '"'),
        (r"\\", "\\"),
        (r"\y", "y"),
        ("a\\\nb", "ab"),
        ("#", "#"),
    ],
)
def test_double_quoted(body, expected):
    assert decode_string_body(body, QuoteStyle.DOUBLE, ('"', '"')) == expected


@pytest.mark.parametrize("body", [r"#{x}", r"#@x", r"#$x", r"\cx", r"\C-x", r"\M-x", "\\", r"\xZZ", r"\xff", r"\u12", r"\u{}", r"\u{D800}"])
def test_double_quoted_rejects(body):
    with pytest.raises(LiteralDecodeError):
        decode_string_body(body, QuoteStyle.DOUBLE, ('"', '"'))


@pytest.mark.parametrize(
    "body, expected",
    [
        ("a", "a"),
        (" ", " "),
        ("", ""),
        (r"\n", "\n"),
        (r"\r", "\r"),
        (r"\\", "\\"),
        (r"\.", "."),
        (r"\/", "/"),
        (r"\*", "*"),
        (r"\x65", "e"),
        (r"ሴ", "ሴ"),
        (r"\u{41}", "A"),
        (r"\y", "y"),
        (r"\Q", "Q"),
        (r"\012", "\n"),
        ("#", "#"),
        ("ab", "ab"),
    ],
)
def test_regex_body(body, expected):
    assert decode_regex_body(body) == expected


@pytest.mark.parametrize(
    "body",
    [
        "a+",
        "a*",
        "a?",
        "a{3,}",
        "a{1,1}",
        "^",
        "$",
        ".",
        "a|b",
        "[a-z]",
        "(ab)",
        r"\s",
        r"\d",
        r"\w",
        r"\b",
        r"\A",
        r"\z",
        r"\1",
        r"\k<a>",
        r"\p{L}",
        r"\h",
        r"\R",
        r"\X",
        r"\cx",
        "\\",
        "#{foo}",
    ],
)
def test_regex_body_rejects(body):
    with pytest.raises(LiteralDecodeError):
        decode_regex_body(body)


def test_decode_literal():
    assert decode_literal("'a'") == "a"
    assert decode_literal('"\\n"') == "\n"
    with pytest.raises(LiteralDecodeError):
        decode_literal("a")
