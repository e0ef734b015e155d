import random
from pathlib import Path

import pytest
from rb_linter.autofix import AutoFixEngine
from rb_linter.literals import ArgumentResolver, StringLiteral
from rb_linter.models import Edit, InternalIssue, Severity
from rb_tree_sitter import ASTWalker, RubyPatterns

ALPHABET = [chr(code) for code in range(0x20, 0x7F)] + ["\n", "\t", "\r", "\x1b", "é", "ሴ"]


def make_issue(edits, auto_fixable=True):
    return InternalIssue(
        file_path=Path("<string>"),
        line=1,
        rule_id="P001",
        message="",
        severity=Severity.WARNING,
        auto_fixable=auto_fixable,
        fixes=edits,
    )


def test_apply_fixes_replaces_byte_ranges():
    source = "'é'.gsub('a', 'b')"
    start = source.encode("utf-8").index(b"gsub")
    edit = Edit(start, len(source.encode("utf-8")), "tr('a', 'b')")
    assert AutoFixEngine().apply_fixes(source, [make_issue([edit])]) == "'é'.tr('a', 'b')"


def test_apply_fixes_ignores_unfixable_issues():
    source = "x.gsub('a', 'b')"
    issue = make_issue([Edit(2, 16, "tr('a', 'b')")], auto_fixable=False)
    assert AutoFixEngine().apply_fixes(source, [issue]) == source


def test_overlapping_edits_are_skipped():
    source = "abcdef"
    issues = [make_issue([Edit(3, 5, "Y")]), make_issue([Edit(0, 4, "X")]), make_issue([Edit(2, 3, "Z")])]
    assert AutoFixEngine().apply_fixes(source, issues) == "Xef"


def test_fix_source_handles_chained_calls(engine):
    source = "s.gsub('a', 'b').gsub(/c/, '')\n"
    result = AutoFixEngine().fix_source(engine, source)
    assert result.source == "s.tr('a', 'b').delete('c')\n"
    assert result.modified
    assert result.fixed_count == 2
    assert result.remaining == []


def test_fix_source_without_issues(engine):
    result = AutoFixEngine().fix_source(engine, "s.gsub(/a+/, 'b')\n")
    assert not result.modified
    assert result.passes == 0
    assert result.fixed_count == 0


def test_fix_file(engine, tmp_path):
    file_path = tmp_path / "sample.rb"
    file_path.write_text("name.gsub!('-', '_')\n", encoding="utf-8")
    result = AutoFixEngine().fix_file(engine, file_path)
    assert result.fixed_count == 1
    assert file_path.read_text(encoding="utf-8") == "name.tr!('-', '_')\n"


def pattern_literals(char):
    """Spell one character as several kinds of gsub pattern."""
    code = ord(char)
    escape = f"\\x{code:02x}" if code < 0x80 else f"\\u{{{code:x}}}"
    literals = [f'"{escape}"', f"/{escape}/", f"Regexp.new('{escape}')"]
    if char.isprintable():
        quoted = "\\" + char if char in "'\\" else char
        literals.append(f"'{quoted}'")
    return literals


def emitted_arguments(parser, source):
    result = parser.parse_string(source)
    resolver = ArgumentResolver(result.source)
    for node in ASTWalker.find_all_by_type(result.tree.root_node, "call"):
        call = RubyPatterns.call_site(node, result.source)
        if call is not None and call.method_name in ("tr", "delete"):
            kinds = [resolver.resolve(arg) for arg in call.arguments]
            assert all(isinstance(kind, StringLiteral) for kind in kinds), source
            return call.method_name, [kind.decoded for kind in kinds]
    raise AssertionError(f"no rewrite in {source!r}")


def gsub(subject, pattern, replacement):
    return subject.replace(pattern, replacement)


def tr(subject, source, target):
    return subject.translate({ord(source): target})


def delete(subject, source):
    return subject.translate({ord(source): None})


@pytest.mark.parametrize("char", ALPHABET)
def test_rewrite_matches_gsub_on_random_strings(parser, engine, char):
    rng = random.Random(ord(char))
    subjects = ["", char, char * 3] + [
        "".join(rng.choice(ALPHABET) for _ in range(rng.randint(1, 20))) for _ in range(25)
    ]

    for pattern in pattern_literals(char):
        for replacement, value in (("'z'", "z"), ("''", "")):
            source = f"s.gsub({pattern}, {replacement})"
            fixed = AutoFixEngine().fix_source(engine, source).source
            method, arguments = emitted_arguments(parser, fixed)

            if value:
                assert method == "tr"
                rewritten = [tr(s, *arguments) for s in subjects]
            else:
                assert method == "delete"
                rewritten = [delete(s, *arguments) for s in subjects]
            assert rewritten == [gsub(s, char, value) for s in subjects], fixed
