from __future__ import annotations

import pytest

from conftest import make_config
from geode.constants import (
    HL_COMMENT,
    HL_KEYWORD1,
    HL_KEYWORD2,
    HL_NORMAL,
    HL_NUMBER,
    HL_OPERATOR,
    HL_STRING,
)
from geode.document import insert_row, row_del_char, row_insert_char, update_row
from geode.syntax import find_syntax, is_separator, select_syntax_highlight


def spans(row, kind):
    return "".join(ch for ch, h in zip(row.render, row.hl) if h == kind)


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("main.c", "c"),
        ("include/list.h", "c"),
        ("engine.cpp", "cpp"),
        ("engine.cc", "cpp"),
        ("vec.hpp", "cpp"),
        ("notes.txt", None),
        ("main.c.orig", None),
    ],
)
def test_find_syntax_by_extension(filename, expected):
    syntax = find_syntax(filename)
    assert (syntax.name if syntax else None) == expected


def test_separators():
    for c in " \t,.()+-/*=~%<>[]{};\0":
        assert is_separator(c)
    assert is_separator("")
    assert not is_separator("a")
    assert not is_separator("_")


def test_keywords_types_numbers_and_operators():
    config = make_config(["int main() {", "  return 0;", "}"], filename="main.c")
    first, second, _ = config.rows
    assert first.hl[:3] == [HL_KEYWORD2] * 3
    assert spans(first, HL_KEYWORD2) == "int"
    assert spans(first, HL_NORMAL) == " main() {"
    assert spans(second, HL_KEYWORD1) == "return"
    assert spans(second, HL_NUMBER) == "0"

    config = make_config(["x = a + b * 2;"], filename="main.c")
    assert spans(config.rows[0], HL_OPERATOR) == "=+*"


def test_keyword_needs_separators_on_both_sides():
    config = make_config(["interval = returned;", "(int)x"], filename="main.c")
    assert spans(config.rows[0], HL_KEYWORD1) == ""
    assert spans(config.rows[0], HL_KEYWORD2) == ""
    assert spans(config.rows[1], HL_KEYWORD2) == "int"


def test_longest_keyword_wins():
    config = make_config(["#ifndef X", "#ifdef Y"], filename="main.c")
    assert spans(config.rows[0], HL_KEYWORD1) == "#ifndef"
    assert spans(config.rows[1], HL_KEYWORD1) == "#ifdef"


def test_numbers_need_a_leading_separator():
    config = make_config(["x1 = 3.14 + 42;"], filename="main.c")
    row = config.rows[0]
    assert spans(row, HL_NUMBER) == "3.1442"
    assert row.hl[1] == HL_NORMAL


def test_strings_handle_escapes():
    config = make_config(['s = "a\\"b"; c = \'x\';'], filename="main.c")
    row = config.rows[0]
    assert spans(row, HL_STRING) == '"a\\"b"\'x\''
    assert row.hl[row.render.index(";")] == HL_NORMAL


def test_comment_token_inside_string_is_not_a_comment():
    config = make_config(['url = "http://x"; // trailing'], filename="main.c")
    row = config.rows[0]
    assert spans(row, HL_STRING) == '"http://x"'
    assert spans(row, HL_COMMENT) == "// trailing"


def test_single_line_comment_runs_to_end_of_row():
    config = make_config(["x = 1; // int return 5"], filename="main.c")
    row = config.rows[0]
    start = row.render.index("//")
    assert row.hl[start:] == [HL_COMMENT] * (row.rsize - start)
    assert not row.open_comment


def test_multiline_comment_spans_rows():
    config = make_config(["/* start", "middle int", "end */ int x;", "int y;"], filename="main.c")
    r0, r1, r2, r3 = config.rows
    assert r0.hl == [HL_COMMENT] * r0.rsize
    assert r1.hl == [HL_COMMENT] * r1.rsize
    close = r2.render.index("*/") + 2
    assert r2.hl[:close] == [HL_COMMENT] * close
    assert HL_COMMENT not in r2.hl[close:]
    assert spans(r2, HL_KEYWORD2) == "int"
    assert [r.open_comment for r in config.rows] == [True, True, False, False]
    assert spans(r3, HL_KEYWORD2) == "int"


def test_removing_comment_opener_reclassifies_following_rows():
    config = make_config(["/* start", "middle", "end */ int x;"], filename="main.c")
    opener = config.rows[0]
    row_del_char(config, opener, 0)
    row_del_char(config, opener, 0)
    assert opener.chars == " start"
    r1, r2 = config.rows[1], config.rows[2]
    assert HL_COMMENT not in r1.hl
    assert HL_COMMENT not in r2.hl
    assert not any(r.open_comment for r in config.rows)

    row_insert_char(config, opener, 0, "*")
    row_insert_char(config, opener, 0, "/")
    assert r1.hl == [HL_COMMENT] * r1.rsize
    assert r2.hl[:6] == [HL_COMMENT] * 6


def test_inserting_a_closing_row_updates_rows_below():
    config = make_config(["/* a", "b", "c */"], filename="main.c")
    insert_row(config, 1, "*/")
    assert [r.chars for r in config.rows] == ["/* a", "*/", "b", "c */"]
    assert config.rows[1].hl == [HL_COMMENT, HL_COMMENT]
    assert HL_COMMENT not in config.rows[2].hl
    assert HL_COMMENT not in config.rows[3].hl
    assert [r.open_comment for r in config.rows] == [True, False, False, False]


def test_long_cascade_does_not_recurse():
    lines = ["x"] * 5000
    config = make_config(lines, filename="big.c")
    first = config.rows[0]
    first.chars = "/*"
    update_row(config, first)
    assert all(r.open_comment for r in config.rows)
    assert config.rows[-1].hl == [HL_COMMENT]

    first.chars = "x"
    update_row(config, first)
    assert not any(r.open_comment for r in config.rows)
    assert config.rows[-1].hl == [HL_NORMAL]


def test_no_language_means_plain_text():
    config = make_config(["int x = 1; /* c"], filename="notes.txt")
    row = config.rows[0]
    assert row.hl == [HL_NORMAL] * row.rsize
    assert not row.open_comment


def test_selecting_language_rehighlights_document():
    config = make_config(["/* a", "int b;"], filename="notes.txt")
    assert HL_COMMENT not in config.rows[1].hl
    select_syntax_highlight(config, "notes.c")
    assert config.syntax.name == "c"
    assert config.rows[1].hl == [HL_COMMENT] * config.rows[1].rsize
    select_syntax_highlight(config, None)
    assert config.syntax is None
    assert HL_COMMENT not in config.rows[1].hl
