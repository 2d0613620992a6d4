from __future__ import annotations

import pytest

from mprcad.cursor import (
    CIRCLE_SECTION_STOPS,
    LINE_SECTION_STOPS,
    LineCursor,
    is_section_boundary,
    split_document,
)


def test_split_document_strips_whitespace_and_crlf() -> None:
    assert split_document("  $E0  \r\nX=1\r\n\r\n") == ["$E0", "X=1", ""]


def test_peek_and_advance_walk_the_lines() -> None:
    cursor = LineCursor(["a", "b"])

    assert cursor.peek() == "a"
    assert cursor.advance() == "a"
    assert cursor.line_number == 2
    assert cursor.advance() == "b"
    assert cursor.exhausted
    assert cursor.peek() is None
    with pytest.raises(IndexError):
        cursor.advance()


def test_seek_positions_after_marker() -> None:
    cursor = LineCursor.from_text("foo\n<102 \\BohrVert\\\nXA=\"1\"\n")

    assert cursor.seek("<102")
    assert cursor.peek() == 'XA="1"'
    assert not cursor.seek("<102")
    assert cursor.exhausted


def test_window_stops_on_boundary_and_leaves_it_under_cursor() -> None:
    cursor = LineCursor(["X=1", "Y=2", "<102", "XA=\"3\""])

    rows = list(cursor.window(CIRCLE_SECTION_STOPS))

    assert rows == [(1, "X=1"), (2, "Y=2")]
    assert cursor.peek() == "<102"


def test_window_honours_limit() -> None:
    cursor = LineCursor([f"K{i}=0" for i in range(20)])

    rows = list(cursor.window(CIRCLE_SECTION_STOPS, limit=15))

    assert len(rows) == 15
    assert cursor.peek() == "K15=0"


def test_blank_line_is_a_boundary() -> None:
    cursor = LineCursor(["X=1", "", "Y=2"])

    assert [line for _, line in cursor.window(LINE_SECTION_STOPS)] == ["X=1"]


def test_line_stops_ignore_other_dollar_markers() -> None:
    assert not is_section_boundary("$K", LINE_SECTION_STOPS)
    assert is_section_boundary("$E1", LINE_SECTION_STOPS)
    assert is_section_boundary("$K", CIRCLE_SECTION_STOPS)
