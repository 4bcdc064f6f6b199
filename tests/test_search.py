"""Tests for incremental search and the match overlay."""

import pytest

from kilopy.core.buffer import Buffer
from kilopy.core.keys import ENTER, ESCAPE, Key
from kilopy.core.syntax import C_PROFILE, Highlight, highlight
from kilopy.core.viewport import Cursor, Viewport
from kilopy.utils.search import SearchEngine

ROWS = ["alpha", "beta", "a foo", "gamma", "delta", "foo b", "omega"]


def make_engine(lines, profile=None):
    buf = Buffer()
    buf.set_syntax(profile)
    for line in lines:
        buf.insert_row(buf.numrows, line)
    cursor = Cursor()
    viewport = Viewport(screen_rows=3, screen_cols=40)
    return SearchEngine(buf, cursor, viewport)


def type_query(engine, query):
    result = None
    for i in range(1, len(query) + 1):
        result = engine.feed(query[:i], ord(query[i - 1]))
    return result


def fresh_highlight(buf):
    result = []
    carry = False
    for row in buf.rows:
        hl, carry = highlight(row.render, buf.syntax, carry)
        result.append(hl)
    return result


@pytest.fixture
def engine():
    search = make_engine(ROWS)
    search.begin()
    return search


def test_first_match_moves_cursor_and_viewport(engine):
    result = type_query(engine, "foo")
    assert result.row == 2
    assert result.column == 2
    assert (engine.cursor.cy, engine.cursor.cx) == (2, 2)
    assert engine.viewport.row_offset == 2


def test_match_is_overlaid(engine):
    type_query(engine, "foo")
    row = engine.buffer.rows[2]
    assert row.hl[2:5] == [Highlight.MATCH] * 3
    assert row.hl[:2] == [Highlight.NORMAL] * 2
    assert engine.saved_hl_line == 2


def test_only_one_row_overlaid_at_a_time(engine):
    type_query(engine, "foo")
    engine.feed("foo", Key.ARROW_DOWN)
    assert Highlight.MATCH not in engine.buffer.rows[2].hl
    assert engine.buffer.rows[5].hl[:3] == [Highlight.MATCH] * 3


def test_forward_navigation_wraps(engine):
    type_query(engine, "foo")
    assert engine.feed("foo", Key.ARROW_DOWN).row == 5
    assert engine.feed("foo", Key.ARROW_RIGHT).row == 2


def test_backward_navigation_wraps(engine):
    type_query(engine, "foo")
    assert engine.feed("foo", Key.ARROW_UP).row == 5
    assert engine.feed("foo", Key.ARROW_LEFT).row == 2


def test_editing_query_restarts_from_top(engine):
    type_query(engine, "foo")
    engine.feed("foo", Key.ARROW_DOWN)
    result = engine.feed("fo", Key.BACKSPACE)
    assert result.row == 2


def test_no_match_leaves_cursor_and_overlay_alone(engine):
    engine.cursor.cy, engine.cursor.cx = 4, 1
    result = type_query(engine, "zzz")
    assert result is None
    assert (engine.cursor.cy, engine.cursor.cx) == (4, 1)
    assert all(Highlight.MATCH not in row.hl for row in engine.buffer.rows)
    assert engine.saved_hl is None


def test_empty_query_finds_nothing(engine):
    assert engine.feed("", Key.BACKSPACE) is None


def test_confirm_restores_classification_and_keeps_cursor(engine):
    type_query(engine, "foo")
    engine.feed("foo", Key.ARROW_DOWN)
    assert engine.feed("foo", ENTER) is None
    assert [row.hl for row in engine.buffer.rows] == fresh_highlight(engine.buffer)
    assert engine.saved_hl is None
    assert not engine.active
    assert engine.cursor.cy == 5


def test_cancel_restores_classification_and_cursor():
    search = make_engine(["int a; /* x", "foo */ int b;", "char foo;"], C_PROFILE)
    search.cursor.cy, search.cursor.cx = 0, 3
    search.viewport.row_offset = 0
    search.begin()

    type_query(search, "foo")
    search.feed("foo", Key.ARROW_DOWN)
    assert search.cursor.cy == 2

    search.feed("foo", ESCAPE)
    assert [row.hl for row in search.buffer.rows] == fresh_highlight(search.buffer)
    assert (search.cursor.cy, search.cursor.cx) == (0, 3)
    assert search.viewport.row_offset == 0
    assert search.saved_hl is None
    assert not search.active


def test_match_after_tab_maps_to_raw_column():
    search = make_engine(["x", "\tfoo"])
    search.begin()
    result = type_query(search, "foo")
    assert result.row == 1
    assert result.column == 8
    assert search.cursor.cx == 1


def test_search_is_case_sensitive():
    search = make_engine(["FOO", "foo"])
    search.begin()
    assert type_query(search, "foo").row == 1


def test_empty_buffer():
    search = make_engine([])
    search.begin()
    assert type_query(search, "a") is None
