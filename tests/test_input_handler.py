"""Tests for key dispatch, quit confirmation and the prompt flows."""

import curses
from types import SimpleNamespace

import pytest

from kilopy.core.editor import Editor
from kilopy.core.keys import ENTER, ESCAPE, Key, ctrl_key
from kilopy.core.syntax import Highlight
from kilopy.ui.input_handler import (
    HELP_STATUS_MESSAGE,
    QUIT_TIMES,
    SAVE_ABORTED_STATUS_MESSAGE,
    InputHandler,
    translate_key,
)


@pytest.fixture
def handler():
    window_manager = SimpleNamespace(editor=Editor(), input_handler=None)
    return InputHandler(window_manager)


def type_text(handler, text):
    for ch in text:
        assert handler.handle_input(ord(ch))


def test_translate_key():
    assert translate_key(curses.KEY_LEFT) == Key.ARROW_LEFT
    assert translate_key(curses.KEY_NPAGE) == Key.PAGE_DOWN
    assert translate_key(curses.KEY_DC) == Key.DEL_KEY
    assert translate_key(ord('\n')) == ENTER
    assert translate_key(8) == Key.BACKSPACE
    assert translate_key(ord('a')) == ord('a')


def test_handler_registers_with_window_manager(handler):
    assert handler.window_manager.input_handler is handler


def test_typing_and_newline(handler):
    type_text(handler, "hi\tx")
    handler.handle_input(ord('\n'))
    type_text(handler, "yo")

    rows = handler.editor.buffer.rows
    assert [row.chars for row in rows] == ["hi\tx", "yo"]
    assert rows[0].render == "hi      x"


def test_control_keys_are_not_inserted(handler):
    handler.handle_input(ctrl_key('l'))
    handler.handle_input(ESCAPE)
    assert handler.editor.buffer.numrows == 0


def test_quit_requires_confirmation_when_modified(handler):
    type_text(handler, "x")
    for remaining in range(QUIT_TIMES, 0, -1):
        assert handler.handle_input(ctrl_key('q'))
        assert "%d more times" % remaining in handler.editor.status_msg

    assert not handler.handle_input(ctrl_key('q'))


def test_other_key_resets_quit_confirmation(handler):
    type_text(handler, "x")
    handler.handle_input(ctrl_key('q'))
    handler.handle_input(curses.KEY_LEFT)
    assert handler.quit_times == QUIT_TIMES


def test_quit_without_changes(handler):
    assert not handler.handle_input(ctrl_key('q'))


def test_search_then_cancel(handler):
    editor = handler.editor
    editor.buffer.load_bytes(b"alpha\nbeta foo\n")

    handler.handle_input(ctrl_key('f'))
    assert handler.prompt is not None
    assert editor.status_msg.startswith("Search: ")

    type_text(handler, "foo")
    assert (editor.cursor.cy, editor.cursor.cx) == (1, 5)
    assert editor.buffer.rows[1].hl[5:8] == [Highlight.MATCH] * 3

    handler.handle_input(ESCAPE)
    assert handler.prompt is None
    assert (editor.cursor.cy, editor.cursor.cx) == (0, 0)
    assert Highlight.MATCH not in editor.buffer.rows[1].hl


def test_search_confirm_keeps_position(handler):
    editor = handler.editor
    editor.buffer.load_bytes(b"foo\nbar foo\n")

    handler.handle_input(ctrl_key('f'))
    type_text(handler, "foo")
    handler.handle_input(curses.KEY_DOWN)
    handler.handle_input(ord('\r'))

    assert handler.prompt is None
    assert (editor.cursor.cy, editor.cursor.cx) == (1, 4)
    assert all(Highlight.MATCH not in row.hl for row in editor.buffer.rows)


def test_search_not_found(handler):
    handler.editor.buffer.load_bytes(b"abc\n")
    handler.handle_input(ctrl_key('f'))
    type_text(handler, "zz")
    handler.handle_input(ord('\r'))
    assert handler.editor.status_msg == "Not found: zz"


def test_enter_on_empty_search_prompt_keeps_prompt_open(handler):
    handler.handle_input(ctrl_key('f'))
    handler.handle_input(ord('\r'))
    assert handler.prompt is not None
    assert handler.editor.search.active


def test_save_prompts_for_name(handler, tmp_path):
    type_text(handler, "hi")
    target = str(tmp_path / "out.txt")

    handler.handle_input(ctrl_key('s'))
    assert handler.editor.status_msg.startswith("Save as: ")
    type_text(handler, target)
    handler.handle_input(ord('\r'))

    assert handler.prompt is None
    assert (tmp_path / "out.txt").read_bytes() == b"hi\n"
    assert handler.editor.buffer.filename == target
    assert handler.editor.status_msg == "3 bytes written to disk"


def test_save_prompt_cancelled(handler):
    type_text(handler, "hi")
    handler.handle_input(ctrl_key('s'))
    type_text(handler, "name")
    handler.handle_input(ESCAPE)

    assert handler.editor.status_msg == SAVE_ABORTED_STATUS_MESSAGE
    assert handler.editor.buffer.filename is None
    assert handler.editor.buffer.modified


def test_save_with_existing_name(handler, tmp_path):
    path = tmp_path / "notes.txt"
    handler.editor.open(str(path))
    type_text(handler, "ok")
    handler.handle_input(ctrl_key('s'))

    assert handler.prompt is None
    assert path.read_bytes() == b"ok\n"
    assert not handler.editor.buffer.modified


def test_help_message_text():
    assert "Ctrl-Q = quit" in HELP_STATUS_MESSAGE
