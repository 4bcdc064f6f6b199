"""
Input handler module for processing keyboard events.
"""

import curses
import logging
from typing import Callable, Dict, Final, Optional

from ..core.keys import ENTER, ESCAPE, Key, ctrl_key, is_printable
from ..core.prompt import Prompt, PromptStatus
from .window import WindowManager

logger = logging.getLogger(__name__)

QUIT_TIMES: Final[int] = 2

HELP_STATUS_MESSAGE: Final[str] = "HELP: Ctrl-S = save | Ctrl-Q = quit | Ctrl-F = find"
UNSAVED_CHANGES_STATUS_MESSAGE: Final[str] = "WARNING!!! File has unsaved changes. Press Ctrl-Q %d more times to quit."
SAVE_PROMPT: Final[str] = "Save as: %s (ESC to cancel)"
SEARCH_PROMPT: Final[str] = "Search: %s (Use ESC/Arrows/Enter)"
SAVE_ABORTED_STATUS_MESSAGE: Final[str] = "Save aborted"
NOT_FOUND_STATUS_MESSAGE: Final[str] = "Not found: %s"

CURSES_KEY_MAP: Final[Dict[int, int]] = {
    curses.KEY_LEFT: Key.ARROW_LEFT,
    curses.KEY_RIGHT: Key.ARROW_RIGHT,
    curses.KEY_UP: Key.ARROW_UP,
    curses.KEY_DOWN: Key.ARROW_DOWN,
    curses.KEY_HOME: Key.HOME_KEY,
    curses.KEY_END: Key.END_KEY,
    curses.KEY_PPAGE: Key.PAGE_UP,
    curses.KEY_NPAGE: Key.PAGE_DOWN,
    curses.KEY_DC: Key.DEL_KEY,
    curses.KEY_BACKSPACE: Key.BACKSPACE,
    curses.KEY_ENTER: ENTER,
    ord('\n'): ENTER,
    8: Key.BACKSPACE,
}


def translate_key(ch: int) -> int:
    """Map a curses key code onto the editor's logical key codes."""

    return CURSES_KEY_MAP.get(ch, ch)


class InputHandler:
    """Handles keyboard input and executes corresponding actions."""

    def __init__(self, window_manager: WindowManager) -> None:
        self.window_manager = window_manager
        self.window_manager.input_handler = self
        self.editor = window_manager.editor
        self.quit_times = QUIT_TIMES
        self.prompt: Optional[Prompt] = None
        self.prompt_done: Optional[Callable[[Prompt], None]] = None
        self.prompt_on_key: Optional[Callable[[Prompt, int], None]] = None
        self.command_handlers: Dict[int, Callable[[], None]] = self._setup_handlers()

    def _setup_handlers(self) -> Dict[int, Callable[[], None]]:
        """Set up the keyboard command handlers."""

        editor = self.editor
        return {
            Key.ARROW_LEFT: lambda: editor.move_cursor(Key.ARROW_LEFT),
            Key.ARROW_RIGHT: lambda: editor.move_cursor(Key.ARROW_RIGHT),
            Key.ARROW_UP: lambda: editor.move_cursor(Key.ARROW_UP),
            Key.ARROW_DOWN: lambda: editor.move_cursor(Key.ARROW_DOWN),
            Key.HOME_KEY: editor.home,
            Key.END_KEY: editor.end,
            Key.PAGE_UP: lambda: editor.page(Key.PAGE_UP),
            Key.PAGE_DOWN: lambda: editor.page(Key.PAGE_DOWN),

            Key.DEL_KEY: editor.delete_forward,
            Key.BACKSPACE: editor.delete_char,
            ENTER: editor.insert_newline,

            ctrl_key('s'): self._save,  # Ctrl + S (save key)
            ctrl_key('f'): self._start_search,  # Ctrl + F (find key)
            ctrl_key('l'): lambda: None,
            ESCAPE: lambda: None,
        }

    def handle_input(self, ch: int) -> bool:
        """Handle a single keyboard input. Returns False if should quit."""

        key = translate_key(ch)

        if self.prompt is not None:
            self._feed_prompt(key)
            return True

        if key == ctrl_key('q'):
            if self.editor.buffer.modified and self.quit_times > 0:
                self.editor.set_status_message(UNSAVED_CHANGES_STATUS_MESSAGE, self.quit_times)
                self.quit_times -= 1
                return True

            return False

        if key in self.command_handlers:
            self.command_handlers[key]()
        elif is_printable(key) or key == ord('\t'):
            self.editor.insert_char(chr(key))

        self.quit_times = QUIT_TIMES
        return True

    def _start_prompt(self, prompt: Prompt, done: Callable[[Prompt], None],
                      on_key: Optional[Callable[[Prompt, int], None]] = None) -> None:
        self.prompt = prompt
        self.prompt_done = done
        self.prompt_on_key = on_key
        self.editor.set_status_message(prompt.message)

    def _feed_prompt(self, key: int) -> None:
        """Route a key to the active prompt and finish it when it closes."""

        prompt = self.prompt
        status = prompt.feed(key)

        if self.prompt_on_key is not None and not (key == ENTER and status is PromptStatus.ACTIVE):
            self.prompt_on_key(prompt, key)

        if status is PromptStatus.ACTIVE:
            self.editor.set_status_message(prompt.message)
            return

        done = self.prompt_done
        self.prompt = None
        self.prompt_done = None
        self.prompt_on_key = None
        self.editor.set_status_message("")
        done(prompt)

    def _save(self) -> None:
        """Save the current buffer, asking for a name when it has none."""

        if self.editor.buffer.filename:
            self.editor.save()
            return

        self._start_prompt(Prompt(SAVE_PROMPT, allow_empty=True), self._finish_save)

    def _finish_save(self, prompt: Prompt) -> None:
        if prompt.status is PromptStatus.CANCELLED or not prompt.text:
            self.editor.set_status_message(SAVE_ABORTED_STATUS_MESSAGE)
            return

        self.editor.save(prompt.text)

    def _start_search(self) -> None:
        """Start search mode."""

        self.editor.search.begin()
        self._start_prompt(Prompt(SEARCH_PROMPT), self._finish_search, self._search_key)

    def _search_key(self, prompt: Prompt, key: int) -> None:
        self.editor.search.feed(prompt.text, key)

    def _finish_search(self, prompt: Prompt) -> None:
        if prompt.status is PromptStatus.CONFIRMED and self.editor.search.last_result is None:
            self.editor.set_status_message(NOT_FOUND_STATUS_MESSAGE, prompt.text)
            logger.debug("No match for %r", prompt.text)
