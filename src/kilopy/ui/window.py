"""
Window management module for the editor UI.
"""

import curses
from typing import Dict, Final, Optional, TYPE_CHECKING

from .. import __version__
from ..core.editor import Editor
from ..core.syntax import HL_COLOR_INDEX, Highlight

if TYPE_CHECKING:
    from .input_handler import InputHandler

# Color index (see HL_COLOR_INDEX) -> curses foreground color.
SYNTAX_COLORS: Final[Dict[int, int]] = {
    HL_COLOR_INDEX[Highlight.COMMENT]: curses.COLOR_CYAN,
    HL_COLOR_INDEX[Highlight.MLCOMMENT]: curses.COLOR_CYAN,
    HL_COLOR_INDEX[Highlight.KEYWORD1]: curses.COLOR_YELLOW,
    HL_COLOR_INDEX[Highlight.KEYWORD2]: curses.COLOR_GREEN,
    HL_COLOR_INDEX[Highlight.STRING]: curses.COLOR_MAGENTA,
    HL_COLOR_INDEX[Highlight.NUMBER]: curses.COLOR_RED,
    HL_COLOR_INDEX[Highlight.MATCH]: curses.COLOR_BLUE,
}

WELCOME_MESSAGE: Final[str] = f"Kilopy editor -- version {__version__}"


def safe_addstr(window: 'curses.window', y: int, x: int, string: str, attr: int = 0) -> None:
    """Safely add a string to a window, truncating if necessary."""

    height, width = window.getmaxyx()
    if y >= height or x >= width:
        return

    available = width - x
    if available <= 0:
        return

    if len(string) > available:
        string = string[:available]

    try:
        window.addstr(y, x, string, attr)
    except curses.error:
        # Writing the bottom-right cell moves the cursor off screen.
        pass


def control_symbol(c: str) -> str:
    """Printable stand-in for a control character (^A shows as 'A')."""

    code = ord(c)
    return chr(ord('@') + code) if code <= 26 else '?'


class WindowManager:
    """Draws the editor state onto the curses screen."""

    STATUS_LINES = 2
    MIN_HEIGHT = STATUS_LINES + 1

    def __init__(self, stdscr: 'curses.window', editor: Editor):
        self.stdscr = stdscr
        self.editor = editor
        self.input_handler: Optional['InputHandler'] = None
        self.height, self.width = stdscr.getmaxyx()
        self.colors_enabled = False

        self.init_colors()
        self.resize()

    def init_colors(self) -> None:
        """Initialize one color pair per highlight color index."""

        if not curses.has_colors():
            return

        curses.start_color()
        try:
            curses.use_default_colors()
            background = -1
        except curses.error:
            background = curses.COLOR_BLACK

        for index, color in SYNTAX_COLORS.items():
            curses.init_pair(index, color, background)

        self.colors_enabled = True

    def color_attr(self, hl: Highlight) -> int:
        index = HL_COLOR_INDEX[hl]
        if not self.colors_enabled or index == 0:
            return curses.A_NORMAL

        return curses.color_pair(index)

    def resize(self) -> None:
        """Handle terminal resize events."""

        self.height, self.width = self.stdscr.getmaxyx()
        rows = max(1, self.height - self.STATUS_LINES)
        self.editor.viewport.resize(rows, self.width)

    def refresh_all(self) -> None:
        """Redraw the whole screen."""

        self.editor.scroll()
        self.stdscr.erase()

        self.draw_rows()
        self.draw_status()
        self.draw_message()

        y, x = self.editor.cursor_screen_position()
        try:
            self.stdscr.move(y, x)
        except curses.error:
            pass

        self.stdscr.noutrefresh()
        curses.doupdate()

    def draw_rows(self) -> None:
        """Draw the visible text, or tildes past the end of the buffer."""

        editor = self.editor
        for y, (_, text, hl) in enumerate(editor.visible_rows()):
            if text is None:
                if editor.buffer.numrows == 0 and y == editor.viewport.screen_rows // 3:
                    self.draw_welcome(y)
                else:
                    safe_addstr(self.stdscr, y, 0, "~")
                continue

            for x, (c, cls) in enumerate(zip(text, hl)):
                if ord(c) < 32 or ord(c) == 127:
                    safe_addstr(self.stdscr, y, x, control_symbol(c), curses.A_REVERSE)
                    continue

                safe_addstr(self.stdscr, y, x, c, self.color_attr(cls))

    def draw_welcome(self, y: int) -> None:
        width = self.editor.viewport.screen_cols
        message = WELCOME_MESSAGE[:width]
        padding = (width - len(message)) // 2

        line = ("~" + " " * (padding - 1) if padding else "") + message
        safe_addstr(self.stdscr, y, 0, line)

    def draw_status(self) -> None:
        """Draw the inverted status bar."""

        y = self.editor.viewport.screen_rows
        width = self.width
        left, right = self.editor.status_line()

        left = left[:width]
        if len(left) + len(right) <= width:
            status = left + " " * (width - len(left) - len(right)) + right
        else:
            status = left + " " * (width - len(left))

        safe_addstr(self.stdscr, y, 0, status, curses.A_REVERSE)

    def draw_message(self) -> None:
        """Draw the message bar below the status bar."""

        y = self.editor.viewport.screen_rows + 1
        prompt = self.input_handler.prompt if self.input_handler else None
        if prompt is not None:
            message = prompt.message
        else:
            message = self.editor.current_status_message()
        if message:
            safe_addstr(self.stdscr, y, 0, message[:self.width])
