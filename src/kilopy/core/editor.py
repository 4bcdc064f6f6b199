"""
Editor state: the buffer plus cursor, viewport, search and status message.
"""

import logging
import time
from typing import Final, Iterator, List, Optional, Tuple

from .buffer import Buffer
from .keys import Key
from .render import TAB_STOP
from .syntax import Highlight
from .viewport import Cursor, Viewport
from ..utils.fileio import ReadStatus
from ..utils.search import SearchEngine

logger = logging.getLogger(__name__)

STATUS_MESSAGE_DURATION: Final[int] = 5
FILENAME_DISPLAY_WIDTH: Final[int] = 20
NO_FILENAME_STATUS_MESSAGE: Final[str] = "Can't save! No file name"


class Editor:
    """All mutable editor state, passed explicitly to the UI layer."""

    def __init__(self, screen_rows: int = 24, screen_cols: int = 80,
                 tab_stop: int = TAB_STOP) -> None:
        self.buffer = Buffer(tab_stop=tab_stop)
        self.cursor = Cursor()
        self.viewport = Viewport(screen_rows, screen_cols)
        self.search = SearchEngine(self.buffer, self.cursor, self.viewport)
        self.rx = 0
        self.status_msg = ""
        self.status_msg_time = 0.0

    def set_status_message(self, fmt: str, *args: object) -> None:
        self.status_msg = fmt % args if args else fmt
        self.status_msg_time = time.time()

    def current_status_message(self, now: Optional[float] = None) -> str:
        """Return the status message unless it has expired."""

        if now is None:
            now = time.time()

        if self.status_msg and now - self.status_msg_time < STATUS_MESSAGE_DURATION:
            return self.status_msg

        return ""

    def open(self, filename: str) -> None:
        """Load ``filename``; a file that cannot be read starts an empty document."""

        result = self.buffer.open(filename)
        self.cursor.cx = self.cursor.cy = 0
        self.viewport.row_offset = self.viewport.col_offset = 0

        if result.status is ReadStatus.UNREADABLE:
            self.set_status_message("Could not read %s: %s", filename, result.error)
        elif result.status is ReadStatus.MISSING:
            logger.debug("Editing new file %s", filename)

    def save(self, filename: Optional[str] = None) -> bool:
        """Write the buffer out, reporting the outcome in the status bar."""

        if not (filename or self.buffer.filename):
            self.set_status_message(NO_FILENAME_STATUS_MESSAGE)
            return False

        try:
            written = self.buffer.save_file(filename)
        except IOError as e:
            self.set_status_message("Can't save! I/O error: %s", e)
            return False

        self.set_status_message("%d bytes written to disk", written)
        return True

    def _current_row_size(self) -> int:
        row = self.buffer.get_row(self.cursor.cy)
        return row.size if row else 0

    def insert_char(self, c: str) -> None:
        if self.cursor.cy == self.buffer.numrows:
            self.buffer.insert_row(self.buffer.numrows, '')

        self.buffer.row_insert_char(self.cursor.cy, self.cursor.cx, c)
        self.cursor.cx += 1

    def insert_newline(self) -> None:
        if self.cursor.cy >= self.buffer.numrows:
            self.buffer.insert_row(self.buffer.numrows, '')
        else:
            self.buffer.split_row(self.cursor.cy, self.cursor.cx)

        self.cursor.cy += 1
        self.cursor.cx = 0

    def delete_char(self) -> None:
        """Delete the character left of the cursor, joining lines at column 0."""

        if self.cursor.cy >= self.buffer.numrows:
            return
        if self.cursor.cx == 0 and self.cursor.cy == 0:
            return

        if self.cursor.cx > 0:
            self.buffer.row_del_char(self.cursor.cy, self.cursor.cx - 1)
            self.cursor.cx -= 1
            return

        self.cursor.cx = self.buffer.merge_row(self.cursor.cy)
        self.cursor.cy -= 1

    def delete_forward(self) -> None:
        self.move_cursor(Key.ARROW_RIGHT)
        self.delete_char()

    def move_cursor(self, key: int) -> None:
        row = self.buffer.get_row(self.cursor.cy)

        if key == Key.ARROW_LEFT:
            if self.cursor.cx != 0:
                self.cursor.cx -= 1
            elif self.cursor.cy > 0:
                self.cursor.cy -= 1
                self.cursor.cx = self.buffer.rows[self.cursor.cy].size
        elif key == Key.ARROW_RIGHT:
            if row and self.cursor.cx < row.size:
                self.cursor.cx += 1
            elif row and self.cursor.cx == row.size:
                self.cursor.cy += 1
                self.cursor.cx = 0
        elif key == Key.ARROW_UP:
            if self.cursor.cy != 0:
                self.cursor.cy -= 1
        elif key == Key.ARROW_DOWN:
            if self.cursor.cy < self.buffer.numrows:
                self.cursor.cy += 1

        self.cursor.cx = min(self.cursor.cx, self._current_row_size())

    def home(self) -> None:
        self.cursor.cx = 0

    def end(self) -> None:
        self.cursor.cx = self._current_row_size()

    def page(self, key: int) -> None:
        """Move a full screen up or down."""

        if key == Key.PAGE_UP:
            self.cursor.cy = self.viewport.row_offset
            direction = Key.ARROW_UP
        else:
            self.cursor.cy = min(self.viewport.row_offset + self.viewport.screen_rows - 1,
                                 self.buffer.numrows)
            direction = Key.ARROW_DOWN

        for _ in range(self.viewport.screen_rows):
            self.move_cursor(direction)

    def scroll(self) -> None:
        """Recompute the render column and keep the cursor on screen."""

        self.rx = 0
        row = self.buffer.get_row(self.cursor.cy)
        if row is not None:
            self.rx = row.cx_to_rx(self.cursor.cx, self.buffer.tab_stop)

        self.viewport.scroll_to_fit(self.cursor.cy, self.rx)

    def visible_rows(self) -> Iterator[Tuple[int, Optional[str], Optional[List[Highlight]]]]:
        """
        Yield ``(file row, render slice, highlight slice)`` for each screen line.

        Lines past the end of the buffer yield None for both slices.
        """

        start = self.viewport.col_offset
        end = start + self.viewport.screen_cols
        for y in range(self.viewport.screen_rows):
            filerow = y + self.viewport.row_offset
            row = self.buffer.get_row(filerow)
            if row is None:
                yield filerow, None, None
                continue

            yield filerow, row.render[start:end], row.hl[start:end]

    def cursor_screen_position(self) -> Tuple[int, int]:
        return (self.cursor.cy - self.viewport.row_offset,
                self.rx - self.viewport.col_offset)

    def status_line(self) -> Tuple[str, str]:
        """Return the left and right halves of the status bar."""

        name = self.buffer.filename or "[No Name]"
        left = "%.*s - %d lines %s" % (
            FILENAME_DISPLAY_WIDTH, name, self.buffer.numrows,
            "(modified)" if self.buffer.modified else "",
        )
        filetype = self.buffer.syntax.filetype if self.buffer.syntax else "no ft"
        right = "%s | %d/%d" % (filetype, self.cursor.cy + 1, self.buffer.numrows)
        return left, right
