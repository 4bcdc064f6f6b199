"""
Incremental search over the rendered text of a buffer.
"""

import logging
from typing import List, Optional, Tuple

from ..core.buffer import Buffer
from ..core.keys import ENTER, ESCAPE, Key
from ..core.syntax import Highlight
from ..core.viewport import Cursor, Viewport

logger = logging.getLogger(__name__)

FORWARD_KEYS = (Key.ARROW_RIGHT, Key.ARROW_DOWN)
BACKWARD_KEYS = (Key.ARROW_LEFT, Key.ARROW_UP)
STOP_KEYS = (ENTER, ESCAPE)


class SearchResult:
    """Represents a search match with its row and render position."""

    def __init__(self, row: int, column: int, length: int):
        self.row = row
        self.column = column
        self.length = length

    def __repr__(self) -> str:
        return f"SearchResult(row={self.row}, column={self.column}, length={self.length})"


class SearchEngine:
    """
    Search-as-you-type state machine.

    Each call to ``feed`` first undoes the previous match overlay, so the
    highlight of at most one row is ever borrowed, and always given back
    before the session ends.
    """

    def __init__(self, buffer: Buffer, cursor: Cursor, viewport: Viewport) -> None:
        self.buffer = buffer
        self.cursor = cursor
        self.viewport = viewport

        self.active = False
        self.last_match: Optional[int] = None
        self.direction = 1
        self.last_result: Optional[SearchResult] = None

        self.saved_hl_line: Optional[int] = None
        self.saved_hl: Optional[List[Highlight]] = None
        self._saved_position: Optional[Tuple[int, int, int, int]] = None

    def begin(self) -> None:
        """Start a session, remembering where the cursor was."""

        self.active = True
        self.last_match = None
        self.direction = 1
        self.last_result = None
        self._saved_position = (
            self.cursor.cx, self.cursor.cy,
            self.viewport.row_offset, self.viewport.col_offset,
        )

    def _restore_highlight(self) -> None:
        if self.saved_hl is None:
            return

        row = self.buffer.get_row(self.saved_hl_line)
        if row is not None and len(row.hl) == len(self.saved_hl):
            row.hl = self.saved_hl

        self.saved_hl = None
        self.saved_hl_line = None

    def _finish(self, cancelled: bool) -> None:
        if cancelled and self._saved_position is not None:
            cx, cy, row_offset, col_offset = self._saved_position
            self.cursor.cx, self.cursor.cy = cx, cy
            self.viewport.row_offset, self.viewport.col_offset = row_offset, col_offset

        self.active = False
        self.last_match = None
        self.direction = 1
        self._saved_position = None

    def feed(self, query: str, key: int) -> Optional[SearchResult]:
        """
        Update the search after one prompt key.

        Args:
            query: The current query text
            key: The logical key that was just typed

        Returns:
            Optional[SearchResult]: The match now shown, or None
        """

        self._restore_highlight()

        if key in STOP_KEYS:
            self._finish(cancelled=key != ENTER)
            return None

        if key in FORWARD_KEYS:
            self.direction = 1
        elif key in BACKWARD_KEYS:
            self.direction = -1
        else:
            self.last_match = None
            self.direction = 1

        if self.last_match is None:
            self.direction = 1

        self.last_result = self._find(query)
        return self.last_result

    def _find(self, query: str) -> Optional[SearchResult]:
        numrows = self.buffer.numrows
        if not query or numrows == 0:
            return None

        current = -1 if self.last_match is None else self.last_match
        for _ in range(numrows):
            current = (current + self.direction) % numrows

            row = self.buffer.rows[current]
            column = row.render.find(query)
            if column < 0:
                continue

            self.last_match = current
            self.cursor.cy = current
            self.cursor.cx = row.rx_to_cx(column, self.buffer.tab_stop)
            self.viewport.jump_to_row(current)

            self.saved_hl_line = current
            self.saved_hl = list(row.hl)
            end = column + len(query)
            row.hl[column:end] = [Highlight.MATCH] * (end - column)

            logger.debug("Match for %r at row %d, column %d", query, current, column)
            return SearchResult(current, column, len(query))

        return None
