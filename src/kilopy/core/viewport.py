"""
Scroll offsets for the visible text area.
"""

from dataclasses import dataclass


@dataclass
class Viewport:
    """The window of rows and render columns currently on screen."""

    screen_rows: int = 24
    screen_cols: int = 80
    row_offset: int = 0
    col_offset: int = 0

    def resize(self, rows: int, cols: int) -> None:
        self.screen_rows = max(1, rows)
        self.screen_cols = max(1, cols)

    def scroll_to_fit(self, row: int, rx: int) -> None:
        """Adjust offsets so that ``(row, rx)`` is visible."""

        if row < self.row_offset:
            self.row_offset = row
        if row >= self.row_offset + self.screen_rows:
            self.row_offset = row - self.screen_rows + 1

        if rx < self.col_offset:
            self.col_offset = rx
        if rx >= self.col_offset + self.screen_cols:
            self.col_offset = rx - self.screen_cols + 1

    def jump_to_row(self, row: int) -> None:
        """Make ``row`` the top visible row."""

        self.row_offset = max(0, row)


@dataclass
class Cursor:
    """Raw cursor position. ``cy`` may equal the row count (the line past the end)."""

    cx: int = 0
    cy: int = 0
