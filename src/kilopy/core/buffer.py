"""
Buffer module: the ordered row store and every text mutation entry point.
"""

import logging
from typing import Iterator, List, Optional, Tuple, Any

from .render import TAB_STOP
from .row import Row
from .syntax import LanguageProfile, highlight, iter_tokens, select_profile
from ..utils.fileio import ReadResult, ReadStatus, join_rows, read_file, split_lines, write_file

logger = logging.getLogger(__name__)


class Buffer:
    """An in-memory document of rows with incrementally maintained highlighting."""

    def __init__(self, tab_stop: int = TAB_STOP) -> None:
        self.rows: List[Row] = []
        self.dirty = 0
        self.filename: Optional[str] = None
        self.syntax: Optional[LanguageProfile] = None
        self.tab_stop = tab_stop

    @property
    def numrows(self) -> int:
        return len(self.rows)

    @property
    def modified(self) -> bool:
        return self.dirty != 0

    def get_row(self, at: int) -> Optional[Row]:
        """Return the row at ``at``, or None past the end."""

        if 0 <= at < len(self.rows):
            return self.rows[at]

        return None

    def _clamp_row(self, at: int) -> Optional[int]:
        if not self.rows:
            return None

        return max(0, min(at, len(self.rows) - 1))

    def set_syntax(self, profile: Optional[LanguageProfile]) -> None:
        """Switch language profile and reclassify the whole document."""

        self.syntax = profile
        for row in self.rows:
            self._highlight_row(row)

    def select_syntax(self) -> Optional[LanguageProfile]:
        """Pick a profile from the current filename."""

        self.set_syntax(select_profile(self.filename))
        return self.syntax

    def _carry_into(self, at: int) -> bool:
        return at > 0 and self.rows[at - 1].hl_open_comment

    def _highlight_row(self, row: Row) -> None:
        carry_in = self._carry_into(row.idx)
        row.hl, row.hl_open_comment = highlight(row.render, self.syntax, carry_in)
        row.hl_carry_in = carry_in

    def update_syntax(self, at: int) -> None:
        """
        Reclassify row ``at`` and every following row whose carry-in changed.

        Stops at the first row whose recorded carry-in already matches the
        carry-out of its predecessor.
        """

        count = 0
        while at < len(self.rows):
            row = self.rows[at]
            self._highlight_row(row)
            count += 1
            at += 1

            if at >= len(self.rows) or self.rows[at].hl_carry_in == row.hl_open_comment:
                break

        if count > 1:
            logger.debug("Highlight cascade touched %d rows", count)

    def _resync_from(self, at: int) -> None:
        """Reclassify from ``at`` if its carry-in no longer matches its predecessor."""

        if 0 <= at < len(self.rows) and self.rows[at].hl_carry_in != self._carry_into(at):
            self.update_syntax(at)

    def update_row(self, row: Row) -> None:
        """Recompute a row's render text and classification."""

        row.update_render(self.tab_stop)
        self.update_syntax(row.idx)

    def _renumber(self, start: int) -> None:
        for j in range(start, len(self.rows)):
            self.rows[j].idx = j

    def insert_row(self, at: int, s: str = '') -> Row:
        """Insert a new row holding ``s`` at position ``at``."""

        at = max(0, min(at, len(self.rows)))

        row = Row(idx=at, chars=s)
        self.rows.insert(at, row)
        self._renumber(at + 1)

        self.update_row(row)
        self.dirty += 1
        return row

    def del_row(self, at: int) -> None:
        """Remove the row at ``at``."""

        at = self._clamp_row(at)
        if at is None:
            return

        del self.rows[at]
        self._renumber(at)
        self._resync_from(at)
        self.dirty += 1

    def row_insert_char(self, at_row: int, at: int, c: str) -> None:
        """Insert a single character into a row."""

        if len(c) != 1:
            raise ValueError("Expected a single character")

        idx = self._clamp_row(at_row)
        if idx is None:
            return

        row = self.rows[idx]
        at = max(0, min(at, row.size))
        row.chars = row.chars[:at] + c + row.chars[at:]
        self.update_row(row)
        self.dirty += 1

    def row_del_char(self, at_row: int, at: int) -> None:
        """Delete the character at column ``at`` of a row."""

        idx = self._clamp_row(at_row)
        if idx is None:
            return

        row = self.rows[idx]
        if row.size == 0:
            return

        at = max(0, min(at, row.size - 1))
        row.chars = row.chars[:at] + row.chars[at + 1:]
        self.update_row(row)
        self.dirty += 1

    def row_append_string(self, at_row: int, s: str) -> None:
        """Append text to the end of a row."""

        idx = self._clamp_row(at_row)
        if idx is None:
            return

        row = self.rows[idx]
        row.chars += s
        self.update_row(row)
        self.dirty += 1

    def split_row(self, at_row: int, at: int) -> None:
        """Break a row in two at column ``at``."""

        idx = self._clamp_row(at_row)
        if idx is None:
            return

        row = self.rows[idx]
        at = max(0, min(at, row.size))
        if at == 0:
            self.insert_row(idx, '')
            return

        tail = row.chars[at:]
        row.chars = row.chars[:at]
        self.update_row(row)
        self.insert_row(idx + 1, tail)

    def merge_row(self, at_row: int) -> int:
        """
        Append a row to its predecessor and remove it.

        Returns:
            int: The column in the predecessor where the merged text begins,
                 or -1 if there is no predecessor
        """

        if at_row <= 0 or at_row >= len(self.rows):
            return -1

        prev = self.rows[at_row - 1]
        column = prev.size
        self.row_append_string(at_row - 1, self.rows[at_row].chars)
        self.del_row(at_row)
        return column

    def load_bytes(self, data: bytes) -> None:
        """Replace the contents with the rows found in ``data``."""

        self.rows = []
        for line in split_lines(data):
            self.insert_row(len(self.rows), line)

        self.dirty = 0

    def to_bytes(self) -> bytes:
        return join_rows(row.chars for row in self.rows)

    def open(self, filename: str) -> ReadResult:
        """
        Load a file into the buffer.

        A missing or unreadable file leaves an empty document named
        ``filename``; the returned result says which.
        """

        self.rows = []
        self.filename = filename
        self.select_syntax()

        result = read_file(filename)
        if result.status is ReadStatus.LOADED:
            self.load_bytes(result.data)

        self.dirty = 0
        return result

    def save_file(self, filename: Optional[str] = None) -> int:
        """
        Write the buffer to disk.

        Args:
            filename: Optional filename to save to. If None, uses current filename.

        Returns:
            int: Number of bytes written
        """

        save_filename = filename or self.filename
        if not save_filename:
            raise ValueError("No filename specified")

        data = self.to_bytes()
        try:
            written = write_file(save_filename, data)
        except OSError as e:
            logger.warning("Saving %s failed: %s", save_filename, e)
            raise IOError(f"Failed to save file: {e.strerror or e}") from e

        if save_filename != self.filename:
            self.filename = save_filename
            self.select_syntax()

        self.dirty = 0
        logger.debug("Wrote %d bytes to %s", written, save_filename)
        return written

    def row_tokens(self, at: int) -> Iterator[Tuple[Any, str]]:
        """Yield pygments ``(token type, text)`` runs for one row."""

        row = self.get_row(at)
        if row is None:
            return

        yield from iter_tokens(row.render, row.hl)
