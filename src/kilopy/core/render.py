"""
Conversion between raw character columns and rendered (tab-expanded) columns.
"""

from typing import Final

TAB_STOP: Final[int] = 8


def cx_to_rx(chars: str, cx: int, tab_stop: int = TAB_STOP) -> int:
    """Return the render column of raw column ``cx``."""

    rx = 0
    for ch in chars[:max(0, cx)]:
        if ch == '\t':
            rx += (tab_stop - 1) - (rx % tab_stop)
        rx += 1

    return rx


def rx_to_cx(chars: str, rx: int, tab_stop: int = TAB_STOP) -> int:
    """
    Return the raw column that covers render column ``rx``.

    Walks the row accumulating render width and returns the first raw column
    whose resulting width passes ``rx``; past the end, the row length.
    """

    cur_rx = 0
    for cx, ch in enumerate(chars):
        if ch == '\t':
            cur_rx += (tab_stop - 1) - (cur_rx % tab_stop)
        cur_rx += 1

        if cur_rx > rx:
            return cx

    return len(chars)


def render_text(chars: str, tab_stop: int = TAB_STOP) -> str:
    """Expand tabs to spaces up to the next tab stop."""

    if '\t' not in chars:
        return chars

    out = []
    width = 0
    for ch in chars:
        if ch == '\t':
            pad = tab_stop - (width % tab_stop)
            out.append(' ' * pad)
            width += pad
            continue

        out.append(ch)
        width += 1

    return ''.join(out)
