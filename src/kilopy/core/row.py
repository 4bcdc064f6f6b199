"""
A single line of text together with its rendered and classified forms.
"""

from dataclasses import dataclass, field
from typing import List

from .render import TAB_STOP, cx_to_rx, render_text, rx_to_cx
from .syntax import Highlight


@dataclass
class Row:
    """One editable line. ``render`` and ``hl`` are derived and owned by the buffer."""

    idx: int
    chars: str = ''
    render: str = ''
    hl: List[Highlight] = field(default_factory=list)
    hl_open_comment: bool = False
    hl_carry_in: bool = False

    @property
    def size(self) -> int:
        return len(self.chars)

    @property
    def rsize(self) -> int:
        return len(self.render)

    def update_render(self, tab_stop: int = TAB_STOP) -> None:
        self.render = render_text(self.chars, tab_stop)

    def cx_to_rx(self, cx: int, tab_stop: int = TAB_STOP) -> int:
        return cx_to_rx(self.chars, cx, tab_stop)

    def rx_to_cx(self, rx: int, tab_stop: int = TAB_STOP) -> int:
        return rx_to_cx(self.chars, rx, tab_stop)
