"""
Non-interactive rendering of a highlighted buffer through pygments formatters.
"""

from typing import Any, Iterator, Optional, Tuple

from pygments import format as pygments_format
from pygments.formatter import Formatter
from pygments.formatters import TerminalFormatter
from pygments.token import Token

from ..core.buffer import Buffer


def document_tokens(buffer: Buffer) -> Iterator[Tuple[Any, str]]:
    """Yield the token stream for every row, with a newline after each."""

    for at in range(buffer.numrows):
        yield from buffer.row_tokens(at)
        yield Token.Text.Whitespace, '\n'


def render_highlighted(buffer: Buffer, formatter: Optional[Formatter] = None) -> str:
    """Format the buffer's current classification, terminal colors by default."""

    if formatter is None:
        formatter = TerminalFormatter()

    return pygments_format(document_tokens(buffer), formatter)
