"""
Logical key codes understood by the editor core.
"""

from enum import IntEnum
from typing import Final


def ctrl_key(k: str) -> int:
    """Return the code produced by holding Ctrl with ``k``."""

    return ord(k) & 0x1f


ENTER: Final[int] = ord('\r')
ESCAPE: Final[int] = 0x1b


class Key(IntEnum):
    BACKSPACE = 127
    ARROW_LEFT = 1000
    ARROW_RIGHT = 1001
    ARROW_UP = 1002
    ARROW_DOWN = 1003
    DEL_KEY = 1004
    HOME_KEY = 1005
    END_KEY = 1006
    PAGE_UP = 1007
    PAGE_DOWN = 1008


def is_printable(key: int) -> bool:
    return 32 <= key < 127
