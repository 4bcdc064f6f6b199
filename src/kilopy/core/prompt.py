"""
Single-line text entry driven one key at a time.
"""

from enum import Enum

from .keys import ENTER, ESCAPE, Key, ctrl_key, is_printable


class PromptStatus(Enum):
    ACTIVE = 'active'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'


class Prompt:
    """
    A modal input line.

    The caller feeds logical keys and decides what to do once the status
    leaves ACTIVE. ``template`` must contain one ``%s`` for the typed text.
    """

    def __init__(self, template: str, allow_empty: bool = False) -> None:
        self.template = template
        self.allow_empty = allow_empty
        self.text = ""
        self.status = PromptStatus.ACTIVE

    @property
    def message(self) -> str:
        return self.template % self.text

    def feed(self, key: int) -> PromptStatus:
        """Apply one key and return the resulting status."""

        if self.status is not PromptStatus.ACTIVE:
            return self.status

        if key in (Key.DEL_KEY, Key.BACKSPACE, ctrl_key('h')):
            self.text = self.text[:-1]
        elif key == ESCAPE:
            self.status = PromptStatus.CANCELLED
        elif key == ENTER:
            if self.text or self.allow_empty:
                self.status = PromptStatus.CONFIRMED
        elif is_printable(key):
            self.text += chr(key)

        return self.status
