"""
UI package for the terminal front end.

This package implements the curses layer around the editor core: the
WindowManager draws rows, the status bar and the message bar, and the
InputHandler turns curses key codes into editor operations and prompts.
"""

from .window import WindowManager
from .input_handler import InputHandler

__all__ = ['WindowManager', 'InputHandler']
