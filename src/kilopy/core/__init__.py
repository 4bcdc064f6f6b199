"""
Core package for the text editor.

This package implements the row store (Buffer), the render column mapping,
the incremental syntax classifier and the editor state that ties them to a
cursor and viewport.
"""

from .buffer import Buffer

__all__ = ['Buffer']
