"""
Utility package for file access, search and highlighted output.
"""

from .fileio import ReadResult, ReadStatus, read_file, write_file, split_lines, join_rows

__all__ = [
    'ReadResult',
    'ReadStatus',
    'read_file',
    'write_file',
    'split_lines',
    'join_rows',
]
