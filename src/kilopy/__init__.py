"""
kilopy - a small terminal text editor with incremental syntax highlighting.
"""

__version__ = "0.1.0"
