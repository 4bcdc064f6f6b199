#!/usr/bin/python3

"""
Entry point script for kilopy.
"""

import sys

from kilopy.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
