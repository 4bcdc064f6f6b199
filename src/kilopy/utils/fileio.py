"""
Whole-file reading and writing, and conversion between bytes and rows.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Final, Iterable, List, Optional

logger = logging.getLogger(__name__)

# One byte per character, so every file round-trips exactly.
ENCODING: Final[str] = 'latin-1'


class ReadStatus(Enum):
    LOADED = 'loaded'
    MISSING = 'missing'
    UNREADABLE = 'unreadable'


@dataclass
class ReadResult:
    """Outcome of reading a file from disk."""

    status: ReadStatus
    data: bytes = b''
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is ReadStatus.LOADED


def read_file(path: str) -> ReadResult:
    """Read the full contents of ``path``, distinguishing absent from unreadable."""

    try:
        with open(path, 'rb') as f:
            data = f.read()
    except FileNotFoundError:
        logger.debug("%s does not exist, starting a new file", path)
        return ReadResult(ReadStatus.MISSING)
    except OSError as e:
        logger.warning("Could not read %s: %s", path, e)
        return ReadResult(ReadStatus.UNREADABLE, error=e.strerror or str(e))

    logger.debug("Read %d bytes from %s", len(data), path)
    return ReadResult(ReadStatus.LOADED, data)


def write_file(path: str, data: bytes) -> int:
    """Write ``data`` to ``path`` and return the number of bytes written."""

    with open(path, 'wb') as f:
        written = f.write(data)

    if written != len(data):
        raise OSError(f"short write: {written} of {len(data)} bytes")

    return written


def split_lines(data: bytes) -> List[str]:
    """
    Split file contents into rows.

    Lines end in LF or CRLF. A trailing newline does not start an extra row.
    """

    text = data.decode(ENCODING)
    lines = text.split('\n')
    if lines and lines[-1] == '':
        lines.pop()

    return [line[:-1] if line.endswith('\r') else line for line in lines]


def join_rows(rows: Iterable[str]) -> bytes:
    """Serialize rows with a single LF after each one."""

    return ''.join(row + '\n' for row in rows).encode(ENCODING)
