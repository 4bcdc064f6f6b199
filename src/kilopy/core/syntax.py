"""
Syntax highlighting module: language profiles and the per-row classifier.
"""

import logging
import os
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Final, Iterator, List, Optional, Sequence, Tuple

from pygments.token import Comment, Generic, Keyword, Number, String, Token

logger = logging.getLogger(__name__)


class Highlight(IntEnum):
    """Display category of a single rendered cell."""

    NORMAL = 0
    COMMENT = 1
    MLCOMMENT = 2
    KEYWORD1 = 3
    KEYWORD2 = 4
    STRING = 5
    NUMBER = 6
    MATCH = 7


# Fixed category -> color index table. The UI binds each index to a color pair.
HL_COLOR_INDEX: Final[Dict[Highlight, int]] = {
    Highlight.NORMAL: 0,
    Highlight.COMMENT: 1,
    Highlight.MLCOMMENT: 2,
    Highlight.KEYWORD1: 3,
    Highlight.KEYWORD2: 4,
    Highlight.STRING: 5,
    Highlight.NUMBER: 6,
    Highlight.MATCH: 7,
}

TOKEN_TYPES: Final[Dict[Highlight, Any]] = {
    Highlight.NORMAL: Token.Text,
    Highlight.COMMENT: Comment.Single,
    Highlight.MLCOMMENT: Comment.Multiline,
    Highlight.KEYWORD1: Keyword,
    Highlight.KEYWORD2: Keyword.Type,
    Highlight.STRING: String,
    Highlight.NUMBER: Number,
    Highlight.MATCH: Generic.Emph,
}

SEPARATORS: Final[str] = ',.()+-/*=~%<>[];{}'

SECONDARY_MARKER: Final[str] = '|'


def is_separator(c: str) -> bool:
    """Whitespace, end of row ('' or NUL) and punctuation delimit words."""

    return not c or c == '\0' or c.isspace() or c in SEPARATORS


@dataclass(frozen=True)
class LanguageProfile:
    """
    Declarative highlighting rules for one language.

    Keywords ending in ``|`` are secondary (types); the marker is not part of
    the matched text.
    """

    filetype: str
    filematch: Tuple[str, ...]
    keywords: Tuple[str, ...] = ()
    singleline_comment_start: Optional[str] = None
    multiline_comment_start: Optional[str] = None
    multiline_comment_end: Optional[str] = None
    highlight_numbers: bool = True
    highlight_strings: bool = True

    def keyword_entries(self) -> List[Tuple[str, Highlight]]:
        """Return ``(word, class)`` pairs in declaration order."""

        entries = []
        for keyword in self.keywords:
            if keyword.endswith(SECONDARY_MARKER):
                entries.append((keyword[:-1], Highlight.KEYWORD2))
                continue

            entries.append((keyword, Highlight.KEYWORD1))

        return [(word, kind) for word, kind in entries if word]

    def matches(self, filename: str) -> bool:
        """Check whether this profile applies to ``filename``."""

        ext = os.path.splitext(filename)[1].lower()
        for pattern in self.filematch:
            if pattern.startswith('.'):
                if ext and ext == pattern.lower():
                    return True
                continue

            if pattern in filename:
                return True

        return False


C_PROFILE: Final[LanguageProfile] = LanguageProfile(
    filetype='c',
    filematch=('.c', '.h', '.cpp'),
    keywords=(
        'switch', 'if', 'while', 'for', 'break', 'continue', 'return', 'else',
        'struct', 'union', 'typedef', 'static', 'enum', 'class', 'case', 'default',
        'int|', 'long|', 'double|', 'float|', 'char|', 'unsigned|', 'signed|',
        'void|', 'short|', 'size_t|', 'ssize_t|', 'const|', 'volatile|',
    ),
    singleline_comment_start='//',
    multiline_comment_start='/*',
    multiline_comment_end='*/',
)

PYTHON_PROFILE: Final[LanguageProfile] = LanguageProfile(
    filetype='python',
    filematch=('.py', '.pyw'),
    keywords=(
        'def', 'class', 'if', 'elif', 'else', 'for', 'while', 'return', 'import',
        'from', 'as', 'with', 'try', 'except', 'finally', 'raise', 'pass', 'break',
        'continue', 'lambda', 'yield', 'in', 'is', 'not', 'and', 'or', 'global',
        'nonlocal', 'assert', 'del', 'async', 'await',
        'True|', 'False|', 'None|', 'self|', 'int|', 'str|', 'float|', 'bool|',
        'bytes|', 'list|', 'dict|', 'tuple|', 'set|',
    ),
    singleline_comment_start='#',
)

HLDB: Final[Tuple[LanguageProfile, ...]] = (C_PROFILE, PYTHON_PROFILE)


def select_profile(filename: Optional[str],
                   profiles: Sequence[LanguageProfile] = HLDB) -> Optional[LanguageProfile]:
    """Return the first profile whose file patterns match ``filename``."""

    if not filename:
        return None

    for profile in profiles:
        if profile.matches(filename):
            logger.debug("Selected %s highlighting for %s", profile.filetype, filename)
            return profile

    return None


def _match_keyword(render: str, i: int,
                   entries: Sequence[Tuple[str, Highlight]]) -> Optional[Tuple[int, Highlight]]:
    """Find the longest keyword at ``i`` that is followed by a separator."""

    best: Optional[Tuple[int, Highlight]] = None
    for word, kind in entries:
        klen = len(word)
        if best is not None and klen <= best[0]:
            continue

        if not render.startswith(word, i):
            continue

        follow = render[i + klen] if i + klen < len(render) else ''
        if is_separator(follow):
            best = (klen, kind)

    return best


def highlight(render: str, profile: Optional[LanguageProfile],
              open_comment: bool = False) -> Tuple[List[Highlight], bool]:
    """
    Classify every cell of a rendered row.

    Args:
        render: The tab-expanded row text
        profile: The language rules, or None for plain text
        open_comment: Whether the previous row ended inside a block comment

    Returns:
        The per-cell classification and whether this row ends inside an
        unterminated block comment
    """

    n = len(render)
    hl = [Highlight.NORMAL] * n
    if profile is None:
        return hl, False

    entries = profile.keyword_entries()
    scs = profile.singleline_comment_start or ''
    mcs = profile.multiline_comment_start or ''
    mce = profile.multiline_comment_end or ''

    prev_sep = True
    in_string = ''
    in_comment = bool(open_comment) and bool(mcs and mce)

    i = 0
    while i < n:
        c = render[i]
        prev_hl = hl[i - 1] if i > 0 else Highlight.NORMAL

        if scs and not in_string and not in_comment and render.startswith(scs, i):
            hl[i:] = [Highlight.COMMENT] * (n - i)
            break

        if mcs and mce and not in_string:
            if in_comment:
                hl[i] = Highlight.MLCOMMENT
                if render.startswith(mce, i):
                    hl[i:i + len(mce)] = [Highlight.MLCOMMENT] * len(mce)
                    i += len(mce)
                    in_comment = False
                    prev_sep = True
                    continue

                i += 1
                continue

            if render.startswith(mcs, i):
                hl[i:i + len(mcs)] = [Highlight.MLCOMMENT] * len(mcs)
                i += len(mcs)
                in_comment = True
                continue

        if profile.highlight_strings:
            if in_string:
                hl[i] = Highlight.STRING
                if c == '\\' and i + 1 < n:
                    hl[i + 1] = Highlight.STRING
                    i += 2
                    continue

                if c == in_string:
                    in_string = ''
                i += 1
                prev_sep = True
                continue

            if c in ('"', "'"):
                in_string = c
                hl[i] = Highlight.STRING
                i += 1
                continue

        if profile.highlight_numbers:
            if (('0' <= c <= '9' and (prev_sep or prev_hl == Highlight.NUMBER))
                    or (c == '.' and prev_hl == Highlight.NUMBER)):
                hl[i] = Highlight.NUMBER
                i += 1
                prev_sep = False
                continue

        if prev_sep:
            match = _match_keyword(render, i, entries)
            if match is not None:
                klen, kind = match
                hl[i:i + klen] = [kind] * klen
                i += klen
                prev_sep = False
                continue

        prev_sep = is_separator(c)
        i += 1

    return hl, in_comment


def iter_tokens(render: str, hl: Sequence[Highlight]) -> Iterator[Tuple[Any, str]]:
    """Group consecutive cells of equal class into pygments token runs."""

    start = 0
    for i in range(1, len(render) + 1):
        if i < len(render) and hl[i] == hl[start]:
            continue

        yield TOKEN_TYPES[hl[start]], render[start:i]
        start = i
