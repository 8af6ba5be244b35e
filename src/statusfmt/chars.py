"""Source positions and character classification helpers."""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int

    @classmethod
    def at(cls, source: str, offset: int) -> Position:
        """Compute the line and column of *offset* within *source*."""
        line = source.count("\n", 0, offset) + 1
        line_start = source.rfind("\n", 0, offset) + 1
        return cls(line, offset - line_start + 1, offset)


# Characters that end a run of literal text
SPECIAL_CHARS = frozenset("$^{}|\\")

ESCAPE_CHAR = "\\"

# Bare argument values additionally allow these
_VALUE_EXTRA = frozenset(".%")

# ASCII whitespace: space, tab, LF, FF, CR
_SPACE_CHARS = frozenset(" \t\n\x0c\r")

# Line breaks that separate templates in a file; other breaks are text
_LINE_BREAK = re.compile(r"\r\n|\r|\n")

# Combining marks continue a word (Devanagari vowel signs and the like)
_MARK_CATEGORIES = frozenset(("Mn", "Mc"))


def is_ident_char(ch: str) -> bool:
    """Return True if ch may appear in an identifier (letters, digits, _ and -)."""
    return ch.isalnum() or ch == "_" or ch == "-"


def is_value_char(ch: str) -> bool:
    """Return True if ch may appear in an unquoted argument value."""
    return is_ident_char(ch) or ch in _VALUE_EXTRA


def is_text_char(ch: str) -> bool:
    """Return True if ch is literal text without escaping."""
    return ch not in SPECIAL_CHARS


def is_space(ch: str) -> bool:
    return ch in _SPACE_CHARS


def is_mark(ch: str) -> bool:
    """Return True if ch is a combining mark that may continue a word."""
    return len(ch) == 1 and unicodedata.category(ch) in _MARK_CATEGORIES


def split_lines(text: str) -> list[str]:
    """Split *text* on LF, CRLF and CR only."""
    return _LINE_BREAK.split(text)
