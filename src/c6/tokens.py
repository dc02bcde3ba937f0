"""Scanner states, source positions, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class ScanState(Enum):
    CODE = auto()  # identifiers, keywords, operators
    STRING_LITERAL = auto()  # "..." or '...'
    LINE_COMMENT = auto()  # // up to the newline
    BLOCK_COMMENT = auto()  # /* ... */


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based offset."""

    line: int
    column: int
    offset: int


# Token that joins a namespace to one of its members, e.g. std::cout
SCOPE_RESOLUTION = "::"

STRING_DELIMITERS = "\"'"


def is_word_char(ch: str) -> bool:
    """Return True if ch is an ASCII letter, digit, or underscore."""
    return ch.isascii() and (ch.isalnum() or ch == "_")


def position_at(text: str, offset: int) -> Position:
    """Return the Position of *offset* within *text*."""
    line = text.count("\n", 0, offset) + 1
    line_start = text.rfind("\n", 0, offset) + 1
    return Position(line, offset - line_start + 1, offset)
