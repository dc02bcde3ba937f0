"""--debug token dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from c6.tokens import is_word_char


def dump_tokens(tokens: list[str], *, file: TextIO | None = None) -> None:
    """Print one token per line, numbered, with a coarse kind label.

    Writes to the current sys.stderr unless *file* is given.
    """
    if file is None:
        file = sys.stderr
    width = len(str(len(tokens)))
    for i, token in enumerate(tokens):
        file.write(f"{i:>{width}} {_kind(token):<7} {token}\n")


def _kind(token: str) -> str:
    if token[0] in "\"'":
        return "literal"
    if is_word_char(token[0]):
        return "word"
    return "symbol"
