"""Token pattern search: a linear, non-backtracking sequence matcher."""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence

Predicate = Callable[[str], bool]


def exact(value: str) -> Predicate:
    """Return a predicate matching tokens equal to *value*."""
    return lambda token: token == value


def pattern(regex: str) -> Predicate:
    """Return a predicate matching tokens that fully match *regex*."""
    compiled = re.compile(regex)
    return lambda token: compiled.fullmatch(token) is not None


def find(patterns: Sequence[Predicate], tokens: Sequence[str]) -> list[str] | None:
    """Return the first run of consecutive tokens matching *patterns*, or None.

    A failed partial match is discarded, and the token that broke it is
    not retried as the start of a new match, so
    ``find([A, B, C], [A, B, A, B, C])`` finds nothing.
    """
    if not patterns:
        return None

    matched: list[str] = []
    for token in tokens:
        if patterns[len(matched)](token):
            matched.append(token)
            if len(matched) == len(patterns):
                return matched
        elif matched:
            matched = []
    return None
