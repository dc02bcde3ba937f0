"""Detect references to an identifier, bare or namespace-qualified."""

from __future__ import annotations

from collections.abc import Sequence

from c6.matcher import exact, find
from c6.tokens import SCOPE_RESOLUTION


def references(tokens: Sequence[str], name: str, namespace: str | None = None) -> bool:
    """Return True if *tokens* mention *name* alone or as ``namespace::name``."""
    if find([exact(name)], tokens) is not None:
        return True
    if namespace is None:
        return False
    return find([exact(namespace), exact(SCOPE_RESOLUTION), exact(name)], tokens) is not None
