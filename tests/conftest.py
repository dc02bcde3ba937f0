"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from c6.catalog import Catalog, FunctionDescriptor, HeaderRule, Param, TypeRef
from c6.scanner import scan


@pytest.fixture
def tok():
    """Return a helper that scans source into token strings."""

    def _tok(source: str) -> list[str]:
        return scan(source)

    return _tok


@pytest.fixture
def small_catalog() -> Catalog:
    """A two-function catalog where ``outer`` calls ``inner``."""
    inner = FunctionDescriptor(
        "inner",
        TypeRef("int"),
        (Param("x", TypeRef("int", const=True)),),
        "    return x * 2;",
    )
    outer = FunctionDescriptor(
        "outer",
        TypeRef("int"),
        (Param("x", TypeRef("int", const=True)),),
        "    return inner(x) + 1;",
    )
    headers = (HeaderRule("<vector>", ("vector",)),)
    return Catalog(headers, (outer, inner))


def include_lines(code: str) -> list[str]:
    """Return the #include lines of generated code."""
    return [line for line in code.splitlines() if line.startswith("#include")]
