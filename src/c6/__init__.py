"""C6 to C++ compiler."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from c6.catalog import Catalog

__version__ = "1.2.0"


def compile(source: str, catalog: Catalog | None = None) -> str:
    """Translate C6 source text to C++ source text."""
    from c6.assemble import compile_source
    from c6.catalog import DEFAULT_CATALOG

    return compile_source(source, catalog if catalog is not None else DEFAULT_CATALOG)
