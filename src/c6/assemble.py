"""The compile pipeline: built-in synthesis, header inference, rewrites."""

from __future__ import annotations

import re
from collections.abc import Sequence

from c6.catalog import DEFAULT_CATALOG, Catalog, FunctionDescriptor
from c6.errors import MalformedTemplateParameter
from c6.generics import rewrite_generics
from c6.references import references
from c6.scanner import scan
from c6.synth import render_function, render_namespace

# fn(...) { ... } is the dialect's capture-by-reference lambda
_LAMBDA = re.compile(r"\bfn(?=\()")


def required_builtins(
    tokens: Sequence[str], catalog: Catalog = DEFAULT_CATALOG
) -> list[FunctionDescriptor]:
    """Return the built-ins referenced by *tokens*, callees before callers.

    Built-ins referenced only from the body of another required built-in
    are included as well.
    """
    ordered: list[FunctionDescriptor] = []
    seen: set[str] = set()

    def visit(fn: FunctionDescriptor) -> None:
        seen.add(fn.name)
        body_tokens = scan(render_function(fn))
        for other in catalog.builtins:
            if other.name not in seen and references(body_tokens, other.name, catalog.namespace):
                visit(other)
        ordered.append(fn)

    for fn in catalog.builtins:
        if fn.name not in seen and references(tokens, fn.name, catalog.namespace):
            visit(fn)
    return ordered


def required_headers(tokens: Sequence[str], catalog: Catalog = DEFAULT_CATALOG) -> list[str]:
    """Return the header directives whose triggers appear in *tokens*."""
    return [
        rule.directive
        for rule in catalog.headers
        if any(references(tokens, name, "std") for name in rule.triggers)
    ]


def include_block(headers: Sequence[str], source: str) -> str:
    """Render #include lines, skipping those already present in *source*."""
    present = {line.strip() for line in source.splitlines()}
    lines = [f"#include {h}" for h in headers]
    return "".join(f"{line}\n" for line in lines if line not in present)


def replace_lambda(text: str) -> str:
    """Replace the first ``fn(`` lambda introducer with ``[&](``."""
    return _LAMBDA.sub("[&]", text, count=1)


def compile_source(source: str, catalog: Catalog = DEFAULT_CATALOG) -> str:
    """Translate C6 source text into C++ source text."""
    builtins = required_builtins(scan(source), catalog)
    namespace_block = render_namespace(builtins, catalog.namespace)

    # Synthesized bodies bring their own std:: references
    headers = required_headers(scan(namespace_block + source), catalog)
    prefix = include_block(headers, source) + namespace_block
    code = prefix + source

    try:
        code = rewrite_generics(code)
    except MalformedTemplateParameter as exc:
        if exc.position.offset < len(prefix):
            raise
        raise exc.relocated(len(prefix), source) from None

    return replace_lambda(code)
