"""Render built-in function descriptors as C++ source text."""

from __future__ import annotations

from collections.abc import Iterable

from c6.catalog import FunctionDescriptor, Param, TemplateSpec, TypeRef


def type_text(t: TypeRef) -> str:
    """Render a type: namespace qualifier, then & or *, then const prefix."""
    text = f"{t.namespace}::{t.name}" if t.namespace else t.name
    text += t.ref
    if t.const:
        text = "const " + text
    return text


def param_text(p: Param) -> str:
    text = f"{type_text(p.type)} {p.name}"
    if p.default is not None:
        text += f" = {p.default}"
    return text


def template_text(spec: TemplateSpec) -> str:
    """Render the generic header line (without trailing newline)."""
    if spec.raw is not None:
        return f"template<{spec.raw}>"
    return f"template<typename {spec.typename}>"


def signature(fn: FunctionDescriptor) -> str:
    """Return ``<return type> <name>(<params>)``."""
    params = ", ".join(param_text(p) for p in fn.params)
    return f"{type_text(fn.returns)} {fn.name}({params})"


def render_function(fn: FunctionDescriptor) -> str:
    """Render the full declaration, body copied verbatim."""
    lines: list[str] = []
    if fn.template is not None:
        lines.append(template_text(fn.template))
    lines.append(signature(fn) + " {")
    lines.append(fn.body)
    lines.append("};")
    return "\n".join(lines)


def render_namespace(functions: Iterable[FunctionDescriptor], namespace: str = "c6") -> str:
    """Wrap rendered functions in a namespace block.

    Returns an empty string when there is nothing to render.
    """
    rendered = [render_function(fn) for fn in functions]
    if not rendered:
        return ""
    return f"namespace {namespace} {{\n" + "\n".join(rendered) + "\n};\n"
