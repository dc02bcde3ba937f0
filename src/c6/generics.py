"""Rewrite shorthand generic declarations into C++ template syntax.

    class Box<T requires Comparable, U = int> {

becomes

    template<typename T, typename U = int>
    requires Comparable
    class Box {
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from c6.errors import MalformedTemplateParameter
from c6.tokens import Position, position_at

_NAME = r"[A-Za-z_][A-Za-z0-9_]*"
# Template argument list, possibly nested: <typename, int>
_ARGS = r"<[A-Za-z0-9_.:/;<>, ]*>"
_CONSTRAINT = r"[A-Za-z_<>][A-Za-z0-9_:<>]*"
_VALUE = rf"-?[A-Za-z0-9_.:/;<>]+(?:{_ARGS})?"

_PARAMETER = re.compile(
    rf"(?:(?P<kind>{_NAME})\s+)?(?P<name>{_NAME})(?P<args>{_ARGS})?"
    rf"(?:\s+requires\s+(?P<constraint>{_CONSTRAINT}))?"
    rf"(?:\s*=\s*(?P<default>{_VALUE}))?"
)

_DECLARATION = re.compile(
    rf"\b(?P<keyword>class|struct)\s+(?P<name>{_NAME})\s*<(?P<params>[^\n]*?)>\s*\{{"
)

# An explicit template header right before the declaration (partial specialization)
_TEMPLATE_TAIL = re.compile(r"\btemplate\s*<[^\n]*>\s*$")

_RESERVED = frozenset({"class", "struct", "typename", "requires", "template"})
_BAD_KINDS = _RESERVED - {"class", "typename"}


@dataclass(frozen=True, slots=True)
class GenericParameter:
    """One parameter of a shorthand generic declaration."""

    raw: str
    name: str
    kind: str | None = None
    args: str | None = None
    constraint: str | None = None
    default: str | None = None

    @property
    def is_class(self) -> bool:
        return self.kind == "class"

    @property
    def is_template_class(self) -> bool:
        """True for template template parameters: ``class C<typename>``."""
        return self.is_class and self.args is not None

    @property
    def is_typename(self) -> bool:
        return self.kind is None or self.kind == "typename"

    def render(self) -> str:
        if self.is_template_class:
            text = f"template{self.args} class {self.name}"
        elif self.is_class:
            text = f"class {self.name}"
        elif self.is_typename:
            text = f"typename {self.name}"
        else:
            # Non-type parameter: int N
            text = f"{self.kind} {self.name}"
        if self.default is not None:
            text += f" = {self.default}"
        return text


@dataclass(frozen=True, slots=True)
class TemplateHeader:
    """A rewritten declaration head: template line, requires line, class line."""

    keyword: str
    name: str
    params: tuple[GenericParameter, ...]

    @property
    def constraints(self) -> list[str]:
        return [p.constraint for p in self.params if p.constraint is not None]

    def render(self) -> str:
        text = "template<" + ", ".join(p.render() for p in self.params) + ">\n"
        if self.constraints:
            text += "requires " + " && ".join(self.constraints) + "\n"
        return text + f"{self.keyword} {self.name} {{"


def split_parameters(text: str) -> list[str]:
    """Split a parameter list on commas that are not inside angle brackets."""
    items: list[str] = []
    depth = 0
    current: list[str] = []
    for ch in text:
        if ch == "<":
            depth += 1
        elif ch == ">" and depth > 0:
            depth -= 1
        elif ch == "," and depth == 0:
            items.append("".join(current).strip())
            current = []
            continue
        current.append(ch)
    items.append("".join(current).strip())
    return items


def parse_parameter(
    raw: str,
    position: Position | None = None,
    source: str = "",
) -> GenericParameter:
    """Validate one parameter against the shorthand grammar.

    ``[kind] name [<args>] [requires Constraint] [= default]``
    """
    if position is None:
        position = Position(1, 1, 0)
        source = source or raw

    if not raw:
        raise MalformedTemplateParameter("empty template parameter", raw, position, source)

    m = _PARAMETER.fullmatch(raw)
    if m is None or m["name"] in _RESERVED or m["kind"] in _BAD_KINDS:
        raise MalformedTemplateParameter(
            f"invalid syntax for template parameter '{raw}'", raw, position, source
        )

    return GenericParameter(
        raw=raw,
        name=m["name"],
        kind=m["kind"],
        args=m["args"],
        constraint=m["constraint"],
        default=m["default"],
    )


def parse_declaration(m: re.Match[str], source: str) -> TemplateHeader:
    """Build the TemplateHeader for one matched shorthand declaration."""
    position = position_at(source, m.start())
    params = tuple(
        parse_parameter(raw, position, source) for raw in split_parameters(m["params"])
    )
    return TemplateHeader(m["keyword"], m["name"], params)


def rewrite_generics(text: str) -> str:
    """Rewrite every shorthand generic declaration in *text*.

    Raises MalformedTemplateParameter on the first invalid parameter; no
    partial output is produced.
    """

    def _replace(m: re.Match[str]) -> str:
        statement_start = max(text.rfind(c, 0, m.start()) for c in ";{}") + 1
        if _TEMPLATE_TAIL.search(text, statement_start, m.start()):
            return m.group(0)
        return parse_declaration(m, text).render()

    return _DECLARATION.sub(_replace, text)
