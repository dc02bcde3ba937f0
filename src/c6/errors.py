"""Error types with formatted source context."""

from __future__ import annotations

from pathlib import Path

from c6.tokens import Position, position_at


def source_line(source: str, line: int) -> str:
    """Return 1-based *line* of *source* without its line ending ("" if absent)."""
    lines = source.splitlines()
    if 1 <= line <= len(lines):
        return lines[line - 1]
    return ""


def render_report(
    message: str,
    position: Position,
    source: str,
    filename: str,
    notes: tuple[str, ...] = (),
) -> str:
    """Render a rustc-style report underlining from *position* to end of line."""
    text = source_line(source, position.line)
    width = len(str(position.line)) + 1
    gutter = " " * width + "|"
    carets = "^" * max(1, len(text) - position.column + 1)

    out = [
        f"error: {message}",
        f"{' ' * width}--> {filename}:{position.line}:{position.column}",
        gutter,
        f"{position.line:>{width - 1}} | {text}",
        f"{gutter} {' ' * (position.column - 1)}{carets}",
    ]
    out.extend(f"{' ' * width}= note: {note}" for note in notes)
    return "\n".join(out)


class InputNotFound(Exception):
    """Raised when the input path does not name a readable file."""

    def __init__(self, path: Path, reason: str = "does not exist") -> None:
        self.path = path
        self.reason = reason
        super().__init__(self.format())

    def format(self) -> str:
        return f"error: the file at {self.path} {self.reason}"


class WrongExtension(Exception):
    """Raised when the input path does not end in the dialect's extension."""

    def __init__(self, path: Path, expected: str = ".c6") -> None:
        self.path = path
        self.expected = expected
        super().__init__(self.format())

    def format(self) -> str:
        return (
            f"error: {self.path} is not a `{self.expected}` file\n"
            f"  = help: rename the input or pass a C6 source file"
        )


class MalformedTemplateParameter(Exception):
    """Raised when a shorthand generic parameter does not fit the grammar."""

    def __init__(self, message: str, parameter: str, position: Position, source: str) -> None:
        self.message = message
        self.parameter = parameter
        self.position = position
        self.source = source
        super().__init__(self.format())

    def relocated(self, skip: int, source: str) -> MalformedTemplateParameter:
        """Return a copy reported against *source*, which starts *skip* chars later."""
        position = position_at(source, self.position.offset - skip)
        return MalformedTemplateParameter(self.message, self.parameter, position, source)

    def format(self, filename: str = "input.c6") -> str:
        notes = (
            "expected `[kind] name [<args>] [requires Constraint] [= default]`",
        )
        return render_report(self.message, self.position, self.source, filename, notes)
