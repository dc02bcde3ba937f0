"""C6 scanner: splits source text into code tokens, skipping comments.

String and character literals survive as single tokens, delimiters
included. Whitespace never appears inside a token.
"""

from __future__ import annotations

from c6.tokens import STRING_DELIMITERS, ScanState, is_word_char


class Scanner:
    """Tokenize C6 (or C++) source text into a list of token strings."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._state = ScanState.CODE
        self._pending: list[str] = []
        self._tokens: list[str] = []
        # Code sub-state: accumulating a word (True) or a symbol run (False)
        self._word = False
        self._delimiter = '"'
        self._escaped = False

    def scan(self) -> list[str]:
        """Scan the full source and return the cleaned token list."""
        while self._pos < len(self._source):
            if self._state == ScanState.CODE:
                self._scan_code()
            elif self._state == ScanState.STRING_LITERAL:
                self._scan_string()
            elif self._state == ScanState.LINE_COMMENT:
                self._scan_line_comment()
            else:
                self._scan_block_comment()

        # Unterminated strings run to end of input and still count
        self._flush()
        return [tok for tok in ("".join(t.split()) for t in self._tokens) if tok]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        return ch

    def _flush(self) -> None:
        if self._pending:
            self._tokens.append("".join(self._pending))
            self._pending = []

    # ------------------------------------------------------------------
    # States
    # ------------------------------------------------------------------

    def _scan_code(self) -> None:
        ch = self._peek()

        if ch in STRING_DELIMITERS:
            self._flush()
            self._delimiter = ch
            self._escaped = False
            self._pending.append(self._advance())
            self._state = ScanState.STRING_LITERAL
            return

        if ch == "/" and self._peek(1) == "/":
            self._flush()
            self._pos += 2
            self._state = ScanState.LINE_COMMENT
            return

        if ch == "/" and self._peek(1) == "*":
            self._flush()
            self._pos += 2
            self._state = ScanState.BLOCK_COMMENT
            return

        word = is_word_char(ch)
        if word != self._word:
            self._flush()
            self._word = word
        self._pending.append(self._advance())

    def _scan_string(self) -> None:
        ch = self._advance()
        self._pending.append(ch)

        if ch == self._delimiter and not self._escaped and len(self._pending) > 1:
            self._flush()
            self._state = ScanState.CODE
        elif ch == "\\" and not self._escaped:
            self._escaped = True
        else:
            self._escaped = False

    def _scan_line_comment(self) -> None:
        # The newline itself belongs to code again
        if self._peek() == "\n":
            self._state = ScanState.CODE
            return
        self._pos += 1

    def _scan_block_comment(self) -> None:
        if self._peek() == "*" and self._peek(1) == "/":
            self._pos += 2
            self._state = ScanState.CODE
            return
        self._pos += 1


def scan(source: str) -> list[str]:
    """Convenience function: scan source and return token strings."""
    return Scanner(source).scan()
