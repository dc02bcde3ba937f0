"""Tests for the LSP server: diagnostic generation."""

from __future__ import annotations

from pathlib import Path

import pytest
from lsprotocol.types import (
    DiagnosticSeverity,
    PublishDiagnosticsParams,
    TextDocumentItem,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer
from pygls.workspace import Workspace

from c6.catalog import DEFAULT_CATALOG
from c6.lsp import _validate, catalog_for_document


@pytest.fixture
def lsp_env():
    """Create a LanguageServer with an initialized workspace and captured diagnostics."""
    ls = LanguageServer("test", "v0", text_document_sync_kind=TextDocumentSyncKind.Full)
    ws = Workspace(None)
    ls.protocol._workspace = ws

    published: list[PublishDiagnosticsParams] = []
    ls.text_document_publish_diagnostics = lambda params: published.append(params)

    def put(source: str, uri: str = "file:///test.c6") -> None:
        ws.put_text_document(TextDocumentItem(uri=uri, language_id="c6", version=0, text=source))

    return ls, published, put


# ---------------------------------------------------------------------------
# Malformed template parameters → Error severity
# ---------------------------------------------------------------------------


class TestMalformedTemplate:
    def test_bad_parameter(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("class Box<1bad> {\n};\n")
        _validate(ls, "file:///test.c6")

        assert len(published) == 1
        diags = published[0].diagnostics
        assert len(diags) == 1
        d = diags[0]
        assert d.severity == DiagnosticSeverity.Error
        assert "1bad" in d.message
        assert d.source == "c6"
        assert d.range.start.line == 0
        assert d.range.start.character == 0
        assert d.range.end.character == len("class Box<1bad> {")

    def test_position_ignores_synthesized_prefix(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("int r = randint(1, 2);\n  class Box<T,> {};\n")
        _validate(ls, "file:///test.c6")

        d = published[0].diagnostics[0]
        # Line 2 (1-based) → LSP line 1 (0-based), after two spaces
        assert d.range.start.line == 1
        assert d.range.start.character == 2


# ---------------------------------------------------------------------------
# Clean document → empty diagnostics
# ---------------------------------------------------------------------------


class TestCleanDocument:
    def test_valid_document(self, lsp_env) -> None:
        ls, published, put = lsp_env
        put("class Box<T> {\n    T value;\n};\nint main() { println(1); }\n")
        _validate(ls, "file:///test.c6")

        assert len(published) == 1
        assert published[0].diagnostics == []


# ---------------------------------------------------------------------------
# c6.toml next to the document
# ---------------------------------------------------------------------------


class TestDocumentConfig:
    def test_config_extends_catalog(self, tmp_path: Path) -> None:
        (tmp_path / "c6.toml").write_text('[headers]\n"<fmt/core.h>" = ["format"]\n')
        catalog = catalog_for_document((tmp_path / "doc.c6").as_uri())
        rules = {rule.directive: rule.triggers for rule in catalog.headers}
        assert rules["<fmt/core.h>"] == ("format",)

    def test_no_config_uses_default(self, tmp_path: Path) -> None:
        assert catalog_for_document((tmp_path / "doc.c6").as_uri()) is DEFAULT_CATALOG

    def test_broken_config_warns(self, lsp_env, tmp_path: Path) -> None:
        ls, published, put = lsp_env
        (tmp_path / "c6.toml").write_text("[headers\n")
        uri = (tmp_path / "doc.c6").as_uri()
        put("int main() { println(1); }\n", uri)
        _validate(ls, uri)

        diags = published[0].diagnostics
        assert len(diags) == 1
        assert diags[0].severity == DiagnosticSeverity.Warning
        assert diags[0].message.startswith("c6.toml ignored:")

    def test_invalid_entry_warns_and_still_checks_templates(self, lsp_env, tmp_path: Path) -> None:
        ls, published, put = lsp_env
        (tmp_path / "c6.toml").write_text('[headers]\n"<x>" = "y"\n')
        uri = (tmp_path / "doc.c6").as_uri()
        put("class Box<1bad> {\n};\n", uri)
        _validate(ls, uri)

        severities = [d.severity for d in published[0].diagnostics]
        assert severities == [DiagnosticSeverity.Warning, DiagnosticSeverity.Error]
