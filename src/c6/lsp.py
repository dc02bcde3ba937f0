"""Minimal LSP server for C6: diagnostics only."""

from __future__ import annotations

import argparse
import tomllib
from pathlib import Path

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer
from pygls.uris import to_fs_path

from c6 import __version__
from c6.assemble import compile_source
from c6.catalog import DEFAULT_CATALOG, Catalog
from c6.cli import header_rules, load_config
from c6.errors import MalformedTemplateParameter, source_line

server = LanguageServer("c6-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def catalog_for_document(uri: str) -> Catalog:
    """Return the catalog extended by the c6.toml next to the document, if any.

    Raises argparse.ArgumentTypeError or tomllib.TOMLDecodeError for a bad config.
    """
    path = to_fs_path(uri)
    if path is None:
        return DEFAULT_CATALOG
    extra = header_rules(load_config(None, Path(path).parent))
    if extra:
        return DEFAULT_CATALOG.with_headers(extra)
    return DEFAULT_CATALOG


def _validate(ls: LanguageServer, uri: str) -> None:
    """Run the C6 pipeline and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics: list[Diagnostic] = []

    try:
        catalog = catalog_for_document(uri)
    except (argparse.ArgumentTypeError, tomllib.TOMLDecodeError) as exc:
        catalog = DEFAULT_CATALOG
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=0, character=0),
                    end=Position(line=0, character=1),
                ),
                message=f"c6.toml ignored: {exc}",
                severity=DiagnosticSeverity.Warning,
                source="c6",
            )
        )

    try:
        compile_source(doc.source, catalog)
    except MalformedTemplateParameter as exc:
        line = exc.position.line - 1
        col = exc.position.column - 1
        end_col = len(source_line(exc.source, exc.position.line))
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=line, character=col),
                    end=Position(line=line, character=max(end_col, col + 1)),
                ),
                message=exc.message,
                severity=DiagnosticSeverity.Error,
                source="c6",
            )
        )

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
