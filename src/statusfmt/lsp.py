"""Minimal LSP server for template files: diagnostics only.

A template file holds one format template per line; blank lines are ignored.
"""

from __future__ import annotations

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

from statusfmt import __version__
from statusfmt.chars import split_lines
from statusfmt.errors import ParseError
from statusfmt.parser import parse

server = LanguageServer(
    "statusfmt-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _diagnostic(exc: ParseError, line_idx: int) -> Diagnostic:
    # Templates are parsed one line at a time, so error lines are relative
    line = line_idx + exc.position.line - 1
    col = exc.position.column - 1
    return Diagnostic(
        range=Range(
            start=Position(line=line, character=col),
            end=Position(line=line, character=col + 1),
        ),
        message=exc.message,
        severity=DiagnosticSeverity.Error,
        source="statusfmt",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Parse every template line and publish one diagnostic per failing line."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics: list[Diagnostic] = []

    for line_idx, text in enumerate(split_lines(doc.source)):
        if not text.strip():
            continue
        try:
            parse(text)
        except ParseError as exc:
            diagnostics.append(_diagnostic(exc, line_idx))

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
