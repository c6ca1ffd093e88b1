"""Minimal LSP server for Sylan, publishing lexing diagnostics only."""

from __future__ import annotations

import logging

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

from sylan import __version__
from sylan.errors import LexError, NoTokenError
from sylan.lexer import tokenize

logger = logging.getLogger(__name__)

server = LanguageServer("sylan-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _diagnostic(exc: LexError, message: str, severity: DiagnosticSeverity) -> Diagnostic:
    line = exc.line - 1
    col = exc.column - 1
    return Diagnostic(
        range=Range(
            start=Position(line=line, character=col),
            end=Position(line=line, character=col + 1),
        ),
        message=message,
        severity=severity,
        source="sylan",
    )


def lex_diagnostics(source: str) -> list[Diagnostic]:
    """Lex *source* and return a diagnostic for the first failure, if any."""
    try:
        tokenize(source.encode("latin-1", errors="replace"))
    except NoTokenError as exc:
        # Points at the start of the literal that ran into end of input
        return [_diagnostic(exc, "unterminated literal at end of input", DiagnosticSeverity.Warning)]
    except LexError as exc:
        return [_diagnostic(exc, exc.message, DiagnosticSeverity.Error)]
    return []


def _validate(ls: LanguageServer, uri: str) -> None:
    """Lex the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics = lex_diagnostics(doc.source)
    logger.debug("%s: %d diagnostic(s)", uri, len(diagnostics))
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
