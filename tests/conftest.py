"""Shared test fixtures and helpers."""

from __future__ import annotations

import io

import pytest

from sylan.lexer import Lexer, tokenize
from sylan.source import SourceStream
from sylan.tokens import Token, TokenKind


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns the token list."""

    def _lex(source: str) -> list[Token]:
        return tokenize(source)

    return _lex


@pytest.fixture
def make_lexer():
    """Return a helper that builds a pull-based Lexer over source text."""

    def _make(source: str) -> Lexer:
        return Lexer(SourceStream(io.BytesIO(source.encode("latin-1"))), source)

    return _make


@pytest.fixture
def stream():
    """Return a helper that wraps source text in a SourceStream."""

    def _stream(source: str) -> SourceStream:
        return SourceStream(io.BytesIO(source.encode("latin-1")))

    return _stream


def assert_kinds(tokens: list[Token], expected: list[TokenKind]) -> None:
    """Assert that the token kinds match the expected list."""
    actual = [t.kind for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[object]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
