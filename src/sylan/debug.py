"""--debug token dump to stderr."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from sylan.tokens import Position, Token, TokenKind, line_and_column

_QUOTED = frozenset(
    {TokenKind.CHAR, TokenKind.COMMENT, TokenKind.STRING, TokenKind.INTERPOLATED_STRING}
)


def format_token(token: Token) -> str:
    """Canonical form, with string-like payloads quoted so whitespace stays visible."""
    if token.kind in _QUOTED:
        return f"{token.kind.value}({token.value!r})"
    return str(token)


def dump_tokens(
    tokens: Iterable[tuple[Position, Token]],
    source: str,
    *,
    file: TextIO = sys.stderr,
) -> None:
    """Print one line per token: line:column, offset, and the token itself."""
    for start, token in tokens:
        line, col = line_and_column(source, start.offset)
        file.write(f"{line:>4}:{col:<4} @{start.offset:<6} {format_token(token)}\n")
