"""Lexical front end for the Sylan programming language."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sylan.cursor import TokenCursor

__version__ = "0.1.0"


def lex(source: bytes | str) -> TokenCursor:
    """Lex a whole source and return a cursor at the start of its tokens."""
    from sylan.cursor import TokenCursor
    from sylan.lexer import tokenize

    return TokenCursor.start(tokenize(source))
