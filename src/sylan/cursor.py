"""Immutable cursor over a fully lexed token sequence, for backtracking parsers."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import NamedTuple

from sylan.tokens import Token


@dataclass(frozen=True, slots=True)
class TokenCursor:
    """A position in a shared, immutable token tuple.

    Reading never mutates the cursor; it returns a new cursor further along.
    Every descendant cursor shares the same tuple object.
    """

    tokens: tuple[Token, ...] = field(repr=False)
    position: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.position <= len(self.tokens):
            raise ValueError(
                f"cursor position {self.position} outside 0..{len(self.tokens)}"
            )

    @classmethod
    def start(cls, tokens: Iterable[Token]) -> TokenCursor:
        if not isinstance(tokens, tuple):
            tokens = tuple(tokens)
        return cls(tokens, 0)

    @property
    def remaining(self) -> int:
        return len(self.tokens) - self.position

    @property
    def at_end(self) -> bool:
        return self.position == len(self.tokens)

    def read(self, n: int = 1) -> TokenTraversal | None:
        """Consume *n* tokens; None if fewer than *n* remain."""
        if n <= 0:
            return TokenTraversal(self, ())
        end = self.position + n
        if end > len(self.tokens):
            return None
        return TokenTraversal(TokenCursor(self.tokens, end), self.tokens[self.position : end])

    def look_ahead(self, n: int = 1) -> tuple[Token, ...] | None:
        """Return the next *n* tokens without advancing; None if fewer remain."""
        if n <= 0:
            return ()
        end = self.position + n
        if end > len(self.tokens):
            return None
        return self.tokens[self.position : end]

    def peek(self) -> Token | None:
        """Return the next token without advancing, or None at the end."""
        if self.at_end:
            return None
        return self.tokens[self.position]


class TokenTraversal(NamedTuple):
    """Result of a cursor read: the advanced cursor and the tokens consumed."""

    cursor: TokenCursor
    tokens: tuple[Token, ...]
