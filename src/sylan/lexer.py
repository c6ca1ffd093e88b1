"""Sylan lexer: pulls characters from a SourceStream and produces tokens one at a time."""

from __future__ import annotations

import io
import logging
from decimal import Decimal, InvalidOperation
from typing import Iterator

from sylan.errors import LexError, NoTokenError
from sylan.keywords import keyword_kind
from sylan.source import SourceStream
from sylan.tokens import (
    Position,
    Token,
    TokenKind,
    is_digit,
    is_identifier_char,
    is_identifier_start,
    is_whitespace,
)

logger = logging.getLogger(__name__)

# Operators that never combine with the following character
_SINGLE_OPERATORS: dict[str, TokenKind] = {
    ",": TokenKind.SUB_ITEM_SEPARATOR,
    ".": TokenKind.DOT,
    "~": TokenKind.BITWISE_NOT,
    "^": TokenKind.BITWISE_XOR,
    "+": TokenKind.ADD,
    "*": TokenKind.MULTIPLY,
    "/": TokenKind.DIVIDE,
    "%": TokenKind.MODULO,
    ":": TokenKind.COLON,
    "{": TokenKind.OPEN_BRACE,
    "}": TokenKind.CLOSE_BRACE,
    "(": TokenKind.OPEN_PARENTHESES,
    ")": TokenKind.CLOSE_PARENTHESES,
    "[": TokenKind.OPEN_SQUARE_BRACKET,
    "]": TokenKind.CLOSE_SQUARE_BRACKET,
}

# Leading character -> (second character -> pair kind, kind when no pair matches)
_PAIRED_OPERATORS: dict[str, tuple[dict[str, TokenKind], TokenKind]] = {
    "-": ({">": TokenKind.LAMBDA_ARROW}, TokenKind.SUBTRACT),
    "<": (
        {
            "-": TokenKind.BIND,
            "<": TokenKind.SHIFT_LEFT,
            "=": TokenKind.LESS_THAN_OR_EQUALS,
        },
        TokenKind.LESS_THAN,
    ),
    "=": ({"=": TokenKind.EQUALS}, TokenKind.ASSIGN),
    "!": ({"=": TokenKind.NOT_EQUALS}, TokenKind.NOT),
    ">": (
        {">": TokenKind.SHIFT_RIGHT, "=": TokenKind.GREATER_THAN_OR_EQUALS},
        TokenKind.GREATER_THAN,
    ),
    "|": ({"|": TokenKind.OR}, TokenKind.BITWISE_OR),
    "&": ({"&": TokenKind.AND}, TokenKind.BITWISE_AND),
}


class Lexer:
    """Tokenize a Sylan source stream, one token per call.

    ``source`` is the decoded text of the same input; it is only used to
    attach context to error messages.
    """

    def __init__(self, stream: SourceStream, source: str | None = None) -> None:
        self._input = stream
        self._source = source

    @property
    def position(self) -> Position:
        """Position of the underlying stream (after the last consumed character)."""
        return self._input.position

    def has_next(self) -> bool:
        """Skip whitespace and report whether any input remains."""
        self._skip_whitespace()
        return not self._input.is_empty()

    def next_token(self) -> Token:
        """Return the next token, raising NoTokenError if none can be produced."""
        self._skip_whitespace()
        start = self._input.position
        token = self._read_pending()
        if token is None:
            raise NoTokenError(start, self._source)
        logger.debug("token %s at offset %d", token, start.offset)
        return token

    def positioned(self) -> Iterator[tuple[Position, Token]]:
        """Yield each remaining token with the position where it starts."""
        while self.has_next():
            start = self._input.position
            yield start, self.next_token()

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        if not self.has_next():
            raise StopIteration
        return self.next_token()

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _skip_whitespace(self) -> None:
        while True:
            ch = self._input.look_ahead()
            if ch is None or not is_whitespace(ch):
                return
            self._input.read()

    def _second_char_is(self, chars: str) -> bool:
        ahead = self._input.look_ahead(2)
        return ahead is not None and ahead[1] in chars

    def _read_pending(self) -> Token | None:
        ch = self._input.look_ahead()
        if ch is None:
            return None

        if ch == "v" and self._second_char_is("0123456789"):
            return self._lex_version()
        if is_identifier_start(ch):
            return self._lex_word()
        if ch == '"':
            return self._lex_string()
        if ch == "$":
            return self._lex_interpolated_string()
        if ch == "'":
            return self._lex_char()
        if is_digit(ch) or (ch in "+-" and self._second_char_is("0123456789")):
            return self._lex_number()
        if ch == "/" and self._second_char_is("*"):
            return self._lex_multi_line_comment()
        if ch == "/" and self._second_char_is("/"):
            return self._lex_single_line_comment()
        return self._lex_operator()

    # ------------------------------------------------------------------
    # Words: booleans, keywords, identifiers
    # ------------------------------------------------------------------

    def _lex_word(self) -> Token:
        chars = [self._input.read()]
        while True:
            ch = self._input.look_ahead()
            if ch is None or not is_identifier_char(ch):
                break
            chars.append(self._input.read())
        word = "".join(chars)

        if word == "true":
            return Token(TokenKind.BOOLEAN, True)
        if word == "false":
            return Token(TokenKind.BOOLEAN, False)
        kind = keyword_kind(word)
        if kind is not None:
            return Token(kind)
        return Token(TokenKind.IDENTIFIER, word)

    # ------------------------------------------------------------------
    # Numbers and versions
    # ------------------------------------------------------------------

    def _lex_version(self) -> Token | None:
        self._input.read()  # consume v
        number = self._lex_absolute_number()
        if number is None:
            return None
        return Token(TokenKind.VERSION, number)

    def _lex_number(self) -> Token | None:
        negative = False
        sign = self._input.look_ahead()
        if sign in ("+", "-"):
            self._input.read()
            negative = sign == "-"
        number = self._lex_absolute_number()
        if number is None:
            return None
        if negative and not number.is_zero():
            number = number.copy_negate()
        return Token(TokenKind.NUMBER, number)

    def _lex_absolute_number(self) -> Decimal | None:
        """Scan digits and dots; the first character is taken unconditionally."""
        start = self._input.position
        first = self._input.read()
        if first is None:
            return None
        chars = [first]
        while True:
            ch = self._input.look_ahead()
            if ch is None or not (is_digit(ch) or ch == "."):
                break
            chars.append(self._input.read())
        text = "".join(chars)
        try:
            return Decimal(text)
        except InvalidOperation:
            raise LexError(f"malformed number literal '{text}'", start, self._source) from None

    # ------------------------------------------------------------------
    # Strings and characters
    # ------------------------------------------------------------------

    def _lex_string(self) -> Token | None:
        self._input.read()  # opening quote
        chars: list[str] = []
        while True:
            ch = self._input.read()
            if ch is None:
                return None
            if ch == '"':
                return Token(TokenKind.STRING, "".join(chars))
            chars.append(ch)

    def _lex_interpolated_string(self) -> Token | None:
        # Interpolation happens in a later stage; lex the whole string for now.
        self._input.read()  # $
        if self._input.look_ahead() != '"':
            return None
        return self._lex_string()

    def _lex_char(self) -> Token | None:
        self._input.read()  # opening quote
        ch = self._input.read()
        if ch is None:
            return None
        if self._input.read() != "'":
            return None
        return Token(TokenKind.CHAR, ch)

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def _lex_single_line_comment(self) -> Token:
        self._input.read(2)  # //
        chars: list[str] = []
        while True:
            ch = self._input.look_ahead()
            if ch is None or ch == "\n":
                break
            chars.append(self._input.read())
        return Token(TokenKind.COMMENT, "".join(chars))

    def _lex_multi_line_comment(self) -> Token | None:
        """Lex a nestable /* ... */ comment; inner delimiters are kept in the text."""
        self._input.read(2)  # /*
        depth = 0
        chars: list[str] = []
        while True:
            pair = self._input.look_ahead(2)
            if pair is None:
                return None
            if pair == "/*":
                self._input.read(2)
                depth += 1
                chars.append(pair)
            elif pair == "*/":
                self._input.read(2)
                if depth == 0:
                    return Token(TokenKind.COMMENT, "".join(chars))
                depth -= 1
                chars.append(pair)
            else:
                chars.append(self._input.read())

    # ------------------------------------------------------------------
    # Operators and punctuation
    # ------------------------------------------------------------------

    def _lex_operator(self) -> Token | None:
        start = self._input.position
        ch = self._input.read()
        if ch is None:
            return None

        kind = _SINGLE_OPERATORS.get(ch)
        if kind is not None:
            return Token(kind)

        paired = _PAIRED_OPERATORS.get(ch)
        if paired is None:
            logger.debug("no operator starts with %r at offset %d", ch, start.offset)
            raise LexError(f"no operator starting with '{ch}' exists", start, self._source)

        completions, fallback = paired
        ahead = self._input.look_ahead()
        if ahead is not None and ahead in completions:
            self._input.read()
            return Token(completions[ahead])
        return Token(fallback)


def tokenize(data: bytes | str) -> list[Token]:
    """Convenience function: lex a whole input and return the token list.

    ``str`` input must be ASCII-range text; it is encoded one byte per character.
    """
    if isinstance(data, str):
        text = data
        data = data.encode("latin-1")
    else:
        text = data.decode("latin-1")
    return list(Lexer(SourceStream(io.BytesIO(data)), text))
