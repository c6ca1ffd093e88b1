"""Token kinds, token values, source positions, and character classification helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


@dataclass(frozen=True, slots=True)
class Position:
    """Newline-aware source position: 0-based row, column and absolute offset.

    A newline character does not move to the next row by itself; it sets
    ``newline_started`` and the *following* update bumps the row and resets
    the column.
    """

    row: int
    column: int
    offset: int
    newline_started: bool = False

    @classmethod
    def start(cls) -> Position:
        return cls(0, 0, 0, False)

    def update(self, ch: str) -> Position:
        """Return the position after consuming the single character *ch*."""
        if self.newline_started:
            row, column = self.row + 1, 0
        else:
            row, column = self.row, self.column + 1
        return Position(row, column, self.offset + 1, ch in "\n\r")

    def advance(self, text: str) -> Position:
        """Return the position after consuming every character of *text*."""
        pos = self
        for ch in text:
            pos = pos.update(ch)
        return pos


class TokenKind(Enum):
    """Every token kind; the value is the canonical name used in textual output."""

    # Valued
    BOOLEAN = "BooleanToken"
    CHAR = "CharToken"
    COMMENT = "Comment"
    IDENTIFIER = "Identifier"
    INTERPOLATED_STRING = "InterpolatedString"
    NUMBER = "NumberToken"
    STRING = "StringToken"
    VERSION = "Version"

    # Keywords
    ABSTRACT = "Abstract"
    ACTOR = "Actor"
    CASE = "Case"
    CLASS = "Class"
    CONTINUE = "Continue"
    DEFAULT = "Default"
    DO = "Do"
    ELSE = "Else"
    EXTENDS = "Extends"
    FOR = "For"
    GET = "Get"
    IF = "If"
    IGNORE = "Ignore"  # _
    IMPLEMENTS = "Implements"
    IMPORT = "Import"
    INTERFACE = "Interface"
    INTERNAL = "Internal"
    OVERRIDE = "OverrideToken"
    PACKAGE = "Package"
    PUBLIC = "Public"
    RECEIVE = "Receive"
    SELECT = "Select"
    SUPER = "Super"
    SWITCH = "Switch"
    THROW = "Throw"
    TIMEOUT = "Timeout"
    VAR = "Var"

    # Operators and punctuation
    ADD = "Add"  # +
    AND = "And"  # &&
    ASSIGN = "Assign"  # =
    BIND = "Bind"  # <-
    BITWISE_AND = "BitwiseAnd"  # &
    BITWISE_NOT = "BitwiseNot"  # ~
    BITWISE_OR = "BitwiseOr"  # |
    BITWISE_XOR = "BitwiseXor"  # ^
    CLOSE_BRACE = "CloseBrace"  # }
    CLOSE_PARENTHESES = "CloseParentheses"  # )
    CLOSE_SQUARE_BRACKET = "CloseSquareBracket"  # ]
    COLON = "Colon"  # :
    DIVIDE = "Divide"  # /
    DOT = "Dot"  # .
    EQUALS = "Equals"  # ==
    GREATER_THAN = "GreaterThan"  # >
    GREATER_THAN_OR_EQUALS = "GreaterThanOrEquals"  # >=
    LAMBDA_ARROW = "LambdaArrow"  # ->
    LESS_THAN = "LessThan"  # <
    LESS_THAN_OR_EQUALS = "LessThanOrEquals"  # <=
    MODULO = "Modulo"  # %
    MULTIPLY = "Multiply"  # *
    NOT = "Not"  # !
    NOT_EQUALS = "NotEquals"  # !=
    OPEN_BRACE = "OpenBrace"  # {
    OPEN_PARENTHESES = "OpenParentheses"  # (
    OPEN_SQUARE_BRACKET = "OpenSquareBracket"  # [
    OR = "Or"  # ||
    SHIFT_LEFT = "ShiftLeft"  # <<
    SHIFT_RIGHT = "ShiftRight"  # >>
    SUB_ITEM_SEPARATOR = "SubItemSeparator"  # ,
    SUBTRACT = "Subtract"  # -

    @property
    def is_valued(self) -> bool:
        return self in _PAYLOAD_TYPES


_PAYLOAD_TYPES: dict[TokenKind, type] = {
    TokenKind.BOOLEAN: bool,
    TokenKind.CHAR: str,
    TokenKind.COMMENT: str,
    TokenKind.IDENTIFIER: str,
    TokenKind.INTERPOLATED_STRING: str,
    TokenKind.NUMBER: Decimal,
    TokenKind.STRING: str,
    TokenKind.VERSION: Decimal,
}


@dataclass(frozen=True, slots=True)
class Token:
    """A lexed token: a kind plus, for valued kinds, exactly one payload."""

    kind: TokenKind
    value: bool | str | Decimal | None = None

    def __post_init__(self) -> None:
        expected = _PAYLOAD_TYPES.get(self.kind)
        if expected is None:
            if self.value is not None:
                raise ValueError(f"{self.kind.value} carries no value, got {self.value!r}")
            return
        if self.value is None:
            raise ValueError(f"{self.kind.value} requires a value")
        if not isinstance(self.value, expected):
            raise TypeError(
                f"{self.kind.value} value must be {expected.__name__}, "
                f"got {type(self.value).__name__}"
            )
        if self.kind is TokenKind.CHAR and len(self.value) != 1:
            raise ValueError(f"CharToken value must be a single character, got {self.value!r}")

    def __str__(self) -> str:
        if self.value is None:
            return self.kind.value
        if isinstance(self.value, bool):
            return f"{self.kind.value}: {'true' if self.value else 'false'}"
        return f"{self.kind.value}: {self.value}"


# Language whitespace: space, \t \n \x0b \x0c \r and the ASCII separators \x1c-\x1f
WHITESPACE = frozenset(" \t\n\x0b\x0c\r\x1c\x1d\x1e\x1f")

DIGITS = frozenset("0123456789")


def is_whitespace(ch: str) -> bool:
    """Return True if ch separates tokens."""
    return ch in WHITESPACE


def is_digit(ch: str) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    return ch in DIGITS


def is_identifier_start(ch: str) -> bool:
    """Return True if ch can begin an identifier or keyword."""
    return ch.isalpha() or ch == "_"


def is_identifier_char(ch: str) -> bool:
    """Return True if ch can continue an identifier (letters and digits only)."""
    return ch.isalpha() or ch in DIGITS


# CRLF, bare CR and LF each end one line
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def source_lines(source: str) -> list[str]:
    """Split *source* into lines without their terminators."""
    return _LINE_BREAK.split(source)


def line_and_column(source: str, offset: int) -> tuple[int, int]:
    """Return the 1-based (line, column) of the character at *offset* in *source*."""
    offset = min(offset, len(source))
    line, line_start = 1, 0
    for match in _LINE_BREAK.finditer(source, 0, offset):
        line += 1
        line_start = match.end()
    return line, offset - line_start + 1
