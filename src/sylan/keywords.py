"""Reserved words and the keyword table."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType

from sylan.tokens import TokenKind


class Keyword(Enum):
    ABSTRACT = "abstract"
    ACTOR = "actor"
    CASE = "case"
    CLASS = "class"
    CONTINUE = "continue"
    DEFAULT = "default"
    DO = "do"
    ELSE = "else"
    EXTENDS = "extends"
    FOR = "for"
    GET = "get"
    IF = "if"
    IMPLEMENTS = "implements"
    IMPORT = "import"
    INTERFACE = "interface"
    INTERNAL = "internal"
    OVERRIDE = "override"
    PACKAGE = "package"
    PUBLIC = "public"
    RECEIVE = "receive"
    SELECT = "select"
    SUPER = "super"
    SWITCH = "switch"
    THROW = "throw"
    TIMEOUT = "timeout"
    UNDERSCORE = "_"
    VAR = "var"

    @classmethod
    def parse(cls, word: str) -> Keyword | None:
        """Return the keyword spelled *word*, or None for a plain identifier."""
        return _BY_LEXEME.get(word)

    def __str__(self) -> str:
        return self.value


_BY_LEXEME = MappingProxyType({kw.value: kw for kw in Keyword})

KEYWORD_TOKENS = MappingProxyType(
    {
        Keyword.ABSTRACT: TokenKind.ABSTRACT,
        Keyword.ACTOR: TokenKind.ACTOR,
        Keyword.CASE: TokenKind.CASE,
        Keyword.CLASS: TokenKind.CLASS,
        Keyword.CONTINUE: TokenKind.CONTINUE,
        Keyword.DEFAULT: TokenKind.DEFAULT,
        Keyword.DO: TokenKind.DO,
        Keyword.ELSE: TokenKind.ELSE,
        Keyword.EXTENDS: TokenKind.EXTENDS,
        Keyword.FOR: TokenKind.FOR,
        Keyword.GET: TokenKind.GET,
        Keyword.IF: TokenKind.IF,
        Keyword.IMPLEMENTS: TokenKind.IMPLEMENTS,
        Keyword.IMPORT: TokenKind.IMPORT,
        Keyword.INTERFACE: TokenKind.INTERFACE,
        Keyword.INTERNAL: TokenKind.INTERNAL,
        Keyword.OVERRIDE: TokenKind.OVERRIDE,
        Keyword.PACKAGE: TokenKind.PACKAGE,
        Keyword.PUBLIC: TokenKind.PUBLIC,
        Keyword.RECEIVE: TokenKind.RECEIVE,
        Keyword.SELECT: TokenKind.SELECT,
        Keyword.SUPER: TokenKind.SUPER,
        Keyword.SWITCH: TokenKind.SWITCH,
        Keyword.THROW: TokenKind.THROW,
        Keyword.TIMEOUT: TokenKind.TIMEOUT,
        Keyword.UNDERSCORE: TokenKind.IGNORE,
        Keyword.VAR: TokenKind.VAR,
    }
)


def keyword_kind(word: str) -> TokenKind | None:
    """Return the token kind for a reserved *word*, or None if it is not reserved."""
    kw = Keyword.parse(word)
    if kw is None:
        return None
    return KEYWORD_TOKENS[kw]
