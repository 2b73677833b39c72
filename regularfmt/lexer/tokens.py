"""Lexer tokens."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Final

from regularfmt.text import EMPTY_LOC, SourceLoc


class TokenKind(IntEnum):
    EOS = 1
    SIGN = 2
    STRING = 3
    TEXT = 4  # content of a text statement
    NUMBER = 5
    NAME = 6  # identifier containing `-`, used for tag and attribute names
    IDENTIFIER = 7
    KEYWORD = 8
    BOOL = 9
    NULL = 10
    UNDEFINED = 11


PRECEDENCE: Final[dict[str, int]] = {
    "+": 13,
    "-": 13,
    "*": 14,
    "/": 14,
    "%": 14,
    "<=": 11,
    ">=": 11,
    "<": 11,
    ">": 11,
    "==": 10,
    "===": 10,
    "!=": 10,
    "!==": 10,
    "&&": 6,
    "||": 5,
}
"""Binary operator precedence; every operator is left-associative."""

KEYWORDS: Final[frozenset[str]] = frozenset({"if", "elseif", "list", "as", "by", "else"})

SINGLE_ESCAPES: Final[frozenset[str]] = frozenset({"'", '"', "\\", "b", "f", "n", "r", "t", "v", "0"})

# Characters that always lex as a one-character sign.
SIMPLE_SIGNS: Final[frozenset[str]] = frozenset("+-*%/(){}[]?:,.#@")


def is_binary_operator(value: str) -> bool:
    return value in PRECEDENCE


def precedence(value: str) -> int:
    return PRECEDENCE.get(value, -1)


def is_keyword(value: str) -> bool:
    return value in KEYWORDS


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexed token.

    String tokens keep their escape sequences verbatim in `value` and record the
    opening quote character in `quote`. Equality ignores location and quote.
    """

    kind: TokenKind
    value: str = ""
    loc: SourceLoc = field(default=EMPTY_LOC, compare=False)
    quote: str = field(default="", compare=False)

    def match_sign(self, sign: str) -> bool:
        return self.kind == TokenKind.SIGN and self.value == sign

    def match_keyword(self, keyword: str) -> bool:
        return self.kind == TokenKind.KEYWORD and self.value == keyword

    @property
    def is_binary(self) -> bool:
        return self.kind == TokenKind.SIGN and is_binary_operator(self.value)

    @property
    def precedence(self) -> int:
        return precedence(self.value)

    @property
    def is_eos(self) -> bool:
        return self.kind == TokenKind.EOS
