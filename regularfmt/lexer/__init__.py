"""Lexer."""

from regularfmt.lexer.lexer import Lexer
from regularfmt.lexer.tokens import (
    KEYWORDS,
    PRECEDENCE,
    SINGLE_ESCAPES,
    Token,
    TokenKind,
    is_binary_operator,
    is_keyword,
    precedence,
)

__all__ = [
    "KEYWORDS",
    "PRECEDENCE",
    "SINGLE_ESCAPES",
    "Lexer",
    "Token",
    "TokenKind",
    "is_binary_operator",
    "is_keyword",
    "precedence",
]
