"""Lexer."""

from collections.abc import Callable, Iterator
from typing import NoReturn

from regularfmt.diagnostics.codes import (
    LEXER_UNEXPECTED_CHAR,
    LEXER_UNTERMINATED_STRING,
    DiagnosticSpec,
)
from regularfmt.diagnostics.errors import LexError
from regularfmt.lexer.tokens import (
    SIMPLE_SIGNS,
    SINGLE_ESCAPES,
    Token,
    TokenKind,
    is_keyword,
)
from regularfmt.text import EOL, EOS, Position, Source, SourceLoc


class Lexer:
    """Tokenizer over a `Source`.

    The lexer has no mode of its own: the parser decides whether whitespace is
    skipped (`next`) or free text is read as one token (`read_text`).
    """

    def __init__(self, source: Source) -> None:
        self._src = source

    @property
    def source(self) -> Source:
        return self._src

    @property
    def pos(self) -> Position:
        return self._src.pos

    @property
    def loc(self) -> SourceLoc:
        pos = self.pos
        return SourceLoc(self._src.file, pos, pos)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next()
            if token.is_eos:
                return
            yield token

    def next(self, skip_whitespace: bool = True) -> Token:
        if skip_whitespace:
            self.skip_whitespace()
        c = self._src.peek()
        if c == EOS:
            return Token(TokenKind.EOS, "", self.loc)
        if _is_id_start(c):
            return self._read_identifier()
        if _is_digit(c):
            return self._read_number()
        if c == "'" or c == '"':
            return self._read_string()
        sign = self._read_sign()
        if sign is not None:
            return sign
        return self.read_text()

    def peek(self) -> Token:
        """Next token after skipping whitespace, without consuming anything."""
        self._src.push_pos()
        try:
            return self.next()
        finally:
            self._src.restore_pos()

    def ahead_is_char(self, c: str) -> bool:
        return self._src.peek() == c

    def ahead_is_eos(self) -> bool:
        return self._src.peek() == EOS

    def ahead(self, count: int) -> str:
        return self._src.peek(count)

    def read_text(self) -> Token:
        """Read free text up to the next unescaped `<` or `{`.

        A backslash and the character after it are kept verbatim.
        """
        loc = self.loc
        chars: list[str] = []
        while True:
            c = self._src.peek()
            if c == EOS or c == "<" or c == "{":
                break
            if c == "\\":
                chars.append(self._src.read(2).removesuffix(EOS))
                continue
            chars.append(self._src.read())
        return self._finish(TokenKind.TEXT, loc, "".join(chars))

    def skip_whitespace(self) -> str:
        chars: list[str] = []
        while _is_whitespace(self._src.peek()):
            chars.append(self._src.read())
        return "".join(chars)

    def _finish(self, kind: TokenKind, loc: SourceLoc, value: str, quote: str = "") -> Token:
        return Token(kind, value, loc.with_end(self.pos), quote)

    def _read_identifier(self) -> Token:
        loc = self.loc
        chars: list[str] = []
        is_name = False
        while True:
            c = self._src.peek()
            if _is_id_part(c):
                chars.append(self._src.read())
            elif c == "-":
                chars.append(self._src.read())
                is_name = True
            else:
                break
        value = "".join(chars)
        if is_name:
            kind = TokenKind.NAME
        elif is_keyword(value):
            kind = TokenKind.KEYWORD
        elif value in ("true", "false"):
            kind = TokenKind.BOOL
        elif value == "null":
            kind = TokenKind.NULL
        elif value == "undefined":
            kind = TokenKind.UNDEFINED
        else:
            kind = TokenKind.IDENTIFIER
        return self._finish(kind, loc, value)

    def _read_digits(self, predicate: Callable[[str], bool] | None = None) -> str:
        predicate = predicate or _is_digit
        chars: list[str] = []
        while predicate(self._src.peek()):
            chars.append(self._src.read())
        return "".join(chars)

    def _read_number(self) -> Token:
        loc = self.loc
        if self._src.peek(2) in ("0x", "0X"):
            prefix = self._src.read(2)
            digits = self._read_digits(_is_hex_digit)
            if not digits:
                self._raise_unexpected()
            return self._finish(TokenKind.NUMBER, loc, prefix + digits)

        parts: list[str] = []
        first = self._src.read()
        parts.append(first if first == "0" else first + self._read_digits())
        ahead = self._src.peek(2)
        if ahead[0] == "." and _is_digit(ahead[1:]):
            parts.append(self._src.read())
            parts.append(self._read_digits())
        if self._src.peek() in ("e", "E"):
            parts.append(self._src.read())
            if self._src.peek() in ("+", "-"):
                parts.append(self._src.read())
            exponent = self._read_digits()
            if not exponent:
                self._raise_unexpected()
            parts.append(exponent)
        return self._finish(TokenKind.NUMBER, loc, "".join(parts))

    def _read_string(self) -> Token:
        loc = self.loc
        quote = self._src.read()
        chars: list[str] = []
        while True:
            c = self._src.peek()
            if c == quote:
                self._src.read()
                break
            if c == EOS:
                self._raise(LEXER_UNTERMINATED_STRING, LEXER_UNTERMINATED_STRING.message)
            if c == "\\":
                chars.append(self._read_escape())
            else:
                chars.append(self._src.read())
        return self._finish(TokenKind.STRING, loc, "".join(chars), quote)

    def _read_escape(self) -> str:
        chars = [self._src.read()]
        c = self._src.read()
        chars.append(c)
        if c in SINGLE_ESCAPES:
            return "".join(chars)
        match c:
            case "x":
                width = 2
            case "u":
                width = 4
            case _:
                self._raise_unexpected()
        for _ in range(width):
            c = self._src.read()
            if not _is_hex_digit(c):
                self._raise_unexpected()
            chars.append(c)
        return "".join(chars)

    def _read_sign(self) -> Token | None:
        loc = self.loc
        c = self._src.peek()
        match c:
            case "<" | ">" | "=" | "!":
                self._src.read()
                if self.ahead_is_char("="):
                    value = c + self._src.read()
                    if value in ("==", "!=") and self.ahead_is_char("="):
                        value += self._src.read()
                    return self._finish(TokenKind.SIGN, loc, value)
                return self._finish(TokenKind.SIGN, loc, c)
            case "|":
                self._src.read()
                if self.ahead_is_char("|"):
                    return self._finish(TokenKind.SIGN, loc, c + self._src.read())
                return self._finish(TokenKind.SIGN, loc, c)
            case "&":
                self._src.read()
                if not self.ahead_is_char("&"):
                    self._raise_unexpected()
                return self._finish(TokenKind.SIGN, loc, c + self._src.read())
            case _ if c in SIMPLE_SIGNS:
                self._src.read()
                return self._finish(TokenKind.SIGN, loc, c)
        return None

    def _raise_unexpected(self) -> NoReturn:
        ch = self._src.ch
        self._raise(LEXER_UNEXPECTED_CHAR, f"{LEXER_UNEXPECTED_CHAR.message} {ch!r}")

    def _raise(self, spec: DiagnosticSpec, message: str) -> NoReturn:
        raise LexError(message, self.loc, spec)


def _is_whitespace(c: str) -> bool:
    return c == " " or c == EOL or c == "\t"


def _is_letter(c: str) -> bool:
    return ("a" <= c <= "z") or ("A" <= c <= "Z")


def _is_id_start(c: str) -> bool:
    return _is_letter(c) or c == "_" or c == "$"


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def _is_hex_digit(c: str) -> bool:
    return _is_digit(c) or ("a" <= c <= "f") or ("A" <= c <= "F")


def _is_id_part(c: str) -> bool:
    return _is_id_start(c) or _is_digit(c)
