"""Recursive-descent template parser with precedence climbing for expressions."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final, NoReturn

from regularfmt.ast import (
    ArrayExpression,
    BinaryExpression,
    BooleanLiteral,
    CallExpression,
    CommentStatement,
    Expression,
    ExprStatement,
    Identifier,
    IfStatement,
    ListStatement,
    MemberExpression,
    NullLiteral,
    NumberLiteral,
    ObjectExpression,
    ObjectProperty,
    OnceExpression,
    ParenExpression,
    PipeExpression,
    Program,
    Statement,
    StringLiteral,
    TagAttr,
    TagStatement,
    TernaryExpression,
    TextStatement,
    UnaryExpression,
    UndefinedLiteral,
)
from regularfmt.diagnostics.codes import (
    PARSER_FORBIDDEN_INTERPOLATION,
    PARSER_IMBALANCED_TAG,
    PARSER_MISPLACED_COMMAND,
    PARSER_UNCLOSED_COMMAND,
    PARSER_UNCLOSED_TAG,
    PARSER_UNEXPECTED_EOF,
    PARSER_UNEXPECTED_TOKEN,
    DiagnosticSpec,
)
from regularfmt.diagnostics.errors import ParseError
from regularfmt.lexer import Lexer, Token, TokenKind
from regularfmt.text import SourceLoc

_INTERPOLATION_RE: Final[re.Pattern[str]] = re.compile(r"(?<!\\)\$\{")
_TRAILING_DOLLAR_RE: Final[re.Pattern[str]] = re.compile(r"(?<!\\)\$$")

_NAME_KINDS: Final[frozenset[TokenKind]] = frozenset(
    {TokenKind.IDENTIFIER, TokenKind.NAME, TokenKind.KEYWORD}
)


@dataclass(frozen=True, slots=True)
class _Closing:
    """Closing marker (`</name>`, `{/if}`, `{/list}`); never part of a finished tree."""

    kind: str  # "tag", "if" or "list"
    name: str
    loc: SourceLoc


@dataclass(frozen=True, slots=True)
class _Else:
    """`{#else}` marker consumed by the enclosing `if`/`list` parser."""

    loc: SourceLoc


type _Parsed = Statement | _Closing | _Else


class Parser:
    """Template parser.

    The parser never recovers: the first violation raises `ParseError`
    (or `LexError` from the lexer) and aborts the parse.
    """

    def __init__(self, lexer: Lexer) -> None:
        self._lexer = lexer

    @property
    def lexer(self) -> Lexer:
        return self._lexer

    # -------------------------
    # Token helpers
    # -------------------------

    def _next(self, skip_whitespace: bool = True) -> Token:
        return self._lexer.next(skip_whitespace)

    def _span(self, start: SourceLoc) -> SourceLoc:
        return start.with_end(self._lexer.pos)

    def _ahead_is_sign(self, sign: str) -> bool:
        return self._lexer.peek().match_sign(sign)

    def _ahead_is_keyword(self, keyword: str) -> bool:
        return self._lexer.peek().match_keyword(keyword)

    def _ahead_is_eos(self) -> bool:
        """True when only whitespace remains; never tokenizes free text."""
        src = self._lexer.source
        src.push_pos()
        try:
            self._lexer.skip_whitespace()
            return self._lexer.ahead_is_eos()
        finally:
            src.restore_pos()

    def _expect_sign(self, sign: str) -> Token:
        tok = self._next()
        if not tok.match_sign(sign):
            self._raise_unexpected(tok)
        return tok

    def _expect_keyword(self, keyword: str) -> Token:
        tok = self._next()
        if not tok.match_keyword(keyword):
            self._raise_unexpected(tok)
        return tok

    def _expect_kind(self, *kinds: TokenKind) -> Token:
        tok = self._next()
        if tok.kind not in kinds:
            self._raise_unexpected(tok)
        return tok

    def _parse_name(self) -> Token:
        tok = self._next()
        if tok.kind not in _NAME_KINDS:
            self._raise_unexpected(tok)
        return tok

    # -------------------------
    # Errors
    # -------------------------

    def _raise(self, spec: DiagnosticSpec, message: str, loc: SourceLoc) -> NoReturn:
        raise ParseError(message, loc, spec)

    def _raise_unexpected(self, tok: Token) -> NoReturn:
        if tok.is_eos:
            self._raise(PARSER_UNEXPECTED_EOF, PARSER_UNEXPECTED_EOF.message, tok.loc)
        spec = PARSER_UNEXPECTED_TOKEN
        self._raise(spec, f"{spec.message} {tok.value}", tok.loc)

    def _raise_imbalanced(self, closing: _Closing, expect: str) -> NoReturn:
        spec = PARSER_IMBALANCED_TAG
        self._raise(spec, f"{spec.message} {closing.name}, expect {expect}", closing.loc)

    def _raise_misplaced(self, node: _Parsed) -> NoReturn:
        spec = PARSER_MISPLACED_COMMAND
        match node:
            case _Else():
                what = "{#else}"
            case _Closing(kind="tag"):
                self._raise(spec, f"Unexpected closing tag {node.name}", node.loc)
            case _Closing():
                what = f"{{/{node.kind}}}"
            case IfStatement(is_elseif=True):
                what = "{#elseif}"
            case _:
                what = type(node).__name__
        self._raise(spec, f"{spec.message} {what}", node.loc)

    def _forbid_interpolation(self, value: str, loc: SourceLoc) -> None:
        match = _INTERPOLATION_RE.search(value)
        if match is None:
            return
        spec = PARSER_FORBIDDEN_INTERPOLATION
        # +1 skips the opening quote
        column = loc.start.column + 1 + match.start()
        self._raise(spec, spec.message, loc.with_start_column(column))

    # -------------------------
    # Expressions
    # -------------------------

    def parse_expr(self) -> Expression:
        return self._parse_pipe()

    def _parse_pipe(self) -> Expression:
        expr = self._parse_ternary()
        while self._ahead_is_sign("|"):
            self._next()
            tok = self._expect_kind(TokenKind.IDENTIFIER)
            name = Identifier(tok.value, loc=tok.loc)
            args: list[Expression] = []
            if self._ahead_is_sign(":"):
                self._next()
                while True:
                    args.append(self._parse_ternary())
                    if not self._ahead_is_sign(","):
                        break
                    self._next()
            expr = PipeExpression(expr, name, tuple(args), loc=self._span(expr.loc))
        return expr

    def _parse_ternary(self) -> Expression:
        test = self._parse_binary()
        if not self._ahead_is_sign("?"):
            return test
        self._next()
        consequent = self._parse_binary()
        self._expect_sign(":")
        alternate = self._parse_ternary()
        return TernaryExpression(test, consequent, alternate, loc=self._span(test.loc))

    def _parse_binary(self, left: Expression | None = None, min_precedence: int = 0) -> Expression:
        if left is None:
            left = self._parse_atom()

        ahead = self._lexer.peek()
        while ahead.is_binary and ahead.precedence >= min_precedence:
            op = self._next()
            rhs = self._parse_atom()
            ahead = self._lexer.peek()
            while ahead.is_binary and ahead.precedence > op.precedence:
                rhs = self._parse_binary(rhs, ahead.precedence)
                ahead = self._lexer.peek()
            left = BinaryExpression(op, left, rhs, loc=self._span(left.loc))
        return left

    def _parse_atom(self) -> Expression:
        tok = self._next()
        match tok.kind:
            case TokenKind.STRING:
                self._forbid_interpolation(tok.value, tok.loc)
                return StringLiteral(tok.value, tok.quote, loc=tok.loc)
            case TokenKind.NUMBER:
                return NumberLiteral(tok.value, loc=tok.loc)
            case TokenKind.BOOL:
                return BooleanLiteral(tok.value, loc=tok.loc)
            case TokenKind.NULL:
                return NullLiteral(tok.value, loc=tok.loc)
            case TokenKind.UNDEFINED:
                return UndefinedLiteral(tok.value, loc=tok.loc)
            case TokenKind.IDENTIFIER:
                return self._parse_postfix(Identifier(tok.value, loc=tok.loc))
            case TokenKind.SIGN:
                match tok.value:
                    case "(":
                        return self._parse_paren(tok)
                    case "-" | "!":
                        return self._parse_unary(tok)
                    case "@":
                        return self._parse_once(tok)
                    case "{":
                        return self._parse_object(tok)
                    case "[":
                        return self._parse_array(tok)
        self._raise_unexpected(tok)

    def _parse_postfix(self, node: Expression) -> Expression:
        while True:
            ahead = self._lexer.peek()
            if ahead.match_sign("("):
                node = self._parse_call(node)
            elif ahead.match_sign("."):
                node = self._parse_member(node)
            elif ahead.match_sign("["):
                node = self._parse_computed_member(node)
            else:
                return node

    def _parse_call(self, callee: Expression) -> CallExpression:
        self._expect_sign("(")
        args: list[Expression] = []
        while not self._ahead_is_sign(")"):
            args.append(self.parse_expr())
            if not self._ahead_is_sign(","):
                break
            self._next()
        self._expect_sign(")")
        return CallExpression(callee, tuple(args), loc=self._span(callee.loc))

    def _parse_member(self, obj: Expression) -> MemberExpression:
        self._expect_sign(".")
        tok = self._expect_kind(TokenKind.IDENTIFIER, TokenKind.KEYWORD)
        prop = Identifier(tok.value, loc=tok.loc)
        return MemberExpression(obj, prop, False, loc=self._span(obj.loc))

    def _parse_computed_member(self, obj: Expression) -> MemberExpression:
        self._expect_sign("[")
        prop = self.parse_expr()
        self._expect_sign("]")
        return MemberExpression(obj, prop, True, loc=self._span(obj.loc))

    def _parse_paren(self, tok: Token) -> ParenExpression:
        exprs: list[Expression] = []
        while not self._ahead_is_sign(")"):
            exprs.append(self.parse_expr())
            if not self._ahead_is_sign(","):
                break
            self._next()
        self._expect_sign(")")
        return ParenExpression(tuple(exprs), loc=self._span(tok.loc))

    def _parse_unary(self, tok: Token) -> UnaryExpression:
        argument = self._parse_atom()
        return UnaryExpression(tok, argument, loc=self._span(tok.loc))

    def _parse_once(self, tok: Token) -> OnceExpression:
        self._expect_sign("(")
        expr = self.parse_expr()
        self._expect_sign(")")
        return OnceExpression(expr, loc=self._span(tok.loc))

    def _parse_object(self, tok: Token) -> ObjectExpression:
        props: list[ObjectProperty] = []
        while not self._ahead_is_sign("}"):
            props.append(self._parse_object_property())
            if not self._ahead_is_sign(","):
                break
            self._next()
        self._expect_sign("}")
        return ObjectExpression(tuple(props), loc=self._span(tok.loc))

    def _parse_object_property(self) -> ObjectProperty:
        tok = self._expect_kind(TokenKind.IDENTIFIER, TokenKind.STRING)
        key: Identifier | StringLiteral
        if tok.kind == TokenKind.STRING:
            key = StringLiteral(tok.value, tok.quote, loc=tok.loc)
        else:
            key = Identifier(tok.value, loc=tok.loc)
        self._expect_sign(":")
        value = self.parse_expr()
        return ObjectProperty(key, value, loc=self._span(tok.loc))

    def _parse_array(self, tok: Token) -> ArrayExpression:
        elements: list[Expression] = []
        while not self._ahead_is_sign("]"):
            elements.append(self.parse_expr())
            if not self._ahead_is_sign(","):
                break
            self._next()
        self._expect_sign("]")
        return ArrayExpression(tuple(elements), loc=self._span(tok.loc))

    # -------------------------
    # Statements
    # -------------------------

    def parse_program(self) -> Program:
        self._lexer.skip_whitespace()
        loc = self._lexer.loc
        body: list[Statement] = []
        while not self._ahead_is_eos():
            node = self._parse_stmt()
            match node:
                case _Closing(kind="tag"):
                    self._raise_imbalanced(node, "end of template")
                case _Closing() | _Else() | IfStatement(is_elseif=True):
                    self._raise_misplaced(node)
            body.append(node)
        return Program(tuple(body), loc=self._span(loc))

    def _parse_stmt(self) -> _Parsed:
        c = self._lexer.ahead(1)
        if c != "<" and c != "{":
            return self._parse_text()
        tok = self._next(skip_whitespace=False)
        if tok.match_sign("<"):
            if self._lexer.ahead(3) == "!--":
                return self._parse_comment(tok)
            if self._lexer.ahead_is_char("/"):
                return self._parse_element_close(tok)
            return self._parse_element(tok)
        if tok.match_sign("{"):
            if self._lexer.ahead_is_char("#"):
                return self._parse_command(tok)
            if self._lexer.ahead_is_char("/"):
                return self._parse_command_close(tok)
            return self._parse_expr_stmt(tok)
        self._raise_unexpected(tok)

    def _parse_text(self) -> TextStatement:
        tok = self._lexer.read_text()
        if self._lexer.ahead_is_char("{") and _TRAILING_DOLLAR_RE.search(tok.value):
            spec = PARSER_FORBIDDEN_INTERPOLATION
            pos = self._lexer.pos
            self._raise(spec, spec.message, self._lexer.loc.with_start_column(pos.column - 1))
        return TextStatement(tok.value, loc=tok.loc)

    def _parse_comment(self, tok: Token) -> CommentStatement:
        src = self._lexer.source
        src.read(3)
        chars: list[str] = []
        while True:
            if self._lexer.ahead_is_eos():
                self._raise_unexpected(self._next())
            if src.peek(3) == "-->":
                src.read(3)
                break
            chars.append(src.read())
        return CommentStatement("".join(chars), loc=self._span(tok.loc))

    def _parse_element(self, tok: Token) -> TagStatement:
        name = self._parse_name()
        attrs = self._parse_attrs()
        if self._ahead_is_sign("/"):
            self._next()
            self._expect_sign(">")
            return TagStatement(name.value, attrs, (), True, loc=self._span(tok.loc))
        self._expect_sign(">")
        body = self._parse_children(name.value, tok.loc)
        return TagStatement(name.value, attrs, body, False, loc=self._span(tok.loc))

    def _parse_attrs(self) -> tuple[TagAttr, ...]:
        attrs: list[TagAttr] = []
        while True:
            spaces = self._lexer.skip_whitespace()
            ahead = self._lexer.peek()
            if ahead.match_sign(">") or ahead.match_sign("/") or ahead.is_eos:
                break
            if not spaces:
                self._raise_unexpected(ahead)
            attrs.append(self._parse_attr())
        return tuple(attrs)

    def _parse_attr(self) -> TagAttr:
        name = self._parse_name()
        if not self._lexer.ahead_is_char("="):
            return TagAttr(name.value, None, loc=self._span(name.loc))
        self._next()
        value: Expression
        if self._lexer.ahead_is_char('"') or self._lexer.ahead_is_char("'"):
            value = self._parse_atom()
        elif self._lexer.ahead_is_char("{"):
            self._next()
            value = self.parse_expr()
            self._expect_sign("}")
        else:
            self._raise_unexpected(self._lexer.peek())
        return TagAttr(name.value, value, loc=self._span(name.loc))

    def _parse_children(self, until: str, open_loc: SourceLoc) -> tuple[Statement, ...]:
        children: list[Statement] = []
        while True:
            if self._ahead_is_eos():
                spec = PARSER_UNCLOSED_TAG
                self._raise(spec, f"{spec.message} </{until}>", open_loc)
            node = self._parse_stmt()
            match node:
                case _Closing(kind="tag", name=name) if name == until:
                    return tuple(children)
                case _Closing(kind="tag"):
                    self._raise_imbalanced(node, until)
                case _Closing() | _Else() | IfStatement(is_elseif=True):
                    self._raise_misplaced(node)
            children.append(node)

    def _parse_element_close(self, tok: Token) -> _Closing:
        self._next()
        name = self._parse_name()
        self._expect_sign(">")
        return _Closing("tag", name.value, self._span(tok.loc))

    def _parse_expr_stmt(self, tok: Token) -> ExprStatement:
        expr = self.parse_expr()
        self._expect_sign("}")
        return ExprStatement(expr, loc=self._span(tok.loc))

    def _parse_command(self, tok: Token) -> IfStatement | ListStatement | _Else:
        self._next()
        name = self._expect_kind(TokenKind.IDENTIFIER, TokenKind.KEYWORD)
        match name.value:
            case "if":
                return self._parse_if(tok, is_elseif=False)
            case "elseif":
                return self._parse_if(tok, is_elseif=True)
            case "else":
                self._expect_sign("}")
                return _Else(self._span(tok.loc))
            case "list":
                return self._parse_list(tok)
        self._raise_unexpected(name)

    def _read_block(self, kind: str, open_loc: SourceLoc) -> _Parsed:
        if self._ahead_is_eos():
            spec = PARSER_UNCLOSED_COMMAND
            self._raise(spec, f"{spec.message} {{/{kind}}}", open_loc)
        return self._parse_stmt()

    def _parse_if(self, tok: Token, *, is_elseif: bool) -> IfStatement:
        test = self.parse_expr()
        self._expect_sign("}")
        consequent: list[Statement] = []
        alternate: list[Statement] = []
        block = consequent
        while True:
            node = self._read_block("if", tok.loc)
            match node:
                case _Closing(kind="if"):
                    break
                case _Else() if block is consequent:
                    block = alternate
                    continue
                case IfStatement(is_elseif=True) if block is consequent:
                    alternate = [node]
                    break
                case _Closing(kind="tag"):
                    self._raise_imbalanced(node, "{/if}")
                case _Closing() | _Else() | IfStatement(is_elseif=True):
                    self._raise_misplaced(node)
            block.append(node)
        return IfStatement(
            test,
            tuple(consequent),
            tuple(alternate),
            is_elseif,
            loc=self._span(tok.loc),
        )

    def _parse_list(self, tok: Token) -> ListStatement:
        iterable = self.parse_expr()
        self._expect_keyword("as")
        item_tok = self._expect_kind(TokenKind.IDENTIFIER)
        item = Identifier(item_tok.value, loc=item_tok.loc)
        tracker: Expression | None = None
        if self._ahead_is_keyword("by"):
            self._next()
            tracker = self.parse_expr()
        self._expect_sign("}")

        body: list[Statement] = []
        alternate: list[Statement] = []
        block = body
        while True:
            node = self._read_block("list", tok.loc)
            match node:
                case _Closing(kind="list"):
                    break
                case _Else() if block is body:
                    block = alternate
                    continue
                case _Closing(kind="tag"):
                    self._raise_imbalanced(node, "{/list}")
                case _Closing() | _Else() | IfStatement(is_elseif=True):
                    self._raise_misplaced(node)
            block.append(node)
        return ListStatement(
            iterable,
            item,
            tracker,
            tuple(body),
            tuple(alternate),
            loc=self._span(tok.loc),
        )

    def _parse_command_close(self, tok: Token) -> _Closing:
        self._next()
        name = self._parse_name()
        self._expect_sign("}")
        if name.value not in ("if", "list"):
            self._raise_unexpected(name)
        return _Closing(name.value, name.value, self._span(tok.loc))
