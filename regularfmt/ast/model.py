"""AST data model for templates.

Nodes are frozen; child sequences are tuples. Equality ignores source
locations, so two parses of equivalent templates compare equal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar

from regularfmt.lexer.tokens import Token
from regularfmt.text import EMPTY_LOC, SourceLoc


class NodeType(IntEnum):
    IDENTIFIER = 1
    STRING_LITERAL = 2
    NUMBER_LITERAL = 3
    BOOLEAN_LITERAL = 4
    NULL_LITERAL = 5
    UNDEFINED_LITERAL = 6

    ARRAY_EXPR = 10
    BINARY_EXPR = 11
    UNARY_EXPR = 12
    MEMBER_EXPR = 13
    CALL_EXPR = 14
    OBJECT_PROPERTY = 15
    OBJECT_EXPR = 16
    PAREN_EXPR = 17
    TERNARY_EXPR = 18
    PIPE_EXPR = 19
    ONCE_EXPR = 20

    PROGRAM = 30
    IF_STMT = 31
    LIST_STMT = 32
    TAG_STMT = 33
    TEXT_STMT = 34
    COMMENT_STMT = 35
    EXPR_STMT = 36
    TAG_ATTR = 37


def _loc() -> SourceLoc:
    return field(default=EMPTY_LOC, compare=False, kw_only=True)


# -------------------------
# Expressions
# -------------------------


@dataclass(frozen=True, slots=True)
class Identifier:
    node_type: ClassVar[NodeType] = NodeType.IDENTIFIER

    name: str
    loc: SourceLoc = _loc()


@dataclass(frozen=True, slots=True)
class StringLiteral:
    """String literal; `value` keeps escapes verbatim, `quote` is the source quote."""

    node_type: ClassVar[NodeType] = NodeType.STRING_LITERAL

    value: str
    quote: str = field(default='"', compare=False)
    loc: SourceLoc = _loc()


@dataclass(frozen=True, slots=True)
class NumberLiteral:
    node_type: ClassVar[NodeType] = NodeType.NUMBER_LITERAL

    value: str
    loc: SourceLoc = _loc()


@dataclass(frozen=True, slots=True)
class BooleanLiteral:
    node_type: ClassVar[NodeType] = NodeType.BOOLEAN_LITERAL

    value: str
    loc: SourceLoc = _loc()


@dataclass(frozen=True, slots=True)
class NullLiteral:
    node_type: ClassVar[NodeType] = NodeType.NULL_LITERAL

    value: str = "null"
    loc: SourceLoc = _loc()


@dataclass(frozen=True, slots=True)
class UndefinedLiteral:
    node_type: ClassVar[NodeType] = NodeType.UNDEFINED_LITERAL

    value: str = "undefined"
    loc: SourceLoc = _loc()


@dataclass(frozen=True, slots=True)
class ArrayExpression:
    node_type: ClassVar[NodeType] = NodeType.ARRAY_EXPR

    elements: tuple[Expression, ...] = ()
    loc: SourceLoc = _loc()


@dataclass(frozen=True, slots=True)
class ObjectProperty:
    """`key: value` entry of an object literal. Not an expression on its own."""

    node_type: ClassVar[NodeType] = NodeType.OBJECT_PROPERTY

    key: Identifier | StringLiteral
    value: Expression
    loc: SourceLoc = _loc()


@dataclass(frozen=True, slots=True)
class ObjectExpression:
    """Object literal. Duplicate keys are kept in source order."""

    node_type: ClassVar[NodeType] = NodeType.OBJECT_EXPR

    properties: tuple[ObjectProperty, ...] = ()
    loc: SourceLoc = _loc()


@dataclass(frozen=True, slots=True)
class BinaryExpression:
    node_type: ClassVar[NodeType] = NodeType.BINARY_EXPR

    op: Token
    left: Expression
    right: Expression
    loc: SourceLoc = _loc()


@dataclass(frozen=True, slots=True)
class UnaryExpression:
    node_type: ClassVar[NodeType] = NodeType.UNARY_EXPR

    op: Token
    argument: Expression
    loc: SourceLoc = _loc()


@dataclass(frozen=True, slots=True)
class MemberExpression:
    node_type: ClassVar[NodeType] = NodeType.MEMBER_EXPR

    object: Expression
    property: Expression
    computed: bool = False
    loc: SourceLoc = _loc()


@dataclass(frozen=True, slots=True)
class CallExpression:
    node_type: ClassVar[NodeType] = NodeType.CALL_EXPR

    callee: Expression
    arguments: tuple[Expression, ...] = ()
    loc: SourceLoc = _loc()


@dataclass(frozen=True, slots=True)
class ParenExpression:
    """Parenthesized comma sequence; `(x)` is a one-element sequence."""

    node_type: ClassVar[NodeType] = NodeType.PAREN_EXPR

    expressions: tuple[Expression, ...]
    loc: SourceLoc = _loc()


@dataclass(frozen=True, slots=True)
class TernaryExpression:
    node_type: ClassVar[NodeType] = NodeType.TERNARY_EXPR

    test: Expression
    consequent: Expression
    alternate: Expression
    loc: SourceLoc = _loc()


@dataclass(frozen=True, slots=True)
class PipeExpression:
    """Filter application `expr | name[: arg, ...]`."""

    node_type: ClassVar[NodeType] = NodeType.PIPE_EXPR

    expr: Expression
    name: Identifier
    arguments: tuple[Expression, ...] = ()
    loc: SourceLoc = _loc()


@dataclass(frozen=True, slots=True)
class OnceExpression:
    """`@(expr)`: evaluated at most once by the template runtime."""

    node_type: ClassVar[NodeType] = NodeType.ONCE_EXPR

    expr: Expression
    loc: SourceLoc = _loc()


# -------------------------
# Statements
# -------------------------


@dataclass(frozen=True, slots=True)
class TagAttr:
    """Element attribute; `value` is None for a boolean flag attribute."""

    node_type: ClassVar[NodeType] = NodeType.TAG_ATTR

    name: str
    value: Expression | None = None
    loc: SourceLoc = _loc()


@dataclass(frozen=True, slots=True)
class TagStatement:
    node_type: ClassVar[NodeType] = NodeType.TAG_STMT

    name: str
    attrs: tuple[TagAttr, ...] = ()
    body: tuple[Statement, ...] = ()
    self_close: bool = False
    loc: SourceLoc = _loc()


@dataclass(frozen=True, slots=True)
class IfStatement:
    """`{#if}` block.

    An `{#elseif}` branch is stored as a single nested `IfStatement` with
    `is_elseif` set, forming the whole `alternate` of its parent.
    """

    node_type: ClassVar[NodeType] = NodeType.IF_STMT

    test: Expression
    consequent: tuple[Statement, ...] = ()
    alternate: tuple[Statement, ...] = ()
    is_elseif: bool = False
    loc: SourceLoc = _loc()


@dataclass(frozen=True, slots=True)
class ListStatement:
    """`{#list iterable as item [by tracker]}` block with optional `{#else}` part."""

    node_type: ClassVar[NodeType] = NodeType.LIST_STMT

    iterable: Expression
    item: Identifier
    tracker: Expression | None = None
    body: tuple[Statement, ...] = ()
    alternate: tuple[Statement, ...] = ()
    loc: SourceLoc = _loc()


@dataclass(frozen=True, slots=True)
class TextStatement:
    node_type: ClassVar[NodeType] = NodeType.TEXT_STMT

    value: str
    loc: SourceLoc = _loc()

    @property
    def is_empty(self) -> bool:
        return not self.value.strip()


@dataclass(frozen=True, slots=True)
class CommentStatement:
    """`<!-- ... -->`; `value` is the raw content between the delimiters."""

    node_type: ClassVar[NodeType] = NodeType.COMMENT_STMT

    value: str
    loc: SourceLoc = _loc()


@dataclass(frozen=True, slots=True)
class ExprStatement:
    node_type: ClassVar[NodeType] = NodeType.EXPR_STMT

    expr: Expression
    loc: SourceLoc = _loc()


@dataclass(frozen=True, slots=True)
class Program:
    node_type: ClassVar[NodeType] = NodeType.PROGRAM

    body: tuple[Statement, ...] = ()
    loc: SourceLoc = _loc()


type Literal = (
    StringLiteral | NumberLiteral | BooleanLiteral | NullLiteral | UndefinedLiteral
)
type Expression = (
    Identifier
    | Literal
    | ArrayExpression
    | ObjectExpression
    | BinaryExpression
    | UnaryExpression
    | MemberExpression
    | CallExpression
    | ParenExpression
    | TernaryExpression
    | PipeExpression
    | OnceExpression
)
type Statement = (
    TagStatement
    | IfStatement
    | ListStatement
    | TextStatement
    | CommentStatement
    | ExprStatement
)
type Node = Program | Statement | Expression | TagAttr | ObjectProperty

LITERAL_TYPES: tuple[type, ...] = (
    StringLiteral,
    NumberLiteral,
    BooleanLiteral,
    NullLiteral,
    UndefinedLiteral,
)


__all__ = [
    "LITERAL_TYPES",
    "ArrayExpression",
    "BinaryExpression",
    "BooleanLiteral",
    "CallExpression",
    "CommentStatement",
    "ExprStatement",
    "Expression",
    "Identifier",
    "IfStatement",
    "ListStatement",
    "Literal",
    "MemberExpression",
    "Node",
    "NodeType",
    "NullLiteral",
    "NumberLiteral",
    "ObjectExpression",
    "ObjectProperty",
    "OnceExpression",
    "ParenExpression",
    "PipeExpression",
    "Program",
    "Statement",
    "StringLiteral",
    "TagAttr",
    "TagStatement",
    "TernaryExpression",
    "TextStatement",
    "UnaryExpression",
    "UndefinedLiteral",
]
