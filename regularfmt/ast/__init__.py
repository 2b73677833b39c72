"""Template AST."""

from regularfmt.ast.model import (
    LITERAL_TYPES,
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
    Literal,
    MemberExpression,
    Node,
    NodeType,
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
from regularfmt.ast.visitor import AstVisitor

__all__ = [
    "LITERAL_TYPES",
    "ArrayExpression",
    "AstVisitor",
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
