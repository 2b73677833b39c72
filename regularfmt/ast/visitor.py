"""Visitor contract over the template AST."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import assert_never

from regularfmt.ast.model import (
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
    TagStatement,
    TernaryExpression,
    TextStatement,
    UnaryExpression,
    UndefinedLiteral,
)


class AstVisitor[S, E](ABC):
    """Double-dispatch traversal.

    `S` is the result of visiting a statement, `E` the result of visiting an
    expression. Every node variant has an abstract method, so a new variant
    cannot be added without every visitor handling it.
    """

    @abstractmethod
    def visit_program(self, node: Program) -> S: ...

    @abstractmethod
    def visit_if(self, node: IfStatement) -> S: ...

    @abstractmethod
    def visit_list(self, node: ListStatement) -> S: ...

    @abstractmethod
    def visit_tag(self, node: TagStatement) -> S: ...

    @abstractmethod
    def visit_text(self, node: TextStatement) -> S: ...

    @abstractmethod
    def visit_comment(self, node: CommentStatement) -> S: ...

    @abstractmethod
    def visit_expr_stmt(self, node: ExprStatement) -> S: ...

    @abstractmethod
    def visit_stmts(self, stmts: Sequence[Statement]) -> S: ...

    def visit_stmt(self, stmt: Statement) -> S:
        match stmt:
            case IfStatement():
                return self.visit_if(stmt)
            case ListStatement():
                return self.visit_list(stmt)
            case TagStatement():
                return self.visit_tag(stmt)
            case TextStatement():
                return self.visit_text(stmt)
            case CommentStatement():
                return self.visit_comment(stmt)
            case ExprStatement():
                return self.visit_expr_stmt(stmt)
            case _:
                assert_never(stmt)

    @abstractmethod
    def visit_identifier(self, node: Identifier) -> E: ...

    @abstractmethod
    def visit_string(self, node: StringLiteral) -> E: ...

    @abstractmethod
    def visit_number(self, node: NumberLiteral) -> E: ...

    @abstractmethod
    def visit_boolean(self, node: BooleanLiteral) -> E: ...

    @abstractmethod
    def visit_null(self, node: NullLiteral) -> E: ...

    @abstractmethod
    def visit_undefined(self, node: UndefinedLiteral) -> E: ...

    @abstractmethod
    def visit_binary(self, node: BinaryExpression) -> E: ...

    @abstractmethod
    def visit_unary(self, node: UnaryExpression) -> E: ...

    @abstractmethod
    def visit_member(self, node: MemberExpression) -> E: ...

    @abstractmethod
    def visit_call(self, node: CallExpression) -> E: ...

    @abstractmethod
    def visit_object(self, node: ObjectExpression) -> E: ...

    @abstractmethod
    def visit_object_property(self, node: ObjectProperty) -> E: ...

    @abstractmethod
    def visit_paren(self, node: ParenExpression) -> E: ...

    @abstractmethod
    def visit_ternary(self, node: TernaryExpression) -> E: ...

    @abstractmethod
    def visit_pipe(self, node: PipeExpression) -> E: ...

    @abstractmethod
    def visit_array(self, node: ArrayExpression) -> E: ...

    @abstractmethod
    def visit_once(self, node: OnceExpression) -> E: ...

    def visit_expr(self, expr: Expression) -> E:
        match expr:
            case Identifier():
                return self.visit_identifier(expr)
            case StringLiteral():
                return self.visit_string(expr)
            case NumberLiteral():
                return self.visit_number(expr)
            case BooleanLiteral():
                return self.visit_boolean(expr)
            case NullLiteral():
                return self.visit_null(expr)
            case UndefinedLiteral():
                return self.visit_undefined(expr)
            case BinaryExpression():
                return self.visit_binary(expr)
            case UnaryExpression():
                return self.visit_unary(expr)
            case MemberExpression():
                return self.visit_member(expr)
            case CallExpression():
                return self.visit_call(expr)
            case ObjectExpression():
                return self.visit_object(expr)
            case ParenExpression():
                return self.visit_paren(expr)
            case TernaryExpression():
                return self.visit_ternary(expr)
            case PipeExpression():
                return self.visit_pipe(expr)
            case ArrayExpression():
                return self.visit_array(expr)
            case OnceExpression():
                return self.visit_once(expr)
            case _:
                assert_never(expr)

    def visit_exprs(self, exprs: Sequence[Expression]) -> list[E]:
        return [self.visit_expr(expr) for expr in exprs]
