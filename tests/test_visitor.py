from collections.abc import Sequence

import pytest

from regularfmt.ast import AstVisitor, IfStatement, Program, Statement, TagStatement
from regularfmt.format import Formatter
from regularfmt.lexer import Lexer
from regularfmt.parser import Parser, parse
from regularfmt.text import Source


class _TagsOnly(AstVisitor[None, None]):
    def visit_program(self, node: Program) -> None:
        self.visit_stmts(node.body)

    def visit_stmts(self, stmts: Sequence[Statement]) -> None:
        for stmt in stmts:
            self.visit_stmt(stmt)

    def visit_tag(self, node: TagStatement) -> None:
        self.visit_stmts(node.body)


def test_visitor_missing_variants_cannot_be_instantiated() -> None:
    with pytest.raises(TypeError):
        _TagsOnly()  # type: ignore[abstract]


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("a", "a"),
        ("'x'", '"x"'),
        ("\"it's\"", '"it\'s"'),
        ("'say \"hi\"'", "'say \"hi\"'"),
        ("1.5", "1.5"),
        ("true", "true"),
        ("null", "null"),
        ("undefined", "undefined"),
        ("a+b", "a + b"),
        ("!a", "!a"),
        ("a.b", "a.b"),
        ("a[ b ]", "a[b]"),
        ("f( a,b )", "f(a, b)"),
        ("{}", "{}"),
        ("{a:1,'b':2}", '{ a: 1, "b": 2 }'),
        ("[1,2,]", "[1, 2]"),
        ("(a,b)", "(a, b)"),
        ("a?b:c", "a ? b : c"),
        ("a|f:1,2", "a | f: 1, 2"),
        ("@( a )", "@(a)"),
    ],
)
def test_formatter_renders_expressions(source: str, expected: str) -> None:
    parsed = Parser(Lexer(Source(source))).parse_expr()

    assert Formatter().visit_expr(parsed) == expected


def test_visit_stmt_dispatches_on_variant() -> None:
    program = parse("{#if a}<p>x</p>{/if}")
    (node,) = program.body
    assert isinstance(node, IfStatement)

    lines = Formatter().visit_stmt(node)

    assert [line.text for line in lines] == ["{#if a}", "<p>", "x", "</p>", "{/if}"]
    assert [line.indent for line in lines] == [0, 2, 4, 2, 0]
