import pytest

from regularfmt.ast import (
    BinaryExpression,
    CallExpression,
    ExprStatement,
    Identifier,
    IfStatement,
    NumberLiteral,
    ObjectExpression,
    ObjectProperty,
    TagAttr,
    TagStatement,
    UnaryExpression,
)
from regularfmt.format import SHRINKERS, FormatOptions, Formatter, Line, is_shrinkable, print_lines, shrink_lines, sign
from regularfmt.format.line import LineNode
from regularfmt.lexer import Token, TokenKind


def _line(text: str, **flags: bool) -> Line:
    return Line(text, [Token(TokenKind.TEXT, text)], **flags)


def test_adjacent_lines_merge_when_they_fit() -> None:
    assert print_lines([_line("a"), _line("b")], 80) == "ab"


def test_force_line_starts_new_output_line() -> None:
    assert print_lines([_line("a"), _line("b", force=True)], 80) == "a\nb"


def test_nothing_merges_onto_steel_line() -> None:
    assert print_lines([_line("a", steel=True), _line("b")], 80) == "a\nb"


def test_inline_line_merges_regardless_of_width() -> None:
    assert print_lines([_line("aaaa"), _line("bbbb", inline=True)], 3) == "aaaabbbb"


def test_merge_respects_width() -> None:
    assert print_lines([_line("aaaa"), _line("bbbb")], 6) == "aaaa\nbbbb"
    assert print_lines([_line("aaa"), _line("bbb")], 6) == "aaabbb"


def test_indent_is_printed() -> None:
    assert print_lines([Line("x", indent=4)], 80) == "    x"


def test_binary_operator_boundary_gets_spaces() -> None:
    head = Line("a +", [Identifier("a"), Token(TokenKind.SIGN, "+")])
    right = Line("b", [Identifier("b")], indent=2)

    assert print_lines([head, right], 80) == "a + b"


def test_lone_operator_line_gets_spaces() -> None:
    left = Line("a", [Identifier("a")])
    operator = Line("&&", [Token(TokenKind.SIGN, "&&")])

    assert print_lines([left, operator, _line("b")], 80) == "a && b"


def test_pipe_boundary_gets_space() -> None:
    expr = Line("x", [Identifier("x")])
    pipe: list[LineNode] = [sign("|"), sign(" "), Identifier("f")]

    assert print_lines([expr, Line("| f", pipe, indent=2)], 80) == "x | f"


def test_source_whitespace_between_siblings_is_one_space() -> None:
    assert print_lines([_line("a"), _line("{b}", space_before=True)], 80) == "a {b}"
    assert print_lines([_line("a"), _line("{b}", space_before=True)], 4) == "a\n{b}"


def test_printed_lines_are_stripped() -> None:
    head = Line("{#list xs as x by ", [sign("{#list xs as x by ")], force=True)
    tracker = Line(" t}", [sign(" t}")], indent=2, force=True)

    assert print_lines([head, tracker], 80) == "{#list xs as x by\n  t}"


@pytest.mark.parametrize(
    ("node", "expected"),
    [
        (Identifier("a"), False),
        (NumberLiteral("1"), False),
        (Token(TokenKind.SIGN, "+"), False),
        (CallExpression(Identifier("f")), False),
        (CallExpression(Identifier("f"), (Identifier("a"),)), True),
        (ObjectExpression(), False),
        (ObjectProperty(Identifier("k"), Identifier("v")), False),
        (ObjectProperty(Identifier("k"), ObjectExpression((ObjectProperty(Identifier("a"), Identifier("b")),))), True),
        (BinaryExpression(Token(TokenKind.SIGN, "+"), Identifier("a"), Identifier("b")), True),
        (ExprStatement(Identifier("a")), True),
        (TagStatement("div"), False),
        (TagStatement("div", (TagAttr("id", Identifier("x")),)), True),
        (TagAttr("disabled"), False),
        (UnaryExpression(Token(TokenKind.SIGN, "!"), Identifier("a")), False),
        (UnaryExpression(Token(TokenKind.SIGN, "!"), CallExpression(Identifier("f"), (Identifier("a"),))), True),
        (IfStatement(Identifier("a")), False),
    ],
)
def test_is_shrinkable(node: LineNode, expected: bool) -> None:
    assert is_shrinkable(node) is expected


def test_every_shrinker_is_keyed_by_its_node_type() -> None:
    for node_type, shrinker in SHRINKERS.items():
        assert shrinker.__name__.startswith("_shrink_"), node_type


def test_irreducible_line_is_accepted_as_overflow() -> None:
    formatter = Formatter(options=FormatOptions(print_width=5))
    line = Line("abcdefghij", [Identifier("abcdefghij")])

    lines = shrink_lines(formatter, [line])

    assert lines == [line]
    assert line.fine is True


def test_fitting_lines_are_marked_fine() -> None:
    formatter = Formatter(options=FormatOptions(print_width=80))
    lines = [_line("short"), _line("also short")]

    assert shrink_lines(formatter, lines) == lines
    assert all(line.fine for line in lines)


def test_shrink_splits_around_first_shrinkable_node() -> None:
    formatter = Formatter(options=FormatOptions(print_width=10))
    call = CallExpression(Identifier("f"), (Identifier("aaaa"), Identifier("bbbb")))
    nodes: list[LineNode] = [sign("x = "), call, sign(";")]
    line = Line("x = f(aaaa, bbbb);", nodes, force=True, steel=True)

    lines = shrink_lines(formatter, [line])

    assert [(ln.text, ln.indent) for ln in lines] == [
        ("x = ", 0),
        ("f(", 0),
        ("aaaa,", 2),
        ("bbbb", 2),
        (")", 0),
        (";", 0),
    ]
    assert lines[0].force is True
    assert lines[1].inline is True
    assert lines[-1].steel is True
    assert print_lines(lines, 10) == "x = f(\n  aaaa,\n  bbbb\n);"


def test_unary_expansion_prefixes_operator() -> None:
    formatter = Formatter(options=FormatOptions(print_width=10))
    call = CallExpression(Identifier("f"), (Identifier("aaaa"), Identifier("bbbb")))
    unary = UnaryExpression(Token(TokenKind.SIGN, "-"), call)
    line = Line("-f(aaaa, bbbb)", [unary])

    lines = shrink_lines(formatter, [line])

    assert [(ln.text, ln.indent) for ln in lines] == [("-f(", 0), ("aaaa,", 2), ("bbbb", 2), (")", 0)]
    assert print_lines(lines, 10) == "-f(\n  aaaa,\n  bbbb\n)"


def test_block_header_expansion_is_indented_one_step() -> None:
    formatter = Formatter(options=FormatOptions(print_width=10))
    call = CallExpression(Identifier("f"), (Identifier("aaaa"), Identifier("bbbb")))
    nodes: list[LineNode] = [sign("{#if "), call, sign("}")]
    line = Line("{#if f(aaaa, bbbb)}", nodes, force=True, steel=True)

    lines = shrink_lines(formatter, [line])

    assert [(ln.text, ln.indent) for ln in lines] == [
        ("{#if ", 0),
        ("f(", 2),
        ("aaaa,", 4),
        ("bbbb", 4),
        (")", 2),
        ("}", 0),
    ]
