"""Shrink engine: splits over-width lines until every line fits or cannot be split."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, Final

from regularfmt.ast import (
    LITERAL_TYPES,
    ArrayExpression,
    BinaryExpression,
    CallExpression,
    Expression,
    ExprStatement,
    Identifier,
    MemberExpression,
    NodeType,
    ObjectExpression,
    ObjectProperty,
    OnceExpression,
    ParenExpression,
    PipeExpression,
    StringLiteral,
    TagAttr,
    TagStatement,
    TernaryExpression,
    TextStatement,
    UnaryExpression,
)
from regularfmt.format.line import Line, LineNode, sign, text_token
from regularfmt.lexer import Token

if TYPE_CHECKING:
    from regularfmt.format.formatter import Formatter

logger = logging.getLogger(__name__)

type Shrinker = Callable[[Formatter, Any, int], list[Line]]


def shrink_lines(formatter: Formatter, lines: list[Line]) -> list[Line]:
    """Split lines in rounds until a round changes nothing.

    Lines created in one round are examined in the next. A line that fits is
    marked `fine`; a line with nothing left to split is marked `fine` as an
    accepted overflow.
    """
    width = formatter.options.print_width
    rounds = 0
    while True:
        rounds += 1
        changed = False
        i = 0
        while i < len(lines):
            line = lines[i]
            if line.fine:
                i += 1
                continue
            if line.width <= width:
                line.fine = True
                i += 1
                continue
            replacement = shrink_line(formatter, lines, i)
            if replacement is None:
                i += 1
                continue
            lines[i : i + 1] = replacement
            i += len(replacement)
            changed = True
        logger.debug("shrink round %d: %d lines", rounds, len(lines))
        if not changed:
            return lines


def is_shrinkable(node: LineNode) -> bool:
    """True for compound nodes that have a multi-line expansion."""
    match node:
        case Token() | Identifier():
            return False
        case UnaryExpression():
            return is_shrinkable(node.argument)
        case _ if isinstance(node, LITERAL_TYPES):
            return False
        case TagStatement():
            return bool(node.attrs)
        case CallExpression():
            return bool(node.arguments)
        case ObjectExpression():
            return bool(node.properties)
        case ArrayExpression():
            return bool(node.elements)
        case ParenExpression():
            return bool(node.expressions)
        case ObjectProperty():
            return is_shrinkable(node.value)
        case TagAttr():
            return node.value is not None
    return node.node_type in SHRINKERS


def shrink_line(formatter: Formatter, lines: Sequence[Line], index: int) -> list[Line] | None:
    """Replacement for `lines[index]`, or None when it has no shrinkable node.

    The line is split into the tokens before its first shrinkable node, that
    node's expansion, and the tokens after it. The replacement keeps the
    boundaries of the original line: its first line inherits `force` and
    `space_before`, and its last line inherits `steel`.
    """
    line = lines[index]
    at = next((i for i, node in enumerate(line.nodes) if is_shrinkable(node)), -1)
    if at == -1:
        line.fine = True
        return None

    node = line.nodes[at]
    before = line.nodes[:at]
    after = line.nodes[at + 1 :]
    expansion = shrink_node(formatter, node, _expansion_indent(formatter, line, before))

    replacement: list[Line] = []
    if before:
        replacement.append(Line(formatter.render(before), before, line.indent, force=line.force))
    elif line.force:
        expansion[0].force = True
        expansion[0].inline = False
    replacement.extend(expansion)
    if after:
        replacement.append(Line(formatter.render(after), after, line.indent, steel=line.steel))
    elif line.steel:
        expansion[-1].steel = True
    replacement[0].space_before = line.space_before

    # a shrunk element head puts a lone text child on its own line
    if isinstance(node, TagStatement) and node.body and index + 1 < len(lines):
        following = lines[index + 1]
        if len(following.nodes) == 1 and isinstance(following.nodes[0], (TextStatement, Token)):
            following.force = True
            following.steel = True

    return replacement


def shrink_node(formatter: Formatter, node: Any, indent: int) -> list[Line]:
    return SHRINKERS[node.node_type](formatter, node, indent)


def _expansion_indent(formatter: Formatter, line: Line, before: Sequence[LineNode]) -> int:
    # `{#if` and `{#list` headers continue one step in, level with their body
    head = before[0] if before else None
    if isinstance(head, Token) and head.value.startswith("{#"):
        return line.indent + formatter.step
    return line.indent


def _seq(formatter: Formatter, nodes: Sequence[Expression | ObjectProperty], indent: int) -> list[Line]:
    lines: list[Line] = []
    last = len(nodes) - 1
    for i, node in enumerate(nodes):
        parts: list[LineNode] = [node]
        if i < last:
            parts.append(sign(","))
        lines.append(Line(formatter.render(parts), parts, indent, force=True))
    return lines


def _shrink_binary(formatter: Formatter, node: BinaryExpression, indent: int) -> list[Line]:
    head = Line(
        f"{formatter.visit_expr(node.left)} {node.op.value}",
        [node.left, node.op],
        indent,
    )
    right = Line(formatter.visit_expr(node.right), [node.right], indent + formatter.step)
    return [head, right]


def _shrink_unary(formatter: Formatter, node: UnaryExpression, indent: int) -> list[Line]:
    lines = shrink_node(formatter, node.argument, indent)
    first = lines[0]
    # a TEXT token, so the printer does not space it like a binary operator
    op = text_token(node.op.value)
    first.text = op.value + first.text
    first.nodes = [op, *first.nodes]
    return lines


def _shrink_call(formatter: Formatter, node: CallExpression, indent: int) -> list[Line]:
    head = Line(f"{formatter.visit_expr(node.callee)}(", [node.callee, sign("(")], indent, inline=True)
    args = _seq(formatter, node.arguments, indent + formatter.step)
    close = Line(")", [sign(")")], indent, force=True)
    return [head, *args, close]


def _shrink_ternary(formatter: Formatter, node: TernaryExpression, indent: int) -> list[Line]:
    step = formatter.step
    consequent: list[LineNode] = [sign("? "), node.consequent]
    alternate: list[LineNode] = [sign(": "), node.alternate]
    return [
        Line(formatter.visit_expr(node.test), [node.test], indent),
        Line(formatter.render(consequent), consequent, indent + step, force=True),
        Line(formatter.render(alternate), alternate, indent + step, force=True),
    ]


def _shrink_object(formatter: Formatter, node: ObjectExpression, indent: int) -> list[Line]:
    props = _seq(formatter, node.properties, indent + formatter.step)
    return [
        Line("{", [sign("{")], indent, force=True),
        *props,
        Line("}", [sign("}")], indent, force=True),
    ]


def _shrink_object_property(formatter: Formatter, node: ObjectProperty, indent: int) -> list[Line]:
    key: list[LineNode] = [node.key, sign(": ")]
    key_text = formatter.render(key)
    compact = key_text + formatter.visit_expr(node.value)
    if indent + len(compact) < formatter.options.print_width:
        return [Line(compact, [*key, node.value], indent, force=True, fine=True)]

    value_lines = shrink_node(formatter, node.value, indent)
    first = value_lines[0]
    head = Line(key_text + first.text, [*key, *first.nodes], indent, steel=first.steel)
    return [head, *value_lines[1:]]


def _shrink_array(formatter: Formatter, node: ArrayExpression, indent: int) -> list[Line]:
    items = _seq(formatter, node.elements, indent + formatter.step)
    return [
        Line("[", [sign("[")], indent, steel=True),
        *items,
        Line("]", [sign("]")], indent, force=True),
    ]


def _shrink_paren(formatter: Formatter, node: ParenExpression, indent: int) -> list[Line]:
    items = _seq(formatter, node.expressions, indent + formatter.step)
    items[0].force = False
    return [
        Line("(", [sign("(")], indent, force=True),
        *items,
        Line(")", [sign(")")], indent),
    ]


def _shrink_member(formatter: Formatter, node: MemberExpression, indent: int) -> list[Line]:
    step = formatter.step
    if not node.computed:
        prop: list[LineNode] = [sign("."), node.property]
        return [
            Line(formatter.visit_expr(node.object), [node.object], indent),
            Line(formatter.render(prop), prop, indent + step),
        ]
    head: list[LineNode] = [node.object, sign("[")]
    return [
        Line(formatter.render(head), head, indent),
        Line(formatter.visit_expr(node.property), [node.property], indent + step, force=True),
        Line("]", [sign("]")], indent, force=True),
    ]


def _shrink_pipe(formatter: Formatter, node: PipeExpression, indent: int) -> list[Line]:
    filter_nodes: list[LineNode] = [sign("|"), sign(" "), node.name]
    for i, arg in enumerate(node.arguments):
        filter_nodes.append(sign(": " if i == 0 else ", "))
        filter_nodes.append(arg)
    return [
        Line(formatter.visit_expr(node.expr), [node.expr], indent),
        Line(formatter.render(filter_nodes), filter_nodes, indent + formatter.step),
    ]


def _shrink_once(formatter: Formatter, node: OnceExpression, indent: int) -> list[Line]:
    return [
        Line("@(", [sign("@"), sign("(")], indent, force=True),
        Line(formatter.visit_expr(node.expr), [node.expr], indent + formatter.step),
        Line(")", [sign(")")], indent),
    ]


def _shrink_expr_stmt(formatter: Formatter, node: ExprStatement, indent: int) -> list[Line]:
    return [
        Line("{", [sign("{")], indent, force=True, steel=True),
        Line(formatter.visit_expr(node.expr), [node.expr], indent + formatter.step),
        Line("}", [sign("}")], indent, force=True),
    ]


def _shrink_tag_attr(formatter: Formatter, node: TagAttr, indent: int) -> list[Line]:
    if node.value is None:
        return [Line(node.name, [node], indent, force=True, steel=True, fine=True)]
    parts: list[LineNode] = [sign(node.name), sign("=")]
    if isinstance(node.value, StringLiteral):
        parts.append(node.value)
    else:
        parts += [sign("{"), node.value, sign("}")]
    return [Line(formatter.render(parts), parts, indent, force=True, steel=True)]


def _shrink_tag(formatter: Formatter, node: TagStatement, indent: int) -> list[Line]:
    head = Line(f"<{node.name}", [sign("<"), sign(node.name)], indent, force=True, steel=True, fine=True)
    attrs = [line for attr in node.attrs for line in _shrink_tag_attr(formatter, attr, indent + formatter.step)]
    if node.self_close:
        close_text = "/>"
    elif node.body:
        close_text = ">"
    else:
        close_text = f"></{node.name}>"
    close = Line(close_text, [sign(close_text)], indent, force=True, steel=True, fine=True)
    return [head, *attrs, close]


SHRINKERS: Final[dict[NodeType, Shrinker]] = {
    NodeType.BINARY_EXPR: _shrink_binary,
    NodeType.CALL_EXPR: _shrink_call,
    NodeType.UNARY_EXPR: _shrink_unary,
    NodeType.TERNARY_EXPR: _shrink_ternary,
    NodeType.OBJECT_EXPR: _shrink_object,
    NodeType.OBJECT_PROPERTY: _shrink_object_property,
    NodeType.ARRAY_EXPR: _shrink_array,
    NodeType.PAREN_EXPR: _shrink_paren,
    NodeType.MEMBER_EXPR: _shrink_member,
    NodeType.PIPE_EXPR: _shrink_pipe,
    NodeType.ONCE_EXPR: _shrink_once,
    NodeType.EXPR_STMT: _shrink_expr_stmt,
    NodeType.TAG_ATTR: _shrink_tag_attr,
    NodeType.TAG_STMT: _shrink_tag,
}
"""Expansion strategy per node type; a node type absent here never shrinks."""
