"""Formatting and folding of template regions embedded in a host file.

Locating the regions (string literals in a host language) is the caller's
job; this module works on already-extracted `TemplateRegion` ranges.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from regularfmt.ast import (
    ArrayExpression,
    AstVisitor,
    BinaryExpression,
    BooleanLiteral,
    CallExpression,
    CommentStatement,
    ExprStatement,
    Identifier,
    IfStatement,
    ListStatement,
    MemberExpression,
    Node,
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
from regularfmt.diagnostics import LocatableError
from regularfmt.embed.detect import detect_template
from regularfmt.format import FormatOptions, Formatter
from regularfmt.parser import parse

logger = logging.getLogger(__name__)

type FoldRange = tuple[int, int]


@dataclass(frozen=True, slots=True)
class TemplateRegion:
    """Template text occupying `host[start:end]`, beginning on host line `line`."""

    start: int
    end: int
    line: int = 1

    def text(self, host_text: str) -> str:
        return host_text[self.start : self.end]


def format_region(
    text: str,
    line: int,
    *,
    print_width: int = 80,
    tab_size: int = 2,
    source_name: str = "",
) -> str | None:
    """Formatted replacement for one region, or None when it carries no marker.

    The replacement starts with a newline so the template opens on its own
    line inside the host literal. Errors are reported in host line numbers.
    """
    marker = detect_template(text, line)
    if not marker.ok:
        return None
    options = FormatOptions.for_region(marker.indent, print_width, tab_size)
    try:
        formatted = Formatter(text, source_name, 1, options).run()
    except LocatableError as err:
        raise err.shifted(line - 1) from err
    return "\n" + formatted


def format_regions(
    host_text: str,
    regions: Iterable[TemplateRegion],
    *,
    print_width: int = 80,
    tab_size: int = 2,
    source_name: str = "",
) -> str:
    """Rewrite every marked region of `host_text`; the rest of the host is untouched."""
    parts: list[str] = []
    prev_end = 0
    for region in sorted(regions, key=lambda r: r.start):
        if region.start >= region.end:
            continue
        formatted = format_region(
            region.text(host_text),
            region.line,
            print_width=print_width,
            tab_size=tab_size,
            source_name=source_name,
        )
        if formatted is None:
            continue
        parts.append(host_text[prev_end : region.start])
        parts.append(formatted)
        prev_end = region.end
    parts.append(host_text[prev_end:])
    return "".join(parts)


def scan_regions(host_text: str, regions: Iterable[TemplateRegion]) -> list[FoldRange]:
    """Foldable `(start_line, end_line)` ranges of every marked region.

    A region that fails to parse contributes no ranges.
    """
    ranges: list[FoldRange] = []
    for region in regions:
        text = region.text(host_text)
        if not detect_template(text, region.line).ok:
            continue
        try:
            program = parse(text, start_line=region.line)
        except LocatableError as err:
            logger.debug("skipping region at line %d: %s", region.line, err.describe())
            continue
        visitor = FoldVisitor()
        visitor.visit_program(program)
        ranges.extend(visitor.ranges)
    return ranges


def _span(node: Node) -> FoldRange:
    return (node.loc.start.line, node.loc.end.line)


class FoldVisitor(AstVisitor[None, None]):
    """Collects the line spans of blocks, elements, comments and interpolations."""

    def __init__(self) -> None:
        self.ranges: list[FoldRange] = []

    def visit_program(self, node: Program) -> None:
        self.visit_stmts(node.body)

    def visit_stmts(self, stmts: Sequence[Statement]) -> None:
        for stmt in stmts:
            self.visit_stmt(stmt)

    def visit_if(self, node: IfStatement) -> None:
        self.ranges.append(_span(node))
        self.visit_stmts(node.consequent)
        self.visit_stmts(node.alternate)

    def visit_list(self, node: ListStatement) -> None:
        self.ranges.append(_span(node))
        self.visit_stmts(node.body)
        self.visit_stmts(node.alternate)

    def visit_tag(self, node: TagStatement) -> None:
        if node.attrs:
            self.ranges.append((node.attrs[0].loc.start.line, node.attrs[-1].loc.end.line))
        if not node.self_close:
            self.ranges.append(_span(node))
        self.visit_stmts(node.body)

    def visit_text(self, node: TextStatement) -> None:
        pass

    def visit_comment(self, node: CommentStatement) -> None:
        self.ranges.append(_span(node))

    def visit_expr_stmt(self, node: ExprStatement) -> None:
        self.ranges.append(_span(node))

    # expressions never fold

    def visit_identifier(self, node: Identifier) -> None:
        pass

    def visit_string(self, node: StringLiteral) -> None:
        pass

    def visit_number(self, node: NumberLiteral) -> None:
        pass

    def visit_boolean(self, node: BooleanLiteral) -> None:
        pass

    def visit_null(self, node: NullLiteral) -> None:
        pass

    def visit_undefined(self, node: UndefinedLiteral) -> None:
        pass

    def visit_binary(self, node: BinaryExpression) -> None:
        pass

    def visit_unary(self, node: UnaryExpression) -> None:
        pass

    def visit_member(self, node: MemberExpression) -> None:
        pass

    def visit_call(self, node: CallExpression) -> None:
        pass

    def visit_object(self, node: ObjectExpression) -> None:
        pass

    def visit_object_property(self, node: ObjectProperty) -> None:
        pass

    def visit_paren(self, node: ParenExpression) -> None:
        pass

    def visit_ternary(self, node: TernaryExpression) -> None:
        pass

    def visit_pipe(self, node: PipeExpression) -> None:
        pass

    def visit_array(self, node: ArrayExpression) -> None:
        pass

    def visit_once(self, node: OnceExpression) -> None:
        pass
