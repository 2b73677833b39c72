"""Formatter: renders the template AST into `Line` records."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from regularfmt.ast import (
    ArrayExpression,
    AstVisitor,
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
from regularfmt.format.line import Line, LineNode, sign, text_token
from regularfmt.format.options import FormatOptions
from regularfmt.format.printer import print_lines
from regularfmt.format.shrink import shrink_lines
from regularfmt.lexer import Lexer, Token
from regularfmt.parser import Parser
from regularfmt.text import Source

logger = logging.getLogger(__name__)


class Formatter(AstVisitor[list[Line], str]):
    """Formats one template.

    Statements become lists of `Line`s at their nesting indent; expressions
    become their single-line text. Block statements (`if`, `list`, elements)
    produce their open, body and close lines up front.
    """

    def __init__(
        self,
        code: str = "",
        file: str = "",
        start_line: int = 1,
        options: FormatOptions | None = None,
    ) -> None:
        self._source = Source(code, file, start_line)
        self._parser = Parser(Lexer(self._source))
        self.options = options or FormatOptions()
        self.program: Program | None = None
        self._indents: list[int] = []

    # -------------------------
    # Entry points
    # -------------------------

    def run(self) -> str:
        """Parse the source text and return it formatted."""
        self.program = self._parser.parse_program()
        return self.format_program(self.program)

    def format_program(self, program: Program) -> str:
        lines = self.layout(program)
        logger.debug("laid out %d lines for %s", len(lines), self._source.file or "<template>")
        lines = shrink_lines(self, lines)
        return print_lines(lines, self.options.print_width)

    def layout(self, program: Program) -> list[Line]:
        """Ideal (unbroken) lines for `program`, before any shrinking."""
        with self.nested(self.options.base_indent):
            return self.visit_program(program)

    # -------------------------
    # Indent context
    # -------------------------

    @property
    def indent(self) -> int:
        return self._indents[-1] if self._indents else self.options.base_indent

    @property
    def step(self) -> int:
        return self.options.tab_size

    @contextmanager
    def nested(self, indent: int) -> Iterator[int]:
        self._indents.append(indent)
        try:
            yield indent
        finally:
            self._indents.pop()

    # -------------------------
    # Rendering helpers
    # -------------------------

    def render(self, nodes: Sequence[LineNode]) -> str:
        """Concatenate the single-line text of `nodes`."""
        return "".join(self._render_node(node) for node in nodes)

    def _render_node(self, node: LineNode) -> str:
        match node:
            case Token():
                return node.value
            case ObjectProperty():
                return self.visit_object_property(node)
            case TagAttr():
                return self.render_attr(node)
            case ExprStatement():
                return f"{{{self.visit_expr(node.expr)}}}"
            case TagStatement():
                return self.render_tag_head(node)
            case IfStatement() | ListStatement() | TextStatement() | CommentStatement():
                raise TypeError(f"Cannot render {type(node).__name__} inline")
            case _:
                return self.visit_expr(node)

    def render_attr(self, attr: TagAttr) -> str:
        if attr.value is None:
            return attr.name
        value = self.visit_expr(attr.value)
        if not isinstance(attr.value, StringLiteral):
            value = f"{{{value}}}"
        return f"{attr.name}={value}"

    def render_tag_head(self, node: TagStatement) -> str:
        attrs = " ".join(self.render_attr(attr) for attr in node.attrs)
        gap = " " if attrs else ""
        close = " />" if node.self_close else ">"
        return f"<{node.name}{gap}{attrs}{close}"

    # -------------------------
    # Statements
    # -------------------------

    def visit_program(self, node: Program) -> list[Line]:
        return self.visit_stmts(node.body)

    def visit_stmts(self, stmts: Sequence[Statement]) -> list[Line]:
        # whitespace between statements is re-created by the printer, except
        # that a gap between two siblings is kept as a single space
        lines: list[Line] = []
        gap = False
        for stmt in stmts:
            text = stmt.value if isinstance(stmt, TextStatement) else ""
            if isinstance(stmt, TextStatement) and stmt.is_empty:
                gap = gap or bool(text)
                continue
            stmt_lines = self.visit_stmt(stmt)
            if lines and (gap or text[:1].isspace()):
                stmt_lines[0].space_before = True
            gap = text[-1:].isspace()
            lines.extend(stmt_lines)
        return lines

    def visit_if(self, node: IfStatement) -> list[Line]:
        indent = self.indent
        keyword = "elseif" if node.is_elseif else "if"
        head_nodes: list[LineNode] = [sign(f"{{#{keyword} "), node.test, sign("}")]
        head = Line(self.render(head_nodes), head_nodes, indent, force=True, steel=True)

        with self.nested(indent + self.step):
            consequent = self.visit_stmts(node.consequent)

        alternate: list[Line] = []
        match node.alternate:
            case (IfStatement(is_elseif=True) as elseif,):
                alternate = self.visit_if(elseif)
            case ():
                pass
            case _:
                alternate.append(Line("{#else}", [], indent, force=True, steel=True, fine=True))
                with self.nested(indent + self.step):
                    alternate.extend(self.visit_stmts(node.alternate))

        lines = [head, *consequent, *alternate]
        if not node.is_elseif:
            lines.append(Line("{/if}", [], indent, force=True, steel=True, fine=True))
        return lines

    def visit_list(self, node: ListStatement) -> list[Line]:
        indent = self.indent
        head_nodes: list[LineNode] = [sign("{#list "), node.iterable, sign(" as "), node.item]
        if node.tracker is not None:
            head_nodes += [sign(" by "), node.tracker]
        head_nodes.append(sign("}"))
        head = Line(self.render(head_nodes), head_nodes, indent, force=True, steel=True)

        with self.nested(indent + self.step):
            body = self.visit_stmts(node.body)

        alternate: list[Line] = []
        if node.alternate:
            alternate.append(Line("{#else}", [], indent, force=True, steel=True, fine=True))
            with self.nested(indent + self.step):
                alternate.extend(self.visit_stmts(node.alternate))

        close = Line("{/list}", [], indent, force=True, steel=True, fine=True)
        return [head, *body, *alternate, close]

    def visit_tag(self, node: TagStatement) -> list[Line]:
        indent = self.indent
        head = Line(self.render_tag_head(node), [node], indent, force=True, steel=True)
        if node.self_close:
            return [head]

        close = f"</{node.name}>"
        if not node.body:
            head.text += close
            return [head]

        with self.nested(indent + self.step):
            body = self.visit_stmts(node.body)

        close_line = Line(close, [], indent, force=True, steel=True, fine=True)
        if len(node.body) == 1 and isinstance(node.body[0], TextStatement):
            # `<p>text</p>` may stay on one line
            head.steel = False
            close_line.force = False
        return [head, *body, close_line]

    def visit_text(self, node: TextStatement) -> list[Line]:
        value = " ".join(node.value.split())
        return [Line(value, [text_token(value)], self.indent)]

    def visit_comment(self, node: CommentStatement) -> list[Line]:
        value = node.value.strip()
        text = f"<!-- {value} -->" if value else "<!-- -->"
        return [Line(text, [node], self.indent, force=True, steel=True, fine=True)]

    def visit_expr_stmt(self, node: ExprStatement) -> list[Line]:
        return [Line(self.render([node]), [node], self.indent)]

    # -------------------------
    # Expressions
    # -------------------------

    def _join(self, exprs: Sequence[Expression]) -> str:
        return ", ".join(self.visit_exprs(exprs))

    def visit_identifier(self, node: Identifier) -> str:
        return node.name

    def visit_string(self, node: StringLiteral) -> str:
        quote = node.quote if node.quote == "'" and '"' in node.value else '"'
        return f"{quote}{node.value}{quote}"

    def visit_number(self, node: NumberLiteral) -> str:
        return node.value

    def visit_boolean(self, node: BooleanLiteral) -> str:
        return node.value

    def visit_null(self, node: NullLiteral) -> str:
        return "null"

    def visit_undefined(self, node: UndefinedLiteral) -> str:
        return "undefined"

    def visit_binary(self, node: BinaryExpression) -> str:
        return f"{self.visit_expr(node.left)} {node.op.value} {self.visit_expr(node.right)}"

    def visit_unary(self, node: UnaryExpression) -> str:
        return f"{node.op.value}{self.visit_expr(node.argument)}"

    def visit_member(self, node: MemberExpression) -> str:
        obj = self.visit_expr(node.object)
        prop = self.visit_expr(node.property)
        return f"{obj}[{prop}]" if node.computed else f"{obj}.{prop}"

    def visit_call(self, node: CallExpression) -> str:
        return f"{self.visit_expr(node.callee)}({self._join(node.arguments)})"

    def visit_object(self, node: ObjectExpression) -> str:
        if not node.properties:
            return "{}"
        props = ", ".join(self.visit_object_property(prop) for prop in node.properties)
        return f"{{ {props} }}"

    def visit_object_property(self, node: ObjectProperty) -> str:
        return f"{self.visit_expr(node.key)}: {self.visit_expr(node.value)}"

    def visit_array(self, node: ArrayExpression) -> str:
        return f"[{self._join(node.elements)}]"

    def visit_paren(self, node: ParenExpression) -> str:
        return f"({self._join(node.expressions)})"

    def visit_ternary(self, node: TernaryExpression) -> str:
        test = self.visit_expr(node.test)
        consequent = self.visit_expr(node.consequent)
        alternate = self.visit_expr(node.alternate)
        return f"{test} ? {consequent} : {alternate}"

    def visit_pipe(self, node: PipeExpression) -> str:
        text = f"{self.visit_expr(node.expr)} | {node.name.name}"
        if node.arguments:
            text += f": {self._join(node.arguments)}"
        return text

    def visit_once(self, node: OnceExpression) -> str:
        return f"@({self.visit_expr(node.expr)})"
