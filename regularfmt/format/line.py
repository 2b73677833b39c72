"""Pretty-printer line records."""

from __future__ import annotations

from dataclasses import dataclass, field

from regularfmt.ast import Expression, ObjectProperty, Statement, TagAttr
from regularfmt.lexer import Token, TokenKind

type LineNode = Token | Expression | Statement | TagAttr | ObjectProperty


@dataclass(eq=False, slots=True)
class Line:
    """One candidate output line.

    `nodes` are the AST nodes and tokens the text was rendered from, kept so
    the shrink engine can split the line again.

    Flags:
    * `force`: starts a new output line; never merged onto its predecessor.
    * `steel`: nothing may be merged onto this line.
    * `inline`: always merged onto its predecessor.
    * `fine`: already fits (or cannot be split); skipped by the shrink engine.
    * `space_before`: the source had whitespace between this line and the
      previous sibling; a merge keeps it as one space.
    """

    text: str = ""
    nodes: list[LineNode] = field(default_factory=list)
    indent: int = 0
    force: bool = False
    steel: bool = False
    fine: bool = False
    inline: bool = False
    space_before: bool = False

    @property
    def width(self) -> int:
        return self.indent + len(self.text)


def sign(value: str) -> Token:
    """Synthetic sign token used to stitch rendered text together."""
    return Token(TokenKind.SIGN, value)


def text_token(value: str) -> Token:
    return Token(TokenKind.TEXT, value)
