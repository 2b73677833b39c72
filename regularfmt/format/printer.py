"""Reflow printer: greedily merges adjacent lines that fit together."""

import logging
from collections.abc import Sequence

from regularfmt.format.line import Line
from regularfmt.lexer import Token, is_binary_operator

logger = logging.getLogger(__name__)


def print_lines(lines: Sequence[Line], print_width: int = 80) -> str:
    """Render `lines` as text, merging a line onto the previous output line when

    * the previous line is not `steel`, and
    * the line is `inline`, or it is not `force` and the merged text fits.
    """
    out: list[str] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        logger.debug("print %r", line)
        text = " " * line.indent + line.text.lstrip()
        while not line.steel and i + 1 < len(lines):
            following = lines[i + 1]
            if not following.inline and len(text) >= print_width:
                break
            gap = " " if _needs_space(line, following) else ""
            fits = len(text) + len(gap) + len(following.text) <= print_width
            if not (following.inline or (fits and not following.force)):
                break
            logger.debug("merge %r", following)
            text += gap + following.text
            line = following
            i += 1
        # a split after a spaced sign such as ` by ` leaves a trailing blank
        out.append(text.rstrip())
        i += 1
    return "\n".join(out)


def _needs_space(line: Line, following: Line) -> bool:
    """Binary operators and pipes are spaced on both sides when lines merge,
    and so is whitespace the source had between sibling statements."""
    if following.space_before or is_binary_operator(following.text):
        return True
    if line.nodes and _is_operator(line.nodes[-1]):
        return True
    return bool(following.nodes) and _is_operator(following.nodes[0], pipe=True)


def _is_operator(node: object, *, pipe: bool = False) -> bool:
    if not isinstance(node, Token):
        return False
    return node.is_binary or (pipe and node.match_sign("|"))
