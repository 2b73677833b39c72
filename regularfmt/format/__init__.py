"""Template formatter: layout, shrink and reflow."""

from regularfmt.format.formatter import Formatter
from regularfmt.format.line import Line, LineNode, sign
from regularfmt.format.options import FormatOptions
from regularfmt.format.printer import print_lines
from regularfmt.format.runner import run_format
from regularfmt.format.shrink import SHRINKERS, is_shrinkable, shrink_line, shrink_lines

__all__ = [
    "SHRINKERS",
    "FormatOptions",
    "Formatter",
    "Line",
    "LineNode",
    "is_shrinkable",
    "print_lines",
    "run_format",
    "shrink_line",
    "shrink_lines",
    "sign",
]
