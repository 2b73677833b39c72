"""Template parser."""

from regularfmt.parser.parser import Parser
from regularfmt.parser.template import parse

__all__ = [
    "Parser",
    "parse",
]
