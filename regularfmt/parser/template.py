"""High-level parse entrypoint for template text."""

from regularfmt.ast import Program
from regularfmt.lexer import Lexer
from regularfmt.parser.parser import Parser
from regularfmt.text import Source


def parse(text: str, *, source_name: str = "", start_line: int = 1) -> Program:
    """Parse `text` into a `Program`; raises `LexError`/`ParseError` on bad input."""
    source = Source(text, source_name, start_line)
    return Parser(Lexer(source)).parse_program()
