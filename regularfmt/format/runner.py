"""Format runner over a single template parse."""

from __future__ import annotations

from regularfmt.ast import Program
from regularfmt.format.formatter import Formatter
from regularfmt.format.options import FormatOptions
from regularfmt.parser import parse
from regularfmt.pipeline.results import FormatRunResult


def run_format(
    text: str,
    options: FormatOptions | None = None,
    *,
    source_name: str = "",
    start_line: int = 1,
    program: Program | None = None,
) -> FormatRunResult:
    """Run formatting from a single parse lifecycle."""
    resolved_program = _resolve_parse(text, source_name=source_name, start_line=start_line, program=program)
    formatter = Formatter(text, source_name, start_line, options)
    formatted_text = formatter.format_program(resolved_program)

    return FormatRunResult(
        program=resolved_program,
        formatted_text=formatted_text,
        changed=formatted_text != text,
    )


def _resolve_parse(
    text: str,
    *,
    source_name: str,
    start_line: int,
    program: Program | None,
) -> Program:
    if program is not None:
        return program
    return parse(text, source_name=source_name, start_line=start_line)
