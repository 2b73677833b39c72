"""Formatter for regular templates."""

from regularfmt.diagnostics import Diagnostic, LexError, LocatableError, ParseError
from regularfmt.embed import TemplateRegion, detect_template, format_regions, scan_regions
from regularfmt.format import FormatOptions, Formatter, run_format
from regularfmt.lint import run_lint
from regularfmt.parser import parse

__all__ = [
    "Diagnostic",
    "FormatOptions",
    "Formatter",
    "LexError",
    "LocatableError",
    "ParseError",
    "TemplateRegion",
    "detect_template",
    "format_regions",
    "parse",
    "run_format",
    "run_lint",
    "scan_regions",
]
