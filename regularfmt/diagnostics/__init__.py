"""Diagnostics."""

from regularfmt.diagnostics.codes import (
    LEXER_UNEXPECTED_CHAR,
    LEXER_UNTERMINATED_STRING,
    LINT_POOR_STYLE,
    PARSER_FORBIDDEN_INTERPOLATION,
    PARSER_IMBALANCED_TAG,
    PARSER_MISPLACED_COMMAND,
    PARSER_UNCLOSED_COMMAND,
    PARSER_UNCLOSED_TAG,
    PARSER_UNEXPECTED_EOF,
    PARSER_UNEXPECTED_TOKEN,
    SOURCE_POSITION_STACK_UNDERFLOW,
    DiagnosticSpec,
)
from regularfmt.diagnostics.diagnostic import Diagnostic, Fix, Severity
from regularfmt.diagnostics.errors import (
    LexError,
    LocatableError,
    ParseError,
    PositionStackError,
)
from regularfmt.diagnostics.report import collect_diagnostics, has_errors, sort_diagnostics

__all__ = [
    "LEXER_UNEXPECTED_CHAR",
    "LEXER_UNTERMINATED_STRING",
    "LINT_POOR_STYLE",
    "PARSER_FORBIDDEN_INTERPOLATION",
    "PARSER_IMBALANCED_TAG",
    "PARSER_MISPLACED_COMMAND",
    "PARSER_UNCLOSED_COMMAND",
    "PARSER_UNCLOSED_TAG",
    "PARSER_UNEXPECTED_EOF",
    "PARSER_UNEXPECTED_TOKEN",
    "SOURCE_POSITION_STACK_UNDERFLOW",
    "Diagnostic",
    "DiagnosticSpec",
    "Fix",
    "LexError",
    "LocatableError",
    "ParseError",
    "PositionStackError",
    "Severity",
    "collect_diagnostics",
    "has_errors",
    "sort_diagnostics",
]
