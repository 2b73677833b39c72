"""Diagnostic codes and messages."""

from dataclasses import dataclass
from typing import Final, Literal

Severity = Literal["error", "warning"]


@dataclass(frozen=True, slots=True)
class DiagnosticSpec:
    code: str
    message: str
    hint: str | None = None
    severity: Severity = "error"
    category: str | None = None


SOURCE_POSITION_STACK_UNDERFLOW: Final[DiagnosticSpec] = DiagnosticSpec(
    code="SOURCE_POSITION_STACK_UNDERFLOW",
    message="Unbalanced popping of position stack",
    severity="error",
    category="source",
)

LEXER_UNEXPECTED_CHAR: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNEXPECTED_CHAR",
    message="Unexpected char",
    severity="error",
    category="lexer",
)

LEXER_UNTERMINATED_STRING: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNTERMINATED_STRING",
    message="Unterminated string literal",
    hint="Close the string with the quote it was opened with.",
    severity="error",
    category="lexer",
)

PARSER_UNEXPECTED_TOKEN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_UNEXPECTED_TOKEN",
    message="Unexpected tok",
    severity="error",
    category="parser",
)

PARSER_UNEXPECTED_EOF: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_UNEXPECTED_EOF",
    message="Unexpected end of template",
    severity="error",
    category="parser",
)

PARSER_IMBALANCED_TAG: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_IMBALANCED_TAG",
    message="Unexpected closing tag",
    severity="error",
    category="parser",
)

PARSER_UNCLOSED_TAG: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_UNCLOSED_TAG",
    message="Missing closing tag",
    hint="Close the element or make it self-closing with `/>`.",
    severity="error",
    category="parser",
)

PARSER_UNCLOSED_COMMAND: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_UNCLOSED_COMMAND",
    message="Missing closing command",
    hint="Close `{#if}` with `{/if}` and `{#list}` with `{/list}`.",
    severity="error",
    category="parser",
)

PARSER_MISPLACED_COMMAND: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_MISPLACED_COMMAND",
    message="Unexpected command",
    severity="error",
    category="parser",
)

PARSER_FORBIDDEN_INTERPOLATION: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_FORBIDDEN_INTERPOLATION",
    message="Using javascript interpolation in template is forbidden",
    hint="Use a template expression `{...}` instead of `${...}`.",
    severity="error",
    category="parser",
)

LINT_POOR_STYLE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LINT_POOR_STYLE",
    message="poor style used in template",
    severity="warning",
    category="lint/style",
)
