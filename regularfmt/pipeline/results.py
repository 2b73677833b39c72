"""Pipeline run result carriers for tool entrypoints."""

from __future__ import annotations

from dataclasses import dataclass

from regularfmt.ast import Program
from regularfmt.diagnostics import Diagnostic, has_errors


@dataclass(frozen=True, slots=True)
class FormatRunResult:
    """Result of formatting one template."""

    program: Program
    formatted_text: str
    changed: bool


@dataclass(frozen=True, slots=True)
class LintRunResult:
    """Result of checking one embedded template region."""

    diagnostics: list[Diagnostic]

    @property
    def has_errors(self) -> bool:
        return has_errors(self.diagnostics)
