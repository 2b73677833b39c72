"""Exceptions raised while reading, lexing and parsing templates."""

from __future__ import annotations

from typing import TYPE_CHECKING

from regularfmt.diagnostics.codes import DiagnosticSpec
from regularfmt.diagnostics.diagnostic import Diagnostic

if TYPE_CHECKING:
    from regularfmt.text import SourceLoc


class LocatableError(Exception):
    """Error anchored to a source location."""

    def __init__(self, message: str, loc: SourceLoc, spec: DiagnosticSpec) -> None:
        super().__init__(message)
        self.message = message
        self.loc = loc
        self.spec = spec

    @property
    def code(self) -> str:
        return self.spec.code

    @property
    def line(self) -> int:
        return self.loc.start.line

    @property
    def column(self) -> int:
        return self.loc.start.column

    def describe(self) -> str:
        return f"{self.message} at line: {self.line} column: {self.column}"

    def shifted(self, lines: int) -> LocatableError:
        """Copy of this error with its location moved by `lines` lines."""
        return type(self)(self.message, self.loc.shift_lines(lines), self.spec)

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(
            code=self.spec.code,
            message=self.message,
            loc=self.loc,
            severity=self.spec.severity,
            hint=self.spec.hint,
            category=self.spec.category,
        )


class PositionStackError(LocatableError):
    """Position stack popped while empty; an internal lookahead bug."""


class LexError(LocatableError):
    """Malformed numeric, string or escape token."""


class ParseError(LocatableError):
    """Unexpected token, imbalanced tag or forbidden interpolation."""
