"""Diagnostics core types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from regularfmt.diagnostics.codes import Severity

if TYPE_CHECKING:
    from regularfmt.text import SourceLoc


@dataclass(frozen=True, slots=True)
class Fix:
    """Replace the half-open character range [start, end) with `text`."""

    start: int
    end: int
    text: str

    def apply(self, source: str) -> str:
        return source[: self.start] + self.text + source[self.end :]


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic emitted by the parser or the lint adapter."""

    code: str
    message: str
    loc: SourceLoc
    severity: Severity = "error"
    hint: str | None = None
    category: str | None = None
    fix: Fix | None = None

    @property
    def line(self) -> int:
        return self.loc.start.line

    @property
    def column(self) -> int:
        return self.loc.start.column
