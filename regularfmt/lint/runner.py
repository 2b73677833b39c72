"""Lint runner: reports embedded templates that are not formatted."""

from __future__ import annotations

from collections.abc import Iterable

from regularfmt.diagnostics import (
    LINT_POOR_STYLE,
    Diagnostic,
    Fix,
    LocatableError,
    collect_diagnostics,
    sort_diagnostics,
)
from regularfmt.embed import TemplateRegion, format_region
from regularfmt.pipeline.results import LintRunResult
from regularfmt.text import Position, SourceLoc


def run_lint(
    text: str,
    offset: int,
    *,
    line: int = 1,
    print_width: int = 80,
    source_name: str = "",
) -> LintRunResult:
    """Check one template region found at host character `offset` and host line `line`.

    An unformatted region yields a `LINT_POOR_STYLE` warning whose fix replaces
    exactly the region's characters. A region that does not parse yields the
    located parse error instead. Regions without a marker are ignored.
    """
    diagnostics: list[Diagnostic] = []
    try:
        output = format_region(text, line, print_width=print_width, source_name=source_name)
    except LocatableError as err:
        diagnostics.append(err.to_diagnostic())
    else:
        if output is not None and output != text:
            diagnostics.append(_poor_style(text, offset, line, output, source_name))
    return LintRunResult(diagnostics=sort_diagnostics(diagnostics))


def _poor_style(text: str, offset: int, line: int, output: str, source_name: str) -> Diagnostic:
    end = offset + len(text)
    loc = SourceLoc(
        source_name,
        Position(offset, line, 0),
        Position(end, line + text.count("\n"), 0),
    )
    spec = LINT_POOR_STYLE
    return Diagnostic(
        code=spec.code,
        message=spec.message,
        loc=loc,
        severity=spec.severity,
        hint=spec.hint,
        category=spec.category,
        fix=Fix(offset, end, output),
    )


def run_lint_regions(
    host_text: str,
    regions: Iterable[TemplateRegion],
    *,
    print_width: int = 80,
    source_name: str = "",
) -> LintRunResult:
    """Lint every region of `host_text`, one result for the whole host file."""
    results = [
        run_lint(
            region.text(host_text),
            region.start,
            line=region.line,
            print_width=print_width,
            source_name=source_name,
        )
        for region in regions
    ]
    diagnostics = collect_diagnostics(*(result.diagnostics for result in results))
    return LintRunResult(diagnostics=sort_diagnostics(diagnostics))
