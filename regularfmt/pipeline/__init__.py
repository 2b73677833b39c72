"""Pipeline result carriers."""

from regularfmt.pipeline.results import FormatRunResult, LintRunResult

__all__ = [
    "FormatRunResult",
    "LintRunResult",
]
