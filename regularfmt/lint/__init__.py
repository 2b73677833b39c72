"""Lint adapter for embedded templates."""

from regularfmt.lint.runner import run_lint, run_lint_regions

__all__ = [
    "run_lint",
    "run_lint_regions",
]
