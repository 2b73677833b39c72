"""Formatter configuration."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FormatOptions:
    """Layout settings for one format run.

    `base_indent` is the indentation of the outermost statements and
    `tab_size` the indent added per nesting level.
    """

    print_width: int = 80
    base_indent: int = 0
    tab_size: int = 2

    def __post_init__(self) -> None:
        if self.print_width <= 0:
            raise ValueError(f"print_width must be positive, got {self.print_width}")
        if self.base_indent < 0:
            raise ValueError(f"base_indent must not be negative, got {self.base_indent}")
        if self.tab_size <= 0:
            raise ValueError(f"tab_size must be positive, got {self.tab_size}")

    @staticmethod
    def for_region(indent: int, print_width: int = 80, tab_size: int = 2) -> "FormatOptions":
        """Options for a template embedded at `indent` columns inside a host file."""
        return FormatOptions(print_width=print_width, base_indent=indent, tab_size=tab_size)
