"""Source text cursor and locations."""

from regularfmt.text.source import (
    EMPTY_LOC,
    EMPTY_POS,
    EOL,
    EOS,
    Position,
    Source,
    SourceLoc,
)

__all__ = [
    "EMPTY_LOC",
    "EMPTY_POS",
    "EOL",
    "EOS",
    "Position",
    "Source",
    "SourceLoc",
]
