"""Marker detection for templates embedded in host-language strings."""

import re
from dataclasses import dataclass
from typing import Final

MARKER_RE: Final[re.Pattern[str]] = re.compile(r"\s*<!--\s*@regular(?:js)?\s*-->")
LINE_BREAK_RE: Final[re.Pattern[str]] = re.compile(r"\r?\n")
DEFAULT_INDENT: Final[int] = 2


@dataclass(frozen=True, slots=True)
class TemplateMarker:
    """Outcome of looking for the `<!-- @regular -->` marker in a region.

    `indent` is the marker's own indentation rounded down to an even count
    (2 when the marker is not indented) and becomes the formatter's base
    indent. `line` is the host line the template starts on.
    """

    ok: bool
    indent: int = 0
    line: int = 0


def detect_template(text: str, line: int) -> TemplateMarker:
    """Look for the template marker in `text`, a region starting on host line `line`."""
    found = MARKER_RE.search(text)
    if found is None:
        return TemplateMarker(ok=False)

    preceding = len(LINE_BREAK_RE.split(text[: found.start()]))
    leading = len(found.group()) - len(found.group().lstrip())
    indent = leading & ~1 if leading else DEFAULT_INDENT
    return TemplateMarker(ok=True, indent=indent, line=line + preceding)
