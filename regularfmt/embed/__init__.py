"""Templates embedded in host-language source files."""

from regularfmt.embed.detect import TemplateMarker, detect_template
from regularfmt.embed.regions import (
    FoldRange,
    FoldVisitor,
    TemplateRegion,
    format_region,
    format_regions,
    scan_regions,
)

__all__ = [
    "FoldRange",
    "FoldVisitor",
    "TemplateMarker",
    "TemplateRegion",
    "detect_template",
    "format_region",
    "format_regions",
    "scan_regions",
]
