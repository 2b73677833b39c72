import textwrap

import pytest

from regularfmt.diagnostics import ParseError
from regularfmt.embed import TemplateRegion, detect_template, format_region, format_regions, scan_regions


def _region(host: str, line: int = 1, occurrence: int = 0) -> TemplateRegion:
    ticks = [i for i, c in enumerate(host) if c == "`"]
    start, end = ticks[2 * occurrence], ticks[2 * occurrence + 1]
    return TemplateRegion(start + 1, end, line)


@pytest.mark.parametrize(
    ("text", "line", "expected"),
    [
        ("\n  <!-- @regular -->\n<div></div>", 10, (True, 2, 11)),
        ("<!-- @regularjs -->", 5, (True, 2, 6)),
        ("\n    <!--@regular-->", 1, (True, 4, 2)),
        ("\n\n   <!-- @regular -->", 1, (True, 4, 2)),
    ],
)
def test_detect_template(text: str, line: int, expected: tuple[bool, int, int]) -> None:
    marker = detect_template(text, line)

    assert (marker.ok, marker.indent, marker.line) == expected


def test_detect_template_without_marker() -> None:
    assert detect_template("<div></div>", 1).ok is False
    assert detect_template("<!-- @regularx -->", 1).ok is False


def test_format_region_without_marker_is_none() -> None:
    assert format_region("<p>  x </p>", 1) is None


def test_format_regions_splices_formatted_templates() -> None:
    host = textwrap.dedent(
        """\
        const tpl = `
          <!-- @regular -->
          <div><span>{x}</span></div>
        `;
        const other = `<b>  untouched </b>`;
        """
    )
    first = _region(host, line=1)
    second = _region(host, line=4, occurrence=1)

    result = format_regions(host, [second, first])

    expected = textwrap.dedent(
        """\
        const tpl = `
          <!-- @regular -->
          <div>
            <span>
              {x}
            </span>
          </div>`;
        const other = `<b>  untouched </b>`;
        """
    )
    assert result == expected


def test_format_regions_is_stable() -> None:
    host = "x = `\n  <!-- @regular -->\n  <p>hi</p>`;\n"

    assert format_regions(host, [_region(host)]) == host


def test_format_regions_reports_errors_in_host_lines() -> None:
    host = "a;\nb;\nc;\nd;\nt = `\n<!-- @regular -->\n<a><b></a>`;\n"

    with pytest.raises(ParseError) as exc_info:
        format_regions(host, [_region(host, line=5)])

    assert exc_info.value.code == "PARSER_IMBALANCED_TAG"
    assert exc_info.value.line == 7


def test_scan_regions_collects_fold_ranges() -> None:
    host = textwrap.dedent(
        """\
        const tpl = `<!-- @regular -->
        {#if a}
          <p class="x">x</p>
        {/if}`;
        """
    )

    ranges = scan_regions(host, [_region(host, line=1)])

    assert ranges == [(1, 1), (2, 4), (3, 3), (3, 3)]


def test_scan_regions_skips_broken_and_unmarked_regions() -> None:
    host = "a = `<!-- @regular --><div>`;\nb = `<p></p>`;\nc = `<!-- @regular -->\n{x}`;\n"
    regions = [_region(host, 1), _region(host, 2, occurrence=1), _region(host, 3, occurrence=2)]

    assert scan_regions(host, regions) == [(3, 3), (4, 4)]
