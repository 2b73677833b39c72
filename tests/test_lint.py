from regularfmt.diagnostics import Fix
from regularfmt.embed import TemplateRegion
from regularfmt.lint import run_lint, run_lint_regions

FORMATTED = "\n  <!-- @regular -->\n  <p>hi</p>"


def test_formatted_region_has_no_diagnostics() -> None:
    result = run_lint(FORMATTED, 10)

    assert result.diagnostics == []
    assert result.has_errors is False


def test_unmarked_region_is_ignored() -> None:
    assert run_lint("<p>   x</p>", 0).diagnostics == []


def test_poor_style_reports_fix_for_region_range() -> None:
    host = "t = `\n  <!-- @regular -->\n<p>  hi </p>`;"
    start = host.index("`") + 1
    text = host[start : host.rindex("`")]

    result = run_lint(text, start, line=1, source_name="view.js")

    (diagnostic,) = result.diagnostics
    assert diagnostic.code == "LINT_POOR_STYLE"
    assert diagnostic.message == "poor style used in template"
    assert diagnostic.severity == "warning"
    assert diagnostic.loc.source == "view.js"
    assert diagnostic.fix == Fix(start, start + len(text), FORMATTED)
    assert diagnostic.fix.apply(host) == f"t = `{FORMATTED}`;"
    assert result.has_errors is False


def test_parse_error_becomes_located_diagnostic() -> None:
    result = run_lint("\n<!-- @regular -->\n<p>", 0, line=20)

    (diagnostic,) = result.diagnostics
    assert diagnostic.code == "PARSER_UNCLOSED_TAG"
    assert diagnostic.line == 22
    assert diagnostic.fix is None
    assert result.has_errors is True


def test_run_lint_regions_collects_every_region() -> None:
    host = "a = `\n  <!-- @regular -->\n  <p>hi</p>`;\nb = `<!-- @regular --><p>`;\nc = `<!-- @regular --><i>  x</i>`;\n"
    ticks = [i for i, c in enumerate(host) if c == "`"]
    regions = [
        TemplateRegion(ticks[0] + 1, ticks[1], 1),
        TemplateRegion(ticks[2] + 1, ticks[3], 4),
        TemplateRegion(ticks[4] + 1, ticks[5], 5),
    ]

    result = run_lint_regions(host, regions)

    assert [d.code for d in result.diagnostics] == ["PARSER_UNCLOSED_TAG", "LINT_POOR_STYLE"]
    assert result.has_errors is True
