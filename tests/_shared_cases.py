"""Template sources and their expected formatting, shared across format tests."""

from __future__ import annotations

import textwrap
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FormatCase:
    name: str
    source: str
    expected: str
    print_width: int = 80


def _block(text: str) -> str:
    return textwrap.dedent(text).strip("\n")


def case_id(case: FormatCase) -> str:
    return case.name


FORMAT_CASES: tuple[FormatCase, ...] = (
    FormatCase(
        name="if_elseif_else_chain",
        source="{#if a}<a></a>{#elseif b}<b></b>{#else}<c></c>{/if}",
        expected=_block(
            """
            {#if a}
              <a></a>
            {#elseif b}
              <b></b>
            {#else}
              <c></c>
            {/if}
            """
        ),
    ),
    FormatCase(
        name="call_fits_on_one_line",
        source="{f(aaaaaaaaaa,bbbbbbbbbb,cccccccccc)}",
        expected="{f(aaaaaaaaaa, bbbbbbbbbb, cccccccccc)}",
    ),
    FormatCase(
        name="call_one_argument_per_line",
        source="{f(aaaaaaaaaa,bbbbbbbbbb,cccccccccc)}",
        expected=_block(
            """
            {
              f(
                aaaaaaaaaa,
                bbbbbbbbbb,
                cccccccccc
              )
            }
            """
        ),
        print_width=30,
    ),
    FormatCase(
        name="binary_chain_breaks_after_operators",
        source="{aaaaaaaaaa + bbbbbbbbbb + cccccccccc}",
        expected=_block(
            """
            {
              aaaaaaaaaa +
                bbbbbbbbbb +
                cccccccccc
            }
            """
        ),
        print_width=20,
    ),
    FormatCase(
        name="ternary_branches_on_own_lines",
        source="{ok ? aaaaaaaaaa : bbbbbbbbbb}",
        expected=_block(
            """
            {
              ok
                ? aaaaaaaaaa
                : bbbbbbbbbb
            }
            """
        ),
        print_width=20,
    ),
    FormatCase(
        name="object_properties_on_own_lines",
        source="{ {aaaaaaaaaa: 1, bbbbbbbbbb: 2} }",
        expected=_block(
            """
            {
              {
                aaaaaaaaaa: 1,
                bbbbbbbbbb: 2
              }
            }
            """
        ),
        print_width=20,
    ),
    FormatCase(
        name="object_property_value_continues_key_line",
        source="{ {key: f(aaaaaaaaaa, bbbbbbbbbb)} }",
        expected=_block(
            """
            {
              {
                key: f(
                  aaaaaaaaaa,
                  bbbbbbbbbb
                )
              }
            }
            """
        ),
        print_width=24,
    ),
    FormatCase(
        name="array_elements_on_own_lines",
        source="{[aaaaaaaaaa, bbbbbbbbbb]}",
        expected=_block(
            """
            {
              [
                aaaaaaaaaa,
                bbbbbbbbbb
              ]
            }
            """
        ),
        print_width=20,
    ),
    FormatCase(
        name="member_property_on_next_line",
        source="{aaaaaaaaaa.bbbbbbbbbbbb}",
        expected=_block(
            """
            {
              aaaaaaaaaa
                .bbbbbbbbbbbb
            }
            """
        ),
        print_width=20,
    ),
    FormatCase(
        name="pipe_filter_on_next_line",
        source="{aaaaaaaaaa | format: bbbbbbbbbb}",
        expected=_block(
            """
            {
              aaaaaaaaaa
                | format: bbbbbbbbbb
            }
            """
        ),
        print_width=24,
    ),
    FormatCase(
        name="pipe_stays_inline_when_it_fits",
        source="{value|upper|truncate:10,'...'}",
        expected='{value | upper | truncate: 10, "..."}',
    ),
    FormatCase(
        name="text_whitespace_is_collapsed",
        source="<p>\n   hello    world \n</p>",
        expected="<p>hello world</p>",
    ),
    FormatCase(
        name="nested_elements_are_indented",
        source="<ul><li>a</li><li>b</li></ul>",
        expected=_block(
            """
            <ul>
              <li>a</li>
              <li>b</li>
            </ul>
            """
        ),
    ),
    FormatCase(
        name="attributes_on_own_lines",
        source='<div class="aaaaaaaaaa" id="bbbbbbbbbb" title={cccccccccc}>hello</div>',
        expected=_block(
            """
            <div
              class="aaaaaaaaaa"
              id="bbbbbbbbbb"
              title={cccccccccc}
            >
              hello
            </div>
            """
        ),
        print_width=40,
    ),
    FormatCase(
        name="list_with_tracker_and_else",
        source="{#list items as item by item.id}<li>{item.name}</li>{#else}<p>empty</p>{/list}",
        expected=_block(
            """
            {#list items as item by item.id}
              <li>
                {item.name}
              </li>
            {#else}
              <p>empty</p>
            {/list}
            """
        ),
    ),
    FormatCase(
        name="comment_is_trimmed",
        source="<!--    note   -->",
        expected="<!-- note -->",
    ),
    FormatCase(
        name="self_closing_tag_is_canonical",
        source='<input   type="text"   disabled/>',
        expected='<input type="text" disabled />',
    ),
    FormatCase(
        name="empty_element_keeps_closing_tag",
        source="<div   ></div>",
        expected="<div></div>",
    ),
    FormatCase(
        name="expression_spacing_is_normalized",
        source="{  a+b*c  }",
        expected="{a + b * c}",
    ),
    FormatCase(
        name="text_keeps_spaces_around_interpolation",
        source="<p>a {b} c</p>",
        expected=_block(
            """
            <p>
              a {b} c
            </p>
            """
        ),
    ),
    FormatCase(
        name="whitespace_between_interpolations_is_one_space",
        source="<p>{a}   {b}</p>",
        expected=_block(
            """
            <p>
              {a} {b}
            </p>
            """
        ),
    ),
    FormatCase(
        name="unary_operand_breaks",
        source="{ !aaaaaaaaaa(bbbbbbbbbb, cccccccccc) }",
        expected=_block(
            """
            {
              !aaaaaaaaaa(
                bbbbbbbbbb,
                cccccccccc
              )
            }
            """
        ),
        print_width=20,
    ),
    FormatCase(
        name="if_header_continues_inside_block",
        source="{#if aaaaaaaaaa && bbbbbbbbbb}x{/if}",
        expected=_block(
            """
            {#if aaaaaaaaaa &&
                bbbbbbbbbb}
              x
            {/if}
            """
        ),
        print_width=20,
    ),
)
