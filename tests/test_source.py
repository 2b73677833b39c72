import pytest

from regularfmt.diagnostics import PositionStackError
from regularfmt.text import EOS, Position, Source, SourceLoc


def test_read_tracks_lines_and_columns() -> None:
    src = Source("ab\ncd")

    assert src.read(2) == "ab"
    assert (src.line, src.col) == (1, 2)
    assert src.read() == "\n"
    assert (src.line, src.col) == (2, 0)
    assert src.read() == "c"
    assert src.pos == Position(offset=3, line=2, column=1)


def test_crlf_and_cr_read_as_single_newline() -> None:
    src = Source("a\r\nb\rc")

    assert src.read(5) == "a\nb\nc"
    assert src.line == 3
    assert src.col == 1


def test_read_past_end_returns_eos() -> None:
    src = Source("x")

    assert src.read(3) == "x" + EOS
    assert src.read() == EOS
    assert src.pos.offset == 0


def test_peek_does_not_move_cursor() -> None:
    src = Source("a\nb")

    assert src.peek(3) == "a\nb"
    assert src.pos == Position()
    assert src.read() == "a"


def test_start_line_offsets_line_numbers() -> None:
    src = Source("a\nb", "tpl.html", start_line=10)

    src.read(3)

    assert src.line == 11
    assert src.file == "tpl.html"


def test_position_stack_restores_cursor() -> None:
    src = Source("abc\ndef")
    src.read()
    src.push_pos()
    src.read(5)

    src.restore_pos()

    assert src.pos == Position(offset=0, line=1, column=1)
    assert src.read() == "b"


def test_restore_without_push_raises() -> None:
    src = Source("abc")

    with pytest.raises(PositionStackError) as exc_info:
        src.restore_pos()

    assert exc_info.value.code == "SOURCE_POSITION_STACK_UNDERFLOW"


def test_source_loc_shift_lines() -> None:
    loc = SourceLoc("t", Position(0, 1, 4), Position(5, 2, 1))

    shifted = loc.shift_lines(9)

    assert shifted.start == Position(0, 10, 4)
    assert shifted.end == Position(5, 11, 1)
    assert loc.start.line == 1
