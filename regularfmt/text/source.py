"""Source cursor with line/column tracking and a position stack for lookahead."""

from dataclasses import dataclass, replace
from typing import Final

from regularfmt.diagnostics.codes import SOURCE_POSITION_STACK_UNDERFLOW
from regularfmt.diagnostics.errors import PositionStackError

NL: Final[str] = "\n"
CR: Final[str] = "\r"
EOL: Final[str] = "\n"
EOS: Final[str] = "\x03"
"""Sentinel returned for every read past the end of the text."""


@dataclass(frozen=True, slots=True)
class Position:
    """Snapshot of the cursor.

    `offset` is the index of the last consumed character (-1 before the first
    read), `line` is 1-based and `column` counts the characters consumed on the
    current line, which makes it the 0-based column of the next character.
    """

    offset: int = -1
    line: int = 1
    column: int = 0

    def shift_lines(self, lines: int) -> "Position":
        """Move the position by `lines` lines, e.g. into host-file coordinates."""
        return replace(self, line=self.line + lines)


EMPTY_POS: Final[Position] = Position(-1, -1, -1)


@dataclass(frozen=True, slots=True)
class SourceLoc:
    """Location of a token or node: source name plus start/end positions."""

    source: str = ""
    start: Position = EMPTY_POS
    end: Position = EMPTY_POS

    def with_end(self, end: Position) -> "SourceLoc":
        return replace(self, end=end)

    def with_start_column(self, column: int) -> "SourceLoc":
        return replace(self, start=replace(self.start, column=column))

    def shift_lines(self, lines: int) -> "SourceLoc":
        return replace(
            self,
            start=self.start.shift_lines(lines),
            end=self.end.shift_lines(lines),
        )


EMPTY_LOC: Final[SourceLoc] = SourceLoc()


class Source:
    """Cursor over template text.

    CR, CRLF and LF are all read as a single logical newline. Reads past the
    end of the text return `EOS` without moving the cursor.
    """

    def __init__(self, code: str = "", file: str = "", start_line: int = 1) -> None:
        self._code = code
        self._file = file
        self._ch = ""
        self._offset = -1
        self._line = start_line
        self._col = 0
        self._is_peek = False
        self._pos_stack: list[Position] = []

    @property
    def code(self) -> str:
        return self._code

    @property
    def file(self) -> str:
        return self._file

    @property
    def ch(self) -> str:
        """Last character consumed by `read`."""
        return self._ch

    @property
    def line(self) -> int:
        return self._line

    @property
    def col(self) -> int:
        return self._col

    @property
    def pos(self) -> Position:
        return Position(self._offset, self._line, self._col)

    def read(self, count: int = 1) -> str:
        """Consume `count` logical characters and return them."""
        chars: list[str] = []
        offset = self._offset
        c = ""
        while count:
            index = offset + 1
            if index >= len(self._code):
                c = EOS
                chars.append(c)
                break
            c = self._code[index]
            offset = index
            if c == CR or c == NL:
                if c == CR and index + 1 < len(self._code) and self._code[index + 1] == NL:
                    offset += 1
                if not self._is_peek:
                    self._line += 1
                    self._col = 0
                c = EOL
            elif not self._is_peek:
                self._col += 1
            chars.append(c)
            count -= 1
        if not self._is_peek:
            self._ch = c
            self._offset = offset
        return "".join(chars)

    def peek(self, count: int = 1) -> str:
        """Same as `read` without committing the cursor."""
        self._is_peek = True
        try:
            return self.read(count)
        finally:
            self._is_peek = False

    def push_pos(self) -> None:
        self._pos_stack.append(self.pos)

    def restore_pos(self) -> None:
        if not self._pos_stack:
            spec = SOURCE_POSITION_STACK_UNDERFLOW
            raise PositionStackError(spec.message, SourceLoc(self._file, self.pos, self.pos), spec)
        pos = self._pos_stack.pop()
        self._offset = pos.offset
        self._line = pos.line
        self._col = pos.column
