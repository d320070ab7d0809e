"""Offset <-> line/column translation for a single text snapshot."""

from __future__ import annotations

import bisect
from typing import Iterator

from .ranges import Position, Range, TextRange


def utf16_length(text: str) -> int:
    """Return the number of UTF-16 code units needed to encode ``text``."""

    if text.isascii():
        return len(text)
    return len(text) + sum(1 for char in text if ord(char) > 0xFFFF)


class PositionIndex:
    """Maps code point offsets to editor positions and back.

    Lines are split on ``\\n``; a ``\\r`` right before it belongs to the line
    break, not to the line content. Columns are counted in UTF-16 code units so
    ranges line up with hosts that address text that way.
    """

    __slots__ = ("_text", "_line_starts", "_astral")

    def __init__(self, text: str) -> None:
        self._text = text
        starts = [0]
        cursor = text.find("\n")
        while cursor != -1:
            starts.append(cursor + 1)
            cursor = text.find("\n", cursor + 1)
        self._line_starts = tuple(starts)
        self._astral = not text.isascii() and any(ord(char) > 0xFFFF for char in text)

    @property
    def text(self) -> str:
        return self._text

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    # ------------------------------------------------------------------
    # Lines
    # ------------------------------------------------------------------
    def line_start(self, line: int) -> int:
        """Return the offset of the first character of ``line``."""

        self._check_line(line)
        return self._line_starts[line]

    def line_end(self, line: int) -> int:
        """Return the offset just past the content of ``line`` (line break excluded)."""

        self._check_line(line)
        if line + 1 < len(self._line_starts):
            end = self._line_starts[line + 1] - 1
            if end > self._line_starts[line] and self._text[end - 1] == "\r":
                end -= 1
            return end
        return len(self._text)

    def line_text(self, line: int) -> str:
        return self._text[self.line_start(line) : self.line_end(line)]

    def lines(self) -> Iterator[tuple[int, int, str]]:
        """Yield ``(line_number, start_offset, content)`` for every line."""

        for number, start in enumerate(self._line_starts):
            yield number, start, self._text[start : self.line_end(number)]

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------
    def offset_to_position(self, offset: int) -> Position:
        """Translate ``offset`` into a :class:`Position`.

        Every offset in ``[0, len(text)]`` is valid, including the end of the
        document. Anything else raises ``ValueError``.
        """

        if not 0 <= offset <= len(self._text):
            raise ValueError(f"Offset {offset} outside document of length {len(self._text)}")
        line = bisect.bisect_right(self._line_starts, offset) - 1
        start = self._line_starts[line]
        if not self._astral:
            return Position(line, offset - start)
        return Position(line, utf16_length(self._text[start:offset]))

    def position_to_offset(self, position: Position) -> int:
        """Translate ``position`` back into an absolute offset."""

        start = self.line_start(position.line)
        # A column may point between ``\r`` and ``\n``, so only the ``\n`` bounds it.
        if position.line + 1 < len(self._line_starts):
            end = self._line_starts[position.line + 1] - 1
        else:
            end = len(self._text)
        if not self._astral:
            offset = start + position.column
            if offset > end:
                raise ValueError(f"Column {position.column} beyond end of line {position.line}")
            return offset
        units = 0
        offset = start
        while units < position.column:
            if offset >= end:
                raise ValueError(f"Column {position.column} beyond end of line {position.line}")
            units += 2 if ord(self._text[offset]) > 0xFFFF else 1
            offset += 1
        if units != position.column:
            raise ValueError(f"Column {position.column} splits a surrogate pair on line {position.line}")
        return offset

    def to_range(self, start: int, end: int) -> Range:
        return Range(self.offset_to_position(start), self.offset_to_position(end))

    def to_text_range(self, value: Range) -> TextRange:
        return TextRange(self.position_to_offset(value.start), self.position_to_offset(value.end))

    def _check_line(self, line: int) -> None:
        if not 0 <= line < len(self._line_starts):
            raise ValueError(f"Line {line} outside document with {len(self._line_starts)} lines")


__all__ = ["PositionIndex", "utf16_length"]
