"""Structured helpers for representing text spans."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Iterator


@dataclass(slots=True, frozen=True, order=True)
class Position:
    """Zero-based line/column pair; columns count UTF-16 code units."""

    line: int
    column: int

    def __post_init__(self) -> None:
        _require_index(self.line, "Position line")
        _require_index(self.column, "Position column")

    def to_dict(self) -> dict[str, int]:
        """Return the position as an editor-protocol style object."""

        return {"line": self.line, "character": self.column}


@dataclass(slots=True, frozen=True)
class Range:
    """Line/column span in document order; ``start`` never follows ``end``."""

    start: Position
    end: Position

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(f"Range end {self.end} precedes start {self.start}")

    @property
    def is_empty(self) -> bool:
        """Return ``True`` when the range collapses to a caret."""

        return self.start == self.end

    @property
    def key(self) -> tuple[int, int, int, int]:
        """Identity of the span built from its four coordinates."""

        return (self.start.line, self.start.column, self.end.line, self.end.column)

    def intersection(self, other: Range) -> Range | None:
        """Return the overlap with ``other``; touching ranges yield an empty range."""

        start = max(self.start, other.start)
        end = min(self.end, other.end)
        if start > end:
            return None
        return Range(start, end)

    def intersects(self, other: Range) -> bool:
        return self.intersection(other) is not None

    def to_dict(self) -> dict[str, dict[str, int]]:
        """Return the range as an editor-protocol style object."""

        return {"start": self.start.to_dict(), "end": self.end.to_dict()}

    @classmethod
    def caret(cls, position: Position) -> Range:
        return cls(position, position)


@dataclass(slots=True, frozen=True)
class TextRange(Sequence[int]):
    """Span expressed as absolute code point offsets into one text snapshot."""

    start: int
    end: int

    def __post_init__(self) -> None:
        _require_index(self.start, "TextRange start")
        _require_index(self.end, "TextRange end")
        if self.end < self.start:
            raise ValueError(f"TextRange end {self.end} precedes start {self.start}")

    def __len__(self) -> int:
        return 2

    def __getitem__(self, index: int | slice) -> int | tuple[int, ...]:
        if isinstance(index, slice):
            return self.to_tuple()[index]
        if index == 0:
            return self.start
        if index == 1:
            return self.end
        raise IndexError("TextRange index out of range")

    def __iter__(self) -> Iterator[int]:
        yield self.start
        yield self.end

    @property
    def length(self) -> int:
        """Return the width of the range."""

        return self.end - self.start

    def text_of(self, text: str) -> str:
        return text[self.start : self.end]

    def to_tuple(self) -> tuple[int, int]:
        return (self.start, self.end)


def _require_index(value: Any, label: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{label} must be an integer")
    if value < 0:
        raise ValueError(f"{label} must be non-negative")


__all__ = ["Position", "Range", "TextRange"]
