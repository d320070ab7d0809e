"""Rule: a section heading is followed by body text before the next heading."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..core.positions import PositionIndex, utf16_length
from ..core.problems import Problem, TextEdit
from ..core.ranges import Position, Range
from .base import Rule

PLACEHOLDER_BODY = "Текст раздела.\n"
COMMENT_MARKER = ".."


@dataclass(slots=True, frozen=True)
class Heading:
    """Title line immediately followed by its underline."""

    title_line: int

    @property
    def underline_line(self) -> int:
        return self.title_line + 1


def is_underline(line: str, title_length: int) -> bool:
    """Return ``True`` for one repeated punctuation character covering the title.

    ``title_length`` is measured in UTF-16 code units, like editor columns.
    """

    trimmed = line.strip()
    if not trimmed or utf16_length(trimmed) < title_length:
        return False
    first = trimmed[0]
    if first.isalnum() or first.isspace():
        return False
    return trimmed.count(first) == len(trimmed)


def collect_headings(lines: Sequence[str]) -> list[Heading]:
    """Collect title/underline pairs in document order.

    A consumed underline is never reconsidered as the title of another pair.
    """

    headings: list[Heading] = []
    number = 0
    while number < len(lines) - 1:
        title = lines[number].strip()
        if title and is_underline(lines[number + 1], utf16_length(title)):
            headings.append(Heading(number))
            number += 2
            continue
        number += 1
    return headings


def has_body(lines: Sequence[str]) -> bool:
    """Return ``True`` when a line holds visible text that is not a comment."""

    for line in lines:
        trimmed = line.strip()
        if trimmed and not trimmed.startswith(COMMENT_MARKER):
            return True
    return False


class HeadingGapRule(Rule):
    id = "rst.headingGap"
    message = "После заголовка нет текста. Добавьте содержимое раздела."

    def __init__(self, placeholder: str = PLACEHOLDER_BODY) -> None:
        self._placeholder = placeholder

    def scan(self, text: str, index: PositionIndex) -> list[Problem]:
        lines = [line for _number, _start, line in index.lines()]
        headings = collect_headings(lines)
        problems: list[Problem] = []
        for current, following in zip(headings, headings[1:]):
            gap = lines[current.underline_line + 1 : following.title_line]
            if gap and has_body(gap):
                continue
            span = Range(Position(current.underline_line, 0), Position(following.title_line, 0))
            edit = TextEdit.insert(Position(current.underline_line + 1, 0), self._placeholder)
            problems.append(Problem(range=span, message=self.message, rule_id=self.id, edit=edit))
        return problems


__all__ = ["HeadingGapRule", "Heading", "collect_headings", "has_body", "is_underline"]
