"""Rule: every sentence starts on its own line.

Lines are processed one at a time. List markers (``#.``, ``1.``, ``a)``,
``*``, ``-``, ``+``, ``>``) are not sentences; the content after the marker
is split into minimal runs ending in a period. The first run is the line's
(or list item's) sentence and is left alone, each further run is reported.
The fix moves the sentence to a new line indented to the content column,
so list item continuations align under the text rather than the bullet.
"""

from __future__ import annotations

from typing import Iterator

from ..core.positions import PositionIndex
from ..core.problems import Problem
from .base import Rule
from .list_markers import indent_width, match_list_marker


def iter_sentences(content: str) -> Iterator[tuple[int, int]]:
    """Yield ``(start, end)`` of consecutive minimal runs ending in a period.

    Each run holds at least one character before its period, so a lone
    trailing period never forms a sentence of its own.
    """

    cursor = 0
    length = len(content)
    while cursor < length:
        period = content.find(".", cursor + 1)
        if period < 0:
            return
        yield cursor, period + 1
        cursor = period + 1


class SentencePerLineRule(Rule):
    id = "rst.sentencePerLine"
    message = "Каждое предложение должно начинаться с новой строки."

    def scan(self, text: str, index: PositionIndex) -> list[Problem]:
        problems: list[Problem] = []
        for _number, line_start, line in index.lines():
            if not line.strip():
                continue
            leading = indent_width(line)
            marker = match_list_marker(line[leading:])
            content_column = leading + (marker.length if marker else 0)
            content = line[content_column:]
            if "." not in content:
                continue
            prefix = "\n" + " " * content_column
            for ordinal, (start, end) in enumerate(iter_sentences(content)):
                if ordinal == 0:
                    continue
                sentence = content[start:end].strip()
                absolute_start = line_start + content_column + start
                absolute_end = line_start + content_column + end
                problems.append(self.replacement(text, index, absolute_start, absolute_end, prefix + sentence))
        return problems


__all__ = ["SentencePerLineRule", "iter_sentences"]
