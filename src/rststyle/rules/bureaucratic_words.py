"""Rule: bureaucratic verbs and connectives get a plainer replacement.

Each :class:`PhraseEntry` lists every inflected form of one word together
with the word that should be used instead. Forms match as whole words: the
characters around a match must not be Unicode letters. Comparison ignores
case, while the replacement is always inserted exactly as configured.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence

from ..core.positions import PositionIndex
from ..core.problems import Problem
from .base import Rule


@dataclass(slots=True, frozen=True)
class PhraseEntry:
    """Set of literal word forms mapped to one preferred replacement."""

    forms: frozenset[str]
    replacement: str

    @classmethod
    def of(cls, forms: Iterable[str], replacement: str) -> PhraseEntry:
        normalized = frozenset(form.lower() for form in forms)
        if not normalized or not all(form.isalpha() for form in normalized):
            raise ValueError(f"Phrase forms must be non-empty letter-only words: {sorted(normalized)}")
        return cls(normalized, replacement)

    def matches(self, word: str) -> bool:
        return word.lower() in self.forms


ENTRIES: tuple[PhraseEntry, ...] = (
    # являться -> быть
    PhraseEntry.of(
        (
            "являюсь",
            "являешься",
            "является",
            "являемся",
            "являетесь",
            "являются",
            "являлся",
            "являлась",
            "являлось",
            "являлись",
            "являться",
        ),
        "быть",
    ),
    # осуществлять -> делать
    PhraseEntry.of(
        (
            "осуществляю",
            "осуществляешь",
            "осуществляет",
            "осуществляем",
            "осуществляете",
            "осуществляют",
            "осуществил",
            "осуществила",
            "осуществило",
            "осуществили",
            "осуществлять",
        ),
        "делать",
    ),
    # иметься -> быть
    PhraseEntry.of(("имеется", "имелось", "иметься"), "быть"),
    # способствовать -> помогать
    PhraseEntry.of(
        (
            "способствую",
            "способствуешь",
            "способствует",
            "способствуем",
            "способствуете",
            "способствуют",
            "способствовать",
        ),
        "помогать",
    ),
    # задействовать -> использовать
    PhraseEntry.of(
        (
            "задействую",
            "задействуешь",
            "задействует",
            "задействуем",
            "задействуете",
            "задействуют",
            "задействовать",
        ),
        "использовать",
    ),
    PhraseEntry.of(("иные",), "другие"),
    PhraseEntry.of(("ввиду",), "из‑за"),
)


def iter_words(text: str) -> Iterator[tuple[int, int]]:
    """Yield ``(start, end)`` of every maximal run of Unicode letters."""

    start = -1
    for offset, char in enumerate(text):
        if char.isalpha():
            if start < 0:
                start = offset
        elif start >= 0:
            yield start, offset
            start = -1
    if start >= 0:
        yield start, len(text)


class BureaucraticWordsRule(Rule):
    id = "rst.bureaucraticWords"
    message = "Похоже на канцелярит – рекомендуется заменить на более простую формулировку."

    def __init__(self, entries: Sequence[PhraseEntry] = ENTRIES) -> None:
        self._entries = tuple(entries)

    @property
    def entries(self) -> tuple[PhraseEntry, ...]:
        return self._entries

    def scan(self, text: str, index: PositionIndex) -> list[Problem]:
        problems: list[Problem] = []
        # A whole-word match of a letters-only form is exactly one maximal letter run.
        for start, end in iter_words(text):
            word = text[start:end]
            for entry in self._entries:
                if entry.matches(word):
                    problems.append(self.replacement(text, index, start, end, entry.replacement))
        return problems


__all__ = ["ENTRIES", "BureaucraticWordsRule", "PhraseEntry", "iter_words"]
