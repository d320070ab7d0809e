"""Rule: the letter «ё» is written as «е»."""

from __future__ import annotations

from ..core.positions import PositionIndex
from ..core.problems import Problem
from .base import Rule

_REPLACEMENTS = {"ё": "е", "Ё": "Е"}


class ReplaceYoRule(Rule):
    id = "rst.replaceYo"
    message = "Буква «ё» должна быть заменена на «е»."

    def scan(self, text: str, index: PositionIndex) -> list[Problem]:
        problems: list[Problem] = []
        for offset, char in enumerate(text):
            replacement = _REPLACEMENTS.get(char)
            if replacement is not None:
                problems.append(self.replacement(text, index, offset, offset + 1, replacement))
        return problems


__all__ = ["ReplaceYoRule"]
