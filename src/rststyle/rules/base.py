"""Shared scaffolding for style rules."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import ClassVar

from ..core.positions import PositionIndex
from ..core.problems import Problem, TextEdit

LOGGER = logging.getLogger(__name__)


class Rule(ABC):
    """A pure ``text -> problems`` check.

    Subclasses implement :meth:`scan`; :meth:`check` builds the position index
    when the caller did not share one and logs a short summary.
    """

    id: ClassVar[str]
    message: ClassVar[str]

    def check(self, text: str, *, index: PositionIndex | None = None) -> list[Problem]:
        active_index = index if index is not None else PositionIndex(text)
        problems = self.scan(text, active_index)
        if problems:
            LOGGER.debug("%s reported %d problem(s)", self.id, len(problems))
        return problems

    @abstractmethod
    def scan(self, text: str, index: PositionIndex) -> list[Problem]:
        """Return problems in order of their first matched offset."""

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def replacement(self, text: str, index: PositionIndex, start: int, end: int, new_text: str) -> Problem:
        """Problem over ``text[start:end]`` fixed by replacing it with ``new_text``."""

        span = index.to_range(start, end)
        return Problem(
            range=span,
            message=self.message,
            rule_id=self.id,
            edit=TextEdit.replace(span, new_text, expected=text[start:end]),
        )

    def unfixable(self, index: PositionIndex, start: int, end: int) -> Problem:
        return Problem(range=index.to_range(start, end), message=self.message, rule_id=self.id)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id}>"


__all__ = ["Rule"]
