"""Diagnostics published for linted documents."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Sequence

from ..core.problems import Problem
from ..core.ranges import Range

DEFAULT_SOURCE = "rstCustom"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFORMATION = "information"
    HINT = "hint"


@dataclass(slots=True, frozen=True)
class Diagnostic:
    """A problem as shown to the user, detached from its fix."""

    range: Range
    message: str
    severity: Severity = Severity.WARNING
    source: str = DEFAULT_SOURCE
    code: str | None = None

    @classmethod
    def from_problem(
        cls,
        problem: Problem,
        *,
        severity: Severity = Severity.WARNING,
        source: str = DEFAULT_SOURCE,
    ) -> Diagnostic:
        return cls(range=problem.range, message=problem.message, severity=severity, source=source, code=problem.rule_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "range": self.range.to_dict(),
            "message": self.message,
            "severity": self.severity.value,
            "source": self.source,
            "code": self.code,
        }


class DiagnosticCollection:
    """Mutable map of document id to its current diagnostics.

    Each update replaces the document's entry wholesale; nothing is merged.
    """

    def __init__(self, name: str = DEFAULT_SOURCE) -> None:
        self.name = name
        self._entries: dict[str, tuple[Diagnostic, ...]] = {}

    def set(self, document_id: str, diagnostics: Sequence[Diagnostic]) -> None:
        self._entries[document_id] = tuple(diagnostics)

    def get(self, document_id: str) -> tuple[Diagnostic, ...]:
        return self._entries.get(document_id, ())

    def delete(self, document_id: str) -> None:
        self._entries.pop(document_id, None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, document_id: object) -> bool:
        return document_id in self._entries

    def __iter__(self) -> Iterator[tuple[str, tuple[Diagnostic, ...]]]:
        return iter(list(self._entries.items()))

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["DEFAULT_SOURCE", "Diagnostic", "DiagnosticCollection", "Severity"]
