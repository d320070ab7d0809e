"""Problem records and the declarative edits that resolve them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Protocol

from .ranges import Position, Range


class EditKind(str, Enum):
    """Supported corrective edit shapes."""

    REPLACE = "replace"
    INSERT = "insert"


class EditBuilder(Protocol):
    """Minimal edit surface a host exposes to fix callables."""

    def replace(self, target: Range, text: str) -> None:  # pragma: no cover - protocol stub
        ...

    def insert(self, position: Position, text: str) -> None:  # pragma: no cover - protocol stub
        ...


FixFn = Callable[[EditBuilder], None]


@dataclass(slots=True, frozen=True)
class TextEdit:
    """Replacement of ``range`` by ``text`` computed against one snapshot.

    ``expected`` holds the text the range covered when the edit was built, so
    an applier can refuse to write over content that has since moved.
    """

    kind: EditKind
    range: Range
    text: str
    expected: str = ""

    @classmethod
    def replace(cls, target: Range, text: str, *, expected: str) -> TextEdit:
        return cls(EditKind.REPLACE, target, text, expected)

    @classmethod
    def insert(cls, position: Position, text: str) -> TextEdit:
        return cls(EditKind.INSERT, Range.caret(position), text, "")

    def apply_to(self, builder: EditBuilder) -> None:
        """Replay the edit on a host edit builder."""

        if self.kind is EditKind.INSERT:
            builder.insert(self.range.start, self.text)
        else:
            builder.replace(self.range, self.text)

    def to_payload(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "range": self.range.to_dict(),
            "text": self.text,
            "expected": self.expected,
        }


@dataclass(slots=True, frozen=True)
class Problem:
    """One detected style violation."""

    range: Range
    message: str
    rule_id: str
    edit: TextEdit | None = None

    @property
    def fixable(self) -> bool:
        return self.edit is not None

    @property
    def fix(self) -> FixFn | None:
        """Return a callable performing the correction on an edit builder."""

        edit = self.edit
        if edit is None:
            return None
        return edit.apply_to

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "range": self.range.to_dict(),
            "message": self.message,
            "rule_id": self.rule_id,
        }
        if self.edit is not None:
            payload["fix"] = self.edit.to_payload()
        return payload


__all__ = ["EditBuilder", "EditKind", "FixFn", "Problem", "TextEdit"]
