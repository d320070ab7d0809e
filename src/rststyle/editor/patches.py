"""Range-based edit application helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..core.positions import PositionIndex
from ..core.problems import TextEdit
from ..core.ranges import Position, Range


class PatchApplyError(RuntimeError):
    """Raised when edits cannot be applied to the text they target.

    ``reason`` is one of ``empty_range_patch``, ``range_overlap``,
    ``range_overflow`` or ``range_mismatch``.
    """

    def __init__(
        self,
        message: str,
        *,
        reason: str = "range_mismatch",
        expected: str | None = None,
        actual: str | None = None,
    ) -> None:
        super().__init__(message)
        self.reason = reason
        self.expected = expected
        self.actual = actual

    def details(self) -> dict[str, str | None]:
        return {"reason": self.reason, "expected": self.expected, "actual": self.actual}


@dataclass(slots=True)
class PatchResult:
    """Patched text plus the spans of inserted text, in new-text offsets."""

    text: str
    spans: Tuple[Tuple[int, int], ...]
    summary: str


@dataclass(slots=True)
class RangePatch:
    """Replacement of ``[start, end)``; ``match_text`` is checked when set."""

    start: int
    end: int
    replacement: str
    match_text: Optional[str] = None


def detect_eol(text: str) -> str:
    """Return the line break most of ``text`` uses; ``\\n`` on a tie or no breaks."""

    crlf = text.count("\r\n")
    return "\r\n" if crlf > text.count("\n") - crlf else "\n"


class TextEditBuilder:
    """Edit builder handed to fix callables.

    Edits are recorded against the snapshot the builder was created with and
    only applied by :meth:`apply`, mirroring how editors batch one edit call.
    Line breaks in inserted text are written with the document's own EOL.
    """

    def __init__(self, text: str) -> None:
        self._text = text
        self._index = PositionIndex(text)
        self._eol = detect_eol(text)
        self._patches: List[RangePatch] = []

    @property
    def patches(self) -> tuple[RangePatch, ...]:
        return tuple(self._patches)

    def replace(self, target: Range, text: str) -> None:
        start = self._resolve(target.start)
        end = self._resolve(target.end)
        self._patches.append(RangePatch(start=start, end=end, replacement=self._with_eol(text)))

    def insert(self, position: Position, text: str) -> None:
        offset = self._resolve(position)
        self._patches.append(RangePatch(start=offset, end=offset, replacement=self._with_eol(text)))

    def apply(self) -> PatchResult:
        return apply_range_patches(self._text, self._patches)

    @property
    def eol(self) -> str:
        return self._eol

    def _with_eol(self, text: str) -> str:
        if self._eol == "\n" or "\n" not in text:
            return text
        return text.replace("\r\n", "\n").replace("\n", self._eol)

    def _resolve(self, position: Position) -> int:
        try:
            return self._index.position_to_offset(position)
        except ValueError as exc:
            raise PatchApplyError(str(exc), reason="range_overflow") from exc


def apply_text_edits(original_text: str, edits: Sequence[TextEdit]) -> PatchResult:
    """Apply declarative edits, verifying each still covers its expected text."""

    index = PositionIndex(original_text)
    patches: list[RangePatch] = []
    for edit in edits:
        try:
            span = index.to_text_range(edit.range)
        except ValueError as exc:
            raise PatchApplyError(str(exc), reason="range_overflow", expected=edit.expected) from exc
        patches.append(RangePatch(start=span.start, end=span.end, replacement=edit.text, match_text=edit.expected))
    return apply_range_patches(original_text, patches)


def apply_range_patches(original_text: str, ranges: Sequence[RangePatch]) -> PatchResult:
    """Apply non-overlapping replacements, all resolved against ``original_text``.

    Every patch is validated before any text is produced, so a failure never
    leaves a half-applied result behind.
    """

    if not ranges:
        raise PatchApplyError("Range patches require at least one entry", reason="empty_range_patch")

    ordered = sorted(ranges, key=lambda item: (item.start, item.end))
    previous_end = 0
    for entry in ordered:
        _validate(original_text, entry)
        if entry.start < previous_end:
            raise PatchApplyError(
                f"Range [{entry.start}, {entry.end}) overlaps a previous patch",
                reason="range_overlap",
            )
        previous_end = entry.end

    pieces: list[str] = []
    spans: list[tuple[int, int]] = []
    cursor = 0
    length = 0
    for entry in ordered:
        kept = original_text[cursor : entry.start]
        pieces.append(kept)
        length += len(kept)
        pieces.append(entry.replacement)
        spans.append((length, length + len(entry.replacement)))
        length += len(entry.replacement)
        cursor = entry.end
    pieces.append(original_text[cursor:])

    updated_text = "".join(pieces)
    delta = len(updated_text) - len(original_text)
    summary = f"patch: {len(ordered)} edit(s), {delta:+d} chars"
    return PatchResult(text=updated_text, spans=tuple(spans), summary=summary)


def _validate(text: str, entry: RangePatch) -> None:
    if entry.start < 0 or entry.end < entry.start or entry.end > len(text):
        raise PatchApplyError(
            f"Range [{entry.start}, {entry.end}) outside document of length {len(text)}",
            reason="range_overflow",
            expected=entry.match_text,
        )
    if entry.match_text is None:
        return
    current = text[entry.start : entry.end]
    if current != entry.match_text:
        raise PatchApplyError(
            "Patch range content mismatch",
            reason="range_mismatch",
            expected=entry.match_text,
            actual=current,
        )


__all__ = [
    "PatchApplyError",
    "PatchResult",
    "RangePatch",
    "TextEditBuilder",
    "apply_range_patches",
    "apply_text_edits",
    "detect_eol",
]
