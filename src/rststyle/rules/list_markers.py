"""Recognition of line-leading list markers."""

from __future__ import annotations

import re
from dataclasses import dataclass

# Order matters: the first pattern that matches wins.
_MARKER_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"#\.\s+"),  # "#. "
    re.compile(r"[0-9]+[.)]\s+"),  # "1. "  "2) "
    re.compile(r"[a-zA-Z][.)]\s+"),  # "a. "  "b) "
    re.compile(r"[*\-+>]\s+"),  # "* " "- " "+ " "> "
)


@dataclass(slots=True, frozen=True)
class ListMarkerInfo:
    """A recognized marker; ``length`` includes the trailing whitespace."""

    marker: str

    @property
    def length(self) -> int:
        return len(self.marker)


def match_list_marker(content: str) -> ListMarkerInfo | None:
    """Return the marker starting ``content`` (already stripped of indentation)."""

    for pattern in _MARKER_PATTERNS:
        match = pattern.match(content)
        if match:
            return ListMarkerInfo(match.group(0))
    return None


def indent_width(line: str) -> int:
    """Number of leading whitespace characters of ``line``."""

    return len(line) - len(line.lstrip())


__all__ = ["ListMarkerInfo", "indent_width", "match_list_marker"]
