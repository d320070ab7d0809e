"""Rule: ``<placeholder>`` names are written in snake_case."""

from __future__ import annotations

import re

from ..core.positions import PositionIndex
from ..core.problems import Problem
from .base import Rule

_PLACEHOLDER_RE = re.compile(r"<([^<>]+)>")
_SNAKE_CASE_RE = re.compile(r"[a-z]+(?:_[a-z]+)*")
_SEPARATOR_RUN_RE = re.compile(r"[-\s]+")
_UNDERSCORE_RUN_RE = re.compile(r"_+")


def is_snake_case(name: str) -> bool:
    return _SNAKE_CASE_RE.fullmatch(name) is not None


def to_snake_case(name: str) -> str:
    """Canonicalize ``name``: separators become ``_``, then lowercase.

    Only hyphens and whitespace are treated as word separators; camelCase
    boundaries are not split, so ``IpAddress`` becomes ``ipaddress``.
    """

    value = _SEPARATOR_RUN_RE.sub("_", name)
    value = _UNDERSCORE_RUN_RE.sub("_", value)
    return value.strip("_").lower()


def inside_inline_literal(text: str, start: int, end: int) -> bool:
    """Return ``True`` when backticks on the same line enclose ``text[start:end]``."""

    opening = text.rfind("`", 0, start)
    if opening < 0:
        return False
    closing = text.find("`", end)
    if closing < 0:
        return False
    return "\n" not in text[opening:closing]


class PlaceholderCaseRule(Rule):
    id = "rst.placeholderSnakeCase"
    message = "Плейсхолдер должен быть записан в snake_case."

    def scan(self, text: str, index: PositionIndex) -> list[Problem]:
        problems: list[Problem] = []
        for match in _PLACEHOLDER_RE.finditer(text):
            inner = match.group(1)
            if is_snake_case(inner):
                continue
            start, end = match.span()
            if inside_inline_literal(text, start, end):
                continue
            canonical = to_snake_case(inner)
            if canonical == inner:
                # Nothing the canonical form can change, e.g. digits.
                problems.append(self.unfixable(index, start, end))
                continue
            problems.append(self.replacement(text, index, start, end, f"<{canonical}>"))
        return problems


__all__ = ["PlaceholderCaseRule", "inside_inline_literal", "is_snake_case", "to_snake_case"]
