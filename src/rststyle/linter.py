"""Run every registered rule against a document and merge the findings."""

from __future__ import annotations

import logging
from typing import Iterable

from .core.positions import PositionIndex
from .core.problems import Problem
from .core.ranges import Range
from .rules.registry import DEFAULT_REGISTRY, RuleRegistry

LOGGER = logging.getLogger(__name__)


def check_all(text: str, *, registry: RuleRegistry | None = None) -> list[Problem]:
    """Return problems from every active rule, grouped in registry order.

    Within one rule problems follow document order; across rules they do not,
    so callers needing one ordered list should sort by range.
    """

    active = registry or DEFAULT_REGISTRY
    index = PositionIndex(text)
    problems: list[Problem] = []
    for rule in active.active_rules():
        problems.extend(rule.check(text, index=index))
    LOGGER.debug("Checked %d chars: %d problem(s)", len(text), len(problems))
    return problems


def check_in_range(text: str, target: Range, *, registry: RuleRegistry | None = None) -> list[Problem]:
    """Problems intersecting ``target``, keeping the first one per distinct range."""

    return dedupe_by_range(problem for problem in check_all(text, registry=registry) if problem.range.intersects(target))


def fixable_in_range(text: str, target: Range, *, registry: RuleRegistry | None = None) -> list[Problem]:
    """Deduplicated problems in ``target`` that carry a fix."""

    return [problem for problem in check_in_range(text, target, registry=registry) if problem.fixable]


def dedupe_by_range(problems: Iterable[Problem]) -> list[Problem]:
    seen: dict[tuple[int, int, int, int], Problem] = {}
    for problem in problems:
        seen.setdefault(problem.range.key, problem)
    return list(seen.values())


def sort_problems(problems: list[Problem]) -> list[Problem]:
    """Return ``problems`` in document order, stable for equal ranges."""

    return sorted(problems, key=lambda problem: (problem.range.start, problem.range.end))


__all__ = ["check_all", "check_in_range", "dedupe_by_range", "fixable_in_range", "sort_problems"]
