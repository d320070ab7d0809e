"""Static, ordered registry of every style rule."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from .base import Rule
from .bureaucratic_words import BureaucraticWordsRule
from .heading_gap import HeadingGapRule
from .placeholder_case import PlaceholderCaseRule
from .replace_yo import ReplaceYoRule
from .sentence_per_line import SentencePerLineRule

LOGGER = logging.getLogger(__name__)

ALL_RULES: tuple[Rule, ...] = (
    ReplaceYoRule(),
    BureaucraticWordsRule(),
    PlaceholderCaseRule(),
    SentencePerLineRule(),
    HeadingGapRule(),
)

RULE_IDS: tuple[str, ...] = tuple(rule.id for rule in ALL_RULES)


@dataclass(slots=True, frozen=True)
class RuleToggles:
    """Per-rule enablement; rules without an explicit flag are enabled."""

    flags: Mapping[str, bool] = field(default_factory=dict)

    def is_enabled(self, rule_id: str) -> bool:
        return bool(self.flags.get(rule_id, True))

    @classmethod
    def only(cls, rule_ids: Iterable[str], *, known: Iterable[str] = RULE_IDS) -> RuleToggles:
        """Enable exactly ``rule_ids`` out of ``known``."""

        wanted = set(rule_ids)
        return cls({rule_id: rule_id in wanted for rule_id in known})


class RuleRegistry:
    """Ordered collection of rules filtered by :class:`RuleToggles`."""

    def __init__(self, rules: Iterable[Rule] = ALL_RULES, toggles: RuleToggles | None = None) -> None:
        self._rules = tuple(rules)
        ids = [rule.id for rule in self._rules]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate rule ids in registry: {ids}")
        self._toggles = toggles if toggles is not None else RuleToggles()
        unknown = sorted(set(self._toggles.flags) - set(ids))
        if unknown:
            LOGGER.warning("Ignoring toggles for unknown rule id(s): %s", ", ".join(unknown))

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    @property
    def toggles(self) -> RuleToggles:
        return self._toggles

    def active_rules(self) -> tuple[Rule, ...]:
        return tuple(rule for rule in self._rules if self._toggles.is_enabled(rule.id))

    def get(self, rule_id: str) -> Rule:
        for rule in self._rules:
            if rule.id == rule_id:
                return rule
        raise KeyError(rule_id)


DEFAULT_REGISTRY = RuleRegistry()

__all__ = ["ALL_RULES", "DEFAULT_REGISTRY", "RULE_IDS", "RuleRegistry", "RuleToggles"]
