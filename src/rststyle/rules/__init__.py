"""Style rules and their registry."""

from .base import Rule
from .bureaucratic_words import BureaucraticWordsRule, PhraseEntry
from .heading_gap import HeadingGapRule
from .placeholder_case import PlaceholderCaseRule
from .registry import ALL_RULES, DEFAULT_REGISTRY, RULE_IDS, RuleRegistry, RuleToggles
from .replace_yo import ReplaceYoRule
from .sentence_per_line import SentencePerLineRule

__all__ = [
    "ALL_RULES",
    "DEFAULT_REGISTRY",
    "RULE_IDS",
    "BureaucraticWordsRule",
    "HeadingGapRule",
    "PhraseEntry",
    "PlaceholderCaseRule",
    "ReplaceYoRule",
    "Rule",
    "RuleRegistry",
    "RuleToggles",
    "SentencePerLineRule",
]
