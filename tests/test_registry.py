"""Tests for the rule registry and toggles."""

from __future__ import annotations

import logging

import pytest

from rststyle.rules.registry import ALL_RULES, RULE_IDS, RuleRegistry, RuleToggles
from rststyle.rules.replace_yo import ReplaceYoRule


def test_registry_lists_rules_in_fixed_order() -> None:
    assert RULE_IDS == (
        "rst.replaceYo",
        "rst.bureaucraticWords",
        "rst.placeholderSnakeCase",
        "rst.sentencePerLine",
        "rst.headingGap",
    )
    assert [rule.id for rule in RuleRegistry().active_rules()] == list(RULE_IDS)


def test_toggles_disable_rules() -> None:
    registry = RuleRegistry(toggles=RuleToggles({"rst.headingGap": False}))

    assert "rst.headingGap" not in [rule.id for rule in registry.active_rules()]
    assert len(registry.active_rules()) == len(ALL_RULES) - 1


def test_only_enables_exactly_the_given_rules() -> None:
    toggles = RuleToggles.only(["rst.replaceYo"])

    assert toggles.is_enabled("rst.replaceYo")
    assert not toggles.is_enabled("rst.sentencePerLine")
    assert [rule.id for rule in RuleRegistry(toggles=toggles).active_rules()] == ["rst.replaceYo"]


def test_get_returns_rule_by_id() -> None:
    registry = RuleRegistry()

    assert isinstance(registry.get("rst.replaceYo"), ReplaceYoRule)
    with pytest.raises(KeyError):
        registry.get("rst.missing")


def test_duplicate_rule_ids_are_rejected() -> None:
    with pytest.raises(ValueError):
        RuleRegistry([ReplaceYoRule(), ReplaceYoRule()])


def test_unknown_toggles_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="rststyle.rules.registry"):
        registry = RuleRegistry(toggles=RuleToggles({"rst.unknown": False}))

    assert len(registry.active_rules()) == len(ALL_RULES)
    assert "rst.unknown" in caplog.text

