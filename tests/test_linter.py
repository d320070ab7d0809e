"""Tests for the rule aggregation helpers."""

from __future__ import annotations

from rststyle.core.problems import Problem
from rststyle.core.ranges import Position, Range
from rststyle.linter import check_all, check_in_range, dedupe_by_range, fixable_in_range, sort_problems
from rststyle.rules.registry import RuleRegistry, RuleToggles

SAMPLE = "Заголовок\n=========\n\nРаздел\n======\nЭто ёж. Он является <Some-Name>.\n"


def _line(number: int) -> Range:
    return Range(Position(number, 0), Position(number, 200))


def test_check_all_groups_problems_by_rule_order() -> None:
    problems = check_all(SAMPLE)

    assert [problem.rule_id for problem in problems] == [
        "rst.replaceYo",
        "rst.bureaucraticWords",
        "rst.placeholderSnakeCase",
        "rst.sentencePerLine",
        "rst.headingGap",
    ]


def test_check_all_respects_toggles() -> None:
    registry = RuleRegistry(toggles=RuleToggles.only(["rst.replaceYo"]))

    problems = check_all(SAMPLE, registry=registry)

    assert [problem.rule_id for problem in problems] == ["rst.replaceYo"]


def test_check_all_on_clean_text() -> None:
    assert check_all("Простой текст без ошибок.\n") == []
    assert check_all("") == []


def test_check_in_range_filters_by_intersection() -> None:
    problems = check_in_range(SAMPLE, _line(5))

    assert {problem.rule_id for problem in problems} == {
        "rst.replaceYo",
        "rst.bureaucraticWords",
        "rst.placeholderSnakeCase",
        "rst.sentencePerLine",
    }


def test_check_in_range_includes_touching_problems() -> None:
    caret = Range.caret(Position(1, 0))

    assert [problem.rule_id for problem in check_in_range(SAMPLE, caret)] == ["rst.headingGap"]


def test_dedupe_keeps_first_problem_per_range() -> None:
    span = Range(Position(0, 0), Position(0, 1))
    first = Problem(span, "first", "a")
    second = Problem(span, "second", "b")
    other = Problem(Range(Position(0, 1), Position(0, 2)), "other", "c")

    assert dedupe_by_range([first, second, other]) == [first, other]


def test_fixable_in_range_drops_problems_without_fix() -> None:
    text = "<v2> и ёж"

    problems = fixable_in_range(text, _line(0))

    assert [problem.rule_id for problem in problems] == ["rst.replaceYo"]


def test_sort_problems_orders_by_start_then_end() -> None:
    late = Problem(Range(Position(2, 0), Position(2, 1)), "late", "a")
    early_long = Problem(Range(Position(0, 0), Position(1, 0)), "long", "b")
    early_short = Problem(Range(Position(0, 0), Position(0, 3)), "short", "c")

    assert sort_problems([late, early_long, early_short]) == [early_short, early_long, late]
