"""Tests for diagnostic records and their collection."""

from __future__ import annotations

from rststyle.core.problems import Problem
from rststyle.core.ranges import Position, Range
from rststyle.services.diagnostics import DEFAULT_SOURCE, Diagnostic, DiagnosticCollection, Severity


def _problem() -> Problem:
    return Problem(Range(Position(0, 0), Position(0, 1)), "Буква «ё» должна быть заменена на «е».", "rst.replaceYo")


def test_diagnostic_from_problem_uses_rule_id_as_code() -> None:
    diagnostic = Diagnostic.from_problem(_problem())

    assert diagnostic.code == "rst.replaceYo"
    assert diagnostic.source == DEFAULT_SOURCE == "rstCustom"
    assert diagnostic.severity is Severity.WARNING
    assert diagnostic.to_dict()["severity"] == "warning"


def test_diagnostic_severity_and_source_can_be_overridden() -> None:
    diagnostic = Diagnostic.from_problem(_problem(), severity=Severity.HINT, source="custom")

    assert diagnostic.to_dict()["source"] == "custom"
    assert diagnostic.severity is Severity.HINT


def test_collection_replaces_entries_wholesale() -> None:
    collection = DiagnosticCollection()
    first = Diagnostic.from_problem(_problem())

    collection.set("doc", [first, first])
    collection.set("doc", [first])

    assert collection.get("doc") == (first,)
    assert "doc" in collection
    assert len(collection) == 1
    assert list(collection) == [("doc", (first,))]


def test_collection_delete_and_clear() -> None:
    collection = DiagnosticCollection("name")
    collection.set("a", [])
    collection.set("b", [])

    collection.delete("a")
    collection.delete("missing")

    assert collection.get("a") == ()
    assert "b" in collection
    collection.clear()
    assert len(collection) == 0
