"""Tests for the lint service orchestration."""

from __future__ import annotations

import logging
from typing import Callable

import pytest

from rststyle.core.ranges import Position, Range
from rststyle.editor.document_model import DocumentState
from rststyle.services.diagnostics import DiagnosticCollection, Severity
from rststyle.services.lint_service import LintService, StaleProblemError
from rststyle.services.settings import Settings

DocumentFactory = Callable[..., DocumentState]

MIXED = "Title\n=====\nNext\n====\nОн является ёжиком. Это <Some-Name>.\n"


def test_run_publishes_one_diagnostic_per_problem(make_document: DocumentFactory) -> None:
    collection = DiagnosticCollection()
    service = LintService(collection=collection)
    document = make_document(MIXED)

    result = service.run(document)

    diagnostics = collection.get(document.document_id)
    assert not result.skipped
    assert result.version == document.version_info()
    assert len(diagnostics) == len(result.problems) == 5
    assert {diagnostic.code for diagnostic in diagnostics} == {
        "rst.replaceYo",
        "rst.bureaucraticWords",
        "rst.placeholderSnakeCase",
        "rst.sentencePerLine",
        "rst.headingGap",
    }
    assert all(diagnostic.source == "rstCustom" for diagnostic in diagnostics)
    assert all(diagnostic.severity is Severity.WARNING for diagnostic in diagnostics)


def test_injected_empty_collection_is_shared(make_document: DocumentFactory) -> None:
    collection = DiagnosticCollection()
    service = LintService(collection=collection)
    document = make_document("ёж")

    service.run(document)

    assert service.collection is collection
    assert len(collection.get(document.document_id)) == 1


def test_severity_and_toggles_come_from_settings(make_document: DocumentFactory) -> None:
    settings = Settings(severity="error")
    settings.rules["rst.headingGap"] = False
    service = LintService(settings)
    document = make_document(MIXED)

    service.run(document)

    diagnostics = service.collection.get(document.document_id)
    assert len(diagnostics) == 4
    assert all(diagnostic.severity is Severity.ERROR for diagnostic in diagnostics)


def test_other_languages_are_skipped(make_document: DocumentFactory) -> None:
    service = LintService()
    document = make_document("ё", language="markdown")

    result = service.run(document)

    assert result.skipped
    assert result.problems == ()
    assert document.document_id not in service.collection


def test_oversized_documents_are_skipped(make_document: DocumentFactory, caplog: pytest.LogCaptureFixture) -> None:
    service = LintService(Settings(max_document_chars=3))
    document = make_document("ёёёё")

    with caplog.at_level(logging.WARNING, logger="rststyle.services.lint_service"):
        result = service.run(document)

    assert result.skipped
    assert "max_document_chars" in caplog.text


def test_close_removes_diagnostics(make_document: DocumentFactory) -> None:
    service = LintService()
    document = make_document("ё")
    service.run(document)

    service.close(document)

    assert document.document_id not in service.collection


def test_problems_are_cached_per_version(make_document: DocumentFactory) -> None:
    service = LintService()
    document = make_document("ё")
    first = service.run(document).problems

    assert service.problems(document) is first

    document.update_text("ёё")
    assert len(service.problems(document)) == 2


def test_quick_fixes_are_titled_and_deduplicated(make_document: DocumentFactory) -> None:
    service = LintService()
    document = make_document("<v2> ё")

    fixes = service.quick_fixes(document, Range(Position(0, 0), Position(0, 6)))

    assert [fix.title for fix in fixes] == ["Fix: Буква «ё» должна быть заменена на «е»."]
    assert fixes[0].problem.rule_id == "rst.replaceYo"


def test_apply_fix_updates_text_and_rechecks(make_document: DocumentFactory) -> None:
    service = LintService()
    document = make_document("ёж и ёлка")
    problem = service.run(document).problems[0]

    result = service.apply_fix(document, problem)

    assert document.text == "еж и ёлка"
    assert document.version_id == 2
    assert result.version == document.version_info()
    assert len(result.problems) == 1
    assert len(service.collection.get(document.document_id)) == 1


def test_apply_fix_refuses_problems_from_older_versions(make_document: DocumentFactory) -> None:
    service = LintService()
    document = make_document("ёж")
    problem = service.run(document).problems[0]
    document.update_text("ежик ёж")

    with pytest.raises(StaleProblemError) as excinfo:
        service.apply_fix(document, problem)

    assert excinfo.value.actual == document.version_info()
    assert document.text == "ежик ёж"


def test_apply_fix_requires_a_prior_run(make_document: DocumentFactory) -> None:
    service = LintService()
    document = make_document("ёж")
    problem = LintService().run(make_document("ёж")).problems[0]

    with pytest.raises(StaleProblemError):
        service.apply_fix(document, problem)


def test_apply_fix_rejects_unfixable_problems(make_document: DocumentFactory) -> None:
    service = LintService()
    document = make_document("<v2>")
    problem = service.run(document).problems[0]

    with pytest.raises(ValueError):
        service.apply_fix(document, problem)


def test_fix_all_converges(make_document: DocumentFactory) -> None:
    service = LintService()
    document = make_document(MIXED)

    outcome = service.fix_all(document)

    assert outcome.applied == 5
    assert outcome.remaining == ()
    assert not outcome.exhausted
    assert document.text == "Title\n=====\nТекст раздела.\nNext\n====\nОн быть ежиком.\nЭто <some_name>.\n"


def test_fix_all_can_be_limited_to_rules(make_document: DocumentFactory) -> None:
    service = LintService()
    document = make_document("Всё является ёлкой")

    outcome = service.fix_all(document, rule_ids={"rst.replaceYo"})

    assert outcome.applied == 2
    assert document.text == "Все является елкой"
    assert [problem.rule_id for problem in outcome.remaining] == ["rst.bureaucraticWords"]


def test_fix_all_stops_after_max_passes(make_document: DocumentFactory) -> None:
    service = LintService(Settings(max_fix_passes=1))
    document = make_document("ё ё")

    outcome = service.fix_all(document)

    assert outcome.exhausted
    assert outcome.applied == 1
    assert document.text == "е ё"
    assert len(outcome.remaining) == 1


def test_fix_all_leaves_unfixable_problems(make_document: DocumentFactory) -> None:
    service = LintService()
    document = make_document("<v2>")

    outcome = service.fix_all(document)

    assert outcome.applied == 0
    assert [problem.fixable for problem in outcome.remaining] == [False]
