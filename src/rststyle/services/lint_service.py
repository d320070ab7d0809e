"""Host-side orchestration: publish diagnostics, offer and apply fixes."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Collection

from ..core.problems import Problem
from ..core.ranges import Range
from ..editor.document_model import DocumentState, DocumentVersion
from ..editor.patches import PatchResult, TextEditBuilder
from ..linter import check_all, dedupe_by_range, sort_problems
from ..rules.registry import ALL_RULES, RuleRegistry
from .diagnostics import Diagnostic, DiagnosticCollection
from .settings import Settings

LOGGER = logging.getLogger(__name__)


class StaleProblemError(RuntimeError):
    """Raised when a fix was computed against an older document version."""

    def __init__(self, problem: Problem, *, expected: DocumentVersion | None, actual: DocumentVersion) -> None:
        super().__init__(
            f"Problem {problem.rule_id} at {problem.range.key} is stale; re-run the checks before fixing"
        )
        self.problem = problem
        self.expected = expected
        self.actual = actual


@dataclass(slots=True, frozen=True)
class QuickFix:
    """A fix offered for a range of a document."""

    title: str
    problem: Problem


@dataclass(slots=True, frozen=True)
class LintResult:
    """Problems computed for exactly one document version."""

    version: DocumentVersion
    problems: tuple[Problem, ...]
    skipped: bool = False


@dataclass(slots=True, frozen=True)
class FixAllResult:
    applied: int
    remaining: tuple[Problem, ...]
    exhausted: bool = False


class LintService:
    """Lints documents on demand and keeps a diagnostic per open document.

    Every operation recomputes the whole problem set from the current text;
    problems from an earlier version are refused instead of being re-mapped.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        collection: DiagnosticCollection | None = None,
        registry: RuleRegistry | None = None,
    ) -> None:
        self._settings = settings if settings is not None else Settings()
        if collection is None:
            collection = DiagnosticCollection(self._settings.diagnostic_source)
        self._collection = collection
        self._registry = registry if registry is not None else RuleRegistry(ALL_RULES, self._settings.toggles())
        self._results: dict[str, LintResult] = {}

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def collection(self) -> DiagnosticCollection:
        return self._collection

    @property
    def registry(self) -> RuleRegistry:
        return self._registry

    # ------------------------------------------------------------------
    # Document lifecycle
    # ------------------------------------------------------------------
    def accepts(self, document: DocumentState) -> bool:
        return document.language in self._settings.languages

    def run(self, document: DocumentState) -> LintResult:
        """Re-check ``document`` from scratch and publish its diagnostics."""

        version = document.version_info()
        if not self.accepts(document):
            self.close(document)
            return LintResult(version=version, problems=(), skipped=True)

        limit = self._settings.max_document_chars
        if limit is not None and len(document.text) > limit:
            LOGGER.warning(
                "Skipping %s: %d chars exceeds max_document_chars=%d",
                document.document_id,
                len(document.text),
                limit,
            )
            self.close(document)
            return LintResult(version=version, problems=(), skipped=True)

        problems = tuple(check_all(document.text, registry=self._registry))
        result = LintResult(version=version, problems=problems)
        self._results[document.document_id] = result
        severity = self._settings.severity_level()
        source = self._settings.diagnostic_source
        self._collection.set(
            document.document_id,
            [Diagnostic.from_problem(problem, severity=severity, source=source) for problem in problems],
        )
        return result

    def close(self, document: DocumentState) -> None:
        self._collection.delete(document.document_id)
        self._results.pop(document.document_id, None)

    def problems(self, document: DocumentState) -> tuple[Problem, ...]:
        """Problems for the current version, re-checking when the cache is stale."""

        cached = self._results.get(document.document_id)
        if cached is not None and cached.version == document.version_info():
            return cached.problems
        return self.run(document).problems

    # ------------------------------------------------------------------
    # Fixes
    # ------------------------------------------------------------------
    def quick_fixes(self, document: DocumentState, target: Range) -> list[QuickFix]:
        """Fixes for problems intersecting ``target``, one per distinct range."""

        in_range = dedupe_by_range(problem for problem in self.problems(document) if problem.range.intersects(target))
        return [QuickFix(title=f"Fix: {problem.message}", problem=problem) for problem in in_range if problem.fixable]

    def apply_fix(self, document: DocumentState, problem: Problem) -> LintResult:
        """Apply ``problem``'s fix to ``document`` and re-check the whole text."""

        fix = problem.fix
        if fix is None:
            raise ValueError(f"Problem {problem.rule_id} has no fix")
        cached = self._results.get(document.document_id)
        current = document.version_info()
        if cached is None or cached.version != current or problem not in cached.problems:
            LOGGER.info("Refusing stale fix for %s on %s", problem.rule_id, document.document_id)
            raise StaleProblemError(problem, expected=cached.version if cached else None, actual=current)

        builder = TextEditBuilder(document.text)
        fix(builder)
        patch: PatchResult = builder.apply()
        document.update_text(patch.text)
        LOGGER.debug("Applied %s to %s (%s)", problem.rule_id, document.document_id, patch.summary)
        return self.run(document)

    def fix_all(self, document: DocumentState, *, rule_ids: Collection[str] | None = None) -> FixAllResult:
        """Apply fixes one at a time, re-checking after each, until none remain."""

        applied = 0
        result = self.run(document)
        while True:
            candidates = [
                problem
                for problem in sort_problems(list(result.problems))
                if problem.fixable and (rule_ids is None or problem.rule_id in rule_ids)
            ]
            if not candidates:
                return FixAllResult(applied=applied, remaining=result.problems)
            if applied >= self._settings.max_fix_passes:
                LOGGER.warning(
                    "Stopped fixing %s after %d passes with %d fixable problem(s) left",
                    document.document_id,
                    applied,
                    len(candidates),
                )
                return FixAllResult(applied=applied, remaining=result.problems, exhausted=True)
            result = self.apply_fix(document, candidates[0])
            applied += 1


__all__ = ["FixAllResult", "LintResult", "LintService", "QuickFix", "StaleProblemError"]
