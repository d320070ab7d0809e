"""Command-line entry point for linting reStructuredText files."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, TextIO

from .core.problems import Problem
from .editor.document_model import DEFAULT_LANGUAGE, DocumentState
from .linter import sort_problems
from .rules.registry import RULE_IDS, RuleToggles
from .services.lint_service import LintService
from .services.settings import Settings, SettingsStore, parse_overrides
from .utils import logging as logging_utils

_LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PROBLEMS = 1
EXIT_USAGE = 2


def configure_logging(debug: bool = False, *, log_dir: str | None = None, force: bool = False) -> None:
    """Configure logging; a log file is only written when a directory is known."""

    level = logging.DEBUG if debug else logging.WARNING
    wants_file = bool(log_dir or os.environ.get("RSTSTYLE_LOG_DIR"))
    logging_utils.setup_logging(level, log_dir=log_dir, log_file=wants_file, force=force)
    _LOGGER.debug("Logging configured (level=%s)", logging.getLevelName(level))


def load_settings(
    path: Optional[Path] = None,
    *,
    store: SettingsStore | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> Settings:
    """Load persisted settings or fall back to defaults."""

    active_store = store if store is not None else SettingsStore(path)
    return active_store.load(overrides=overrides)


def main(argv: Sequence[str] | None = None, *, stdout: TextIO | None = None) -> int:
    """Entry point invoked by the ``rststyle`` console script."""

    out = stdout or sys.stdout
    args = _parse_cli_args(argv)
    configure_logging(args.debug, log_dir=args.log_dir)

    settings_path = args.settings_path or os.environ.get("RSTSTYLE_SETTINGS_PATH")
    store = SettingsStore(Path(settings_path).expanduser() if settings_path else None)
    try:
        overrides = parse_overrides(args.overrides or [])
        overrides.update(_rule_overrides(args.rules or [], args.disabled or []))
    except ValueError as exc:
        print(f"rststyle: {exc}", file=sys.stderr)
        return EXIT_USAGE

    settings = load_settings(store=store, overrides=overrides or None)
    if settings.debug_logging and not args.debug:
        configure_logging(True, log_dir=args.log_dir, force=True)

    if args.dump_settings:
        payload = asdict(settings)
        payload["settings_path"] = str(store.path)
        json.dump(payload, out, indent=2, sort_keys=True, ensure_ascii=False)
        out.write("\n")
        return EXIT_OK

    if not args.paths:
        print("rststyle: no input paths given", file=sys.stderr)
        return EXIT_USAGE

    try:
        files = list(_collect_files(args.paths, settings.file_extensions))
    except FileNotFoundError as exc:
        print(f"rststyle: {exc}", file=sys.stderr)
        return EXIT_USAGE

    service = LintService(settings)
    report: list[tuple[Path, list[Problem]]] = []
    for path in files:
        document = DocumentState.from_path(path, language=DEFAULT_LANGUAGE)
        if args.fix:
            outcome = service.fix_all(document)
            if outcome.applied:
                document.save()
                _LOGGER.info("Applied %d fix(es) to %s", outcome.applied, path)
            problems = list(outcome.remaining)
        else:
            problems = list(service.run(document).problems)
        report.append((path, sort_problems(problems)))

    if args.format == "json":
        _write_json(report, out)
    else:
        _write_text(report, out, severity=settings.severity)
    return EXIT_PROBLEMS if any(problems for _path, problems in report) else EXIT_OK


def _parse_cli_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="rststyle",
        description="Check reStructuredText documents against the house style rules.",
    )
    parser.add_argument("paths", nargs="*", metavar="PATH", help="Files or directories to check.")
    parser.add_argument("--fix", action="store_true", help="Apply every available fix and rewrite the files.")
    parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format for the reported problems.",
    )
    parser.add_argument(
        "--rule",
        dest="rules",
        metavar="RULE_ID",
        action="append",
        default=[],
        help="Run only the given rule (repeatable).",
    )
    parser.add_argument(
        "--disable",
        dest="disabled",
        metavar="RULE_ID",
        action="append",
        default=[],
        help="Disable the given rule (repeatable).",
    )
    parser.add_argument(
        "--dump-settings",
        action="store_true",
        help="Print the effective settings payload and exit.",
    )
    parser.add_argument(
        "--settings-path",
        metavar="PATH",
        help="Override the default ~/.rststyle/settings.json path (JSON or YAML).",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        metavar="KEY=VALUE",
        action="append",
        default=[],
        help="Override a setting for this run (repeatable).",
    )
    parser.add_argument("--log-dir", metavar="PATH", help="Also write a rotating log file to PATH.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def _collect_files(paths: Iterable[str], extensions: Sequence[str]) -> Iterable[Path]:
    suffixes = {suffix.lower() for suffix in extensions}
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            for candidate in sorted(path.rglob("*")):
                if candidate.is_file() and candidate.suffix.lower() in suffixes:
                    yield candidate
        elif path.is_file():
            yield path
        else:
            raise FileNotFoundError(f"No such file or directory: {raw}")


def _rule_overrides(selected: Sequence[str], disabled: Sequence[str]) -> Dict[str, Any]:
    unknown = sorted((set(selected) | set(disabled)) - set(RULE_IDS))
    if unknown:
        raise ValueError(f"Unknown rule id(s): {', '.join(unknown)}; known: {', '.join(RULE_IDS)}")
    if not selected and not disabled:
        return {}
    flags = dict(RuleToggles.only(selected).flags) if selected else {rule_id: True for rule_id in RULE_IDS}
    for rule_id in disabled:
        flags[rule_id] = False
    return {"rules": flags}


def _write_text(report: Sequence[tuple[Path, Sequence[Problem]]], out: TextIO, *, severity: str) -> None:
    total = 0
    for path, problems in report:
        for problem in problems:
            start = problem.range.start
            fixable = " (fixable)" if problem.fixable else ""
            out.write(
                f"{path}:{start.line + 1}:{start.column + 1}: {severity} [{problem.rule_id}] {problem.message}{fixable}\n"
            )
            total += 1
    if total:
        out.write(f"{total} problem(s) in {sum(1 for _path, problems in report if problems)} file(s)\n")


def _write_json(report: Sequence[tuple[Path, Sequence[Problem]]], out: TextIO) -> None:
    payload = [
        {"path": str(path), "problems": [problem.to_payload() for problem in problems]}
        for path, problems in report
    ]
    json.dump(payload, out, indent=2, ensure_ascii=False)
    out.write("\n")


__all__ = ["configure_logging", "load_settings", "main"]
