"""Tests for the logging bootstrap helper."""

from __future__ import annotations

import io
import logging
from pathlib import Path

import pytest

from rststyle.utils import logging as logging_utils


def test_setup_logging_writes_rotating_file(tmp_path: Path) -> None:
    path = logging_utils.setup_logging(logging.DEBUG, log_dir=tmp_path, console=False)

    logging.getLogger("rststyle.test").debug("hello from the test")

    assert path == tmp_path / "rststyle.log"
    assert logging_utils.get_log_path() == path
    for handler in logging.getLogger(logging_utils.PACKAGE_LOGGER).handlers:
        handler.flush()
    assert "hello from the test" in path.read_text(encoding="utf-8")


def test_console_output_uses_short_format() -> None:
    stream = io.StringIO()
    logging_utils.setup_logging(logging.WARNING, stream=stream, log_file=False)

    logging.getLogger("rststyle.services").warning("document skipped")
    logging.getLogger("rststyle.services").info("not shown")

    assert stream.getvalue() == "rststyle: WARNING: document skipped\n"


def test_only_the_package_logger_is_configured() -> None:
    root_handlers = list(logging.getLogger().handlers)

    logging_utils.setup_logging(console=True, stream=io.StringIO(), log_file=False)

    assert logging.getLogger().handlers == root_handlers
    assert len(logging.getLogger(logging_utils.PACKAGE_LOGGER).handlers) == 1


def test_setup_logging_is_idempotent_unless_forced(tmp_path: Path) -> None:
    first = logging_utils.setup_logging(log_dir=tmp_path / "one", console=False)
    second = logging_utils.setup_logging(log_dir=tmp_path / "two", console=False)
    forced = logging_utils.setup_logging(log_dir=tmp_path / "two", console=False, force=True)

    assert second == first
    assert forced == tmp_path / "two" / "rststyle.log"
    assert len(logging.getLogger(logging_utils.PACKAGE_LOGGER).handlers) == 1


def test_log_dir_falls_back_to_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RSTSTYLE_LOG_DIR", str(tmp_path / "env"))

    path = logging_utils.setup_logging(console=False)

    assert path == tmp_path / "env" / "rststyle.log"


def test_reset_logging_detaches_handlers(tmp_path: Path) -> None:
    logging_utils.setup_logging(log_dir=tmp_path, stream=io.StringIO())

    logging_utils.reset_logging()

    logger = logging.getLogger(logging_utils.PACKAGE_LOGGER)
    assert logger.handlers == []
    assert logger.level == logging.NOTSET
    assert logging_utils.get_log_path() is None
