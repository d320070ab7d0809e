"""Logging setup shared by the CLI and embedding hosts.

Only the ``rststyle`` package logger is configured; records still propagate,
so a host that owns the root logger keeps seeing them.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import TextIO

__all__ = ["PACKAGE_LOGGER", "get_log_path", "reset_logging", "setup_logging"]

PACKAGE_LOGGER = "rststyle"
LOG_FILE_NAME = "rststyle.log"

_DEFAULT_LOG_DIR = Path.home() / ".rststyle" / "logs"
_LOG_DIR_ENV = "RSTSTYLE_LOG_DIR"
_FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_CONSOLE_FORMAT = "rststyle: %(levelname)s: %(message)s"
_CONFIGURED = False
_LOG_PATH: Path | None = None
_INSTALLED: list[logging.Handler] = []


def setup_logging(
    level: int = logging.INFO,
    *,
    log_dir: Path | str | None = None,
    console: bool = True,
    stream: TextIO | None = None,
    log_file: bool = True,
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
    force: bool = False,
) -> Path | None:
    """Attach console and rotating-file handlers to the package logger.

    Returns the log file path, or ``None`` when no file is written. Repeated
    calls are no-ops unless ``force`` is set.
    """

    global _CONFIGURED, _LOG_PATH
    if _CONFIGURED and not force:
        return _LOG_PATH

    reset_logging()
    logger = logging.getLogger(PACKAGE_LOGGER)
    log_path: Path | None = None
    if log_file:
        target_dir = _resolve_log_dir(log_dir)
        target_dir.mkdir(parents=True, exist_ok=True)
        log_path = target_dir / LOG_FILE_NAME
        _install(logger, _file_handler(log_path, max_bytes, backup_count), level)
    if console:
        _install(logger, _console_handler(stream), level)
    logger.setLevel(level)

    _CONFIGURED = True
    _LOG_PATH = log_path
    return log_path


def reset_logging() -> None:
    """Detach and close every handler installed by :func:`setup_logging`."""

    global _CONFIGURED, _LOG_PATH
    logger = logging.getLogger(PACKAGE_LOGGER)
    while _INSTALLED:
        handler = _INSTALLED.pop()
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    _CONFIGURED = False
    _LOG_PATH = None


def get_log_path() -> Path | None:
    """Return the currently configured log file if available."""

    return _LOG_PATH


def _install(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    logger.addHandler(handler)
    _INSTALLED.append(handler)


def _file_handler(path: Path, max_bytes: int, backup_count: int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
    handler.setFormatter(logging.Formatter(fmt=_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def _console_handler(stream: TextIO | None) -> logging.Handler:
    # Reports go to stdout, so log lines stay on stderr.
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=_CONSOLE_FORMAT))
    return handler


def _resolve_log_dir(log_dir: Path | str | None) -> Path:
    return Path(log_dir or os.environ.get(_LOG_DIR_ENV) or _DEFAULT_LOG_DIR).expanduser()
