"""Shared pytest fixtures."""

from __future__ import annotations

from typing import Callable, Iterator

import pytest

from rststyle.editor.document_model import DocumentState
from rststyle.services.settings import Settings
from rststyle.utils import logging as logging_utils

_ENV_VARS = (
    "RSTSTYLE_SEVERITY",
    "RSTSTYLE_DIAGNOSTIC_SOURCE",
    "RSTSTYLE_DEBUG_LOGGING",
    "RSTSTYLE_MAX_DOCUMENT_CHARS",
    "RSTSTYLE_MAX_FIX_PASSES",
    "RSTSTYLE_DISABLED_RULES",
    "RSTSTYLE_SETTINGS_PATH",
    "RSTSTYLE_LOG_DIR",
)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_logging_state() -> Iterator[None]:
    logging_utils.reset_logging()
    yield
    logging_utils.reset_logging()


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def make_document() -> Callable[..., DocumentState]:
    def _factory(text: str, **kwargs: object) -> DocumentState:
        return DocumentState(text=text, **kwargs)

    return _factory
