"""Host-facing services: settings, diagnostics and the lint session."""

from .diagnostics import Diagnostic, DiagnosticCollection, Severity
from .lint_service import LintService, QuickFix, StaleProblemError
from .settings import Settings, SettingsStore

__all__ = [
    "Diagnostic",
    "DiagnosticCollection",
    "LintService",
    "QuickFix",
    "Settings",
    "SettingsStore",
    "Severity",
    "StaleProblemError",
]
