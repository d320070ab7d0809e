"""Settings dataclasses and persistence helpers."""

from __future__ import annotations

import io
import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, get_args, get_origin, get_type_hints

from jsonschema import Draft7Validator
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ..rules.registry import RULE_IDS, RuleToggles
from .diagnostics import DEFAULT_SOURCE, Severity

__all__ = ["SETTINGS_SCHEMA", "Settings", "SettingsStore", "coerce_field", "parse_overrides", "settings_errors"]

LOGGER = logging.getLogger(__name__)
_SETTINGS_DIR = Path.home() / ".rststyle"
_DEFAULT_SETTINGS_PATH = _SETTINGS_DIR / "settings.json"
_SETTINGS_VERSION = 1
_YAML_SUFFIXES = {".yaml", ".yml"}
_ENV_OVERRIDES: Mapping[str, str] = {
    "RSTSTYLE_SEVERITY": "severity",
    "RSTSTYLE_DIAGNOSTIC_SOURCE": "diagnostic_source",
    "RSTSTYLE_DEBUG_LOGGING": "debug_logging",
    "RSTSTYLE_MAX_DOCUMENT_CHARS": "max_document_chars",
    "RSTSTYLE_MAX_FIX_PASSES": "max_fix_passes",
}
_DISABLED_RULES_ENV = "RSTSTYLE_DISABLED_RULES"
_TRUE_VALUES = {"1", "true", "yes", "on", "debug"}
_FALSE_VALUES = {"0", "false", "no", "off", "disabled"}
_NULL_VALUES = {"none", "null"}

SETTINGS_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "version": {"type": "integer"},
        "rules": {
            "type": "object",
            "additionalProperties": {"type": "boolean"},
        },
        "severity": {"type": "string", "enum": [item.value for item in Severity]},
        "diagnostic_source": {"type": "string", "minLength": 1},
        "languages": {"type": "array", "items": {"type": "string", "minLength": 1}},
        "file_extensions": {"type": "array", "items": {"type": "string", "pattern": r"^\."}},
        "max_document_chars": {"type": ["integer", "null"], "minimum": 1},
        "max_fix_passes": {"type": "integer", "minimum": 1},
        "debug_logging": {"type": "boolean"},
    },
    "additionalProperties": True,
}

_SETTINGS_VALIDATOR = Draft7Validator(SETTINGS_SCHEMA)


def settings_errors(payload: Mapping[str, Any]) -> list[str]:
    """Return readable schema violations for a settings payload."""

    messages: list[str] = []
    for error in sorted(_SETTINGS_VALIDATOR.iter_errors(dict(payload)), key=lambda item: list(map(str, item.path))):
        location = ".".join(str(part) for part in error.path) or "<root>"
        messages.append(f"{location}: {error.message}")
    return messages


def coerce_field(name: str, raw_value: str) -> Any:
    """Convert the text form of an override into the type declared for ``name``.

    Booleans accept ``on``/``off`` style words, optional fields accept
    ``none``/``null`` and list or mapping fields take JSON.
    """

    hints = get_type_hints(Settings)
    if name not in hints:
        raise ValueError(f"Unknown setting '{name}'.")
    annotation = hints[name]
    value = raw_value.strip()
    if type(None) in get_args(annotation) and value.lower() in _NULL_VALUES:
        return None
    target = _concrete_type(annotation)
    if target is bool:
        lowered = value.lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ValueError(f"Cannot read '{value}' as a boolean for '{name}'.")
    if target is int:
        try:
            return int(value, 10)
        except ValueError as exc:
            raise ValueError(f"Cannot read '{value}' as an integer for '{name}'.") from exc
    if target in (list, dict):
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Setting '{name}' expects JSON, got '{value}'.") from exc
        if not isinstance(parsed, target):
            raise ValueError(f"Setting '{name}' expects a JSON {target.__name__}.")
        return parsed
    return value


def parse_overrides(items: Iterable[str]) -> Dict[str, Any]:
    """Parse ``KEY=VALUE`` strings into overrides that pass the settings schema."""

    overrides: Dict[str, Any] = {}
    for entry in items:
        key, separator, raw_value = entry.partition("=")
        key = key.strip()
        if not separator or not key:
            raise ValueError(f"Override '{entry}' must use KEY=VALUE syntax.")
        overrides[key] = coerce_field(key, raw_value)
    errors = settings_errors(overrides)
    if errors:
        raise ValueError(f"Invalid override: {errors[0]}")
    return overrides


def _concrete_type(annotation: Any) -> Any:
    origin = get_origin(annotation)
    if origin is None:
        return annotation
    if origin in (list, dict):
        return origin
    members = [member for member in get_args(annotation) if member is not type(None)]
    return _concrete_type(members[0]) if members else origin


@dataclass(slots=True)
class Settings:
    """User-configurable linter settings."""

    rules: dict[str, bool] = field(default_factory=lambda: {rule_id: True for rule_id in RULE_IDS})
    severity: str = Severity.WARNING.value
    diagnostic_source: str = DEFAULT_SOURCE
    languages: list[str] = field(default_factory=lambda: ["restructuredtext"])
    file_extensions: list[str] = field(default_factory=lambda: [".rst"])
    max_document_chars: int | None = 2_000_000
    max_fix_passes: int = 500
    debug_logging: bool = False

    def toggles(self) -> RuleToggles:
        return RuleToggles(dict(self.rules))

    def severity_level(self) -> Severity:
        return Severity(self.severity)


class SettingsStore:
    """Persistence adapter for :class:`Settings` backed by JSON or YAML."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or _DEFAULT_SETTINGS_PATH

    @property
    def path(self) -> Path:
        """Return the resolved path backing this store."""

        return self._path

    @property
    def is_yaml(self) -> bool:
        return self._path.suffix.lower() in _YAML_SUFFIXES

    def load(self, *, overrides: Mapping[str, Any] | None = None) -> Settings:
        """Load settings from disk, applying CLI/environment overrides when present."""

        payload = self._read_payload()
        settings = Settings()
        if payload:
            errors = settings_errors(payload)
            if errors:
                for message in errors:
                    LOGGER.warning("Settings file %s is invalid: %s", self._path, message)
            else:
                settings = self._from_payload(payload)
            LOGGER.debug("Settings loaded from %s (version=%s)", self._path, payload.get("version"))

        if overrides:
            settings = self._apply_overrides(settings, overrides, source="CLI")

        return self._apply_env_overrides(settings)

    def save(self, settings: Settings) -> Path:
        """Persist settings to disk with atomic file writes."""

        payload = asdict(settings)
        payload["version"] = _SETTINGS_VERSION
        if self.is_yaml:
            buffer = io.StringIO()
            _create_yaml().dump(payload, buffer)
            body = buffer.getvalue()
        else:
            body = json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp_path.write_text(body, encoding="utf-8")
        tmp_path.replace(self._path)
        LOGGER.debug("Settings saved to %s", self._path)
        return self._path

    def _read_payload(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            data = _create_yaml().load(text) if self.is_yaml else json.loads(text)
        except json.JSONDecodeError as exc:
            LOGGER.warning("Settings file %s is not valid JSON: %s", self._path, exc)
            return {}
        except YAMLError as exc:
            LOGGER.warning("Settings file %s is not valid YAML: %s", self._path, exc)
            return {}
        if data is None:
            return {}
        if not isinstance(data, Mapping):
            LOGGER.warning("Settings file %s must contain a mapping", self._path)
            return {}
        return dict(data)

    def _from_payload(self, payload: Mapping[str, Any]) -> Settings:
        data = _filter_fields(payload)
        rules = data.get("rules")
        if isinstance(rules, Mapping):
            merged = Settings().rules
            merged.update({str(key): bool(value) for key, value in rules.items()})
            data["rules"] = merged
        for key in ("languages", "file_extensions"):
            if key in data:
                data[key] = list(data[key])
        return Settings(**data)

    def _apply_overrides(
        self,
        settings: Settings,
        overrides: Mapping[str, Any],
        *,
        source: str = "runtime",
    ) -> Settings:
        allowed = {item.name for item in fields(Settings)}
        filtered: Dict[str, Any] = {}
        for key, value in overrides.items():
            if key not in allowed:
                continue
            filtered[key] = value
        rules_override = filtered.get("rules")
        if isinstance(rules_override, Mapping):
            merged_rules = dict(settings.rules)
            merged_rules.update(rules_override)
            filtered["rules"] = merged_rules
        if filtered:
            LOGGER.debug("Applying %s settings overrides: %s", source, sorted(filtered))
            settings = replace(settings, **filtered)
        return settings

    def _apply_env_overrides(self, settings: Settings) -> Settings:
        overrides: Dict[str, Any] = {}
        for env_name, field_name in _ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is None:
                continue
            try:
                candidate = coerce_field(field_name, value)
            except ValueError as exc:
                LOGGER.warning("Ignoring environment override %s: %s", env_name, exc)
                continue
            errors = settings_errors({field_name: candidate})
            if errors:
                LOGGER.warning("Ignoring environment override %s: %s", env_name, errors[0])
                continue
            overrides[field_name] = candidate
        disabled = os.environ.get(_DISABLED_RULES_ENV)
        if disabled:
            names = [name.strip() for name in disabled.split(",") if name.strip()]
            overrides["rules"] = {name: False for name in names}
        if overrides:
            settings = self._apply_overrides(settings, overrides, source="environment")
        return settings


def _create_yaml() -> YAML:
    parser = YAML(typ="safe")
    parser.allow_duplicate_keys = False
    parser.default_flow_style = False
    return parser


def _filter_fields(payload: Mapping[str, Any]) -> Dict[str, Any]:
    allowed = {item.name for item in fields(Settings)}
    return {key: value for key, value in payload.items() if key in allowed}
