"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import Configuration, RedactionContext, RedactionSettings, RenderSettings


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str | None = None) -> Configuration:
    """Load and validate the configuration file; defaults apply when no path is given."""
    if config_path is None:
        return Configuration()

    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    return Configuration(
        path=path,
        rendering=_parse_rendering_section(parsed.get("rendering")),
        redaction=_parse_redaction_section(parsed.get("redaction")),
    )


def parse_context(value: Any, field_name: str = "redaction.context") -> RedactionContext:
    """Coerce a context name into a redaction context."""
    if isinstance(value, RedactionContext):
        return value
    text = _require_non_empty_string(value, field_name).lower()
    try:
        return RedactionContext(text)
    except ValueError as exc:
        allowed = ", ".join(context.value for context in RedactionContext)
        raise ConfigurationError(f"{field_name} must be one of: {allowed}.") from exc


def _parse_rendering_section(value: Any) -> RenderSettings:
    section = _optional_mapping(value, "rendering")
    defaults = RenderSettings()
    return RenderSettings(
        date_format=_require_non_empty_string(
            section.get("date_format", defaults.date_format), "rendering.date_format"
        ),
        time_format=_require_string(
            section.get("time_format", defaults.time_format), "rendering.time_format"
        ),
        password_mask=_require_non_empty_string(
            section.get("password_mask", defaults.password_mask), "rendering.password_mask"
        ),
        protected_mask=_require_non_empty_string(
            section.get("protected_mask", defaults.protected_mask), "rendering.protected_mask"
        ),
    )


def _parse_redaction_section(value: Any) -> RedactionSettings:
    section = _optional_mapping(value, "redaction")
    defaults = RedactionSettings()
    return RedactionSettings(
        context=parse_context(section.get("context", defaults.context.value)),
        submission_root=_require_non_empty_string(
            section.get("submission_root", defaults.submission_root),
            "redaction.submission_root",
        ),
        nested_segment=_optional_string(
            section.get("nested_segment"), "redaction.nested_segment"
        ),
        signature_min_length=_require_positive_int(
            section.get("signature_min_length", defaults.signature_min_length),
            "redaction.signature_min_length",
        ),
        signature_marker=_require_non_empty_string(
            section.get("signature_marker", defaults.signature_marker),
            "redaction.signature_marker",
        ),
    )


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    stripped = _require_string(value, field_name).strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    stripped = _require_string(value, field_name).strip()
    return stripped or None


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
