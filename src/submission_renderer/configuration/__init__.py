"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, load_configuration, parse_context
from .runtime_settings import (
    PASSWORD_MASK,
    PROTECTED_MASK,
    Configuration,
    RedactionContext,
    RedactionSettings,
    RenderSettings,
)

__all__ = [
    "Configuration",
    "RedactionContext",
    "RedactionSettings",
    "RenderSettings",
    "PASSWORD_MASK",
    "PROTECTED_MASK",
    "ConfigurationError",
    "load_configuration",
    "parse_context",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
