"""Run execution entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from submission_renderer.configuration.runtime_settings import Configuration
from submission_renderer.schema_management.schema_models import FormSchema


class OutputFormat(str, Enum):
    """Serialization selected for rendered submissions."""

    HTML = "html"
    JSON = "json"
    XLSX = "xlsx"


@dataclass(frozen=True)
class RenderRequest:
    """Input contract for rendering a submission batch."""

    schema_path: str
    submissions_path: str
    config_path: str | None = None
    output_format: OutputFormat = OutputFormat.HTML
    output_path: str | None = None


@dataclass(frozen=True)
class RedactRequest:
    """Input contract for redacting a submission batch."""

    schema_path: str
    submissions_path: str
    context: str | None = None
    config_path: str | None = None
    output_path: str | None = None


@dataclass(frozen=True)
class RunOutcome:
    """Output contract for one completed batch.

    ``content`` holds the serialized result when no output path was requested.
    """

    submission_count: int
    output_path: Path | None = None
    content: str | None = None
    rule_count: int = 0


@dataclass(frozen=True)
class RunArtifacts:
    """Loaded domain artifacts required during a batch."""

    configuration: Configuration
    schema: FormSchema
    submissions: tuple[Mapping[str, Any], ...]
    single: bool
