"""Schema management entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

ComponentDefinition = Mapping[str, Any]
FlattenedSchema = Mapping[str, ComponentDefinition]


@dataclass(frozen=True)
class FormSchema:
    """Structured representation of a form definition."""

    components: tuple[ComponentDefinition, ...]
    title: str | None = None
    source_path: Path | None = None
