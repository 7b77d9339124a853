"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

PASSWORD_MASK = "--- PASSWORD ---"
PROTECTED_MASK = "--- PROTECTED ---"


class RedactionContext(str, Enum):
    """Consumption context selecting which masking rules apply."""

    DISPLAY = "display"
    INDEX = "index"


@dataclass(frozen=True)
class RenderSettings:
    """Presentation constants used by the submission renderer."""

    date_format: str = "yyyy-MM-dd"
    time_format: str = " hh:mm:ss A"
    password_mask: str = PASSWORD_MASK
    protected_mask: str = PROTECTED_MASK


@dataclass(frozen=True)
class RedactionSettings:
    """Redaction policy and submission storage convention."""

    context: RedactionContext = RedactionContext.DISPLAY
    submission_root: str = "data"
    nested_segment: str | None = None
    signature_min_length: int = 25
    signature_marker: str = "YES"


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path | None = None
    rendering: RenderSettings = field(default_factory=RenderSettings)
    redaction: RedactionSettings = field(default_factory=RedactionSettings)
