"""Field redaction entities."""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from submission_renderer.schema_management.submission_paths import delete_value, update_value


class RedactionAction(str, Enum):
    """Transform applied at a redaction rule's path."""

    DELETE = "delete"
    MASK = "mask"


@dataclass(frozen=True)
class RedactionRule:
    """Path-bound transform replayed against every submission of a batch."""

    action: RedactionAction
    path: str
    component_key: str
    min_length: int = 25
    marker: str = "YES"

    def apply(self, submission: MutableMapping[str, Any]) -> int:
        """Apply the rule in place and return how many values it touched."""
        if self.action == RedactionAction.DELETE:
            return delete_value(submission, self.path)
        return update_value(submission, self.path, self.mask_value)

    def mask_value(self, value: Any) -> str:
        """Reduce a stored payload to a presence indicator."""
        if not value or len(value if isinstance(value, str) else str(value)) < self.min_length:
            return ""
        return self.marker
