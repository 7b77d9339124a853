"""Submission rendering entities."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ValueKind(str, Enum):
    """Presentation kind of a rendered value."""

    TEXT = "text"
    IMAGE = "image"
    TABLE = "table"
    GRID = "grid"


@dataclass(frozen=True)
class RenderedTable:
    """Nested rows of a container or datagrid value.

    Container tables have no columns and one label/value field per row.
    Datagrid tables carry a header of column labels and one cell per column.
    """

    columns: tuple[str, ...] = ()
    rows: tuple[tuple[RenderedField, ...], ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "columns": list(self.columns),
            "rows": [[cell.to_dict() for cell in row] for row in self.rows],
        }


@dataclass(frozen=True)
class RenderedField:
    """Label and display value for one field."""

    label: str
    value: str
    kind: ValueKind = ValueKind.TEXT
    table: RenderedTable | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "label": self.label,
            "value": self.value,
            "kind": self.kind.value,
        }
        if self.table is not None:
            payload["table"] = self.table.to_dict()
        return payload


@dataclass(frozen=True)
class RenderedDocument:
    """Ordered rendered rows of one submission."""

    rows: tuple[RenderedField, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[RenderedField]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def find(self, label: str) -> RenderedField | None:
        """Return the first row carrying the given label."""
        return next((row for row in self.rows if row.label == label), None)

    def to_dict(self) -> dict[str, Any]:
        return {"rows": [row.to_dict() for row in self.rows]}
