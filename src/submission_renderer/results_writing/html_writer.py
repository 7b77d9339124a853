"""HTML serialization of rendered submissions."""

from __future__ import annotations

import html
from collections.abc import Sequence

from submission_renderer.submission_rendering.rendered_models import (
    RenderedDocument,
    RenderedField,
    RenderedTable,
    ValueKind,
)

_TABLE_OPEN = '<table border="1" style="width:100%">'
_TABLE_CLOSE = "</table>"
_HEADER_STYLE = "padding: 5px 10px;"
_NESTED_HEADER_STYLE = "text-align:right;padding: 5px 10px;"
_VALUE_STYLE = "width:100%;padding:5px 10px;"
_CELL_STYLE = "padding:5px 10px;"


def render_document_html(document: RenderedDocument) -> str:
    """Serialize one rendered submission into an HTML table."""
    return _label_value_table(document.rows, header_style=_HEADER_STYLE)


def render_documents_html(documents: Sequence[RenderedDocument]) -> str:
    """Serialize a batch of rendered submissions, one table per submission."""
    return "\n".join(render_document_html(document) for document in documents)


def render_field_html(field: RenderedField) -> str:
    """Serialize the value of one rendered field."""
    if field.table is not None and field.kind == ValueKind.TABLE:
        return _label_value_table(
            tuple(row[0] for row in field.table.rows if row), header_style=_NESTED_HEADER_STYLE
        )
    if field.table is not None and field.kind == ValueKind.GRID:
        return _grid_table(field.table)
    if field.kind == ValueKind.IMAGE:
        return field.value
    return html.escape(field.value)


def _label_value_table(fields: Sequence[RenderedField], *, header_style: str) -> str:
    parts = [_TABLE_OPEN]
    for field in fields:
        parts.append("<tr>")
        parts.append(f'<th style="{header_style}">{html.escape(field.label)}</th>')
        parts.append(f'<td style="{_VALUE_STYLE}">{render_field_html(field)}</td>')
        parts.append("</tr>")
    parts.append(_TABLE_CLOSE)
    return "".join(parts)


def _grid_table(table: RenderedTable) -> str:
    parts = [_TABLE_OPEN, "<tr>"]
    parts.extend(
        f'<th style="{_HEADER_STYLE}">{html.escape(column)}</th>' for column in table.columns
    )
    parts.append("</tr>")
    for row in table.rows:
        parts.append("<tr>")
        parts.extend(f'<td style="{_CELL_STYLE}">{render_field_html(cell)}</td>' for cell in row)
        parts.append("</tr>")
    parts.append(_TABLE_CLOSE)
    return "".join(parts)
