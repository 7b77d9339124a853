"""Spreadsheet export of rendered submissions."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from submission_renderer.submission_rendering.rendered_models import (
    RenderedDocument,
    RenderedField,
    ValueKind,
)

EXPORT_SHEET_NAME = "Submissions"
SUBMISSION_COLUMN = "Submission"
SIGNATURE_CELL_TEXT = "(signature)"
_MAX_COLUMN_WIDTH = 60


def write_submissions_workbook(
    documents: Sequence[RenderedDocument],
    output_path: Path | str,
    *,
    submission_ids: Sequence[str] | None = None,
) -> Path:
    """Write one worksheet row per rendered submission and return the resolved path.

    The header row lists the field labels in first-seen order. Submissions are
    identified by ``submission_ids`` when given, else by their 1-based position.
    """
    if submission_ids is not None and len(submission_ids) != len(documents):
        raise ValueError("submission_ids must match the number of rendered submissions.")

    labels = _collect_labels(documents)
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = EXPORT_SHEET_NAME

    headers = (SUBMISSION_COLUMN, *labels)
    for column, header in enumerate(headers, start=1):
        sheet.cell(row=1, column=column, value=header)
        sheet.cell(row=1, column=column).style = "Headline 1"

    widths = [len(header) for header in headers]
    for index, document in enumerate(documents):
        row_number = index + 2
        identifier = submission_ids[index] if submission_ids is not None else str(index + 1)
        sheet.cell(row=row_number, column=1, value=identifier)
        values = {field.label: cell_text(field) for field in document}
        for offset, label in enumerate(labels, start=2):
            text = values.get(label, "")
            sheet.cell(row=row_number, column=offset, value=text or None)
            widths[offset - 1] = max(widths[offset - 1], len(text))
        widths[0] = max(widths[0], len(identifier))

    for column, width in enumerate(widths, start=1):
        sheet.column_dimensions[get_column_letter(column)].width = max(
            12, min(width + 4, _MAX_COLUMN_WIDTH)
        )

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output.resolve()


def cell_text(field: RenderedField) -> str:
    """Return the plain-text spreadsheet representation of a rendered field."""
    if field.kind == ValueKind.IMAGE:
        return SIGNATURE_CELL_TEXT
    return field.value


def _collect_labels(documents: Sequence[RenderedDocument]) -> tuple[str, ...]:
    labels: dict[str, None] = {}
    for document in documents:
        for field in document:
            labels.setdefault(field.label, None)
    return tuple(labels)
