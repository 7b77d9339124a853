"""Submissions workbook writer tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from openpyxl import load_workbook
from submission_renderer.results_writing.workbook_writer import (
    EXPORT_SHEET_NAME,
    SIGNATURE_CELL_TEXT,
    write_submissions_workbook,
)
from submission_renderer.submission_rendering.rendered_models import (
    RenderedDocument,
    RenderedField,
    ValueKind,
)
from submission_renderer.submission_rendering.submission_renderer import render_submission


def _documents() -> list[RenderedDocument]:
    return [
        RenderedDocument(
            rows=(
                RenderedField("First Name", "Jane"),
                RenderedField("Signature", '<img src="data:x" />', ValueKind.IMAGE),
            )
        ),
        RenderedDocument(rows=(RenderedField("First Name", "Bo"), RenderedField("Age", "7"))),
    ]


def test_writes_one_row_per_submission(tmp_path: Path) -> None:
    output = write_submissions_workbook(
        _documents(), tmp_path / "out" / "export.xlsx", submission_ids=["s1", "s2"]
    )

    workbook = load_workbook(output)
    sheet = workbook[EXPORT_SHEET_NAME]
    rows = [[cell.value for cell in row] for row in sheet.iter_rows()]

    assert output == (tmp_path / "out" / "export.xlsx").resolve()
    assert rows[0] == ["Submission", "First Name", "Signature", "Age"]
    assert rows[1] == ["s1", "Jane", SIGNATURE_CELL_TEXT, None]
    assert rows[2] == ["s2", "Bo", None, "7"]


def test_positions_identify_submissions_without_ids(tmp_path: Path) -> None:
    output = write_submissions_workbook(_documents(), tmp_path / "export.xlsx")

    sheet = load_workbook(output)[EXPORT_SHEET_NAME]

    assert [sheet.cell(row=row, column=1).value for row in (2, 3)] == ["1", "2"]


def test_identifier_count_must_match_documents(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        write_submissions_workbook(_documents(), tmp_path / "export.xlsx", submission_ids=["s1"])


def test_multiple_signature_exports_placeholder_text(tmp_path: Path) -> None:
    document = render_submission(
        {"sigs": ["data:image/png;base64,AAAA", "data:image/png;base64,BBBB"]},
        [{"type": "signature", "key": "sigs", "label": "Signatures", "multiple": True}],
    )

    output = write_submissions_workbook([document], tmp_path / "export.xlsx")

    sheet = load_workbook(output)[EXPORT_SHEET_NAME]
    assert sheet.cell(row=2, column=2).value == SIGNATURE_CELL_TEXT
