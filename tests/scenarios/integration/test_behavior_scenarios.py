"""Scenario-style integration tests for core render and redaction behaviors."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner
from submission_renderer.cli import cli
from submission_renderer.configuration.runtime_settings import PASSWORD_MASK, PROTECTED_MASK
from submission_renderer.field_redaction import remove_protected_fields
from submission_renderer.submission_ingestion import submission_data
from submission_renderer.submission_rendering import render_submission

_COLOR_FORM = {
    "components": [
        {
            "type": "select",
            "key": "color",
            "values": [{"value": "r", "label": "Red"}, {"value": "b", "label": "Blue"}],
        }
    ]
}


def test_text_field_renders_its_label_and_value() -> None:
    submission = {"data": {"firstName": "Jane"}}

    document = render_submission(
        submission_data(submission),
        {"firstName": {"type": "textfield", "label": "First Name"}},
    )

    field = document.find("First Name")
    assert field is not None
    assert field.value == "Jane"


@pytest.mark.parametrize(("stored", "shown"), [("r", "Red"), ("g", "g")])
def test_select_renders_option_label_or_raw_value(stored: str, shown: str) -> None:
    document = render_submission({"color": stored}, _COLOR_FORM)

    assert [row.value for row in document] == [shown]


def test_password_is_never_rendered() -> None:
    document = render_submission(
        {"password": "secret123"}, [{"type": "password", "key": "password"}]
    )

    assert [row.value for row in document] == [PASSWORD_MASK]


def test_protected_field_is_masked_on_render_and_removed_on_redaction() -> None:
    form = [
        {"type": "textfield", "key": "ssn", "label": "SSN", "protected": True, "multiple": True}
    ]
    submission = {"data": {"ssn": ["123", "456"]}}

    document = render_submission(submission_data(submission), form)
    remove_protected_fields(form, "display", submission)

    assert document.find("SSN").value == PROTECTED_MASK
    assert submission == {"data": {}}


def test_rendered_and_redacted_views_of_one_batch(tmp_path: Path) -> None:
    schema_path = tmp_path / "form.json"
    schema_path.write_text(
        json.dumps(
            {
                "components": [
                    {"type": "textfield", "key": "name", "label": "Name"},
                    {"type": "signature", "key": "signature", "label": "Signature"},
                    {
                        "type": "datagrid",
                        "key": "pets",
                        "label": "Pets",
                        "components": [
                            {"type": "textfield", "key": "petName", "label": "Pet"},
                            {"type": "textfield", "key": "chip", "protected": True},
                        ],
                    },
                ]
            }
        ),
        encoding="utf-8",
    )
    signature = "data:image/png;base64," + "Z" * 30
    submissions_path = tmp_path / "submissions.json"
    submissions_path.write_text(
        json.dumps(
            {
                "data": {
                    "name": "Jane",
                    "signature": signature,
                    "pets": [{"petName": "Rex", "chip": "985"}],
                }
            }
        ),
        encoding="utf-8",
    )
    runner = CliRunner()

    rendered = runner.invoke(
        cli,
        [
            "render",
            "--schema",
            str(schema_path),
            "--submissions",
            str(submissions_path),
            "--format",
            "json",
        ],
    )
    indexed = runner.invoke(
        cli,
        [
            "redact",
            "--schema",
            str(schema_path),
            "--submissions",
            str(submissions_path),
            "--context",
            "index",
        ],
    )

    assert rendered.exit_code == 0
    rows = {row["label"]: row for row in json.loads(rendered.output)["rows"]}
    assert rows["Signature"]["value"] == f'<img src="{signature}" />'
    assert rows["Pets"]["table"]["columns"] == ["Pet", "chip"]
    assert rows["Pets"]["table"]["rows"][0][1]["value"] == PROTECTED_MASK

    assert indexed.exit_code == 0
    assert json.loads(indexed.output) == {
        "data": {"name": "Jane", "signature": "YES", "pets": [{"petName": "Rex"}]}
    }
