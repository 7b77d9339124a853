"""Redaction policy tests."""

from __future__ import annotations

import logging

import pytest
from submission_renderer.configuration.runtime_settings import (
    RedactionContext,
    RedactionSettings,
)
from submission_renderer.field_redaction.redaction_models import RedactionAction, RedactionRule
from submission_renderer.field_redaction.redaction_policy import (
    apply_redaction_rules,
    compute_redaction_rules,
    remove_protected_fields,
)

_SIGNATURE = "data:image/png;base64," + "A" * 40


def _form() -> dict:
    return {
        "components": [
            {"type": "textfield", "key": "firstName"},
            {"type": "password", "key": "password", "protected": True},
            {"type": "signature", "key": "signature"},
            {
                "type": "panel",
                "key": "page",
                "components": [{"type": "textfield", "key": "ssn", "protected": True}],
            },
            {
                "type": "container",
                "key": "employer",
                "components": [
                    {"type": "textfield", "key": "name"},
                    {"type": "textfield", "key": "salary", "protected": True},
                ],
            },
            {
                "type": "datagrid",
                "key": "accounts",
                "components": [
                    {"type": "textfield", "key": "bank"},
                    {"type": "textfield", "key": "iban", "protected": True, "multiple": True},
                    {"type": "signature", "key": "approval"},
                ],
            },
        ]
    }


def _submission() -> dict:
    return {
        "_id": "s1",
        "data": {
            "firstName": "Jane",
            "password": "secret123",
            "signature": _SIGNATURE,
            "ssn": "123-45-6789",
            "employer": {"name": "ACME", "salary": 100},
            "accounts": [
                {"bank": "B1", "iban": ["DE01"], "approval": _SIGNATURE},
                {"bank": "B2", "iban": ["DE02"], "approval": "short"},
            ],
        },
    }


def test_compute_rules_for_display_context_only_deletes_protected() -> None:
    rules = compute_redaction_rules(_form(), "display")

    assert [(rule.action, rule.path) for rule in rules] == [
        (RedactionAction.DELETE, "data.password"),
        (RedactionAction.DELETE, "data.ssn"),
        (RedactionAction.DELETE, "data.employer.salary"),
        (RedactionAction.DELETE, "data.accounts.iban"),
    ]


def test_compute_rules_for_index_context_masks_signatures() -> None:
    rules = compute_redaction_rules(_form(), RedactionContext.INDEX)

    assert [(rule.action, rule.path) for rule in rules] == [
        (RedactionAction.DELETE, "data.password"),
        (RedactionAction.MASK, "data.signature"),
        (RedactionAction.DELETE, "data.ssn"),
        (RedactionAction.DELETE, "data.employer.salary"),
        (RedactionAction.DELETE, "data.accounts.iban"),
        (RedactionAction.MASK, "data.accounts.approval"),
    ]


def test_compute_rules_rejects_unknown_context() -> None:
    with pytest.raises(ValueError):
        compute_redaction_rules(_form(), "export")


def test_protected_signature_is_deleted_not_masked() -> None:
    rules = compute_redaction_rules(
        [{"type": "signature", "key": "sig", "protected": True}], "index"
    )

    assert [(rule.action, rule.path) for rule in rules] == [(RedactionAction.DELETE, "data.sig")]


def test_nested_segment_setting_changes_rule_paths() -> None:
    rules = compute_redaction_rules(
        _form(), "display", settings=RedactionSettings(nested_segment="data")
    )

    assert "data.employer.data.salary" in [rule.path for rule in rules]


def test_apply_rules_to_single_submission_in_place() -> None:
    submission = _submission()

    remove_protected_fields(_form(), "index", submission)

    data = submission["data"]
    assert "password" not in data
    assert "ssn" not in data
    assert data["employer"] == {"name": "ACME"}
    assert data["signature"] == "YES"
    assert data["accounts"] == [
        {"bank": "B1", "approval": "YES"},
        {"bank": "B2", "approval": ""},
    ]
    assert data["firstName"] == "Jane"


def test_display_context_leaves_signature_payload_untouched() -> None:
    submission = _submission()

    remove_protected_fields(_form(), "display", submission)

    assert submission["data"]["signature"] == _SIGNATURE
    assert "password" not in submission["data"]


def test_apply_rules_to_batch_of_submissions() -> None:
    batch = [_submission(), _submission()]
    rules = compute_redaction_rules(_form(), "index")

    apply_redaction_rules(rules, batch)

    assert all("password" not in submission["data"] for submission in batch)
    assert all(submission["data"]["signature"] == "YES" for submission in batch)


def test_rules_for_absent_paths_are_no_ops() -> None:
    submission = {"data": {"firstName": "Jane"}}

    remove_protected_fields(_form(), "index", submission)

    assert submission == {"data": {"firstName": "Jane"}}


@pytest.mark.parametrize(
    ("stored", "expected"),
    [
        ("", ""),
        (None, ""),
        ("x" * 24, ""),
        ("x" * 25, "YES"),
        ("x" * 500, "YES"),
    ],
)
def test_signature_mask_threshold(stored: object, expected: str) -> None:
    submission = {"data": {"signature": stored}}

    remove_protected_fields([{"type": "signature", "key": "signature"}], "index", submission)

    assert submission["data"]["signature"] == expected


def test_mask_rule_honors_configured_threshold_and_marker() -> None:
    rule = RedactionRule(
        action=RedactionAction.MASK, path="data.sig", component_key="sig", min_length=3, marker="Y"
    )

    assert rule.mask_value("ab") == ""
    assert rule.mask_value("abc") == "Y"


def test_apply_rules_accepts_none_and_empty_rule_lists() -> None:
    submission = {"data": {"password": "x"}}

    apply_redaction_rules([], submission)
    apply_redaction_rules(compute_redaction_rules(_form(), "display"), None)

    assert submission == {"data": {"password": "x"}}


def test_rules_are_logged_through_injected_logger(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("tests.redaction")

    with caplog.at_level(logging.DEBUG, logger="tests.redaction"):
        compute_redaction_rules(_form(), "display", logger=logger)

    assert "Removing protected field: password" in caplog.text
