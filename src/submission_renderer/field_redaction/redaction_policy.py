"""Redaction rule derivation and application service."""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping, Sequence
from typing import Any

from submission_renderer.configuration.runtime_settings import (
    RedactionContext,
    RedactionSettings,
)
from submission_renderer.schema_management.schema_projection import iter_components
from submission_renderer.schema_management.submission_paths import to_submission_path

from .redaction_models import RedactionAction, RedactionRule

_LOGGER = logging.getLogger(__name__)
_LOGGER.addHandler(logging.NullHandler())

Submissions = MutableMapping[str, Any] | Sequence[MutableMapping[str, Any]] | None


def compute_redaction_rules(
    schema: Any,
    context: RedactionContext | str,
    *,
    settings: RedactionSettings | None = None,
    logger: logging.Logger | None = None,
) -> tuple[RedactionRule, ...]:
    """Derive the redaction rules of a form for one consumption context.

    Protected components yield a delete rule. Signature components yield a
    mask rule in the index context only, keeping presence searchable without
    storing the image payload.

    Raises:
      ValueError: If ``context`` is not a known redaction context.
    """
    resolved_context = RedactionContext(context)
    resolved_settings = settings or RedactionSettings()
    log = logger or _LOGGER

    rules: list[RedactionRule] = []
    for component_path, component in iter_components(schema, include_layout=True):
        submission_path = to_submission_path(
            component_path,
            root=resolved_settings.submission_root,
            nested_segment=resolved_settings.nested_segment,
        )
        key = str(component.get("key", component_path))
        if component.get("protected"):
            log.debug("Removing protected field: %s", key)
            rules.append(
                RedactionRule(
                    action=RedactionAction.DELETE, path=submission_path, component_key=key
                )
            )
        elif component.get("type") == "signature" and resolved_context == RedactionContext.INDEX:
            log.debug("Masking signature field: %s", key)
            rules.append(
                RedactionRule(
                    action=RedactionAction.MASK,
                    path=submission_path,
                    component_key=key,
                    min_length=resolved_settings.signature_min_length,
                    marker=resolved_settings.signature_marker,
                )
            )
    return tuple(rules)


def apply_redaction_rules(rules: Sequence[RedactionRule], submissions: Submissions) -> None:
    """Apply every rule, in order, to one submission or a list of submissions in place."""
    batch = _as_batch(submissions)
    if not rules:
        return
    for submission in batch:
        for rule in rules:
            rule.apply(submission)


def remove_protected_fields(
    schema: Any,
    context: RedactionContext | str,
    submissions: Submissions,
    *,
    settings: RedactionSettings | None = None,
    logger: logging.Logger | None = None,
) -> None:
    """Derive the rules of a form and apply them to a submission batch."""
    rules = compute_redaction_rules(schema, context, settings=settings, logger=logger)
    apply_redaction_rules(rules, submissions)


def _as_batch(submissions: Submissions) -> list[MutableMapping[str, Any]]:
    if submissions is None:
        return []
    if isinstance(submissions, Mapping):
        return [submissions]  # type: ignore[list-item]
    return [submission for submission in submissions if isinstance(submission, MutableMapping)]
