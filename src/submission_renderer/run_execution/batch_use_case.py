"""Render and redaction batch use-case services."""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from submission_renderer.configuration import (
    ConfigurationError,
    load_configuration,
    parse_context,
)
from submission_renderer.field_redaction import apply_redaction_rules, compute_redaction_rules
from submission_renderer.results_writing import render_documents_html, write_submissions_workbook
from submission_renderer.schema_management import (
    SchemaError,
    flatten_components,
    load_form_schema,
)
from submission_renderer.submission_ingestion import (
    SubmissionError,
    read_submissions,
    submission_data,
    submission_identifier,
)
from submission_renderer.submission_rendering import (
    RenderedDocument,
    render_flattened_submission,
)

from .run_contracts import OutputFormat, RedactRequest, RenderRequest, RunArtifacts, RunOutcome

_LOGGER = logging.getLogger(__name__)


class RunExecutionError(Exception):
    """Raised when a batch use case cannot be completed."""


def execute_render_run(request: RenderRequest) -> RunOutcome:
    """Render every submission of a file and serialize the rendered documents."""
    artifacts = _load_run_artifacts(
        request.config_path, request.schema_path, request.submissions_path
    )
    try:
        output_format = OutputFormat(request.output_format)
    except ValueError as exc:
        raise RunExecutionError(f"Unsupported output format: {request.output_format}") from exc
    if output_format == OutputFormat.XLSX and not request.output_path:
        raise RunExecutionError("The xlsx format requires an output path.")

    settings = artifacts.configuration.rendering
    root = artifacts.configuration.redaction.submission_root
    components = flatten_components(artifacts.schema)
    documents = [
        render_flattened_submission(
            submission_data(submission, root), components, settings=settings
        )
        for submission in artifacts.submissions
    ]
    _LOGGER.info("Rendered %d submission(s) from %s", len(documents), request.submissions_path)

    if output_format == OutputFormat.XLSX:
        identifiers = [
            submission_identifier(submission, position)
            for position, submission in enumerate(artifacts.submissions, start=1)
        ]
        try:
            output = write_submissions_workbook(
                documents, Path(str(request.output_path)), submission_ids=identifiers
            )
        except OSError as exc:
            raise RunExecutionError(str(exc)) from exc
        return RunOutcome(submission_count=len(documents), output_path=output)

    content = (
        render_documents_html(documents)
        if output_format == OutputFormat.HTML
        else _documents_json(documents, single=artifacts.single)
    )
    return _finish(content, request.output_path, submission_count=len(documents))


def execute_redaction_run(request: RedactRequest) -> RunOutcome:
    """Apply the redaction policy of a form to every submission of a file."""
    artifacts = _load_run_artifacts(
        request.config_path, request.schema_path, request.submissions_path
    )
    redaction = artifacts.configuration.redaction
    try:
        context = parse_context(request.context) if request.context else redaction.context
    except ConfigurationError as exc:
        raise RunExecutionError(str(exc)) from exc

    rules = compute_redaction_rules(artifacts.schema, context, settings=redaction, logger=_LOGGER)
    stored = [
        _as_stored(submission, redaction.submission_root) for submission in artifacts.submissions
    ]
    apply_redaction_rules(rules, [document for document, _ in stored])
    redacted = [
        document[redaction.submission_root] if wrapped else document for document, wrapped in stored
    ]
    _LOGGER.info(
        "Applied %d redaction rule(s) for context %s to %d submission(s)",
        len(rules),
        context.value,
        len(redacted),
    )
    payload: Any = redacted[0] if artifacts.single and redacted else redacted
    content = json.dumps(payload, ensure_ascii=False, indent=2, default=str)
    return _finish(
        content, request.output_path, submission_count=len(redacted), rule_count=len(rules)
    )


def _load_run_artifacts(
    config_path: str | None, schema_path: str, submissions_path: str
) -> RunArtifacts:
    try:
        configuration = load_configuration(config_path)
        schema = load_form_schema(schema_path)
        read_result = read_submissions(submissions_path)
    except (ConfigurationError, SchemaError, SubmissionError, OSError) as exc:
        raise RunExecutionError(str(exc)) from exc
    return RunArtifacts(
        configuration=configuration,
        schema=schema,
        submissions=read_result.submissions,
        single=read_result.single,
    )


def _as_stored(submission: Mapping[str, Any], root: str) -> tuple[dict[str, Any], bool]:
    document = copy.deepcopy(dict(submission))
    if isinstance(document.get(root), Mapping):
        return document, False
    return {root: document}, True


def _documents_json(documents: list[RenderedDocument], *, single: bool) -> str:
    payload: Any = [document.to_dict() for document in documents]
    if single and payload:
        payload = payload[0]
    return json.dumps(payload, ensure_ascii=False, indent=2)


def _finish(
    content: str, output_path: str | None, *, submission_count: int, rule_count: int = 0
) -> RunOutcome:
    if not output_path:
        return RunOutcome(
            submission_count=submission_count, content=content, rule_count=rule_count
        )
    destination = Path(output_path)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise RunExecutionError(str(exc)) from exc
    return RunOutcome(
        submission_count=submission_count,
        output_path=destination.resolve(),
        rule_count=rule_count,
    )
