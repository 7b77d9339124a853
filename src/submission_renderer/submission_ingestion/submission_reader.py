"""Submission file ingestion service."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any


class SubmissionError(Exception):
    """Raised when a submissions file is missing or malformed."""


@dataclass(frozen=True)
class SubmissionReadResult:
    """Submissions loaded from one file.

    ``single`` records whether the file held one submission rather than a list,
    so results can be written back in the same shape.
    """

    submissions: tuple[dict[str, Any], ...]
    single: bool


def read_submissions(submissions_path: Path | str) -> SubmissionReadResult:
    """Read one submission object or a list of submission objects from JSON."""
    path = Path(submissions_path)
    if not path.exists():
        raise SubmissionError(f"Submissions file not found: {path}")
    try:
        root = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SubmissionError(f"Invalid submissions file: {exc}") from exc

    if isinstance(root, Mapping):
        return SubmissionReadResult(submissions=(dict(root),), single=True)
    if isinstance(root, Sequence) and not isinstance(root, str | bytes):
        submissions = []
        for index, item in enumerate(root, start=1):
            if not isinstance(item, Mapping):
                raise SubmissionError(f"Submission #{index} must be an object.")
            submissions.append(dict(item))
        return SubmissionReadResult(submissions=tuple(submissions), single=False)
    raise SubmissionError("Submissions file must hold an object or a list of objects.")


def submission_data(submission: Mapping[str, Any], root: str = "data") -> Mapping[str, Any]:
    """Return the field values of a stored submission, or the mapping itself when bare."""
    data = submission.get(root)
    if isinstance(data, Mapping):
        return data
    return submission


def submission_identifier(submission: Mapping[str, Any], position: int) -> str:
    """Return the stored id of a submission, falling back to its 1-based position."""
    for key in ("_id", "id"):
        value = submission.get(key)
        if isinstance(value, str | int) and not isinstance(value, bool) and str(value):
            return str(value)
    return str(position)
