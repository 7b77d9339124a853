"""Submission ingestion exports."""

from .submission_reader import (
    SubmissionError,
    SubmissionReadResult,
    read_submissions,
    submission_data,
    submission_identifier,
)

__all__ = [
    "SubmissionError",
    "SubmissionReadResult",
    "read_submissions",
    "submission_data",
    "submission_identifier",
]
