"""Run execution domain exports."""

from .batch_use_case import RunExecutionError, execute_redaction_run, execute_render_run
from .run_contracts import OutputFormat, RedactRequest, RenderRequest, RunArtifacts, RunOutcome

__all__ = [
    "OutputFormat",
    "RedactRequest",
    "RenderRequest",
    "RunArtifacts",
    "RunOutcome",
    "RunExecutionError",
    "execute_redaction_run",
    "execute_render_run",
]
