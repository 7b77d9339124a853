"""Submission rendering exports."""

from .component_value_renderer import (
    coerce_display_value,
    component_label,
    render_component_value,
)
from .date_formatting import INVALID_DATE, compose_datetime_pattern, format_date_value
from .rendered_models import RenderedDocument, RenderedField, RenderedTable, ValueKind
from .submission_renderer import (
    render_flattened_submission,
    render_submission,
    top_level_paths,
)

__all__ = [
    "INVALID_DATE",
    "RenderedDocument",
    "RenderedField",
    "RenderedTable",
    "ValueKind",
    "coerce_display_value",
    "component_label",
    "compose_datetime_pattern",
    "format_date_value",
    "render_component_value",
    "render_flattened_submission",
    "render_submission",
    "top_level_paths",
]
