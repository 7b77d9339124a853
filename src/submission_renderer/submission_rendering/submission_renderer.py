"""Whole-submission rendering service."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from submission_renderer.configuration.runtime_settings import RenderSettings
from submission_renderer.schema_management.schema_models import FlattenedSchema
from submission_renderer.schema_management.schema_projection import (
    flatten_components,
    is_data_scope,
)

from .component_value_renderer import render_component_value
from .rendered_models import RenderedDocument, RenderedField

# Container children are emitted as their own dotted-path rows.
_SKIPPED_TOP_LEVEL_TYPES = frozenset({"container", "button", "hidden"})


def render_submission(
    data: Mapping[str, Any] | None,
    schema: Any,
    *,
    settings: RenderSettings | None = None,
) -> RenderedDocument:
    """Render every top-level field of a submission in schema order.

    ``schema`` may be a form definition, a component list or a
    ``key -> component`` mapping.
    """
    components = flatten_components(schema)
    return render_flattened_submission(data, components, settings=settings)


def render_flattened_submission(
    data: Mapping[str, Any] | None,
    components: FlattenedSchema,
    *,
    settings: RenderSettings | None = None,
) -> RenderedDocument:
    """Render a submission against an already flattened schema."""
    resolved_settings = settings or RenderSettings()
    rows: list[RenderedField] = []
    for path in top_level_paths(components):
        rows.append(
            render_component_value(data or {}, path, components, settings=resolved_settings)
        )
    return RenderedDocument(rows=tuple(rows))


def top_level_paths(components: FlattenedSchema) -> list[str]:
    """Return the flattened paths rendered as document rows.

    Fields inside a datagrid are rendered as cells of their grid instead. A
    protected data scope is one masked row and hides every field beneath it.
    """
    hidden_prefixes = tuple(
        f"{path}."
        for path, component in components.items()
        if component.get("type") == "datagrid" or _is_protected_scope(component)
    )
    return [
        path
        for path, component in components.items()
        if not path.startswith(hidden_prefixes)
        and (
            component.get("type") not in _SKIPPED_TOP_LEVEL_TYPES
            or _is_protected_scope(component)
        )
    ]


def _is_protected_scope(component: Mapping[str, Any]) -> bool:
    return bool(component.get("protected")) and is_data_scope(component)
