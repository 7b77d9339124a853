"""Schema-driven rendering of a single submission field."""

from __future__ import annotations

import html
import json
import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from submission_renderer.configuration.runtime_settings import RenderSettings
from submission_renderer.schema_management.schema_models import (
    ComponentDefinition,
    FlattenedSchema,
)
from submission_renderer.schema_management.submission_paths import get_value

from .date_formatting import compose_datetime_pattern, format_date_value
from .rendered_models import RenderedField, RenderedTable, ValueKind

_LOGGER = logging.getLogger(__name__)
_LOGGER.addHandler(logging.NullHandler())

MULTIPLE_VALUE_SEPARATOR = ", "
OPTION_COMPONENT_TYPES = frozenset({"radio", "select", "selectboxes"})


@dataclass(frozen=True)
class _RenderContext:
    """Read-only state shared by every recursive render call."""

    components: FlattenedSchema
    settings: RenderSettings


def render_component_value(
    data: Any,
    path: str,
    components: FlattenedSchema,
    *,
    settings: RenderSettings | None = None,
    singular: bool = False,
    schema_path: str | None = None,
) -> RenderedField:
    """Render the label and display value of one field.

    Args:
      data: Data scope holding the value.
      path: Dotted path of the value inside ``data``.
      components: Flattened schema used to resolve component definitions.
      settings: Presentation constants; defaults apply when omitted.
      singular: Render a ``multiple`` component as a single value.
      schema_path: Flattened schema path when it differs from ``path``,
        as for keys inside a container or datagrid row scope.

    Returns:
      The rendered field. Values missing from ``data`` render as ``""`` and
      paths unknown to the schema pass their raw value through.
    """
    context = _RenderContext(components=components, settings=settings or RenderSettings())
    raw = get_value(data, path)
    component = components.get(schema_path or path)
    if component is None:
        _LOGGER.debug("No component for %s; passing raw value through.", schema_path or path)
        return RenderedField(label=path, value=coerce_display_value(raw))
    return _render_component(raw, component, schema_path or path, context, singular=singular)


def coerce_display_value(value: Any) -> str:
    """Coerce any stored value into display text; falsy values become ``""``."""
    if not value:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, Mapping):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)
    if _is_list(value):
        return ",".join(coerce_display_value(item) for item in value)
    return str(value)


def component_label(component: ComponentDefinition, fallback: str) -> str:
    """Return the display label of a component."""
    return str(
        component.get("label") or component.get("placeholder") or component.get("key") or fallback
    )


def _render_component(
    raw: Any,
    component: ComponentDefinition,
    path: str,
    context: _RenderContext,
    *,
    singular: bool = False,
) -> RenderedField:
    label = component_label(component, path)
    if component.get("multiple") and not singular:
        sub_fields = [
            _render_component(element, component, path, context, singular=True)
            for element in _elements(raw)
        ]
        # Elements share one renderer, so images only mix with empty values.
        kind = (
            ValueKind.IMAGE
            if any(field.kind == ValueKind.IMAGE for field in sub_fields)
            else ValueKind.TEXT
        )
        rendered = RenderedField(
            label=label,
            value=MULTIPLE_VALUE_SEPARATOR.join(field.value for field in sub_fields),
            kind=kind,
        )
    else:
        renderer = _TYPE_RENDERERS.get(str(component.get("type")), _render_raw)
        rendered = renderer(raw, component, path, label, context)

    if component.get("protected"):
        return RenderedField(label=label, value=context.settings.protected_mask)
    return rendered


def _render_nested(
    scope: Mapping[str, Any], key: str, schema_path: str, context: _RenderContext
) -> RenderedField:
    raw = scope.get(key)
    component = context.components.get(schema_path)
    if component is None:
        return RenderedField(label=key, value=coerce_display_value(raw))
    return _render_component(raw, component, schema_path, context)


def _render_raw(
    raw: Any,
    component: ComponentDefinition,
    path: str,
    label: str,
    context: _RenderContext,
) -> RenderedField:
    return RenderedField(label=label, value=coerce_display_value(raw))


def _render_password(
    raw: Any,
    component: ComponentDefinition,
    path: str,
    label: str,
    context: _RenderContext,
) -> RenderedField:
    return RenderedField(label=label, value=context.settings.password_mask)


def _render_address(
    raw: Any,
    component: ComponentDefinition,
    path: str,
    label: str,
    context: _RenderContext,
) -> RenderedField:
    formatted = raw.get("formatted_address") if isinstance(raw, Mapping) else None
    return RenderedField(label=label, value=coerce_display_value(formatted))


def _render_signature(
    raw: Any,
    component: ComponentDefinition,
    path: str,
    label: str,
    context: _RenderContext,
) -> RenderedField:
    if not raw:
        return RenderedField(label=label, value="")
    source = html.escape(str(raw), quote=True)
    return RenderedField(label=label, value=f'<img src="{source}" />', kind=ValueKind.IMAGE)


def _render_container(
    raw: Any,
    component: ComponentDefinition,
    path: str,
    label: str,
    context: _RenderContext,
) -> RenderedField:
    scope = raw if isinstance(raw, Mapping) else {}
    fields = [_render_nested(scope, str(key), f"{path}.{key}", context) for key in scope]
    table = RenderedTable(rows=tuple((field,) for field in fields))
    summary = "; ".join(f"{field.label}: {field.value}" for field in fields)
    return RenderedField(label=label, value=summary, kind=ValueKind.TABLE, table=table)


def _render_datagrid(
    raw: Any,
    component: ComponentDefinition,
    path: str,
    label: str,
    context: _RenderContext,
) -> RenderedField:
    rows = [row if isinstance(row, Mapping) else {} for row in raw] if _is_list(raw) else []
    column_keys = [
        str(key) for key in (rows[0] if rows else {}) if f"{path}.{key}" in context.components
    ]
    columns = tuple(
        str(
            context.components[f"{path}.{key}"].get("label")
            or context.components[f"{path}.{key}"].get("key")
            or key
        )
        for key in column_keys
    )
    cells = tuple(
        tuple(
            _with_label(_render_nested(row, key, f"{path}.{key}", context), column)
            for key, column in zip(column_keys, columns, strict=True)
        )
        for row in rows
    )
    summary = "; ".join(
        ", ".join(f"{cell.label}: {cell.value}" for cell in row_cells) for row_cells in cells
    )
    table = RenderedTable(columns=columns, rows=cells)
    return RenderedField(label=label, value=summary, kind=ValueKind.GRID, table=table)


def _render_datetime(
    raw: Any,
    component: ComponentDefinition,
    path: str,
    label: str,
    context: _RenderContext,
) -> RenderedField:
    pattern = compose_datetime_pattern(component, context.settings)
    if not raw or not pattern:
        return RenderedField(label=label, value=coerce_display_value(raw))
    return RenderedField(label=label, value=format_date_value(raw, pattern))


def _render_option(
    raw: Any,
    component: ComponentDefinition,
    path: str,
    label: str,
    context: _RenderContext,
) -> RenderedField:
    # Unmatched values pass through unchanged so retired options stay readable.
    for option in _component_options(component):
        if isinstance(option, Mapping) and _same_value(option.get("value"), raw):
            return RenderedField(label=label, value=coerce_display_value(option.get("label")))
    return RenderedField(label=label, value=coerce_display_value(raw))


def _component_options(component: ComponentDefinition) -> Sequence[Any]:
    if "values" in component:
        values = component["values"]
    else:
        data = component.get("data")
        values = data.get("values") if isinstance(data, Mapping) else None
    return values if _is_list(values) else ()


def _same_value(option_value: Any, raw: Any) -> bool:
    if _is_number(option_value) and _is_number(raw):
        return option_value == raw
    return type(option_value) is type(raw) and option_value == raw


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _with_label(field: RenderedField, label: str) -> RenderedField:
    return RenderedField(label=label, value=field.value, kind=field.kind, table=field.table)


def _elements(raw: Any) -> Sequence[Any]:
    if _is_list(raw):
        return list(raw)
    if raw is None or raw == "":
        return []
    return [raw]


def _is_list(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, str | bytes)


_TYPE_RENDERERS: Mapping[
    str, Callable[[Any, ComponentDefinition, str, str, _RenderContext], RenderedField]
] = {
    "password": _render_password,
    "address": _render_address,
    "signature": _render_signature,
    "container": _render_container,
    "datagrid": _render_datagrid,
    "datetime": _render_datetime,
    **{component_type: _render_option for component_type in OPTION_COMPONENT_TYPES},
}
