"""Form schema loading and flattening service."""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path
from typing import Any

from .schema_models import ComponentDefinition, FlattenedSchema, FormSchema

DATA_SCOPE_TYPES = frozenset({"container", "datagrid"})
_LAYOUT_TYPES = frozenset(
    {"panel", "fieldset", "columns", "well", "table", "tabs", "content", "htmlelement"}
)


class SchemaError(Exception):
    """Raised for form schema parsing failures."""


def load_form_schema(schema_path: Path | str) -> FormSchema:
    """Read a form definition JSON file."""
    path = Path(schema_path)
    if not path.exists():
        raise SchemaError(f"Schema file not found: {path}")
    try:
        root = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SchemaError(f"Invalid form schema: {exc}") from exc
    schema = parse_form_schema(root)
    return FormSchema(components=schema.components, title=schema.title, source_path=path)


def parse_form_schema(root: Any) -> FormSchema:
    """Build a form schema from already decoded JSON."""
    if isinstance(root, Mapping):
        title = root.get("title") if isinstance(root.get("title"), str) else None
        return FormSchema(components=normalize_components(root), title=title)
    if isinstance(root, Sequence) and not isinstance(root, str | bytes):
        return FormSchema(components=normalize_components(root))
    raise SchemaError("Form schema root must be an object or a list of components.")


def normalize_components(schema: Any) -> tuple[ComponentDefinition, ...]:
    """Return the top-level component list of a form, component list or key mapping.

    A mapping carrying ``components`` is treated as a form definition. Any other
    mapping is read as ``key -> component``; the component key defaults to the
    mapping key.
    """
    if isinstance(schema, FormSchema):
        return schema.components
    if schema is None:
        return ()
    if isinstance(schema, Mapping):
        if "components" in schema:
            return normalize_components(schema["components"])
        return tuple(
            {"key": key, **component} if "key" not in component else component
            for key, component in schema.items()
            if isinstance(component, Mapping)
        )
    if isinstance(schema, Sequence) and not isinstance(schema, str | bytes):
        return tuple(component for component in schema if isinstance(component, Mapping))
    raise SchemaError("Components must be a list or a mapping.")


def is_data_scope(component: ComponentDefinition) -> bool:
    """Return whether the component stores its children under its own key."""
    return component.get("type") in DATA_SCOPE_TYPES or bool(component.get("tree"))


def is_layout_component(component: ComponentDefinition) -> bool:
    """Return whether the component only groups other components visually."""
    if is_data_scope(component):
        return False
    if component.get("type") in _LAYOUT_TYPES:
        return True
    return any(_child_groups(component))


def iter_components(
    schema: Any, *, include_layout: bool = False, path: str = ""
) -> Iterator[tuple[str, ComponentDefinition]]:
    """Yield ``(dotted path, component)`` pairs depth-first."""
    for component in normalize_components(schema):
        key = component.get("key")
        component_path = (f"{path}.{key}" if path else str(key)) if key else ""
        layout = is_layout_component(component) or not key
        if component_path and (include_layout or not layout):
            yield component_path, component

        child_path = component_path if is_data_scope(component) and key else path
        for children in _child_groups(component):
            yield from iter_components(children, include_layout=include_layout, path=child_path)


def flatten_components(schema: Any, include_layout: bool = False) -> FlattenedSchema:
    """Return the ordered ``dotted path -> component`` mapping of a form."""
    flattened: dict[str, ComponentDefinition] = {}
    for component_path, component in iter_components(schema, include_layout=include_layout):
        flattened.setdefault(component_path, component)
    return flattened


def _child_groups(component: ComponentDefinition) -> Iterator[Sequence[ComponentDefinition]]:
    components = component.get("components")
    if isinstance(components, list):
        yield components
    columns = component.get("columns")
    if isinstance(columns, list):
        for column in columns:
            if isinstance(column, Mapping) and isinstance(column.get("components"), list):
                yield column["components"]
    rows = component.get("rows")
    if isinstance(rows, list):
        for row in rows:
            if not isinstance(row, list):
                continue
            for cell in row:
                if isinstance(cell, Mapping) and isinstance(cell.get("components"), list):
                    yield cell["components"]
