"""Schema management exports."""

from .schema_models import ComponentDefinition, FlattenedSchema, FormSchema
from .schema_projection import (
    SchemaError,
    flatten_components,
    is_data_scope,
    is_layout_component,
    iter_components,
    load_form_schema,
    normalize_components,
    parse_form_schema,
)
from .submission_paths import (
    delete_value,
    get_value,
    to_component_path,
    to_submission_path,
    update_value,
)

__all__ = [
    "ComponentDefinition",
    "FlattenedSchema",
    "FormSchema",
    "SchemaError",
    "flatten_components",
    "is_data_scope",
    "is_layout_component",
    "iter_components",
    "load_form_schema",
    "normalize_components",
    "parse_form_schema",
    "delete_value",
    "get_value",
    "to_component_path",
    "to_submission_path",
    "update_value",
]
