"""Field redaction exports."""

from .redaction_models import RedactionAction, RedactionRule
from .redaction_policy import (
    apply_redaction_rules,
    compute_redaction_rules,
    remove_protected_fields,
)

__all__ = [
    "RedactionAction",
    "RedactionRule",
    "apply_redaction_rules",
    "compute_redaction_rules",
    "remove_protected_fields",
]
