"""Dotted path helpers shared by rendering and redaction.

Component paths are produced by the flattener (``user.name``). Submission paths
address the stored submission document and start with the submission root
segment (``data.user.name``). When storage wraps every nested scope in its own
namespace, a nesting segment is inserted between nested keys
(``data.user.data.name``).
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, MutableMapping, Sequence
from typing import Any

DEFAULT_SUBMISSION_ROOT = "data"


def to_submission_path(
    component_path: str,
    *,
    root: str | None = DEFAULT_SUBMISSION_ROOT,
    nested_segment: str | None = None,
) -> str:
    """Convert a flattened component path into a submission path."""
    segments = [segment for segment in component_path.split(".") if segment]
    if nested_segment:
        joined = f".{nested_segment}.".join(segments)
    else:
        joined = ".".join(segments)
    return f"{root}.{joined}" if root else joined


def to_component_path(
    submission_path: str,
    *,
    root: str | None = DEFAULT_SUBMISSION_ROOT,
    nested_segment: str | None = None,
) -> str:
    """Convert a submission path back into a flattened component path."""
    segments = [segment for segment in submission_path.split(".") if segment]
    if root and segments and segments[0] == root:
        segments = segments[1:]
    if nested_segment:
        segments = [
            segment
            for index, segment in enumerate(segments)
            if not (index % 2 == 1 and segment == nested_segment)
        ]
    return ".".join(segments)


def get_value(data: Any, path: str, default: Any = None) -> Any:
    """Return the value stored at a dotted path, or ``default`` when absent."""
    node = data
    for segment in path.split("."):
        if isinstance(node, Mapping):
            if segment not in node:
                return default
            node = node[segment]
        elif _is_list(node) and segment.isdigit() and int(segment) < len(node):
            node = node[int(segment)]
        else:
            return default
    return node


def delete_value(data: Any, path: str) -> int:
    """Delete every value addressed by a dotted path; lists fan out element-wise."""
    removed = 0
    for parent, key in _resolve_parents(data, path.split(".")):
        del parent[key]
        removed += 1
    return removed


def update_value(data: Any, path: str, transform: Callable[[Any], Any]) -> int:
    """Replace every value addressed by a dotted path with ``transform(value)``."""
    updated = 0
    for parent, key in _resolve_parents(data, path.split(".")):
        parent[key] = transform(parent[key])
        updated += 1
    return updated


def _resolve_parents(
    node: Any, segments: Sequence[str]
) -> Iterator[tuple[MutableMapping[str, Any], str]]:
    if _is_list(node):
        for item in list(node):
            yield from _resolve_parents(item, segments)
        return
    if not isinstance(node, MutableMapping) or not segments:
        return
    head, rest = segments[0], segments[1:]
    if head not in node:
        return
    if not rest:
        yield node, head
        return
    yield from _resolve_parents(node[head], rest)


def _is_list(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, str | bytes)
