"""
Mapping templates and their expansion.

A raw template authored as data (str, list, or dict, recursively) is compiled
once into a closed set of node types:

- PathRef: copy one source value
- Group: ordered list of templates producing an array
- Template: ordered output-field -> node pairs producing a record
- Malformed: unsupported entry, expands to an empty string
"""

import copy
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

from .paths import MISSING, get_value


@dataclass(frozen=True)
class PathRef:
    """Copy the value at a dotted path."""

    path: str


@dataclass(frozen=True)
class Group:
    """Expand each element against the same record, producing a list."""

    items: tuple["Node", ...]


@dataclass(frozen=True)
class Template:
    """Build a record from ``(output_name, node)`` pairs in declaration order."""

    fields: tuple[tuple[str, "Node"], ...]


@dataclass(frozen=True)
class Malformed:
    """Unsupported template entry."""

    raw: Any


Node = Union[PathRef, Group, Template, Malformed]
NODE_TYPES = (PathRef, Group, Template, Malformed)


def compile_template(raw: Any) -> Node:
    """
    Compile a raw template into nodes.

    Args:
        raw: str, list/tuple, dict, or an already compiled node

    Returns:
        Compiled node; unsupported values become Malformed
    """
    if isinstance(raw, NODE_TYPES):
        return raw
    if isinstance(raw, str):
        return PathRef(raw)
    if isinstance(raw, (list, tuple)):
        return Group(tuple(compile_template(entry) for entry in raw))
    if isinstance(raw, Mapping):
        return Template(
            tuple((str(name), compile_template(entry)) for name, entry in raw.items())
        )
    return Malformed(raw)


def _detach(value: Any) -> Any:
    # Output records must not share containers with the input or defaults,
    # including mutable ones nested in tuples.
    if isinstance(value, Mapping) or (
        isinstance(value, Sequence) and not isinstance(value, (str, bytes))
    ):
        return copy.deepcopy(value)
    return value


def expand(node: Node, item: Any, data: Any, spec: Any) -> Any:
    """
    Expand one node against one input record.

    Args:
        node: Compiled template node
        item: Current input record
        data: Original input of the transform call (fallback root)
        spec: Mapping specification (for defaults)

    Returns:
        Expanded value
    """
    if isinstance(node, PathRef):
        return _detach(get_value(item, node.path, None, data, spec))

    if isinstance(node, Group):
        values = []
        for child in node.items:
            value = expand(child, item, data, spec)
            values.append(None if value is MISSING else value)
        return values

    if isinstance(node, Template):
        record: dict[str, Any] = {}
        for name, child in node.fields:
            if isinstance(child, PathRef):
                value = get_value(item, child.path, name, data, spec)
                if value is not MISSING:
                    record[name] = _detach(value)
            elif isinstance(child, (Group, Template)):
                record[name] = expand(child, item, data, spec)
            else:
                record[name] = ""
        return record

    if isinstance(node, Malformed):
        return ""

    raise TypeError(f"Unknown template node: {type(node).__name__}")


def map_items(items: list, node: Node, data: Any, spec: Any) -> list:
    """Expand ``node`` independently against every element of ``items``."""
    results = []
    for item in items:
        value = expand(node, item, data, spec)
        results.append(None if value is MISSING else value)
    return results
