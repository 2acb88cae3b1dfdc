"""
Dotted-path access over nested records.

Paths are plain strings such as ``"user.address.city"``. Reads never raise:
a miss yields the ``MISSING`` sentinel (or a declared default), which is
distinct from a stored ``None``.
"""

import math
from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from typing import Any


class _Missing:
    """Sentinel type for "not found"."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"

    def __reduce__(self):
        return (_Missing, ())


MISSING = _Missing()


def halts_traversal(value: Any) -> bool:
    """
    Return True for values that stop a path walk.

    Mirrors loose truthiness: MISSING, None, False, numeric zero, NaN and the
    empty string halt traversal. Empty containers do not.
    """
    if value is MISSING or value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    return False


def _index(key: str) -> int | None:
    # Canonical ASCII indices only; "01" or a superscript digit is a plain key.
    if key.isascii() and key.isdigit() and (key == "0" or not key.startswith("0")):
        return int(key)
    return None


def _child(container: Any, key: str) -> Any:
    if isinstance(container, Mapping):
        return container.get(key, MISSING)
    if isinstance(container, Sequence) and not isinstance(container, bytes):
        index = _index(key)
        if index is not None and index < len(container):
            return container[index]
    return MISSING


def default_or_missing(default_key: str | None, spec: Any) -> Any:
    """Look up the declared default for an output field, or MISSING."""
    defaults = getattr(spec, "defaults", None) if spec is not None else None
    if not default_key or not defaults:
        return MISSING
    return defaults.get(default_key, MISSING)


def get_value(
    root: Any,
    path: str,
    default_key: str | None = None,
    root_data: Any = None,
    spec: Any = None,
) -> Any:
    """
    Read the value at ``path``.

    Args:
        root: Record to start from; falls back to ``root_data`` when absent
        path: Dot-delimited path; empty returns ``root`` unchanged
        default_key: Output field name whose default replaces a miss
        root_data: Fallback root (the original input of a transform call)
        spec: Mapping specification carrying ``defaults``

    Returns:
        The value found, the declared default, or MISSING
    """
    if not path:
        return root

    value = root if not halts_traversal(root) else root_data
    for key in path.split("."):
        value = MISSING if halts_traversal(value) else _child(value, key)
        if value is MISSING:
            break

    if value is MISSING:
        return default_or_missing(default_key, spec)
    return value


def set_value(root: Any, path: str, value: Any) -> None:
    """
    Assign ``value`` at ``path``, creating empty records for missing or
    falsy intermediate segments. An index at or past the end of a list
    extends it, padding with None. No-op when ``root`` is absent or ``path``
    is empty.
    """
    if root is None or root is MISSING or not path:
        return

    keys = path.split(".")
    target = root
    for key in keys[:-1]:
        current = _child(target, key)
        if halts_traversal(current):
            current = {}
            _assign(target, key, current)
        target = current

    _assign(target, keys[-1], value)


def _assign(target: Any, key: str, value: Any) -> None:
    index = _index(key) if isinstance(target, MutableSequence) else None
    if index is not None:
        if index < len(target):
            target[index] = value
        else:
            # Grow the list; skipped slots are filled with None.
            target.extend([None] * (index - len(target)))
            target.append(value)
    elif isinstance(target, MutableMapping):
        target[key] = value
    else:
        raise TypeError(
            f"Cannot set '{key}' on {type(target).__name__}"
        )
