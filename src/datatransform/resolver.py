"""Selection of the working list for a transform call."""

from typing import Any

from .paths import get_value


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def resolve_list(data: Any, spec: Any) -> tuple[list, bool]:
    """
    Determine the records a transform call operates on.

    With ``spec.list_path`` set, the records are read from that path (a miss,
    or a value that is not a list, yields no records). Otherwise the input is
    used directly, wrapped in a one-element list when it is a single record.

    Args:
        data: Transform input
        spec: MappingSpec

    Returns:
        Tuple of (records, as_list) where ``as_list`` tells whether the
        result should be returned as a list rather than a single record
    """
    if spec.list_path:
        value = get_value(data, spec.list_path, None, data, spec)
        return (list(value) if is_sequence(value) else []), True

    if is_sequence(data):
        return list(data), True
    return [data], False
