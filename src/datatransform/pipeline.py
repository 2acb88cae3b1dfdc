"""
Post-processing stages applied to expanded records.

Stages run in a fixed order: operate, each, remove. None of them catch
errors; exceptions from caller handlers propagate unchanged.
"""

import logging
from collections.abc import MutableMapping
from typing import Any

from .metrics import OPERATIONS_APPLIED
from .paths import MISSING, get_value, set_value

logger = logging.getLogger(__name__)


def operate(records: list, context: Any, data: Any, spec: Any) -> list:
    """
    Apply every operation, in declaration order, to every record.

    Each operation runs across the whole list before the next one starts.
    The handler receives the current value at ``operation.on`` (None when
    absent) and its return value is written back to that path.
    """
    for operation in spec.operate:
        for record in records:
            current = get_value(record, operation.on, None, data, spec)
            set_value(
                record,
                operation.on,
                operation(None if current is MISSING else current, context),
            )
        OPERATIONS_APPLIED.labels(transformer=operation.name).inc(len(records))
        logger.debug(f"Applied {operation.name} on '{operation.on}' to {len(records)} records")
    return records


def each(records: list, context: Any, data: Any, spec: Any) -> list:
    """Invoke ``spec.each(record, index, records, context, data, spec)`` per record."""
    if spec.each is not None:
        for index, record in enumerate(records):
            spec.each(record, index, records, context, data, spec)
    return records


def remove(record: Any, spec: Any) -> Any:
    """Delete the fields named in ``spec.remove`` from one record."""
    if isinstance(record, MutableMapping):
        for name in spec.remove:
            record.pop(name, None)
    return record


def remove_all(records: list, spec: Any) -> list:
    """Delete the fields named in ``spec.remove`` from every record."""
    if spec.remove:
        for record in records:
            remove(record, spec)
    return records
