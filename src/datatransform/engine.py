"""
Transformation entry points.

A call runs a fixed pipeline over the records selected from the input:

    resolve list -> expand item template -> operate -> each -> remove

and returns a list or a single record, mirroring the input's cardinality.
"""

import copy
import logging
from collections.abc import Mapping
from typing import Any

from .metrics import RECORDS_PROCESSED, TRANSFORM_CALLS, TRANSFORM_ERRORS, TRANSFORM_TIME
from .pipeline import each, operate, remove_all
from .resolver import resolve_list
from .spec import MappingSpec
from .template import map_items
from .utils.tracing import trace_function, trace_operation

logger = logging.getLogger(__name__)


def _as_spec(spec: MappingSpec | Mapping[str, Any]) -> MappingSpec:
    if isinstance(spec, MappingSpec):
        return spec
    return MappingSpec.from_dict(spec)


def transform(data: Any, spec: MappingSpec | Mapping[str, Any], context: Any = None) -> Any:
    """
    Reshape ``data`` according to ``spec``.

    Args:
        data: Input record or list of records; never modified
        spec: MappingSpec, or a plain mapping accepted by MappingSpec.from_dict
        context: Opaque value passed to operate handlers and the each callback

    Returns:
        A list of output records when ``spec.list_path`` is set or ``data`` is
        a list, otherwise the single output record. An empty working list
        always yields ``[]``.

    Raises:
        Any exception raised by an operate handler or the each callback,
        unchanged.
    """
    spec = _as_spec(spec)
    mode = "list" if spec.list_path else "direct"
    stage = "resolve"

    with trace_operation("datatransform.transform", mode=mode) as span, \
            TRANSFORM_TIME.labels(mode=mode).time():
        try:
            records, as_list = resolve_list(data, spec)
            if not records:
                TRANSFORM_CALLS.labels(mode=mode, status="empty").inc()
                logger.debug("Transform resolved no records")
                return []

            stage = "expand"
            if spec.item is not None:
                records = map_items(records, spec.item, data, spec)
            else:
                records = copy.deepcopy(records)

            stage = "operate"
            records = operate(records, context, data, spec)
            stage = "each"
            records = each(records, context, data, spec)
            stage = "remove"
            records = remove_all(records, spec)

        except Exception as e:
            TRANSFORM_CALLS.labels(mode=mode, status="error").inc()
            TRANSFORM_ERRORS.labels(stage=stage, error_type=type(e).__name__).inc()
            logger.debug(f"Transform failed in {stage} stage: {type(e).__name__}")
            raise

        span.set_attribute("records", len(records))
        TRANSFORM_CALLS.labels(mode=mode, status="success").inc()
        RECORDS_PROCESSED.inc(len(records))
        logger.debug(f"Transformed {len(records)} records (mode={mode}, list={as_list})")

        return records if as_list else records[0]


@trace_function("datatransform.transform_async", mode="async")
async def transform_async(
    data: Any,
    spec: MappingSpec | Mapping[str, Any],
    context: Any = None,
) -> Any:
    """
    Coroutine form of ``transform``.

    Runs the synchronous engine to completion without yielding to the event
    loop; errors are raised from the awaited coroutine.
    """
    return transform(data, spec, context)
