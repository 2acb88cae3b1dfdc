"""
Prometheus metrics for transformation calls.

Metrics are module-level and registered once per process; re-importing the
module (e.g. ``importlib.reload``) returns the already registered collectors.
"""

import logging
from collections.abc import Callable
from typing import TypeVar

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram

logger = logging.getLogger(__name__)

T = TypeVar("T")


def get_or_create_metric(
    metric_factory: Callable[[], T],
    metric_name: str,
    registry: CollectorRegistry = REGISTRY,
) -> T:
    """
    Create a metric, or return the existing one if already registered.

    Args:
        metric_factory: Callable that creates the metric
        metric_name: Name used to look up an existing collector
        registry: Prometheus registry (default: global REGISTRY)

    Returns:
        The metric instance
    """
    try:
        return metric_factory()
    except ValueError:
        existing = registry._names_to_collectors.get(metric_name)
        if existing is not None:
            return existing
        raise


TRANSFORM_CALLS = get_or_create_metric(
    lambda: Counter(
        "datatransform_calls_total",
        "Total transform calls",
        ["mode", "status"],
    ),
    "datatransform_calls",
)

TRANSFORM_TIME = get_or_create_metric(
    lambda: Histogram(
        "datatransform_seconds",
        "Time spent in transform calls",
        ["mode"],
        buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
    ),
    "datatransform_seconds",
)

RECORDS_PROCESSED = get_or_create_metric(
    lambda: Counter(
        "datatransform_records_total",
        "Records produced by transform calls",
    ),
    "datatransform_records",
)

OPERATIONS_APPLIED = get_or_create_metric(
    lambda: Counter(
        "datatransform_operations_applied_total",
        "Operate-stage handler invocations",
        ["transformer"],
    ),
    "datatransform_operations_applied",
)

TRANSFORM_ERRORS = get_or_create_metric(
    lambda: Counter(
        "datatransform_errors_total",
        "Errors raised during transform calls",
        ["stage", "error_type"],
    ),
    "datatransform_errors",
)

CONVERSION_ERRORS = get_or_create_metric(
    lambda: Counter(
        "datatransform_conversion_errors_total",
        "Built-in handler conversion failures",
        ["transformer_type", "error_type"],
    ),
    "datatransform_conversion_errors",
)
