"""
Distributed tracing using OpenTelemetry.

Every transform call is wrapped in a span; exporters are configured by the
host application through ``initialize_tracing``.
"""

from .context import add_span_attributes, trace_operation
from .decorators import trace_function
from .tracer import get_tracer, initialize_tracing, shutdown_tracing

__all__ = [
    "initialize_tracing",
    "get_tracer",
    "shutdown_tracing",
    "trace_operation",
    "add_span_attributes",
    "trace_function",
]
