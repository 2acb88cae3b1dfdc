"""
Ambient utilities for datatransform

Provides:
- logging: structured/console logging setup
- tracing: OpenTelemetry span helpers
"""

__all__ = ["logging", "tracing"]
