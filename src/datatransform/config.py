"""
Environment-driven settings for applications embedding the engine.

Environment variables:
    DATATRANSFORM_LOG_LEVEL: Log level (default: INFO)
    DATATRANSFORM_LOG_JSON: Use JSON log format (default: false)
    DATATRANSFORM_LOG_FILE: Log file path (default: none)
    DATATRANSFORM_SERVICE_NAME: Service name for traces (default: datatransform)
    DATATRANSFORM_OTLP_ENDPOINT: OTLP collector endpoint (default: none)
    DATATRANSFORM_TRACE_CONSOLE: Export spans to the console (default: false)
"""

import logging
import os
from dataclasses import dataclass

from .utils.logging import setup_logging
from .utils.tracing import initialize_tracing

logger = logging.getLogger(__name__)

ENV_PREFIX = "DATATRANSFORM_"
TRUE_VALUES = ("true", "1", "yes")


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool = False) -> bool:
    value = _env(name)
    if value is None:
        return default
    return value.lower() in TRUE_VALUES


@dataclass(frozen=True)
class Settings:
    """Logging and tracing settings."""

    log_level: str = "INFO"
    log_json: bool = False
    log_file: str | None = None
    service_name: str = "datatransform"
    otlp_endpoint: str | None = None
    trace_console: bool = False

    @property
    def tracing_enabled(self) -> bool:
        return bool(self.otlp_endpoint) or self.trace_console

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from ``DATATRANSFORM_*`` environment variables."""
        return cls(
            log_level=_env("LOG_LEVEL", "INFO").upper(),
            log_json=_env_flag("LOG_JSON"),
            log_file=_env("LOG_FILE") or None,
            service_name=_env("SERVICE_NAME", "datatransform"),
            otlp_endpoint=_env("OTLP_ENDPOINT") or None,
            trace_console=_env_flag("TRACE_CONSOLE"),
        )


def configure(settings: Settings | None = None) -> Settings:
    """
    Apply logging and, when an exporter is configured, tracing setup.

    Args:
        settings: Settings to apply (default: loaded from the environment)

    Returns:
        The applied settings
    """
    settings = settings or Settings.from_env()

    setup_logging(
        level=settings.log_level,
        log_file=settings.log_file,
        json_format=settings.log_json,
        app_name=settings.service_name,
    )

    if settings.tracing_enabled:
        initialize_tracing(
            service_name=settings.service_name,
            otlp_endpoint=settings.otlp_endpoint,
            console_export=settings.trace_console,
        )
    else:
        logger.debug("No trace exporter configured, skipping tracing setup")

    return settings
