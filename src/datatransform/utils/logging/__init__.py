"""
Structured logging configuration.

Usage:
    from datatransform.utils.logging import setup_logging, get_logger

    setup_logging(level="INFO", json_format=True)

    logger = get_logger(__name__)
    logger.info("Transformed batch", extra={"source": "crm", "records": 120})
"""

from .config import configure_from_env, get_logger, setup_logging
from .formatters import ConsoleFormatter, JSONFormatter
from .handlers import ContextLogger

__all__ = [
    "setup_logging",
    "get_logger",
    "configure_from_env",
    "JSONFormatter",
    "ConsoleFormatter",
    "ContextLogger",
]
