"""
Structured logging configuration for the DLP directives

Provides JSON-formatted or colored console logging with contextual
information passed through ``extra``.

Usage:
    from utils.logging import setup_logging, get_logger

    # Setup logging (call once at application startup)
    setup_logging(level="INFO", json_format=True)

    # Get logger for your module
    logger = get_logger(__name__)

    # Log with context
    logger.info("Batch redacted", extra={
        "directive": "redact",
        "row_count": 100,
    })
"""

from .config import configure_from_env, get_logger, setup_logging, shutdown_logging
from .formatters import ConsoleFormatter, JSONFormatter

__all__ = [
    "setup_logging",
    "get_logger",
    "configure_from_env",
    "shutdown_logging",
    "JSONFormatter",
    "ConsoleFormatter",
]
