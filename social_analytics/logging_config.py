"""
Centralized logging configuration for the social analytics engine.

Provides a single logging format for the CLI and any embedding host:
Format: 2026-01-06T14:05:52Z [source] LEVEL message

Environment Variables:
    LOG_LEVEL: Set to "DEBUG", "TRACE", or "INFO" (default)
               - INFO: Normal operation logs
               - DEBUG: Parse and analysis diagnostics (dropped lines, counts)
               - TRACE: Per-step layout diagnostics

Usage:
    from social_analytics.logging_config import configure_logging, get_logger

    configure_logging(source="cli")
    logger = get_logger(__name__)
    logger.info("Analysis started")
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import UTC, datetime
from typing import TextIO

# Custom TRACE level for per-step layout output
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


def _trace(self: logging.Logger, message: object, *args: object, **kw: object) -> None:
    """Log a message at TRACE level (5)."""
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kw)  # type: ignore[arg-type]


logging.Logger.trace = _trace  # type: ignore[attr-defined]


class ISO8601Formatter(logging.Formatter):
    """Formatter producing ISO8601 timestamps in UTC.

    Output format: 2026-01-06T14:05:52Z [source] LEVEL message
    """

    def __init__(self, source: str = "engine"):
        """Initialize formatter with a source identifier.

        Args:
            source: Identifier shown in brackets (e.g., "cli", "layout")
        """
        self.source = source
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record with ISO8601 UTC timestamp."""
        timestamp = datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
        message = record.getMessage()

        if record.exc_info:
            exception_text = self.formatException(record.exc_info)
            message = f"{message}\n{exception_text}"

        return f"{timestamp} [{self.source}] {record.levelname} {message}"


def configure_logging(
    source: str = "engine",
    level: int | None = None,
    debug: bool | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Configure logging for an engine host.

    Args:
        source: Source identifier for log messages (e.g., "cli", "ticker")
        level: Logging level (defaults to INFO, or DEBUG/TRACE from LOG_LEVEL env var)
        debug: Enable debug mode (overrides level to DEBUG)
        stream: Output stream for the handler (defaults to stdout)

    Returns:
        Configured root logger
    """
    if level is None:
        log_level_env = os.getenv("LOG_LEVEL", "").upper()
        if log_level_env == "TRACE":
            level = TRACE
        elif log_level_env == "DEBUG" or debug:
            level = logging.DEBUG
        else:
            level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear existing handlers to avoid duplicates
    root_logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(ISO8601Formatter(source=source))

    root_logger.addHandler(handler)

    # Suppress noisy third-party loggers
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given module name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
