"""Structured logging configuration with structlog.

Two output modes:

- production: one JSON object per line, for log aggregation
- anything else: colored console output for development

Log Entry Format (production):
    {
        "timestamp": "2025-03-01T12:00:00.000000Z",
        "level": "info",
        "event": "publish_batch_completed",
        "correlation_id": "uuid",
        "service": "DecisionPublicationLedger",
        "component": "decision",
        "operation": "publish_batch",
        ...identifiers bound by the operation
    }

The level comes from the LOG_LEVEL environment variable (default INFO).
Standard library loggers (uvicorn, SQLAlchemy) are routed to the same
stream at the same level.
"""

import logging
import os
import sys
from typing import cast

import structlog
from structlog.typing import Processor

from src.infrastructure.observability.correlation import correlation_id_processor

# Environment variable for log level (default: INFO)
LOG_LEVEL_ENV = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"


def _get_log_level() -> int:
    """Return the logging level configured in LOG_LEVEL."""
    level_name = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.INFO


def configure_structlog(environment: str = "production") -> None:
    """Configure structlog for the application.

    Should be called once at application startup.

    Args:
        environment: 'production' for JSON output; any other value selects
            the console renderer.
    """
    level = _get_log_level()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        cast(Processor, correlation_id_processor),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if environment == "production":
        # Tracebacks from log.exception become a string field in JSON
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [structlog.dev.ConsoleRenderer(colors=True)]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)
