"""Bootstrap wiring for logging configuration."""

from __future__ import annotations

from src.config.case_config import get_environment
from src.infrastructure.observability import configure_structlog


def configure_logging(environment: str | None = None) -> None:
    """Configure structlog for ``environment``, defaulting to ENVIRONMENT."""
    configure_structlog(environment=environment or get_environment())


__all__ = ["configure_logging"]
