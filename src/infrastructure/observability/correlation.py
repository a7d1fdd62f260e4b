"""Request correlation IDs carried across async boundaries.

Each request gets a correlation ID, taken from the ``X-Correlation-ID``
header or generated. It lives in a ContextVar so every log entry written
while serving the request carries it, including entries from services
that never see the request object.

Usage:
    # In middleware (request start)
    token = set_correlation_id(request.headers.get("X-Correlation-ID") or generate_correlation_id())
    try:
        ...
    finally:
        reset_correlation_id(token)

    # In structlog configuration
    processors = [..., correlation_id_processor, ...]
"""

from contextvars import ContextVar, Token
from typing import Any
from uuid import uuid4

# Empty string when no request is being served
_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    """Generate a new correlation ID (UUID4 string)."""
    return str(uuid4())


def get_correlation_id() -> str:
    """Return the current correlation ID, or an empty string if unset."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> Token[str]:
    """Set the correlation ID for the current context.

    Args:
        correlation_id: The correlation ID to set.

    Returns:
        Token that restores the previous value via reset_correlation_id.
    """
    return _correlation_id.set(correlation_id)


def reset_correlation_id(token: Token[str]) -> None:
    """Restore the correlation ID that was current before ``token`` was issued."""
    _correlation_id.reset(token)


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor adding ``correlation_id`` to every entry.

    An explicitly bound correlation_id wins over the context value.
    """
    correlation_id = get_correlation_id()
    if correlation_id:
        event_dict.setdefault("correlation_id", correlation_id)
    return event_dict
