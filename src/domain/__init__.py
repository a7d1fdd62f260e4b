"""
Domain layer - Pure business logic for the case-lifecycle engine.

This layer contains:
- Domain models (Protocol, Resource, Session, Decision, NotificationList)
- Sequence numbering rules
- Domain errors grouped by kind
- The atomic operation primitive

CRITICAL: This layer must NOT import from application, infrastructure, or api.
Only stdlib, typing and structlog imports are allowed.
"""

from src.domain.exceptions import (
    CaseEngineError,
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
    UnexpectedError,
)

__all__: list[str] = [
    "CaseEngineError",
    "ConflictError",
    "ForbiddenError",
    "InvalidInputError",
    "InvalidStateError",
    "NotFoundError",
    "UnexpectedError",
]
