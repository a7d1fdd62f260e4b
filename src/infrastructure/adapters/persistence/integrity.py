"""Helpers for mapping database integrity errors to domain errors."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy.exc import IntegrityError


def violated_constraint(exc: IntegrityError) -> str | None:
    """Return the name of the constraint an IntegrityError violated.

    asyncpg exposes ``constraint_name`` on the driver exception; the
    message text is used when the attribute is absent.
    """
    orig = exc.orig
    for candidate in (orig, getattr(orig, "__cause__", None)):
        name = getattr(candidate, "constraint_name", None)
        if name:
            return str(name)
    message = str(orig)
    marker = 'constraint "'
    if marker in message:
        return message.split(marker, 1)[1].split('"', 1)[0]
    return None


def as_uuid(value: Any) -> UUID | None:
    """Normalize a driver UUID value (asyncpg returns its own UUID type)."""
    if value is None:
        return None
    return value if type(value) is UUID else UUID(str(value))
