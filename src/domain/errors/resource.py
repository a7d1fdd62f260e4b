"""Resource lookup errors."""

from __future__ import annotations

from uuid import UUID

from src.domain.exceptions import NotFoundError


class ResourceNotFoundError(NotFoundError):
    """Raised when a resource cannot be found.

    Attributes:
        resource_id: The resource ID that was not found.
    """

    def __init__(self, resource_id: UUID) -> None:
        self.resource_id = resource_id
        super().__init__(f"Resource not found: {resource_id}")
