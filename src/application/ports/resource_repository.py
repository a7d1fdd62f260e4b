"""Resource (appeal case) repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.resource import Resource


class ResourceRepositoryProtocol(Protocol):
    """Storage operations for resources.

    Uniqueness backstops:
    - ``(sequence_number, year)`` raises SequenceConflictError.
    - ``protocol_id`` raises ProtocolAlreadyConvertedError.
    """

    async def get(self, resource_id: UUID) -> Resource | None:
        """Retrieve a resource by ID, or None if absent."""
        ...

    async def get_by_protocol(self, protocol_id: UUID) -> Resource | None:
        """Retrieve the resource converted from a protocol, or None."""
        ...

    async def save(self, resource: Resource) -> None:
        """Store a new resource.

        Raises:
            SequenceConflictError: If (sequence_number, year) is taken.
            ProtocolAlreadyConvertedError: If the protocol already owns a resource.
        """
        ...

    async def update(self, resource: Resource) -> None:
        """Persist changes to an existing resource.

        Raises:
            ResourceNotFoundError: If the resource does not exist.
        """
        ...
