"""Resource repository stub implementation.

Enforces the same unique keys as the database schema:
``(sequence_number, year)`` and ``protocol_id``.
"""

from __future__ import annotations

from uuid import UUID

from src.application.ports.resource_repository import ResourceRepositoryProtocol
from src.domain.errors.protocol import ProtocolAlreadyConvertedError
from src.domain.errors.resource import ResourceNotFoundError
from src.domain.errors.sequence import SequenceConflictError
from src.domain.models.resource import Resource
from src.domain.models.sequence import SequenceScope
from src.infrastructure.stubs.case_tables import CaseTables


class ResourceRepositoryStub(ResourceRepositoryProtocol):
    """In-memory stub of ResourceRepositoryProtocol (testing only)."""

    def __init__(self, tables: CaseTables) -> None:
        self._tables = tables

    async def get(self, resource_id: UUID) -> Resource | None:
        return self._tables.resources.get(resource_id)

    async def get_by_protocol(self, protocol_id: UUID) -> Resource | None:
        for resource in self._tables.resources.values():
            if resource.protocol_id == protocol_id:
                return resource
        return None

    async def save(self, resource: Resource) -> None:
        """Store a new resource, enforcing its unique keys.

        Raises:
            SequenceConflictError: If (sequence_number, year) is taken.
            ProtocolAlreadyConvertedError: If the protocol already owns a resource.
        """
        for existing in self._tables.resources.values():
            if (existing.sequence_number, existing.year) == (
                resource.sequence_number,
                resource.year,
            ):
                raise SequenceConflictError(
                    scope=SequenceScope.RESOURCE,
                    year=resource.year,
                    sequence_number=resource.sequence_number,
                )
            if existing.protocol_id == resource.protocol_id:
                raise ProtocolAlreadyConvertedError(
                    protocol_id=resource.protocol_id, resource_id=existing.id
                )
        self._tables.resources[resource.id] = resource

    async def update(self, resource: Resource) -> None:
        if resource.id not in self._tables.resources:
            raise ResourceNotFoundError(resource_id=resource.id)
        self._tables.resources[resource.id] = resource
