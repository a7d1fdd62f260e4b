"""PostgreSQL resource repository."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.ports.resource_repository import ResourceRepositoryProtocol
from src.domain.errors.protocol import ProtocolAlreadyConvertedError
from src.domain.errors.resource import ResourceNotFoundError
from src.domain.errors.sequence import SequenceConflictError
from src.domain.models.resource import Resource, ResourceStatus, ResourceType
from src.domain.models.sequence import SequenceScope
from src.infrastructure.adapters.persistence.integrity import (
    as_uuid,
    violated_constraint,
)


def _to_resource(row: Any) -> Resource:
    return Resource(
        id=as_uuid(row["id"]),
        protocol_id=as_uuid(row["protocol_id"]),
        process_number=row["process_number"],
        sequence_number=row["sequence_number"],
        year=row["year"],
        type=ResourceType(row["type"]),
        status=ResourceStatus(row["status"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class PostgresResourceRepository(ResourceRepositoryProtocol):
    """Resource storage in the ``resources`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, resource_id: UUID) -> Resource | None:
        result = await self._session.execute(
            text("SELECT * FROM resources WHERE id = :id"), {"id": resource_id}
        )
        row = result.mappings().first()
        return _to_resource(row) if row else None

    async def get_by_protocol(self, protocol_id: UUID) -> Resource | None:
        result = await self._session.execute(
            text("SELECT * FROM resources WHERE protocol_id = :protocol_id"),
            {"protocol_id": protocol_id},
        )
        row = result.mappings().first()
        return _to_resource(row) if row else None

    async def save(self, resource: Resource) -> None:
        try:
            await self._session.execute(
                text("""
                    INSERT INTO resources
                        (id, protocol_id, process_number, sequence_number, year,
                         type, status, created_at, updated_at)
                    VALUES
                        (:id, :protocol_id, :process_number, :sequence_number, :year,
                         :type, :status, :created_at, :updated_at)
                """),
                {
                    "id": resource.id,
                    "protocol_id": resource.protocol_id,
                    "process_number": resource.process_number,
                    "sequence_number": resource.sequence_number,
                    "year": resource.year,
                    "type": resource.type.value,
                    "status": resource.status.value,
                    "created_at": resource.created_at,
                    "updated_at": resource.updated_at,
                },
            )
        except IntegrityError as exc:
            constraint = violated_constraint(exc)
            if constraint == "uq_resources_number":
                raise SequenceConflictError(
                    scope=SequenceScope.RESOURCE,
                    year=resource.year,
                    sequence_number=resource.sequence_number,
                ) from exc
            if constraint == "uq_resources_protocol":
                raise ProtocolAlreadyConvertedError(protocol_id=resource.protocol_id) from exc
            raise

    async def update(self, resource: Resource) -> None:
        result = await self._session.execute(
            text("""
                UPDATE resources SET status = :status, updated_at = :updated_at
                WHERE id = :id
            """),
            {
                "id": resource.id,
                "status": resource.status.value,
                "updated_at": resource.updated_at,
            },
        )
        if result.rowcount == 0:
            raise ResourceNotFoundError(resource_id=resource.id)
