"""PostgreSQL protocol repository."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.ports.protocol_repository import ProtocolRepositoryProtocol
from src.domain.errors.protocol import ProtocolNotFoundError
from src.domain.models.case_protocol import CaseProtocol, ProtocolStatus
from src.infrastructure.adapters.persistence.integrity import as_uuid


def _to_protocol(row: Any) -> CaseProtocol:
    return CaseProtocol(
        id=as_uuid(row["id"]),
        process_number=row["process_number"],
        status=ProtocolStatus(row["status"]),
        is_admitted_as_resource=row["is_admitted_as_resource"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class PostgresProtocolRepository(ProtocolRepositoryProtocol):
    """Protocol storage in the ``case_protocols`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, protocol_id: UUID) -> CaseProtocol | None:
        result = await self._session.execute(
            text("SELECT * FROM case_protocols WHERE id = :id"), {"id": protocol_id}
        )
        row = result.mappings().first()
        return _to_protocol(row) if row else None

    async def save(self, protocol: CaseProtocol) -> None:
        await self._session.execute(
            text("""
                INSERT INTO case_protocols
                    (id, process_number, status, is_admitted_as_resource, created_at, updated_at)
                VALUES
                    (:id, :process_number, :status, :admitted, :created_at, :updated_at)
            """),
            {
                "id": protocol.id,
                "process_number": protocol.process_number,
                "status": protocol.status.value,
                "admitted": protocol.is_admitted_as_resource,
                "created_at": protocol.created_at,
                "updated_at": protocol.updated_at,
            },
        )

    async def update(self, protocol: CaseProtocol) -> None:
        result = await self._session.execute(
            text("""
                UPDATE case_protocols
                SET status = :status,
                    is_admitted_as_resource = :admitted,
                    updated_at = :updated_at
                WHERE id = :id
            """),
            {
                "id": protocol.id,
                "status": protocol.status.value,
                "admitted": protocol.is_admitted_as_resource,
                "updated_at": protocol.updated_at,
            },
        )
        if result.rowcount == 0:
            raise ProtocolNotFoundError(protocol_id=protocol.id)
