"""Protocol repository stub implementation."""

from __future__ import annotations

from uuid import UUID

from src.application.ports.protocol_repository import ProtocolRepositoryProtocol
from src.domain.errors.protocol import ProtocolNotFoundError
from src.domain.models.case_protocol import CaseProtocol
from src.infrastructure.stubs.case_tables import CaseTables


class ProtocolRepositoryStub(ProtocolRepositoryProtocol):
    """In-memory stub of ProtocolRepositoryProtocol (testing only)."""

    def __init__(self, tables: CaseTables) -> None:
        self._tables = tables

    async def get(self, protocol_id: UUID) -> CaseProtocol | None:
        return self._tables.protocols.get(protocol_id)

    async def save(self, protocol: CaseProtocol) -> None:
        if protocol.id in self._tables.protocols:
            raise ValueError(f"Protocol already exists: {protocol.id}")
        self._tables.protocols[protocol.id] = protocol

    async def update(self, protocol: CaseProtocol) -> None:
        if protocol.id not in self._tables.protocols:
            raise ProtocolNotFoundError(protocol_id=protocol.id)
        self._tables.protocols[protocol.id] = protocol
