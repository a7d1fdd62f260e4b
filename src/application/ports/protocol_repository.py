"""Protocol (initial filing) repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.case_protocol import CaseProtocol


class ProtocolRepositoryProtocol(Protocol):
    """Storage operations for intake protocols.

    Protocols are registered in EM_ANALISE, flagged on admission and moved
    to CONCLUIDO on conversion.
    """

    async def get(self, protocol_id: UUID) -> CaseProtocol | None:
        """Retrieve a protocol by ID, or None if absent."""
        ...

    async def save(self, protocol: CaseProtocol) -> None:
        """Store a new protocol."""
        ...

    async def update(self, protocol: CaseProtocol) -> None:
        """Persist changes to an existing protocol.

        Raises:
            ProtocolNotFoundError: If the protocol does not exist.
        """
        ...
