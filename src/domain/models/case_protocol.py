"""Protocol (initial filing) domain model.

A protocol is the intake record of a case. Once the admission workflow marks
it as admitted, it can be converted into exactly one Resource; conversion
moves the protocol to CONCLUIDO.

The class is named CaseProtocol to keep it apart from ``typing.Protocol``,
which the application ports use.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID


class ProtocolStatus(Enum):
    """Lifecycle status of a protocol.

    States:
        EM_ANALISE: Under admission analysis (initial).
        CONCLUIDO: Concluded; set when converted into a Resource.
        ARQUIVADO: Archived without conversion.
    """

    EM_ANALISE = "EM_ANALISE"
    CONCLUIDO = "CONCLUIDO"
    ARQUIVADO = "ARQUIVADO"


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class CaseProtocol:
    """An intake protocol.

    Attributes:
        id: Unique identifier.
        process_number: Administrative process number of the filing.
        status: Current lifecycle status.
        is_admitted_as_resource: Set when the protocol is admitted.
        created_at: Creation timestamp (UTC).
        updated_at: Last modification timestamp (UTC).
    """

    id: UUID
    process_number: str
    status: ProtocolStatus = field(default=ProtocolStatus.EM_ANALISE)
    is_admitted_as_resource: bool = field(default=False)
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def concluded(self) -> CaseProtocol:
        """Return a copy moved to CONCLUIDO."""
        return replace(self, status=ProtocolStatus.CONCLUIDO, updated_at=_utc_now())

    def admitted(self) -> CaseProtocol:
        """Return a copy marked as admitted for conversion.

        Raises:
            ProtocolNotInAnalysisError: If the protocol left EM_ANALISE.
        """
        # Import here to avoid circular dependency
        from src.domain.errors.protocol import ProtocolNotInAnalysisError

        if self.status != ProtocolStatus.EM_ANALISE:
            raise ProtocolNotInAnalysisError(protocol_id=self.id, status=self.status)
        return replace(self, is_admitted_as_resource=True, updated_at=_utc_now())
