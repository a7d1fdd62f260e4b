"""Resource (appeal case) domain model.

A Resource is created exactly once from an admitted protocol and carries a
year-scoped number ``"{sequence:04d}/{year}"``. The pair
``(sequence_number, year)`` is globally unique.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID

from src.domain.models.sequence import SequenceScope, format_sequence_number


class ResourceType(Enum):
    """How the appeal was filed.

    Types:
        VOLUNTARIO: Filed by the interested party.
        OFICIO: Filed ex officio by the administration.
    """

    VOLUNTARIO = "VOLUNTARIO"
    OFICIO = "OFICIO"


class ResourceStatus(Enum):
    """Adjudication status of a resource (also used per session).

    Terminal adjudication outcomes are JULGADO, SUSPENSO, DILIGENCIA and
    PEDIDO_VISTA: a session can only be completed when every resource on
    its agenda holds one of them.
    """

    EM_ANALISE = "EM_ANALISE"
    EM_PAUTA = "EM_PAUTA"
    SUSPENSO = "SUSPENSO"
    DILIGENCIA = "DILIGENCIA"
    PEDIDO_VISTA = "PEDIDO_VISTA"
    JULGADO = "JULGADO"

    def is_terminal(self) -> bool:
        """Check if this status is a terminal adjudication outcome."""
        return self in TERMINAL_ADJUDICATION_STATUSES


TERMINAL_ADJUDICATION_STATUSES: frozenset[ResourceStatus] = frozenset(
    {
        ResourceStatus.JULGADO,
        ResourceStatus.SUSPENSO,
        ResourceStatus.DILIGENCIA,
        ResourceStatus.PEDIDO_VISTA,
    }
)

# Statuses a session may assign to a resource on its agenda
SESSION_ASSIGNABLE_STATUSES: frozenset[ResourceStatus] = frozenset(
    {ResourceStatus.EM_PAUTA} | TERMINAL_ADJUDICATION_STATUSES
)


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class Resource:
    """A numbered appeal case.

    Attributes:
        id: Unique identifier.
        protocol_id: The protocol this resource was converted from.
        process_number: Copied from the protocol at conversion time.
        sequence_number: Year-scoped sequence number.
        year: Year of the sequence number.
        type: VOLUNTARIO or OFICIO.
        status: Adjudication status.
        created_at: Creation timestamp (UTC).
        updated_at: Last modification timestamp (UTC).
    """

    id: UUID
    protocol_id: UUID
    process_number: str
    sequence_number: int
    year: int
    type: ResourceType
    status: ResourceStatus = field(default=ResourceStatus.EM_ANALISE)
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Validate resource fields."""
        if self.sequence_number < 1:
            raise ValueError(
                f"sequence_number must be positive, got {self.sequence_number}"
            )

    @property
    def resource_number(self) -> str:
        """Externally visible number, e.g. ``"0007/2025"``."""
        return format_sequence_number(
            SequenceScope.RESOURCE, self.sequence_number, self.year
        )

    def with_status(self, status: ResourceStatus) -> Resource:
        """Return a copy with a new adjudication status."""
        return replace(self, status=status, updated_at=_utc_now())
