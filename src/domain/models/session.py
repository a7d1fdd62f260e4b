"""Adjudication session domain models.

A Session is a scheduled sitting. Its agenda is an ordered set of
SessionResource records; each carries the adjudication status of one
Resource in that sitting, and the votings (SessionResult) recorded for it.

State Machine:
    PENDENTE -> CONCLUIDA (complete; every agenda item must be terminal)
    CONCLUIDA -> PENDENTE (revert; highest administrative capability only)
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from enum import Enum
from uuid import UUID

from src.domain.models.resource import ResourceStatus


class SessionStatus(Enum):
    """Lifecycle status of a session.

    States:
        PENDENTE: Open and editable (initial).
        CONCLUIDA: Closed.
    """

    PENDENTE = "PENDENTE"
    CONCLUIDA = "CONCLUIDA"

    def valid_transitions(self) -> frozenset[SessionStatus]:
        """Get valid transitions from this status."""
        return SESSION_TRANSITION_MATRIX.get(self, frozenset())


SESSION_TRANSITION_MATRIX: dict[SessionStatus, frozenset[SessionStatus]] = {
    SessionStatus.PENDENTE: frozenset({SessionStatus.CONCLUIDA}),
    SessionStatus.CONCLUIDA: frozenset({SessionStatus.PENDENTE}),
}


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class Session:
    """An adjudication sitting.

    Attributes:
        id: Unique identifier.
        session_number: Human-facing session number.
        year: Year the session belongs to (also the judgment year of the
            resources decided in it).
        date: Scheduled date.
        status: PENDENTE or CONCLUIDA.
        created_at: Creation timestamp (UTC).
        updated_at: Last modification timestamp (UTC).
    """

    id: UUID
    session_number: str
    year: int
    date: date
    status: SessionStatus = field(default=SessionStatus.PENDENTE)
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    @property
    def is_open(self) -> bool:
        """True while the session is PENDENTE."""
        return self.status == SessionStatus.PENDENTE

    def with_status(self, new_status: SessionStatus) -> Session:
        """Return a copy in a new status, enforcing the transition matrix.

        Raises:
            InvalidSessionTransitionError: If the transition is not allowed.
        """
        # Import here to avoid circular dependency
        from src.domain.errors.session import InvalidSessionTransitionError

        if new_status not in self.status.valid_transitions():
            raise InvalidSessionTransitionError(
                session_id=self.id,
                from_status=self.status,
                to_status=new_status,
            )
        return replace(self, status=new_status, updated_at=_utc_now())


@dataclass(frozen=True, eq=True)
class SessionResource:
    """A resource on a session's agenda.

    Attributes:
        id: Unique identifier of the agenda entry.
        session_id: Owning session.
        resource_id: The resource being adjudicated.
        order: Position on the agenda (1-based).
        status: Adjudication status within this session.
        minutes_text: Text recorded in the minutes for this resource.
        diligence_days_deadline: Deadline in days when status is DILIGENCIA.
        view_requested_by_id: Member who requested view (PEDIDO_VISTA).
    """

    id: UUID
    session_id: UUID
    resource_id: UUID
    order: int
    status: ResourceStatus = field(default=ResourceStatus.EM_PAUTA)
    minutes_text: str | None = field(default=None)
    diligence_days_deadline: int | None = field(default=None)
    view_requested_by_id: UUID | None = field(default=None)
    updated_at: datetime = field(default_factory=_utc_now)

    @property
    def is_adjudicated(self) -> bool:
        """True when the status is a terminal adjudication outcome."""
        return self.status.is_terminal()


@dataclass(frozen=True, eq=True)
class SessionResult:
    """A voting recorded for a resource within a session.

    Attributes:
        id: Unique identifier (the voting id).
        session_id: Session the voting happened in.
        resource_id: Resource voted on.
        label: Short description of what was voted.
        order: Display and decision sequence.
        created_at: Creation timestamp (UTC).
    """

    id: UUID
    session_id: UUID
    resource_id: UUID
    label: str
    order: int
    created_at: datetime = field(default_factory=_utc_now)

    def reordered(self, order: int) -> SessionResult:
        """Return a copy at a new position."""
        return replace(self, order=order)


@dataclass(frozen=True, eq=True)
class SessionDistributionRecord:
    """A resource distributed to a member in a session.

    At most one record exists per ``(session_id, resource_id)``.

    Attributes:
        id: Unique identifier.
        session_id: Session in which the distribution was made.
        resource_id: Distributed resource.
        distributed_to_id: Member receiving the resource.
        target_session_id: Session the resource is expected to be judged in.
        created_at: Creation timestamp (UTC).
    """

    id: UUID
    session_id: UUID
    resource_id: UUID
    distributed_to_id: UUID
    target_session_id: UUID | None = field(default=None)
    created_at: datetime = field(default_factory=_utc_now)
