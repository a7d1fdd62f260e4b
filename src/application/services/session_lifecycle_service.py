"""Session lifecycle service.

Manages adjudication sessions and their agenda.

A session is created PENDENTE under a unique ``NNNN/YYYY`` session number;
the session year is taken from the number.

Session State Machine:
    PENDENTE -> CONCLUIDA: complete_session; every agenda entry must hold a
        terminal adjudication status (an empty agenda qualifies)
    CONCLUIDA -> PENDENTE: revert_session; restricted to the highest
        administrative capability by the request boundary

Agenda changes (adding resources, setting statuses, recording votings)
require an open (PENDENTE) session. Reordering votings rewrites a batch of
SessionResult rows in one transaction.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from datetime import date, datetime, timezone
from uuid import UUID, uuid4

from src.application.ports.case_store import CaseStoreProtocol, CaseTransaction
from src.application.services.base import LoggingMixin
from src.domain.errors.resource import ResourceNotFoundError
from src.domain.errors.session import (
    DistributionNotFoundError,
    DuplicateSessionNumberError,
    IncompleteMinutesError,
    InvalidAdjudicationStatusError,
    InvalidSessionInputError,
    InvalidVotingOrderError,
    MissingAdjudicationDetailError,
    PendingSessionResourcesError,
    SessionNotFoundError,
    SessionNotOpenError,
    SessionResourceNotFoundError,
    VotingNotFoundError,
)
from src.domain.models.resource import SESSION_ASSIGNABLE_STATUSES, ResourceStatus
from src.domain.models.session import (
    Session,
    SessionDistributionRecord,
    SessionResource,
    SessionResult,
    SessionStatus,
)

# Placeholder the minutes template leaves for the clerk to fill in
MINUTES_PLACEHOLDER = "[DETALHAR]"

# Statuses whose minutes text must be fully written
DETAILED_MINUTES_STATUSES: frozenset[ResourceStatus] = frozenset(
    {ResourceStatus.SUSPENSO, ResourceStatus.DILIGENCIA}
)

SESSION_NUMBER_PATTERN = re.compile(r"^(\d{4})/(\d{4})$")


@dataclass(frozen=True)
class VotingOrder:
    """New position for one voting."""

    voting_id: UUID
    order: int


@dataclass(frozen=True)
class SessionAgenda:
    """A session together with its ordered agenda."""

    session: Session
    resources: list[SessionResource]

    @property
    def pending_count(self) -> int:
        """Agenda entries without a terminal adjudication status."""
        return sum(1 for sr in self.resources if not sr.is_adjudicated)


def parse_adjudication_status(value: object) -> ResourceStatus:
    """Parse a status a session may assign.

    Raises:
        InvalidAdjudicationStatusError: If the value is unknown or not
            assignable within a session.
    """
    allowed = sorted(s.value for s in SESSION_ASSIGNABLE_STATUSES)
    if isinstance(value, ResourceStatus):
        status = value
    elif isinstance(value, str) and value in ResourceStatus.__members__:
        status = ResourceStatus(value)
    else:
        raise InvalidAdjudicationStatusError(status=value, allowed=allowed)
    if status not in SESSION_ASSIGNABLE_STATUSES:
        raise InvalidAdjudicationStatusError(status=value, allowed=allowed)
    return status


class SessionLifecycleService(LoggingMixin):
    """Service for session state and agenda management.

    Attributes:
        _store: Case store; every public operation is one transaction.
    """

    def __init__(self, store: CaseStoreProtocol) -> None:
        self._store = store
        self._init_logger(component="session")

    async def get_agenda(self, session_id: UUID) -> SessionAgenda:
        """Return a session with its agenda.

        Raises:
            SessionNotFoundError: If the session does not exist.
        """
        async with self._store.transaction() as tx:
            session = await self._require_session(tx, session_id)
            resources = await tx.sessions.list_session_resources(session_id)
        return SessionAgenda(session=session, resources=resources)

    async def create_session(self, session_number: str, session_date: date) -> Session:
        """Schedule a new session in PENDENTE.

        Args:
            session_number: ``NNNN/YYYY``; YYYY becomes the session year.
            session_date: The date of the sitting.

        Raises:
            InvalidSessionInputError: If the number is not ``NNNN/YYYY`` or
                its sequence part is zero.
            DuplicateSessionNumberError: If the number is already taken.
        """
        number = (session_number or "").strip()
        match = SESSION_NUMBER_PATTERN.match(number)
        if match is None:
            raise InvalidSessionInputError(
                f"Session number must have the format NNNN/YYYY, got {session_number!r}"
            )
        if int(match.group(1)) == 0:
            raise InvalidSessionInputError("Session sequence must be positive")

        log = self._log_operation("create_session", session_number=number)
        async with self._store.transaction() as tx:
            if await tx.sessions.get_by_number(number) is not None:
                log.warning("create_session_rejected", reason="duplicate_number")
                raise DuplicateSessionNumberError(session_number=number)
            session = Session(
                id=uuid4(),
                session_number=number,
                year=int(match.group(2)),
                date=session_date,
                status=SessionStatus.PENDENTE,
            )
            await tx.sessions.save(session)

        log.info("session_created", session_id=str(session.id), year=session.year)
        return session

    async def complete_session(self, session_id: UUID) -> Session:
        """Close a session.

        Raises:
            SessionNotFoundError: If the session does not exist.
            InvalidSessionTransitionError: If the session is not PENDENTE.
            PendingSessionResourcesError: If any agenda entry is not
                terminal; carries the exact count.
        """
        log = self._log_operation("complete_session", session_id=str(session_id))
        log.info("complete_session_started")

        async with self._store.transaction() as tx:
            session = await self._require_session(tx, session_id)
            completed = session.with_status(SessionStatus.CONCLUIDA)
            agenda = await tx.sessions.list_session_resources(session_id)
            pending = [sr for sr in agenda if not sr.is_adjudicated]
            if pending:
                log.warning(
                    "complete_session_rejected",
                    pending_count=len(pending),
                    total_count=len(agenda),
                )
                raise PendingSessionResourcesError(
                    session_id=session_id,
                    pending_count=len(pending),
                    total_count=len(agenda),
                )
            await tx.sessions.update(completed)

        log.info("complete_session_completed", resource_count=len(agenda))
        return completed

    async def revert_session(self, session_id: UUID) -> Session:
        """Reopen a completed session.

        Raises:
            SessionNotFoundError: If the session does not exist.
            InvalidSessionTransitionError: If the session is not CONCLUIDA.
        """
        log = self._log_operation("revert_session", session_id=str(session_id))
        async with self._store.transaction() as tx:
            session = await self._require_session(tx, session_id)
            reverted = session.with_status(SessionStatus.PENDENTE)
            await tx.sessions.update(reverted)
        log.info("revert_session_completed")
        return reverted

    async def add_resource_to_session(
        self, session_id: UUID, resource_id: UUID
    ) -> SessionResource:
        """Append a resource to the agenda with status EM_PAUTA.

        Raises:
            SessionNotFoundError: If the session does not exist.
            SessionNotOpenError: If the session is CONCLUIDA.
            ResourceNotFoundError: If the resource does not exist.
            ResourceAlreadyOnAgendaError: If it is already on the agenda.
        """
        log = self._log_operation(
            "add_resource_to_session",
            session_id=str(session_id),
            resource_id=str(resource_id),
        )
        async with self._store.transaction() as tx:
            session = await self._require_open_session(tx, session_id)
            resource = await tx.resources.get(resource_id)
            if resource is None:
                raise ResourceNotFoundError(resource_id=resource_id)
            agenda = await tx.sessions.list_session_resources(session.id)
            entry = SessionResource(
                id=uuid4(),
                session_id=session.id,
                resource_id=resource.id,
                order=max((sr.order for sr in agenda), default=0) + 1,
                status=ResourceStatus.EM_PAUTA,
            )
            await tx.sessions.add_session_resource(entry)
            await tx.resources.update(resource.with_status(ResourceStatus.EM_PAUTA))

        log.info("resource_added_to_session", order=entry.order)
        return entry

    async def update_resource_status(
        self,
        session_id: UUID,
        session_resource_id: UUID,
        status: object,
        minutes_text: str | None = None,
        diligence_days_deadline: int | None = None,
        view_requested_by_id: UUID | None = None,
    ) -> SessionResource:
        """Set the adjudication status of an agenda entry.

        The owning resource's status follows the agenda entry.

        Raises:
            InvalidAdjudicationStatusError: If the status cannot be assigned.
            MissingAdjudicationDetailError: If DILIGENCIA lacks a positive
                deadline or PEDIDO_VISTA lacks the requesting member.
            IncompleteMinutesError: If SUSPENSO/DILIGENCIA minutes still
                hold the placeholder.
            SessionNotFoundError: If the session does not exist.
            SessionNotOpenError: If the session is CONCLUIDA.
            SessionResourceNotFoundError: If the entry is not in the session.
        """
        new_status = parse_adjudication_status(status)
        if new_status == ResourceStatus.DILIGENCIA and (
            diligence_days_deadline is None or diligence_days_deadline <= 0
        ):
            raise MissingAdjudicationDetailError(
                status=new_status.value, field="a positive diligence_days_deadline"
            )
        if new_status == ResourceStatus.PEDIDO_VISTA and view_requested_by_id is None:
            raise MissingAdjudicationDetailError(
                status=new_status.value, field="view_requested_by_id"
            )
        if (
            new_status in DETAILED_MINUTES_STATUSES
            and minutes_text
            and MINUTES_PLACEHOLDER in minutes_text
        ):
            raise IncompleteMinutesError(placeholder=MINUTES_PLACEHOLDER)

        log = self._log_operation(
            "update_resource_status",
            session_id=str(session_id),
            session_resource_id=str(session_resource_id),
            status=new_status.value,
        )
        async with self._store.transaction() as tx:
            await self._require_open_session(tx, session_id)
            entry = await self._require_session_resource(tx, session_id, session_resource_id)
            updated = replace(
                entry,
                status=new_status,
                minutes_text=minutes_text if minutes_text is not None else entry.minutes_text,
                diligence_days_deadline=(
                    diligence_days_deadline
                    if new_status == ResourceStatus.DILIGENCIA
                    else None
                ),
                view_requested_by_id=(
                    view_requested_by_id
                    if new_status == ResourceStatus.PEDIDO_VISTA
                    else None
                ),
                updated_at=datetime.now(timezone.utc),
            )
            await tx.sessions.update_session_resource(updated)
            resource = await tx.resources.get(entry.resource_id)
            if resource is None:
                raise ResourceNotFoundError(resource_id=entry.resource_id)
            await tx.resources.update(resource.with_status(new_status))

        log.info("resource_status_updated", previous_status=entry.status.value)
        return updated

    async def record_voting(
        self, session_id: UUID, session_resource_id: UUID, label: str
    ) -> SessionResult:
        """Append a voting for an agenda entry at the next order.

        Raises:
            InvalidVotingOrderError: If the label is blank.
            SessionNotFoundError: If the session does not exist.
            SessionNotOpenError: If the session is CONCLUIDA.
            SessionResourceNotFoundError: If the entry is not in the session.
        """
        if not label or not label.strip():
            raise InvalidVotingOrderError("Voting label is required")

        async with self._store.transaction() as tx:
            await self._require_open_session(tx, session_id)
            entry = await self._require_session_resource(tx, session_id, session_resource_id)
            existing = await tx.sessions.list_results(session_id, entry.resource_id)
            result = SessionResult(
                id=uuid4(),
                session_id=session_id,
                resource_id=entry.resource_id,
                label=label.strip(),
                order=max((r.order for r in existing), default=0) + 1,
            )
            await tx.sessions.add_result(result)

        self._log_operation(
            "record_voting",
            session_id=str(session_id),
            voting_id=str(result.id),
        ).info("voting_recorded", order=result.order)
        return result

    async def list_votings(
        self, session_id: UUID, session_resource_id: UUID
    ) -> list[SessionResult]:
        """List the votings of an agenda entry ordered by ``order``."""
        async with self._store.transaction() as tx:
            await self._require_session(tx, session_id)
            entry = await self._require_session_resource(tx, session_id, session_resource_id)
            return await tx.sessions.list_results(session_id, entry.resource_id)

    async def reorder_votings(
        self,
        session_id: UUID,
        session_resource_id: UUID,
        items: list[VotingOrder],
    ) -> list[SessionResult]:
        """Apply new positions to an agenda entry's votings.

        Contract: the batch is validated up front and applied in a single
        transaction. Either every listed voting takes its new order or
        none does; votings not listed keep their order.

        Args:
            session_id: The session.
            session_resource_id: The agenda entry whose votings move.
            items: (voting_id, order) pairs.

        Returns:
            The entry's votings, ordered by their new positions.

        Raises:
            InvalidVotingOrderError: If the batch is empty, repeats a voting
                or carries a negative order.
            SessionNotFoundError: If the session does not exist.
            SessionResourceNotFoundError: If the entry is not in the session.
            VotingNotFoundError: If a voting does not belong to the entry.
        """
        if not items:
            raise InvalidVotingOrderError("At least one voting must be reordered")
        voting_ids = [item.voting_id for item in items]
        if len(set(voting_ids)) != len(voting_ids):
            raise InvalidVotingOrderError("Each voting may appear only once in a reorder")
        negative = [item for item in items if item.order < 0]
        if negative:
            raise InvalidVotingOrderError(
                f"Voting order must be non-negative, got {negative[0].order}"
            )

        log = self._log_operation(
            "reorder_votings",
            session_id=str(session_id),
            session_resource_id=str(session_resource_id),
            count=len(items),
        )
        async with self._store.transaction() as tx:
            await self._require_session(tx, session_id)
            entry = await self._require_session_resource(tx, session_id, session_resource_id)
            current = {
                r.id: r for r in await tx.sessions.list_results(session_id, entry.resource_id)
            }
            unknown = [vid for vid in voting_ids if vid not in current]
            if unknown:
                log.warning("reorder_votings_rejected", unknown_count=len(unknown))
                raise VotingNotFoundError(resource_id=entry.resource_id, voting_ids=unknown)

            await tx.sessions.update_results(
                [current[item.voting_id].reordered(item.order) for item in items]
            )
            reordered = await tx.sessions.list_results(session_id, entry.resource_id)

        log.info("reorder_votings_completed")
        return reordered

    async def distribute_resource(
        self,
        session_id: UUID,
        resource_id: UUID,
        distributed_to_id: UUID,
        target_session_id: UUID | None = None,
    ) -> SessionDistributionRecord:
        """Record that a resource was distributed to a member in a session.

        Raises:
            SessionNotFoundError: If the session or target session is absent.
            ResourceNotFoundError: If the resource does not exist.
            DuplicateDistributionError: If already distributed in this session.
        """
        async with self._store.transaction() as tx:
            await self._require_session(tx, session_id)
            if await tx.resources.get(resource_id) is None:
                raise ResourceNotFoundError(resource_id=resource_id)
            if target_session_id is not None:
                await self._require_session(tx, target_session_id)
            record = SessionDistributionRecord(
                id=uuid4(),
                session_id=session_id,
                resource_id=resource_id,
                distributed_to_id=distributed_to_id,
                target_session_id=target_session_id,
            )
            await tx.sessions.add_distribution(record)

        self._log_operation(
            "distribute_resource",
            session_id=str(session_id),
            resource_id=str(resource_id),
        ).info("resource_distributed", distribution_id=str(record.id))
        return record

    async def remove_distribution(self, distribution_id: UUID) -> None:
        """Remove a distribution record.

        Raises:
            DistributionNotFoundError: If the record does not exist.
        """
        async with self._store.transaction() as tx:
            if await tx.sessions.get_distribution(distribution_id) is None:
                raise DistributionNotFoundError(distribution_id=distribution_id)
            await tx.sessions.delete_distribution(distribution_id)
        self._log_operation(
            "remove_distribution", distribution_id=str(distribution_id)
        ).info("distribution_removed")

    async def _require_session(self, tx: CaseTransaction, session_id: UUID) -> Session:
        session = await tx.sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id=session_id)
        return session

    async def _require_open_session(self, tx: CaseTransaction, session_id: UUID) -> Session:
        session = await self._require_session(tx, session_id)
        if not session.is_open:
            raise SessionNotOpenError(session_id=session_id, status=session.status)
        return session

    async def _require_session_resource(
        self, tx: CaseTransaction, session_id: UUID, session_resource_id: UUID
    ) -> SessionResource:
        entry = await tx.sessions.get_session_resource(session_resource_id)
        if entry is None or entry.session_id != session_id:
            raise SessionResourceNotFoundError(
                session_id=session_id, session_resource_id=session_resource_id
            )
        return entry
