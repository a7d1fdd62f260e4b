"""Session repository stub implementation."""

from __future__ import annotations

from uuid import UUID

from src.application.ports.session_repository import SessionRepositoryProtocol
from src.domain.errors.session import (
    DuplicateDistributionError,
    DuplicateSessionNumberError,
    ResourceAlreadyOnAgendaError,
    SessionNotFoundError,
    SessionResourceNotFoundError,
    VotingNotFoundError,
)
from src.domain.models.session import (
    Session,
    SessionDistributionRecord,
    SessionResource,
    SessionResult,
)
from src.infrastructure.stubs.case_tables import CaseTables


class SessionRepositoryStub(SessionRepositoryProtocol):
    """In-memory stub of SessionRepositoryProtocol (testing only).

    Session numbers are unique; agenda entries and distributions are unique
    per ``(session_id, resource_id)``.
    """

    def __init__(self, tables: CaseTables) -> None:
        self._tables = tables

    async def get(self, session_id: UUID) -> Session | None:
        return self._tables.sessions.get(session_id)

    async def get_by_number(self, session_number: str) -> Session | None:
        return next(
            (s for s in self._tables.sessions.values() if s.session_number == session_number),
            None,
        )

    async def save(self, session: Session) -> None:
        if session.id in self._tables.sessions:
            raise ValueError(f"Session already exists: {session.id}")
        if await self.get_by_number(session.session_number) is not None:
            raise DuplicateSessionNumberError(session_number=session.session_number)
        self._tables.sessions[session.id] = session

    async def update(self, session: Session) -> None:
        if session.id not in self._tables.sessions:
            raise SessionNotFoundError(session_id=session.id)
        self._tables.sessions[session.id] = session

    async def list_session_resources(self, session_id: UUID) -> list[SessionResource]:
        entries = [
            sr
            for sr in self._tables.session_resources.values()
            if sr.session_id == session_id
        ]
        return sorted(entries, key=lambda sr: sr.order)

    async def get_session_resource(
        self, session_resource_id: UUID
    ) -> SessionResource | None:
        return self._tables.session_resources.get(session_resource_id)

    async def add_session_resource(self, session_resource: SessionResource) -> None:
        for existing in self._tables.session_resources.values():
            if (existing.session_id, existing.resource_id) == (
                session_resource.session_id,
                session_resource.resource_id,
            ):
                raise ResourceAlreadyOnAgendaError(
                    session_id=session_resource.session_id,
                    resource_id=session_resource.resource_id,
                )
        self._tables.session_resources[session_resource.id] = session_resource

    async def update_session_resource(self, session_resource: SessionResource) -> None:
        if session_resource.id not in self._tables.session_resources:
            raise SessionResourceNotFoundError(
                session_id=session_resource.session_id,
                session_resource_id=session_resource.id,
            )
        self._tables.session_resources[session_resource.id] = session_resource

    async def list_results(self, session_id: UUID, resource_id: UUID) -> list[SessionResult]:
        results = [
            r
            for r in self._tables.session_results.values()
            if r.session_id == session_id and r.resource_id == resource_id
        ]
        return sorted(results, key=lambda r: (r.order, r.created_at))

    async def add_result(self, result: SessionResult) -> None:
        self._tables.session_results[result.id] = result

    async def update_results(self, results: list[SessionResult]) -> None:
        """Persist new positions for a batch of votings.

        Raises:
            VotingNotFoundError: If any voting does not exist; nothing is
                written in that case.
        """
        missing = [r.id for r in results if r.id not in self._tables.session_results]
        if missing:
            raise VotingNotFoundError(
                resource_id=results[0].resource_id, voting_ids=missing
            )
        for result in results:
            self._tables.session_results[result.id] = result

    async def latest_judgment_session(self, resource_id: UUID) -> Session | None:
        session_ids = {
            r.session_id
            for r in self._tables.session_results.values()
            if r.resource_id == resource_id
        }
        sessions = [
            self._tables.sessions[sid]
            for sid in session_ids
            if sid in self._tables.sessions
        ]
        if not sessions:
            return None
        return max(sessions, key=lambda s: (s.date, s.created_at))

    async def add_distribution(self, record: SessionDistributionRecord) -> None:
        for existing in self._tables.distributions.values():
            if (existing.session_id, existing.resource_id) == (
                record.session_id,
                record.resource_id,
            ):
                raise DuplicateDistributionError(
                    session_id=record.session_id, resource_id=record.resource_id
                )
        self._tables.distributions[record.id] = record

    async def get_distribution(
        self, distribution_id: UUID
    ) -> SessionDistributionRecord | None:
        return self._tables.distributions.get(distribution_id)

    async def delete_distribution(self, distribution_id: UUID) -> None:
        self._tables.distributions.pop(distribution_id, None)
