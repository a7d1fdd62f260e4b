"""Session repository port.

Covers sessions, their agenda (SessionResource), the votings recorded per
agenda entry (SessionResult) and distribution records.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.session import (
    Session,
    SessionDistributionRecord,
    SessionResource,
    SessionResult,
)


class SessionRepositoryProtocol(Protocol):
    """Storage operations for sessions and their agenda.

    Uniqueness backstops:
    - ``session_number`` raises DuplicateSessionNumberError.
    - ``(session_id, resource_id)`` on the agenda raises
      ResourceAlreadyOnAgendaError.
    - ``(session_id, resource_id)`` on distributions raises
      DuplicateDistributionError.
    """

    async def get(self, session_id: UUID) -> Session | None:
        """Retrieve a session by ID, or None if absent."""
        ...

    async def get_by_number(self, session_number: str) -> Session | None:
        """Retrieve a session by its session number, or None if absent."""
        ...

    async def save(self, session: Session) -> None:
        """Store a new session.

        Raises:
            DuplicateSessionNumberError: If the session number is taken.
        """
        ...

    async def update(self, session: Session) -> None:
        """Persist changes to an existing session.

        Raises:
            SessionNotFoundError: If the session does not exist.
        """
        ...

    async def list_session_resources(self, session_id: UUID) -> list[SessionResource]:
        """List a session's agenda ordered by position."""
        ...

    async def get_session_resource(
        self, session_resource_id: UUID
    ) -> SessionResource | None:
        """Retrieve an agenda entry by ID, or None if absent."""
        ...

    async def add_session_resource(self, session_resource: SessionResource) -> None:
        """Append a resource to a session's agenda.

        Raises:
            ResourceAlreadyOnAgendaError: If the resource is already on it.
        """
        ...

    async def update_session_resource(self, session_resource: SessionResource) -> None:
        """Persist changes to an agenda entry.

        Raises:
            SessionResourceNotFoundError: If the entry does not exist.
        """
        ...

    async def list_results(self, session_id: UUID, resource_id: UUID) -> list[SessionResult]:
        """List the votings of one resource in one session, ordered by ``order``."""
        ...

    async def add_result(self, result: SessionResult) -> None:
        """Store a new voting."""
        ...

    async def update_results(self, results: list[SessionResult]) -> None:
        """Persist new positions for a batch of votings.

        Contract: every voting in the batch is updated or, when the
        surrounding transaction fails, none is.
        """
        ...

    async def latest_judgment_session(self, resource_id: UUID) -> Session | None:
        """Return the most recent session holding a voting for the resource."""
        ...

    async def add_distribution(self, record: SessionDistributionRecord) -> None:
        """Store a distribution record.

        Raises:
            DuplicateDistributionError: If (session_id, resource_id) exists.
        """
        ...

    async def get_distribution(
        self, distribution_id: UUID
    ) -> SessionDistributionRecord | None:
        """Retrieve a distribution record by ID, or None if absent."""
        ...

    async def delete_distribution(self, distribution_id: UUID) -> None:
        """Remove a distribution record."""
        ...
