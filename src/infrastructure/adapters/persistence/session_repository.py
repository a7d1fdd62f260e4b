"""PostgreSQL session repository."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.ports.session_repository import SessionRepositoryProtocol
from src.domain.errors.session import (
    DuplicateDistributionError,
    DuplicateSessionNumberError,
    ResourceAlreadyOnAgendaError,
    SessionNotFoundError,
    SessionResourceNotFoundError,
    VotingNotFoundError,
)
from src.domain.models.resource import ResourceStatus
from src.domain.models.session import (
    Session,
    SessionDistributionRecord,
    SessionResource,
    SessionResult,
    SessionStatus,
)
from src.infrastructure.adapters.persistence.integrity import (
    as_uuid,
    violated_constraint,
)


def _to_session(row: Any) -> Session:
    return Session(
        id=as_uuid(row["id"]),
        session_number=row["session_number"],
        year=row["year"],
        date=row["date"],
        status=SessionStatus(row["status"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _to_session_resource(row: Any) -> SessionResource:
    return SessionResource(
        id=as_uuid(row["id"]),
        session_id=as_uuid(row["session_id"]),
        resource_id=as_uuid(row["resource_id"]),
        order=row["order"],
        status=ResourceStatus(row["status"]),
        minutes_text=row["minutes_text"],
        diligence_days_deadline=row["diligence_days_deadline"],
        view_requested_by_id=as_uuid(row["view_requested_by_id"]),
        updated_at=row["updated_at"],
    )


def _to_result(row: Any) -> SessionResult:
    return SessionResult(
        id=as_uuid(row["id"]),
        session_id=as_uuid(row["session_id"]),
        resource_id=as_uuid(row["resource_id"]),
        label=row["label"],
        order=row["order"],
        created_at=row["created_at"],
    )


def _to_distribution(row: Any) -> SessionDistributionRecord:
    return SessionDistributionRecord(
        id=as_uuid(row["id"]),
        session_id=as_uuid(row["session_id"]),
        resource_id=as_uuid(row["resource_id"]),
        distributed_to_id=as_uuid(row["distributed_to_id"]),
        target_session_id=as_uuid(row["target_session_id"]),
        created_at=row["created_at"],
    )


class PostgresSessionRepository(SessionRepositoryProtocol):
    """Session storage across the ``sessions``, ``session_resources``,
    ``session_results`` and ``session_distributions`` tables."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, session_id: UUID) -> Session | None:
        result = await self._session.execute(
            text("SELECT * FROM sessions WHERE id = :id"), {"id": session_id}
        )
        row = result.mappings().first()
        return _to_session(row) if row else None

    async def get_by_number(self, session_number: str) -> Session | None:
        result = await self._session.execute(
            text("SELECT * FROM sessions WHERE session_number = :session_number"),
            {"session_number": session_number},
        )
        row = result.mappings().first()
        return _to_session(row) if row else None

    async def save(self, session: Session) -> None:
        try:
            await self._session.execute(
                text("""
                    INSERT INTO sessions
                        (id, session_number, year, date, status, created_at, updated_at)
                    VALUES
                        (:id, :session_number, :year, :date, :status, :created_at, :updated_at)
                """),
                {
                    "id": session.id,
                    "session_number": session.session_number,
                    "year": session.year,
                    "date": session.date,
                    "status": session.status.value,
                    "created_at": session.created_at,
                    "updated_at": session.updated_at,
                },
            )
        except IntegrityError as exc:
            if violated_constraint(exc) == "uq_sessions_number":
                raise DuplicateSessionNumberError(
                    session_number=session.session_number
                ) from exc
            raise

    async def update(self, session: Session) -> None:
        result = await self._session.execute(
            text("UPDATE sessions SET status = :status, updated_at = :updated_at WHERE id = :id"),
            {
                "id": session.id,
                "status": session.status.value,
                "updated_at": session.updated_at,
            },
        )
        if result.rowcount == 0:
            raise SessionNotFoundError(session_id=session.id)

    async def list_session_resources(self, session_id: UUID) -> list[SessionResource]:
        result = await self._session.execute(
            text('SELECT * FROM session_resources WHERE session_id = :session_id ORDER BY "order"'),
            {"session_id": session_id},
        )
        return [_to_session_resource(row) for row in result.mappings().all()]

    async def get_session_resource(
        self, session_resource_id: UUID
    ) -> SessionResource | None:
        result = await self._session.execute(
            text("SELECT * FROM session_resources WHERE id = :id"),
            {"id": session_resource_id},
        )
        row = result.mappings().first()
        return _to_session_resource(row) if row else None

    async def add_session_resource(self, session_resource: SessionResource) -> None:
        try:
            await self._session.execute(
                text("""
                    INSERT INTO session_resources
                        (id, session_id, resource_id, "order", status, minutes_text,
                         diligence_days_deadline, view_requested_by_id, updated_at)
                    VALUES
                        (:id, :session_id, :resource_id, :order, :status, :minutes_text,
                         :diligence_days_deadline, :view_requested_by_id, :updated_at)
                """),
                self._session_resource_params(session_resource),
            )
        except IntegrityError as exc:
            if violated_constraint(exc) == "uq_session_resources_session_resource":
                raise ResourceAlreadyOnAgendaError(
                    session_id=session_resource.session_id,
                    resource_id=session_resource.resource_id,
                ) from exc
            raise

    async def update_session_resource(self, session_resource: SessionResource) -> None:
        result = await self._session.execute(
            text("""
                UPDATE session_resources
                SET status = :status,
                    minutes_text = :minutes_text,
                    diligence_days_deadline = :diligence_days_deadline,
                    view_requested_by_id = :view_requested_by_id,
                    "order" = :order,
                    updated_at = :updated_at
                WHERE id = :id
            """),
            self._session_resource_params(session_resource),
        )
        if result.rowcount == 0:
            raise SessionResourceNotFoundError(
                session_id=session_resource.session_id,
                session_resource_id=session_resource.id,
            )

    async def list_results(self, session_id: UUID, resource_id: UUID) -> list[SessionResult]:
        result = await self._session.execute(
            text("""
                SELECT * FROM session_results
                WHERE session_id = :session_id AND resource_id = :resource_id
                ORDER BY "order", created_at
            """),
            {"session_id": session_id, "resource_id": resource_id},
        )
        return [_to_result(row) for row in result.mappings().all()]

    async def add_result(self, result: SessionResult) -> None:
        await self._session.execute(
            text("""
                INSERT INTO session_results (id, session_id, resource_id, label, "order", created_at)
                VALUES (:id, :session_id, :resource_id, :label, :order, :created_at)
            """),
            {
                "id": result.id,
                "session_id": result.session_id,
                "resource_id": result.resource_id,
                "label": result.label,
                "order": result.order,
                "created_at": result.created_at,
            },
        )

    async def update_results(self, results: list[SessionResult]) -> None:
        """Persist new positions for a batch of votings.

        Raises:
            VotingNotFoundError: If any voting does not exist; the
                surrounding transaction then rolls back every update.
        """
        missing: list[UUID] = []
        for voting in results:
            updated = await self._session.execute(
                text('UPDATE session_results SET "order" = :order WHERE id = :id'),
                {"id": voting.id, "order": voting.order},
            )
            if updated.rowcount == 0:
                missing.append(voting.id)
        if missing:
            raise VotingNotFoundError(resource_id=results[0].resource_id, voting_ids=missing)

    async def latest_judgment_session(self, resource_id: UUID) -> Session | None:
        result = await self._session.execute(
            text("""
                SELECT s.* FROM sessions s
                WHERE EXISTS (
                    SELECT 1 FROM session_results r
                    WHERE r.session_id = s.id AND r.resource_id = :resource_id
                )
                ORDER BY s.date DESC, s.created_at DESC
                LIMIT 1
            """),
            {"resource_id": resource_id},
        )
        row = result.mappings().first()
        return _to_session(row) if row else None

    async def add_distribution(self, record: SessionDistributionRecord) -> None:
        try:
            await self._session.execute(
                text("""
                    INSERT INTO session_distributions
                        (id, session_id, resource_id, distributed_to_id, target_session_id, created_at)
                    VALUES
                        (:id, :session_id, :resource_id, :distributed_to_id, :target_session_id, :created_at)
                """),
                {
                    "id": record.id,
                    "session_id": record.session_id,
                    "resource_id": record.resource_id,
                    "distributed_to_id": record.distributed_to_id,
                    "target_session_id": record.target_session_id,
                    "created_at": record.created_at,
                },
            )
        except IntegrityError as exc:
            if violated_constraint(exc) == "uq_session_distributions_session_resource":
                raise DuplicateDistributionError(
                    session_id=record.session_id, resource_id=record.resource_id
                ) from exc
            raise

    async def get_distribution(
        self, distribution_id: UUID
    ) -> SessionDistributionRecord | None:
        result = await self._session.execute(
            text("SELECT * FROM session_distributions WHERE id = :id"),
            {"id": distribution_id},
        )
        row = result.mappings().first()
        return _to_distribution(row) if row else None

    async def delete_distribution(self, distribution_id: UUID) -> None:
        await self._session.execute(
            text("DELETE FROM session_distributions WHERE id = :id"),
            {"id": distribution_id},
        )

    @staticmethod
    def _session_resource_params(session_resource: SessionResource) -> dict[str, Any]:
        return {
            "id": session_resource.id,
            "session_id": session_resource.session_id,
            "resource_id": session_resource.resource_id,
            "order": session_resource.order,
            "status": session_resource.status.value,
            "minutes_text": session_resource.minutes_text,
            "diligence_days_deadline": session_resource.diligence_days_deadline,
            "view_requested_by_id": session_resource.view_requested_by_id,
            "updated_at": session_resource.updated_at,
        }
