"""PostgreSQL decision repository.

``decision_publications`` is append-only; a trigger in the schema rejects
UPDATE and DELETE on it.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.ports.decision_repository import DecisionRepositoryProtocol
from src.domain.errors.decision import (
    DecisionAlreadyExistsError,
    DecisionNotFoundError,
    DuplicateDecisionNumberError,
    PublicationOrderConflictError,
)
from src.domain.errors.sequence import SequenceConflictError
from src.domain.models.decision import Decision, DecisionPublication, DecisionStatus
from src.domain.models.sequence import SequenceScope
from src.infrastructure.adapters.persistence.integrity import (
    as_uuid,
    violated_constraint,
)


def _to_decision(row: Any) -> Decision:
    return Decision(
        id=as_uuid(row["id"]),
        resource_id=as_uuid(row["resource_id"]),
        sequence_number=row["sequence_number"],
        year=row["year"],
        ementa_title=row["ementa_title"],
        ementa_body=row["ementa_body"],
        status=DecisionStatus(row["status"]),
        created_by=row["created_by"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _to_publication(row: Any) -> DecisionPublication:
    return DecisionPublication(
        id=as_uuid(row["id"]),
        decision_id=as_uuid(row["decision_id"]),
        publication_order=row["publication_order"],
        publication_number=row["publication_number"],
        publication_date=row["publication_date"],
        ementa_title_snapshot=row["ementa_title_snapshot"],
        ementa_body_snapshot=row["ementa_body_snapshot"],
        republish_reason=row["republish_reason"],
        created_at=row["created_at"],
    )


class PostgresDecisionRepository(DecisionRepositoryProtocol):
    """Decision storage in the ``decisions`` and ``decision_publications`` tables."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, decision_id: UUID, for_update: bool = False) -> Decision | None:
        statement = "SELECT * FROM decisions WHERE id = :id"
        if for_update:
            statement += " FOR UPDATE"
        result = await self._session.execute(text(statement), {"id": decision_id})
        row = result.mappings().first()
        return _to_decision(row) if row else None

    async def get_by_resource(self, resource_id: UUID) -> Decision | None:
        result = await self._session.execute(
            text("SELECT * FROM decisions WHERE resource_id = :resource_id"),
            {"resource_id": resource_id},
        )
        row = result.mappings().first()
        return _to_decision(row) if row else None

    async def get_by_number(self, sequence_number: int, year: int) -> Decision | None:
        result = await self._session.execute(
            text("SELECT * FROM decisions WHERE sequence_number = :seq AND year = :year"),
            {"seq": sequence_number, "year": year},
        )
        row = result.mappings().first()
        return _to_decision(row) if row else None

    async def save(self, decision: Decision) -> None:
        try:
            await self._session.execute(
                text("""
                    INSERT INTO decisions
                        (id, resource_id, sequence_number, year, ementa_title, ementa_body,
                         status, created_by, created_at, updated_at)
                    VALUES
                        (:id, :resource_id, :sequence_number, :year, :ementa_title, :ementa_body,
                         :status, :created_by, :created_at, :updated_at)
                """),
                self._decision_params(decision),
            )
        except IntegrityError as exc:
            constraint = violated_constraint(exc)
            if constraint == "uq_decisions_resource":
                raise DecisionAlreadyExistsError(resource_id=decision.resource_id) from exc
            if constraint == "uq_decisions_number":
                raise SequenceConflictError(
                    scope=SequenceScope.DECISION,
                    year=decision.year,
                    sequence_number=decision.sequence_number,
                ) from exc
            raise

    async def update(self, decision: Decision) -> None:
        try:
            result = await self._session.execute(
                text("""
                    UPDATE decisions
                    SET sequence_number = :sequence_number,
                        year = :year,
                        ementa_title = :ementa_title,
                        ementa_body = :ementa_body,
                        status = :status,
                        updated_at = :updated_at
                    WHERE id = :id
                """),
                self._decision_params(decision),
            )
        except IntegrityError as exc:
            if violated_constraint(exc) == "uq_decisions_number":
                raise DuplicateDecisionNumberError(
                    decision_number=decision.decision_number
                ) from exc
            raise
        if result.rowcount == 0:
            raise DecisionNotFoundError(decision_id=decision.id)

    async def delete(self, decision_id: UUID) -> None:
        await self._session.execute(
            text("DELETE FROM decisions WHERE id = :id"), {"id": decision_id}
        )

    async def list_publications(self, decision_id: UUID) -> list[DecisionPublication]:
        result = await self._session.execute(
            text("""
                SELECT * FROM decision_publications
                WHERE decision_id = :decision_id
                ORDER BY publication_order
            """),
            {"decision_id": decision_id},
        )
        return [_to_publication(row) for row in result.mappings().all()]

    async def latest_publication(self, decision_id: UUID) -> DecisionPublication | None:
        result = await self._session.execute(
            text("""
                SELECT * FROM decision_publications
                WHERE decision_id = :decision_id
                ORDER BY publication_order DESC
                LIMIT 1
            """),
            {"decision_id": decision_id},
        )
        row = result.mappings().first()
        return _to_publication(row) if row else None

    async def append_publication(self, publication: DecisionPublication) -> None:
        try:
            await self._session.execute(
                text("""
                    INSERT INTO decision_publications
                        (id, decision_id, publication_order, publication_number,
                         publication_date, ementa_title_snapshot, ementa_body_snapshot,
                         republish_reason, created_at)
                    VALUES
                        (:id, :decision_id, :publication_order, :publication_number,
                         :publication_date, :ementa_title_snapshot, :ementa_body_snapshot,
                         :republish_reason, :created_at)
                """),
                {
                    "id": publication.id,
                    "decision_id": publication.decision_id,
                    "publication_order": publication.publication_order,
                    "publication_number": publication.publication_number,
                    "publication_date": publication.publication_date,
                    "ementa_title_snapshot": publication.ementa_title_snapshot,
                    "ementa_body_snapshot": publication.ementa_body_snapshot,
                    "republish_reason": publication.republish_reason,
                    "created_at": publication.created_at,
                },
            )
        except IntegrityError as exc:
            if violated_constraint(exc) == "uq_decision_publications_order":
                raise PublicationOrderConflictError(
                    decision_id=publication.decision_id,
                    publication_order=publication.publication_order,
                ) from exc
            raise

    @staticmethod
    def _decision_params(decision: Decision) -> dict[str, Any]:
        return {
            "id": decision.id,
            "resource_id": decision.resource_id,
            "sequence_number": decision.sequence_number,
            "year": decision.year,
            "ementa_title": decision.ementa_title,
            "ementa_body": decision.ementa_body,
            "status": decision.status.value,
            "created_by": decision.created_by,
            "created_at": decision.created_at,
            "updated_at": decision.updated_at,
        }
