"""Decision repository stub implementation.

The publication log is append-only here as well: there is no method that
updates or removes a DecisionPublication.
"""

from __future__ import annotations

from uuid import UUID

from src.application.ports.decision_repository import DecisionRepositoryProtocol
from src.domain.errors.decision import (
    DecisionAlreadyExistsError,
    DecisionNotFoundError,
    DuplicateDecisionNumberError,
    PublicationOrderConflictError,
)
from src.domain.errors.sequence import SequenceConflictError
from src.domain.models.decision import Decision, DecisionPublication
from src.domain.models.sequence import SequenceScope
from src.infrastructure.stubs.case_tables import CaseTables


class DecisionRepositoryStub(DecisionRepositoryProtocol):
    """In-memory stub of DecisionRepositoryProtocol (testing only)."""

    def __init__(self, tables: CaseTables) -> None:
        self._tables = tables

    async def get(self, decision_id: UUID, for_update: bool = False) -> Decision | None:
        # The store lock already serializes transactions; for_update is a no-op
        return self._tables.decisions.get(decision_id)

    async def get_by_resource(self, resource_id: UUID) -> Decision | None:
        for decision in self._tables.decisions.values():
            if decision.resource_id == resource_id:
                return decision
        return None

    async def get_by_number(self, sequence_number: int, year: int) -> Decision | None:
        for decision in self._tables.decisions.values():
            if (decision.sequence_number, decision.year) == (sequence_number, year):
                return decision
        return None

    async def save(self, decision: Decision) -> None:
        if await self.get_by_resource(decision.resource_id) is not None:
            raise DecisionAlreadyExistsError(resource_id=decision.resource_id)
        if await self.get_by_number(decision.sequence_number, decision.year) is not None:
            raise SequenceConflictError(
                scope=SequenceScope.DECISION,
                year=decision.year,
                sequence_number=decision.sequence_number,
            )
        self._tables.decisions[decision.id] = decision

    async def update(self, decision: Decision) -> None:
        if decision.id not in self._tables.decisions:
            raise DecisionNotFoundError(decision_id=decision.id)
        holder = await self.get_by_number(decision.sequence_number, decision.year)
        if holder is not None and holder.id != decision.id:
            raise DuplicateDecisionNumberError(decision_number=decision.decision_number)
        self._tables.decisions[decision.id] = decision

    async def delete(self, decision_id: UUID) -> None:
        self._tables.decisions.pop(decision_id, None)

    async def list_publications(self, decision_id: UUID) -> list[DecisionPublication]:
        publications = [
            p for p in self._tables.publications.values() if p.decision_id == decision_id
        ]
        return sorted(publications, key=lambda p: p.publication_order)

    async def latest_publication(self, decision_id: UUID) -> DecisionPublication | None:
        publications = await self.list_publications(decision_id)
        return publications[-1] if publications else None

    async def append_publication(self, publication: DecisionPublication) -> None:
        for existing in self._tables.publications.values():
            if (
                existing.decision_id == publication.decision_id
                and existing.publication_order == publication.publication_order
            ):
                raise PublicationOrderConflictError(
                    decision_id=publication.decision_id,
                    publication_order=publication.publication_order,
                )
        self._tables.publications[publication.id] = publication
