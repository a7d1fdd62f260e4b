"""Decision and publication log repository port.

The publication log is append-only: this port offers no way to update or
delete a DecisionPublication.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.decision import Decision, DecisionPublication


class DecisionRepositoryProtocol(Protocol):
    """Storage operations for decisions and their publication log.

    Uniqueness backstops:
    - ``resource_id`` raises DecisionAlreadyExistsError.
    - ``(sequence_number, year)`` raises SequenceConflictError on insert
      and DuplicateDecisionNumberError on update.
    - ``(decision_id, publication_order)`` raises
      PublicationOrderConflictError.
    """

    async def get(self, decision_id: UUID, for_update: bool = False) -> Decision | None:
        """Retrieve a decision by ID.

        Args:
            decision_id: The decision.
            for_update: Lock the row until the transaction ends (no-op
                where the store already serializes transactions).

        Returns:
            The decision if found, None otherwise.
        """
        ...

    async def get_by_resource(self, resource_id: UUID) -> Decision | None:
        """Retrieve the decision ruling on a resource, or None."""
        ...

    async def get_by_number(self, sequence_number: int, year: int) -> Decision | None:
        """Retrieve a decision by its number, or None."""
        ...

    async def save(self, decision: Decision) -> None:
        """Store a new decision.

        Raises:
            DecisionAlreadyExistsError: If the resource already has a decision.
            SequenceConflictError: If the number is taken.
        """
        ...

    async def update(self, decision: Decision) -> None:
        """Persist changes to an existing decision.

        Raises:
            DecisionNotFoundError: If the decision does not exist.
            DuplicateDecisionNumberError: If a renumbering collides.
        """
        ...

    async def delete(self, decision_id: UUID) -> None:
        """Remove a decision that has no publications."""
        ...

    async def list_publications(self, decision_id: UUID) -> list[DecisionPublication]:
        """List a decision's publications ordered by publication_order ascending."""
        ...

    async def latest_publication(self, decision_id: UUID) -> DecisionPublication | None:
        """Return the publication with the highest publication_order, or None."""
        ...

    async def append_publication(self, publication: DecisionPublication) -> None:
        """Append a publication snapshot.

        Raises:
            PublicationOrderConflictError: If the order already exists.
        """
        ...
