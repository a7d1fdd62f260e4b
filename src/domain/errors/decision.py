"""Decision and publication ledger errors."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from src.domain.exceptions import (
    ConflictError,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
)

if TYPE_CHECKING:
    from src.domain.models.decision import DecisionStatus


class DecisionNotFoundError(NotFoundError):
    """Raised when a decision cannot be found."""

    def __init__(self, decision_id: UUID) -> None:
        self.decision_id = decision_id
        super().__init__(f"Decision not found: {decision_id}")


class DecisionAlreadyExistsError(ConflictError):
    """Raised when drafting a second decision for the same resource."""

    def __init__(self, resource_id: UUID) -> None:
        self.resource_id = resource_id
        super().__init__(f"A decision already exists for resource {resource_id}")


class DuplicateDecisionNumberError(ConflictError):
    """Raised when renumbering a decision to a number already in use."""

    def __init__(self, decision_number: str) -> None:
        self.decision_number = decision_number
        super().__init__(f"A decision numbered {decision_number} already exists")


class InvalidDecisionInputError(InvalidInputError):
    """Raised for missing or malformed decision fields."""


class DecisionNotPendingError(InvalidStateError):
    """Raised when an operation requires a PENDENTE decision.

    Attributes:
        decision_id: The decision.
        status: Its current status.
        operation: The rejected operation.
    """

    def __init__(self, decision_id: UUID, status: DecisionStatus, operation: str) -> None:
        self.decision_id = decision_id
        self.status = status
        self.operation = operation
        super().__init__(
            f"Cannot {operation} decision {decision_id}: status is {status.value}, "
            "only PENDENTE decisions qualify"
        )


class NoPublicationToRestoreError(InvalidStateError):
    """Raised when reverting a decision that was never published."""

    def __init__(self, decision_id: UUID) -> None:
        self.decision_id = decision_id
        super().__init__(
            f"Decision {decision_id} has no previous publication to revert to"
        )


class PublishedDecisionDeletionError(InvalidStateError):
    """Raised when deleting a decision that owns publications."""

    def __init__(self, decision_id: UUID, publication_count: int) -> None:
        self.decision_id = decision_id
        self.publication_count = publication_count
        super().__init__(
            f"Decision {decision_id} has {publication_count} publications "
            "and cannot be deleted"
        )


class NoPendingDecisionsError(InvalidStateError):
    """Raised when none of the decisions in a publish batch is PENDENTE."""

    def __init__(self, requested: int) -> None:
        self.requested = requested
        super().__init__(
            f"None of the {requested} requested decisions is pending publication"
        )


class PublicationOrderConflictError(ConflictError):
    """Raised when two writers append the same publication_order."""

    def __init__(self, decision_id: UUID, publication_order: int) -> None:
        self.decision_id = decision_id
        self.publication_order = publication_order
        super().__init__(
            f"Publication order {publication_order} already exists "
            f"for decision {decision_id}"
        )
