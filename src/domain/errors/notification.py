"""Notification (intimação) workflow errors."""

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
    from src.domain.models.notification import AttemptStatus


class NotificationListNotFoundError(NotFoundError):
    """Raised when a notification list cannot be found."""

    def __init__(self, list_id: UUID) -> None:
        self.list_id = list_id
        super().__init__(f"Notification list not found: {list_id}")


class NotificationItemNotFoundError(NotFoundError):
    """Raised when an item does not exist in the given list."""

    def __init__(self, list_id: UUID, item_id: UUID) -> None:
        self.list_id = list_id
        self.item_id = item_id
        super().__init__(f"Item {item_id} not found in notification list {list_id}")


class NotificationAttemptNotFoundError(NotFoundError):
    """Raised when an attempt does not exist under the given list/item."""

    def __init__(self, attempt_id: UUID) -> None:
        self.attempt_id = attempt_id
        super().__init__(f"Notification attempt not found: {attempt_id}")


class NotificationListFinalizedError(InvalidStateError):
    """Raised when mutating a FINALIZADA list.

    Attributes:
        list_id: The finalized list.
        operation: The rejected operation.
    """

    def __init__(self, list_id: UUID, operation: str) -> None:
        self.list_id = list_id
        self.operation = operation
        super().__init__(f"Cannot {operation}: notification list {list_id} is finalized")


class NotificationListNotEmptyError(InvalidStateError):
    """Raised when deleting a list that still has items."""

    def __init__(self, list_id: UUID, item_count: int) -> None:
        self.list_id = list_id
        self.item_count = item_count
        super().__init__(
            f"Notification list {list_id} has {item_count} items and cannot be deleted"
        )


class ResourceAlreadyInListError(ConflictError):
    """Raised when a resource is added twice to the same list."""

    def __init__(self, list_id: UUID, resource_id: UUID) -> None:
        self.list_id = list_id
        self.resource_id = resource_id
        super().__init__(
            f"Resource {resource_id} is already in notification list {list_id}"
        )


class AttemptAlreadyConfirmedError(InvalidStateError):
    """Raised when confirming an attempt twice."""

    def __init__(self, attempt_id: UUID) -> None:
        self.attempt_id = attempt_id
        super().__init__(f"Attempt {attempt_id} was already confirmed")


class AttemptExpiredError(InvalidStateError):
    """Raised when confirming an expired attempt."""

    def __init__(self, attempt_id: UUID) -> None:
        self.attempt_id = attempt_id
        super().__init__(f"Cannot confirm an expired attempt: {attempt_id}")


class AttemptNotPendingError(InvalidStateError):
    """Raised when a transition requires a PENDENTE attempt."""

    def __init__(self, attempt_id: UUID, status: AttemptStatus, operation: str) -> None:
        self.attempt_id = attempt_id
        self.status = status
        self.operation = operation
        super().__init__(
            f"Cannot {operation} attempt {attempt_id}: status is {status.value}"
        )


class ConfirmedAttemptDeletionError(InvalidStateError):
    """Raised when removing a confirmed attempt, or an item that has one."""

    def __init__(self, attempt_id: UUID | None = None, item_id: UUID | None = None) -> None:
        self.attempt_id = attempt_id
        self.item_id = item_id
        if attempt_id is not None:
            message = f"Attempt {attempt_id} has confirmed receipt and cannot be removed"
        else:
            message = f"Item {item_id} has confirmed attempts and cannot be removed"
        super().__init__(message)


class InvalidNotificationInputError(InvalidInputError):
    """Raised for missing or malformed notification fields."""
