"""Notification (intimação) repository port."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.domain.models.notification import (
    NotificationAttempt,
    NotificationItem,
    NotificationList,
)


class NotificationRepositoryProtocol(Protocol):
    """Storage operations for notification lists, items and attempts.

    Uniqueness backstops:
    - ``(sequence_number, year)`` on lists raises SequenceConflictError.
    - ``(list_id, resource_id)`` on items raises ResourceAlreadyInListError.
    """

    async def get_list(self, list_id: UUID) -> NotificationList | None:
        """Retrieve a list by ID, or None if absent."""
        ...

    async def save_list(self, notification_list: NotificationList) -> None:
        """Store a new list.

        Raises:
            SequenceConflictError: If the list number is taken.
        """
        ...

    async def update_list(self, notification_list: NotificationList) -> None:
        """Persist changes to a list."""
        ...

    async def delete_list(self, list_id: UUID) -> None:
        """Remove an empty list."""
        ...

    async def count_items(self, list_id: UUID) -> int:
        """Count the items of a list."""
        ...

    async def list_items(self, list_id: UUID) -> list[NotificationItem]:
        """List a list's items ordered by creation."""
        ...

    async def get_item(self, item_id: UUID) -> NotificationItem | None:
        """Retrieve an item by ID, or None if absent."""
        ...

    async def save_item(self, item: NotificationItem) -> None:
        """Store a new item.

        Raises:
            ResourceAlreadyInListError: If the resource is already in the list.
        """
        ...

    async def delete_item(self, item_id: UUID) -> None:
        """Remove an item together with its attempts."""
        ...

    async def list_attempts(self, item_id: UUID) -> list[NotificationAttempt]:
        """List an item's attempts ordered by attempt_number."""
        ...

    async def get_attempt(self, attempt_id: UUID) -> NotificationAttempt | None:
        """Retrieve an attempt by ID, or None if absent."""
        ...

    async def save_attempt(self, attempt: NotificationAttempt) -> None:
        """Store a new attempt."""
        ...

    async def update_attempt(self, attempt: NotificationAttempt) -> None:
        """Persist a status change of an attempt."""
        ...

    async def delete_attempt(self, attempt_id: UUID) -> None:
        """Permanently remove an attempt."""
        ...

    async def list_overdue_attempts(self, now: datetime) -> list[NotificationAttempt]:
        """List PENDENTE attempts whose deadline is before ``now``."""
        ...
