"""Notification repository stub implementation."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from src.application.ports.notification_repository import (
    NotificationRepositoryProtocol,
)
from src.domain.errors.notification import (
    NotificationAttemptNotFoundError,
    NotificationListNotFoundError,
    ResourceAlreadyInListError,
)
from src.domain.errors.sequence import SequenceConflictError
from src.domain.models.notification import (
    NotificationAttempt,
    NotificationItem,
    NotificationList,
)
from src.domain.models.sequence import SequenceScope
from src.infrastructure.stubs.case_tables import CaseTables


class NotificationRepositoryStub(NotificationRepositoryProtocol):
    """In-memory stub of NotificationRepositoryProtocol (testing only).

    Deleting an item cascades to its attempts, as the schema's foreign
    keys do.
    """

    def __init__(self, tables: CaseTables) -> None:
        self._tables = tables

    async def get_list(self, list_id: UUID) -> NotificationList | None:
        return self._tables.notification_lists.get(list_id)

    async def save_list(self, notification_list: NotificationList) -> None:
        for existing in self._tables.notification_lists.values():
            if (existing.sequence_number, existing.year) == (
                notification_list.sequence_number,
                notification_list.year,
            ):
                raise SequenceConflictError(
                    scope=SequenceScope.NOTIFICATION_LIST,
                    year=notification_list.year,
                    sequence_number=notification_list.sequence_number,
                )
        self._tables.notification_lists[notification_list.id] = notification_list

    async def update_list(self, notification_list: NotificationList) -> None:
        if notification_list.id not in self._tables.notification_lists:
            raise NotificationListNotFoundError(list_id=notification_list.id)
        self._tables.notification_lists[notification_list.id] = notification_list

    async def delete_list(self, list_id: UUID) -> None:
        self._tables.notification_lists.pop(list_id, None)

    async def count_items(self, list_id: UUID) -> int:
        return len(await self.list_items(list_id))

    async def list_items(self, list_id: UUID) -> list[NotificationItem]:
        items = [
            i for i in self._tables.notification_items.values() if i.list_id == list_id
        ]
        return sorted(items, key=lambda i: i.created_at)

    async def get_item(self, item_id: UUID) -> NotificationItem | None:
        return self._tables.notification_items.get(item_id)

    async def save_item(self, item: NotificationItem) -> None:
        for existing in self._tables.notification_items.values():
            if (existing.list_id, existing.resource_id) == (item.list_id, item.resource_id):
                raise ResourceAlreadyInListError(
                    list_id=item.list_id, resource_id=item.resource_id
                )
        self._tables.notification_items[item.id] = item

    async def delete_item(self, item_id: UUID) -> None:
        for attempt in await self.list_attempts(item_id):
            del self._tables.notification_attempts[attempt.id]
        self._tables.notification_items.pop(item_id, None)

    async def list_attempts(self, item_id: UUID) -> list[NotificationAttempt]:
        attempts = [
            a
            for a in self._tables.notification_attempts.values()
            if a.item_id == item_id
        ]
        return sorted(attempts, key=lambda a: a.attempt_number)

    async def get_attempt(self, attempt_id: UUID) -> NotificationAttempt | None:
        return self._tables.notification_attempts.get(attempt_id)

    async def save_attempt(self, attempt: NotificationAttempt) -> None:
        self._tables.notification_attempts[attempt.id] = attempt

    async def update_attempt(self, attempt: NotificationAttempt) -> None:
        if attempt.id not in self._tables.notification_attempts:
            raise NotificationAttemptNotFoundError(attempt_id=attempt.id)
        self._tables.notification_attempts[attempt.id] = attempt

    async def delete_attempt(self, attempt_id: UUID) -> None:
        self._tables.notification_attempts.pop(attempt_id, None)

    async def list_overdue_attempts(self, now: datetime) -> list[NotificationAttempt]:
        overdue = [
            a for a in self._tables.notification_attempts.values() if a.is_overdue(now)
        ]
        return sorted(overdue, key=lambda a: (a.deadline, a.attempt_number))
