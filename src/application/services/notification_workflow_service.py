"""Notification (intimação) workflow service.

Lists group the resources whose parties must be formally notified. Each
item owns its delivery attempts; the core tracks attempt state only.

List: PENDENTE (open) -> FINALIZADA. A finalized list is frozen: no item
or attempt may be added, removed or deleted through it.

Attempt: PENDENTE -> CONFIRMADO (receipt confirmed) or PENDENTE -> EXPIRADO
(deadline passed, triggered externally). Both are terminal, and a
CONFIRMADO attempt is never deleted.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import TypeVar
from uuid import UUID, uuid4

from src.application.ports.case_store import CaseStoreProtocol, CaseTransaction
from src.application.services.base import LoggingMixin
from src.application.services.sequence_allocator import SequenceAllocator
from src.domain.errors.notification import (
    ConfirmedAttemptDeletionError,
    InvalidNotificationInputError,
    NotificationAttemptNotFoundError,
    NotificationItemNotFoundError,
    NotificationListFinalizedError,
    NotificationListNotEmptyError,
    NotificationListNotFoundError,
)
from src.domain.errors.resource import ResourceNotFoundError
from src.domain.models.notification import (
    AttemptChannel,
    AttemptStatus,
    NotificationAttempt,
    NotificationItem,
    NotificationList,
    NotificationListType,
)
from src.domain.models.sequence import SequenceScope

E = TypeVar("E", bound=Enum)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_enum(enum_cls: type[E], value: object, label: str) -> E:
    """Parse an enum member from its value.

    Raises:
        InvalidNotificationInputError: If the value is missing or unknown.
    """
    if isinstance(value, enum_cls):
        return value
    allowed = [m.value for m in enum_cls]
    if not isinstance(value, str) or value not in allowed:
        raise InvalidNotificationInputError(
            f"Invalid {label}: {value!r}. Allowed: {', '.join(allowed)}"
        )
    return enum_cls(value)


def _require_aware(value: datetime | None, label: str) -> datetime | None:
    """Reject naive datetimes; deadlines are compared against UTC now.

    Raises:
        InvalidNotificationInputError: If the value has no UTC offset.
    """
    if value is not None and value.utcoffset() is None:
        raise InvalidNotificationInputError(
            f"{label} must include a timezone offset, got {value.isoformat()}"
        )
    return value


@dataclass(frozen=True)
class NotificationItemView:
    """An item with its attempts ordered by attempt_number."""

    item: NotificationItem
    attempts: list[NotificationAttempt]


@dataclass(frozen=True)
class NotificationListView:
    """A list with its items."""

    notification_list: NotificationList
    items: list[NotificationItemView]


class NotificationWorkflowService(LoggingMixin):
    """Service for notification lists, items and delivery attempts.

    Attributes:
        _store: Case store.
        _allocator: Sequence allocator for list numbers.
        _now: Clock, injectable for tests.
    """

    def __init__(
        self,
        store: CaseStoreProtocol,
        allocator: SequenceAllocator,
        now: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._store = store
        self._allocator = allocator
        self._now = now
        self._init_logger(component="notification")

    async def create_list(
        self, list_type: object, created_by: str | None = None
    ) -> NotificationList:
        """Open a numbered list for the current year.

        Raises:
            InvalidNotificationInputError: If the type is unknown.
        """
        parsed_type = _parse_enum(
            NotificationListType, list_type, "list type"
        )
        year = self._now().year

        async def _create(tx: CaseTransaction) -> NotificationList:
            number = await self._allocator.allocate(
                tx, SequenceScope.NOTIFICATION_LIST, year
            )
            notification_list = NotificationList(
                id=uuid4(),
                sequence_number=number.sequence_number,
                year=number.year,
                type=parsed_type,
                created_by=created_by,
            )
            await tx.notifications.save_list(notification_list)
            return notification_list

        notification_list = await self._allocator.run_in_transaction(
            _create, operation_name="create_notification_list"
        )
        self._log_operation(
            "create_notification_list", list_id=str(notification_list.id)
        ).info("notification_list_created", list_number=notification_list.list_number)
        return notification_list

    async def get_list(self, list_id: UUID) -> NotificationListView:
        """Return a list with its items and their attempts.

        Raises:
            NotificationListNotFoundError: If the list does not exist.
        """
        async with self._store.transaction() as tx:
            notification_list = await self._require_list(tx, list_id)
            items = [
                NotificationItemView(
                    item=item, attempts=await tx.notifications.list_attempts(item.id)
                )
                for item in await tx.notifications.list_items(list_id)
            ]
        return NotificationListView(notification_list=notification_list, items=items)

    async def finalize_list(self, list_id: UUID) -> NotificationList:
        """Close a list.

        Raises:
            NotificationListNotFoundError: If the list does not exist.
            NotificationListFinalizedError: If it is already finalized.
        """
        async with self._store.transaction() as tx:
            notification_list = await self._require_open_list(tx, list_id, "finalize list")
            finalized = notification_list.finalized()
            await tx.notifications.update_list(finalized)
        self._log_operation("finalize_notification_list", list_id=str(list_id)).info(
            "notification_list_finalized"
        )
        return finalized

    async def delete_list(self, list_id: UUID) -> None:
        """Delete a list that has no items.

        Raises:
            NotificationListNotFoundError: If the list does not exist.
            NotificationListNotEmptyError: If the list has items.
        """
        async with self._store.transaction() as tx:
            await self._require_list(tx, list_id)
            item_count = await tx.notifications.count_items(list_id)
            if item_count:
                raise NotificationListNotEmptyError(list_id=list_id, item_count=item_count)
            await tx.notifications.delete_list(list_id)
        self._log_operation("delete_notification_list", list_id=str(list_id)).info(
            "notification_list_deleted"
        )

    async def add_item(
        self,
        list_id: UUID,
        resource_id: UUID,
        observations: str | None = None,
    ) -> NotificationItem:
        """Add a resource to an open list.

        Raises:
            NotificationListNotFoundError: If the list does not exist.
            NotificationListFinalizedError: If the list is finalized.
            ResourceNotFoundError: If the resource does not exist.
            ResourceAlreadyInListError: If the resource is already listed.
        """
        log = self._log_operation(
            "add_notification_item", list_id=str(list_id), resource_id=str(resource_id)
        )
        async with self._store.transaction() as tx:
            await self._require_open_list(tx, list_id, "add item")
            if await tx.resources.get(resource_id) is None:
                raise ResourceNotFoundError(resource_id=resource_id)
            item = NotificationItem(
                id=uuid4(),
                list_id=list_id,
                resource_id=resource_id,
                observations=observations,
            )
            await tx.notifications.save_item(item)
        log.info("notification_item_added", item_id=str(item.id))
        return item

    async def remove_item(self, list_id: UUID, item_id: UUID) -> None:
        """Remove an item and its attempts.

        Raises:
            NotificationListNotFoundError: If the list does not exist.
            NotificationListFinalizedError: If the list is finalized.
            NotificationItemNotFoundError: If the item is not in the list.
            ConfirmedAttemptDeletionError: If an attempt was confirmed.
        """
        async with self._store.transaction() as tx:
            await self._require_open_list(tx, list_id, "remove item")
            await self._require_item(tx, list_id, item_id)
            attempts = await tx.notifications.list_attempts(item_id)
            if any(a.status == AttemptStatus.CONFIRMADO for a in attempts):
                raise ConfirmedAttemptDeletionError(item_id=item_id)
            await tx.notifications.delete_item(item_id)
        self._log_operation(
            "remove_notification_item", list_id=str(list_id), item_id=str(item_id)
        ).info("notification_item_removed", attempts_removed=len(attempts))

    async def add_attempt(
        self,
        list_id: UUID,
        item_id: UUID,
        channel: object,
        deadline: datetime | None = None,
        sent_to: str | None = None,
        observations: str | None = None,
    ) -> NotificationAttempt:
        """Record a new delivery attempt for an item.

        Raises:
            InvalidNotificationInputError: If the channel is unknown, or it
                needs a destination and sent_to is blank, or the deadline
                has no timezone.
            NotificationListNotFoundError: If the list does not exist.
            NotificationListFinalizedError: If the list is finalized.
            NotificationItemNotFoundError: If the item is not in the list.
        """
        parsed_channel = _parse_enum(AttemptChannel, channel, "channel")
        _require_aware(deadline, "deadline")
        if parsed_channel.requires_destination and not (sent_to and sent_to.strip()):
            raise InvalidNotificationInputError(
                f"Channel {parsed_channel.value} requires a destination (sent_to)"
            )

        async with self._store.transaction() as tx:
            await self._require_open_list(tx, list_id, "add attempt")
            await self._require_item(tx, list_id, item_id)
            existing = await tx.notifications.list_attempts(item_id)
            attempt = NotificationAttempt(
                id=uuid4(),
                item_id=item_id,
                attempt_number=max((a.attempt_number for a in existing), default=0) + 1,
                channel=parsed_channel,
                deadline=deadline,
                sent_to=sent_to.strip() if sent_to else None,
                observations=observations,
            )
            await tx.notifications.save_attempt(attempt)

        self._log_operation(
            "add_notification_attempt", list_id=str(list_id), item_id=str(item_id)
        ).info(
            "notification_attempt_added",
            attempt_id=str(attempt.id),
            attempt_number=attempt.attempt_number,
            channel=parsed_channel.value,
        )
        return attempt

    async def confirm_attempt(
        self,
        list_id: UUID,
        item_id: UUID,
        attempt_id: UUID,
        confirmed_by: str,
    ) -> NotificationAttempt:
        """Confirm receipt of an attempt.

        Raises:
            NotificationListNotFoundError: If the list does not exist.
            NotificationItemNotFoundError: If the item is not in the list.
            NotificationAttemptNotFoundError: If the attempt is not under the item.
            AttemptAlreadyConfirmedError: If it was already confirmed.
            AttemptExpiredError: If it expired.
        """
        log = self._log_operation("confirm_notification_attempt", attempt_id=str(attempt_id))
        async with self._store.transaction() as tx:
            await self._require_list(tx, list_id)
            await self._require_item(tx, list_id, item_id)
            attempt = await self._require_attempt(tx, item_id, attempt_id)
            confirmed = attempt.confirmed(confirmed_by=confirmed_by, confirmed_at=self._now())
            await tx.notifications.update_attempt(confirmed)
        log.info("notification_attempt_confirmed", confirmed_by=confirmed_by)
        return confirmed

    async def expire_attempt(self, attempt_id: UUID) -> NotificationAttempt:
        """Expire a pending attempt (external time-driven trigger).

        Raises:
            NotificationAttemptNotFoundError: If the attempt does not exist.
            AttemptNotPendingError: If it is already terminal.
        """
        async with self._store.transaction() as tx:
            attempt = await tx.notifications.get_attempt(attempt_id)
            if attempt is None:
                raise NotificationAttemptNotFoundError(attempt_id=attempt_id)
            expired = attempt.expired()
            await tx.notifications.update_attempt(expired)
        self._log_operation("expire_notification_attempt", attempt_id=str(attempt_id)).info(
            "notification_attempt_expired"
        )
        return expired

    async def expire_overdue_attempts(self, now: datetime | None = None) -> int:
        """Expire every pending attempt whose deadline has passed.

        Args:
            now: Reference time; defaults to the service clock.

        Returns:
            Number of attempts expired.

        Raises:
            InvalidNotificationInputError: If now has no timezone.
        """
        reference = _require_aware(now, "now") or self._now()
        async with self._store.transaction() as tx:
            overdue = await tx.notifications.list_overdue_attempts(reference)
            for attempt in overdue:
                await tx.notifications.update_attempt(attempt.expired())
        self._log_operation(
            "expire_overdue_attempts", reference=reference.isoformat()
        ).info("overdue_attempts_expired", count=len(overdue))
        return len(overdue)

    async def delete_attempt(self, list_id: UUID, item_id: UUID, attempt_id: UUID) -> None:
        """Permanently remove an attempt.

        Raises:
            NotificationListNotFoundError: If the list does not exist.
            NotificationListFinalizedError: If the list is finalized.
            NotificationItemNotFoundError: If the item is not in the list.
            NotificationAttemptNotFoundError: If the attempt is not under the item.
            ConfirmedAttemptDeletionError: If the attempt was confirmed.
        """
        async with self._store.transaction() as tx:
            await self._require_open_list(tx, list_id, "delete attempt")
            await self._require_item(tx, list_id, item_id)
            attempt = await self._require_attempt(tx, item_id, attempt_id)
            if attempt.status == AttemptStatus.CONFIRMADO:
                raise ConfirmedAttemptDeletionError(attempt_id=attempt_id)
            await tx.notifications.delete_attempt(attempt_id)
        self._log_operation("delete_notification_attempt", attempt_id=str(attempt_id)).info(
            "notification_attempt_deleted"
        )

    async def _require_list(self, tx: CaseTransaction, list_id: UUID) -> NotificationList:
        notification_list = await tx.notifications.get_list(list_id)
        if notification_list is None:
            raise NotificationListNotFoundError(list_id=list_id)
        return notification_list

    async def _require_open_list(
        self, tx: CaseTransaction, list_id: UUID, operation: str
    ) -> NotificationList:
        notification_list = await self._require_list(tx, list_id)
        if notification_list.is_finalized:
            raise NotificationListFinalizedError(list_id=list_id, operation=operation)
        return notification_list

    async def _require_item(
        self, tx: CaseTransaction, list_id: UUID, item_id: UUID
    ) -> NotificationItem:
        item = await tx.notifications.get_item(item_id)
        if item is None or item.list_id != list_id:
            raise NotificationItemNotFoundError(list_id=list_id, item_id=item_id)
        return item

    async def _require_attempt(
        self, tx: CaseTransaction, item_id: UUID, attempt_id: UUID
    ) -> NotificationAttempt:
        attempt = await tx.notifications.get_attempt(attempt_id)
        if attempt is None or attempt.item_id != item_id:
            raise NotificationAttemptNotFoundError(attempt_id=attempt_id)
        return attempt
