"""PostgreSQL notification repository."""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

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
    AttemptChannel,
    AttemptStatus,
    NotificationAttempt,
    NotificationItem,
    NotificationList,
    NotificationListStatus,
    NotificationListType,
)
from src.domain.models.sequence import SequenceScope
from src.infrastructure.adapters.persistence.integrity import (
    as_uuid,
    violated_constraint,
)


def _to_list(row: Any) -> NotificationList:
    return NotificationList(
        id=as_uuid(row["id"]),
        sequence_number=row["sequence_number"],
        year=row["year"],
        type=NotificationListType(row["type"]),
        status=NotificationListStatus(row["status"]),
        created_by=row["created_by"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _to_item(row: Any) -> NotificationItem:
    return NotificationItem(
        id=as_uuid(row["id"]),
        list_id=as_uuid(row["list_id"]),
        resource_id=as_uuid(row["resource_id"]),
        observations=row["observations"],
        created_at=row["created_at"],
    )


def _to_attempt(row: Any) -> NotificationAttempt:
    return NotificationAttempt(
        id=as_uuid(row["id"]),
        item_id=as_uuid(row["item_id"]),
        attempt_number=row["attempt_number"],
        channel=AttemptChannel(row["channel"]),
        status=AttemptStatus(row["status"]),
        deadline=row["deadline"],
        sent_to=row["sent_to"],
        observations=row["observations"],
        confirmed_at=row["confirmed_at"],
        confirmed_by=row["confirmed_by"],
        created_at=row["created_at"],
    )


class PostgresNotificationRepository(NotificationRepositoryProtocol):
    """Notification storage in the ``notification_lists``,
    ``notification_items`` and ``notification_attempts`` tables."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_list(self, list_id: UUID) -> NotificationList | None:
        result = await self._session.execute(
            text("SELECT * FROM notification_lists WHERE id = :id"), {"id": list_id}
        )
        row = result.mappings().first()
        return _to_list(row) if row else None

    async def save_list(self, notification_list: NotificationList) -> None:
        try:
            await self._session.execute(
                text("""
                    INSERT INTO notification_lists
                        (id, sequence_number, year, type, status, created_by, created_at, updated_at)
                    VALUES
                        (:id, :sequence_number, :year, :type, :status, :created_by,
                         :created_at, :updated_at)
                """),
                {
                    "id": notification_list.id,
                    "sequence_number": notification_list.sequence_number,
                    "year": notification_list.year,
                    "type": notification_list.type.value,
                    "status": notification_list.status.value,
                    "created_by": notification_list.created_by,
                    "created_at": notification_list.created_at,
                    "updated_at": notification_list.updated_at,
                },
            )
        except IntegrityError as exc:
            if violated_constraint(exc) == "uq_notification_lists_number":
                raise SequenceConflictError(
                    scope=SequenceScope.NOTIFICATION_LIST,
                    year=notification_list.year,
                    sequence_number=notification_list.sequence_number,
                ) from exc
            raise

    async def update_list(self, notification_list: NotificationList) -> None:
        result = await self._session.execute(
            text("""
                UPDATE notification_lists SET status = :status, updated_at = :updated_at
                WHERE id = :id
            """),
            {
                "id": notification_list.id,
                "status": notification_list.status.value,
                "updated_at": notification_list.updated_at,
            },
        )
        if result.rowcount == 0:
            raise NotificationListNotFoundError(list_id=notification_list.id)

    async def delete_list(self, list_id: UUID) -> None:
        await self._session.execute(
            text("DELETE FROM notification_lists WHERE id = :id"), {"id": list_id}
        )

    async def count_items(self, list_id: UUID) -> int:
        result = await self._session.execute(
            text("SELECT COUNT(*) FROM notification_items WHERE list_id = :list_id"),
            {"list_id": list_id},
        )
        return int(result.scalar() or 0)

    async def list_items(self, list_id: UUID) -> list[NotificationItem]:
        result = await self._session.execute(
            text("SELECT * FROM notification_items WHERE list_id = :list_id ORDER BY created_at"),
            {"list_id": list_id},
        )
        return [_to_item(row) for row in result.mappings().all()]

    async def get_item(self, item_id: UUID) -> NotificationItem | None:
        result = await self._session.execute(
            text("SELECT * FROM notification_items WHERE id = :id"), {"id": item_id}
        )
        row = result.mappings().first()
        return _to_item(row) if row else None

    async def save_item(self, item: NotificationItem) -> None:
        try:
            await self._session.execute(
                text("""
                    INSERT INTO notification_items (id, list_id, resource_id, observations, created_at)
                    VALUES (:id, :list_id, :resource_id, :observations, :created_at)
                """),
                {
                    "id": item.id,
                    "list_id": item.list_id,
                    "resource_id": item.resource_id,
                    "observations": item.observations,
                    "created_at": item.created_at,
                },
            )
        except IntegrityError as exc:
            if violated_constraint(exc) == "uq_notification_items_list_resource":
                raise ResourceAlreadyInListError(
                    list_id=item.list_id, resource_id=item.resource_id
                ) from exc
            raise

    async def delete_item(self, item_id: UUID) -> None:
        # Attempts go with the item through ON DELETE CASCADE
        await self._session.execute(
            text("DELETE FROM notification_items WHERE id = :id"), {"id": item_id}
        )

    async def list_attempts(self, item_id: UUID) -> list[NotificationAttempt]:
        result = await self._session.execute(
            text("""
                SELECT * FROM notification_attempts
                WHERE item_id = :item_id
                ORDER BY attempt_number
            """),
            {"item_id": item_id},
        )
        return [_to_attempt(row) for row in result.mappings().all()]

    async def get_attempt(self, attempt_id: UUID) -> NotificationAttempt | None:
        result = await self._session.execute(
            text("SELECT * FROM notification_attempts WHERE id = :id"), {"id": attempt_id}
        )
        row = result.mappings().first()
        return _to_attempt(row) if row else None

    async def save_attempt(self, attempt: NotificationAttempt) -> None:
        await self._session.execute(
            text("""
                INSERT INTO notification_attempts
                    (id, item_id, attempt_number, channel, status, deadline, sent_to,
                     observations, confirmed_at, confirmed_by, created_at)
                VALUES
                    (:id, :item_id, :attempt_number, :channel, :status, :deadline, :sent_to,
                     :observations, :confirmed_at, :confirmed_by, :created_at)
            """),
            {
                "id": attempt.id,
                "item_id": attempt.item_id,
                "attempt_number": attempt.attempt_number,
                "channel": attempt.channel.value,
                "status": attempt.status.value,
                "deadline": attempt.deadline,
                "sent_to": attempt.sent_to,
                "observations": attempt.observations,
                "confirmed_at": attempt.confirmed_at,
                "confirmed_by": attempt.confirmed_by,
                "created_at": attempt.created_at,
            },
        )

    async def update_attempt(self, attempt: NotificationAttempt) -> None:
        result = await self._session.execute(
            text("""
                UPDATE notification_attempts
                SET status = :status, confirmed_at = :confirmed_at, confirmed_by = :confirmed_by
                WHERE id = :id
            """),
            {
                "id": attempt.id,
                "status": attempt.status.value,
                "confirmed_at": attempt.confirmed_at,
                "confirmed_by": attempt.confirmed_by,
            },
        )
        if result.rowcount == 0:
            raise NotificationAttemptNotFoundError(attempt_id=attempt.id)

    async def delete_attempt(self, attempt_id: UUID) -> None:
        await self._session.execute(
            text("DELETE FROM notification_attempts WHERE id = :id"), {"id": attempt_id}
        )

    async def list_overdue_attempts(self, now: datetime) -> list[NotificationAttempt]:
        result = await self._session.execute(
            text("""
                SELECT * FROM notification_attempts
                WHERE status = 'PENDENTE' AND deadline IS NOT NULL AND deadline < :now
                ORDER BY deadline, attempt_number
                FOR UPDATE
            """),
            {"now": now},
        )
        return [_to_attempt(row) for row in result.mappings().all()]
