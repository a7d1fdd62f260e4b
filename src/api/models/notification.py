"""Notification list request/response models."""

from uuid import UUID

from pydantic import AwareDatetime, BaseModel, Field

from src.api.models.common import DateTimeWithZ
from src.application.services.notification_workflow_service import (
    NotificationItemView,
    NotificationListView,
)
from src.domain.models.notification import (
    NotificationAttempt,
    NotificationItem,
    NotificationList,
)


class CreateNotificationListRequest(BaseModel):
    """Body of POST /v1/notification-lists.

    Attributes:
        type: ADMISSIBILIDADE, SESSAO, DILIGENCIA, DECISAO or OUTRO.
    """

    type: str = Field(..., min_length=1)


class NotificationListResponse(BaseModel):
    """A notification list without its items."""

    id: UUID
    list_number: str
    type: str
    status: str
    created_by: str | None = None
    created_at: DateTimeWithZ
    updated_at: DateTimeWithZ

    @classmethod
    def from_domain(cls, notification_list: NotificationList) -> "NotificationListResponse":
        return cls(
            id=notification_list.id,
            list_number=notification_list.list_number,
            type=notification_list.type.value,
            status=notification_list.status.value,
            created_by=notification_list.created_by,
            created_at=notification_list.created_at,
            updated_at=notification_list.updated_at,
        )


class AddNotificationItemRequest(BaseModel):
    resource_id: UUID
    observations: str | None = None


class NotificationItemResponse(BaseModel):
    id: UUID
    list_id: UUID
    resource_id: UUID
    observations: str | None = None
    created_at: DateTimeWithZ

    @classmethod
    def from_domain(cls, item: NotificationItem) -> "NotificationItemResponse":
        return cls(
            id=item.id,
            list_id=item.list_id,
            resource_id=item.resource_id,
            observations=item.observations,
            created_at=item.created_at,
        )


class AddNotificationAttemptRequest(BaseModel):
    """Body of POST .../items/{item_id}/attempts.

    Attributes:
        channel: Delivery channel; EMAIL, WHATSAPP and CORREIOS need sent_to.
        deadline: When the attempt expires if unconfirmed.
    """

    channel: str = Field(..., min_length=1)
    deadline: AwareDatetime | None = None
    sent_to: str | None = None
    observations: str | None = None


class NotificationAttemptResponse(BaseModel):
    id: UUID
    item_id: UUID
    attempt_number: int
    channel: str
    status: str
    deadline: DateTimeWithZ | None = None
    sent_to: str | None = None
    observations: str | None = None
    confirmed_at: DateTimeWithZ | None = None
    confirmed_by: str | None = None
    created_at: DateTimeWithZ

    @classmethod
    def from_domain(cls, attempt: NotificationAttempt) -> "NotificationAttemptResponse":
        return cls(
            id=attempt.id,
            item_id=attempt.item_id,
            attempt_number=attempt.attempt_number,
            channel=attempt.channel.value,
            status=attempt.status.value,
            deadline=attempt.deadline,
            sent_to=attempt.sent_to,
            observations=attempt.observations,
            confirmed_at=attempt.confirmed_at,
            confirmed_by=attempt.confirmed_by,
            created_at=attempt.created_at,
        )


class NotificationItemDetailResponse(NotificationItemResponse):
    attempts: list[NotificationAttemptResponse]

    @classmethod
    def from_view(cls, view: NotificationItemView) -> "NotificationItemDetailResponse":
        base = NotificationItemResponse.from_domain(view.item)
        return cls(
            **dict(base),
            attempts=[NotificationAttemptResponse.from_domain(a) for a in view.attempts],
        )


class NotificationListDetailResponse(NotificationListResponse):
    """A notification list with items and their attempts."""

    items: list[NotificationItemDetailResponse]

    @classmethod
    def from_view(cls, view: NotificationListView) -> "NotificationListDetailResponse":
        base = NotificationListResponse.from_domain(view.notification_list)
        return cls(
            **dict(base),
            items=[NotificationItemDetailResponse.from_view(i) for i in view.items],
        )


class ExpireOverdueRequest(BaseModel):
    """Body of POST /v1/notification-lists/attempts/expire-overdue.

    Attributes:
        now: Reference time; defaults to the server clock.
    """

    now: AwareDatetime | None = None


class ExpireOverdueResponse(BaseModel):
    expired_count: int
