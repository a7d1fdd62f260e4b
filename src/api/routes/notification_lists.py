"""Notification list routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response

from src.api.auth.actor_auth import get_actor, require_capability
from src.api.models.common import ProblemDetail
from src.api.models.notification import (
    AddNotificationAttemptRequest,
    AddNotificationItemRequest,
    CreateNotificationListRequest,
    ExpireOverdueRequest,
    ExpireOverdueResponse,
    NotificationAttemptResponse,
    NotificationItemResponse,
    NotificationListDetailResponse,
    NotificationListResponse,
)
from src.application.ports.capability_checker import Actor, CaseAction
from src.application.services.notification_workflow_service import (
    NotificationWorkflowService,
)
from src.bootstrap.case_store import get_notification_workflow_service

router = APIRouter(prefix="/v1/notification-lists", tags=["notification-lists"])

_ERRORS = {
    400: {"model": ProblemDetail, "description": "Invalid state or input"},
    404: {"model": ProblemDetail, "description": "List, item or attempt not found"},
}


# =============================================================================
# Time-driven attempt expiry
# =============================================================================


@router.post(
    "/attempts/expire-overdue",
    response_model=ExpireOverdueResponse,
    summary="Expire every pending attempt past its deadline",
)
async def expire_overdue_attempts(
    request_data: ExpireOverdueRequest | None = None,
    actor: Actor = Depends(require_capability(CaseAction.EXPIRE_NOTIFICATION_ATTEMPTS)),
    service: NotificationWorkflowService = Depends(get_notification_workflow_service),
) -> ExpireOverdueResponse:
    now = request_data.now if request_data is not None else None
    return ExpireOverdueResponse(expired_count=await service.expire_overdue_attempts(now))


@router.post(
    "/attempts/{attempt_id}/expire",
    response_model=NotificationAttemptResponse,
    responses=_ERRORS,
)
async def expire_attempt(
    attempt_id: UUID,
    actor: Actor = Depends(require_capability(CaseAction.EXPIRE_NOTIFICATION_ATTEMPTS)),
    service: NotificationWorkflowService = Depends(get_notification_workflow_service),
) -> NotificationAttemptResponse:
    return NotificationAttemptResponse.from_domain(await service.expire_attempt(attempt_id))


# =============================================================================
# Lists
# =============================================================================


@router.post("", response_model=NotificationListResponse, responses=_ERRORS)
async def create_notification_list(
    request_data: CreateNotificationListRequest,
    actor: Actor = Depends(require_capability(CaseAction.CREATE_NOTIFICATION_LIST)),
    service: NotificationWorkflowService = Depends(get_notification_workflow_service),
) -> NotificationListResponse:
    notification_list = await service.create_list(request_data.type, created_by=actor.actor_id)
    return NotificationListResponse.from_domain(notification_list)


@router.get("/{list_id}", response_model=NotificationListDetailResponse, responses=_ERRORS)
async def get_notification_list(
    list_id: UUID,
    actor: Actor = Depends(get_actor),
    service: NotificationWorkflowService = Depends(get_notification_workflow_service),
) -> NotificationListDetailResponse:
    return NotificationListDetailResponse.from_view(await service.get_list(list_id))


@router.post(
    "/{list_id}/finalize", response_model=NotificationListResponse, responses=_ERRORS
)
async def finalize_notification_list(
    list_id: UUID,
    actor: Actor = Depends(require_capability(CaseAction.FINALIZE_NOTIFICATION_LIST)),
    service: NotificationWorkflowService = Depends(get_notification_workflow_service),
) -> NotificationListResponse:
    return NotificationListResponse.from_domain(await service.finalize_list(list_id))


@router.delete("/{list_id}", status_code=204, response_class=Response, responses=_ERRORS)
async def delete_notification_list(
    list_id: UUID,
    actor: Actor = Depends(require_capability(CaseAction.DELETE_NOTIFICATION_LIST)),
    service: NotificationWorkflowService = Depends(get_notification_workflow_service),
) -> Response:
    await service.delete_list(list_id)
    return Response(status_code=204)


# =============================================================================
# Items
# =============================================================================


@router.post(
    "/{list_id}/items", response_model=NotificationItemResponse, responses=_ERRORS
)
async def add_notification_item(
    list_id: UUID,
    request_data: AddNotificationItemRequest,
    actor: Actor = Depends(require_capability(CaseAction.MANAGE_NOTIFICATION_ITEMS)),
    service: NotificationWorkflowService = Depends(get_notification_workflow_service),
) -> NotificationItemResponse:
    item = await service.add_item(
        list_id, request_data.resource_id, observations=request_data.observations
    )
    return NotificationItemResponse.from_domain(item)


@router.delete(
    "/{list_id}/items/{item_id}",
    status_code=204,
    response_class=Response,
    responses=_ERRORS,
)
async def remove_notification_item(
    list_id: UUID,
    item_id: UUID,
    actor: Actor = Depends(require_capability(CaseAction.MANAGE_NOTIFICATION_ITEMS)),
    service: NotificationWorkflowService = Depends(get_notification_workflow_service),
) -> Response:
    await service.remove_item(list_id, item_id)
    return Response(status_code=204)


# =============================================================================
# Attempts
# =============================================================================


@router.post(
    "/{list_id}/items/{item_id}/attempts",
    response_model=NotificationAttemptResponse,
    responses=_ERRORS,
)
async def add_notification_attempt(
    list_id: UUID,
    item_id: UUID,
    request_data: AddNotificationAttemptRequest,
    actor: Actor = Depends(require_capability(CaseAction.MANAGE_NOTIFICATION_ATTEMPTS)),
    service: NotificationWorkflowService = Depends(get_notification_workflow_service),
) -> NotificationAttemptResponse:
    attempt = await service.add_attempt(
        list_id,
        item_id,
        request_data.channel,
        deadline=request_data.deadline,
        sent_to=request_data.sent_to,
        observations=request_data.observations,
    )
    return NotificationAttemptResponse.from_domain(attempt)


@router.post(
    "/{list_id}/items/{item_id}/attempts/{attempt_id}/confirm",
    response_model=NotificationAttemptResponse,
    responses=_ERRORS,
)
async def confirm_notification_attempt(
    list_id: UUID,
    item_id: UUID,
    attempt_id: UUID,
    actor: Actor = Depends(require_capability(CaseAction.CONFIRM_NOTIFICATION_ATTEMPT)),
    service: NotificationWorkflowService = Depends(get_notification_workflow_service),
) -> NotificationAttemptResponse:
    """Record receipt; the confirming actor is stored on the attempt."""
    attempt = await service.confirm_attempt(
        list_id, item_id, attempt_id, confirmed_by=actor.actor_id
    )
    return NotificationAttemptResponse.from_domain(attempt)


@router.delete(
    "/{list_id}/items/{item_id}/attempts/{attempt_id}",
    status_code=204,
    response_class=Response,
    responses=_ERRORS,
)
async def delete_notification_attempt(
    list_id: UUID,
    item_id: UUID,
    attempt_id: UUID,
    actor: Actor = Depends(require_capability(CaseAction.MANAGE_NOTIFICATION_ATTEMPTS)),
    service: NotificationWorkflowService = Depends(get_notification_workflow_service),
) -> Response:
    await service.delete_attempt(list_id, item_id, attempt_id)
    return Response(status_code=204)
