"""Adjudication session routes.

Creating, completing and reverting a session, managing its agenda,
recording and reordering votings, and distributing resources to members.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response

from src.api.auth.actor_auth import get_actor, require_capability
from src.api.models.common import ProblemDetail
from src.api.models.session import (
    AddSessionResourceRequest,
    CreateSessionRequest,
    DistributeResourceRequest,
    DistributionResponse,
    RecordVotingRequest,
    ReorderVotingsRequest,
    SessionAgendaResponse,
    SessionResourceResponse,
    SessionResponse,
    UpdateResourceStatusRequest,
    VotingResponse,
)
from src.application.ports.capability_checker import Actor, CaseAction
from src.application.services.session_lifecycle_service import (
    SessionLifecycleService,
    VotingOrder,
)
from src.bootstrap.case_store import get_session_lifecycle_service

router = APIRouter(prefix="/v1/sessions", tags=["sessions"])

_ERRORS = {
    400: {"model": ProblemDetail, "description": "Invalid state or input"},
    404: {"model": ProblemDetail, "description": "Session or entry not found"},
}


@router.post(
    "",
    response_model=SessionResponse,
    responses={
        400: {"model": ProblemDetail, "description": "Malformed or duplicate session number"},
    },
    summary="Schedule a new session in PENDENTE",
)
async def create_session(
    request_data: CreateSessionRequest,
    actor: Actor = Depends(require_capability(CaseAction.CREATE_SESSION)),
    service: SessionLifecycleService = Depends(get_session_lifecycle_service),
) -> SessionResponse:
    session = await service.create_session(request_data.session_number, request_data.date)
    return SessionResponse.from_domain(session)


@router.get("/{session_id}", response_model=SessionAgendaResponse, responses=_ERRORS)
async def get_session(
    session_id: UUID,
    actor: Actor = Depends(get_actor),
    service: SessionLifecycleService = Depends(get_session_lifecycle_service),
) -> SessionAgendaResponse:
    """Return a session with its agenda."""
    return SessionAgendaResponse.from_domain(await service.get_agenda(session_id))


@router.post(
    "/{session_id}/complete",
    response_model=SessionResponse,
    responses=_ERRORS,
    summary="Complete a session whose agenda is fully adjudicated",
)
async def complete_session(
    session_id: UUID,
    actor: Actor = Depends(require_capability(CaseAction.COMPLETE_SESSION)),
    service: SessionLifecycleService = Depends(get_session_lifecycle_service),
) -> SessionResponse:
    return SessionResponse.from_domain(await service.complete_session(session_id))


@router.post("/{session_id}/revert", response_model=SessionResponse, responses=_ERRORS)
async def revert_session(
    session_id: UUID,
    actor: Actor = Depends(require_capability(CaseAction.REVERT_SESSION)),
    service: SessionLifecycleService = Depends(get_session_lifecycle_service),
) -> SessionResponse:
    """Reopen a completed session."""
    return SessionResponse.from_domain(await service.revert_session(session_id))


@router.post(
    "/{session_id}/resources",
    response_model=SessionResourceResponse,
    responses=_ERRORS,
)
async def add_session_resource(
    session_id: UUID,
    request_data: AddSessionResourceRequest,
    actor: Actor = Depends(require_capability(CaseAction.MANAGE_SESSION_AGENDA)),
    service: SessionLifecycleService = Depends(get_session_lifecycle_service),
) -> SessionResourceResponse:
    entry = await service.add_resource_to_session(session_id, request_data.resource_id)
    return SessionResourceResponse.from_domain(entry)


@router.put(
    "/{session_id}/resources/{session_resource_id}/status",
    response_model=SessionResourceResponse,
    responses=_ERRORS,
)
async def update_session_resource_status(
    session_id: UUID,
    session_resource_id: UUID,
    request_data: UpdateResourceStatusRequest,
    actor: Actor = Depends(require_capability(CaseAction.MANAGE_SESSION_AGENDA)),
    service: SessionLifecycleService = Depends(get_session_lifecycle_service),
) -> SessionResourceResponse:
    entry = await service.update_resource_status(
        session_id,
        session_resource_id,
        request_data.status,
        minutes_text=request_data.minutes_text,
        diligence_days_deadline=request_data.diligence_days_deadline,
        view_requested_by_id=request_data.view_requested_by_id,
    )
    return SessionResourceResponse.from_domain(entry)


@router.get(
    "/{session_id}/resources/{session_resource_id}/votings",
    response_model=list[VotingResponse],
    responses=_ERRORS,
)
async def list_votings(
    session_id: UUID,
    session_resource_id: UUID,
    actor: Actor = Depends(get_actor),
    service: SessionLifecycleService = Depends(get_session_lifecycle_service),
) -> list[VotingResponse]:
    votings = await service.list_votings(session_id, session_resource_id)
    return [VotingResponse.from_domain(v) for v in votings]


@router.post(
    "/{session_id}/resources/{session_resource_id}/votings",
    response_model=VotingResponse,
    responses=_ERRORS,
)
async def record_voting(
    session_id: UUID,
    session_resource_id: UUID,
    request_data: RecordVotingRequest,
    actor: Actor = Depends(require_capability(CaseAction.MANAGE_SESSION_AGENDA)),
    service: SessionLifecycleService = Depends(get_session_lifecycle_service),
) -> VotingResponse:
    voting = await service.record_voting(session_id, session_resource_id, request_data.label)
    return VotingResponse.from_domain(voting)


@router.put(
    "/{session_id}/resources/{session_resource_id}/votings/order",
    response_model=list[VotingResponse],
    responses=_ERRORS,
    summary="Reorder votings atomically",
)
async def reorder_votings(
    session_id: UUID,
    session_resource_id: UUID,
    request_data: ReorderVotingsRequest,
    actor: Actor = Depends(require_capability(CaseAction.REORDER_VOTINGS)),
    service: SessionLifecycleService = Depends(get_session_lifecycle_service),
) -> list[VotingResponse]:
    """Apply every new position or none of them."""
    votings = await service.reorder_votings(
        session_id,
        session_resource_id,
        [VotingOrder(voting_id=i.voting_id, order=i.order) for i in request_data.items],
    )
    return [VotingResponse.from_domain(v) for v in votings]


@router.post(
    "/{session_id}/distributions",
    response_model=DistributionResponse,
    responses=_ERRORS,
)
async def distribute_resource(
    session_id: UUID,
    request_data: DistributeResourceRequest,
    actor: Actor = Depends(require_capability(CaseAction.DISTRIBUTE_RESOURCE)),
    service: SessionLifecycleService = Depends(get_session_lifecycle_service),
) -> DistributionResponse:
    record = await service.distribute_resource(
        session_id,
        request_data.resource_id,
        request_data.distributed_to_id,
        target_session_id=request_data.target_session_id,
    )
    return DistributionResponse.from_domain(record)


@router.delete(
    "/distributions/{distribution_id}",
    status_code=204,
    response_class=Response,
    responses={404: {"model": ProblemDetail, "description": "Distribution not found"}},
)
async def remove_distribution(
    distribution_id: UUID,
    actor: Actor = Depends(require_capability(CaseAction.DISTRIBUTE_RESOURCE)),
    service: SessionLifecycleService = Depends(get_session_lifecycle_service),
) -> Response:
    await service.remove_distribution(distribution_id)
    return Response(status_code=204)
