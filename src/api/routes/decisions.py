"""Decision and publication ledger routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response

from src.api.auth.actor_auth import get_actor, require_capability
from src.api.models.common import ProblemDetail
from src.api.models.decision import (
    CreateDecisionRequest,
    DecisionDetailResponse,
    DecisionResponse,
    PublishBatchRequest,
    PublishBatchResponse,
    UpdateDecisionRequest,
)
from src.application.ports.capability_checker import Actor, CaseAction
from src.application.services.decision_publication_ledger import (
    DecisionPublicationLedger,
)
from src.bootstrap.case_store import get_decision_publication_ledger

router = APIRouter(prefix="/v1/decisions", tags=["decisions"])

_ERRORS = {
    400: {"model": ProblemDetail, "description": "Invalid state or input"},
    404: {"model": ProblemDetail, "description": "Decision not found"},
}


@router.post("", response_model=DecisionResponse, responses=_ERRORS)
async def create_decision(
    request_data: CreateDecisionRequest,
    actor: Actor = Depends(require_capability(CaseAction.CREATE_DECISION)),
    ledger: DecisionPublicationLedger = Depends(get_decision_publication_ledger),
) -> DecisionResponse:
    """Draft the decision of a resource, numbered in its judgment year."""
    decision = await ledger.create_decision(
        request_data.resource_id,
        request_data.ementa_title,
        request_data.ementa_body,
        created_by=actor.actor_id,
    )
    return DecisionResponse.from_domain(decision)


@router.post(
    "/publish",
    response_model=PublishBatchResponse,
    responses={400: {"model": ProblemDetail, "description": "No pending decision"}},
    summary="Publish a batch of decisions",
    description=(
        "Each PENDENTE decision receives a new publication. Decisions in any "
        "other status are listed as skipped."
    ),
)
async def publish_decisions(
    request_data: PublishBatchRequest,
    actor: Actor = Depends(require_capability(CaseAction.PUBLISH_DECISIONS)),
    ledger: DecisionPublicationLedger = Depends(get_decision_publication_ledger),
) -> PublishBatchResponse:
    result = await ledger.publish_batch(
        request_data.decision_ids,
        request_data.publication_number,
        request_data.publication_date,
        republish_reason=request_data.republish_reason,
    )
    return PublishBatchResponse.from_domain(result)


@router.get("/{decision_id}", response_model=DecisionDetailResponse, responses=_ERRORS)
async def get_decision(
    decision_id: UUID,
    actor: Actor = Depends(get_actor),
    ledger: DecisionPublicationLedger = Depends(get_decision_publication_ledger),
) -> DecisionDetailResponse:
    return DecisionDetailResponse.from_record(await ledger.get_decision(decision_id))


@router.patch("/{decision_id}", response_model=DecisionResponse, responses=_ERRORS)
async def update_decision(
    decision_id: UUID,
    request_data: UpdateDecisionRequest,
    actor: Actor = Depends(require_capability(CaseAction.UPDATE_DECISION)),
    ledger: DecisionPublicationLedger = Depends(get_decision_publication_ledger),
) -> DecisionResponse:
    """Edit the ementa or number; a published decision returns to PENDENTE."""
    decision = await ledger.update_decision(
        decision_id,
        ementa_title=request_data.ementa_title,
        ementa_body=request_data.ementa_body,
        decision_number=request_data.decision_number,
    )
    return DecisionResponse.from_domain(decision)


@router.delete(
    "/{decision_id}", status_code=204, response_class=Response, responses=_ERRORS
)
async def delete_decision(
    decision_id: UUID,
    actor: Actor = Depends(require_capability(CaseAction.DELETE_DECISION)),
    ledger: DecisionPublicationLedger = Depends(get_decision_publication_ledger),
) -> Response:
    await ledger.delete_decision(decision_id)
    return Response(status_code=204)


@router.post("/{decision_id}/revert", response_model=DecisionResponse, responses=_ERRORS)
async def revert_decision(
    decision_id: UUID,
    actor: Actor = Depends(require_capability(CaseAction.REVERT_DECISION)),
    ledger: DecisionPublicationLedger = Depends(get_decision_publication_ledger),
) -> DecisionResponse:
    """Restore the ementa from the latest publication."""
    return DecisionResponse.from_domain(await ledger.revert_decision(decision_id))
