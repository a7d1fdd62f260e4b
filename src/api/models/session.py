"""Adjudication session request/response models."""

import datetime as dt
from uuid import UUID

from pydantic import BaseModel, Field

from src.api.models.common import DateTimeWithZ
from src.application.services.session_lifecycle_service import SessionAgenda
from src.domain.models.session import (
    Session,
    SessionDistributionRecord,
    SessionResource,
    SessionResult,
)


class CreateSessionRequest(BaseModel):
    """Body of POST /v1/sessions.

    Attributes:
        session_number: NNNN/YYYY; validated by the core.
        date: Date of the sitting.
    """

    session_number: str = Field(..., min_length=1, description="NNNN/YYYY")
    date: dt.date


class SessionResponse(BaseModel):
    """A session and its status."""

    id: UUID
    session_number: str
    year: int
    date: dt.date
    status: str
    updated_at: DateTimeWithZ

    @classmethod
    def from_domain(cls, session: Session) -> "SessionResponse":
        return cls(
            id=session.id,
            session_number=session.session_number,
            year=session.year,
            date=session.date,
            status=session.status.value,
            updated_at=session.updated_at,
        )


class SessionResourceResponse(BaseModel):
    """One agenda entry."""

    id: UUID
    session_id: UUID
    resource_id: UUID
    order: int
    status: str
    minutes_text: str | None = None
    diligence_days_deadline: int | None = None
    view_requested_by_id: UUID | None = None

    @classmethod
    def from_domain(cls, entry: SessionResource) -> "SessionResourceResponse":
        return cls(
            id=entry.id,
            session_id=entry.session_id,
            resource_id=entry.resource_id,
            order=entry.order,
            status=entry.status.value,
            minutes_text=entry.minutes_text,
            diligence_days_deadline=entry.diligence_days_deadline,
            view_requested_by_id=entry.view_requested_by_id,
        )


class SessionAgendaResponse(BaseModel):
    """A session with its agenda and the number of entries still open."""

    session: SessionResponse
    resources: list[SessionResourceResponse]
    pending_count: int

    @classmethod
    def from_domain(cls, agenda: SessionAgenda) -> "SessionAgendaResponse":
        return cls(
            session=SessionResponse.from_domain(agenda.session),
            resources=[SessionResourceResponse.from_domain(r) for r in agenda.resources],
            pending_count=agenda.pending_count,
        )


class AddSessionResourceRequest(BaseModel):
    """Body of POST /v1/sessions/{session_id}/resources."""

    resource_id: UUID


class UpdateResourceStatusRequest(BaseModel):
    """Body of PUT /v1/sessions/{session_id}/resources/{id}/status.

    Attributes:
        status: EM_PAUTA, SUSPENSO, DILIGENCIA, PEDIDO_VISTA or JULGADO.
        minutes_text: Session minutes for the entry.
        diligence_days_deadline: Required (positive) for DILIGENCIA.
        view_requested_by_id: Required for PEDIDO_VISTA.
    """

    status: str = Field(..., min_length=1)
    minutes_text: str | None = None
    diligence_days_deadline: int | None = None
    view_requested_by_id: UUID | None = None


class RecordVotingRequest(BaseModel):
    """Body of POST /v1/sessions/{session_id}/resources/{id}/votings."""

    label: str = Field(..., max_length=500)


class VotingResponse(BaseModel):
    """One voting (SessionResult)."""

    id: UUID
    session_id: UUID
    resource_id: UUID
    label: str
    order: int
    created_at: DateTimeWithZ

    @classmethod
    def from_domain(cls, result: SessionResult) -> "VotingResponse":
        return cls(
            id=result.id,
            session_id=result.session_id,
            resource_id=result.resource_id,
            label=result.label,
            order=result.order,
            created_at=result.created_at,
        )


class VotingOrderItem(BaseModel):
    """New position for one voting."""

    voting_id: UUID
    order: int


class ReorderVotingsRequest(BaseModel):
    """Body of PUT /v1/sessions/{session_id}/resources/{id}/votings/order."""

    items: list[VotingOrderItem]


class DistributeResourceRequest(BaseModel):
    """Body of POST /v1/sessions/{session_id}/distributions."""

    resource_id: UUID
    distributed_to_id: UUID
    target_session_id: UUID | None = None


class DistributionResponse(BaseModel):
    """A distribution record."""

    id: UUID
    session_id: UUID
    resource_id: UUID
    distributed_to_id: UUID
    target_session_id: UUID | None = None
    created_at: DateTimeWithZ

    @classmethod
    def from_domain(cls, record: SessionDistributionRecord) -> "DistributionResponse":
        return cls(
            id=record.id,
            session_id=record.session_id,
            resource_id=record.resource_id,
            distributed_to_id=record.distributed_to_id,
            target_session_id=record.target_session_id,
            created_at=record.created_at,
        )
