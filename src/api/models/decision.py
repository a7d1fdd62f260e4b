"""Decision and publication request/response models."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field

from src.api.models.common import DateTimeWithZ
from src.application.services.decision_publication_ledger import (
    DecisionRecord,
    PublicationBatchResult,
)
from src.domain.models.decision import Decision, DecisionPublication


class CreateDecisionRequest(BaseModel):
    """Body of POST /v1/decisions."""

    resource_id: UUID
    ementa_title: str
    ementa_body: str


class UpdateDecisionRequest(BaseModel):
    """Body of PATCH /v1/decisions/{decision_id}.

    Attributes:
        ementa_title: New title; omitted keeps the current one.
        ementa_body: New body; omitted keeps the current one.
        decision_number: New number as ``NNNN/YYYY``.
    """

    ementa_title: str | None = None
    ementa_body: str | None = None
    decision_number: str | None = None


class DecisionResponse(BaseModel):
    """A decision's live state."""

    id: UUID
    resource_id: UUID
    decision_number: str
    ementa_title: str
    ementa_body: str
    status: str
    created_by: str | None = None
    created_at: DateTimeWithZ
    updated_at: DateTimeWithZ

    @classmethod
    def from_domain(cls, decision: Decision) -> "DecisionResponse":
        return cls(
            id=decision.id,
            resource_id=decision.resource_id,
            decision_number=decision.decision_number,
            ementa_title=decision.ementa_title,
            ementa_body=decision.ementa_body,
            status=decision.status.value,
            created_by=decision.created_by,
            created_at=decision.created_at,
            updated_at=decision.updated_at,
        )


class PublicationResponse(BaseModel):
    """One immutable publication snapshot."""

    id: UUID
    publication_order: int
    publication_number: str
    publication_date: date
    ementa_title_snapshot: str
    ementa_body_snapshot: str
    republish_reason: str | None = None
    created_at: DateTimeWithZ

    @classmethod
    def from_domain(cls, publication: DecisionPublication) -> "PublicationResponse":
        return cls(
            id=publication.id,
            publication_order=publication.publication_order,
            publication_number=publication.publication_number,
            publication_date=publication.publication_date,
            ementa_title_snapshot=publication.ementa_title_snapshot,
            ementa_body_snapshot=publication.ementa_body_snapshot,
            republish_reason=publication.republish_reason,
            created_at=publication.created_at,
        )


class DecisionDetailResponse(DecisionResponse):
    """A decision with its publication log, newest first."""

    publications: list[PublicationResponse]

    @classmethod
    def from_record(cls, record: DecisionRecord) -> "DecisionDetailResponse":
        base = DecisionResponse.from_domain(record.decision)
        return cls(
            **dict(base),
            publications=[PublicationResponse.from_domain(p) for p in record.publications],
        )


class PublishBatchRequest(BaseModel):
    """Body of POST /v1/decisions/publish."""

    decision_ids: list[UUID] = Field(..., min_length=1)
    publication_number: str
    publication_date: date
    republish_reason: str | None = None


class PublishedDecisionResponse(BaseModel):
    decision_id: UUID
    publication_id: UUID
    publication_order: int
    status: str


class PublicationFailureResponse(BaseModel):
    decision_id: UUID
    error: str
    message: str


class PublishBatchResponse(BaseModel):
    """Per-element outcome of a publish batch."""

    published_count: int
    published: list[PublishedDecisionResponse]
    skipped: list[UUID]
    failed: list[PublicationFailureResponse]

    @classmethod
    def from_domain(cls, result: PublicationBatchResult) -> "PublishBatchResponse":
        return cls(
            published_count=result.published_count,
            published=[
                PublishedDecisionResponse(
                    decision_id=p.decision_id,
                    publication_id=p.publication_id,
                    publication_order=p.publication_order,
                    status=p.status.value,
                )
                for p in result.published
            ],
            skipped=list(result.skipped),
            failed=[
                PublicationFailureResponse(
                    decision_id=f.decision_id, error=f.error, message=f.message
                )
                for f in result.failed
            ],
        )
