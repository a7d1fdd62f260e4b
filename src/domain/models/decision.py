"""Decision (acórdão) and publication ledger domain models.

A Decision holds live, editable ementa fields and exclusively owns an
append-only log of DecisionPublication snapshots. The log is the audit
trail: entries are never updated or deleted, and their publication_order is
contiguous starting at 1. The latest publication is always found by the
highest publication_order, never through a cached pointer.

State Machine:
    PENDENTE -> PUBLICADO | REPUBLICADO (publish; order 1 vs order > 1)
    PUBLICADO | REPUBLICADO -> PENDENTE (ementa edited after publication)
    PENDENTE -> PUBLICADO | REPUBLICADO (revert to the latest snapshot)
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from enum import Enum
from uuid import UUID

from src.domain.models.sequence import SequenceScope, format_sequence_number


class DecisionStatus(Enum):
    """Publication status of a decision.

    States:
        PENDENTE: Draft not yet (re)published.
        PUBLICADO: Published once.
        REPUBLICADO: Published more than once.
    """

    PENDENTE = "PENDENTE"
    PUBLICADO = "PUBLICADO"
    REPUBLICADO = "REPUBLICADO"

    @property
    def is_published(self) -> bool:
        """True for PUBLICADO and REPUBLICADO."""
        return self != DecisionStatus.PENDENTE

    @classmethod
    def for_publication_order(cls, publication_order: int) -> DecisionStatus:
        """Status a decision holds right after its publication of this order."""
        if publication_order < 1:
            raise ValueError(
                f"publication_order must be positive, got {publication_order}"
            )
        return cls.PUBLICADO if publication_order == 1 else cls.REPUBLICADO


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class DecisionPublication:
    """An immutable, dated snapshot of a decision's published content.

    Attributes:
        id: Unique identifier.
        decision_id: Owning decision.
        publication_order: 1, 2, 3, ... per decision.
        publication_number: Number of the official gazette edition.
        publication_date: Date of publication.
        ementa_title_snapshot: Ementa title at publish time.
        ementa_body_snapshot: Ementa body at publish time.
        republish_reason: Optional reason recorded on republication.
        created_at: Creation timestamp (UTC).
    """

    id: UUID
    decision_id: UUID
    publication_order: int
    publication_number: str
    publication_date: date
    ementa_title_snapshot: str
    ementa_body_snapshot: str
    republish_reason: str | None = field(default=None)
    created_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Validate publication fields."""
        if self.publication_order < 1:
            raise ValueError(
                f"publication_order must be positive, got {self.publication_order}"
            )


@dataclass(frozen=True, eq=True)
class Decision:
    """A drafted ruling tied to one resource.

    Attributes:
        id: Unique identifier.
        resource_id: The resource this decision rules on (at most one each).
        sequence_number: Year-scoped decision sequence number.
        year: Judgment year.
        ementa_title: Live (editable) ementa title.
        ementa_body: Live (editable) ementa body.
        status: Publication status.
        created_by: Actor that drafted the decision.
        created_at: Creation timestamp (UTC).
        updated_at: Last modification timestamp (UTC).
    """

    id: UUID
    resource_id: UUID
    sequence_number: int
    year: int
    ementa_title: str
    ementa_body: str
    status: DecisionStatus = field(default=DecisionStatus.PENDENTE)
    created_by: str | None = field(default=None)
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    @property
    def decision_number(self) -> str:
        """Externally visible number, e.g. ``"0012/2025"``."""
        return format_sequence_number(
            SequenceScope.DECISION, self.sequence_number, self.year
        )

    def published_as(self, publication_order: int) -> Decision:
        """Return a copy in the status matching a new publication."""
        return replace(
            self,
            status=DecisionStatus.for_publication_order(publication_order),
            updated_at=_utc_now(),
        )

    def restored_from(self, publication: DecisionPublication) -> Decision:
        """Return a copy with the live ementa restored from a snapshot."""
        return replace(
            self,
            ementa_title=publication.ementa_title_snapshot,
            ementa_body=publication.ementa_body_snapshot,
            status=DecisionStatus.for_publication_order(publication.publication_order),
            updated_at=_utc_now(),
        )

    def with_ementa(
        self,
        ementa_title: str | None = None,
        ementa_body: str | None = None,
    ) -> Decision:
        """Return a copy with edited ementa fields.

        Editing the ementa of a published decision stages a correction: the
        status goes back to PENDENTE until it is published again or reverted.
        """
        title = self.ementa_title if ementa_title is None else ementa_title
        body = self.ementa_body if ementa_body is None else ementa_body
        changed = title != self.ementa_title or body != self.ementa_body
        status = self.status
        if changed and self.status.is_published:
            status = DecisionStatus.PENDENTE
        return replace(
            self,
            ementa_title=title,
            ementa_body=body,
            status=status,
            updated_at=_utc_now(),
        )

    def renumbered(self, sequence_number: int, year: int) -> Decision:
        """Return a copy carrying a manually corrected decision number."""
        return replace(
            self, sequence_number=sequence_number, year=year, updated_at=_utc_now()
        )
