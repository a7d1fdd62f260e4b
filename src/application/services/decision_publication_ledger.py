"""Decision publication ledger.

Each decision owns an append-only log of publication snapshots:

- publish_batch appends a snapshot of the live ementa with
  ``publication_order = last + 1`` and moves the decision to PUBLICADO
  (order 1) or REPUBLICADO (order > 1).
- update_decision is the explicit edit operation: changing the ementa of a
  published decision stages a correction and resets it to PENDENTE.
- revert_decision discards a staged correction by copying the latest
  snapshot back into the live fields. The log itself never changes.

"Latest" is always the highest publication_order in the log.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from uuid import UUID, uuid4

from src.application.ports.case_store import CaseStoreProtocol, CaseTransaction
from src.application.services.base import LoggingMixin
from src.application.services.sequence_allocator import SequenceAllocator
from src.domain.errors.decision import (
    DecisionAlreadyExistsError,
    DecisionNotFoundError,
    DecisionNotPendingError,
    DuplicateDecisionNumberError,
    InvalidDecisionInputError,
    NoPendingDecisionsError,
    NoPublicationToRestoreError,
    PublishedDecisionDeletionError,
)
from src.domain.errors.resource import ResourceNotFoundError
from src.domain.exceptions import CaseEngineError
from src.domain.models.decision import (
    Decision,
    DecisionPublication,
    DecisionStatus,
)
from src.domain.models.sequence import SequenceScope

# Manually entered decision numbers: four-digit sequence, four-digit year
DECISION_NUMBER_PATTERN = re.compile(r"^(\d{4})/(\d{4})$")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_decision_number(value: str) -> tuple[int, int]:
    """Split a ``NNNN/YYYY`` decision number into (sequence_number, year).

    Raises:
        InvalidDecisionInputError: If the value is malformed or the
            sequence is zero.
    """
    match = DECISION_NUMBER_PATTERN.match(value.strip())
    if match is None:
        raise InvalidDecisionInputError(
            f"Invalid decision number {value!r}; expected format NNNN/YYYY"
        )
    sequence_number, year = int(match.group(1)), int(match.group(2))
    if sequence_number < 1:
        raise InvalidDecisionInputError(
            f"Invalid decision number {value!r}; sequence must be positive"
        )
    return sequence_number, year


@dataclass(frozen=True)
class DecisionRecord:
    """A decision with its publication log, newest publication first."""

    decision: Decision
    publications: list[DecisionPublication]


@dataclass(frozen=True)
class PublishedDecision:
    """One decision published by a batch."""

    decision_id: UUID
    publication_id: UUID
    publication_order: int
    status: DecisionStatus


@dataclass(frozen=True)
class PublicationFailure:
    """One decision a batch could not publish."""

    decision_id: UUID
    error: str
    message: str


@dataclass(frozen=True)
class PublicationBatchResult:
    """Per-element outcome of publish_batch.

    Attributes:
        published: Decisions that received a new publication.
        skipped: Decisions that were not PENDENTE.
        failed: Decisions whose publication raised a domain error.
    """

    published: list[PublishedDecision] = field(default_factory=list)
    skipped: list[UUID] = field(default_factory=list)
    failed: list[PublicationFailure] = field(default_factory=list)

    @property
    def published_count(self) -> int:
        """How many decisions were published."""
        return len(self.published)


class DecisionPublicationLedger(LoggingMixin):
    """Service managing decisions and their publication log.

    Attributes:
        _store: Case store.
        _allocator: Sequence allocator for decision numbers.
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
        self._init_logger(component="decision")

    async def create_decision(
        self,
        resource_id: UUID,
        ementa_title: str,
        ementa_body: str,
        created_by: str | None = None,
    ) -> Decision:
        """Draft the decision for a resource.

        The number is allocated in the judgment year: the year of the most
        recent session holding a voting for the resource, or the current
        year when it was never voted on.

        Raises:
            InvalidDecisionInputError: If title or body is blank.
            ResourceNotFoundError: If the resource does not exist.
            DecisionAlreadyExistsError: If the resource already has one.
        """
        if not ementa_title or not ementa_title.strip():
            raise InvalidDecisionInputError("Ementa title is required")
        if not ementa_body or not ementa_body.strip():
            raise InvalidDecisionInputError("Ementa body is required")

        log = self._log_operation("create_decision", resource_id=str(resource_id))

        async def _create(tx: CaseTransaction) -> Decision:
            if await tx.resources.get(resource_id) is None:
                raise ResourceNotFoundError(resource_id=resource_id)
            if await tx.decisions.get_by_resource(resource_id) is not None:
                raise DecisionAlreadyExistsError(resource_id=resource_id)
            judged_in = await tx.sessions.latest_judgment_session(resource_id)
            year = judged_in.year if judged_in is not None else self._now().year
            number = await self._allocator.allocate(tx, SequenceScope.DECISION, year)
            decision = Decision(
                id=uuid4(),
                resource_id=resource_id,
                sequence_number=number.sequence_number,
                year=number.year,
                ementa_title=ementa_title.strip(),
                ementa_body=ementa_body,
                created_by=created_by,
            )
            await tx.decisions.save(decision)
            return decision

        decision = await self._allocator.run_in_transaction(
            _create, operation_name="create_decision"
        )
        log.info(
            "decision_created",
            decision_id=str(decision.id),
            decision_number=decision.decision_number,
        )
        return decision

    async def get_decision(self, decision_id: UUID) -> DecisionRecord:
        """Return a decision with its publications, newest first.

        Raises:
            DecisionNotFoundError: If the decision does not exist.
        """
        async with self._store.transaction() as tx:
            decision = await self._require_decision(tx, decision_id)
            publications = await tx.decisions.list_publications(decision_id)
        return DecisionRecord(
            decision=decision,
            publications=sorted(
                publications, key=lambda p: p.publication_order, reverse=True
            ),
        )

    async def update_decision(
        self,
        decision_id: UUID,
        ementa_title: str | None = None,
        ementa_body: str | None = None,
        decision_number: str | None = None,
    ) -> Decision:
        """Edit a decision's ementa and, optionally, its number.

        Changing the ementa of a PUBLICADO/REPUBLICADO decision resets it
        to PENDENTE so the correction can be republished (or reverted).

        Raises:
            InvalidDecisionInputError: If a supplied field is blank or the
                number is not ``NNNN/YYYY``.
            DecisionNotFoundError: If the decision does not exist.
            DuplicateDecisionNumberError: If the new number is taken.
        """
        if ementa_title is not None and not ementa_title.strip():
            raise InvalidDecisionInputError("Ementa title cannot be blank")
        if ementa_body is not None and not ementa_body.strip():
            raise InvalidDecisionInputError("Ementa body cannot be blank")
        new_number = (
            parse_decision_number(decision_number) if decision_number is not None else None
        )

        log = self._log_operation("update_decision", decision_id=str(decision_id))
        async with self._store.transaction() as tx:
            decision = await self._require_decision(tx, decision_id, for_update=True)
            updated = decision.with_ementa(
                ementa_title=ementa_title.strip() if ementa_title is not None else None,
                ementa_body=ementa_body,
            )
            if new_number is not None and new_number != (
                decision.sequence_number,
                decision.year,
            ):
                holder = await tx.decisions.get_by_number(*new_number)
                if holder is not None and holder.id != decision.id:
                    raise DuplicateDecisionNumberError(decision_number=decision_number.strip())
                updated = updated.renumbered(*new_number)
            await tx.decisions.update(updated)

        if decision.status != updated.status:
            log.info(
                "decision_reset_for_republication",
                previous_status=decision.status.value,
            )
        log.info("decision_updated", decision_number=updated.decision_number)
        return updated

    async def delete_decision(self, decision_id: UUID) -> None:
        """Delete a draft decision that was never published.

        Raises:
            DecisionNotFoundError: If the decision does not exist.
            DecisionNotPendingError: If the decision is not PENDENTE.
            PublishedDecisionDeletionError: If it owns publications.
        """
        async with self._store.transaction() as tx:
            decision = await self._require_decision(tx, decision_id, for_update=True)
            if decision.status != DecisionStatus.PENDENTE:
                raise DecisionNotPendingError(
                    decision_id=decision_id, status=decision.status, operation="delete"
                )
            publications = await tx.decisions.list_publications(decision_id)
            if publications:
                raise PublishedDecisionDeletionError(
                    decision_id=decision_id, publication_count=len(publications)
                )
            await tx.decisions.delete(decision_id)
        self._log_operation("delete_decision", decision_id=str(decision_id)).info(
            "decision_deleted"
        )

    async def publish_batch(
        self,
        decision_ids: list[UUID],
        publication_number: str,
        publication_date: date,
        republish_reason: str | None = None,
    ) -> PublicationBatchResult:
        """Publish every PENDENTE decision in a batch.

        Contract: each decision is published in its own transaction
        (append snapshot + status update). The batch is best-effort:
        decisions that are not PENDENTE are skipped, decisions that fail
        with a domain error are reported, and the rest still publish.

        Args:
            decision_ids: Decisions to publish; duplicates are ignored.
            publication_number: Official gazette edition number.
            publication_date: Publication date.
            republish_reason: Optional reason stored on republications.

        Returns:
            Per-element outcome with the published count.

        Raises:
            InvalidDecisionInputError: If ids, number or date are missing.
            NoPendingDecisionsError: If none of the decisions is PENDENTE.
        """
        if not decision_ids:
            raise InvalidDecisionInputError("At least one decision must be selected")
        if not publication_number or not publication_number.strip():
            raise InvalidDecisionInputError("Publication number is required")
        if publication_date is None:
            raise InvalidDecisionInputError("Publication date is required")

        unique_ids = list(dict.fromkeys(decision_ids))
        log = self._log_operation(
            "publish_batch",
            requested=len(unique_ids),
            publication_number=publication_number,
        )
        log.info("publish_batch_started")

        async with self._store.transaction() as tx:
            pending = 0
            for decision_id in unique_ids:
                decision = await tx.decisions.get(decision_id)
                if decision is not None and decision.status == DecisionStatus.PENDENTE:
                    pending += 1
        if pending == 0:
            log.warning("publish_batch_rejected", reason="no_pending_decisions")
            raise NoPendingDecisionsError(requested=len(unique_ids))

        result = PublicationBatchResult()
        for decision_id in unique_ids:
            try:
                published = await self._publish_one(
                    decision_id,
                    publication_number.strip(),
                    publication_date,
                    republish_reason,
                )
            except CaseEngineError as exc:
                log.warning(
                    "decision_publication_failed",
                    decision_id=str(decision_id),
                    error=type(exc).__name__,
                    message=exc.message,
                )
                result.failed.append(
                    PublicationFailure(
                        decision_id=decision_id,
                        error=type(exc).__name__,
                        message=exc.message,
                    )
                )
                continue
            if published is None:
                result.skipped.append(decision_id)
            else:
                result.published.append(published)

        log.info(
            "publish_batch_completed",
            published=result.published_count,
            skipped=len(result.skipped),
            failed=len(result.failed),
        )
        return result

    async def _publish_one(
        self,
        decision_id: UUID,
        publication_number: str,
        publication_date: date,
        republish_reason: str | None,
    ) -> PublishedDecision | None:
        """Publish one decision; None when it is not PENDENTE."""
        async with self._store.transaction() as tx:
            decision = await self._require_decision(tx, decision_id, for_update=True)
            if decision.status != DecisionStatus.PENDENTE:
                return None
            latest = await tx.decisions.latest_publication(decision_id)
            order = (latest.publication_order if latest is not None else 0) + 1
            publication = DecisionPublication(
                id=uuid4(),
                decision_id=decision_id,
                publication_order=order,
                publication_number=publication_number,
                publication_date=publication_date,
                ementa_title_snapshot=decision.ementa_title,
                ementa_body_snapshot=decision.ementa_body,
                republish_reason=republish_reason if order > 1 else None,
            )
            await tx.decisions.append_publication(publication)
            published = decision.published_as(order)
            await tx.decisions.update(published)
        return PublishedDecision(
            decision_id=decision_id,
            publication_id=publication.id,
            publication_order=order,
            status=published.status,
        )

    async def revert_decision(self, decision_id: UUID) -> Decision:
        """Restore the live ementa from the latest publication.

        Raises:
            DecisionNotFoundError: If the decision does not exist.
            DecisionNotPendingError: If the decision is not PENDENTE.
            NoPublicationToRestoreError: If it was never published.
        """
        log = self._log_operation("revert_decision", decision_id=str(decision_id))
        async with self._store.transaction() as tx:
            decision = await self._require_decision(tx, decision_id, for_update=True)
            if decision.status != DecisionStatus.PENDENTE:
                log.warning("revert_decision_rejected", status=decision.status.value)
                raise DecisionNotPendingError(
                    decision_id=decision_id, status=decision.status, operation="revert"
                )
            latest = await tx.decisions.latest_publication(decision_id)
            if latest is None:
                log.warning("revert_decision_rejected", reason="no_publications")
                raise NoPublicationToRestoreError(decision_id=decision_id)
            restored = decision.restored_from(latest)
            await tx.decisions.update(restored)

        log.info(
            "revert_decision_completed",
            publication_order=latest.publication_order,
            status=restored.status.value,
        )
        return restored

    async def _require_decision(
        self, tx: CaseTransaction, decision_id: UUID, for_update: bool = False
    ) -> Decision:
        decision = await tx.decisions.get(decision_id, for_update=for_update)
        if decision is None:
            raise DecisionNotFoundError(decision_id=decision_id)
        return decision
