"""Year-scoped sequence number allocation.

Numbers are allocated as ``max(existing) + 1`` inside the same transaction
that creates the record consuming the number. Two mechanisms keep numbers
unique under concurrent writers:

1. The store serializes allocations for a (scope, year): the in-memory
   store holds one lock per transaction, PostgreSQL an advisory lock.
2. A unique key on ``(scope, year, sequence_number)`` rejects the loser,
   whose whole transaction is then retried with a fresh maximum.

Either way a number is never handed out twice and no gap appears, because
a rolled-back transaction leaves nothing behind.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TypeVar

from src.application.ports.case_store import CaseStoreProtocol, CaseTransaction
from src.application.ports.sequence_repository import SequenceRepositoryProtocol
from src.application.services.base import LoggingMixin
from src.config.case_config import SequenceAllocationConfig
from src.domain.errors.sequence import SequenceConflictError
from src.domain.models.sequence import AllocatedNumber, SequenceScope

T = TypeVar("T")


async def allocate_sequence_number(
    sequences: SequenceRepositoryProtocol,
    scope: SequenceScope,
    year: int,
) -> AllocatedNumber:
    """Return the next sequence number for (scope, year).

    Must be called inside the transaction that stores the record using
    the number.

    Args:
        sequences: Sequence repository bound to the open transaction.
        scope: Numbering scope.
        year: Counter year.

    Returns:
        The allocated number; 1 when the scope has no entries for the year.
    """
    current = await sequences.max_sequence(scope, year)
    return AllocatedNumber(scope=scope, year=year, sequence_number=current + 1)


class SequenceAllocator(LoggingMixin):
    """Runs number-consuming operations with retry on collisions.

    Attributes:
        _store: Case store used to open each attempt's transaction.
        _config: Retry budget.
    """

    def __init__(
        self,
        store: CaseStoreProtocol,
        config: SequenceAllocationConfig | None = None,
    ) -> None:
        self._store = store
        self._config = config or SequenceAllocationConfig()
        self._init_logger(component="sequence")

    async def allocate(
        self,
        tx: CaseTransaction,
        scope: SequenceScope,
        year: int,
    ) -> AllocatedNumber:
        """Allocate the next number for (scope, year) inside ``tx``."""
        allocated = await allocate_sequence_number(tx.sequences, scope, year)
        self._log_operation(
            "allocate_sequence",
            scope=scope.value,
            year=year,
        ).debug("sequence_allocated", sequence_number=allocated.sequence_number)
        return allocated

    async def run_in_transaction(
        self,
        operation: Callable[[CaseTransaction], Awaitable[T]],
        operation_name: str,
    ) -> T:
        """Run ``operation`` in a fresh transaction, retrying on collisions.

        Only SequenceConflictError triggers a retry; any other error
        propagates on the first attempt.

        Args:
            operation: Coroutine function receiving the open transaction.
            operation_name: Name used in log events.

        Returns:
            Whatever ``operation`` returns.

        Raises:
            SequenceConflictError: When every attempt collided.
        """
        log = self._log_operation(operation_name, max_retries=self._config.max_retries)
        attempt = 0

        while True:
            attempt += 1
            try:
                async with self._store.transaction() as tx:
                    return await operation(tx)
            except SequenceConflictError as exc:
                if attempt >= self._config.max_retries:
                    log.error("sequence_conflict_exhausted", attempts=attempt)
                    raise SequenceConflictError(
                        scope=exc.scope,
                        year=exc.year,
                        sequence_number=exc.sequence_number,
                        attempts=attempt,
                    ) from exc
                log.warning(
                    "sequence_conflict_retrying",
                    attempt=attempt,
                    scope=exc.scope.value,
                    year=exc.year,
                    sequence_number=exc.sequence_number,
                )
