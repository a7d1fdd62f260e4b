"""Sequence allocation errors."""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.domain.exceptions import ConflictError

if TYPE_CHECKING:
    from src.domain.models.sequence import SequenceScope


class SequenceConflictError(ConflictError):
    """Raised when a sequence number was taken by a concurrent writer.

    The store raises this when the unique key ``(scope, year,
    sequence_number)`` is violated. The allocator retries the whole
    transaction and only surfaces the error after its retry budget.

    Attributes:
        scope: Numbering scope.
        year: Year of the counter.
        sequence_number: The number that collided.
        attempts: How many allocations were tried before giving up.
    """

    def __init__(
        self,
        scope: SequenceScope,
        year: int,
        sequence_number: int,
        attempts: int = 1,
    ) -> None:
        self.scope = scope
        self.year = year
        self.sequence_number = sequence_number
        self.attempts = attempts
        super().__init__(
            f"Sequence number {sequence_number} for {scope.value}/{year} "
            f"is already taken (attempts={attempts})"
        )
