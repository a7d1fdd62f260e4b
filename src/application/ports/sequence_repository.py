"""Sequence repository port.

The allocator is a pure function over this interface: it reads the highest
sequence number already used in a scope and year, inside the transaction
that will consume the next number.
"""

from __future__ import annotations

from typing import Protocol

from src.domain.models.sequence import SequenceScope


class SequenceRepositoryProtocol(Protocol):
    """Read access to year-scoped sequence counters.

    Implementations derive the maximum from the numbered records
    themselves (resources, decisions, notification lists); there is no
    separate counter table to drift out of sync.
    """

    async def max_sequence(self, scope: SequenceScope, year: int) -> int:
        """Return the highest sequence number used for (scope, year).

        Args:
            scope: Numbering scope.
            year: Counter year.

        Returns:
            The maximum sequence number, or 0 when none exists.

        Stores shared by concurrent writers must also hold an exclusive
        lock on (scope, year) from this read until the transaction ends.
        """
        ...
