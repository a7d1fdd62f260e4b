"""Sequence repository stub implementation.

Reads the maximum sequence number directly from the numbered tables.
"""

from __future__ import annotations

from src.application.ports.sequence_repository import SequenceRepositoryProtocol
from src.domain.models.sequence import SequenceScope
from src.infrastructure.stubs.case_tables import CaseTables


class SequenceRepositoryStub(SequenceRepositoryProtocol):
    """In-memory stub of SequenceRepositoryProtocol (testing only)."""

    def __init__(self, tables: CaseTables) -> None:
        self._tables = tables

    async def max_sequence(self, scope: SequenceScope, year: int) -> int:
        """Return the highest sequence number used for (scope, year), or 0."""
        if scope == SequenceScope.RESOURCE:
            rows = self._tables.resources.values()
        elif scope == SequenceScope.DECISION:
            rows = self._tables.decisions.values()
        else:
            rows = self._tables.notification_lists.values()
        return max((r.sequence_number for r in rows if r.year == year), default=0)
