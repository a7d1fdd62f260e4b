"""PostgreSQL sequence repository.

Concurrent writers of one (scope, year) are serialized by a
transaction-scoped advisory lock taken before the maximum is read. Under
read committed, the lock waiter's next statement sees the holder's
committed row, so each writer reads a fresh maximum instead of racing on
the unique index. The unique constraints stay as the backstop.
"""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.ports.sequence_repository import SequenceRepositoryProtocol
from src.domain.models.sequence import SequenceScope

# Table holding the numbered records of each scope
SCOPE_TABLES: dict[SequenceScope, str] = {
    SequenceScope.RESOURCE: "resources",
    SequenceScope.DECISION: "decisions",
    SequenceScope.NOTIFICATION_LIST: "notification_lists",
}


class PostgresSequenceRepository(SequenceRepositoryProtocol):
    """Reads ``MAX(sequence_number)`` from the scope's table under a lock."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def lock_scope(self, scope: SequenceScope, year: int) -> None:
        """Block until no other open transaction allocates in (scope, year).

        Released automatically at commit or rollback.
        """
        await self._session.execute(
            text("SELECT pg_advisory_xact_lock(hashtext(:scope), CAST(:year AS integer))"),
            {"scope": scope.value, "year": year},
        )

    async def max_sequence(self, scope: SequenceScope, year: int) -> int:
        await self.lock_scope(scope, year)
        result = await self._session.execute(
            text(
                f"SELECT COALESCE(MAX(sequence_number), 0) "
                f"FROM {SCOPE_TABLES[scope]} WHERE year = :year"
            ),
            {"year": year},
        )
        return int(result.scalar() or 0)
