"""PostgreSQL case store.

Each transaction is one SQLAlchemy ``AsyncSession`` inside
``session.begin()``: leaving the block commits, an exception rolls back.
Concurrency is backed by the unique constraints in
``migrations/001_case_lifecycle_schema.sql``, by row locks taken with
``FOR UPDATE`` where an operation reads before it writes, and by a
transaction-scoped advisory lock per (scope, year) around number allocation.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from structlog import get_logger

from src.application.ports.case_store import CaseStoreProtocol, CaseTransaction
from src.infrastructure.adapters.persistence.decision_repository import (
    PostgresDecisionRepository,
)
from src.infrastructure.adapters.persistence.notification_repository import (
    PostgresNotificationRepository,
)
from src.infrastructure.adapters.persistence.protocol_repository import (
    PostgresProtocolRepository,
)
from src.infrastructure.adapters.persistence.resource_repository import (
    PostgresResourceRepository,
)
from src.infrastructure.adapters.persistence.sequence_repository import (
    PostgresSequenceRepository,
)
from src.infrastructure.adapters.persistence.session_repository import (
    PostgresSessionRepository,
)

logger = get_logger()


class PostgresCaseStore(CaseStoreProtocol):
    """CaseStoreProtocol backed by PostgreSQL.

    Attributes:
        _session_factory: SQLAlchemy async session factory.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[CaseTransaction]:
        """Open a database transaction with bound repositories."""
        async with self._session_factory() as session:
            async with session.begin():
                yield CaseTransaction(
                    sequences=PostgresSequenceRepository(session),
                    protocols=PostgresProtocolRepository(session),
                    resources=PostgresResourceRepository(session),
                    sessions=PostgresSessionRepository(session),
                    decisions=PostgresDecisionRepository(session),
                    notifications=PostgresNotificationRepository(session),
                )
