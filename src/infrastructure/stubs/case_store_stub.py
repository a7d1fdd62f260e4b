"""In-memory case store (development and testing).

A single ``asyncio.Lock`` serializes transactions, giving every transaction
serializable isolation. Each transaction snapshots all tables on entry and
registers a rollback that restores the snapshot, so a failing operation
leaves no partial writes behind.

WARNING: Not for production use. Production uses
src/infrastructure/adapters/persistence/postgres_case_store.py.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from src.application.ports.case_store import CaseStoreProtocol, CaseTransaction
from src.domain.primitives.ensure_atomicity import AtomicOperationContext
from src.infrastructure.stubs.case_tables import CaseTables
from src.infrastructure.stubs.decision_repository_stub import DecisionRepositoryStub
from src.infrastructure.stubs.notification_repository_stub import (
    NotificationRepositoryStub,
)
from src.infrastructure.stubs.protocol_repository_stub import ProtocolRepositoryStub
from src.infrastructure.stubs.resource_repository_stub import ResourceRepositoryStub
from src.infrastructure.stubs.sequence_repository_stub import SequenceRepositoryStub
from src.infrastructure.stubs.session_repository_stub import SessionRepositoryStub


class InMemoryCaseStore(CaseStoreProtocol):
    """In-memory implementation of CaseStoreProtocol.

    Attributes:
        tables: The backing tables; tests may inspect them directly.
        transaction_count: Number of transactions opened.
        rollback_count: Number of transactions rolled back.
    """

    def __init__(self, tables: CaseTables | None = None) -> None:
        self.tables = tables or CaseTables()
        self.transaction_count = 0
        self.rollback_count = 0
        self._lock = asyncio.Lock()
        self._transaction = CaseTransaction(
            sequences=SequenceRepositoryStub(self.tables),
            protocols=ProtocolRepositoryStub(self.tables),
            resources=ResourceRepositoryStub(self.tables),
            sessions=SessionRepositoryStub(self.tables),
            decisions=DecisionRepositoryStub(self.tables),
            notifications=NotificationRepositoryStub(self.tables),
        )

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[CaseTransaction]:
        """Open a serialized transaction over all tables."""
        async with self._lock:
            self.transaction_count += 1
            snapshot = self.tables.snapshot()
            async with AtomicOperationContext(operation="case_transaction") as ctx:
                ctx.add_rollback(lambda: self.tables.restore(snapshot))
                ctx.add_rollback(self._count_rollback)
                yield self._transaction

    def _count_rollback(self) -> None:
        self.rollback_count += 1

    def clear(self) -> None:
        """Empty every table (for test cleanup)."""
        self.tables.clear()
        self.transaction_count = 0
        self.rollback_count = 0
