"""Case store port: one atomic unit of work across all repositories.

Every core operation runs inside exactly one ``transaction()``. Inside it
the repositories share a single isolation scope; leaving the block
normally commits, leaving it with an exception rolls every write back.

Usage:
    async with store.transaction() as tx:
        protocol = await tx.protocols.get(protocol_id)
        await tx.resources.save(resource)
        await tx.protocols.update(protocol.concluded())
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import Protocol

from src.application.ports.decision_repository import DecisionRepositoryProtocol
from src.application.ports.notification_repository import (
    NotificationRepositoryProtocol,
)
from src.application.ports.protocol_repository import ProtocolRepositoryProtocol
from src.application.ports.resource_repository import ResourceRepositoryProtocol
from src.application.ports.sequence_repository import SequenceRepositoryProtocol
from src.application.ports.session_repository import SessionRepositoryProtocol


@dataclass(frozen=True)
class CaseTransaction:
    """Repositories bound to one open transaction."""

    sequences: SequenceRepositoryProtocol
    protocols: ProtocolRepositoryProtocol
    resources: ResourceRepositoryProtocol
    sessions: SessionRepositoryProtocol
    decisions: DecisionRepositoryProtocol
    notifications: NotificationRepositoryProtocol


class CaseStoreProtocol(Protocol):
    """The single shared mutable resource of the engine.

    Implementations must give each transaction serializable behaviour, or
    back every multi-step invariant with a unique constraint whose
    violation surfaces as a domain ConflictError.
    """

    def transaction(self) -> AbstractAsyncContextManager[CaseTransaction]:
        """Open a transaction.

        Returns:
            Async context manager yielding the bound repositories.
        """
        ...
