"""In-memory case store for development and testing.

Available stubs:
- InMemoryCaseStore: Lock-serialized store with snapshot rollback
- CaseTables: The dictionaries the repository stubs share
- *RepositoryStub: Repository ports over CaseTables, enforcing the same
  unique keys as the PostgreSQL schema

WARNING: These stubs are NOT for production use.
Production implementations are in src/infrastructure/adapters/.
"""

from src.infrastructure.stubs.case_store_stub import InMemoryCaseStore
from src.infrastructure.stubs.case_tables import CaseTables
from src.infrastructure.stubs.decision_repository_stub import DecisionRepositoryStub
from src.infrastructure.stubs.notification_repository_stub import (
    NotificationRepositoryStub,
)
from src.infrastructure.stubs.protocol_repository_stub import ProtocolRepositoryStub
from src.infrastructure.stubs.resource_repository_stub import ResourceRepositoryStub
from src.infrastructure.stubs.sequence_repository_stub import SequenceRepositoryStub
from src.infrastructure.stubs.session_repository_stub import SessionRepositoryStub

__all__: list[str] = [
    "CaseTables",
    "DecisionRepositoryStub",
    "InMemoryCaseStore",
    "NotificationRepositoryStub",
    "ProtocolRepositoryStub",
    "ResourceRepositoryStub",
    "SequenceRepositoryStub",
    "SessionRepositoryStub",
]
