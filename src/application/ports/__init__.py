"""Application ports - Abstract interfaces for infrastructure adapters.

Available ports:
- CaseStoreProtocol / CaseTransaction: transactional unit of work
- Repository protocols for sequences, protocols, resources, sessions,
  decisions and notifications
- CapabilityCheckerProtocol: role-based capability predicate
"""

from src.application.ports.capability_checker import (
    Actor,
    ActorRole,
    CapabilityCheckerProtocol,
    CaseAction,
)
from src.application.ports.case_store import CaseStoreProtocol, CaseTransaction
from src.application.ports.decision_repository import DecisionRepositoryProtocol
from src.application.ports.notification_repository import (
    NotificationRepositoryProtocol,
)
from src.application.ports.protocol_repository import ProtocolRepositoryProtocol
from src.application.ports.resource_repository import ResourceRepositoryProtocol
from src.application.ports.sequence_repository import SequenceRepositoryProtocol
from src.application.ports.session_repository import SessionRepositoryProtocol

__all__: list[str] = [
    "Actor",
    "ActorRole",
    "CapabilityCheckerProtocol",
    "CaseAction",
    "CaseStoreProtocol",
    "CaseTransaction",
    "DecisionRepositoryProtocol",
    "NotificationRepositoryProtocol",
    "ProtocolRepositoryProtocol",
    "ResourceRepositoryProtocol",
    "SequenceRepositoryProtocol",
    "SessionRepositoryProtocol",
]
