"""Case store and service wiring.

Selects the store backend from ``CaseStoreConfig`` and builds the
lifecycle services on top of it. Everything is a process-wide singleton;
``reset_case_engine`` clears them for tests.
"""

from __future__ import annotations

from structlog import get_logger

from src.application.ports.capability_checker import CapabilityCheckerProtocol
from src.application.ports.case_store import CaseStoreProtocol
from src.application.services import (
    DecisionPublicationLedger,
    NotificationWorkflowService,
    ProtocolResourceConverter,
    SequenceAllocator,
    SessionLifecycleService,
)
from src.bootstrap.database import get_session_factory
from src.config.case_config import (
    CaseStoreConfig,
    SequenceAllocationConfig,
    StoreBackend,
)
from src.infrastructure.adapters.auth import RoleCapabilityChecker
from src.infrastructure.adapters.persistence import PostgresCaseStore
from src.infrastructure.stubs.case_store_stub import InMemoryCaseStore

logger = get_logger()

_case_store: CaseStoreProtocol | None = None
_allocator: SequenceAllocator | None = None
_capability_checker: CapabilityCheckerProtocol | None = None
_converter: ProtocolResourceConverter | None = None
_session_service: SessionLifecycleService | None = None
_decision_ledger: DecisionPublicationLedger | None = None
_notification_service: NotificationWorkflowService | None = None


def build_case_store(config: CaseStoreConfig) -> CaseStoreProtocol:
    """Create the store named by ``config.backend``."""
    if config.backend == StoreBackend.POSTGRES:
        store: CaseStoreProtocol = PostgresCaseStore(get_session_factory(config))
    else:
        store = InMemoryCaseStore()
    logger.info("case_store_created", backend=config.backend.value)
    return store


def get_case_store() -> CaseStoreProtocol:
    """Get the case store singleton, built from the environment."""
    global _case_store
    if _case_store is None:
        _case_store = build_case_store(CaseStoreConfig.from_environment())
    return _case_store


def set_case_store(store: CaseStoreProtocol) -> None:
    """Install a store and drop services bound to the previous one."""
    reset_case_engine()
    global _case_store
    _case_store = store


def get_sequence_allocator() -> SequenceAllocator:
    global _allocator
    if _allocator is None:
        _allocator = SequenceAllocator(
            get_case_store(), SequenceAllocationConfig.from_environment()
        )
    return _allocator


def get_capability_checker() -> CapabilityCheckerProtocol:
    global _capability_checker
    if _capability_checker is None:
        _capability_checker = RoleCapabilityChecker()
    return _capability_checker


def get_protocol_resource_converter() -> ProtocolResourceConverter:
    global _converter
    if _converter is None:
        _converter = ProtocolResourceConverter(get_case_store(), get_sequence_allocator())
    return _converter


def get_session_lifecycle_service() -> SessionLifecycleService:
    global _session_service
    if _session_service is None:
        _session_service = SessionLifecycleService(get_case_store())
    return _session_service


def get_decision_publication_ledger() -> DecisionPublicationLedger:
    global _decision_ledger
    if _decision_ledger is None:
        _decision_ledger = DecisionPublicationLedger(
            get_case_store(), get_sequence_allocator()
        )
    return _decision_ledger


def get_notification_workflow_service() -> NotificationWorkflowService:
    global _notification_service
    if _notification_service is None:
        _notification_service = NotificationWorkflowService(
            get_case_store(), get_sequence_allocator()
        )
    return _notification_service


def reset_case_engine() -> None:
    """Reset all singletons for testing."""
    global _case_store, _allocator, _capability_checker
    global _converter, _session_service, _decision_ledger, _notification_service
    _case_store = None
    _allocator = None
    _capability_checker = None
    _converter = None
    _session_service = None
    _decision_ledger = None
    _notification_service = None
