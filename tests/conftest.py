"""
Pytest configuration and shared fixtures for the case-lifecycle engine tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/ and need Docker
"""

import pytest

from src.application.services import (
    DecisionPublicationLedger,
    NotificationWorkflowService,
    ProtocolResourceConverter,
    SequenceAllocator,
    SessionLifecycleService,
)
from src.config.case_config import TEST_SEQUENCE_ALLOCATION_CONFIG
from src.infrastructure.stubs.case_store_stub import InMemoryCaseStore
from tests.helpers import FakeClock


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from src import __version__

    return __version__


@pytest.fixture
def store() -> InMemoryCaseStore:
    """Fresh in-memory case store."""
    return InMemoryCaseStore()


@pytest.fixture
def clock() -> FakeClock:
    """Clock frozen at 2025-03-01T12:00:00Z."""
    return FakeClock()


@pytest.fixture
def allocator(store: InMemoryCaseStore) -> SequenceAllocator:
    return SequenceAllocator(store, TEST_SEQUENCE_ALLOCATION_CONFIG)


@pytest.fixture
def converter(
    store: InMemoryCaseStore, allocator: SequenceAllocator, clock: FakeClock
) -> ProtocolResourceConverter:
    return ProtocolResourceConverter(store, allocator, now=clock)


@pytest.fixture
def session_service(store: InMemoryCaseStore) -> SessionLifecycleService:
    return SessionLifecycleService(store)


@pytest.fixture
def ledger(
    store: InMemoryCaseStore, allocator: SequenceAllocator, clock: FakeClock
) -> DecisionPublicationLedger:
    return DecisionPublicationLedger(store, allocator, now=clock)


@pytest.fixture
def notification_service(
    store: InMemoryCaseStore, allocator: SequenceAllocator, clock: FakeClock
) -> NotificationWorkflowService:
    return NotificationWorkflowService(store, allocator, now=clock)
