"""Unit tests for InMemoryCaseStore transactions and stub unique keys."""

from uuid import uuid4

import pytest

from src.domain.errors import (
    DecisionAlreadyExistsError,
    DuplicateDistributionError,
    ResourceAlreadyInListError,
    SequenceConflictError,
)
from src.domain.models.decision import Decision
from src.domain.models.notification import NotificationItem, NotificationList, NotificationListType
from src.domain.models.resource import Resource, ResourceStatus, ResourceType
from src.domain.models.session import SessionDistributionRecord
from src.infrastructure.stubs.case_store_stub import InMemoryCaseStore
from tests.helpers import seed_decision, seed_resource, seed_session


class TestTransactions:
    """Tests for snapshot and rollback."""

    @pytest.mark.asyncio
    async def test_commit_keeps_writes(self, store: InMemoryCaseStore) -> None:
        protocol_id = uuid4()
        resource = Resource(
            id=uuid4(),
            protocol_id=protocol_id,
            process_number="P-1",
            sequence_number=1,
            year=2025,
            type=ResourceType.OFICIO,
        )

        async with store.transaction() as tx:
            await tx.resources.save(resource)

        assert store.tables.resources[resource.id] == resource
        assert store.transaction_count == 1
        assert store.rollback_count == 0

    @pytest.mark.asyncio
    async def test_failure_restores_every_table(self, store: InMemoryCaseStore) -> None:
        existing = seed_resource(store)
        notification_list = NotificationList(
            id=uuid4(), sequence_number=1, year=2025, type=NotificationListType.OUTRO
        )

        with pytest.raises(RuntimeError):
            async with store.transaction() as tx:
                await tx.notifications.save_list(notification_list)
                await tx.resources.update(existing.with_status(ResourceStatus.JULGADO))
                raise RuntimeError("boom")

        assert store.tables.resources == {existing.id: existing}
        assert not store.tables.notification_lists
        assert store.rollback_count == 1

    @pytest.mark.asyncio
    async def test_clear(self, store: InMemoryCaseStore) -> None:
        seed_resource(store)
        async with store.transaction():
            pass

        store.clear()

        assert not store.tables.resources
        assert not store.tables.protocols
        assert store.transaction_count == 0


class TestUniqueKeys:
    """The stubs enforce the same unique keys as the database schema."""

    @pytest.mark.asyncio
    async def test_resource_number_collision(self, store: InMemoryCaseStore) -> None:
        taken = seed_resource(store, sequence_number=1)
        clash = Resource(
            id=uuid4(),
            protocol_id=uuid4(),
            process_number="P-2",
            sequence_number=taken.sequence_number,
            year=taken.year,
            type=ResourceType.VOLUNTARIO,
        )

        with pytest.raises(SequenceConflictError):
            async with store.transaction() as tx:
                await tx.resources.save(clash)

    @pytest.mark.asyncio
    async def test_one_decision_per_resource(self, store: InMemoryCaseStore) -> None:
        resource = seed_resource(store)
        seed_decision(store, resource.id, sequence_number=1)
        second = Decision(
            id=uuid4(),
            resource_id=resource.id,
            sequence_number=2,
            year=2025,
            ementa_title="t",
            ementa_body="b",
        )

        with pytest.raises(DecisionAlreadyExistsError):
            async with store.transaction() as tx:
                await tx.decisions.save(second)

    @pytest.mark.asyncio
    async def test_distribution_once_per_session(self, store: InMemoryCaseStore) -> None:
        session = seed_session(store)
        resource = seed_resource(store)

        def _record() -> SessionDistributionRecord:
            return SessionDistributionRecord(
                id=uuid4(),
                session_id=session.id,
                resource_id=resource.id,
                distributed_to_id=uuid4(),
            )

        async with store.transaction() as tx:
            await tx.sessions.add_distribution(_record())
        with pytest.raises(DuplicateDistributionError):
            async with store.transaction() as tx:
                await tx.sessions.add_distribution(_record())

    @pytest.mark.asyncio
    async def test_resource_once_per_list(self, store: InMemoryCaseStore) -> None:
        resource = seed_resource(store)
        notification_list = NotificationList(
            id=uuid4(), sequence_number=1, year=2025, type=NotificationListType.SESSAO
        )
        async with store.transaction() as tx:
            await tx.notifications.save_list(notification_list)
            await tx.notifications.save_item(
                NotificationItem(id=uuid4(), list_id=notification_list.id, resource_id=resource.id)
            )

        with pytest.raises(ResourceAlreadyInListError):
            async with store.transaction() as tx:
                await tx.notifications.save_item(
                    NotificationItem(
                        id=uuid4(), list_id=notification_list.id, resource_id=resource.id
                    )
                )
