"""Unit tests for NotificationWorkflowService."""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from src.application.services.notification_workflow_service import (
    NotificationWorkflowService,
)
from src.domain.errors import (
    AttemptAlreadyConfirmedError,
    AttemptExpiredError,
    AttemptNotPendingError,
    ConfirmedAttemptDeletionError,
    InvalidNotificationInputError,
    NotificationAttemptNotFoundError,
    NotificationItemNotFoundError,
    NotificationListFinalizedError,
    NotificationListNotEmptyError,
    NotificationListNotFoundError,
    ResourceAlreadyInListError,
    ResourceNotFoundError,
)
from src.domain.models.notification import (
    AttemptChannel,
    AttemptStatus,
    NotificationListStatus,
    NotificationListType,
)
from src.infrastructure.stubs.case_store_stub import InMemoryCaseStore
from tests.helpers import FakeClock, seed_resource


class TestLists:
    """Tests for list lifecycle."""

    @pytest.mark.asyncio
    async def test_lists_are_numbered_per_year(
        self, notification_service: NotificationWorkflowService
    ) -> None:
        first = await notification_service.create_list("SESSAO", created_by="clerk-1")
        second = await notification_service.create_list(NotificationListType.DECISAO)

        assert first.list_number == "001/2025"
        assert second.list_number == "002/2025"
        assert first.status == NotificationListStatus.PENDENTE
        assert first.created_by == "clerk-1"

    @pytest.mark.asyncio
    async def test_unknown_type(self, notification_service: NotificationWorkflowService) -> None:
        with pytest.raises(InvalidNotificationInputError):
            await notification_service.create_list("URGENTE")

    @pytest.mark.asyncio
    async def test_finalize_twice(
        self, notification_service: NotificationWorkflowService
    ) -> None:
        created = await notification_service.create_list("OUTRO")

        finalized = await notification_service.finalize_list(created.id)

        assert finalized.status == NotificationListStatus.FINALIZADA
        with pytest.raises(NotificationListFinalizedError):
            await notification_service.finalize_list(created.id)

    @pytest.mark.asyncio
    async def test_delete_empty_list(
        self, notification_service: NotificationWorkflowService, store: InMemoryCaseStore
    ) -> None:
        created = await notification_service.create_list("OUTRO")

        await notification_service.delete_list(created.id)

        assert created.id not in store.tables.notification_lists
        with pytest.raises(NotificationListNotFoundError):
            await notification_service.get_list(created.id)

    @pytest.mark.asyncio
    async def test_list_with_items_cannot_be_deleted(
        self, notification_service: NotificationWorkflowService, store: InMemoryCaseStore
    ) -> None:
        created = await notification_service.create_list("OUTRO")
        await notification_service.add_item(created.id, seed_resource(store).id)

        with pytest.raises(NotificationListNotEmptyError) as exc_info:
            await notification_service.delete_list(created.id)

        assert exc_info.value.item_count == 1


class TestItems:
    """Tests for list items."""

    @pytest.mark.asyncio
    async def test_add_and_view(
        self, notification_service: NotificationWorkflowService, store: InMemoryCaseStore
    ) -> None:
        created = await notification_service.create_list("SESSAO")
        resource = seed_resource(store)

        item = await notification_service.add_item(created.id, resource.id, "Parte revel")
        view = await notification_service.get_list(created.id)

        assert [i.item.id for i in view.items] == [item.id]
        assert view.items[0].item.observations == "Parte revel"
        assert view.items[0].attempts == []

    @pytest.mark.asyncio
    async def test_resource_listed_once(
        self, notification_service: NotificationWorkflowService, store: InMemoryCaseStore
    ) -> None:
        created = await notification_service.create_list("SESSAO")
        resource = seed_resource(store)
        await notification_service.add_item(created.id, resource.id)

        with pytest.raises(ResourceAlreadyInListError):
            await notification_service.add_item(created.id, resource.id)

    @pytest.mark.asyncio
    async def test_finalized_list_rejects_items(
        self, notification_service: NotificationWorkflowService, store: InMemoryCaseStore
    ) -> None:
        created = await notification_service.create_list("SESSAO")
        await notification_service.finalize_list(created.id)

        with pytest.raises(NotificationListFinalizedError):
            await notification_service.add_item(created.id, seed_resource(store).id)

    @pytest.mark.asyncio
    async def test_unknown_resource(
        self, notification_service: NotificationWorkflowService
    ) -> None:
        created = await notification_service.create_list("SESSAO")

        with pytest.raises(ResourceNotFoundError):
            await notification_service.add_item(created.id, uuid4())

    @pytest.mark.asyncio
    async def test_remove_item_drops_its_attempts(
        self, notification_service: NotificationWorkflowService, store: InMemoryCaseStore
    ) -> None:
        created = await notification_service.create_list("SESSAO")
        item = await notification_service.add_item(created.id, seed_resource(store).id)
        await notification_service.add_attempt(created.id, item.id, "EDITAL")

        await notification_service.remove_item(created.id, item.id)

        assert item.id not in store.tables.notification_items
        assert not store.tables.notification_attempts

    @pytest.mark.asyncio
    async def test_item_with_confirmed_attempt_cannot_be_removed(
        self, notification_service: NotificationWorkflowService, store: InMemoryCaseStore
    ) -> None:
        created = await notification_service.create_list("SESSAO")
        item = await notification_service.add_item(created.id, seed_resource(store).id)
        attempt = await notification_service.add_attempt(created.id, item.id, "SETOR")
        await notification_service.confirm_attempt(created.id, item.id, attempt.id, "clerk-1")

        with pytest.raises(ConfirmedAttemptDeletionError):
            await notification_service.remove_item(created.id, item.id)

    @pytest.mark.asyncio
    async def test_item_from_another_list(
        self, notification_service: NotificationWorkflowService, store: InMemoryCaseStore
    ) -> None:
        first = await notification_service.create_list("SESSAO")
        second = await notification_service.create_list("SESSAO")
        item = await notification_service.add_item(first.id, seed_resource(store).id)

        with pytest.raises(NotificationItemNotFoundError):
            await notification_service.remove_item(second.id, item.id)


class TestAttempts:
    """Tests for delivery attempts."""

    @pytest.fixture
    async def listed_item(
        self, notification_service: NotificationWorkflowService, store: InMemoryCaseStore
    ):
        created = await notification_service.create_list("DECISAO")
        item = await notification_service.add_item(created.id, seed_resource(store).id)
        return created.id, item.id

    @pytest.mark.asyncio
    async def test_attempts_are_numbered(
        self, notification_service: NotificationWorkflowService, listed_item
    ) -> None:
        list_id, item_id = listed_item

        first = await notification_service.add_attempt(
            list_id, item_id, "EMAIL", sent_to=" parte@example.com "
        )
        second = await notification_service.add_attempt(list_id, item_id, "CORREIOS", sent_to="Rua A, 1")

        assert (first.attempt_number, second.attempt_number) == (1, 2)
        assert first.sent_to == "parte@example.com"
        assert first.channel == AttemptChannel.EMAIL
        assert first.status == AttemptStatus.PENDENTE

    @pytest.mark.asyncio
    async def test_email_requires_destination(
        self, notification_service: NotificationWorkflowService, listed_item
    ) -> None:
        list_id, item_id = listed_item

        with pytest.raises(InvalidNotificationInputError):
            await notification_service.add_attempt(list_id, item_id, "EMAIL")

    @pytest.mark.asyncio
    async def test_unknown_channel(
        self, notification_service: NotificationWorkflowService, listed_item
    ) -> None:
        list_id, item_id = listed_item

        with pytest.raises(InvalidNotificationInputError):
            await notification_service.add_attempt(list_id, item_id, "FAX")

    @pytest.mark.asyncio
    async def test_naive_deadline_is_rejected(
        self,
        notification_service: NotificationWorkflowService,
        store: InMemoryCaseStore,
        listed_item,
    ) -> None:
        list_id, item_id = listed_item

        with pytest.raises(InvalidNotificationInputError, match="timezone"):
            await notification_service.add_attempt(
                list_id, item_id, "EDITAL", deadline=datetime(2020, 1, 1)
            )

        assert not store.tables.notification_attempts
        assert await notification_service.expire_overdue_attempts() == 0

    @pytest.mark.asyncio
    async def test_expire_overdue_rejects_naive_reference(
        self, notification_service: NotificationWorkflowService
    ) -> None:
        with pytest.raises(InvalidNotificationInputError, match="timezone"):
            await notification_service.expire_overdue_attempts(now=datetime(2025, 3, 1))

    @pytest.mark.asyncio
    async def test_confirm_records_actor_and_time(
        self,
        notification_service: NotificationWorkflowService,
        listed_item,
        clock: FakeClock,
    ) -> None:
        list_id, item_id = listed_item
        attempt = await notification_service.add_attempt(list_id, item_id, "PESSOALMENTE")

        confirmed = await notification_service.confirm_attempt(
            list_id, item_id, attempt.id, "clerk-2"
        )

        assert confirmed.status == AttemptStatus.CONFIRMADO
        assert confirmed.confirmed_by == "clerk-2"
        assert confirmed.confirmed_at == clock()

    @pytest.mark.asyncio
    async def test_confirm_twice(
        self, notification_service: NotificationWorkflowService, listed_item
    ) -> None:
        list_id, item_id = listed_item
        attempt = await notification_service.add_attempt(list_id, item_id, "SETOR")
        await notification_service.confirm_attempt(list_id, item_id, attempt.id, "clerk-1")

        with pytest.raises(AttemptAlreadyConfirmedError):
            await notification_service.confirm_attempt(list_id, item_id, attempt.id, "clerk-1")

    @pytest.mark.asyncio
    async def test_expired_attempt_cannot_be_confirmed(
        self, notification_service: NotificationWorkflowService, listed_item
    ) -> None:
        list_id, item_id = listed_item
        attempt = await notification_service.add_attempt(list_id, item_id, "SETOR")
        await notification_service.expire_attempt(attempt.id)

        with pytest.raises(AttemptExpiredError, match="Cannot confirm an expired attempt"):
            await notification_service.confirm_attempt(list_id, item_id, attempt.id, "clerk-1")

    @pytest.mark.asyncio
    async def test_confirmed_attempt_never_expires(
        self, notification_service: NotificationWorkflowService, listed_item
    ) -> None:
        list_id, item_id = listed_item
        attempt = await notification_service.add_attempt(list_id, item_id, "SETOR")
        await notification_service.confirm_attempt(list_id, item_id, attempt.id, "clerk-1")

        with pytest.raises(AttemptNotPendingError):
            await notification_service.expire_attempt(attempt.id)

    @pytest.mark.asyncio
    async def test_confirmed_attempt_cannot_be_deleted(
        self, notification_service: NotificationWorkflowService, listed_item
    ) -> None:
        list_id, item_id = listed_item
        attempt = await notification_service.add_attempt(list_id, item_id, "SETOR")
        await notification_service.confirm_attempt(list_id, item_id, attempt.id, "clerk-1")

        with pytest.raises(ConfirmedAttemptDeletionError):
            await notification_service.delete_attempt(list_id, item_id, attempt.id)

    @pytest.mark.asyncio
    async def test_delete_pending_attempt(
        self,
        notification_service: NotificationWorkflowService,
        store: InMemoryCaseStore,
        listed_item,
    ) -> None:
        list_id, item_id = listed_item
        attempt = await notification_service.add_attempt(list_id, item_id, "EDITAL")

        await notification_service.delete_attempt(list_id, item_id, attempt.id)

        assert attempt.id not in store.tables.notification_attempts

    @pytest.mark.asyncio
    async def test_attempt_under_another_item(
        self,
        notification_service: NotificationWorkflowService,
        store: InMemoryCaseStore,
        listed_item,
    ) -> None:
        list_id, item_id = listed_item
        other = await notification_service.add_item(list_id, seed_resource(store).id)
        attempt = await notification_service.add_attempt(list_id, item_id, "EDITAL")

        with pytest.raises(NotificationAttemptNotFoundError):
            await notification_service.confirm_attempt(list_id, other.id, attempt.id, "clerk-1")

    @pytest.mark.asyncio
    async def test_expire_overdue_attempts(
        self,
        notification_service: NotificationWorkflowService,
        store: InMemoryCaseStore,
        listed_item,
        clock: FakeClock,
    ) -> None:
        list_id, item_id = listed_item
        overdue = await notification_service.add_attempt(
            list_id, item_id, "EDITAL", deadline=clock() - timedelta(days=1)
        )
        confirmed = await notification_service.add_attempt(
            list_id, item_id, "SETOR", deadline=clock() - timedelta(days=1)
        )
        await notification_service.confirm_attempt(list_id, item_id, confirmed.id, "clerk-1")
        future = await notification_service.add_attempt(
            list_id, item_id, "EDITAL", deadline=clock() + timedelta(days=5)
        )
        await notification_service.add_attempt(list_id, item_id, "EXTERNO")

        expired_count = await notification_service.expire_overdue_attempts()

        assert expired_count == 1
        attempts = store.tables.notification_attempts
        assert attempts[overdue.id].status == AttemptStatus.EXPIRADO
        assert attempts[confirmed.id].status == AttemptStatus.CONFIRMADO
        assert attempts[future.id].status == AttemptStatus.PENDENTE

        clock.advance(days=10)
        assert await notification_service.expire_overdue_attempts() == 1

    @pytest.mark.asyncio
    async def test_finalized_list_freezes_attempts(
        self, notification_service: NotificationWorkflowService, listed_item
    ) -> None:
        list_id, item_id = listed_item
        attempt = await notification_service.add_attempt(list_id, item_id, "EDITAL")
        await notification_service.finalize_list(list_id)

        with pytest.raises(NotificationListFinalizedError):
            await notification_service.add_attempt(list_id, item_id, "EDITAL")
        with pytest.raises(NotificationListFinalizedError):
            await notification_service.delete_attempt(list_id, item_id, attempt.id)

        confirmed = await notification_service.confirm_attempt(
            list_id, item_id, attempt.id, "clerk-1"
        )
        assert confirmed.status == AttemptStatus.CONFIRMADO
