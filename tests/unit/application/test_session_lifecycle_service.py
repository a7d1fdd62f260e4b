"""Unit tests for SessionLifecycleService."""

from datetime import date
from uuid import uuid4

import pytest

from src.application.services.session_lifecycle_service import (
    SessionLifecycleService,
    VotingOrder,
    parse_adjudication_status,
)
from src.domain.errors import (
    DistributionNotFoundError,
    DuplicateDistributionError,
    DuplicateSessionNumberError,
    IncompleteMinutesError,
    InvalidAdjudicationStatusError,
    InvalidSessionInputError,
    InvalidSessionTransitionError,
    InvalidVotingOrderError,
    MissingAdjudicationDetailError,
    PendingSessionResourcesError,
    ResourceAlreadyOnAgendaError,
    ResourceNotFoundError,
    SessionNotFoundError,
    SessionNotOpenError,
    SessionResourceNotFoundError,
    VotingNotFoundError,
)
from src.domain.exceptions import ConflictError
from src.domain.models.resource import ResourceStatus
from src.domain.models.session import Session, SessionStatus
from src.infrastructure.stubs.case_store_stub import InMemoryCaseStore
from tests.helpers import seed_resource, seed_session, seed_session_resource


class TestCreateSession:
    """Tests for scheduling sessions."""

    @pytest.mark.asyncio
    async def test_creates_pending_session_with_year_from_number(
        self, session_service: SessionLifecycleService, store: InMemoryCaseStore
    ) -> None:
        session = await session_service.create_session("0003/2024", date(2025, 1, 15))

        assert session.status == SessionStatus.PENDENTE
        assert session.session_number == "0003/2024"
        assert session.year == 2024
        assert session.date == date(2025, 1, 15)
        assert store.tables.sessions[session.id] == session

    @pytest.mark.asyncio
    async def test_created_session_accepts_agenda(
        self, session_service: SessionLifecycleService, store: InMemoryCaseStore
    ) -> None:
        session = await session_service.create_session("0001/2025", date(2025, 3, 10))

        entry = await session_service.add_resource_to_session(
            session.id, seed_resource(store).id
        )

        assert entry.order == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("number", ["", "1/2025", "0001-2025", "0001/25", "0000/2025"])
    async def test_malformed_number_is_rejected(
        self,
        session_service: SessionLifecycleService,
        store: InMemoryCaseStore,
        number: str,
    ) -> None:
        with pytest.raises(InvalidSessionInputError):
            await session_service.create_session(number, date(2025, 3, 10))

        assert not store.tables.sessions

    @pytest.mark.asyncio
    async def test_duplicate_number_is_a_conflict(
        self, session_service: SessionLifecycleService, store: InMemoryCaseStore
    ) -> None:
        first = await session_service.create_session("0002/2025", date(2025, 3, 10))

        with pytest.raises(DuplicateSessionNumberError) as exc_info:
            await session_service.create_session(" 0002/2025 ", date(2025, 4, 10))

        assert isinstance(exc_info.value, ConflictError)
        assert exc_info.value.session_number == "0002/2025"
        assert list(store.tables.sessions) == [first.id]

    @pytest.mark.asyncio
    async def test_store_rejects_duplicate_number_on_save(
        self, store: InMemoryCaseStore
    ) -> None:
        seed_session(store, session_number="0004/2025")
        duplicate = Session(
            id=uuid4(), session_number="0004/2025", year=2025, date=date(2025, 5, 1)
        )

        with pytest.raises(DuplicateSessionNumberError):
            async with store.transaction() as tx:
                await tx.sessions.save(duplicate)

        assert duplicate.id not in store.tables.sessions


class TestCompleteSession:
    """Tests for closing sessions."""

    @pytest.mark.asyncio
    async def test_completes_when_every_resource_has_a_result(
        self, session_service: SessionLifecycleService, store: InMemoryCaseStore
    ) -> None:
        session = seed_session(store)
        for status in (ResourceStatus.JULGADO, ResourceStatus.DILIGENCIA):
            seed_session_resource(store, session.id, seed_resource(store).id, status=status)

        completed = await session_service.complete_session(session.id)

        assert completed.status == SessionStatus.CONCLUIDA
        assert store.tables.sessions[session.id].status == SessionStatus.CONCLUIDA

    @pytest.mark.asyncio
    async def test_empty_agenda_can_be_completed(
        self, session_service: SessionLifecycleService, store: InMemoryCaseStore
    ) -> None:
        session = seed_session(store)

        completed = await session_service.complete_session(session.id)

        assert completed.status == SessionStatus.CONCLUIDA

    @pytest.mark.asyncio
    async def test_reports_exact_pending_count(
        self, session_service: SessionLifecycleService, store: InMemoryCaseStore
    ) -> None:
        session = seed_session(store)
        seed_session_resource(store, session.id, seed_resource(store).id, ResourceStatus.JULGADO)
        seed_session_resource(store, session.id, seed_resource(store).id, ResourceStatus.EM_PAUTA)
        seed_session_resource(store, session.id, seed_resource(store).id, ResourceStatus.EM_PAUTA)

        with pytest.raises(PendingSessionResourcesError) as exc_info:
            await session_service.complete_session(session.id)

        assert exc_info.value.pending_count == 2
        assert exc_info.value.total_count == 3
        assert store.tables.sessions[session.id].status == SessionStatus.PENDENTE

    @pytest.mark.asyncio
    async def test_completing_twice_is_rejected(
        self, session_service: SessionLifecycleService, store: InMemoryCaseStore
    ) -> None:
        session = seed_session(store, status=SessionStatus.CONCLUIDA)

        with pytest.raises(InvalidSessionTransitionError):
            await session_service.complete_session(session.id)

    @pytest.mark.asyncio
    async def test_unknown_session(self, session_service: SessionLifecycleService) -> None:
        with pytest.raises(SessionNotFoundError):
            await session_service.complete_session(uuid4())


class TestRevertSession:
    @pytest.mark.asyncio
    async def test_reopens_completed_session(
        self, session_service: SessionLifecycleService, store: InMemoryCaseStore
    ) -> None:
        session = seed_session(store, status=SessionStatus.CONCLUIDA)

        reverted = await session_service.revert_session(session.id)

        assert reverted.status == SessionStatus.PENDENTE

    @pytest.mark.asyncio
    async def test_open_session_cannot_be_reverted(
        self, session_service: SessionLifecycleService, store: InMemoryCaseStore
    ) -> None:
        session = seed_session(store)

        with pytest.raises(InvalidSessionTransitionError):
            await session_service.revert_session(session.id)


class TestAgenda:
    """Tests for adding resources to the agenda."""

    @pytest.mark.asyncio
    async def test_appends_in_order_and_marks_resource(
        self, session_service: SessionLifecycleService, store: InMemoryCaseStore
    ) -> None:
        session = seed_session(store)
        first = seed_resource(store)
        second = seed_resource(store)

        await session_service.add_resource_to_session(session.id, first.id)
        entry = await session_service.add_resource_to_session(session.id, second.id)

        assert entry.order == 2
        assert entry.status == ResourceStatus.EM_PAUTA
        assert store.tables.resources[second.id].status == ResourceStatus.EM_PAUTA
        agenda = await session_service.get_agenda(session.id)
        assert [sr.resource_id for sr in agenda.resources] == [first.id, second.id]
        assert agenda.pending_count == 2

    @pytest.mark.asyncio
    async def test_duplicate_is_a_conflict(
        self, session_service: SessionLifecycleService, store: InMemoryCaseStore
    ) -> None:
        session = seed_session(store)
        resource = seed_resource(store)
        await session_service.add_resource_to_session(session.id, resource.id)

        with pytest.raises(ResourceAlreadyOnAgendaError):
            await session_service.add_resource_to_session(session.id, resource.id)

    @pytest.mark.asyncio
    async def test_closed_session_rejects_additions(
        self, session_service: SessionLifecycleService, store: InMemoryCaseStore
    ) -> None:
        session = seed_session(store, status=SessionStatus.CONCLUIDA)

        with pytest.raises(SessionNotOpenError):
            await session_service.add_resource_to_session(session.id, seed_resource(store).id)

    @pytest.mark.asyncio
    async def test_unknown_resource(
        self, session_service: SessionLifecycleService, store: InMemoryCaseStore
    ) -> None:
        session = seed_session(store)

        with pytest.raises(ResourceNotFoundError):
            await session_service.add_resource_to_session(session.id, uuid4())


class TestUpdateResourceStatus:
    """Tests for adjudication status updates."""

    @pytest.fixture
    def entry(self, store: InMemoryCaseStore):
        session = seed_session(store)
        resource = seed_resource(store, status=ResourceStatus.EM_PAUTA)
        return seed_session_resource(store, session.id, resource.id)

    @pytest.mark.asyncio
    async def test_resource_status_follows_entry(
        self, session_service: SessionLifecycleService, store: InMemoryCaseStore, entry
    ) -> None:
        updated = await session_service.update_resource_status(
            entry.session_id, entry.id, "JULGADO", minutes_text="Negado provimento."
        )

        assert updated.status == ResourceStatus.JULGADO
        assert updated.minutes_text == "Negado provimento."
        assert store.tables.resources[entry.resource_id].status == ResourceStatus.JULGADO

    @pytest.mark.asyncio
    async def test_diligence_requires_positive_deadline(
        self, session_service: SessionLifecycleService, entry
    ) -> None:
        with pytest.raises(MissingAdjudicationDetailError):
            await session_service.update_resource_status(
                entry.session_id, entry.id, "DILIGENCIA", diligence_days_deadline=0
            )

    @pytest.mark.asyncio
    async def test_diligence_keeps_deadline(
        self, session_service: SessionLifecycleService, entry
    ) -> None:
        updated = await session_service.update_resource_status(
            entry.session_id, entry.id, "DILIGENCIA", diligence_days_deadline=30
        )

        assert updated.diligence_days_deadline == 30
        assert updated.view_requested_by_id is None

    @pytest.mark.asyncio
    async def test_view_request_requires_member(
        self, session_service: SessionLifecycleService, entry
    ) -> None:
        with pytest.raises(MissingAdjudicationDetailError) as exc_info:
            await session_service.update_resource_status(entry.session_id, entry.id, "PEDIDO_VISTA")

        assert exc_info.value.field == "view_requested_by_id"

    @pytest.mark.asyncio
    async def test_unfilled_minutes_placeholder_is_rejected(
        self, session_service: SessionLifecycleService, store: InMemoryCaseStore, entry
    ) -> None:
        with pytest.raises(IncompleteMinutesError):
            await session_service.update_resource_status(
                entry.session_id, entry.id, "SUSPENSO", minutes_text="Suspenso até [DETALHAR]."
            )

        assert store.tables.session_resources[entry.id].status == ResourceStatus.EM_PAUTA

    @pytest.mark.asyncio
    async def test_in_analysis_cannot_be_assigned(
        self, session_service: SessionLifecycleService, entry
    ) -> None:
        with pytest.raises(InvalidAdjudicationStatusError):
            await session_service.update_resource_status(entry.session_id, entry.id, "EM_ANALISE")

    @pytest.mark.asyncio
    async def test_entry_from_another_session(
        self, session_service: SessionLifecycleService, store: InMemoryCaseStore, entry
    ) -> None:
        other = seed_session(store, session_number="002")

        with pytest.raises(SessionResourceNotFoundError):
            await session_service.update_resource_status(other.id, entry.id, "JULGADO")


class TestVotings:
    """Tests for recording and reordering votings."""

    @pytest.fixture
    def entry(self, store: InMemoryCaseStore):
        session = seed_session(store)
        return seed_session_resource(store, session.id, seed_resource(store).id)

    @pytest.mark.asyncio
    async def test_votings_are_numbered_in_sequence(
        self, session_service: SessionLifecycleService, entry
    ) -> None:
        first = await session_service.record_voting(entry.session_id, entry.id, "Preliminar")
        second = await session_service.record_voting(entry.session_id, entry.id, "  Mérito ")

        assert (first.order, second.order) == (1, 2)
        assert second.label == "Mérito"

    @pytest.mark.asyncio
    async def test_blank_label_is_rejected(
        self, session_service: SessionLifecycleService, entry
    ) -> None:
        with pytest.raises(InvalidVotingOrderError):
            await session_service.record_voting(entry.session_id, entry.id, "   ")

    @pytest.mark.asyncio
    async def test_reorder_applies_every_position(
        self, session_service: SessionLifecycleService, entry
    ) -> None:
        first = await session_service.record_voting(entry.session_id, entry.id, "Preliminar")
        second = await session_service.record_voting(entry.session_id, entry.id, "Mérito")

        reordered = await session_service.reorder_votings(
            entry.session_id,
            entry.id,
            [VotingOrder(first.id, 2), VotingOrder(second.id, 1)],
        )

        assert [v.id for v in reordered] == [second.id, first.id]
        listed = await session_service.list_votings(entry.session_id, entry.id)
        assert [v.order for v in listed] == [1, 2]

    @pytest.mark.asyncio
    async def test_unknown_voting_changes_nothing(
        self, session_service: SessionLifecycleService, store: InMemoryCaseStore, entry
    ) -> None:
        first = await session_service.record_voting(entry.session_id, entry.id, "Preliminar")
        missing = uuid4()

        with pytest.raises(VotingNotFoundError) as exc_info:
            await session_service.reorder_votings(
                entry.session_id,
                entry.id,
                [VotingOrder(first.id, 5), VotingOrder(missing, 1)],
            )

        assert exc_info.value.voting_ids == [missing]
        assert store.tables.session_results[first.id].order == 1

    @pytest.mark.asyncio
    async def test_empty_batch_is_rejected(
        self, session_service: SessionLifecycleService, entry
    ) -> None:
        with pytest.raises(InvalidVotingOrderError):
            await session_service.reorder_votings(entry.session_id, entry.id, [])

    @pytest.mark.asyncio
    async def test_repeated_voting_is_rejected(
        self, session_service: SessionLifecycleService, entry
    ) -> None:
        voting = await session_service.record_voting(entry.session_id, entry.id, "Preliminar")

        with pytest.raises(InvalidVotingOrderError):
            await session_service.reorder_votings(
                entry.session_id,
                entry.id,
                [VotingOrder(voting.id, 1), VotingOrder(voting.id, 2)],
            )


class TestDistribution:
    @pytest.mark.asyncio
    async def test_distribute_once_per_session(
        self, session_service: SessionLifecycleService, store: InMemoryCaseStore
    ) -> None:
        session = seed_session(store)
        resource = seed_resource(store)
        member = uuid4()

        record = await session_service.distribute_resource(session.id, resource.id, member)

        assert record.distributed_to_id == member
        with pytest.raises(DuplicateDistributionError):
            await session_service.distribute_resource(session.id, resource.id, uuid4())

    @pytest.mark.asyncio
    async def test_remove_distribution(
        self, session_service: SessionLifecycleService, store: InMemoryCaseStore
    ) -> None:
        session = seed_session(store)
        record = await session_service.distribute_resource(
            session.id, seed_resource(store).id, uuid4()
        )

        await session_service.remove_distribution(record.id)

        assert record.id not in store.tables.distributions
        with pytest.raises(DistributionNotFoundError):
            await session_service.remove_distribution(record.id)

    @pytest.mark.asyncio
    async def test_unknown_target_session(
        self, session_service: SessionLifecycleService, store: InMemoryCaseStore
    ) -> None:
        session = seed_session(store)

        with pytest.raises(SessionNotFoundError):
            await session_service.distribute_resource(
                session.id, seed_resource(store).id, uuid4(), target_session_id=uuid4()
            )


class TestParseAdjudicationStatus:
    @pytest.mark.parametrize("value", ["EM_ANALISE", "ARQUIVADO", None, 1])
    def test_rejects(self, value: object) -> None:
        with pytest.raises(InvalidAdjudicationStatusError):
            parse_adjudication_status(value)

    def test_allowed_list_excludes_in_analysis(self) -> None:
        with pytest.raises(InvalidAdjudicationStatusError) as exc_info:
            parse_adjudication_status("EM_ANALISE")
        assert "EM_ANALISE" not in exc_info.value.allowed
