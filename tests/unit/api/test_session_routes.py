"""Tests for the /v1/sessions routes."""

from uuid import uuid4

from fastapi.testclient import TestClient

from src.domain.models.resource import ResourceStatus
from src.domain.models.session import SessionStatus
from src.infrastructure.stubs.case_store_stub import InMemoryCaseStore
from tests.helpers import seed_resource, seed_session, seed_session_resource
from tests.helpers.actors import ADMIN_HEADERS, EMPLOYEE_HEADERS, EXTERNAL_HEADERS


class TestSessionState:
    """Completing and reverting sessions."""

    def test_complete_with_pending_resources(
        self, client: TestClient, api_store: InMemoryCaseStore
    ) -> None:
        session = seed_session(api_store)
        seed_session_resource(api_store, session.id, seed_resource(api_store).id)

        response = client.post(f"/v1/sessions/{session.id}/complete", headers=EMPLOYEE_HEADERS)

        body = response.json()
        assert response.status_code == 400
        assert body["type"] == "urn:case-engine:error:pending-session-resources"
        assert body["pending_count"] == 1
        assert body["total_count"] == 1

    def test_complete_then_revert(self, client: TestClient, api_store: InMemoryCaseStore) -> None:
        session = seed_session(api_store)
        seed_session_resource(
            api_store, session.id, seed_resource(api_store).id, status=ResourceStatus.JULGADO
        )

        completed = client.post(f"/v1/sessions/{session.id}/complete", headers=EMPLOYEE_HEADERS)
        reverted = client.post(f"/v1/sessions/{session.id}/revert", headers=ADMIN_HEADERS)

        assert completed.status_code == 200
        assert completed.json()["status"] == "CONCLUIDA"
        assert reverted.status_code == 200
        assert reverted.json()["status"] == "PENDENTE"

    def test_employee_cannot_revert(
        self, client: TestClient, api_store: InMemoryCaseStore
    ) -> None:
        session = seed_session(api_store, status=SessionStatus.CONCLUIDA)

        response = client.post(f"/v1/sessions/{session.id}/revert", headers=EMPLOYEE_HEADERS)

        assert response.status_code == 403
        assert api_store.tables.sessions[session.id].status == SessionStatus.CONCLUIDA

    def test_unknown_session(self, client: TestClient) -> None:
        response = client.post(f"/v1/sessions/{uuid4()}/complete", headers=EMPLOYEE_HEADERS)

        assert response.status_code == 404


class TestAgendaRoutes:
    def test_add_resource_and_read_agenda(
        self, client: TestClient, api_store: InMemoryCaseStore
    ) -> None:
        session = seed_session(api_store)
        resource = seed_resource(api_store)

        added = client.post(
            f"/v1/sessions/{session.id}/resources",
            json={"resource_id": str(resource.id)},
            headers=EMPLOYEE_HEADERS,
        )
        agenda = client.get(f"/v1/sessions/{session.id}", headers=EMPLOYEE_HEADERS)

        assert added.status_code == 200
        assert added.json()["order"] == 1
        body = agenda.json()
        assert body["pending_count"] == 1
        assert [r["resource_id"] for r in body["resources"]] == [str(resource.id)]

    def test_set_diligence_status(
        self, client: TestClient, api_store: InMemoryCaseStore
    ) -> None:
        session = seed_session(api_store)
        entry = seed_session_resource(api_store, session.id, seed_resource(api_store).id)

        response = client.put(
            f"/v1/sessions/{session.id}/resources/{entry.id}/status",
            json={"status": "DILIGENCIA", "diligence_days_deadline": 15},
            headers=EMPLOYEE_HEADERS,
        )

        assert response.status_code == 200
        assert response.json()["diligence_days_deadline"] == 15
        assert api_store.tables.resources[entry.resource_id].status == ResourceStatus.DILIGENCIA

    def test_in_analysis_status_is_rejected(
        self, client: TestClient, api_store: InMemoryCaseStore
    ) -> None:
        session = seed_session(api_store)
        entry = seed_session_resource(api_store, session.id, seed_resource(api_store).id)

        response = client.put(
            f"/v1/sessions/{session.id}/resources/{entry.id}/status",
            json={"status": "EM_ANALISE"},
            headers=EMPLOYEE_HEADERS,
        )

        assert response.status_code == 400
        assert response.json()["type"] == "urn:case-engine:error:invalid-adjudication-status"


class TestVotingRoutes:
    def test_record_list_and_reorder(
        self, client: TestClient, api_store: InMemoryCaseStore
    ) -> None:
        session = seed_session(api_store)
        entry = seed_session_resource(api_store, session.id, seed_resource(api_store).id)
        base = f"/v1/sessions/{session.id}/resources/{entry.id}/votings"

        first = client.post(base, json={"label": "Preliminar"}, headers=EMPLOYEE_HEADERS).json()
        second = client.post(base, json={"label": "Mérito"}, headers=EMPLOYEE_HEADERS).json()
        reordered = client.put(
            f"{base}/order",
            json={
                "items": [
                    {"voting_id": first["id"], "order": 2},
                    {"voting_id": second["id"], "order": 1},
                ]
            },
            headers=EMPLOYEE_HEADERS,
        )
        listed = client.get(base, headers=EMPLOYEE_HEADERS)

        assert reordered.status_code == 200
        assert [v["id"] for v in listed.json()] == [second["id"], first["id"]]

    def test_reorder_with_unknown_voting_is_404(
        self, client: TestClient, api_store: InMemoryCaseStore
    ) -> None:
        session = seed_session(api_store)
        entry = seed_session_resource(api_store, session.id, seed_resource(api_store).id)

        response = client.put(
            f"/v1/sessions/{session.id}/resources/{entry.id}/votings/order",
            json={"items": [{"voting_id": str(uuid4()), "order": 1}]},
            headers=EMPLOYEE_HEADERS,
        )

        assert response.status_code == 404
        assert len(response.json()["voting_ids"]) == 1


class TestDistributionRoutes:
    def test_distribute_and_remove(
        self, client: TestClient, api_store: InMemoryCaseStore
    ) -> None:
        session = seed_session(api_store)
        resource = seed_resource(api_store)
        payload = {"resource_id": str(resource.id), "distributed_to_id": str(uuid4())}

        created = client.post(
            f"/v1/sessions/{session.id}/distributions", json=payload, headers=EMPLOYEE_HEADERS
        )
        duplicate = client.post(
            f"/v1/sessions/{session.id}/distributions", json=payload, headers=EMPLOYEE_HEADERS
        )
        removed = client.delete(
            f"/v1/sessions/distributions/{created.json()['id']}", headers=EMPLOYEE_HEADERS
        )

        assert created.status_code == 200
        assert duplicate.status_code == 400
        assert removed.status_code == 204
        assert not api_store.tables.distributions


class TestCreateSessionRoutes:
    def test_create_then_add_resource(
        self, client: TestClient, api_store: InMemoryCaseStore
    ) -> None:
        created = client.post(
            "/v1/sessions",
            json={"session_number": "0007/2025", "date": "2025-04-02"},
            headers=EMPLOYEE_HEADERS,
        )
        session_id = created.json()["id"]

        added = client.post(
            f"/v1/sessions/{session_id}/resources",
            json={"resource_id": str(seed_resource(api_store).id)},
            headers=EMPLOYEE_HEADERS,
        )

        body = created.json()
        assert created.status_code == 200
        assert body["status"] == "PENDENTE"
        assert body["year"] == 2025
        assert body["date"] == "2025-04-02"
        assert added.status_code == 200
        assert added.json()["order"] == 1

    def test_duplicate_number_is_400(self, client: TestClient) -> None:
        payload = {"session_number": "0001/2025", "date": "2025-04-02"}
        client.post("/v1/sessions", json=payload, headers=EMPLOYEE_HEADERS)

        response = client.post("/v1/sessions", json=payload, headers=EMPLOYEE_HEADERS)

        assert response.status_code == 400
        assert response.json()["type"] == "urn:case-engine:error:duplicate-session-number"
        assert response.json()["session_number"] == "0001/2025"

    def test_malformed_number_is_400(
        self, client: TestClient, api_store: InMemoryCaseStore
    ) -> None:
        response = client.post(
            "/v1/sessions",
            json={"session_number": "7/2025", "date": "2025-04-02"},
            headers=EMPLOYEE_HEADERS,
        )

        assert response.status_code == 400
        assert response.json()["type"] == "urn:case-engine:error:invalid-session-input"
        assert not api_store.tables.sessions

    def test_external_actor_is_403(
        self, client: TestClient, api_store: InMemoryCaseStore
    ) -> None:
        response = client.post(
            "/v1/sessions",
            json={"session_number": "0001/2025", "date": "2025-04-02"},
            headers=EXTERNAL_HEADERS,
        )

        assert response.status_code == 403
        assert not api_store.tables.sessions
