"""Tests for the /v1/notification-lists routes."""

from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from src.domain.models.notification import AttemptStatus
from src.infrastructure.stubs.case_store_stub import InMemoryCaseStore
from tests.helpers import seed_resource
from tests.helpers.actors import ADMIN_HEADERS, EMPLOYEE_HEADERS

LISTS = "/v1/notification-lists"


def _list_with_item(client: TestClient, store: InMemoryCaseStore) -> tuple[str, str]:
    created = client.post(LISTS, json={"type": "SESSAO"}, headers=EMPLOYEE_HEADERS).json()
    item = client.post(
        f"{LISTS}/{created['id']}/items",
        json={"resource_id": str(seed_resource(store).id)},
        headers=EMPLOYEE_HEADERS,
    ).json()
    return created["id"], item["id"]


class TestListRoutes:
    def test_create_numbers_list(self, client: TestClient) -> None:
        response = client.post(LISTS, json={"type": "DECISAO"}, headers=EMPLOYEE_HEADERS)

        body = response.json()
        assert response.status_code == 200
        assert body["list_number"] == f"001/{datetime.now(timezone.utc).year}"
        assert body["created_by"] == "clerk-1"

    def test_unknown_type_is_400(self, client: TestClient) -> None:
        response = client.post(LISTS, json={"type": "URGENTE"}, headers=EMPLOYEE_HEADERS)

        assert response.status_code == 400

    def test_detail_includes_items_and_attempts(
        self, client: TestClient, api_store: InMemoryCaseStore
    ) -> None:
        list_id, item_id = _list_with_item(client, api_store)
        client.post(
            f"{LISTS}/{list_id}/items/{item_id}/attempts",
            json={"channel": "EDITAL"},
            headers=EMPLOYEE_HEADERS,
        )

        body = client.get(f"{LISTS}/{list_id}", headers=EMPLOYEE_HEADERS).json()

        assert [i["id"] for i in body["items"]] == [item_id]
        assert body["items"][0]["attempts"][0]["attempt_number"] == 1

    def test_finalized_list_rejects_items(
        self, client: TestClient, api_store: InMemoryCaseStore
    ) -> None:
        list_id, _ = _list_with_item(client, api_store)
        finalized = client.post(f"{LISTS}/{list_id}/finalize", headers=EMPLOYEE_HEADERS)

        response = client.post(
            f"{LISTS}/{list_id}/items",
            json={"resource_id": str(seed_resource(api_store).id)},
            headers=EMPLOYEE_HEADERS,
        )

        assert finalized.json()["status"] == "FINALIZADA"
        assert response.status_code == 400
        assert response.json()["operation"] == "add item"

    def test_delete_list_with_items_is_400(
        self, client: TestClient, api_store: InMemoryCaseStore
    ) -> None:
        list_id, _ = _list_with_item(client, api_store)

        response = client.delete(f"{LISTS}/{list_id}", headers=ADMIN_HEADERS)

        assert response.status_code == 400
        assert response.json()["item_count"] == 1

    def test_delete_empty_list(self, client: TestClient) -> None:
        created = client.post(LISTS, json={"type": "OUTRO"}, headers=EMPLOYEE_HEADERS).json()

        forbidden = client.delete(f"{LISTS}/{created['id']}", headers=EMPLOYEE_HEADERS)
        deleted = client.delete(f"{LISTS}/{created['id']}", headers=ADMIN_HEADERS)

        assert forbidden.status_code == 403
        assert deleted.status_code == 204


class TestAttemptRoutes:
    def test_email_without_destination_is_400(
        self, client: TestClient, api_store: InMemoryCaseStore
    ) -> None:
        list_id, item_id = _list_with_item(client, api_store)

        response = client.post(
            f"{LISTS}/{list_id}/items/{item_id}/attempts",
            json={"channel": "EMAIL"},
            headers=EMPLOYEE_HEADERS,
        )

        assert response.status_code == 400

    def test_confirm_records_actor(
        self, client: TestClient, api_store: InMemoryCaseStore
    ) -> None:
        list_id, item_id = _list_with_item(client, api_store)
        attempt = client.post(
            f"{LISTS}/{list_id}/items/{item_id}/attempts",
            json={"channel": "EMAIL", "sent_to": "parte@example.com"},
            headers=EMPLOYEE_HEADERS,
        ).json()
        url = f"{LISTS}/{list_id}/items/{item_id}/attempts/{attempt['id']}"

        confirmed = client.post(f"{url}/confirm", headers=EMPLOYEE_HEADERS)
        again = client.post(f"{url}/confirm", headers=EMPLOYEE_HEADERS)
        deleted = client.delete(url, headers=EMPLOYEE_HEADERS)

        assert confirmed.status_code == 200
        assert confirmed.json()["confirmed_by"] == "clerk-1"
        assert confirmed.json()["status"] == "CONFIRMADO"
        assert again.status_code == 400
        assert again.json()["type"] == "urn:case-engine:error:attempt-already-confirmed"
        assert deleted.status_code == 400

    def test_expire_then_confirm_is_400(
        self, client: TestClient, api_store: InMemoryCaseStore
    ) -> None:
        list_id, item_id = _list_with_item(client, api_store)
        attempt = client.post(
            f"{LISTS}/{list_id}/items/{item_id}/attempts",
            json={"channel": "SETOR"},
            headers=EMPLOYEE_HEADERS,
        ).json()

        expired = client.post(f"{LISTS}/attempts/{attempt['id']}/expire", headers=EMPLOYEE_HEADERS)
        confirm = client.post(
            f"{LISTS}/{list_id}/items/{item_id}/attempts/{attempt['id']}/confirm",
            headers=EMPLOYEE_HEADERS,
        )

        assert expired.json()["status"] == "EXPIRADO"
        assert confirm.status_code == 400
        assert "Cannot confirm an expired attempt" in confirm.json()["detail"]

    def test_expire_overdue(self, client: TestClient, api_store: InMemoryCaseStore) -> None:
        list_id, item_id = _list_with_item(client, api_store)
        deadline = datetime(2025, 3, 1, tzinfo=timezone.utc)
        attempt = client.post(
            f"{LISTS}/{list_id}/items/{item_id}/attempts",
            json={"channel": "EDITAL", "deadline": deadline.isoformat()},
            headers=EMPLOYEE_HEADERS,
        ).json()

        response = client.post(
            f"{LISTS}/attempts/expire-overdue",
            json={"now": (deadline + timedelta(days=1)).isoformat()},
            headers=EMPLOYEE_HEADERS,
        )

        assert response.json() == {"expired_count": 1}
        stored = api_store.tables.notification_attempts
        assert {a.status for a in stored.values()} == {AttemptStatus.EXPIRADO}
        assert attempt["status"] == "PENDENTE"

    def test_naive_deadline_is_400_and_overdue_sweep_keeps_working(
        self, client: TestClient, api_store: InMemoryCaseStore
    ) -> None:
        list_id, item_id = _list_with_item(client, api_store)

        rejected = client.post(
            f"{LISTS}/{list_id}/items/{item_id}/attempts",
            json={"channel": "EDITAL", "deadline": "2020-01-01T00:00:00"},
            headers=EMPLOYEE_HEADERS,
        )
        sweep = client.post(f"{LISTS}/attempts/expire-overdue", headers=EMPLOYEE_HEADERS)

        assert rejected.status_code == 400
        assert rejected.headers["content-type"] == "application/problem+json"
        assert not api_store.tables.notification_attempts
        assert sweep.status_code == 200
        assert sweep.json() == {"expired_count": 0}

    def test_naive_reference_time_is_400(self, client: TestClient) -> None:
        response = client.post(
            f"{LISTS}/attempts/expire-overdue",
            json={"now": "2025-03-01T00:00:00"},
            headers=EMPLOYEE_HEADERS,
        )

        assert response.status_code == 400

    def test_remove_item(self, client: TestClient, api_store: InMemoryCaseStore) -> None:
        list_id, item_id = _list_with_item(client, api_store)

        response = client.delete(f"{LISTS}/{list_id}/items/{item_id}", headers=EMPLOYEE_HEADERS)

        assert response.status_code == 204
        assert not api_store.tables.notification_items
