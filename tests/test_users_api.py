from __future__ import annotations

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from users_api.app import create_app
from users_api.repositories.sql_repository import SQLRepository

ALICE = {
    "name": "Alice",
    "email": "a@x.com",
    "active_status": "active",
    "settings": {"name": "theme", "value": "dark"},
}
BOB = {"name": "Bob", "email": "b@x.com", "active_status": "inactive"}


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@pytest.fixture()
def client(temp_db):
    with TestClient(create_app()) as test_client:
        yield test_client


def _create(client: TestClient, payload: dict) -> dict:
    response = client.post("/user", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_returns_persisted_user_with_single_setting(client):
    body = _create(client, ALICE)

    assert isinstance(body["id"], int)
    assert body["name"] == "Alice"
    assert body["created_at"] == body["updated_at"]
    assert len(body["settings"]) == 1
    setting = body["settings"][0]
    assert setting["user_id"] == body["id"]
    assert (setting["name"], setting["value"]) == ("theme", "dark")

    rows = SQLRepository().get_settings_for_user(body["id"])
    assert [(row.name, row.value) for row in rows] == [("theme", "dark")]


def test_create_accepts_list_of_settings(client):
    payload = dict(ALICE, settings=[{"name": "theme", "value": "dark"}, {"name": "lang", "value": "en"}])

    body = _create(client, payload)

    assert sorted(s["name"] for s in body["settings"]) == ["lang", "theme"]


@pytest.mark.parametrize("settings", [None, {}, []])
def test_create_without_settings(client, settings):
    payload = dict(BOB) if settings is None else dict(BOB, settings=settings)

    body = _create(client, payload)

    assert body["settings"] == []
    assert body["active_status"] == "inactive"


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "a@x.com", "active_status": "active"},
        {"name": "Alice", "email": "a@x.com", "active_status": "sleeping"},
        {"name": "  ", "email": "a@x.com", "active_status": "active"},
    ],
)
def test_create_rejects_invalid_payloads(client, payload):
    response = client.post("/user", json=payload)

    assert response.status_code == 422
    assert response.json()["ok"] is False
    assert response.json()["error"] == "invalid"


def test_get_single_user(client):
    created = _create(client, ALICE)

    response = client.get(f"/user/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created


@pytest.mark.parametrize(
    "method,path",
    [("get", "/user/999"), ("put", "/user/999"), ("delete", "/user/999")],
)
def test_missing_user_is_not_found(client, method, path):
    kwargs = {"json": BOB} if method == "put" else {}
    response = client.request(method.upper(), path, **kwargs)

    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


def test_update_then_get_returns_new_name(client):
    created = _create(client, ALICE)

    response = client.put(f"/user/{created['id']}", json=BOB)

    assert response.status_code == 200
    updated = response.json()
    assert updated["name"] == "Bob"
    assert updated["created_at"] == created["created_at"]
    assert _ts(updated["updated_at"]) > _ts(created["updated_at"])
    assert updated["settings"] == created["settings"]
    assert client.get(f"/user/{created['id']}").json()["name"] == "Bob"


def test_delete_then_get_is_not_found(client):
    created = _create(client, ALICE)

    response = client.delete(f"/user/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created["id"]
    assert client.get(f"/user/{created['id']}").status_code == 404
    assert SQLRepository().get_settings_for_user(created["id"]) == []


def test_list_caps_page_size_at_fifty(client):
    for i in range(55):
        _create(client, {"name": f"user{i}", "email": f"u{i}@x.com", "active_status": "active"})

    response = client.get("/users/100/1")

    assert response.status_code == 200
    assert len(response.json()) == 50


def test_list_pages_partition_users(client):
    ids = [
        _create(client, {"name": f"user{i}", "email": f"u{i}@x.com", "active_status": "active"})["id"]
        for i in range(25)
    ]

    seen = []
    for page in (1, 2, 3):
        items = client.get(f"/users/10/{page}").json()
        assert len(items) <= 10
        seen.extend(item["id"] for item in items)

    assert seen == ids
    assert client.get("/users/10/4").json() == []


def test_list_query_page_overrides_path_page(client):
    ids = [
        _create(client, {"name": f"user{i}", "email": f"u{i}@x.com", "active_status": "active"})["id"]
        for i in range(4)
    ]

    response = client.get("/users/2/1", params={"page": 2})

    assert [item["id"] for item in response.json()] == ids[2:]


def test_list_rejects_zero_page(client):
    response = client.get("/users/10/0")
    assert response.status_code == 422
    assert response.json()["error"] == "invalid"


@pytest.mark.parametrize(
    "payload",
    [
        {"name": " ", "email": "b@x.com", "active_status": "inactive"},
        {"name": "Bob", "active_status": "inactive"},
        {"name": "Bob", "email": "b@x.com", "active_status": "sleeping"},
    ],
)
def test_update_rejects_invalid_payloads(client, payload):
    created = _create(client, ALICE)

    response = client.put(f"/user/{created['id']}", json=payload)

    assert response.status_code == 422
    assert response.json()["ok"] is False
    assert response.json()["error"] == "invalid"
    assert client.get(f"/user/{created['id']}").json() == created


def test_database_failure_returns_500(client, monkeypatch):
    def _boom(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("disk I/O error"))

    monkeypatch.setattr(SQLRepository, "_load", _boom)

    response = client.get("/user/1")

    assert response.status_code == 500
    assert response.json() == {
        "ok": False,
        "error": "persistence_error",
        "message": "Database operation failed.",
    }
