"""API tests for configuration and database failures."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from firebase_admin import exceptions

from notify_api.api import dependencies
from notify_api.main import app
from notify_api.services import memory_repo


@pytest.fixture
def unconfigured(monkeypatch: pytest.MonkeyPatch, fresh_config, tmp_path) -> None:
    """No provider can resolve a database URL."""
    monkeypatch.setenv("RTDB_DATABASE_URL", "")
    monkeypatch.setenv("FIREBASE_SERVICE_ACCOUNT_PATH", str(tmp_path / "missing.json"))
    monkeypatch.delenv("FIREBASE_DATABASE_URL", raising=False)


@pytest.fixture
def failing_root(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    """Realtime Database root whose reads and writes fail."""
    root = MagicMock()
    root.child.return_value.get.side_effect = exceptions.UnavailableError("db down")
    root.child.return_value.child.return_value.set.side_effect = exceptions.UnavailableError("db down")
    monkeypatch.setattr(dependencies, "get_realtime_root", lambda database_url, service_account_path: root)
    return root


def test_firebase_config_not_found(unconfigured) -> None:
    r = TestClient(app).get("/api/notification/firebase-config")
    assert r.status_code == 404
    body = r.json()
    assert body["error"] == "FirebaseConfigNotFoundError"
    assert "RTDB_DATABASE_URL" in body["message"]


def test_register_not_found_writes_nothing(unconfigured, rtdb_mock, rtdb_store: dict) -> None:
    r = TestClient(app).post("/api/notification/register", json={"userId": "user123"})
    assert r.status_code == 404
    assert rtdb_store == {}


def test_readiness_unconfigured(unconfigured) -> None:
    r = TestClient(app).get("/readiness")
    assert r.status_code == 503
    assert r.json()["status"] == "unready"


def test_readiness_database_unreachable(failing_root) -> None:
    r = TestClient(app).get("/readiness")
    assert r.status_code == 503
    assert "db down" in r.json()["error"]


def test_write_failure_is_json_502(failing_root) -> None:
    r = TestClient(app).post("/api/notification/send-random", json={"userId": "user123"})
    assert r.status_code == 502
    body = r.json()
    assert body["error"] == "RealtimeDatabaseError"
    assert body["details"]["path"] == "notifications/e606e38b0d8c"


def test_malformed_service_account(monkeypatch: pytest.MonkeyPatch, fresh_config, tmp_path) -> None:
    broken = tmp_path / "firebase-service-account.json"
    broken.write_text("{not json")
    monkeypatch.setenv("RTDB_DATABASE_URL", "https://broken-sa-default-rtdb.firebaseio.com/")
    monkeypatch.setenv("FIREBASE_SERVICE_ACCOUNT_PATH", str(broken))
    client = TestClient(app)

    r = client.post("/api/notification/register", json={"userId": "user123"})
    assert r.status_code == 500
    assert r.json()["error"] == "RealtimeDatabaseError"

    r = client.get("/readiness")
    assert r.status_code == 503


def test_in_memory_store(monkeypatch: pytest.MonkeyPatch, fresh_config) -> None:
    monkeypatch.setenv("USE_IN_MEMORY_STORE", "true")
    memory_repo.reset()
    client = TestClient(app)
    try:
        assert client.post("/api/notification/register", json={"userId": "user123"}).status_code == 200
        history = client.get("/api/notification/user/USER123").json()
        assert [n["type"] for n in history] == ["welcome"]
        assert client.get("/readiness").json() == {"status": "ready"}
        assert client.delete("/api/notification/user/user123").status_code == 200
        assert memory_repo.get_root_reference().child("notifications").get(shallow=True) is None
    finally:
        memory_repo.reset()


def test_register_non_ascii_identifier(client: TestClient) -> None:
    r = client.post("/api/notification/register", json={"userId": "İstanbul"})
    assert r.status_code == 200
    assert r.json()["listenUrl"].endswith("/notifications/751c59fe1fa7")


def test_send_rejects_forbidden_data_key(client: TestClient, rtdb_store: dict) -> None:
    r = client.post(
        "/api/notification/send",
        json={"userId": "user123", "title": "T", "body": "B", "data": {"a.b": "x"}},
    )
    assert r.status_code == 400
    assert r.json()["error"] == "InvalidArgument"
    assert rtdb_store == {}
