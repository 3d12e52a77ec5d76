"""Pytest configuration and shared fixtures."""

import os
from typing import Any

import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock

TEST_DATABASE_URL = "https://notify-test-default-rtdb.asia-southeast1.firebasedatabase.app/"

os.environ.setdefault("LOG_FORMAT", "readable")
os.environ.setdefault("RTDB_DATABASE_URL", TEST_DATABASE_URL)
os.environ.setdefault("FIREBASE_SERVICE_ACCOUNT_PATH", "tests/does-not-exist.json")

# In-memory store for mocked Realtime Database, keyed by full path
_rtdb_store: dict[str, Any] = {}


def _join(base: str, path: str) -> str:
    return "/".join(p for p in f"{base}/{path}".split("/") if p)


def _make_reference_mock(path: str = "") -> MagicMock:
    """Return a mock db.Reference that stores leaf values in _rtdb_store."""
    ref = MagicMock()
    ref.path = "/" + path

    def child(sub: str) -> MagicMock:
        return _make_reference_mock(_join(path, sub))

    def set(value: Any) -> None:
        _rtdb_store[path] = value

    def get(shallow: bool = False) -> Any:
        if path in _rtdb_store:
            return _rtdb_store[path]
        prefix = f"{path}/" if path else ""
        children = {
            key[len(prefix):]: value
            for key, value in _rtdb_store.items()
            if key.startswith(prefix) and "/" not in key[len(prefix):]
        }
        if not children:
            return None
        return {k: True for k in children} if shallow else children

    def delete() -> None:
        prefix = f"{path}/" if path else ""
        for key in [k for k in _rtdb_store if k == path or k.startswith(prefix)]:
            del _rtdb_store[key]

    ref.child = child
    ref.set = set
    ref.get = get
    ref.delete = delete
    return ref


@pytest.fixture
def rtdb_store() -> dict[str, Any]:
    """Raw contents of the mocked database."""
    return _rtdb_store


@pytest.fixture
def rtdb_mock(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    """Inject mock Realtime Database root into the app."""
    _rtdb_store.clear()
    root = _make_reference_mock()
    from notify_api.api import dependencies
    monkeypatch.setattr(dependencies, "get_realtime_root", lambda database_url, service_account_path: root)
    return root


@pytest.fixture
def fresh_config():
    """Drop cached settings and resolver so env changes in the test take effect."""
    from notify_api.core.config import get_settings
    from notify_api.services.firebase_config import get_config_resolver

    get_settings.cache_clear()
    get_config_resolver.cache_clear()
    yield
    get_settings.cache_clear()
    get_config_resolver.cache_clear()


@pytest.fixture
def client(rtdb_mock: MagicMock) -> TestClient:
    """FastAPI test client with mocked Realtime Database."""
    from notify_api.main import app
    return TestClient(app)


@pytest.fixture
def register_payload() -> dict:
    """Minimal valid POST /api/notification/register body."""
    return {"userId": "user123"}
