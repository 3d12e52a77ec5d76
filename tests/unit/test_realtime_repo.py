"""Unit tests for Realtime Database access and the in-memory tree."""

from unittest.mock import MagicMock

import pytest
from firebase_admin import exceptions

from notify_api.core.errors import RealtimeDatabaseError
from notify_api.core.telemetry import get_metrics
from notify_api.models.entities import NotificationRecord
from notify_api.services import memory_repo
from notify_api.services.realtime_repo import (
    delete_notifications,
    get_firebase_app,
    list_notifications,
    write_notification,
)

RECORD = NotificationRecord(title="t", body="b", timestamp="2025-01-01T00:00:00Z", type="welcome")


def test_write_then_list(rtdb_mock) -> None:
    write_notification(rtdb_mock, "notifications/abc", "n1", RECORD)
    later = NotificationRecord(title="t2", body="b2", timestamp="2025-01-01T00:00:05Z", type="random")
    write_notification(rtdb_mock, "notifications/abc", "n2", later)
    records = list_notifications(rtdb_mock, "notifications/abc")
    assert [r.id for r in records] == ["n2", "n1"]
    assert records[1].title == "t"


def test_list_empty_path(rtdb_mock) -> None:
    assert list_notifications(rtdb_mock, "notifications/none") == []


def test_delete(rtdb_mock) -> None:
    write_notification(rtdb_mock, "notifications/abc", "n1", RECORD)
    delete_notifications(rtdb_mock, "notifications/abc")
    assert list_notifications(rtdb_mock, "notifications/abc") == []


def test_write_failure_wrapped() -> None:
    root = MagicMock()
    root.child.return_value.child.return_value.set.side_effect = exceptions.UnavailableError("db down")
    before = get_metrics()["notification_write_failures_total"]
    with pytest.raises(RealtimeDatabaseError) as exc:
        write_notification(root, "notifications/abc", "n1", RECORD)
    assert exc.value.status_code == 502
    assert exc.value.details == {"path": "notifications/abc", "notification_id": "n1"}
    assert get_metrics()["notification_write_failures_total"] == before + 1


def test_read_failure_wrapped() -> None:
    root = MagicMock()
    root.child.return_value.get.side_effect = exceptions.PermissionDeniedError("denied")
    with pytest.raises(RealtimeDatabaseError):
        list_notifications(root, "notifications/abc")


@pytest.fixture
def memory_root():
    memory_repo.reset()
    yield memory_repo.get_root_reference()
    memory_repo.reset()


def test_memory_repo_round_trip(memory_root) -> None:
    write_notification(memory_root, "notifications/abc", "n1", RECORD)
    records = list_notifications(memory_root, "notifications/abc")
    assert len(records) == 1
    assert records[0].id == "n1"
    assert records[0].type == "welcome"


def test_memory_repo_get_is_a_copy(memory_root) -> None:
    ref = memory_root.child("notifications/abc/n1")
    ref.set({"title": "t"})
    value = ref.get()
    value["title"] = "changed"
    assert ref.get() == {"title": "t"}


def test_memory_repo_shallow_and_delete(memory_root) -> None:
    memory_root.child("notifications/a/n1").set({"title": "x"})
    memory_root.child("notifications/b/n1").set({"title": "y"})
    assert memory_root.child("notifications").get(shallow=True) == {"a": True, "b": True}
    memory_root.child("notifications/a").delete()
    assert memory_root.child("notifications").get(shallow=True) == {"b": True}
    assert memory_root.child("notifications/a").get() is None


def test_memory_repo_rejects_none(memory_root) -> None:
    with pytest.raises(ValueError):
        memory_root.child("x").set(None)


def test_firebase_app_bad_service_account(tmp_path) -> None:
    broken = tmp_path / "firebase-service-account.json"
    broken.write_text("{not json")
    url = "https://bad-key-default-rtdb.firebaseio.com/"
    with pytest.raises(RealtimeDatabaseError) as exc:
        get_firebase_app(url, str(broken))
    assert exc.value.status_code == 500
    assert exc.value.details == {"database_url": url.rstrip("/")}


def test_memory_repo_delete_prunes_empty_parents(memory_root) -> None:
    memory_root.child("notifications/a/n1").set({"title": "x"})
    memory_root.child("notifications/b/n1").set({"title": "y"})
    memory_root.child("notifications/a/n1").delete()
    assert memory_root.child("notifications").get(shallow=True) == {"b": True}
    memory_root.child("notifications/b").delete()
    assert memory_root.child("notifications").get(shallow=True) is None
    assert memory_root.get() is None
