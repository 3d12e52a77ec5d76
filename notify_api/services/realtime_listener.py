"""Live listener for a user's notification path.

Subscribes to a listen URL returned by ``POST /api/notification/register``
and reports the newest notification each time the subtree changes. The
same notification is never reported twice in a row.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from threading import Lock
from typing import Any, Callable, Optional
from urllib.parse import urlsplit

from firebase_admin import db

from notify_api.core.errors import InvalidArgumentError
from notify_api.core.logging import structured_log
from notify_api.models.entities import NotificationRecord, records_from_snapshot
from notify_api.services.firebase_config import project_id_from_database_url
from notify_api.services.realtime_repo import get_firebase_app


@dataclass(frozen=True)
class ListenTarget:
    project_id: Optional[str]
    database_url: str
    path: str


def parse_listen_url(listen_url: str) -> ListenTarget:
    """Split ``https://<db-host>/notifications/<token>`` into database URL and path."""
    if not listen_url or not listen_url.strip():
        raise InvalidArgumentError("listenUrl is required for subscription")
    parts = urlsplit(listen_url.strip())
    path = parts.path.strip("/")
    if not parts.scheme or not parts.netloc or not path:
        raise InvalidArgumentError(f"Invalid listenUrl format: {listen_url}", details={"field": "listenUrl"})
    database_url = f"{parts.scheme}://{parts.netloc}"
    return ListenTarget(
        project_id=project_id_from_database_url(database_url),
        database_url=database_url,
        path=path,
    )


def _put(mirror: dict[str, Any], segments: list[str], data: Any) -> dict[str, Any]:
    if not segments:
        return copy.deepcopy(data) if isinstance(data, dict) else {}
    node = mirror
    for seg in segments[:-1]:
        nxt = node.get(seg)
        if not isinstance(nxt, dict):
            if data is None:
                return mirror
            nxt = {}
            node[seg] = nxt
        node = nxt
    if data is None:
        node.pop(segments[-1], None)
    else:
        node[segments[-1]] = copy.deepcopy(data)
    return mirror


def apply_event(mirror: dict[str, Any], event_type: str, path: str, data: Any) -> dict[str, Any]:
    """Apply a ``put``/``patch`` event to the local copy of the listened subtree."""
    segments = [p for p in (path or "/").split("/") if p]
    if event_type == "put":
        return _put(mirror, segments, data)
    if event_type == "patch" and isinstance(data, dict):
        for key, value in data.items():
            mirror = _put(mirror, segments + [p for p in key.split("/") if p], value)
    return mirror


def latest_notification(mirror: dict[str, Any]) -> Optional[NotificationRecord]:
    """Newest notification by timestamp, or None when the subtree is empty."""
    records = records_from_snapshot(mirror)
    return records[0] if records else None


def _default_reference(target: ListenTarget) -> Any:
    app = get_firebase_app(target.database_url)
    return db.reference(target.path, app=app)


class NotificationListener:
    """Holds one live subscription and emits new notifications to a callback."""

    def __init__(
        self,
        on_notification: Callable[[NotificationRecord], None],
        reference_factory: Callable[[ListenTarget], Any] = _default_reference,
    ) -> None:
        self._on_notification = on_notification
        self._reference_factory = reference_factory
        self._lock = Lock()
        self._registration: Any = None
        self._mirror: dict[str, Any] = {}
        self._last_id: Optional[str] = None
        self._active = False
        self.target: Optional[ListenTarget] = None

    def subscribe(self, listen_url: str) -> ListenTarget:
        target = parse_listen_url(listen_url)
        self.unsubscribe()
        ref = self._reference_factory(target)
        with self._lock:
            self.target = target
            self._active = True
        # The initial snapshot may arrive before listen() returns
        registration = ref.listen(self._handle_event)
        with self._lock:
            self._registration = registration
        structured_log(
            "INFO",
            "Subscribed to notifications",
            operation="listener.subscribe",
            metadata={"database_url": target.database_url, "path": target.path},
        )
        return target

    def unsubscribe(self) -> None:
        with self._lock:
            registration = self._registration
            self._registration = None
            self._active = False
            self._mirror = {}
            self._last_id = None
            self.target = None
        if registration is not None:
            registration.close()

    def _handle_event(self, event: Any) -> None:
        # Called on the SDK's listener thread
        with self._lock:
            if not self._active:
                return
            self._mirror = apply_event(self._mirror, event.event_type, event.path, event.data)
            latest = latest_notification(self._mirror)
            if latest is None or latest.id == self._last_id:
                return
            self._last_id = latest.id
        self._on_notification(latest)
