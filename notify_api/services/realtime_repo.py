"""Firebase Realtime Database access for notification records."""

from pathlib import Path
from threading import Lock
from typing import Any, Optional

import firebase_admin
from firebase_admin import credentials, db
from firebase_admin.exceptions import FirebaseError
from google.auth.exceptions import GoogleAuthError

from notify_api.core.errors import RealtimeDatabaseError
from notify_api.core.logging import structured_log
from notify_api.core.telemetry import record_write_failure, span
from notify_api.models.entities import NotificationRecord, records_from_snapshot

_apps: dict[str, firebase_admin.App] = {}
_apps_lock = Lock()


def get_firebase_app(database_url: str, service_account_path: Optional[str] = None) -> firebase_admin.App:
    """Return (initializing once) the firebase-admin app for ``database_url``."""
    key = database_url.rstrip("/")
    with _apps_lock:
        app = _apps.get(key)
        if app is not None:
            return app
        # One named app per database so listeners on other databases can coexist
        name = f"rtdb:{key}"
        try:
            if service_account_path and Path(service_account_path).is_file():
                cred: Any = credentials.Certificate(service_account_path)
            else:
                cred = credentials.ApplicationDefault()
            app = firebase_admin.initialize_app(cred, {"databaseURL": key}, name=name)
        except (ValueError, OSError, GoogleAuthError) as e:
            structured_log(
                "ERROR",
                "Firebase app initialization failed",
                operation="rtdb.init",
                metadata={"database_url": key, "service_account_path": service_account_path},
                error={"type": type(e).__name__, "message": str(e)},
            )
            raise RealtimeDatabaseError(
                "Failed to initialize Firebase app",
                status_code=500,
                details={"database_url": key},
            ) from e
        _apps[key] = app
        structured_log(
            "INFO",
            "Firebase Realtime Database initialized",
            operation="rtdb.init",
            metadata={"database_url": key, "app": name},
        )
        return app


def get_root_reference(app: firebase_admin.App) -> db.Reference:
    """Return the root reference of the app's database."""
    return db.reference("/", app=app)


def notification_ref(root: Any, path: str, notification_id: str) -> Any:
    """Return reference for a single notification."""
    return root.child(path).child(notification_id)


def write_notification(
    root: Any,
    path: str,
    notification_id: str,
    record: NotificationRecord,
) -> None:
    """Store ``record`` at ``path/notification_id``."""
    with span("rtdb.write_notification", {"path": path}):
        try:
            notification_ref(root, path, notification_id).set(record.to_dict())
        except (FirebaseError, ValueError) as e:
            record_write_failure()
            structured_log(
                "ERROR",
                "Failed to write notification",
                operation="rtdb.write",
                metadata={"path": path, "notification_id": notification_id},
                error={"type": type(e).__name__, "message": str(e)},
            )
            raise RealtimeDatabaseError(
                "Failed to write notification",
                details={"path": path, "notification_id": notification_id},
            ) from e


def list_notifications(root: Any, path: str) -> list[NotificationRecord]:
    """Load every notification under ``path``, newest first."""
    with span("rtdb.list_notifications", {"path": path}):
        try:
            snapshot = root.child(path).get()
        except (FirebaseError, ValueError) as e:
            raise RealtimeDatabaseError("Failed to read notifications", details={"path": path}) from e
    return records_from_snapshot(snapshot)


def delete_notifications(root: Any, path: str) -> None:
    """Remove every notification under ``path``."""
    with span("rtdb.delete_notifications", {"path": path}):
        try:
            root.child(path).delete()
        except (FirebaseError, ValueError) as e:
            raise RealtimeDatabaseError("Failed to delete notifications", details={"path": path}) from e


def ping(root: Any, namespace: str) -> None:
    """Shallow read used by readiness checks; raises on connection failure."""
    root.child(namespace).get(shallow=True)
