"""Welcome, random and custom notification construction."""

import random
import time
import uuid
from typing import Any, Optional

from notify_api.core.errors import InvalidArgumentError
from notify_api.core.logging import structured_log
from notify_api.core.telemetry import record_notification_sent
from notify_api.models.entities import NotificationRecord, now_timestamp
from notify_api.services.hashing import build_notification_path, hash_identifier
from notify_api.services.realtime_repo import write_notification

WELCOME_TITLE = "Welcome!"
WELCOME_BODY = "You have successfully registered to our notification system."

RANDOM_TITLES = (
    "Breaking News!",
    "Important Update",
    "New Message",
    "Alert!",
    "Information",
)
RANDOM_MESSAGES = (
    "You have received a new message from the system.",
    "This is an important update for your account.",
    "A new feature has been added to your dashboard.",
    "Your request has been processed successfully.",
    "Please check your account for important information.",
)
RANDOM_CATEGORIES = ("info", "warning", "success")

# Characters the Realtime Database rejects in keys
FORBIDDEN_KEY_CHARS = frozenset(".$#[]/")


def _validate_data_keys(data: dict[str, str]) -> None:
    for key in data:
        if not key or FORBIDDEN_KEY_CHARS.intersection(key):
            raise InvalidArgumentError(
                f"Invalid data key: {key!r}",
                details={"field": "data", "key": key},
            )


def send_notification(
    root: Any,
    identifier: str,
    title: str,
    body: str,
    data: Optional[dict[str, str]] = None,
) -> str:
    """Write a notification under the identifier's hashed path and return its ID.

    ``data["type"]`` becomes the record type (default ``notification``); the
    remaining entries are stored as record metadata.
    """
    path = build_notification_path(identifier)
    extra = dict(data or {})
    _validate_data_keys(extra)
    record = NotificationRecord(
        title=title,
        body=body,
        timestamp=now_timestamp(),
        type=extra.pop("type", "notification") or "notification",
        data=extra,
    )
    notification_id = str(uuid.uuid4())
    start = time.perf_counter()
    write_notification(root, path, notification_id, record)
    record_notification_sent()
    structured_log(
        "INFO",
        "Notification saved to Realtime Database",
        user_token=hash_identifier(identifier),
        operation="notification.send",
        duration_ms=(time.perf_counter() - start) * 1000,
        metadata={"notification_id": notification_id, "type": record.type, "title": title},
    )
    return notification_id


def create_welcome_notification(root: Any, identifier: str) -> str:
    """Welcome notification for a newly registered user."""
    return send_notification(
        root,
        identifier,
        WELCOME_TITLE,
        WELCOME_BODY,
        {"type": "welcome", "category": "success"},
    )


def create_random_notification(root: Any, identifier: str, rng: Optional[random.Random] = None) -> str:
    """Random test notification drawn from the fixed templates."""
    rng = rng or random.Random()
    data = {
        "type": "random",
        "priority": str(rng.randint(1, 3)),
        "category": rng.choice(RANDOM_CATEGORIES),
    }
    return send_notification(
        root,
        identifier,
        rng.choice(RANDOM_TITLES),
        rng.choice(RANDOM_MESSAGES),
        data,
    )


def create_custom_notification(
    root: Any,
    identifier: str,
    title: str,
    body: str,
    data: Optional[dict[str, str]] = None,
) -> str:
    """Caller-supplied notification; type defaults to ``custom``."""
    payload = dict(data or {})
    if not payload.get("type"):
        payload["type"] = "custom"
    return send_notification(root, identifier, title, body, payload)
