"""Realtime Database record models."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Optional

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def now_timestamp() -> str:
    """Return current UTC time in the stored record format."""
    return datetime.now(UTC).strftime(TIMESTAMP_FORMAT)


@dataclass
class NotificationRecord:
    """Notification stored at ``notifications/<token>/<notification_id>``."""

    title: str
    body: str
    timestamp: str  # UTC, TIMESTAMP_FORMAT
    type: str = "notification"
    data: dict[str, str] = field(default_factory=dict)
    id: Optional[str] = None  # database key, not stored in the record itself

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "title": self.title,
            "body": self.body,
            "timestamp": self.timestamp,
            "type": self.type,
        }
        if self.data:
            d["data"] = dict(self.data)
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any], notification_id: Optional[str] = None) -> "NotificationRecord":
        data = d.get("data") or {}
        return cls(
            title=d.get("title", ""),
            body=d.get("body", ""),
            timestamp=d.get("timestamp", ""),
            type=d.get("type", "notification"),
            data={str(k): str(v) for k, v in data.items()} if isinstance(data, dict) else {},
            id=notification_id,
        )

    def sort_key(self) -> datetime:
        """Timestamp as datetime for ordering; unparseable values sort oldest."""
        try:
            return datetime.fromisoformat(self.timestamp.replace("Z", "+00:00"))
        except (AttributeError, ValueError):
            return datetime.min.replace(tzinfo=UTC)


def records_from_snapshot(snapshot: Any) -> list[NotificationRecord]:
    """Convert a ``{notification_id: record}`` snapshot into records, newest first."""
    if not isinstance(snapshot, dict):
        return []
    records = [
        NotificationRecord.from_dict(value, notification_id=key)
        for key, value in snapshot.items()
        if isinstance(value, dict)
    ]
    records.sort(key=lambda r: r.sort_key(), reverse=True)
    return records
