"""Data models: Pydantic schemas and Realtime Database records."""

from notify_api.models.entities import NotificationRecord, now_timestamp, records_from_snapshot
from notify_api.models.schemas import (
    ApiTestResponse,
    ErrorResponse,
    FirebaseClientConfig,
    NotificationPathResponse,
    NotificationRequest,
    NotificationResponse,
    NotificationSchema,
    RegisterRequest,
    RegisterResponse,
    SendRandomRequest,
    SuccessResponse,
)

__all__ = [
    "NotificationRecord",
    "now_timestamp",
    "records_from_snapshot",
    "ApiTestResponse",
    "ErrorResponse",
    "FirebaseClientConfig",
    "NotificationPathResponse",
    "NotificationRequest",
    "NotificationResponse",
    "NotificationSchema",
    "RegisterRequest",
    "RegisterResponse",
    "SendRandomRequest",
    "SuccessResponse",
]
