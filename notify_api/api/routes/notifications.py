"""Notification API: register, send, history, path and client config.

Routes that touch the Realtime Database are plain ``def`` so the blocking
firebase-admin calls run in the threadpool.
"""

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Depends, Response, status

from notify_api.api.dependencies import get_database, get_resolver
from notify_api.core.config import get_settings
from notify_api.core.logging import structured_log
from notify_api.core.telemetry import record_registration
from notify_api.models.entities import NotificationRecord
from notify_api.models.schemas import (
    ApiTestResponse,
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
from notify_api.services.firebase_config import FirebaseConfigResolver
from notify_api.services.hashing import build_listen_url, build_notification_path, hash_identifier
from notify_api.services.notification_factory import (
    create_custom_notification,
    create_random_notification,
    create_welcome_notification,
)
from notify_api.services.realtime_repo import delete_notifications, list_notifications

router = APIRouter(prefix="/api/notification", tags=["notifications"])


def _record_to_schema(record: NotificationRecord) -> NotificationSchema:
    return NotificationSchema(
        id=record.id,
        title=record.title,
        body=record.body,
        timestamp=record.timestamp,
        type=record.type,
        data=record.data,
    )


@router.post("/register", response_model=RegisterResponse)
def register_user(
    body: RegisterRequest,
    root: Any = Depends(get_database),
    resolver: FirebaseConfigResolver = Depends(get_resolver),
) -> RegisterResponse:
    """Register a user, write the welcome notification and return the listen URL."""
    # Builds (and validates) the URL before anything is written
    listen_url = build_listen_url(resolver.get_database_url(), body.user_id)
    create_welcome_notification(root, body.user_id)
    record_registration()
    structured_log(
        "INFO",
        "User registered",
        user_token=hash_identifier(body.user_id),
        operation="notification.register",
    )
    return RegisterResponse(listen_url=listen_url, user_id=body.user_id)


@router.post("/send-random", status_code=status.HTTP_200_OK, response_class=Response)
def send_random_notification(
    body: SendRandomRequest,
    root: Any = Depends(get_database),
) -> Response:
    """Write a random notification; the content reaches the client through its listener."""
    create_random_notification(root, body.user_id)
    return Response(status_code=status.HTTP_200_OK)


@router.post("/send", response_model=NotificationResponse)
def send_notification(
    body: NotificationRequest,
    root: Any = Depends(get_database),
) -> NotificationResponse:
    """Write a caller-supplied notification."""
    notification_id = create_custom_notification(root, body.user_id, body.title, body.body, body.data)
    return NotificationResponse(message="Notification sent", notification_id=notification_id)


@router.get("/user/{user_id}", response_model=list[NotificationSchema])
def get_user_notifications(user_id: str, root: Any = Depends(get_database)) -> list[NotificationSchema]:
    """Historical notifications for a user, newest first."""
    records = list_notifications(root, build_notification_path(user_id))
    return [_record_to_schema(r) for r in records]


@router.delete("/user/{user_id}", response_model=SuccessResponse)
def clear_user_notifications(user_id: str, root: Any = Depends(get_database)) -> SuccessResponse:
    """Remove every notification stored for a user."""
    path = build_notification_path(user_id)
    delete_notifications(root, path)
    structured_log(
        "INFO",
        "Notifications cleared",
        user_token=hash_identifier(user_id),
        operation="notification.clear",
    )
    return SuccessResponse(message="Notifications cleared")


@router.post("/firebase-path", response_model=NotificationPathResponse)
async def get_firebase_notification_path(body: RegisterRequest) -> NotificationPathResponse:
    """Realtime Database path and hashed ID for a user."""
    return NotificationPathResponse(
        path=build_notification_path(body.user_id),
        hashed_user_id=hash_identifier(body.user_id),
        original_user_id=body.user_id,
    )


@router.get("/test", response_model=ApiTestResponse)
async def test_endpoint() -> ApiTestResponse:
    """Check the API is up."""
    return ApiTestResponse(timestamp=datetime.now(UTC), version=get_settings().api_version_label)


@router.get("/firebase-config", response_model=FirebaseClientConfig)
def get_firebase_config(
    resolver: FirebaseConfigResolver = Depends(get_resolver),
) -> FirebaseClientConfig:
    """Minimal Realtime Database config for client apps."""
    return resolver.get_client_config()
