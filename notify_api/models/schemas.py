"""Pydantic request/response models for the notification API.

Field names are camelCase on the wire to match the browser client.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# --- Request ---
class RegisterRequest(_CamelModel):
    """POST /api/notification/register and /firebase-path body."""

    # Emptiness is checked by the hasher so it maps to InvalidArgument (400)
    user_id: str = Field(default="", alias="userId", max_length=256)


class SendRandomRequest(_CamelModel):
    """POST /api/notification/send-random body."""

    user_id: str = Field(default="", alias="userId", max_length=256)


class NotificationRequest(_CamelModel):
    """POST /api/notification/send body."""

    user_id: str = Field(default="", alias="userId", max_length=256)
    title: str = Field(..., min_length=1, max_length=200)
    body: str = Field(..., min_length=1, max_length=2000)
    data: Optional[dict[str, str]] = None


# --- Response ---
class RegisterResponse(_CamelModel):
    message: str = "User registered successfully"
    listen_url: str = Field(..., alias="listenUrl")
    user_id: str = Field(..., alias="userId")


class NotificationResponse(_CamelModel):
    success: bool = True
    message: str
    notification_id: str = Field(..., alias="notificationId")


class SuccessResponse(_CamelModel):
    success: bool = True
    message: str


class NotificationPathResponse(_CamelModel):
    path: str
    hashed_user_id: str = Field(..., alias="hashedUserId")
    original_user_id: str = Field(..., alias="originalUserId")


class NotificationSchema(_CamelModel):
    """Single notification as returned to clients."""

    id: Optional[str] = None
    title: str
    body: str
    timestamp: str
    type: str
    data: dict[str, str] = Field(default_factory=dict)


class FirebaseClientConfig(_CamelModel):
    """Minimal client config for the Realtime Database SDK."""

    project_id: str = Field(..., alias="projectId")
    database_url: str = Field(..., alias="databaseURL")


class ApiTestResponse(_CamelModel):
    message: str = "Notification API is working"
    timestamp: datetime
    version: str


class ErrorResponse(BaseModel):
    """Shape produced by the NotificationApiError handler."""

    error: str
    message: str
    details: dict = Field(default_factory=dict)
