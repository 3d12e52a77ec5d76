"""Custom exceptions for the notification API."""

from typing import Any, Optional


class NotificationApiError(Exception):
    """Base exception for notification API errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class InvalidArgumentError(NotificationApiError):
    """Raised for an empty identifier or a malformed base URL. Retrying cannot succeed."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message, status_code=400, error_code="InvalidArgument", details=details)


class InternalError(NotificationApiError):
    """Raised when the environment is broken (e.g. digest primitive unavailable)."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message, status_code=500, error_code="InternalError", details=details)


class FirebaseConfigNotFoundError(NotificationApiError):
    """Raised when no configuration source yields a database URL or project ID."""

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(
            message
            or (
                "Firebase Database URL not configured. Either set RTDB_DATABASE_URL, "
                "provide a service account file with a valid project_id, "
                "or set the FIREBASE_DATABASE_URL environment variable"
            ),
            status_code=404,
        )


class RealtimeDatabaseError(NotificationApiError):
    """Raised when a Realtime Database read or write fails."""

    def __init__(
        self,
        message: str,
        status_code: int = 502,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, status_code=status_code, details=details or {})
