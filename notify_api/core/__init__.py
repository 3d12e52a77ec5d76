"""Core configuration, logging, errors, and telemetry."""

from notify_api.core.config import Settings, get_settings
from notify_api.core.errors import (
    FirebaseConfigNotFoundError,
    InternalError,
    InvalidArgumentError,
    NotificationApiError,
    RealtimeDatabaseError,
)
from notify_api.core.logging import configure_logging, structured_log
from notify_api.core.telemetry import (
    get_metrics,
    get_tracer,
    init_telemetry,
    instrument_fastapi,
    record_notification_sent,
    record_registration,
    record_write_failure,
    span,
)

__all__ = [
    "Settings",
    "get_settings",
    "NotificationApiError",
    "InvalidArgumentError",
    "InternalError",
    "FirebaseConfigNotFoundError",
    "RealtimeDatabaseError",
    "configure_logging",
    "structured_log",
    "init_telemetry",
    "instrument_fastapi",
    "get_tracer",
    "get_metrics",
    "record_registration",
    "record_notification_sent",
    "record_write_failure",
    "span",
]
