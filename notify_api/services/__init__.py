"""Services: identifier hashing, Firebase config, Realtime Database, notifications."""

from notify_api.services.hashing import (
    build_listen_url,
    build_notification_path,
    expected_collisions,
    hash_identifier,
)
from notify_api.services.firebase_config import (
    FirebaseConfigResolver,
    build_database_url,
    get_config_resolver,
)
from notify_api.services.notification_factory import (
    create_custom_notification,
    create_random_notification,
    create_welcome_notification,
)
from notify_api.services.realtime_listener import NotificationListener, parse_listen_url

__all__ = [
    "hash_identifier",
    "build_notification_path",
    "build_listen_url",
    "expected_collisions",
    "FirebaseConfigResolver",
    "build_database_url",
    "get_config_resolver",
    "create_welcome_notification",
    "create_random_notification",
    "create_custom_notification",
    "NotificationListener",
    "parse_listen_url",
]
