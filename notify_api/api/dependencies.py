"""FastAPI dependencies: Realtime Database root and Firebase config."""

from typing import Any

from notify_api.core.config import get_settings
from notify_api.services import memory_repo
from notify_api.services.firebase_config import FirebaseConfigResolver, get_config_resolver
from notify_api.services.realtime_repo import get_firebase_app, get_root_reference


def get_realtime_root(database_url: str, service_account_path: str) -> Any:
    """Return root reference of the Firebase Realtime Database."""
    return get_root_reference(get_firebase_app(database_url, service_account_path))


def get_resolver() -> FirebaseConfigResolver:
    """Return the process-wide Firebase configuration resolver."""
    return get_config_resolver()


def get_database() -> Any:
    """Return the root reference notifications are written under."""
    settings = get_settings()
    if settings.use_in_memory_store:
        return memory_repo.get_root_reference()
    database_url = get_resolver().get_database_url()
    return get_realtime_root(database_url, settings.firebase_service_account_path)
