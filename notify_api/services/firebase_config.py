"""Firebase Realtime Database URL and project resolution.

The database URL comes from the first source that yields a value:

1. explicit ``RTDB_DATABASE_URL`` setting
2. derived from the service account's ``project_id`` and the configured region
3. ``FIREBASE_DATABASE_URL`` environment variable
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from threading import Lock
from typing import Any, Callable, Optional
from urllib.parse import urlsplit

from notify_api.core.config import Settings, get_settings
from notify_api.core.errors import FirebaseConfigNotFoundError
from notify_api.core.logging import structured_log
from notify_api.models.schemas import FirebaseClientConfig

DATABASE_URL_ENV_VAR = "FIREBASE_DATABASE_URL"
DEFAULT_RTDB_SUFFIX = "-default-rtdb"
LEGACY_REGION = "us-central1"


def build_database_url(project_id: str, region: str) -> str:
    """Return the default Realtime Database URL for ``project_id`` in ``region``."""
    if region == LEGACY_REGION:
        return f"https://{project_id}{DEFAULT_RTDB_SUFFIX}.firebaseio.com/"
    return f"https://{project_id}{DEFAULT_RTDB_SUFFIX}.{region}.firebasedatabase.app/"


def project_id_from_database_url(database_url: str) -> Optional[str]:
    """Extract ``<project>`` from ``https://<project>-default-rtdb.<...>``."""
    host = urlsplit(database_url).hostname or ""
    label = host.split(".")[0] if host else ""
    if not label:
        return None
    return label.replace(DEFAULT_RTDB_SUFFIX, "") or None


class FirebaseConfigResolver:
    """Resolves and caches database URL, project ID and service account."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._lock = Lock()
        self._database_url: Optional[str] = None
        self._project_id: Optional[str] = None
        self._service_account: Optional[dict[str, Any]] = None
        self.database_url_providers: list[Callable[[], Optional[str]]] = [
            self._from_explicit_setting,
            self._from_service_account,
            self._from_environment,
        ]

    # --- providers ---
    def _from_explicit_setting(self) -> Optional[str]:
        value = self._settings.rtdb_database_url.strip()
        if value:
            structured_log("INFO", "Using explicitly configured Firebase Database URL", operation="config.database_url")
        return value or None

    def _from_service_account(self) -> Optional[str]:
        account = self.get_service_account()
        project_id = (account or {}).get("project_id")
        if not project_id:
            return None
        structured_log(
            "INFO",
            "Auto-derived Firebase Database URL from service account",
            operation="config.database_url",
            metadata={"project_id": project_id, "region": self._settings.firebase_region},
        )
        return build_database_url(str(project_id), self._settings.firebase_region)

    def _from_environment(self) -> Optional[str]:
        value = os.getenv(DATABASE_URL_ENV_VAR, "").strip()
        if value:
            structured_log("INFO", "Using Firebase Database URL from environment variable", operation="config.database_url")
        return value or None

    # --- public ---
    def get_service_account(self) -> Optional[dict[str, Any]]:
        """Load the service account JSON; None when missing or unreadable."""
        if self._service_account is not None:
            return self._service_account
        path = Path(self._settings.firebase_service_account_path)
        if not path.is_file():
            structured_log(
                "WARNING",
                "Firebase service account file not found",
                operation="config.service_account",
                metadata={"path": str(path)},
            )
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            structured_log(
                "ERROR",
                "Failed to load Firebase service account",
                operation="config.service_account",
                metadata={"path": str(path)},
                error={"type": type(e).__name__, "message": str(e)},
            )
            return None
        if not isinstance(data, dict):
            return None
        self._service_account = data
        structured_log("INFO", "Firebase service account loaded", operation="config.service_account")
        return data

    def get_database_url(self) -> str:
        """Return the database URL from the first provider that has one."""
        with self._lock:
            if self._database_url:
                return self._database_url
            for provider in self.database_url_providers:
                url = provider()
                if url:
                    self._database_url = url
                    return url
        raise FirebaseConfigNotFoundError()

    def get_project_id(self) -> str:
        """Return project ID from the service account, else from the database URL host."""
        if self._project_id:
            return self._project_id
        account = self.get_service_account()
        if account and account.get("project_id"):
            self._project_id = str(account["project_id"])
            return self._project_id
        project_id = project_id_from_database_url(self.get_database_url())
        if not project_id:
            raise FirebaseConfigNotFoundError("Could not determine Firebase project ID")
        self._project_id = project_id
        return project_id

    def get_client_config(self) -> FirebaseClientConfig:
        """Return the minimal config a Realtime Database client needs."""
        database_url = self.get_database_url().rstrip("/")
        return FirebaseClientConfig(project_id=self.get_project_id(), database_url=database_url)


@lru_cache
def get_config_resolver() -> FirebaseConfigResolver:
    """Return process-wide resolver bound to current settings."""
    return FirebaseConfigResolver(get_settings())
