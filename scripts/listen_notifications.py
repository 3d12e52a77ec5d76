#!/usr/bin/env python3
"""Print notifications for a user as they arrive.

Usage:
  LISTEN_URL=https://<db>/notifications/<token> python3 scripts/listen_notifications.py
  API_BASE=http://localhost:8000 USER_ID=user123 python3 scripts/listen_notifications.py

With API_BASE + USER_ID the user is registered first and the returned
listen URL is used. Needs application default credentials (or
GOOGLE_APPLICATION_CREDENTIALS) with read access to the database.
"""

from __future__ import annotations

import os
import sys
import threading

import requests

from notify_api.core.logging import configure_logging
from notify_api.models.entities import NotificationRecord
from notify_api.services.realtime_listener import NotificationListener


def _resolve_listen_url() -> str:
    listen_url = os.environ.get("LISTEN_URL", "")
    if listen_url:
        return listen_url
    api_base = os.environ.get("API_BASE", "").rstrip("/")
    user_id = os.environ.get("USER_ID", "")
    if not api_base or not user_id:
        raise SystemExit("Set LISTEN_URL, or API_BASE and USER_ID")
    resp = requests.post(f"{api_base}/api/notification/register", json={"userId": user_id}, timeout=20)
    resp.raise_for_status()
    return resp.json()["listenUrl"]


def _print_notification(notification: NotificationRecord) -> None:
    print(f"[{notification.timestamp}] ({notification.type}) {notification.title}: {notification.body}", flush=True)


def main() -> int:
    configure_logging(os.environ.get("LOG_LEVEL", "INFO"))
    listener = NotificationListener(_print_notification)
    target = listener.subscribe(_resolve_listen_url())
    print(f"Listening on {target.database_url}/{target.path} (Ctrl+C to stop)", flush=True)
    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        pass
    finally:
        listener.unsubscribe()
    return 0


if __name__ == "__main__":
    sys.exit(main())
