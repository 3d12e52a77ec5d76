#!/usr/bin/env python3
"""Smoke + timing test for the notification API.

Usage:
  API_BASE=http://localhost:8000 USER_ID=user123 python3 scripts/smoke_notifications.py

Runs register -> send-random -> history and prints a JSON report.
"""

from __future__ import annotations

import json
import os
import sys
import time
from dataclasses import asdict, dataclass

import requests

API_BASE = os.environ.get("API_BASE", "http://localhost:8000").rstrip("/")
USER_ID = os.environ.get("USER_ID", "smoke-user")
NOTIFICATION_API = f"{API_BASE}/api/notification"
TIMEOUT_SECONDS = int(os.environ.get("TIMEOUT_SECONDS", "20"))


@dataclass
class Result:
    health_ok: bool = False
    register_status_code: int | None = None
    register_latency_ms: float | None = None
    listen_url: str | None = None
    send_random_status_code: int | None = None
    history_count: int | None = None
    errors: list[str] | None = None


def _fail(result: Result, message: str) -> None:
    if result.errors is None:
        result.errors = []
    result.errors.append(message)


def main() -> int:
    result = Result(errors=[])

    # 1) health
    try:
        resp = requests.get(f"{API_BASE}/health", timeout=TIMEOUT_SECONDS)
        result.health_ok = resp.status_code == 200 and resp.json().get("status") == "ok"
        if not result.health_ok:
            _fail(result, f"health failed: {resp.status_code} {resp.text[:300]}")
    except requests.RequestException as exc:
        _fail(result, f"health exception: {exc}")

    # 2) register
    try:
        start = time.perf_counter()
        resp = requests.post(f"{NOTIFICATION_API}/register", json={"userId": USER_ID}, timeout=TIMEOUT_SECONDS)
        result.register_latency_ms = round((time.perf_counter() - start) * 1000, 2)
        result.register_status_code = resp.status_code
        if resp.status_code == 200:
            result.listen_url = resp.json().get("listenUrl")
        else:
            _fail(result, f"register failed: {resp.status_code} {resp.text[:300]}")
    except requests.RequestException as exc:
        _fail(result, f"register exception: {exc}")

    # 3) random notification
    try:
        resp = requests.post(f"{NOTIFICATION_API}/send-random", json={"userId": USER_ID}, timeout=TIMEOUT_SECONDS)
        result.send_random_status_code = resp.status_code
        if resp.status_code != 200:
            _fail(result, f"send-random failed: {resp.status_code} {resp.text[:300]}")
    except requests.RequestException as exc:
        _fail(result, f"send-random exception: {exc}")

    # 4) history: welcome + random
    try:
        resp = requests.get(f"{NOTIFICATION_API}/user/{USER_ID}", timeout=TIMEOUT_SECONDS)
        if resp.status_code == 200:
            result.history_count = len(resp.json())
            if result.history_count < 2:
                _fail(result, f"expected at least 2 notifications, got {result.history_count}")
        else:
            _fail(result, f"history failed: {resp.status_code} {resp.text[:300]}")
    except requests.RequestException as exc:
        _fail(result, f"history exception: {exc}")

    print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    return 0 if not result.errors else 1


if __name__ == "__main__":
    sys.exit(main())
