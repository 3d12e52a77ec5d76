"""Structured logging for Cloud Logging.

Entries are single-line JSON by default; ``LOG_FORMAT=readable`` switches to
``[LEVEL] message key=value`` lines for local runs. Raw user identifiers are
never logged, only their hashed ``user_token``.
"""

import json
import logging
import os
import re
import sys
from datetime import UTC, datetime
from typing import Any, Optional

_logger = logging.getLogger("notify_api")

REDACTED = "***REDACTED***"

# Service account material and generic credentials
SECRET_PATTERNS = (
    re.compile(r"(private_key|api_key|token|secret|password)\s*[:=]\s*['\"]?[\w/+=-]{20,}['\"]?", re.I),
    re.compile(r"-----BEGIN [A-Z ]*PRIVATE KEY-----.*?-----END [A-Z ]*PRIVATE KEY-----", re.S),
)
_SENSITIVE_KEYS = ("private_key", "api_key", "token", "secret", "password", "authorization")

# Fields shown after the message in readable mode, in this order
_READABLE_FIELDS = ("user_token", "operation", "duration_ms")


def _redact(message: str) -> str:
    for pat in SECRET_PATTERNS:
        message = pat.sub(lambda m: f"{m.group(1)}={REDACTED}" if m.lastindex else REDACTED, message)
    return message


def _redact_dict(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {
            k: REDACTED if any(s in str(k).lower() for s in _SENSITIVE_KEYS) else _redact_dict(v)
            for k, v in obj.items()
        }
    if isinstance(obj, list):
        return [_redact_dict(i) for i in obj]
    if isinstance(obj, str):
        return _redact(obj)
    return obj


def _iso(ts: datetime) -> str:
    return ts.isoformat().replace("+00:00", "Z")


def _level_no(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def _use_json() -> bool:
    return os.getenv("LOG_FORMAT", "json").lower() == "json"


def structured_log(
    level: str,
    message: str,
    *,
    user_token: Optional[str] = None,
    operation: Optional[str] = None,
    duration_ms: Optional[float] = None,
    metadata: Optional[dict[str, Any]] = None,
    error: Optional[dict[str, Any]] = None,
) -> None:
    """Emit one log entry. ``user_token`` is the hashed identifier."""
    optional = {
        "user_token": user_token,
        "operation": operation,
        "duration_ms": round(duration_ms, 2) if duration_ms is not None else None,
        "metadata": _redact_dict(metadata) if metadata else None,
        "error": _redact_dict(error) if error else None,
    }
    payload: dict[str, Any] = {
        "severity": level.upper(),
        "message": _redact(message),
        "timestamp": _iso(datetime.now(UTC)),
        **{k: v for k, v in optional.items() if v is not None},
    }
    line = json.dumps(payload) if _use_json() else _format_readable(payload)
    _logger.log(_level_no(payload["severity"]), line)


def _format_readable(payload: dict[str, Any]) -> str:
    parts = [f"[{payload['severity']}]", payload["message"]]
    parts.extend(f"{k}={payload[k]}" for k in _READABLE_FIELDS if k in payload)
    if "error" in payload:
        parts.append(f"error={payload['error'].get('message', '')}")
    return " ".join(parts)


class JsonFormatter(logging.Formatter):
    """Single-line JSON for records that did not come from ``structured_log``."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if message.startswith("{") and message.endswith("}"):
            return message
        payload: dict[str, Any] = {
            "severity": record.levelname,
            "message": _redact(message),
            "timestamp": _iso(datetime.fromtimestamp(record.created, tz=UTC)),
            "logger": record.name,
        }
        if record.exc_info and record.exc_info[0]:
            payload["error"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "stack_trace": self.formatException(record.exc_info),
            }
        return json.dumps(payload)


def configure_logging(log_level: str = "INFO") -> None:
    """Attach a stdout handler to the root logger (once)."""
    level = _level_no(log_level)
    root = logging.getLogger()
    root.setLevel(level)
    if root.handlers:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter() if _use_json() else logging.Formatter("%(message)s"))
    root.addHandler(handler)
