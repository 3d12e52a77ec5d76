"""Deterministic identifier hashing and notification path construction.

A raw user identifier never appears in a storage path. It is normalized
(surrounding whitespace stripped, lowercased) and replaced by the first
``TOKEN_LENGTH`` hex characters of its SHA-256 digest::

    hash_identifier("  User123 ")           -> "e606e38b0d8c"
    build_notification_path("user123")      -> "notifications/e606e38b0d8c"
    build_listen_url("https://db.example.com/", "user123")
        -> "https://db.example.com/notifications/e606e38b0d8c"

Every function here is pure and safe to call from any thread.
"""

from __future__ import annotations

import hashlib
from urllib.parse import urlsplit

from notify_api.core.errors import InternalError, InvalidArgumentError

NOTIFICATION_NAMESPACE = "notifications"
HASH_ALGORITHM = "sha256"
# 48 bits. Revisit against the expected user population, see expected_collisions().
TOKEN_LENGTH = 12


def _fold_char(c: str) -> str:
    # Simple (one-to-one) lowercase mapping: "İ" -> "i", "Σ" -> "σ" regardless of position
    lowered = c.lower()
    return lowered[0] if lowered else c


def normalize_identifier(identifier: str) -> str:
    """Strip surrounding whitespace and lowercase per character; reject empty input.

    ``str.lower()`` on the whole string applies context rules (final sigma)
    and multi-character mappings, so tokens would drift from clients that
    use an invariant per-character fold.
    """
    if not isinstance(identifier, str) or not identifier.strip():
        raise InvalidArgumentError("UserId cannot be null or empty", details={"field": "userId"})
    return "".join(_fold_char(c) for c in identifier.strip())


def hash_identifier(identifier: str) -> str:
    """Return the 12-char lowercase hex token for ``identifier``."""
    normalized = normalize_identifier(identifier)
    try:
        digest = hashlib.new(HASH_ALGORITHM, normalized.encode("utf-8"))
    except ValueError as exc:
        raise InternalError(
            f"Hash algorithm unavailable: {HASH_ALGORITHM}",
            details={"algorithm": HASH_ALGORITHM},
        ) from exc
    return digest.hexdigest()[:TOKEN_LENGTH]


def build_notification_path(identifier: str) -> str:
    """Return ``notifications/<token>`` for ``identifier``."""
    return f"{NOTIFICATION_NAMESPACE}/{hash_identifier(identifier)}"


def _validate_base_url(base_url: str) -> None:
    if not isinstance(base_url, str) or not base_url.strip():
        raise InvalidArgumentError("Base URL cannot be empty", details={"field": "baseUrl"})
    try:
        parts = urlsplit(base_url)
    except ValueError as exc:
        raise InvalidArgumentError(
            f"Malformed base URL: {base_url}", details={"field": "baseUrl"}
        ) from exc
    if not parts.scheme or not parts.netloc or base_url != base_url.strip():
        raise InvalidArgumentError(
            f"Base URL must be an absolute URL: {base_url}", details={"field": "baseUrl"}
        )


def build_listen_url(base_url: str, identifier: str) -> str:
    """Return ``<base_url>/notifications/<token>``.

    Exactly one trailing slash is dropped from ``base_url``; nothing else
    is corrected.
    """
    _validate_base_url(base_url)
    base = base_url[:-1] if base_url.endswith("/") else base_url
    return f"{base}/{build_notification_path(identifier)}"


def expected_collisions(population: int, bits: int = TOKEN_LENGTH * 4) -> float:
    """Birthday-bound expected number of colliding pairs among ``population`` tokens."""
    if population < 2:
        return 0.0
    pairs = population * (population - 1) / 2
    return pairs / float(2**bits)
