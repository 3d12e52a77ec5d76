"""In-memory reference tree standing in for the Realtime Database (non-persistent).

Mirrors the subset of ``firebase_admin.db.Reference`` the repository uses:
``child``, ``get``, ``set``, ``delete``.
"""

import copy
from threading import Lock
from typing import Any, Optional

# Global store
_tree: dict[str, Any] = {}
_lock = Lock()


def _segments(path: str) -> list[str]:
    return [p for p in path.split("/") if p]


class MemoryReference:
    """Reference to a location in the in-memory tree."""

    def __init__(self, path: str = "/") -> None:
        self.path = "/" + "/".join(_segments(path))

    @property
    def key(self) -> Optional[str]:
        parts = _segments(self.path)
        return parts[-1] if parts else None

    def child(self, path: str) -> "MemoryReference":
        if not path:
            raise ValueError("Child path must be a non-empty string")
        return MemoryReference(f"{self.path}/{path}")

    def get(self, shallow: bool = False) -> Any:
        with _lock:
            node: Any = _tree
            for seg in _segments(self.path):
                if not isinstance(node, dict) or seg not in node:
                    return None
                node = node[seg]
            if shallow and isinstance(node, dict):
                return {k: True for k in node}
            return copy.deepcopy(node) if node != {} else None

    def set(self, value: Any) -> None:
        if value is None:
            raise ValueError("Value must not be None")
        parts = _segments(self.path)
        with _lock:
            if not parts:
                _tree.clear()
                if isinstance(value, dict):
                    _tree.update(copy.deepcopy(value))
                return
            node = _tree
            for seg in parts[:-1]:
                nxt = node.get(seg)
                if not isinstance(nxt, dict):
                    nxt = {}
                    node[seg] = nxt
                node = nxt
            node[parts[-1]] = copy.deepcopy(value)

    def delete(self) -> None:
        parts = _segments(self.path)
        with _lock:
            if not parts:
                _tree.clear()
                return
            chain: list[dict[str, Any]] = [_tree]
            for seg in parts[:-1]:
                nxt = chain[-1].get(seg)
                if not isinstance(nxt, dict):
                    return
                chain.append(nxt)
            chain[-1].pop(parts[-1], None)
            # Empty nodes do not exist in the Realtime Database
            for parent, seg in zip(reversed(chain[:-1]), reversed(parts[:-1])):
                if parent[seg]:
                    break
                del parent[seg]


def get_root_reference() -> MemoryReference:
    return MemoryReference("/")


def reset() -> None:
    """Drop everything (tests and local dev)."""
    with _lock:
        _tree.clear()
