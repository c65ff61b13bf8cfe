"""
Query cache for the API client.

Entries are keyed by tuples such as ``("patients",)`` or
``("patients", "<id>", "labs")``.  Invalidation works on key prefixes:
invalidating ``("patients",)`` drops every key starting with it.  Nothing
expires on its own; callers invalidate after each mutation.
"""
from __future__ import annotations

from threading import RLock
from typing import Any, Callable, Hashable

Key = tuple[Hashable, ...]

_MISSING = object()


class QueryCache:
    def __init__(self):
        self._entries: dict[Key, Any] = {}
        self._lock = RLock()

    def __contains__(self, key: Key) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: Key, default=None):
        return self._entries.get(key, default)

    def set(self, key: Key, value) -> None:
        with self._lock:
            self._entries[key] = value

    def fetch(self, key: Key, loader: Callable[[], Any]):
        """Return the cached value for ``key``, loading and storing it on a miss."""
        value = self._entries.get(key, _MISSING)
        if value is _MISSING:
            value = loader()
            self.set(key, value)
        return value

    def invalidate(self, *prefixes: Key) -> int:
        """Drop every entry whose key starts with one of ``prefixes``."""
        with self._lock:
            stale = [k for k in self._entries if any(k[:len(p)] == p for p in prefixes)]
            for key in stale:
                del self._entries[key]
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
