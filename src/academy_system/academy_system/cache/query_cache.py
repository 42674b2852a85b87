"""Query/mutation cache.

Entries are keyed by the shape of the query that produced them, e.g.
``("daily_logs", "date", "2024-06-05")``. Mutations either invalidate the
affected keys (the next read goes back to the store) or patch an entry
optimistically and restore a snapshot when the write fails.

Entries expire ``ttl`` seconds after they were stored and the least recently
used entry is dropped once ``maxsize`` is reached, so writes made by another
process become visible after at most ``ttl`` seconds. Expiry and eviction do
not notify listeners.
"""
from __future__ import annotations

import copy
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Hashable, Tuple

from cachetools import TTLCache

from ..core.constants import DEFAULT_QUERY_CACHE_MAXSIZE, DEFAULT_QUERY_CACHE_TTL_SECONDS

QueryKey = Tuple[Hashable, ...]
Listener = Callable[[QueryKey, Any], None]

_MISSING = object()


@dataclass(frozen=True)
class Snapshot:
    key: QueryKey
    value: Any
    present: bool


class QueryCache:
    def __init__(
        self,
        maxsize: int = DEFAULT_QUERY_CACHE_MAXSIZE,
        ttl: float = DEFAULT_QUERY_CACHE_TTL_SECONDS,
        timer: Callable[[], float] = time.monotonic,
    ):
        self._entries: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl, timer=timer)
        self._listeners: list[Listener] = []
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            self._entries.expire()
            return len(self._entries)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(key, value)`` on every change; ``value`` is None on removal.

        Returns an unsubscribe function.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, key: QueryKey, value: Any) -> None:
        for listener in list(self._listeners):
            listener(key, value)

    def contains(self, key: QueryKey) -> bool:
        with self._lock:
            return key in self._entries

    def set(self, key: QueryKey, value: Any) -> None:
        with self._lock:
            self._entries[key] = value
            self._notify(key, value)

    def update(self, key: QueryKey, updater: Callable[[Any], Any]) -> Any:
        """Apply ``updater`` to the current value (None when absent) and store the result."""
        with self._lock:
            value = updater(self._entries.get(key))
            self._entries[key] = value
            self._notify(key, value)
            return value

    def fetch(self, key: QueryKey, loader: Callable[[], Any]) -> Any:
        """Read-through: return the cached value or load and cache it.

        The loader runs outside the lock. A load that finishes after a newer
        write still overwrites the entry.
        """
        with self._lock:
            cached = self._entries.get(key, _MISSING)
        if cached is not _MISSING:
            return cached
        value = loader()
        self.set(key, value)
        return value

    def snapshot(self, key: QueryKey) -> Snapshot:
        with self._lock:
            value = self._entries.get(key, _MISSING)
            if value is _MISSING:
                return Snapshot(key=key, value=None, present=False)
            return Snapshot(key=key, value=copy.copy(value), present=True)

    def restore(self, snap: Snapshot) -> None:
        with self._lock:
            if snap.present:
                self._entries[snap.key] = snap.value
                self._notify(snap.key, snap.value)
            elif self._entries.pop(snap.key, _MISSING) is not _MISSING:
                self._notify(snap.key, None)

    def invalidate(self, key: QueryKey) -> None:
        with self._lock:
            if self._entries.pop(key, _MISSING) is not _MISSING:
                self._notify(key, None)

    def invalidate_prefix(self, prefix: QueryKey) -> None:
        self.invalidate_where(lambda key: key[: len(prefix)] == prefix)

    def invalidate_where(self, predicate: Callable[[QueryKey], bool]) -> None:
        with self._lock:
            stale = [k for k in self._entries if predicate(k)]
            for key in stale:
                if self._entries.pop(key, _MISSING) is not _MISSING:
                    self._notify(key, None)
