"""In-process TTL cache.

Entries are ``(stored_at, value)`` pairs. An entry is served only while
``clock() - stored_at < ttl``; expired entries are dropped on read and in bulk
by :meth:`TTLCache.sweep`. State is process-local, so every worker process
holds its own copy.
"""
import threading
import time
from typing import Callable, Dict, Generic, List, Optional, Tuple, TypeVar

from paceon.core.metrics import CACHE_EVICTIONS, CACHE_LOOKUPS

V = TypeVar("V")


class TTLCache(Generic[V]):
    def __init__(
        self,
        ttl_seconds: float = 300,
        max_items: Optional[int] = None,
        name: str = "default",
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl = ttl_seconds
        self.max_items = max_items
        self.name = name
        self._clock = clock
        self._lock = threading.Lock()
        self._store: Dict[str, Tuple[float, V]] = {}

    def _expired(self, stored_at: float, now: float) -> bool:
        return now - stored_at >= self.ttl

    def get(self, key: str) -> Optional[V]:
        """Return the cached value, or None if missing or expired."""
        with self._lock:
            entry = self._store.get(key)
            if entry is not None and self._expired(entry[0], self._clock()):
                del self._store[key]
                CACHE_EVICTIONS.labels(cache=self.name, reason="expired").inc()
                entry = None
        if entry is None:
            CACHE_LOOKUPS.labels(cache=self.name, result="miss").inc()
            return None
        CACHE_LOOKUPS.labels(cache=self.name, result="hit").inc()
        return entry[1]

    def set(self, key: str, value: V) -> None:
        with self._lock:
            if self.max_items and key not in self._store and len(self._store) >= self.max_items:
                # naive eviction: remove oldest
                oldest_key = min(self._store.items(), key=lambda kv: kv[1][0])[0]
                self._store.pop(oldest_key, None)
                CACHE_EVICTIONS.labels(cache=self.name, reason="capacity").inc()
            self._store[key] = (self._clock(), value)

    def invalidate(self, key: str) -> bool:
        with self._lock:
            removed = self._store.pop(key, None) is not None
        if removed:
            CACHE_EVICTIONS.labels(cache=self.name, reason="invalidated").inc()
        return removed

    def clear(self) -> int:
        with self._lock:
            count = len(self._store)
            self._store.clear()
        if count:
            CACHE_EVICTIONS.labels(cache=self.name, reason="invalidated").inc(count)
        return count

    def sweep(self) -> int:
        """Drop every expired entry and return how many were removed."""
        with self._lock:
            now = self._clock()
            expired = [k for k, (stored_at, _) in self._store.items() if self._expired(stored_at, now)]
            for key in expired:
                del self._store[key]
        if expired:
            CACHE_EVICTIONS.labels(cache=self.name, reason="expired").inc(len(expired))
        return len(expired)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._store)

    def __len__(self) -> int:
        return len(self._store)
