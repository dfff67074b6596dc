"""In-memory TTL cache for metadata lookups and query responses."""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    stored_at: float
    ttl: float

    def expired(self, now: float) -> bool:
        return now - self.stored_at > self.ttl


class TTLCache:
    """
    Process-wide key/value cache with lazy expiry.

    Entries are replaced wholesale and never mutated, so a lock around the
    dict operations is enough for concurrent requests. Expired entries are
    evicted when they are next read; there is no background sweep.

    Empty values (None, {}, [], "") are never stored, so a failed upstream
    lookup is retried on the next request instead of being pinned.
    """

    def __init__(self, default_ttl: float, name: str = "cache", clock=time.monotonic) -> None:
        """
        Initialize the cache.

        Args:
            default_ttl: Lifetime of an entry in seconds
            name: Label used in log messages
            clock: Monotonic time source (overridable in tests)
        """
        self.default_ttl = default_ttl
        self.name = name
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None if missing or expired."""
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.expired(now):
                del self._entries[key]
                logger.debug(f"{self.name}: expired {key}")
                return None
        logger.debug(f"{self.name}: hit {key}")
        return entry.value

    def set(self, key: str, value: Any, ttl: float | None = None) -> bool:
        """
        Store a value.

        Returns:
            True if stored, False if the value was empty and skipped
        """
        if not value:
            return False
        entry = CacheEntry(value=value, stored_at=self._clock(), ttl=ttl or self.default_ttl)
        with self._lock:
            self._entries[key] = entry
        return True

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
