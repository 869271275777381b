"""
Cachify — In-Memory Expiring Store

Backing store for the local backend: an LRU-ordered map with per-entry TTL
in milliseconds. Expired entries are dropped lazily on access and by
purge_expired(). Thread-safe.
"""

import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class MemoryStore:
    """
    In-memory key-value store with per-key expiration.

    Features:
    - Per-key TTL in milliseconds
    - Optional LRU eviction when max_size is reached
    - Injectable monotonic clock (seconds) for deterministic tests
    - O(1) get/put/remove operations
    """

    def __init__(
        self,
        max_size: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the store.

        Args:
            max_size: Maximum number of entries (None = unbounded)
            clock: Function returning the current time in seconds
        """
        if max_size is not None and max_size < 1:
            raise ValueError("max_size must be >= 1")

        self.max_size = max_size
        self._clock = clock

        # key -> (value, expiry_time in clock seconds)
        self._data: OrderedDict[str, tuple[Any, float]] = OrderedDict()
        self._evictions = 0

        self._lock = threading.RLock()

    def _is_expired(self, expiry: float) -> bool:
        return self._clock() >= expiry

    def put(self, key: str, value: Any, ttl_ms: float) -> None:
        """Store value under key, replacing any existing entry."""
        expiry = self._clock() + ttl_ms / 1000.0

        with self._lock:
            if key in self._data:
                del self._data[key]
            elif self.max_size is not None and len(self._data) >= self.max_size:
                # Expired entries go first; LRU eviction only if still full
                self._purge_locked()
                if len(self._data) >= self.max_size:
                    evicted_key, _ = self._data.popitem(last=False)
                    self._evictions += 1
                    logger.debug("Evicted key from memory store: %s", evicted_key)

            self._data[key] = (value, expiry)

    def get(self, key: str) -> Any | None:
        """Return the stored value, or None if missing or expired."""
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return None

            value, expiry = entry
            if self._is_expired(expiry):
                del self._data[key]
                return None

            self._data.move_to_end(key)
            return value

    def remove(self, key: str) -> bool:
        """Remove key. Returns True if an entry was removed."""
        with self._lock:
            return self._data.pop(key, None) is not None

    def keys(self) -> list[str]:
        """List keys of all live entries."""
        with self._lock:
            self._purge_locked()
            return list(self._data.keys())

    def size(self) -> int:
        """Number of live entries."""
        with self._lock:
            self._purge_locked()
            return len(self._data)

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._data.clear()

    def purge_expired(self) -> int:
        """Drop all expired entries. Returns the number removed."""
        with self._lock:
            return self._purge_locked()

    def stats(self) -> dict[str, Any]:
        """Store statistics."""
        with self._lock:
            return {
                "size": len(self._data),
                "max_size": self.max_size,
                "evictions": self._evictions,
            }

    def _purge_locked(self) -> int:
        now = self._clock()
        expired = [k for k, (_, expiry) in self._data.items() if now >= expiry]
        for k in expired:
            del self._data[k]
        return len(expired)
