"""
Cachify — Local Cache Backend

In-process cache backed by MemoryStore. Every operation except cachify()
completes synchronously. Suitable for development and single-process use.
"""

import logging
from collections.abc import Callable
from typing import Any

from ..interface import CacheBackend, run_producer
from ..serialization import LocalJsonCache
from ..store import MemoryStore
from ..validators import validate_callable, validate_duration, validate_key

logger = logging.getLogger(__name__)


class CachifyLocal(CacheBackend):
    """
    Local in-memory cache backend.

    Values are stored as-is (no serialization). Expiration is enforced by
    the store: expired entries are never returned.
    """

    backend_name = "local"

    def __init__(self, store: MemoryStore | None = None):
        """
        Initialize the local backend.

        Args:
            store: Backing store (a fresh unbounded MemoryStore by default)
        """
        super().__init__()
        self.cache = store if store is not None else MemoryStore()
        self.json = LocalJsonCache(self)

    def set(self, key: str, value: Any, duration: float) -> None:
        """
        Store a value.

        Raises:
            InvalidArgumentError: If key or duration is invalid
        """
        validate_key(key)
        validate_duration(duration)
        self.cache.put(key, value, duration)
        self._trace("Set cache for key", key)

    def get(self, key: str) -> Any | None:
        validate_key(key)
        return self.cache.get(key)

    def dispose(self, key: str) -> None:
        validate_key(key)
        self.cache.remove(key)
        self._trace("Disposed cache for key", key)

    def dispose_prefix(self, prefix: str) -> None:
        """Remove every key that starts with prefix."""
        validate_key(prefix)
        doomed = [k for k in self.cache.keys() if k.startswith(prefix)]
        for k in doomed:
            self.cache.remove(k)
        logger.debug("Disposed %d local key(s) with prefix %s", len(doomed), prefix)
        self._trace("Disposed cache for keys with prefix", prefix)

    async def cachify(self, key: str, producer: Callable[[], Any], duration: float) -> Any:
        validate_key(key)
        validate_duration(duration)
        validate_callable(producer)

        cached = self.get(key)
        if cached is not None:
            self._trace("Cache hit for key", key)
            return cached

        fresh = await run_producer(key, producer)
        self.set(key, fresh, duration)
        self._trace("Cache miss for key", key)
        return fresh
