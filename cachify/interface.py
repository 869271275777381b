"""
Cachify — Cache Backend Interface

Defines the abstract interface that both cache backends implement.

The local backend completes set/get/dispose/dispose_prefix synchronously;
the redis backend implements the same operations as coroutines. cachify()
is a coroutine on both, since the producer may suspend.
"""

import inspect
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from .validators import validate_flag

logger = logging.getLogger(__name__)


async def run_producer(key: str, producer: Callable[[], Any]) -> Any:
    """
    Invoke a cachify producer, awaiting its result if it is awaitable.

    Failures are logged and re-raised unchanged.
    """
    try:
        result = producer()
        if inspect.isawaitable(result):
            result = await result
        return result
    except Exception as e:
        logger.error(
            f"Error fetching fresh data for key {key}: {e}",
            extra={"key": key, "error": str(e)},
            exc_info=True,
        )
        raise


class CacheBackend(ABC):
    """
    Abstract base class for cache backends.

    Durations are expiration times in milliseconds. The absence marker
    returned by get() is None.
    """

    #: Backend identifier used in logs ("local" or "redis")
    backend_name: str = "abstract"

    def __init__(self) -> None:
        self._debug = False

    @property
    def debug(self) -> bool:
        """Whether trace lines are emitted for cache events."""
        return self._debug

    def set_debug(self, flag: bool) -> None:
        """
        Enable or disable trace output.

        Raises:
            InvalidArgumentError: If flag is not a bool
        """
        validate_flag(flag)
        self._debug = flag

    def _trace(self, message: str, key: str) -> None:
        """Emit a trace line when debug is on."""
        if self._debug:
            logger.info(
                f"{message}: {key}",
                extra={"backend": self.backend_name, "key": key},
            )

    @abstractmethod
    def set(self, key: str, value: Any, duration: float) -> Any:
        """
        Store a value under key, overwriting any existing entry.

        Args:
            key: Cache key
            value: Value to cache
            duration: Expiration time in milliseconds
        """

    @abstractmethod
    def get(self, key: str) -> Any:
        """
        Retrieve a value.

        Returns:
            Cached value, or None if missing or expired
        """

    @abstractmethod
    def dispose(self, key: str) -> Any:
        """Remove key if present."""

    @abstractmethod
    def dispose_prefix(self, prefix: str) -> Any:
        """Remove every key starting with prefix."""

    @abstractmethod
    async def cachify(self, key: str, producer: Callable[[], Any], duration: float) -> Any:
        """
        Return the cached value for key, producing and caching it on a miss.

        Args:
            key: Cache key
            producer: Zero-argument callable, sync or async
            duration: Expiration time in milliseconds for a produced value

        Returns:
            Cached or freshly produced value
        """
