"""
Cachify — JSON Namespace

Exposed on every backend as ``backend.json``. Values are stored as JSON
strings through the backend's own set(), and parsed back on get().
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from .errors import SerializationError
from .validators import validate_duration, validate_key

if TYPE_CHECKING:
    from .backends.local import CachifyLocal
    from .backends.redis import CachifyRedis


def dumps(key: str, value: Any) -> str:
    """Serialize value to a JSON string, wrapping failures with the key."""
    try:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise SerializationError(key, "stringify value", e) from e


def loads(key: str, data: str | bytes | bytearray) -> Any:
    """Parse a JSON string, wrapping failures with the key."""
    try:
        return json.loads(data)
    except (TypeError, ValueError) as e:
        raise SerializationError(key, "parse JSON", e) from e


class LocalJsonCache:
    """Synchronous JSON helpers bound to a local backend."""

    def __init__(self, backend: CachifyLocal) -> None:
        self._backend = backend

    def get(self, key: str) -> Any | None:
        """
        Get a JSON cache entry.

        Returns:
            Parsed value, or None if not found

        Raises:
            SerializationError: If the stored data is not valid JSON
        """
        data = self._backend.get(key)
        if data is None:
            return None
        return loads(key, data)

    def set(self, key: str, value: Any, duration: float) -> None:
        """
        Set a JSON cache entry.

        Raises:
            SerializationError: If value cannot be serialized
        """
        validate_key(key)
        validate_duration(duration)
        self._backend.set(key, dumps(key, value), duration)


class RedisJsonCache:
    """Asynchronous JSON helpers bound to a redis backend."""

    def __init__(self, backend: CachifyRedis) -> None:
        self._backend = backend

    async def get(self, key: str) -> Any | None:
        """
        Get a JSON cache entry.

        The redis backend already decodes one JSON layer in get(); this
        parses the JSON document stored by set() below.
        """
        data = await self._backend.get(key)
        if data is None:
            return None
        return loads(key, data)

    async def set(self, key: str, value: Any, duration: float) -> None:
        """Set a JSON cache entry."""
        validate_key(key)
        validate_duration(duration)
        await self._backend.set(key, dumps(key, value), duration)
