"""
Cachify — Redis Cache Backend

Asynchronous cache backed by a caller-owned redis.asyncio connection:
- JSON serialization for values
- Expiration converted from milliseconds to whole seconds (EX)
- Prefix disposal via SCAN MATCH and chunked DEL

The connection is borrowed. This backend never closes or reconfigures it.

Example:
    redis = Redis.from_url("redis://localhost:6379/0")
    cache = CachifyRedis(redis)
    await cache.set("greeting", {"msg": "hello"}, 60_000)
    val = await cache.get("greeting")
"""

from __future__ import annotations

import json
import logging
import math
import re
from collections.abc import Callable
from typing import Any

from redis.asyncio import Redis

from ..errors import ConfigurationError
from ..interface import CacheBackend, run_producer
from ..serialization import RedisJsonCache, dumps
from ..validators import validate_callable, validate_duration, validate_key

logger = logging.getLogger(__name__)

# Characters with special meaning in redis glob-style patterns
_GLOB_SPECIAL = re.compile(r"([\\*?\[\]])")

DELETE_CHUNK_SIZE = 1000
SCAN_COUNT = 1000


def to_seconds(duration_ms: float) -> int:
    """Convert a millisecond duration to whole seconds, rounding up (min 1)."""
    return max(1, math.ceil(duration_ms / 1000))


def escape_pattern(prefix: str) -> str:
    """Escape glob metacharacters so prefix matches literally."""
    return _GLOB_SPECIAL.sub(r"\\\1", prefix)


class CachifyRedis(CacheBackend):
    """
    Redis cache backend with JSON serialization.

    Notes:
    - Keys are used verbatim (no namespace prefix).
    - Values are stored as UTF-8 JSON strings.
    - Redis I/O errors are not retried and propagate to the caller.
    """

    backend_name = "redis"

    def __init__(self, connection: Redis) -> None:
        """
        Initialize the redis backend.

        Args:
            connection: Connected redis.asyncio client owned by the caller

        Raises:
            ConfigurationError: If connection is None
        """
        if connection is None:
            raise ConfigurationError("Redis connection object is required.")

        super().__init__()
        self.redis = connection
        self.json = RedisJsonCache(self)

    @staticmethod
    def _from_json(data: str | bytes | None) -> Any | None:
        """Deserialize a stored payload. Returns raw data if it is not JSON."""
        if data is None:
            return None
        try:
            if isinstance(data, bytes):
                data = data.decode("utf-8")
            return json.loads(data)
        except ValueError as e:
            # UnicodeDecodeError is a ValueError too
            logger.warning(
                f"Failed to decode JSON from cache, returning raw data: {e}",
                extra={"data_preview": data[:100], "error": str(e)},
            )
            return data

    async def set(self, key: str, value: Any, duration: float) -> None:
        """
        Store a value.

        Raises:
            InvalidArgumentError: If key or duration is invalid
            SerializationError: If value is not JSON-serializable
        """
        validate_key(key)
        validate_duration(duration)
        payload = dumps(key, value)
        await self.redis.set(key, payload, ex=to_seconds(duration))
        self._trace("Set cache for key", key)

    async def get(self, key: str) -> Any | None:
        validate_key(key)
        return self._from_json(await self.redis.get(key))

    async def dispose(self, key: str) -> None:
        validate_key(key)
        await self.redis.delete(key)
        self._trace("Disposed cache for key", key)

    async def dispose_prefix(self, prefix: str) -> None:
        """
        Remove every key that starts with prefix.

        Implementation: SCAN MATCH "<prefix>*" and DEL in chunks.
        """
        validate_key(prefix)
        pattern = f"{escape_pattern(prefix)}*"

        deleted = 0
        chunk: list[Any] = []
        async for k in self.redis.scan_iter(match=pattern, count=SCAN_COUNT):
            chunk.append(k)
            if len(chunk) >= DELETE_CHUNK_SIZE:
                deleted += int(await self.redis.delete(*chunk))
                chunk = []
        if chunk:
            deleted += int(await self.redis.delete(*chunk))

        logger.debug("Disposed %d redis key(s) with prefix %s", deleted, prefix)
        self._trace("Disposed cache for keys with prefix", prefix)

    async def cachify(self, key: str, producer: Callable[[], Any], duration: float) -> Any:
        validate_key(key)
        validate_duration(duration)
        validate_callable(producer)

        cached = await self.get(key)
        if cached is not None:
            self._trace("Cache hit for key", key)
            return cached

        fresh = await run_producer(key, producer)
        await self.set(key, fresh, duration)
        self._trace("Cache miss for key", key)
        return fresh
