"""
Cachify — Cache Facade

Selects and holds exactly one active cache backend based on the mode:

- development -> CachifyLocal (in-process memory)
- production  -> CachifyRedis (caller-supplied redis.asyncio connection)

Examples:
    from cachify import Cachify

    # Explicit mode
    cache = Cachify(mode="development").instance
    cache.set("user:1", {"name": "Ada"}, 60_000)

    # Mode from CACHIFY_MODE / ENVIRONMENT
    cache = Cachify(redis_connection=redis).instance
    user = await cache.cachify("user:1", load_user, 60_000)

    # Bypass the mode switch entirely
    local = Cachify.local()
    remote = Cachify.redis(redis)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, assert_never

from .backends.local import CachifyLocal
from .backends.redis import CachifyRedis
from .config import CachifyConfig, Mode, get_config
from .errors import ConfigurationError
from .store import MemoryStore

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = logging.getLogger(__name__)


def _coerce_mode(value: Mode | str | None) -> Mode:
    """Turn a mode value into a Mode, raising ConfigurationError if unknown."""
    if isinstance(value, Mode):
        return value
    try:
        return Mode(value)
    except ValueError as e:
        raise ConfigurationError(
            f"Unknown environment mode: {value}",
            details={"mode": str(value), "supported": [m.value for m in Mode]},
        ) from e


class Cachify:
    """
    Mode-driven cache switch between a local cache and redis.

    The redis connection is owned by the caller; it is kept across mode
    switches and never closed here.
    """

    def __init__(
        self,
        redis_connection: Redis | None = None,
        mode: Mode | str | None = None,
        config: CachifyConfig | None = None,
    ):
        """
        Create the facade and its initial backend.

        Args:
            redis_connection: Connected redis.asyncio client (required for production)
            mode: Initial mode; read from configuration when None
            config: Configuration to apply to built backends; loaded from the
                environment when None and no mode is given

        Raises:
            ConfigurationError: If the mode is unknown, or production mode is
                selected without a redis connection
        """
        if config is None and mode is None:
            config = get_config()

        self._config = config
        self._redis_connection = redis_connection
        self._mode = _coerce_mode(mode if mode is not None else config.mode)  # type: ignore[union-attr]
        self._instance = self.create_instance()

    def create_instance(self) -> CachifyLocal | CachifyRedis:
        """
        Create the backend for the current mode.

        Returns:
            New backend instance
        """
        if self._mode == Mode.DEVELOPMENT:
            max_size = self._config.local_max_size if self._config else None
            instance: CachifyLocal | CachifyRedis = CachifyLocal(MemoryStore(max_size=max_size))
        elif self._mode == Mode.PRODUCTION:
            if self._redis_connection is None:
                raise ConfigurationError(
                    "Redis connection object is required in production mode.",
                    details={"mode": self._mode.value},
                )
            instance = CachifyRedis(self._redis_connection)
        else:
            assert_never(self._mode)

        if self._config is not None and self._config.debug:
            instance.set_debug(True)

        logger.info(
            "Created %s cache backend for mode '%s'",
            instance.backend_name,
            self._mode.value,
            extra={"mode": self._mode.value, "backend": instance.backend_name},
        )
        return instance

    @property
    def instance(self) -> CachifyLocal | CachifyRedis:
        """The active backend."""
        return self._instance

    @property
    def mode(self) -> str:
        """Current mode value."""
        return self._mode.value

    @mode.setter
    def mode(self, value: Mode | str) -> None:
        """
        Switch mode, replacing the active backend when the mode changes.

        If the new backend cannot be built, the previous mode and backend
        stay active and the error propagates.
        """
        new_mode = _coerce_mode(value)
        if new_mode == self._mode:
            return

        previous = self._mode
        self._mode = new_mode
        try:
            self._instance = self.create_instance()
        except ConfigurationError:
            self._mode = previous
            raise

        logger.info(
            "Switched cache mode from '%s' to '%s'",
            previous.value,
            new_mode.value,
            extra={"from_mode": previous.value, "to_mode": new_mode.value},
        )

    @staticmethod
    def local() -> CachifyLocal:
        """Create a local backend directly, bypassing the mode switch."""
        return CachifyLocal()

    @staticmethod
    def redis(connection: Redis) -> CachifyRedis:
        """Create a redis backend directly, bypassing the mode switch."""
        return CachifyRedis(connection)
