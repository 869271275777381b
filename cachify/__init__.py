"""
Cachify — Unified Cache Facade

One cache API (set, get, dispose, dispose_prefix, cachify, json) over an
in-process memory cache in development and redis in production.

Usage:
    from cachify import Cachify

    cache = Cachify(redis_connection=redis, mode="production").instance
    await cache.set("key", "value", 60_000)
    value = await cache.get("key")
"""

__version__ = "1.0.0"

from .backends.local import CachifyLocal
from .backends.redis import CachifyRedis
from .config import CachifyConfig, Mode, get_config, load_config
from .errors import (
    CachifyError,
    ConfigurationError,
    ErrorCode,
    InvalidArgumentError,
    SerializationError,
)
from .facade import Cachify
from .interface import CacheBackend
from .logging_setup import configure_logging
from .store import MemoryStore

__all__ = [
    # Facade
    "Cachify",
    # Backends
    "CacheBackend",
    "CachifyLocal",
    "CachifyRedis",
    "MemoryStore",
    # Errors
    "CachifyError",
    "InvalidArgumentError",
    "ConfigurationError",
    "SerializationError",
    "ErrorCode",
    # Configuration
    "CachifyConfig",
    "Mode",
    "get_config",
    "load_config",
    "configure_logging",
]
