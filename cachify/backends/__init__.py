"""
Cachify — Cache Backends

Exports the local and redis backend implementations.
"""

from .local import CachifyLocal
from .redis import CachifyRedis

__all__ = [
    "CachifyLocal",
    "CachifyRedis",
]
