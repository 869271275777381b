"""
Cachify — Argument Validators

Pure checks run at the start of every public cache operation, before the
backing store is touched.
"""

import math
from typing import Any

from .errors import InvalidArgumentError


def validate_key(key: Any) -> None:
    """
    Validate a cache key (or key prefix).

    Raises:
        InvalidArgumentError: If key is not a non-empty string
    """
    if not isinstance(key, str) or not key:
        raise InvalidArgumentError(
            "Invalid key. It should be a non-empty string.",
            details={"key_type": type(key).__name__},
        )


def validate_duration(duration: Any) -> None:
    """
    Validate an expiration time in milliseconds.

    Booleans are rejected even though they are ints.

    Raises:
        InvalidArgumentError: If duration is not a positive, finite number
    """
    if (
        isinstance(duration, bool)
        or not isinstance(duration, (int, float))
        or not math.isfinite(duration)
        or duration <= 0
    ):
        raise InvalidArgumentError(
            "Invalid expiration time. It should be a positive number.",
            details={"duration": repr(duration)},
        )


def validate_callable(producer: Any) -> None:
    """Raise InvalidArgumentError unless producer can be called."""
    if not callable(producer):
        raise InvalidArgumentError(
            "Invalid callback. It should be a function.",
            details={"callback_type": type(producer).__name__},
        )


def validate_flag(flag: Any) -> None:
    """Raise InvalidArgumentError unless flag is a bool."""
    if not isinstance(flag, bool):
        raise InvalidArgumentError(
            "Invalid flag. It should be a boolean.",
            details={"flag_type": type(flag).__name__},
        )
