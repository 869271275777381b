"""
Cachify — Core Error Types

Defines the exception hierarchy shared by both cache backends and the facade.
Every exception raised by the package itself inherits from CachifyError, so
callers can tell cache infrastructure failures apart from failures raised by
their own producers (which are never wrapped).
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """
    Standard error codes carried by CachifyError instances.

    Used for structured logging and for callers that branch on the failure kind.
    """

    CACHIFY_ERROR = "CACHIFY_ERROR"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    SERIALIZATION_ERROR = "SERIALIZATION_ERROR"


class CachifyError(Exception):
    """Base exception for all Cachify errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        code: ErrorCode = ErrorCode.CACHIFY_ERROR,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.code = code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for structured logs."""
        return {
            "error": self.__class__.__name__,
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class InvalidArgumentError(CachifyError):
    """Raised when a key, duration, producer or flag fails validation."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, details, code=ErrorCode.INVALID_ARGUMENT)


class ConfigurationError(CachifyError):
    """Raised when the mode is unknown or a required collaborator is missing."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, details, code=ErrorCode.CONFIGURATION_ERROR)


class SerializationError(CachifyError):
    """Raised when a value cannot be converted to or from JSON."""

    def __init__(self, key: str, action: str, cause: Exception):
        message = f"Failed to {action} for key {key}: {cause}"
        super().__init__(
            message,
            {"key": key, "action": action, "error": str(cause)},
            code=ErrorCode.SERIALIZATION_ERROR,
        )
        self.key = key
