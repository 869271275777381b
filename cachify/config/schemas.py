"""
Cachify — Configuration Schemas

Typed configuration models using Pydantic for validation.
All configuration comes from environment variables (see loader.py).
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Mode(str, Enum):
    """Cache mode. Selects which backend the facade builds."""

    DEVELOPMENT = "development"  # local in-memory backend
    PRODUCTION = "production"  # redis backend


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class CachifyConfig(BaseModel):
    """Root configuration for Cachify."""

    mode: Mode = Field(default=Mode.DEVELOPMENT, description="Cache mode (development=local, production=redis)")
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    debug: bool = Field(default=False, description="Emit trace lines for cache events")
    local_max_size: int | None = Field(
        default=None,
        ge=1,
        description="Max entries in the local store (None = unbounded)",
    )

    model_config = ConfigDict(validate_assignment=True)
