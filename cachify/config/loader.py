"""
Cachify — Configuration Loader

Loads and validates configuration from environment variables and .env files.
Provides a memoized configuration instance for the process.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import ConfigurationError
from .schemas import CachifyConfig

logger = logging.getLogger(__name__)

_config_instance: CachifyConfig | None = None


def load_config(
    env_file: str | None = None,
    reload: bool = False,
) -> CachifyConfig:
    """
    Load configuration from environment variables and .env file.

    The mode is read from CACHIFY_MODE, falling back to ENVIRONMENT.

    Args:
        env_file: Path to .env file (default: .env in the working directory)
        reload: Force reload even if config already loaded

    Returns:
        Validated CachifyConfig instance

    Raises:
        ConfigurationError: If configuration is invalid (e.g. unknown mode)
    """
    global _config_instance

    if _config_instance is not None and not reload:
        return _config_instance

    env_path = Path(env_file) if env_file else Path.cwd() / ".env"

    if env_path.exists():
        logger.info(f"Loading environment from {env_path}")
        try:
            load_dotenv(env_path, override=True)
        except Exception as e:
            logger.error(
                f"Failed to load .env file from {env_path}: {e}",
                extra={"path": str(env_path), "error": str(e)},
                exc_info=True,
            )
            raise ConfigurationError(
                f"Failed to load environment file: {e}",
                details={"path": str(env_path), "error": str(e)},
            ) from e
    else:
        logger.debug("No .env file found, using environment variables only")

    max_size = os.getenv("CACHIFY_LOCAL_MAX_SIZE")
    config_dict = {
        "mode": os.getenv("CACHIFY_MODE") or os.getenv("ENVIRONMENT", "development"),
        "log_level": os.getenv("CACHIFY_LOG_LEVEL", "INFO").upper(),
        "debug": os.getenv("CACHIFY_DEBUG", "false").lower() == "true",
        "local_max_size": max_size or None,
    }

    try:
        _config_instance = CachifyConfig(**config_dict)  # type: ignore[arg-type]
    except ValidationError as e:
        logger.error(
            f"Configuration validation failed: {e}",
            extra={"validation_errors": e.errors()},
        )
        raise ConfigurationError(
            "Configuration validation failed. Check your environment variables.",
            details={"validation_errors": e.errors()},
        ) from e

    logger.info(
        f"Configuration loaded (mode: {_config_instance.mode.value})",
        extra={"mode": _config_instance.mode.value, "debug": _config_instance.debug},
    )
    return _config_instance


def get_config() -> CachifyConfig:
    """
    Get the current configuration instance, loading it on first access.
    """
    if _config_instance is None:
        return load_config()

    return _config_instance


def reload_config(env_file: str | None = None) -> CachifyConfig:
    """Force reload configuration."""
    return load_config(env_file=env_file, reload=True)


def reset_config() -> None:
    """
    Drop the memoized configuration.

    Warning: Only use this in testing contexts.
    """
    global _config_instance
    _config_instance = None
