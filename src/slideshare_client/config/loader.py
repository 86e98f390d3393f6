"""Settings loader and singleton manager.

This module handles:
- Environment variable loading from .env files
- Configuration file loading from TOML
- Thread-safe singleton pattern for the Settings instance
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

import toml
from dotenv import load_dotenv
from pydantic import ValidationError as PydanticValidationError

from slideshare_client.config.models.settings import Settings
from slideshare_client.shared.errors import create_config_error

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATHS: tuple[Path, ...] = (
    Path("config/slideshare.toml"),
    Path("slideshare.toml"),
    Path.home() / ".config" / "slideshare_client" / "config.toml",
)


class SettingsLoader:
    """Thread-safe singleton manager for Settings.

    Uses double-checked locking to keep the fast path lock free.
    """

    def __init__(self) -> None:
        self._instance: Settings | None = None
        self._lock = threading.RLock()

    def get_config(self) -> Settings:
        """Get the global settings instance, loading it if necessary."""
        if self._instance is None:
            with self._lock:
                if self._instance is None:
                    self._instance = load_settings()

        return self._instance

    def reload_config(self) -> Settings:
        """Reload the global settings instance from .env, TOML and environment."""
        with self._lock:
            self._instance = load_settings()

        return self._instance


def _load_env_file(env_file: Path = Path(".env")) -> None:
    """Load a .env file into the process environment if present.

    Variables already set in the environment win over the file.
    """
    if env_file.exists():
        load_dotenv(env_file, override=False)
        logger.debug("Loaded environment from %s", env_file)


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from a TOML file or the environment.

    Args:
        config_path: Optional TOML file. When omitted the default locations
            are tried in order, then the environment alone.

    Returns:
        Settings instance

    Raises:
        ConfigurationError: If the file is unreadable or the values are invalid
    """
    _load_env_file()

    try:
        if config_path is not None:
            return Settings.from_toml_file(config_path)

        for candidate in DEFAULT_CONFIG_PATHS:
            if candidate.exists():
                logger.debug("Loading settings from %s", candidate)
                return Settings.from_toml_file(candidate)

        return Settings()
    except FileNotFoundError as e:
        raise create_config_error(
            f"Configuration file not found: {config_path}",
            config_key="config_path",
            original_error=e,
        ) from e
    except (toml.TomlDecodeError, OSError) as e:
        raise create_config_error(
            f"Failed to read configuration file: {e}",
            config_key="config_path",
            original_error=e,
        ) from e
    except PydanticValidationError as e:
        raise create_config_error(
            f"Invalid configuration: {e.error_count()} validation error(s)",
            original_error=e,
        ) from e


# Global loader instance
_loader = SettingsLoader()


def get_config() -> Settings:
    """Get the global settings instance (thread-safe)."""
    return _loader.get_config()


def reload_config() -> Settings:
    """Reload the global settings instance from configuration sources."""
    return _loader.reload_config()
