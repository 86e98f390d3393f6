"""slideshare-client Configuration Module

- Settings: Main configuration facade
- Loader functions: get_config, load_settings, reload_config
- Domain models: API, Cache, Logging settings
"""

from __future__ import annotations

from .loader import get_config, load_settings, reload_config
from .models import APISettings, CacheSettings, LoggingSettings, Settings

__all__ = [
    "APISettings",
    "CacheSettings",
    "LoggingSettings",
    "Settings",
    "get_config",
    "load_settings",
    "reload_config",
]
