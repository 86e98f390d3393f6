"""Configuration domain models."""

from .api_settings import APISettings
from .app_settings import LoggingSettings
from .cache_settings import CacheSettings
from .settings import Settings

__all__ = [
    "APISettings",
    "CacheSettings",
    "LoggingSettings",
    "Settings",
]
