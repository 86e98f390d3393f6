"""Cache configuration model."""

from __future__ import annotations

import tempfile
from pathlib import Path

from pydantic import BaseModel, Field

from slideshare_client.shared.constants import CacheConfig


def _default_cache_dir() -> Path:
    return Path(tempfile.gettempdir()) / CacheConfig.DEFAULT_DIR_NAME


class CacheSettings(BaseModel):
    """Default response cache configuration.

    Only consulted when the client builds its own cache; an injected cache
    keeps its own TTL and storage.
    """

    enabled: bool = Field(default=True, description="Build the default file cache")
    directory: Path = Field(
        default_factory=_default_cache_dir,
        description="Directory holding cache files",
    )
    ttl: int = Field(
        default=CacheConfig.DEFAULT_TTL,
        gt=0,
        description="Cache time-to-live in seconds",
    )


__all__ = ["CacheSettings"]
