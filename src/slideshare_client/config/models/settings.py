"""slideshare-client Settings Configuration Model.

Main Settings class that consolidates all configuration domains.
"""

from __future__ import annotations

from pathlib import Path

import toml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from slideshare_client.config.models.api_settings import APISettings
from slideshare_client.config.models.app_settings import LoggingSettings
from slideshare_client.config.models.cache_settings import CacheSettings


class Settings(BaseSettings):
    """Settings facade.

    Environment variables use the SLIDESHARE_ prefix with "__" between
    nesting levels, e.g. SLIDESHARE_API__SHARED_SECRET.
    """

    model_config = SettingsConfigDict(
        env_prefix="SLIDESHARE_",
        env_nested_delimiter="__",
        env_ignore_empty=True,
        extra="ignore",
    )

    api: APISettings = Field(default_factory=APISettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_toml_file(cls, file_path: str | Path) -> Settings:
        """Load settings from TOML file. Values in the file win over the environment."""
        file_path = Path(file_path)
        if not file_path.exists():
            msg = f"Configuration file not found: {file_path}"
            raise FileNotFoundError(msg)

        raw_config = toml.load(file_path)
        return cls(**raw_config)

    def to_toml_file(self, file_path: str | Path) -> None:
        """Save settings to TOML file.

        Credentials are written: the file is what the client loads them from.
        """
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = self.model_dump(mode="json", exclude_none=True)

        with open(file_path, "w", encoding="utf-8") as f:
            toml.dump(config_dict, f)
