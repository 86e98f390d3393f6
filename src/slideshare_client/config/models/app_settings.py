"""Logging configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LoggingSettings(BaseModel):
    """Logging configuration consumed by shared.logging.setup_logging()."""

    level: str = Field(default="INFO", description="Logging level")
    log_file: str | None = Field(default=None, description="Optional JSON-lines log file")
    use_rich_console: bool = Field(default=True, description="Rich console output")

    @field_validator("level")
    @classmethod
    def _validate_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LEVELS:
            msg = f"Invalid log level: {value}. Expected one of {', '.join(_LEVELS)}"
            raise ValueError(msg)
        return level


__all__ = ["LoggingSettings"]
