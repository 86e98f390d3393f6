"""API configuration models.

Credentials and HTTP transport settings for the slide-hosting service.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from slideshare_client.shared.constants import NetworkConfig


class APISettings(BaseModel):
    """Service credentials and transport configuration.

    Security: shared_secret and password are masked in __repr__.
    """

    api_key: str = Field(default="", description="Service API key")
    shared_secret: str = Field(
        default="",
        repr=False,
        description="Shared secret used to sign every request",
    )
    username: str | None = Field(default=None, description="Account name (upload only)")
    password: str | None = Field(
        default=None,
        repr=False,
        description="Account password (upload only)",
    )

    # Request settings
    timeout: float = Field(
        default=NetworkConfig.DEFAULT_TIMEOUT,
        gt=0,
        description="Request timeout in seconds",
    )
    max_redirects: int = Field(
        default=NetworkConfig.DEFAULT_MAX_REDIRECTS,
        ge=0,
        description="Maximum number of redirects followed per request",
    )

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key and self.shared_secret)

    def __repr__(self) -> str:
        masked_secret = "****" if self.shared_secret else "[empty]"
        return (
            f"APISettings("
            f"api_key={self.api_key!r}, "
            f"shared_secret={masked_secret}, "
            f"username={self.username!r}, "
            f"timeout={self.timeout}, "
            f"max_redirects={self.max_redirects})"
        )


__all__ = ["APISettings"]
