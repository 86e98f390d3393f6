"""
Network Configuration Constants

This module contains the defaults used by the HTTP transport.
"""

from .cache import BASE_SECOND


class NetworkConfig:
    """Network configuration constants."""

    # Timeout settings
    DEFAULT_TIMEOUT = 5 * BASE_SECOND
    DEFAULT_MAX_REDIRECTS = 2

    # User agent
    USER_AGENT = "slideshare-client/0.1.0"

    # HTTP status boundaries
    SERVER_ERROR_THRESHOLD = 500


__all__ = ["NetworkConfig"]
