"""
Cache Configuration Constants

This module provides cache constants for the response cache.
"""

# Base time units for TTL calculations
BASE_SECOND = 1
BASE_MINUTE = 60 * BASE_SECOND
BASE_HOUR = 60 * BASE_MINUTE


class CacheConfig:
    """Response cache configuration constants."""

    DEFAULT_TTL = 12 * BASE_HOUR  # 43200 seconds
    DEFAULT_DIR_NAME = "slideshare_client"
    KEY_PREFIX = "slideshare"

    # Payload layout
    PAYLOAD_KEY = "slideshows"
    FILE_SUFFIX = ".json"
    CORRUPTED_SUFFIX = ".corrupted"


__all__ = ["BASE_HOUR", "BASE_MINUTE", "BASE_SECOND", "CacheConfig"]
