"""
slideshare-client Constants Module

Centralized constants for endpoints, request fields, XML tags, cache and
network defaults.
"""

from .api import RequestParams, SlideShareEndpoints, UploadConfig, XMLTags
from .cache import BASE_HOUR, BASE_MINUTE, BASE_SECOND, CacheConfig
from .network import NetworkConfig

__all__ = [
    "BASE_HOUR",
    "BASE_MINUTE",
    "BASE_SECOND",
    "CacheConfig",
    "NetworkConfig",
    "RequestParams",
    "SlideShareEndpoints",
    "UploadConfig",
    "XMLTags",
]
