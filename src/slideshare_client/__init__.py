"""slideshare-client: client for the SlideShare slide-hosting API.

Upload presentations and retrieve slideshow metadata by id, url, user, tag,
group or search query, with signed requests and a file-based response cache.
"""

from __future__ import annotations

from slideshare_client.models import SlideShow
from slideshare_client.services import (
    JSONFileCache,
    NullCache,
    RequestsTransport,
    SlideShareClient,
)
from slideshare_client.shared.errors import (
    CacheError,
    ConfigurationError,
    ProtocolError,
    ServiceError,
    SlideShareError,
    TransportError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "CacheError",
    "ConfigurationError",
    "JSONFileCache",
    "NullCache",
    "ProtocolError",
    "RequestsTransport",
    "ServiceError",
    "SlideShareClient",
    "SlideShareError",
    "SlideShow",
    "TransportError",
    "ValidationError",
    "__version__",
]
