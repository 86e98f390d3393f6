"""Service layer: client, transport, cache and response mapping."""

from .cache import CacheEntry, JSONFileCache, NullCache, ResponseCache
from .client import SlideShareClient, compute_signature, encode_tags
from .queries import QUERY_SPECS, QueryKind, QuerySpec
from .transport import HttpResponse, HttpTransport, RequestsTransport

__all__ = [
    "QUERY_SPECS",
    "CacheEntry",
    "HttpResponse",
    "HttpTransport",
    "JSONFileCache",
    "NullCache",
    "QueryKind",
    "QuerySpec",
    "RequestsTransport",
    "ResponseCache",
    "SlideShareClient",
    "compute_signature",
    "encode_tags",
]
