"""Cache key generation for service queries.

Identical queries must map to identical keys regardless of parameter order,
and distinct pagination windows must map to distinct keys.

Example:
    >>> key, key_hash = generate_cache_key("by_tag", {"tag": "php", "offset": 0})
    >>> key
    'slideshare:by_tag:{"offset":0,"tag":"php"}'
"""

from __future__ import annotations

import hashlib
from typing import Any

import orjson

from slideshare_client.shared.constants import CacheConfig


def canonical_params(params: dict[str, Any] | None) -> dict[str, Any]:
    """Drop unset values and lowercase the parameter names.

    Values keep their case: tags, usernames and urls are case sensitive
    on the service side.

    Example:
        >>> canonical_params({"Tag": "PHP", "offset": None, "limit": 0})
        {'tag': 'PHP', 'limit': 0}
    """
    if not params:
        return {}

    return {
        key.lower(): value
        for key, value in params.items()
        if value is not None and value != ""
    }


def generate_cache_key(
    query_kind: str,
    params: dict[str, Any] | None = None,
) -> tuple[str, str]:
    """Generate a cache key and its SHA-256 hash.

    Cache key format: "slideshare:{query_kind}:{params}" where params is the
    JSON object of the canonical parameters with sorted keys. Values are quoted,
    so "g:limit=1" and a group "g" with limit 1 get different keys.

    Args:
        query_kind: Kind of query, e.g. "by_id" or "search". Must be non-empty.
        params: Query parameters (lookup field, offset, limit).

    Returns:
        Tuple of (cache_key, key_hash)

    Raises:
        ValueError: If query_kind is empty
    """
    if not query_kind:
        raise ValueError("query_kind cannot be empty or None")

    parts = [CacheConfig.KEY_PREFIX, query_kind]

    normalized = canonical_params(params)
    if normalized:
        parts.append(orjson.dumps(normalized, option=orjson.OPT_SORT_KEYS).decode("utf-8"))

    cache_key = ":".join(parts)
    key_hash = hashlib.sha256(cache_key.encode("utf-8")).hexdigest()

    return cache_key, key_hash
