"""Client for the slide-hosting web service.

This module provides SlideShareClient, which signs requests, uploads
presentations and queries slideshow metadata by id, url, user, tag, group
or free-text search. Every public call is one synchronous request/response
cycle; read operations go through a cache lookaside first.
"""

from __future__ import annotations

import hashlib
import logging
import os
import time
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from slideshare_client.config.models import APISettings, CacheSettings, Settings
from slideshare_client.models import SlideShow
from slideshare_client.shared.cache_utils import generate_cache_key
from slideshare_client.shared.constants import (
    CacheConfig,
    RequestParams,
    SlideShareEndpoints,
    UploadConfig,
)
from slideshare_client.shared.errors import (
    CacheError,
    SlideShareError,
    create_config_error,
    create_file_not_found_error,
    create_validation_error,
)
from slideshare_client.shared.logging import (
    log_api_call,
    log_operation_error,
    log_operation_success,
)

from .cache import JSONFileCache, NullCache, ResponseCache
from .queries import QUERY_SPECS, QueryKind
from .response_parser import parse_document, parse_many, parse_single, parse_upload
from .transport import HttpResponse, HttpTransport, RequestsTransport

logger = logging.getLogger(__name__)


def compute_signature(shared_secret: str, timestamp: int) -> str:
    """Return sha1(shared_secret + timestamp) as a hex digest."""
    return hashlib.sha1(f"{shared_secret}{timestamp}".encode()).hexdigest()  # noqa: S324


def encode_tags(tags: Sequence[str]) -> str:
    """Quote each tag and join them with spaces: ["a", "b c"] -> '"a" "b c"'."""
    return " ".join(f'"{tag}"' for tag in tags)


class SlideShareClient:
    """Client for the slide-hosting service API.

    Args:
        api_key: Service API key
        shared_secret: Secret used to sign every request
        username: Account name, required for uploads only
        password: Account password, required for uploads only
        transport: HTTP transport; defaults to RequestsTransport configured
            with a small redirect limit and request timeout
        cache: Response cache used for read operations
        use_default_cache: When no cache is given, build a JSONFileCache from
            the cache settings (True) or disable caching (False)
        settings: Optional settings providing transport and cache defaults
    """

    def __init__(
        self,
        api_key: str,
        shared_secret: str,
        username: str | None = None,
        password: str | None = None,
        transport: HttpTransport | None = None,
        cache: ResponseCache | None = None,
        *,
        use_default_cache: bool = True,
        settings: Settings | None = None,
    ) -> None:
        api_settings = settings.api if settings else APISettings()
        cache_settings = settings.cache if settings else CacheSettings()

        self.api_key = api_key
        self.shared_secret = shared_secret
        self.username = username
        self.password = password

        self.transport = transport or RequestsTransport(
            timeout=api_settings.timeout,
            max_redirects=api_settings.max_redirects,
        )

        if cache is not None:
            self.cache = cache
        elif use_default_cache and cache_settings.enabled:
            self.cache = JSONFileCache(
                cache_settings.directory,
                default_ttl=cache_settings.ttl,
            )
        else:
            self.cache = NullCache()

        logger.debug(
            "SlideShareClient initialized with %s and %s",
            type(self.transport).__name__,
            type(self.cache).__name__,
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> SlideShareClient:
        """Build a client from Settings (the global configuration by default).

        Raises:
            ConfigurationError: If api_key or shared_secret is missing
        """
        if settings is None:
            from slideshare_client.config import get_config

            settings = get_config()

        if not settings.api.has_credentials:
            raise create_config_error(
                "api_key and shared_secret must be configured",
                config_key="api",
            )

        return cls(
            settings.api.api_key,
            settings.api.shared_secret,
            settings.api.username,
            settings.api.password,
            settings=settings,
        )

    # Credentials are stored as strings whatever the caller passes in
    @property
    def api_key(self) -> str:
        return self._api_key

    @api_key.setter
    def api_key(self, value: str) -> None:
        self._api_key = str(value)

    @property
    def shared_secret(self) -> str:
        return self._shared_secret

    @shared_secret.setter
    def shared_secret(self, value: str) -> None:
        self._shared_secret = str(value)

    @property
    def password(self) -> str | None:
        return self._password

    @password.setter
    def password(self, value: str | None) -> None:
        self._password = None if value is None else str(value)

    def close(self) -> None:
        """Release the transport's resources when it holds any."""
        close = getattr(self.transport, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> SlideShareClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _signed_params(self, timestamp: int | None = None) -> dict[str, Any]:
        """Return api_key plus a fresh timestamp/signature pair."""
        if timestamp is None:
            timestamp = int(time.time())
        return {
            RequestParams.API_KEY: self.api_key,
            RequestParams.TIMESTAMP: timestamp,
            RequestParams.HASH: compute_signature(self.shared_secret, timestamp),
        }

    def _post(
        self,
        url: str,
        params: dict[str, Any],
        operation: str,
        files: dict[str, str | Path] | None = None,
    ) -> HttpResponse:
        start = time.perf_counter()
        try:
            response = self.transport.post(url, params, files=files)
        except SlideShareError as e:
            log_operation_error(logger, e, operation=operation)
            raise

        log_api_call(
            logger,
            url,
            status_code=response.status_code,
            duration_ms=(time.perf_counter() - start) * 1000,
            context={"operation": operation},
        )
        return response

    def upload_slideshow(
        self,
        slideshow: SlideShow,
        make_source_public: bool = True,
    ) -> SlideShow:
        """Upload a presentation file.

        Args:
            slideshow: Record whose filename points at a readable local file;
                title, description and tags are sent along
            make_source_public: Whether the source file may be downloaded

        Returns:
            The same record with id set to the id assigned by the service

        Raises:
            ValidationError: File missing/unreadable or credentials missing
            TransportError: The HTTP call failed
            ServiceError: The service rejected the upload
            ProtocolError: The answer was not an upload confirmation
        """
        operation = "upload_slideshow"
        filename = slideshow.filename
        if not filename or not Path(filename).is_file() or not os.access(filename, os.R_OK):
            error = create_file_not_found_error(str(filename), operation=operation)
            log_operation_error(logger, error)
            raise error

        if not self.username or self.password is None:
            raise create_validation_error(
                "username and password are required to upload a slideshow",
                field="username",
                operation=operation,
            )

        params = self._signed_params()
        params.update(
            {
                RequestParams.USERNAME: self.username,
                RequestParams.PASSWORD: self.password,
                RequestParams.TITLE: slideshow.title,
                RequestParams.DESCRIPTION: slideshow.description or "",
                RequestParams.TAGS: encode_tags(slideshow.tags) if slideshow.tags else "",
                RequestParams.MAKE_SOURCE_PUBLIC: (
                    UploadConfig.PUBLIC_FLAG if make_source_public else UploadConfig.PRIVATE_FLAG
                ),
            },
        )

        start = time.perf_counter()
        response = self._post(
            SlideShareEndpoints.UPLOAD,
            params,
            operation,
            files={RequestParams.SOURCE_FILE: filename},
        )
        slideshow_id = parse_upload(parse_document(response.body, operation))
        slideshow.id = slideshow_id

        log_operation_success(
            logger,
            operation,
            duration_ms=(time.perf_counter() - start) * 1000,
            result_info={"slideshow_id": slideshow_id},
        )
        return slideshow

    def get_slideshow(self, slideshow_id: int | str) -> SlideShow:
        """Retrieve one slideshow by id.

        Raises:
            ServiceError: Including "show not found" (service_code 9)
        """
        return self._fetch(QueryKind.BY_ID, slideshow_id)[0]

    def get_slideshow_by_url(self, slideshow_url: str) -> SlideShow:
        """Retrieve one slideshow by its public url."""
        return self._fetch(QueryKind.BY_URL, slideshow_url)[0]

    def get_slideshows_by_username(
        self,
        username: str,
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[SlideShow]:
        """Retrieve the slideshows of a user."""
        return self._fetch(QueryKind.BY_USER, username, offset, limit)

    def get_slideshows_by_tag(
        self,
        tag: str | Sequence[str],
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[SlideShow]:
        """Retrieve slideshows carrying a tag, or any of several tags.

        A sequence of tags is sent quoted and space-joined, the same way
        upload encodes tags.
        """
        if not isinstance(tag, str):
            tag = encode_tags(tag)
        return self._fetch(QueryKind.BY_TAG, tag, offset, limit)

    def get_slideshows_by_group(
        self,
        group: str,
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[SlideShow]:
        """Retrieve the slideshows of a group."""
        return self._fetch(QueryKind.BY_GROUP, group, offset, limit)

    def search_slideshows(
        self,
        query: str,
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[SlideShow]:
        """Full-text search over slideshows."""
        return self._fetch(QueryKind.SEARCH, str(query), offset, limit)

    def _fetch(
        self,
        kind: QueryKind,
        value: int | str,
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[SlideShow]:
        """Run one read query with cache lookaside.

        Returns the records in the order the service sent them; single
        lookups return a one-element list.
        """
        spec = QUERY_SPECS[kind]
        operation = f"get_slideshows_{kind.value}"
        _validate_window(offset, limit, operation)

        window = {RequestParams.OFFSET: offset, RequestParams.LIMIT: limit}
        _, cache_key = generate_cache_key(kind.value, {spec.param: value, **window})

        cached = self._cache_get(cache_key)
        if cached is not None:
            logger.debug("Cache hit for %s=%s", spec.param, value)
            return [SlideShow.from_dict(item) for item in cached[CacheConfig.PAYLOAD_KEY]]

        params = self._signed_params()
        params[spec.param] = value
        params[RequestParams.DETAILED] = 1
        params.update({k: int(v) for k, v in window.items() if v is not None})

        start = time.perf_counter()
        response = self._post(spec.endpoint, params, operation)
        root = parse_document(response.body, operation)

        if spec.single:
            slideshows = [parse_single(root, operation)]
        else:
            slideshows = parse_many(root, spec.response_tag, operation)

        self._cache_set(
            cache_key,
            {CacheConfig.PAYLOAD_KEY: [slideshow.to_dict() for slideshow in slideshows]},
        )

        log_operation_success(
            logger,
            operation,
            duration_ms=(time.perf_counter() - start) * 1000,
            result_info={"count": len(slideshows)},
            context={spec.param: str(value)},
        )
        return slideshows

    def _cache_get(self, key: str) -> dict[str, Any] | None:
        try:
            return self.cache.get(key)
        except CacheError as e:
            log_operation_error(logger, e, operation="cache_get")
            return None

    def _cache_set(self, key: str, value: dict[str, Any]) -> None:
        try:
            self.cache.set(key, value)
        except CacheError as e:
            log_operation_error(logger, e, operation="cache_set")


def _validate_window(offset: int | None, limit: int | None, operation: str) -> None:
    for name, value in ((RequestParams.OFFSET, offset), (RequestParams.LIMIT, limit)):
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise create_validation_error(
                f"{name} must be a non-negative integer, got {value!r}",
                field=name,
                operation=operation,
            )


__all__ = ["SlideShareClient", "compute_signature", "encode_tags"]
