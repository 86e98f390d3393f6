"""HTTP transport for service calls.

The client talks to the network only through the HttpTransport protocol.
RequestsTransport is the default implementation on top of requests.
"""

from __future__ import annotations

import logging
from contextlib import ExitStack
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

import requests

from slideshare_client.shared.constants import NetworkConfig, UploadConfig
from slideshare_client.shared.errors import ErrorCode, ErrorContext, TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpResponse:
    """Raw answer of one HTTP exchange."""

    status_code: int
    body: bytes
    headers: dict[str, str] = field(default_factory=dict)


class HttpTransport(Protocol):
    """Capability the client needs from an HTTP stack.

    Implementations post the form fields in ``data`` (url-encoded, or
    multipart when ``files`` is given; ``files`` maps a field name to a local
    path) and raise TransportError on any network or protocol failure.
    """

    def post(
        self,
        url: str,
        data: dict[str, Any],
        files: dict[str, str | Path] | None = None,
    ) -> HttpResponse: ...


class RequestsTransport:
    """HttpTransport backed by a requests.Session.

    Args:
        timeout: Per-request timeout in seconds
        max_redirects: Redirects followed before giving up
        session: Optional pre-configured session
    """

    def __init__(
        self,
        timeout: float = NetworkConfig.DEFAULT_TIMEOUT,
        max_redirects: int = NetworkConfig.DEFAULT_MAX_REDIRECTS,
        session: requests.Session | None = None,
    ) -> None:
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.max_redirects = max_redirects
        self.session.headers.setdefault("User-Agent", NetworkConfig.USER_AGENT)

    @property
    def max_redirects(self) -> int:
        return self.session.max_redirects

    def post(
        self,
        url: str,
        data: dict[str, Any],
        files: dict[str, str | Path] | None = None,
    ) -> HttpResponse:
        """POST form data, optionally with file attachments.

        Raises:
            TransportError: On connection failure, timeout, too many redirects,
                or a 5xx answer
        """
        context = ErrorContext(operation="http_post", additional_data={"url": url})

        with ExitStack() as stack:
            upload_files = None
            if files:
                upload_files = {
                    name: (
                        Path(path).name,
                        stack.enter_context(open(path, "rb")),
                        UploadConfig.SOURCE_MIME_TYPE,
                    )
                    for name, path in files.items()
                }

            try:
                response = self.session.post(
                    url,
                    data=data,
                    files=upload_files,
                    timeout=self.timeout,
                )
            except requests.exceptions.Timeout as e:
                raise TransportError(
                    ErrorCode.API_TIMEOUT,
                    f"Service request timed out after {self.timeout}s",
                    context,
                    e,
                ) from e
            except requests.exceptions.TooManyRedirects as e:
                raise TransportError(
                    ErrorCode.TOO_MANY_REDIRECTS,
                    f"Service request exceeded {self.max_redirects} redirects",
                    context,
                    e,
                ) from e
            except requests.exceptions.RequestException as e:
                raise TransportError(
                    ErrorCode.NETWORK_ERROR,
                    f"Service Request Failed: {e}",
                    context,
                    e,
                ) from e

        if response.status_code >= NetworkConfig.SERVER_ERROR_THRESHOLD:
            raise TransportError(
                ErrorCode.API_SERVER_ERROR,
                f"Service returned HTTP {response.status_code}",
                ErrorContext(
                    operation="http_post",
                    additional_data={"url": url, "status_code": response.status_code},
                ),
            )

        return HttpResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )

    def close(self) -> None:
        self.session.close()


__all__ = ["HttpResponse", "HttpTransport", "RequestsTransport"]
