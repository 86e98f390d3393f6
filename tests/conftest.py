"""
Pytest configuration and shared fixtures for slideshare-client tests.

Provides a recording fake transport, pre-wired clients and temporary
cache directories. Canned service responses live in samples.py.
"""

from __future__ import annotations

import os
import tempfile
from collections.abc import Generator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from slideshare_client.services.cache import JSONFileCache, NullCache
from slideshare_client.services.client import SlideShareClient
from slideshare_client.services.transport import HttpResponse

# Keep developer credentials out of the settings under test
for _name in list(os.environ):
    if _name.startswith("SLIDESHARE_"):
        del os.environ[_name]


@dataclass
class RecordedCall:
    url: str
    data: dict[str, Any]
    files: dict[str, str | Path] | None


@dataclass
class FakeTransport:
    """HttpTransport double that replays queued bodies and records calls."""

    responses: list[bytes] = field(default_factory=list)
    calls: list[RecordedCall] = field(default_factory=list)
    status_code: int = 200

    def queue(self, *bodies: bytes) -> FakeTransport:
        self.responses.extend(bodies)
        return self

    def post(
        self,
        url: str,
        data: dict[str, Any],
        files: dict[str, str | Path] | None = None,
    ) -> HttpResponse:
        self.calls.append(RecordedCall(url, dict(data), files))
        return HttpResponse(status_code=self.status_code, body=self.responses.pop(0))


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def file_cache(temp_dir: Path) -> JSONFileCache:
    return JSONFileCache(temp_dir / "cache")


@pytest.fixture
def client(transport: FakeTransport, file_cache: JSONFileCache) -> SlideShareClient:
    """Client wired to the fake transport and a temporary file cache."""
    return SlideShareClient(
        "test_api_key",
        "test_secret",  # pragma: allowlist secret
        username="jdoe",
        password="pw",  # pragma: allowlist secret
        transport=transport,
        cache=file_cache,
    )


@pytest.fixture
def uncached_client(transport: FakeTransport) -> SlideShareClient:
    return SlideShareClient(
        "test_api_key",
        "test_secret",  # pragma: allowlist secret
        transport=transport,
        cache=NullCache(),
    )


@pytest.fixture
def presentation_file(temp_dir: Path) -> Path:
    path = temp_dir / "deck.ppt"
    path.write_bytes(b"\xd0\xcf\x11\xe0fake-ppt")
    return path
