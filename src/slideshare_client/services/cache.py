"""Response cache for read operations.

The client depends on the ResponseCache protocol only. JSONFileCache is the
default backend: one orjson-encoded file per key with TTL support and
automatic cleanup of expired entries. NullCache disables caching.
"""

from __future__ import annotations

import hashlib
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Protocol

import orjson
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from slideshare_client.shared.constants import CacheConfig
from slideshare_client.shared.errors import CacheError, ErrorCode, ErrorContext
from slideshare_client.shared.logging import log_operation_error, log_operation_success

logger = logging.getLogger(__name__)


class ResponseCache(Protocol):
    """Key-value capability used for cache lookaside.

    ``get`` returns None on a miss. ``set`` stores a JSON-safe dict; a ttl of
    None means the backend's own default.
    """

    def get(self, key: str) -> dict[str, Any] | None: ...

    def set(self, key: str, value: dict[str, Any], ttl: int | None = None) -> None: ...


class CacheEntry(BaseModel):
    """Schema for cache files.

    Attributes:
        data: The cached payload.
        created_at: ISO timestamp when the entry was created.
        expires_at: ISO timestamp when the entry expires (None for no expiration).
        key_hash: SHA-256 hash of the original key for verification.
    """

    data: dict[str, Any] = Field(..., description="The cached data payload")
    created_at: str = Field(..., description="ISO timestamp when entry was created")
    expires_at: str | None = Field(None, description="ISO timestamp when entry expires")
    key_hash: str = Field(..., description="SHA-256 hash of the original key")

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        expires_at = datetime.fromisoformat(self.expires_at.replace("Z", "+00:00"))
        return (now or datetime.now(timezone.utc)) > expires_at


def _hash_key(key: str) -> str:
    return hashlib.sha256(key.encode("utf-8")).hexdigest()


class JSONFileCache:
    """File-based JSON cache with TTL support.

    Args:
        cache_dir: Directory where cache files are stored; created if missing.
        default_ttl: TTL in seconds applied when set() gets no ttl.
            None stores entries without expiration.
    """

    def __init__(
        self,
        cache_dir: Path | str,
        default_ttl: int | None = CacheConfig.DEFAULT_TTL,
    ) -> None:
        context = ErrorContext(
            operation="initialize_cache",
            additional_data={"cache_dir": str(cache_dir)},
        )

        self.cache_dir = Path(cache_dir)
        self.default_ttl = default_ttl

        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            error = CacheError(
                ErrorCode.DIRECTORY_CREATION_FAILED,
                f"Failed to initialize cache directory: {cache_dir}",
                context,
                e,
            )
            log_operation_error(logger, error)
            raise error from e

        purged_count = self.purge_expired()
        if purged_count > 0:
            logger.info("Cleaned up %d expired cache entries on startup", purged_count)

        logger.debug("Initialized JSONFileCache in %s", self.cache_dir)

    def _file_path(self, key: str) -> Path:
        return self.cache_dir / f"{_hash_key(key)}{CacheConfig.FILE_SUFFIX}"

    def set(self, key: str, value: dict[str, Any], ttl: int | None = None) -> None:
        """Store a payload under key.

        Raises:
            CacheError: If the payload cannot be serialized or written
        """
        ttl = self.default_ttl if ttl is None else ttl
        context = ErrorContext(
            operation="cache_set",
            additional_data={"key": key, "ttl_seconds": ttl},
        )
        cache_file = self._file_path(key)

        now = datetime.now(timezone.utc)
        expires_at = (now + timedelta(seconds=ttl)).isoformat() if ttl is not None else None
        entry = CacheEntry(
            data=value,
            created_at=now.isoformat(),
            expires_at=expires_at,
            key_hash=_hash_key(key),
        )

        try:
            payload = orjson.dumps(entry.model_dump())
        except TypeError as e:
            error = CacheError(
                ErrorCode.CACHE_SERIALIZATION_ERROR,
                f"Failed to serialize cache data for key '{key}': {e!s}",
                context,
                e,
            )
            log_operation_error(logger, error)
            raise error from e

        # Write to a sibling temp file first so readers never see a partial entry
        tmp_file = cache_file.with_suffix(".tmp")
        try:
            tmp_file.write_bytes(payload)
            tmp_file.replace(cache_file)
        except OSError as e:
            error = CacheError(
                ErrorCode.CACHE_WRITE_FAILED,
                f"Failed to write cache file for key '{key}': {e!s}",
                ErrorContext(
                    operation="cache_set",
                    file_path=str(cache_file),
                    additional_data={"key": key},
                ),
                e,
            )
            log_operation_error(logger, error)
            raise error from e

        log_operation_success(logger, "cache_set", duration_ms=0, context=context)

    def get(self, key: str) -> dict[str, Any] | None:
        """Return the payload for key, or None when missing or expired.

        Unreadable and corrupted files count as misses.
        """
        cache_file = self._file_path(key)

        try:
            raw = cache_file.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            error = CacheError(
                ErrorCode.CACHE_READ_FAILED,
                f"Failed to read cache file for key '{key}': {e!s}",
                ErrorContext(operation="cache_get", file_path=str(cache_file)),
                e,
            )
            log_operation_error(logger, error)
            return None

        try:
            entry = CacheEntry.model_validate(orjson.loads(raw))
            expired = entry.is_expired()
        except (orjson.JSONDecodeError, PydanticValidationError, ValueError) as e:
            self._handle_corrupted_cache_file(cache_file, key, e)
            return None

        if entry.key_hash != _hash_key(key):
            logger.warning("Key hash mismatch for '%s', treating as cache miss", key)
            return None

        if expired:
            logger.debug("Cache entry expired for key '%s'", key)
            cache_file.unlink(missing_ok=True)
            return None

        logger.debug("Cache hit for key '%s'", key)
        return entry.data

    def delete(self, key: str) -> bool:
        """Remove the entry for key. Returns True if a file was removed."""
        cache_file = self._file_path(key)
        if cache_file.exists():
            cache_file.unlink()
            return True
        return False

    def clear(self) -> int:
        """Remove every cache file. Returns the number removed."""
        removed = 0
        for cache_file in self.cache_dir.glob(f"*{CacheConfig.FILE_SUFFIX}"):
            cache_file.unlink(missing_ok=True)
            removed += 1
        return removed

    def purge_expired(self) -> int:
        """Remove expired entries. Returns the number removed."""
        now = datetime.now(timezone.utc)
        purged = 0
        for cache_file in self.cache_dir.glob(f"*{CacheConfig.FILE_SUFFIX}"):
            if CacheConfig.CORRUPTED_SUFFIX in cache_file.name:
                continue
            try:
                entry = CacheEntry.model_validate(orjson.loads(cache_file.read_bytes()))
                if not entry.is_expired(now):
                    continue
                cache_file.unlink(missing_ok=True)
                purged += 1
            except (OSError, orjson.JSONDecodeError, PydanticValidationError, ValueError):
                logger.debug("Skipping unreadable cache file %s during purge", cache_file)
        return purged

    def _handle_corrupted_cache_file(
        self,
        cache_file: Path,
        key: str,
        error: Exception,
    ) -> None:
        """Move a corrupted file aside so the next set() starts clean."""
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        backup_file = cache_file.with_name(
            f"{cache_file.stem}{CacheConfig.CORRUPTED_SUFFIX}.{timestamp}{CacheConfig.FILE_SUFFIX}",
        )
        try:
            cache_file.rename(backup_file)
        except OSError:
            logger.warning("Could not move corrupted cache file %s aside", cache_file)
            return

        log_operation_error(
            logger,
            CacheError(
                ErrorCode.CACHE_CORRUPTED,
                f"Cache file corrupted for key '{key}', backed up to {backup_file}",
                ErrorContext(operation="cache_get", file_path=str(cache_file)),
                error,
            ),
        )


class NullCache:
    """Cache that never stores anything."""

    def get(self, key: str) -> dict[str, Any] | None:
        return None

    def set(self, key: str, value: dict[str, Any], ttl: int | None = None) -> None:
        return None


__all__ = ["CacheEntry", "JSONFileCache", "NullCache", "ResponseCache"]
