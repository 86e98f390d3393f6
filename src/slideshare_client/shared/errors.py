"""slideshare-client Error Handling Module

This module defines the error handling system for slideshare-client, providing
structured error classes with context information.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- Proper Exception Chaining: Original exceptions are preserved
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, IntEnum
from pathlib import Path
from typing import Any, Union

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]

# Keys that must never show up in logs or serialized errors
SAFE_DICT_MASK_KEYS: tuple[str, ...] = ("hash", "password", "shared_secret")


class ErrorCode(str, Enum):
    """Error codes for slideshare-client.

    This enum serves as the single source of truth for all error codes
    used throughout the library.
    """

    # File System Errors
    FILE_NOT_FOUND = "FILE_NOT_FOUND"

    # Network and API Errors
    NETWORK_ERROR = "NETWORK_ERROR"
    API_TIMEOUT = "API_TIMEOUT"
    API_SERVER_ERROR = "API_SERVER_ERROR"
    TOO_MANY_REDIRECTS = "TOO_MANY_REDIRECTS"

    # Remote service errors
    SERVICE_ERROR = "SERVICE_ERROR"
    SERVICE_AUTHENTICATION_FAILED = "SERVICE_AUTHENTICATION_FAILED"
    SERVICE_NOT_FOUND = "SERVICE_NOT_FOUND"
    SERVICE_LIMIT_EXCEEDED = "SERVICE_LIMIT_EXCEEDED"

    # Response shape errors
    PROTOCOL_ERROR = "PROTOCOL_ERROR"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"

    # Validation Errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Cache Errors
    CACHE_READ_FAILED = "CACHE_READ_FAILED"
    CACHE_WRITE_FAILED = "CACHE_WRITE_FAILED"
    CACHE_CORRUPTED = "CACHE_CORRUPTED"
    CACHE_SERIALIZATION_ERROR = "CACHE_SERIALIZATION_ERROR"
    DIRECTORY_CREATION_FAILED = "DIRECTORY_CREATION_FAILED"

    # Configuration Errors
    CONFIG_ERROR = "CONFIG_ERROR"


class ServiceErrorCode(IntEnum):
    """Numeric codes reported by the remote service in its error document."""

    BAD_APIKEY = 1
    BAD_AUTH = 2
    MISSING_TITLE = 3
    MISSING_FILE = 4
    EMPTY_TITLE = 5
    NOT_SOURCEOBJ = 6
    INVALID_EXT = 7
    FILE_TOO_BIG = 8
    SHOW_NOT_FOUND = 9
    USER_NOT_FOUND = 10
    GROUP_NOT_FOUND = 11
    MISSING_TAG = 12
    DAILY_LIMIT = 99
    ACCOUNT_BLOCKED = 100


_NOT_FOUND_CODES = frozenset(
    {
        ServiceErrorCode.SHOW_NOT_FOUND,
        ServiceErrorCode.USER_NOT_FOUND,
        ServiceErrorCode.GROUP_NOT_FOUND,
    },
)


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Converts Path, Enum, Decimal to primitive types. None values are dropped.

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if val is None:
            continue
        if isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Path):
            coerced[key] = str(val)
        elif isinstance(val, Enum):
            coerced[key] = val.value
        elif isinstance(val, Decimal):
            coerced[key] = float(val)
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Path, Enum, Decimal are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContext:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are allowed in
    additional_data to keep serialization safe.

    Attributes:
        operation: Optional operation name that caused the error
        file_path: Optional file path associated with the error
        additional_data: Optional dict with primitive values only
    """

    operation: str | None = None
    file_path: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        if self.additional_data is not None:
            object.__setattr__(
                self,
                "additional_data",
                _coerce_primitives(self.additional_data),
            )

    def safe_dict(self, *, mask_keys: tuple[str, ...] | None = None) -> dict[str, Any]:
        """Export context as dict with secrets masked.

        Args:
            mask_keys: Keys to drop from additional_data.
                Defaults to SAFE_DICT_MASK_KEYS.

        Returns:
            Dictionary with a guaranteed additional_data key.

        Example:
            >>> ctx = ErrorContext(operation="upload", additional_data={"password": "x"})
            >>> ctx.safe_dict()
            {'operation': 'upload', 'additional_data': {}}
        """
        if mask_keys is None:
            mask_keys = SAFE_DICT_MASK_KEYS

        data: dict[str, Any] = {}
        if self.operation is not None:
            data["operation"] = self.operation
        if self.file_path is not None:
            data["file_path"] = self.file_path

        data["additional_data"] = {
            key: value
            for key, value in (self.additional_data or {}).items()
            if key not in mask_keys
        }
        return data


class SlideShareError(Exception):
    """Base exception class for all slideshare-client errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize SlideShareError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error
        super().__init__(f"{code.value}: {message}")

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging with secrets masked."""
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class DomainError(SlideShareError):
    """Errors raised by local checks: bad input or a response we cannot map."""


class InfrastructureError(SlideShareError):
    """Errors raised while talking to external systems (network, disk, service)."""


class ValidationError(DomainError):
    """A local precondition failed before any network call was made.

    Examples:
    - Upload file missing or unreadable
    - Negative offset/limit
    """


class ProtocolError(DomainError):
    """The response was not of the shape expected for the operation performed."""


class TransportError(InfrastructureError):
    """The underlying HTTP call failed (network, timeout, malformed HTTP)."""


class CacheError(InfrastructureError):
    """Reading or writing the response cache failed."""


class ConfigurationError(SlideShareError):
    """Settings could not be loaded or are invalid."""


class ServiceError(InfrastructureError):
    """The remote service answered with its error document.

    Attributes:
        service_code: Numeric code reported by the service, or None when the
            message carried no parseable code.
    """

    def __init__(
        self,
        service_code: int | None,
        message: str,
        context: ErrorContext | None = None,
    ) -> None:
        self.service_code = service_code
        super().__init__(_error_code_for_service(service_code), message, context)

    @property
    def is_not_found(self) -> bool:
        return self.service_code in _NOT_FOUND_CODES

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["service_code"] = self.service_code
        return data


def _error_code_for_service(service_code: int | None) -> ErrorCode:
    if service_code in _NOT_FOUND_CODES:
        return ErrorCode.SERVICE_NOT_FOUND
    if service_code in (ServiceErrorCode.BAD_APIKEY, ServiceErrorCode.BAD_AUTH):
        return ErrorCode.SERVICE_AUTHENTICATION_FAILED
    if service_code in (ServiceErrorCode.DAILY_LIMIT, ServiceErrorCode.ACCOUNT_BLOCKED):
        return ErrorCode.SERVICE_LIMIT_EXCEEDED
    return ErrorCode.SERVICE_ERROR


# Convenience functions for common error scenarios
def create_file_not_found_error(
    file_path: str,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> ValidationError:
    """Create a file not found error with context."""
    context = ErrorContext(operation=operation, file_path=file_path)
    return ValidationError(
        ErrorCode.FILE_NOT_FOUND,
        f"Specified slideshow for upload not found or unreadable: {file_path}",
        context,
        original_error,
    )


def create_validation_error(
    message: str,
    field: str | None = None,
    operation: str | None = None,
) -> ValidationError:
    """Create a validation error with context."""
    context = ErrorContext(
        operation=operation,
        additional_data={"field": field} if field else None,
    )
    return ValidationError(ErrorCode.VALIDATION_ERROR, message, context)


def create_protocol_error(
    message: str,
    operation: str | None = None,
    tag: str | None = None,
    original_error: Exception | None = None,
) -> ProtocolError:
    """Create a protocol error for an unexpected response shape."""
    context = ErrorContext(
        operation=operation,
        additional_data={"tag": tag} if tag else None,
    )
    code = ErrorCode.MALFORMED_RESPONSE if original_error else ErrorCode.PROTOCOL_ERROR
    return ProtocolError(code, message, context, original_error)


def create_config_error(
    message: str,
    config_key: str | None = None,
    original_error: Exception | None = None,
) -> ConfigurationError:
    """Create a configuration error with context."""
    context = ErrorContext(
        operation="load_config",
        additional_data={"config_key": config_key} if config_key else None,
    )
    return ConfigurationError(ErrorCode.CONFIG_ERROR, message, context, original_error)
