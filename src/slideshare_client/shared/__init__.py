"""Shared building blocks: errors, logging helpers, constants, cache keys."""

from .errors import (
    CacheError,
    ConfigurationError,
    DomainError,
    ErrorCode,
    ErrorContext,
    InfrastructureError,
    ProtocolError,
    ServiceError,
    ServiceErrorCode,
    SlideShareError,
    TransportError,
    ValidationError,
)

__all__ = [
    "CacheError",
    "ConfigurationError",
    "DomainError",
    "ErrorCode",
    "ErrorContext",
    "InfrastructureError",
    "ProtocolError",
    "ServiceError",
    "ServiceErrorCode",
    "SlideShareError",
    "TransportError",
    "ValidationError",
]
