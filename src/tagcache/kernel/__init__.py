"""Kernel – framework-agnostic building blocks shared by every layer."""

from tagcache.kernel.errors import (
    ApplicationError,
    BackendUnavailableError,
    CacheError,
    DomainError,
    InfrastructureError,
    InvalidArgumentError,
    SerializationError,
    ValidationError,
)

__all__ = [
    "ApplicationError",
    "BackendUnavailableError",
    "CacheError",
    "DomainError",
    "InfrastructureError",
    "InvalidArgumentError",
    "SerializationError",
    "ValidationError",
]
