"""Infrastructure errors – backend I/O failures and payload problems."""

from __future__ import annotations

from typing import Any

from tagcache.kernel.errors.base import CacheError


class InfrastructureError(CacheError):
    """Backend / I/O failure that is not a caller mistake."""

    default_code = "infrastructure_error"


class ConnectionError(InfrastructureError):  # noqa: A001
    """Failed to talk to an external resource."""

    default_code = "connection_error"

    def __init__(
        self,
        resource: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Could not connect to '{resource}'", **kwargs)
        self.resource = resource


class BackendUnavailableError(ConnectionError):
    """The key/value backend could not serve a command.

    Fatal for the call that raised it; the adapter never retries.
    """

    default_code = "backend_unavailable"

    def __init__(self, resource: str = "redis", *, operation: str | None = None, **kwargs: Any) -> None:
        message = f"Backend '{resource}' unavailable"
        if operation is not None:
            message = f"Backend '{resource}' unavailable during {operation}"
        super().__init__(resource, message, **kwargs)
        self.operation = operation


class SerializationError(InfrastructureError):
    """A value cannot be reduced to the backend's string form."""

    default_code = "serialization_error"

    def __init__(
        self,
        message: str,
        *,
        payload_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.payload_type = payload_type


class ConcurrentModificationError(InfrastructureError):
    """A watched key kept changing and the transaction gave up."""

    default_code = "concurrent_modification"

    def __init__(self, key: str, attempts: int, **kwargs: Any) -> None:
        super().__init__(
            f"Tags of '{key}' changed concurrently {attempts} times in a row",
            detail={"key": key, "attempts": attempts},
            **kwargs,
        )
        self.key = key
        self.attempts = attempts


__all__ = [
    "BackendUnavailableError",
    "ConcurrentModificationError",
    "ConnectionError",
    "InfrastructureError",
    "SerializationError",
]
