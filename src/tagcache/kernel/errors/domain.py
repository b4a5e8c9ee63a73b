"""Domain errors – caller mistakes detected before the backend is touched."""

from __future__ import annotations

from typing import Any

from tagcache.kernel.errors.base import CacheError


class DomainError(CacheError):
    """Raised when a cache-contract rule is violated by the caller."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """Input does not meet validation rules.

    ``errors`` is a list of field-level validation failures.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["errors"] = self.errors
        return base


class InvalidArgumentError(ValidationError):
    """An argument is unusable, e.g. an empty key, namespace or prefix.

    Never retried: the same call fails the same way.
    """

    default_code = "invalid_argument"

    def __init__(self, argument: str, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(
            message or f"No {argument} given",
            errors=[{"field": argument, "reason": "empty"}],
            **kwargs,
        )
        self.argument = argument


__all__ = ["DomainError", "InvalidArgumentError", "ValidationError"]
