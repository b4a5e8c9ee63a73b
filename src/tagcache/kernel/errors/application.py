"""Application-layer errors – wiring and configuration concerns."""

from __future__ import annotations

from tagcache.kernel.errors.base import CacheError


class ApplicationError(CacheError):
    """Cross-cutting application-layer concern (configuration, wiring)."""

    default_code = "application_error"


__all__ = ["ApplicationError"]
