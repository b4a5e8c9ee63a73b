"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    CacheError
    ├── DomainError                  (domain.py)
    │   └── ValidationError
    │       └── InvalidArgumentError
    ├── ApplicationError             (application.py)
    └── InfrastructureError          (infrastructure.py)
        ├── ConnectionError
        │   └── BackendUnavailableError
        ├── SerializationError
        └── ConcurrentModificationError

Absence of a key is not an error: reads return ``None`` / ``False``.
"""

from tagcache.kernel.errors.application import ApplicationError
from tagcache.kernel.errors.base import CacheError
from tagcache.kernel.errors.domain import (
    DomainError,
    InvalidArgumentError,
    ValidationError,
)
from tagcache.kernel.errors.infrastructure import (
    BackendUnavailableError,
    ConcurrentModificationError,
    ConnectionError,
    InfrastructureError,
    SerializationError,
)

__all__ = [
    "ApplicationError",
    "BackendUnavailableError",
    "CacheError",
    "ConcurrentModificationError",
    "ConnectionError",
    "DomainError",
    "InfrastructureError",
    "InvalidArgumentError",
    "SerializationError",
    "ValidationError",
]
