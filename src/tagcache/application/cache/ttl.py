"""Application cache – TtlPolicy."""
from __future__ import annotations

from dataclasses import dataclass

__all__ = ["NO_EXPIRY", "KEY_MISSING", "TtlPolicy"]

# PTTL sentinels
NO_EXPIRY = -1
KEY_MISSING = -2


@dataclass(frozen=True)
class TtlPolicy:
    """Decide how writes expire, from the configured default TTL in seconds.

    ``ttl == 0`` disables expiry: plain SET / MSET.  Any positive value turns
    every write into a write-with-expiry.
    """

    ttl: int = 0

    @property
    def enabled(self) -> bool:
        return self.ttl > 0

    def expiry(self) -> int | None:
        """Seconds to pass as ``ex=``, or ``None`` for no expiry."""
        return self.ttl if self.enabled else None

    @staticmethod
    def remaining_seconds(pttl: int) -> float | None:
        """Convert a PTTL reply into seconds; ``None`` means no expiry.

        Callers must check for ``KEY_MISSING`` first.
        """
        if pttl == NO_EXPIRY:
            return None
        return pttl / 1000
