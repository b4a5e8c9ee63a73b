"""Application cache – TaggableCache contract, ItemMetadata and value normalisation."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Protocol, runtime_checkable

from tagcache.kernel.errors import InvalidArgumentError, SerializationError

__all__ = [
    "ItemMetadata",
    "TaggableCache",
    "normalize_key",
    "normalize_value",
]


@dataclass(frozen=True)
class ItemMetadata:
    """Metadata of a stored item.

    ``ttl`` is the remaining lifetime in seconds, ``None`` when the item
    never expires.
    """
    ttl: float | None = None


def normalize_key(key: str) -> str:
    if not key:
        raise InvalidArgumentError("key", "An empty key isn't allowed")
    return key


def normalize_value(value: Any) -> str:
    """Reduce *value* to the string form the backend stores.

    ``None`` and ``False`` become ``""``, ``True`` becomes ``"1"``, numbers use
    ``str()``.  Structured values must be serialised by the caller.
    """
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise SerializationError("Binary values must be UTF-8", payload_type="bytes", cause=exc) from exc
    raise SerializationError(
        f"Cannot store a value of type {type(value).__name__}",
        payload_type=type(value).__name__,
    )


@runtime_checkable
class TaggableCache(Protocol):
    """Generic key/value cache contract with tag-based invalidation."""

    async def get_item(self, key: str) -> str | None: ...
    async def get_items(self, keys: Iterable[str]) -> dict[str, str]: ...
    async def has_item(self, key: str) -> bool: ...
    async def set_item(self, key: str, value: Any) -> bool: ...
    async def set_items(self, items: Mapping[str, Any]) -> list[str]: ...  # failed keys
    async def remove_item(self, key: str) -> bool: ...
    async def remove_items(self, keys: Iterable[str]) -> int: ...  # removed count
    async def increment_item(self, key: str, delta: int) -> int: ...
    async def decrement_item(self, key: str, delta: int) -> int: ...
    async def touch_item(self, key: str) -> bool: ...
    async def get_metadata(self, key: str) -> ItemMetadata | None: ...
    async def set_tags(self, key: str, tags: Iterable[str]) -> bool: ...
    async def get_tags(self, key: str) -> frozenset[str]: ...
    async def clear_by_tags(self, tags: Iterable[str], disjunction: bool = False) -> None: ...
    async def clear_by_namespace(self, namespace: str) -> bool: ...
    async def clear_by_prefix(self, prefix: str) -> bool: ...
    async def flush(self) -> bool: ...
    async def get_total_space(self) -> int: ...
