"""Application cache – key namespacing, TTL policy and the cache contract."""
from tagcache.application.cache.keys import KeyNamespacer, escape_pattern
from tagcache.application.cache.storage import (
    ItemMetadata,
    TaggableCache,
    normalize_key,
    normalize_value,
)
from tagcache.application.cache.ttl import TtlPolicy

__all__ = [
    "ItemMetadata",
    "KeyNamespacer",
    "TaggableCache",
    "TtlPolicy",
    "escape_pattern",
    "normalize_key",
    "normalize_value",
]
