"""Application cache – KeyNamespacer."""
from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = ["KeyNamespacer", "escape_pattern"]

_GLOB_SPECIALS = re.compile(r"([*?\[\]\\])")

TAGS_SUFFIX = ":tags"
TAG_PREFIX = "tags:"


def escape_pattern(literal: str) -> str:
    """Escape Redis glob metacharacters so *literal* only matches itself."""
    return _GLOB_SPECIALS.sub(r"\\\1", literal)


@dataclass(frozen=True)
class KeyNamespacer:
    """Translate logical cache keys into backend keys.

    Three layers compose a backend key::

        <key_prefix><namespace><separator><logical key>

    ``physical_key`` covers the namespace part only; ``storage_key`` adds the
    backend-level ``key_prefix`` and is what goes on the wire.
    """

    namespace: str = ""
    separator: str = ":"
    key_prefix: str = ""

    @property
    def prefix(self) -> str:
        return f"{self.namespace}{self.separator}" if self.namespace else ""

    def physical_key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def storage_key(self, key: str) -> str:
        return f"{self.key_prefix}{self.physical_key(key)}"

    def logical_key(self, storage_key: str) -> str:
        """Inverse of :meth:`storage_key` for a key returned by KEYS."""
        prefix = self.storage_key("")
        if prefix and storage_key.startswith(prefix):
            return storage_key[len(prefix):]
        return storage_key

    # tag index keys

    @staticmethod
    def is_tag_members(logical: str) -> bool:
        """Whether *logical* names a tag→keys set rather than an entry."""
        return logical.startswith(TAG_PREFIX)

    @staticmethod
    def index_owner(logical: str) -> str | None:
        """The key whose tag set lives under *logical*, or ``None``."""
        if logical.endswith(TAGS_SUFFIX) and len(logical) > len(TAGS_SUFFIX):
            return logical[:-len(TAGS_SUFFIX)]
        return None

    def tags_key(self, key: str) -> str:
        """Storage key of the set holding *key*'s tags."""
        return self.storage_key(f"{key}{TAGS_SUFFIX}")

    def tag_members_key(self, tag: str) -> str:
        """Storage key of the set holding the logical keys tagged *tag*."""
        return self.storage_key(f"{TAG_PREFIX}{tag}")

    # KEYS patterns

    def namespace_pattern(self, namespace: str) -> str:
        """Pattern matching every key stored under *namespace*."""
        return escape_pattern(f"{self.key_prefix}{namespace}{self.separator}") + "*"

    def prefix_pattern(self, prefix: str) -> str:
        """Pattern matching logical keys starting with *prefix* in this namespace."""
        return escape_pattern(self.storage_key(prefix)) + "*"
