"""Redis adapter – RedisCacheOptions."""
from __future__ import annotations

import dataclasses
from typing import Any

from tagcache.application.cache import KeyNamespacer, TtlPolicy
from tagcache.config.settings import Settings
from tagcache.config.validation import InvalidSettingValueError


@dataclasses.dataclass(frozen=True)
class RedisCacheOptions(Settings):
    """Immutable configuration of a :class:`RedisCache`.

    Loadable from ``TAGCACHE_*`` environment variables via
    :class:`~tagcache.config.settings.EnvSettingsLoader`.
    """

    _prefix: dataclasses.ClassVar[str] = "TAGCACHE"

    url: str = "redis://localhost:6379/0"
    client_options: dict[str, Any] = dataclasses.field(default_factory=dict)
    key_prefix: str = ""
    ttl: int = 0
    namespace: str = ""
    namespace_separator: str = ":"
    tag_retry_attempts: int = 5

    def _validate(self) -> None:
        if self.ttl < 0:
            raise InvalidSettingValueError("ttl", self.ttl, "must be >= 0 (0 disables expiry)")
        if self.namespace and not self.namespace_separator:
            raise InvalidSettingValueError(
                "namespace_separator", self.namespace_separator, "required when a namespace is set"
            )
        if self.tag_retry_attempts < 1:
            raise InvalidSettingValueError("tag_retry_attempts", self.tag_retry_attempts, "must be >= 1")
        if "decode_responses" in self.client_options:
            raise InvalidSettingValueError(
                "client_options", self.client_options, "decode_responses is managed by the adapter"
            )

    def namespacer(self) -> KeyNamespacer:
        return KeyNamespacer(
            namespace=self.namespace,
            separator=self.namespace_separator,
            key_prefix=self.key_prefix,
        )

    def ttl_policy(self) -> TtlPolicy:
        return TtlPolicy(self.ttl)


__all__ = ["RedisCacheOptions"]
