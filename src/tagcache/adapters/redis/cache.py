"""Redis adapter – RedisCache, a tagged key/value cache on ``redis.asyncio``."""
from __future__ import annotations

import asyncio
import dataclasses
import functools
from typing import Any, Awaitable, Callable, Iterable, Mapping, TypeVar

import redis.asyncio as aioredis
from redis import exceptions as redis_exceptions

from tagcache.adapters.redis.options import RedisCacheOptions
from tagcache.adapters.redis.tags import RedisTagIndex
from tagcache.application.cache import ItemMetadata, normalize_key, normalize_value
from tagcache.application.cache.ttl import KEY_MISSING
from tagcache.kernel.errors import BackendUnavailableError, InvalidArgumentError
from tagcache.observability.logging import get_logger, redact_url

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])

_UNAVAILABLE = (redis_exceptions.ConnectionError, redis_exceptions.TimeoutError)


def _backend_call(fn: F) -> F:
    """Re-raise connection-level redis failures as BackendUnavailableError."""

    @functools.wraps(fn)
    async def wrapper(self: RedisCache, *args: Any, **kwargs: Any) -> Any:
        try:
            return await fn(self, *args, **kwargs)
        except _UNAVAILABLE as exc:
            logger.error("redis_unavailable", operation=fn.__name__, error=str(exc))
            raise BackendUnavailableError("redis", operation=fn.__name__, cause=exc) from exc

    return wrapper  # type: ignore[return-value]


class RedisCache:
    """Tagged key/value cache backed by Redis.

    Keys are namespaced by :class:`~tagcache.application.cache.KeyNamespacer`;
    writes expire according to the configured TTL; tags are kept in two
    Redis sets per relationship (see :mod:`tagcache.adapters.redis.tags`).

    The client is built lazily from ``options.url`` on first use and reused
    for the adapter's lifetime.  Pass *client* to use an existing
    ``redis.asyncio.Redis`` (it must decode responses).

    Usage::

        cache = RedisCache(RedisCacheOptions(url="redis://localhost:6379/0", ttl=60))
        await cache.set_item("order:42", "...")
        await cache.set_tags("order:42", ["orders", "customer:7"])
        await cache.clear_by_tags(["customer:7"])
    """

    def __init__(self, options: RedisCacheOptions | None = None, *, client: Any = None) -> None:
        self._options = options or RedisCacheOptions()
        self._keys = self._options.namespacer()
        self._ttl = self._options.ttl_policy()
        self._conn: tuple[Any, RedisTagIndex] | None = None
        if client is not None:
            self._conn = (client, self._tag_index(client))
        self._init_lock = asyncio.Lock()

    @classmethod
    def from_url(cls, url: str, **fields: Any) -> RedisCache:
        """Build an adapter from a URL plus any :class:`RedisCacheOptions` fields."""
        return cls(RedisCacheOptions(url=url, **fields))

    @property
    def options(self) -> RedisCacheOptions:
        return self._options

    def with_options(self, **changes: Any) -> RedisCache:
        """Return a new adapter with *changes* applied to the options.

        The connection is shared unless the connection settings change, so
        closing either adapter closes it for both.
        """
        options = dataclasses.replace(self._options, **changes)
        client = self._conn[0] if self._conn is not None else None
        if {"url", "client_options"} & changes.keys():
            client = None
        return type(self)(options, client=client)

    # ------------------------------------------------------------------
    # connection
    # ------------------------------------------------------------------

    def _tag_index(self, client: Any) -> RedisTagIndex:
        return RedisTagIndex(client, self._keys, retry_attempts=self._options.tag_retry_attempts)

    async def _connection(self) -> tuple[Any, RedisTagIndex]:
        conn = self._conn
        if conn is None:
            async with self._init_lock:
                conn = self._conn
                if conn is None:
                    client = aioredis.from_url(
                        self._options.url,
                        decode_responses=True,
                        **self._options.client_options,
                    )
                    conn = self._conn = (client, self._tag_index(client))
                    logger.info(
                        "redis_cache_connected",
                        url=redact_url(self._options.url),
                        namespace=self._options.namespace,
                    )
        return conn

    async def close(self) -> None:
        if self._conn is None:
            return
        client, _ = self._conn
        self._conn = None
        await client.aclose()

    async def __aenter__(self) -> RedisCache:
        await self._connection()
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # single items
    # ------------------------------------------------------------------

    @_backend_call
    async def get_item(self, key: str) -> str | None:
        client, _ = await self._connection()
        return await client.get(self._keys.storage_key(normalize_key(key)))

    @_backend_call
    async def has_item(self, key: str) -> bool:
        client, _ = await self._connection()
        return bool(await client.exists(self._keys.storage_key(normalize_key(key))))

    @_backend_call
    async def set_item(self, key: str, value: Any) -> bool:
        client, _ = await self._connection()
        storage_key = self._keys.storage_key(normalize_key(key))
        return bool(await client.set(storage_key, normalize_value(value), ex=self._ttl.expiry()))

    @_backend_call
    async def add_item(self, key: str, value: Any) -> bool:
        """Store *value* only if *key* does not exist yet."""
        client, _ = await self._connection()
        storage_key = self._keys.storage_key(normalize_key(key))
        return bool(await client.set(storage_key, normalize_value(value), ex=self._ttl.expiry(), nx=True))

    @_backend_call
    async def replace_item(self, key: str, value: Any) -> bool:
        """Store *value* only if *key* already exists."""
        client, _ = await self._connection()
        storage_key = self._keys.storage_key(normalize_key(key))
        return bool(await client.set(storage_key, normalize_value(value), ex=self._ttl.expiry(), xx=True))

    @_backend_call
    async def remove_item(self, key: str) -> bool:
        client, tags = await self._connection()
        key = normalize_key(key)
        await tags.unwind(key)
        return bool(await client.delete(self._keys.storage_key(key)))

    @_backend_call
    async def increment_item(self, key: str, delta: int) -> int:
        client, _ = await self._connection()
        return int(await client.incrby(self._keys.storage_key(normalize_key(key)), delta))

    @_backend_call
    async def decrement_item(self, key: str, delta: int) -> int:
        client, _ = await self._connection()
        return int(await client.decrby(self._keys.storage_key(normalize_key(key)), delta))

    @_backend_call
    async def touch_item(self, key: str) -> bool:
        """Re-apply the configured TTL; ``False`` when the key does not exist.

        With TTL disabled the key's expiry is removed.
        """
        client, _ = await self._connection()
        storage_key = self._keys.storage_key(normalize_key(key))
        expiry = self._ttl.expiry()
        if expiry is not None:
            return bool(await client.expire(storage_key, expiry))
        await client.persist(storage_key)
        return bool(await client.exists(storage_key))

    @_backend_call
    async def get_metadata(self, key: str) -> ItemMetadata | None:
        client, _ = await self._connection()
        pttl = int(await client.pttl(self._keys.storage_key(normalize_key(key))))
        if pttl <= KEY_MISSING:
            return None
        return ItemMetadata(ttl=self._ttl.remaining_seconds(pttl))

    # ------------------------------------------------------------------
    # bulk
    # ------------------------------------------------------------------

    @_backend_call
    async def get_items(self, keys: Iterable[str]) -> dict[str, str]:
        client, _ = await self._connection()
        logical = [normalize_key(k) for k in keys]
        if not logical:
            return {}
        values = await client.mget([self._keys.storage_key(k) for k in logical])
        return {k: v for k, v in zip(logical, values) if v is not None}

    @_backend_call
    async def has_items(self, keys: Iterable[str]) -> list[str]:
        """Return the subset of *keys* that exist."""
        client, _ = await self._connection()
        logical = [normalize_key(k) for k in keys]
        if not logical:
            return []
        async with client.pipeline(transaction=False) as pipe:
            for k in logical:
                pipe.exists(self._keys.storage_key(k))
            found = await pipe.execute()
        return [k for k, hit in zip(logical, found) if hit]

    @_backend_call
    async def set_items(self, items: Mapping[str, Any]) -> list[str]:
        """Store every pair; return the keys that could not be written."""
        client, _ = await self._connection()
        pairs = {normalize_key(k): normalize_value(v) for k, v in items.items()}
        if not pairs:
            return []

        expiry = self._ttl.expiry()
        if expiry is None:
            ok = await client.mset({self._keys.storage_key(k): v for k, v in pairs.items()})
            return [] if ok else list(pairs)

        async with client.pipeline(transaction=False) as pipe:
            for k, v in pairs.items():
                pipe.set(self._keys.storage_key(k), v, ex=expiry)
            results = await pipe.execute(raise_on_error=False)
        return [k for k, result in zip(pairs, results) if isinstance(result, Exception) or not result]

    @_backend_call
    async def touch_items(self, keys: Iterable[str]) -> list[str]:
        """Touch every key in one pipeline; return the keys that did not exist."""
        client, _ = await self._connection()
        logical = [normalize_key(k) for k in keys]
        if not logical:
            return []

        expiry = self._ttl.expiry()
        async with client.pipeline(transaction=False) as pipe:
            for k in logical:
                storage_key = self._keys.storage_key(k)
                if expiry is not None:
                    pipe.expire(storage_key, expiry)
                else:
                    pipe.persist(storage_key)
                    pipe.exists(storage_key)
            results = await pipe.execute()
        # without TTL every key queued PERSIST then EXISTS; only EXISTS counts
        touched = results if expiry is not None else results[1::2]
        return [k for k, ok in zip(logical, touched) if not ok]

    @_backend_call
    async def remove_items(self, keys: Iterable[str]) -> int:
        """Delete *keys* with their tags; return how many the backend deleted."""
        client, tags = await self._connection()
        logical = [normalize_key(k) for k in keys]
        if not logical:
            return 0
        for k in logical:
            await tags.unwind(k)
        return int(await client.delete(*(self._keys.storage_key(k) for k in logical)))

    # ------------------------------------------------------------------
    # tags
    # ------------------------------------------------------------------

    @_backend_call
    async def set_tags(self, key: str, tags: Iterable[str]) -> bool:
        """Replace the tags of *key*; ``False`` if the key does not exist."""
        _, index = await self._connection()
        return await index.replace(normalize_key(key), tags)

    @_backend_call
    async def get_tags(self, key: str) -> frozenset[str]:
        """Tags of *key*; the empty set when it has none."""
        _, index = await self._connection()
        return await index.tags_of(normalize_key(key))

    @_backend_call
    async def clear_by_tags(self, tags: Iterable[str], disjunction: bool = False) -> None:
        """Remove keys carrying all *tags*, or any of them when *disjunction*."""
        _, index = await self._connection()
        tags = list(tags)
        victims = await index.matching(tags, disjunction=disjunction)
        if not victims:
            return
        removed = await self.remove_items(victims)
        logger.info("cleared_by_tags", tags=tags, disjunction=disjunction, removed=removed)

    # ------------------------------------------------------------------
    # namespace / prefix / whole database
    # ------------------------------------------------------------------

    @_backend_call
    async def clear_by_namespace(self, namespace: str) -> bool:
        if not namespace:
            raise InvalidArgumentError("namespace")
        client, _ = await self._connection()
        found = await client.keys(self._keys.namespace_pattern(namespace))
        if found:
            await client.delete(*found)
        logger.info("cleared_by_namespace", namespace=namespace, removed=len(found))
        return True

    @_backend_call
    async def clear_by_prefix(self, prefix: str) -> bool:
        """Remove every key starting with *prefix*, cascading to its tags.

        Tag→keys sets matched by the pattern are left to the cascade: they
        may still list keys outside *prefix*.
        """
        if not prefix:
            raise InvalidArgumentError("prefix")
        client, tags = await self._connection()
        found = await client.keys(self._keys.prefix_pattern(prefix))

        entries: list[str] = []
        owners: dict[str, None] = {}
        for storage_key in found:
            logical = self._keys.logical_key(storage_key)
            if self._keys.is_tag_members(logical):
                continue
            entries.append(storage_key)
            owners[logical] = None
            owner = self._keys.index_owner(logical)
            if owner is not None:
                owners[owner] = None

        for key in owners:
            await tags.unwind(key)
        if entries:
            await client.delete(*entries)
        logger.info("cleared_by_prefix", prefix=prefix, removed=len(entries))
        return True

    @_backend_call
    async def flush(self) -> bool:
        client, _ = await self._connection()
        await client.flushdb()
        logger.info("flushed")
        return True

    @_backend_call
    async def get_total_space(self) -> int:
        client, _ = await self._connection()
        info = await client.info("memory")
        return int(info["total_system_memory"])


__all__ = ["RedisCache"]
