"""Redis adapter – RedisTagIndex.

Two Redis sets per relationship keep tags queryable in both directions::

    <key>:tags    members: the tags of <key>
    tags:<tag>    members: the logical keys tagged <tag>

Both names carry the adapter's namespace (and backend key prefix).  K is a
member of ``tags:<t>`` iff t is a member of ``<K>:tags``; a key's tag set
exists only while the key has at least one tag.
"""
from __future__ import annotations

from typing import Any, Iterable

from redis.exceptions import WatchError

from tagcache.application.cache import KeyNamespacer
from tagcache.kernel.errors import ConcurrentModificationError
from tagcache.observability.logging import get_logger

logger = get_logger(__name__)

__all__ = ["RedisTagIndex"]


class RedisTagIndex:
    """Maintains the key→tags and tag→keys indexes of one namespace.

    Replacing a key's tags runs as a single WATCH/MULTI/EXEC transaction on
    the key and its tag set, so the two sides never disagree.  A concurrent
    write to the watched keys aborts the transaction, which is retried up to
    ``retry_attempts`` times.
    """

    def __init__(self, client: Any, keys: KeyNamespacer, *, retry_attempts: int = 5) -> None:
        self._client = client
        self._keys = keys
        self._retry_attempts = retry_attempts

    async def tags_of(self, key: str) -> frozenset[str]:
        return frozenset(await self._client.smembers(self._keys.tags_key(key)))

    async def members(self, tag: str) -> frozenset[str]:
        return frozenset(await self._client.smembers(self._keys.tag_members_key(tag)))

    async def replace(self, key: str, tags: Iterable[str], *, require_existing: bool = True) -> bool:
        """Make *tags* the complete tag set of *key*.

        Returns ``False`` without writing when *require_existing* is set and
        the key is absent.  An empty *tags* removes every tag of the key.
        """
        new_tags = list(dict.fromkeys(tags))
        entry_key = self._keys.storage_key(key)
        tags_key = self._keys.tags_key(key)

        for attempt in range(1, self._retry_attempts + 1):
            async with self._client.pipeline(transaction=True) as pipe:
                try:
                    await pipe.watch(entry_key, tags_key)
                    if require_existing and not await pipe.exists(entry_key):
                        return False
                    current = await pipe.smembers(tags_key)

                    pipe.multi()
                    for tag in current:
                        pipe.srem(self._keys.tag_members_key(tag), key)
                    pipe.delete(tags_key)
                    if new_tags:
                        pipe.sadd(tags_key, *new_tags)
                        for tag in new_tags:
                            pipe.sadd(self._keys.tag_members_key(tag), key)
                    await pipe.execute()
                except WatchError:
                    logger.warning("tag_update_conflict", key=key, attempt=attempt)
                    continue

            logger.debug("tags_replaced", key=key, removed=len(current), added=len(new_tags))
            return True

        raise ConcurrentModificationError(key, self._retry_attempts)

    async def unwind(self, key: str) -> None:
        """Remove *key* from every tag index, whether or not the key still exists."""
        if await self.tags_of(key):
            await self.replace(key, [], require_existing=False)

    async def matching(self, tags: Iterable[str], *, disjunction: bool = False) -> list[str]:
        """Logical keys selected by *tags*.

        Disjunction selects keys carrying any of the tags; conjunction only
        keys carrying all of them.
        """
        requested = list(dict.fromkeys(tags))
        matched: dict[str, set[str]] = {}
        for tag in requested:
            for key in await self.members(tag):
                matched.setdefault(key, set()).add(tag)

        if disjunction:
            return list(matched)
        required = set(requested)
        return [key for key, key_tags in matched.items() if key_tags >= required]
