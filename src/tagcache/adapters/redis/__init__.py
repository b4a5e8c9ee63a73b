"""Redis adapter – tagged cache, options and tag index."""
from tagcache.adapters.redis.cache import RedisCache
from tagcache.adapters.redis.options import RedisCacheOptions
from tagcache.adapters.redis.tags import RedisTagIndex

__all__ = ["RedisCache", "RedisCacheOptions", "RedisTagIndex"]
