"""
tagcache – tagged key/value cache adapter for Redis.

Import path convention::

    from tagcache.adapters.redis import RedisCache, RedisCacheOptions
    from tagcache.kernel.errors import InvalidArgumentError
    from tagcache.application.cache import TaggableCache
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
