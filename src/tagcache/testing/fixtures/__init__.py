"""Testing fixtures – pytest fixtures for the cache doubles.

Enable in a ``conftest.py``::

    pytest_plugins = ["tagcache.testing.fixtures"]
"""
from tagcache.testing.fixtures.cache import fake_redis, tagged_cache

__all__ = ["fake_redis", "tagged_cache"]
