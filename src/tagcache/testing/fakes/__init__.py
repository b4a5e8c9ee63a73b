"""Testing fakes – in-memory doubles for backend clients."""
from tagcache.testing.fakes.redis import FakePipeline, FakeRedis, glob_to_regex

__all__ = ["FakePipeline", "FakeRedis", "glob_to_regex"]
