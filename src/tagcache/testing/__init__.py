"""Testing – in-memory doubles for exercising the cache without a server."""
