"""Shared pytest configuration."""

pytest_plugins = ["tagcache.testing.fixtures"]
