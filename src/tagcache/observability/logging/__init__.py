"""Observability – structured logging helpers."""
from tagcache.observability.logging.factory import JsonLoggerFactory
from tagcache.observability.logging.processors import get_logger, redact_credentials, redact_url

__all__ = ["JsonLoggerFactory", "get_logger", "redact_credentials", "redact_url"]
