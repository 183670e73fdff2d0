"""Read-through caching of query results."""

import logging
from typing import Any, Callable

from sqlsparrow.cache.protocol import CacheBackendProtocol
from sqlsparrow.utils.logging import get_logger, log_with_context

__all__ = ("ReadThroughCache",)

logger = get_logger("cache")


class ReadThroughCache:
    """Get-or-populate wrapper around a cache backend.

    Every key is namespaced with ``key_prefix`` before it reaches the backend.
    """

    __slots__ = ("backend", "key_prefix")

    def __init__(self, backend: CacheBackendProtocol, key_prefix: str = "") -> None:
        self.backend = backend
        self.key_prefix = key_prefix

    def make_key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def get_or_load(self, key: str, loader: "Callable[[], Any]", ttl: int = 0) -> "tuple[Any, bool]":
        """Return the cached value for ``key`` or load and store it.

        Args:
            key: Cache key, without the prefix.
            loader: Called on a miss to produce the value.
            ttl: Seconds to keep a loaded value; 0 keeps it until removed.

        Returns:
            The value and whether it came from the cache.
        """
        value, found = self.fetch(key)
        if found:
            return value, True
        value = loader()
        self.store(key, value, ttl)
        return value, False

    def fetch(self, key: str) -> "tuple[Any, bool]":
        cache_key = self.make_key(key)
        value, found = self.backend.get(cache_key)
        log_with_context(
            logger, logging.DEBUG, "Cache hit" if found else "Cache miss", cache_key=cache_key, hit=found
        )
        return value, found

    def store(self, key: str, value: Any, ttl: int = 0) -> None:
        cache_key = self.make_key(key)
        self.backend.set(cache_key, value, ttl)
        log_with_context(logger, logging.DEBUG, "Cache store", cache_key=cache_key, ttl=ttl)

    def clear(self, key: str) -> bool:
        return self.backend.delete(self.make_key(key))

    def flush(self) -> None:
        self.backend.flush()

    def __repr__(self) -> str:
        return f"ReadThroughCache(backend={self.backend!r}, key_prefix={self.key_prefix!r})"
