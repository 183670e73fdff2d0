"""Cache backend selection."""

from pathlib import Path
from typing import Any, Final, Union

from sqlsparrow.cache.backends import FileCache, MemoryCache
from sqlsparrow.cache.protocol import CacheBackendProtocol
from sqlsparrow.exceptions import InvalidCacheTypeError

__all__ = ("create_cache",)

MEMORY_SCHEMES: Final = frozenset({"memory", "memory://"})
FILE_SCHEME: Final = "file://"


def create_cache(cache: "Union[str, Path, CacheBackendProtocol, Any]") -> CacheBackendProtocol:
    """Build or validate a cache backend.

    Args:
        cache: A backend instance, ``"memory"``, a ``file://`` URI or a directory path.

    Raises:
        InvalidCacheTypeError: If the value does not describe a supported backend.

    Returns:
        The cache backend.
    """
    if isinstance(cache, CacheBackendProtocol):
        return cache
    if isinstance(cache, Path):
        return FileCache(cache)
    if isinstance(cache, str):
        value = cache.strip()
        if value.lower() in MEMORY_SCHEMES:
            return MemoryCache()
        if value.startswith(FILE_SCHEME):
            return FileCache(value[len(FILE_SCHEME) :])
        if "://" not in value and value:
            return FileCache(value)
    msg = f"Unsupported cache type: {cache!r}."
    raise InvalidCacheTypeError(msg)
