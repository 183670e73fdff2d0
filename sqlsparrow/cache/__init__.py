"""Result caching for sqlsparrow."""

from sqlsparrow.cache._read_through import ReadThroughCache
from sqlsparrow.cache.backends import FileCache, MemoryCache
from sqlsparrow.cache.protocol import CacheBackendProtocol
from sqlsparrow.cache.registry import create_cache

__all__ = ("CacheBackendProtocol", "FileCache", "MemoryCache", "ReadThroughCache", "create_cache")
