"""Bundled cache backends."""

from sqlsparrow.cache.backends.file import FileCache
from sqlsparrow.cache.backends.memory import MemoryCache

__all__ = ("FileCache", "MemoryCache")
