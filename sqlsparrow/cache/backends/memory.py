"""In-process cache backend."""

import copy
import time
from typing import Any

from mypy_extensions import mypyc_attr

__all__ = ("MemoryCache",)


@mypyc_attr(allow_interpreted_subclasses=True)
class MemoryCache:
    """Dictionary backed cache with per-entry expiry.

    Expired entries are dropped lazily when they are read. Values are copied on
    the way in and on the way out, so callers never share a cached object.
    """

    __slots__ = ("_data",)

    def __init__(self) -> None:
        self._data: dict[str, tuple[Any, float]] = {}

    def get(self, key: str) -> "tuple[Any, bool]":
        entry = self._data.get(key)
        if entry is None:
            return None, False
        value, expire = entry
        if expire and expire <= time.time():
            del self._data[key]
            return None, False
        return copy.deepcopy(value), True

    def set(self, key: str, value: Any, ttl: int = 0) -> None:
        expire = time.time() + ttl if ttl > 0 else 0.0
        self._data[key] = (copy.deepcopy(value), expire)

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def flush(self) -> None:
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"MemoryCache(entries={len(self._data)})"
