from typing import Any, Protocol, runtime_checkable

__all__ = ("CacheBackendProtocol",)


@runtime_checkable
class CacheBackendProtocol(Protocol):
    """Key/value store used by the read-through cache.

    A ``ttl`` of 0 means the entry never expires.
    """

    def get(self, key: str) -> "tuple[Any, bool]":
        """Look up a key, returning ``(value, found)``."""
        ...

    def set(self, key: str, value: Any, ttl: int = 0) -> None:
        """Store a value for ``ttl`` seconds."""
        ...

    def delete(self, key: str) -> bool:
        """Remove a key, returning whether it existed."""
        ...

    def flush(self) -> None:
        """Remove every key."""
        ...
