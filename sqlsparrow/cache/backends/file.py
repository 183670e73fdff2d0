"""Directory backed cache backend."""

import hashlib
import logging
import os
import tempfile
import time
from pathlib import Path
from typing import Any, Callable, Union

from mypy_extensions import mypyc_attr

from sqlsparrow.utils.logging import get_logger, log_with_context
from sqlsparrow.utils.serializers import from_msgpack, to_msgpack

__all__ = ("FileCache",)

logger = get_logger("cache.file")

CACHE_FILE_SUFFIX = ".cache"


def _key_to_filename(key: str) -> str:
    return hashlib.md5(key.encode("utf-8"), usedforsecurity=False).hexdigest() + CACHE_FILE_SUFFIX


@mypyc_attr(allow_interpreted_subclasses=True)
class FileCache:
    """Cache storing one msgpack file per key under a directory.

    Each file holds ``{"expire": <unix timestamp or 0>, "value": <value>}``.
    Values keep their Python types across a round trip, including ``bytes``,
    ``Decimal`` and ``datetime``/``date``/``time``.
    An expiry of 0 never expires; any other expiry is checked when the entry
    is read, and a stale file is removed at that point.
    """

    __slots__ = ("_clock", "path")

    def __init__(self, path: "Union[str, Path]", clock: "Callable[[], float]" = time.time) -> None:
        self.path = Path(path).expanduser()
        self.path.mkdir(parents=True, exist_ok=True)
        self._clock = clock

    def _file_for(self, key: str) -> Path:
        return self.path / _key_to_filename(key)

    def get(self, key: str) -> "tuple[Any, bool]":
        file = self._file_for(key)
        try:
            payload = from_msgpack(file.read_bytes())
        except FileNotFoundError:
            return None, False
        expire = payload.get("expire", 0)
        if expire and expire <= self._clock():
            log_with_context(logger, logging.DEBUG, "Cache entry expired", cache_key=key, expire=expire)
            file.unlink(missing_ok=True)
            return None, False
        return payload.get("value"), True

    def set(self, key: str, value: Any, ttl: int = 0) -> None:
        expire = self._clock() + ttl if ttl > 0 else 0
        data = to_msgpack({"expire": expire, "value": value})
        fd, tmp_name = tempfile.mkstemp(dir=self.path, suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
            os.replace(tmp_name, self._file_for(key))
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def delete(self, key: str) -> bool:
        file = self._file_for(key)
        if not file.exists():
            return False
        file.unlink(missing_ok=True)
        return True

    def flush(self) -> None:
        for file in self.path.glob(f"*{CACHE_FILE_SUFFIX}"):
            file.unlink(missing_ok=True)

    def __repr__(self) -> str:
        return f"FileCache(path={str(self.path)!r})"
