"""The ``Sparrow`` facade: statement builder, driver adapter, cache and stats in one object."""

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Generic, Optional, Union

import msgspec

from sqlsparrow.builder import QueryBuilder
from sqlsparrow.cache import ReadThroughCache, create_cache
from sqlsparrow.config import ConnectionConfig, engine_for_connection, resolve_driver_type
from sqlsparrow.driver import NO_INSERT_ID, SyncDriverAdapterBase
from sqlsparrow.exceptions import ClassNotDefinedError, ImproperConfigurationError
from sqlsparrow.observability import get_stats_collector
from sqlsparrow.typing import ModelT
from sqlsparrow.utils.logging import get_logger, log_with_context

if TYPE_CHECKING:
    from types import TracebackType

    from typing_extensions import Self

    from sqlsparrow.cache import CacheBackendProtocol
    from sqlsparrow.driver import ExecutionResult
    from sqlsparrow.observability import StatsCollector, StatsSummary

__all__ = ("DatabaseSource", "Sparrow", "create_driver")

logger = get_logger("base")

DatabaseSource = Union[ConnectionConfig, Mapping[str, Any], str, SyncDriverAdapterBase[Any], Any]
"""Anything :meth:`Sparrow.set_db` accepts."""


def create_driver(
    db: DatabaseSource, *, verbose_errors: bool = False, stats: "Optional[StatsCollector]" = None
) -> "SyncDriverAdapterBase[Any]":
    """Build a driver adapter from a config, mapping, URL, adapter or open connection.

    ``verbose_errors`` and ``stats`` configure newly built adapters only. An
    adapter passed in is returned unchanged and keeps its own settings.

    Raises:
        InvalidDriverTypeError: If the engine or connection type is not supported.
        ImproperConfigurationError: If a URL or mapping cannot be understood.
        MissingDependencyError: If the engine's driver library is not installed.
    """
    if isinstance(db, SyncDriverAdapterBase):
        return db
    if isinstance(db, str):
        db = ConnectionConfig.from_url(db)
    elif isinstance(db, Mapping):
        db = ConnectionConfig.from_mapping(db)
    if isinstance(db, ConnectionConfig):
        driver_type = resolve_driver_type(db.engine)
        return driver_type(config=db, verbose_errors=verbose_errors, stats=stats)
    driver_type = resolve_driver_type(engine_for_connection(db))
    return driver_type(connection=db, verbose_errors=verbose_errors, stats=stats)


class Sparrow(QueryBuilder, Generic[ModelT]):
    """Build, execute and cache SQL statements against one database.

    Example:
        >>> db = Sparrow("sqlite://:memory:")
        >>> db.from_("user").where("id", 123).select().sql
        'SELECT * FROM user WHERE id=123'

    Once a database is set, string values are escaped through the driver's
    native escaping, which opens the connection on first use.
    """

    def __init__(
        self,
        db: "Optional[DatabaseSource]" = None,
        cache: "Optional[Union[str, CacheBackendProtocol]]" = None,
        *,
        table: Optional[str] = None,
        stats_enabled: bool = False,
        show_sql: bool = False,
        key_prefix: str = "",
        stats: "Optional[StatsCollector]" = None,
    ) -> None:
        super().__init__(table)
        self._driver: Optional[SyncDriverAdapterBase[Any]] = None
        self._cache: Optional[ReadThroughCache] = None
        self._stats = stats if stats is not None else get_stats_collector()
        self._stats_enabled = stats_enabled
        self._show_sql = show_sql
        self._key_prefix = key_prefix
        self._is_cached = False
        self._schema_type: Optional[type[ModelT]] = None
        if db is not None:
            self.set_db(db)
        if cache is not None:
            self.set_cache(cache)

    # -- configuration --
    @property
    def stats_enabled(self) -> bool:
        return self._stats_enabled

    @stats_enabled.setter
    def stats_enabled(self, value: bool) -> None:
        self._stats_enabled = value
        if self._driver is not None:
            self._driver.stats = self._stats if value else None

    @property
    def show_sql(self) -> bool:
        """Attach the SQL text to execution errors."""
        return self._show_sql

    @show_sql.setter
    def show_sql(self, value: bool) -> None:
        self._show_sql = value
        if self._driver is not None:
            self._driver.verbose_errors = value

    @property
    def key_prefix(self) -> str:
        return self._key_prefix

    @key_prefix.setter
    def key_prefix(self, value: str) -> None:
        self._key_prefix = value
        if self._cache is not None:
            self._cache.key_prefix = value

    @property
    def driver(self) -> "Optional[SyncDriverAdapterBase[Any]]":
        return self._driver

    def set_db(self, db: DatabaseSource) -> "Self":
        """Set the database to execute against.

        A driver adapter keeps its own ``verbose_errors`` and ``stats`` settings;
        :attr:`show_sql` and :attr:`stats_enabled` are updated to match them.

        Args:
            db: A :class:`ConnectionConfig`, a settings mapping, a connection URL,
                a driver adapter, or an open sqlite3/psycopg/PyMySQL connection.

        Raises:
            InvalidDriverTypeError: If the database type is not supported.

        Returns:
            The current instance for method chaining.
        """
        driver = create_driver(
            db, verbose_errors=self._show_sql, stats=self._stats if self._stats_enabled else None
        )
        if driver is db:
            self._show_sql = bool(driver.verbose_errors)
            if driver.stats is not None:
                self._stats = driver.stats
            self._stats_enabled = driver.stats is not None
        self._driver = driver
        self._quoter.set_escaper(driver.escape)
        log_with_context(logger, logging.DEBUG, "Database set", driver=repr(driver))
        return self

    def get_db(self) -> Any:
        """Get the driver connection, opening it if needed."""
        return self._require_driver().connection

    def set_cache(self, cache: "Optional[Union[str, CacheBackendProtocol]]") -> "Self":
        """Set the result cache.

        Args:
            cache: A cache backend, ``"memory"``, a ``file://`` URI, a directory
                path, or None to disable caching.

        Raises:
            InvalidCacheTypeError: If the cache type is not supported.

        Returns:
            The current instance for method chaining.
        """
        self._cache = None if cache is None else ReadThroughCache(create_cache(cache), self._key_prefix)
        return self

    def get_cache(self) -> "Optional[CacheBackendProtocol]":
        return None if self._cache is None else self._cache.backend

    def close(self) -> None:
        """Close the connection opened by the driver, if any."""
        if self._driver is not None:
            self._driver.close()

    def __enter__(self) -> "Self":
        return self

    def __exit__(
        self,
        exc_type: "Optional[type[BaseException]]",
        exc_val: "Optional[BaseException]",
        exc_tb: "Optional[TracebackType]",
    ) -> None:
        self.close()

    # -- execution --
    @property
    def is_cached(self) -> bool:
        """Whether the last read was served from the cache."""
        return self._is_cached

    @property
    def last_query(self) -> Optional[str]:
        return None if self._driver is None else self._driver.last_query

    @property
    def num_rows(self) -> int:
        return 0 if self._driver is None else self._driver.num_rows

    @property
    def affected_rows(self) -> int:
        return 0 if self._driver is None else self._driver.affected_rows

    @property
    def insert_id(self) -> int:
        return NO_INSERT_ID if self._driver is None else self._driver.insert_id

    def execute(self, sql: Optional[str] = None) -> "ExecutionResult":
        """Execute a statement, by default the last one built.

        Raises:
            ImproperConfigurationError: If no database has been set.
            QueryExecutionError: If the driver rejects the statement.
        """
        return self._require_driver().execute(sql or self.sql)

    def many(self, key: Optional[str] = None, expire: int = 0) -> "list[dict[str, Any]]":
        """Fetch all rows of the current statement.

        A SELECT is built first when no statement has been built yet. With a
        cache and a ``key``, cached rows are returned without touching the
        database; on a miss the rows are stored for ``expire`` seconds
        (0 = no expiry).
        """
        self._is_cached = False
        if self._cache is None or key is None:
            return self._load_rows()
        rows, hit = self._cache.get_or_load(key, self._load_rows, expire)
        self._is_cached = hit
        if not hit and self._stats_enabled:
            self._stats.record_cached(self._cache.make_key(key), self.last_query or "")
        return rows  # type: ignore[no-any-return]

    def one(self, key: Optional[str] = None, expire: int = 0) -> "dict[str, Any]":
        """Fetch the first row, or an empty dict.

        When no statement has been built yet, the SELECT is built with
        ``LIMIT 1``; the builder's own limit is left as it was.
        """
        if self.sql is None and self.table:
            limit = self._state.limit
            self.limit(1).select()
            self._state.limit = limit
        rows = self.many(key, expire)
        return rows[0] if rows else {}

    def value(self, field: str, key: Optional[str] = None, expire: int = 0) -> Any:
        """Fetch one field of the first row, or None."""
        return self.one(key, expire).get(field)

    def min(self, field: str, key: Optional[str] = None, expire: int = 0) -> Any:
        return self.select(f"MIN({field}) min_value").value("min_value", key, expire)

    def max(self, field: str, key: Optional[str] = None, expire: int = 0) -> Any:
        return self.select(f"MAX({field}) max_value").value("max_value", key, expire)

    def sum(self, field: str, key: Optional[str] = None, expire: int = 0) -> Any:
        return self.select(f"SUM({field}) sum_value").value("sum_value", key, expire)

    def avg(self, field: str, key: Optional[str] = None, expire: int = 0) -> Any:
        return self.select(f"AVG({field}) avg_value").value("avg_value", key, expire)

    def count(self, field: str = "*", key: Optional[str] = None, expire: int = 0) -> Any:
        return self.select(f"COUNT({field}) num_rows").value("num_rows", key, expire)

    # -- row conversion --
    def using_class(self, schema_type: "type[ModelT]") -> "Self":
        """Select the table of a class and convert rows into it.

        The table name is read from a ``__table__`` class attribute and falls
        back to the lowercased class name.
        """
        self._schema_type = schema_type
        return self.from_(getattr(schema_type, "__table__", None) or schema_type.__name__.lower())

    def many_as(self, key: Optional[str] = None, expire: int = 0) -> "list[ModelT]":
        """Fetch all rows as instances of the selected class.

        Raises:
            ClassNotDefinedError: If :meth:`using_class` was not called.
        """
        schema_type = self._require_schema_type()
        return [msgspec.convert(row, type=schema_type, strict=False) for row in self.many(key, expire)]

    def one_as(self, key: Optional[str] = None, expire: int = 0) -> "Optional[ModelT]":
        """Fetch the first row as an instance of the selected class, or None.

        Raises:
            ClassNotDefinedError: If :meth:`using_class` was not called.
        """
        schema_type = self._require_schema_type()
        row = self.one(key, expire)
        return msgspec.convert(row, type=schema_type, strict=False) if row else None

    # -- cache operations --
    def store(self, key: str, value: Any, expire: int = 0) -> None:
        """Store a value in the cache under ``key_prefix + key``."""
        self._require_cache().store(key, value, expire)

    def fetch(self, key: str) -> Any:
        """Read a value from the cache, or None; sets :attr:`is_cached`."""
        value, found = self._require_cache().fetch(key)
        self._is_cached = found
        return value if found else None

    def clear(self, key: str) -> bool:
        """Remove a key from the cache."""
        return self._require_cache().clear(key)

    def flush(self) -> None:
        """Remove every key from the cache."""
        self._require_cache().flush()

    # -- statistics --
    def get_stats(self) -> "StatsSummary":
        return self._stats.summary()

    # -- helpers --
    def _load_rows(self) -> "list[dict[str, Any]]":
        if self.sql is None:
            self.select()
        driver = self._require_driver()
        return driver.fetch_rows(driver.execute(self.sql))

    def _require_driver(self) -> "SyncDriverAdapterBase[Any]":
        if self._driver is None:
            msg = "Database is not defined."
            raise ImproperConfigurationError(msg)
        return self._driver

    def _require_cache(self) -> ReadThroughCache:
        if self._cache is None:
            msg = "Cache is not defined."
            raise ImproperConfigurationError(msg)
        return self._cache

    def _require_schema_type(self) -> "type[ModelT]":
        if self._schema_type is None:
            raise ClassNotDefinedError
        return self._schema_type
