"""Synchronous driver adapter base."""

import contextlib
import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from time import perf_counter
from typing import TYPE_CHECKING, Any, ClassVar, Generic, Optional

from sqlsparrow.driver._common import EMPTY_RESULT, NO_INSERT_ID, ExecutionResult, FetchedRows, is_insert_statement
from sqlsparrow.exceptions import ConnectionError, EscapeError, ImproperConfigurationError, QueryExecutionError
from sqlsparrow.typing import ConnectionT
from sqlsparrow.utils.logging import get_logger, log_with_context

if TYPE_CHECKING:
    from collections.abc import Generator

    from sqlsparrow.config import ConnectionConfig, EngineKind
    from sqlsparrow.observability import StatsCollector

__all__ = ("SyncDriverAdapterBase",)

logger = get_logger("driver")


class SyncDriverAdapterBase(ABC, Generic[ConnectionT]):
    """Uniform execution contract over one database driver.

    Subclasses supply the driver-specific capabilities: connecting, running a
    statement, reading row/affected counts and the last insert id, extracting
    error messages and escaping strings. :meth:`execute` stitches them
    together, resets the per-statement metadata before every call, wraps driver
    errors and records statistics.

    The connection is opened lazily on first use and reused afterwards. A
    connection passed in by the caller is used as-is and never closed here.
    """

    dialect: "ClassVar[str]"
    engine: "ClassVar[EngineKind]"
    database_error: "ClassVar[type[BaseException]]" = Exception

    def __init__(
        self,
        config: "Optional[ConnectionConfig]" = None,
        connection: "Optional[ConnectionT]" = None,
        *,
        verbose_errors: bool = False,
        stats: "Optional[StatsCollector]" = None,
    ) -> None:
        if config is None and connection is None:
            msg = f"{type(self).__name__} requires a connection config or an open connection."
            raise ImproperConfigurationError(msg)
        self._config = config
        self._connection = connection
        self._owns_connection = False
        self.verbose_errors = verbose_errors
        self.stats = stats
        self._last_query: Optional[str] = None
        self._num_rows = 0
        self._affected_rows = 0
        self._insert_id = NO_INSERT_ID

    @property
    def config(self) -> "Optional[ConnectionConfig]":
        return self._config

    @property
    def connection(self) -> ConnectionT:
        """The driver connection, opened on first access."""
        return self.connect()

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    @property
    def last_query(self) -> Optional[str]:
        return self._last_query

    @property
    def num_rows(self) -> int:
        return self._num_rows

    @property
    def affected_rows(self) -> int:
        return self._affected_rows

    @property
    def insert_id(self) -> int:
        return self._insert_id

    def connect(self) -> ConnectionT:
        """Open the connection if it is not open yet.

        Raises:
            ConnectionError: If the driver fails to connect.
        """
        if self._connection is None:
            config = self._config
            if config is None:  # pragma: no cover
                msg = "No connection config to connect with."
                raise ImproperConfigurationError(msg)
            try:
                self._connection = self._connect(config)
            except self.database_error as e:
                log_with_context(
                    logger, logging.DEBUG, "Connection failed", dialect=self.dialect, config=repr(config), error=str(e)
                )
                msg = f"Connection error: {self._error_message(e)}"
                raise ConnectionError(msg) from e
            self._owns_connection = True
            log_with_context(logger, logging.DEBUG, "Connected", dialect=self.dialect, database=config.database)
        return self._connection

    def close(self) -> None:
        """Close the connection if this adapter opened it."""
        if self._connection is not None and self._owns_connection:
            with contextlib.suppress(Exception):
                self._connection.close()  # type: ignore[attr-defined]
            self._connection = None
            self._owns_connection = False

    def execute(self, sql: Optional[str]) -> ExecutionResult:
        """Execute one statement.

        Args:
            sql: The statement text.

        Raises:
            QueryExecutionError: If the driver rejects the statement.
            ConnectionError: If the connection cannot be opened.

        Returns:
            The raw fetched rows (if any), the row count, the affected row count
            and the last insert id (``-1`` when there is none).
        """
        self._reset(sql)
        if not sql:
            return EMPTY_RESULT

        connection = self.connect()
        started = perf_counter()
        with self.handle_database_exceptions(sql), self.with_cursor(connection) as cursor:
            self._execute_statement(cursor, sql)
            fetched = self._fetch(cursor)
            row_count = self._row_count(cursor, fetched)
            affected_rows = self._affected_row_count(cursor, fetched)
            insert_id = self._last_insert_id(cursor) if is_insert_statement(sql) else NO_INSERT_ID
        elapsed = perf_counter() - started
        log_with_context(
            logger,
            logging.DEBUG,
            "Executed statement",
            dialect=self.dialect,
            sql=sql,
            elapsed=elapsed,
            rows=row_count,
            affected=affected_rows,
            insert_id=insert_id,
        )

        self._num_rows = row_count
        self._affected_rows = affected_rows
        self._insert_id = insert_id
        if self.stats is not None:
            self.stats.record(sql, elapsed, row_count, affected_rows)
        return ExecutionResult(fetched, row_count, affected_rows, insert_id)

    def fetch_rows(self, result: ExecutionResult) -> "list[dict[str, Any]]":
        """Convert the raw rows of a result into dictionaries."""
        if result.raw_result is None:
            return []
        column_names = result.raw_result.column_names
        return [dict(zip(column_names, row)) for row in result.raw_result.rows]

    def escape(self, value: str) -> str:
        """Escape a string with the connection's native escaping.

        Raises:
            EscapeError: If the driver fails to escape the value.
        """
        try:
            return self._escape(self.connect(), value)
        except ConnectionError as e:
            msg = f"Unable to escape value: {e}"
            raise EscapeError(msg) from e
        except self.database_error as e:
            msg = f"Unable to escape value: {self._error_message(e)}"
            raise EscapeError(msg) from e

    @contextmanager
    def handle_database_exceptions(self, sql: str) -> "Generator[None, None, None]":
        """Wrap driver errors raised while running ``sql``."""
        try:
            yield
        except self.database_error as e:
            message = self._error_message(e)
            log_with_context(logger, logging.DEBUG, "Statement failed", dialect=self.dialect, sql=sql, error=message)
            raise QueryExecutionError(message, sql if self.verbose_errors else None) from e

    @contextmanager
    def with_cursor(self, connection: ConnectionT) -> "Generator[Any, None, None]":
        """Provide a cursor that is closed afterwards."""
        cursor = connection.cursor()  # type: ignore[attr-defined]
        try:
            yield cursor
        finally:
            with contextlib.suppress(Exception):
                cursor.close()

    def _reset(self, sql: Optional[str]) -> None:
        self._last_query = sql
        self._num_rows = 0
        self._affected_rows = 0
        self._insert_id = NO_INSERT_ID

    @abstractmethod
    def _connect(self, config: "ConnectionConfig") -> ConnectionT:
        """Open a new driver connection in autocommit mode."""

    @abstractmethod
    def _escape(self, connection: ConnectionT, value: str) -> str:
        """Escape ``value`` for a single-quoted literal, without the quotes."""

    def _execute_statement(self, cursor: Any, sql: str) -> None:
        cursor.execute(sql)

    def _fetch(self, cursor: Any) -> Optional[FetchedRows]:
        if cursor.description is None:
            return None
        column_names = [column[0] for column in cursor.description]
        return FetchedRows(column_names, list(cursor.fetchall()))

    def _row_count(self, cursor: Any, fetched: Optional[FetchedRows]) -> int:
        return 0 if fetched is None else len(fetched.rows)

    def _affected_row_count(self, cursor: Any, fetched: Optional[FetchedRows]) -> int:
        rowcount = cursor.rowcount
        return rowcount if rowcount is not None and rowcount > 0 else 0

    def _last_insert_id(self, cursor: Any) -> int:
        lastrowid = cursor.lastrowid
        return int(lastrowid) if lastrowid else NO_INSERT_ID

    def _error_message(self, error: BaseException) -> str:
        return str(error)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(config={self._config!r}, connected={self.is_connected})"
