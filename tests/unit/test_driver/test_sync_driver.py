"""Unit tests for the synchronous driver adapter base.

A minimal adapter over a mocked DB-API connection exercises the shared
execution contract: metadata reset, result normalization, error wrapping,
statistics and connection ownership.
"""

import logging
from typing import Any, Callable, Optional
from unittest.mock import MagicMock, patch

import pytest

from sqlsparrow.config import ConnectionConfig, EngineKind
from sqlsparrow.driver import NO_INSERT_ID, ExecutionResult, SyncDriverAdapterBase, is_insert_statement
from sqlsparrow.exceptions import ConnectionError, EscapeError, ImproperConfigurationError, QueryExecutionError
from sqlsparrow.observability import StatsCollector


class FakeDatabaseError(Exception):
    pass


def make_connection() -> MagicMock:
    connection = MagicMock()
    cursor = MagicMock()
    cursor.description = None
    cursor.fetchall.return_value = []
    cursor.rowcount = -1
    cursor.lastrowid = None
    connection.cursor.return_value = cursor
    return connection


class FakeDriver(SyncDriverAdapterBase[MagicMock]):
    dialect = "fake"
    engine = EngineKind.SQLITE
    database_error = FakeDatabaseError

    def __init__(self, *args: Any, connection_factory: "Optional[Callable[[], MagicMock]]" = None, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.connection_factory = connection_factory or make_connection

    def _connect(self, config: ConnectionConfig) -> MagicMock:
        return self.connection_factory()

    def _escape(self, connection: MagicMock, value: str) -> str:
        return value.replace("'", "''")


@pytest.fixture
def mock_connection() -> MagicMock:
    return make_connection()


@pytest.fixture
def driver(mock_connection: MagicMock) -> FakeDriver:
    return FakeDriver(connection=mock_connection)


def test_requires_config_or_connection() -> None:
    with pytest.raises(ImproperConfigurationError):
        FakeDriver()


def test_execute_select(driver: FakeDriver, mock_connection: MagicMock) -> None:
    cursor = mock_connection.cursor.return_value
    cursor.description = [("id", None), ("name", None)]
    cursor.fetchall.return_value = [(1, "alice"), (2, "bob")]

    result = driver.execute("SELECT id, name FROM user")

    cursor.execute.assert_called_once_with("SELECT id, name FROM user")
    assert result.returns_rows
    assert result.row_count == 2
    assert result.affected_rows == 0
    assert result.insert_id == NO_INSERT_ID
    assert driver.fetch_rows(result) == [{"id": 1, "name": "alice"}, {"id": 2, "name": "bob"}]
    assert driver.num_rows == 2
    assert driver.last_query == "SELECT id, name FROM user"


def test_execute_insert_reports_insert_id(driver: FakeDriver, mock_connection: MagicMock) -> None:
    cursor = mock_connection.cursor.return_value
    cursor.rowcount = 1
    cursor.lastrowid = 7

    result = driver.execute("INSERT INTO user (name) VALUES ('bob')")

    assert result == ExecutionResult(None, 0, 1, 7)
    assert driver.fetch_rows(result) == []
    assert driver.insert_id == 7
    assert driver.affected_rows == 1


def test_insert_id_only_for_inserts(driver: FakeDriver, mock_connection: MagicMock) -> None:
    cursor = mock_connection.cursor.return_value
    cursor.rowcount = 3
    cursor.lastrowid = 7

    result = driver.execute("UPDATE user SET name='x'")

    assert result.insert_id == NO_INSERT_ID
    assert result.affected_rows == 3


def test_metadata_is_reset_before_each_call(driver: FakeDriver, mock_connection: MagicMock) -> None:
    cursor = mock_connection.cursor.return_value
    cursor.rowcount = 1
    cursor.lastrowid = 7
    driver.execute("INSERT INTO user (name) VALUES ('bob')")

    cursor.execute.side_effect = FakeDatabaseError("no such table: nope")
    with pytest.raises(QueryExecutionError):
        driver.execute("SELECT * FROM nope")

    assert driver.last_query == "SELECT * FROM nope"
    assert driver.insert_id == NO_INSERT_ID
    assert driver.affected_rows == 0
    assert driver.num_rows == 0


def test_execution_error_hides_sql_by_default(driver: FakeDriver, mock_connection: MagicMock) -> None:
    mock_connection.cursor.return_value.execute.side_effect = FakeDatabaseError("syntax error")

    with pytest.raises(QueryExecutionError) as exc_info:
        driver.execute("SELEC 1")

    assert exc_info.value.message == "syntax error"
    assert exc_info.value.sql is None
    assert "SELEC" not in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, FakeDatabaseError)


def test_verbose_errors_attach_sql(mock_connection: MagicMock) -> None:
    driver = FakeDriver(connection=mock_connection, verbose_errors=True)
    mock_connection.cursor.return_value.execute.side_effect = FakeDatabaseError("syntax error")

    with pytest.raises(QueryExecutionError) as exc_info:
        driver.execute("SELEC 1")

    assert exc_info.value.sql == "SELEC 1"
    assert "SQL: SELEC 1" in str(exc_info.value)


def test_non_driver_errors_propagate(driver: FakeDriver, mock_connection: MagicMock) -> None:
    mock_connection.cursor.return_value.execute.side_effect = RuntimeError("bug")

    with pytest.raises(RuntimeError, match="bug"):
        driver.execute("SELECT 1")


def test_cursor_is_closed(driver: FakeDriver, mock_connection: MagicMock) -> None:
    driver.execute("SELECT 1")

    mock_connection.cursor.return_value.close.assert_called_once()


def test_empty_statement_is_not_sent(driver: FakeDriver, mock_connection: MagicMock) -> None:
    result = driver.execute(None)

    assert result.row_count == 0
    assert result.insert_id == NO_INSERT_ID
    mock_connection.cursor.assert_not_called()


def test_statistics_are_recorded(mock_connection: MagicMock) -> None:
    stats = StatsCollector()
    driver = FakeDriver(connection=mock_connection, stats=stats)
    cursor = mock_connection.cursor.return_value
    cursor.description = [("id", None)]
    cursor.fetchall.return_value = [(1,), (2,)]

    driver.execute("SELECT id FROM user")

    (entry,) = stats.entries
    assert entry.query == "SELECT id FROM user"
    assert entry.rows == 2
    assert entry.affected == 0
    assert entry.elapsed >= 0


def test_elapsed_time_excludes_connecting() -> None:
    events: list[str] = []
    ticks = iter([10.0, 10.25])

    def connect() -> MagicMock:
        events.append("connect")
        return make_connection()

    def clock() -> float:
        events.append("clock")
        return next(ticks)

    stats = StatsCollector()
    driver = FakeDriver(
        config=ConnectionConfig(engine=EngineKind.SQLITE), connection_factory=connect, stats=stats
    )

    with patch("sqlsparrow.driver._sync.perf_counter", side_effect=clock):
        driver.execute("SELECT 1")

    assert events == ["connect", "clock", "clock"]
    assert stats.entries[0].elapsed == pytest.approx(0.25)


def test_affected_row_count_hook_can_be_overridden(mock_connection: MagicMock) -> None:
    class CountingDriver(FakeDriver):
        def _affected_row_count(self, cursor: Any, fetched: Any) -> int:
            return 42

    driver = CountingDriver(connection=mock_connection)

    result = driver.execute("DELETE FROM user")
    second = driver.execute("DELETE FROM user")

    assert result.affected_rows == 42
    assert second.affected_rows == 42
    assert driver.affected_rows == 42


def test_executed_statement_is_logged_with_details(
    driver: FakeDriver, mock_connection: MagicMock, caplog: pytest.LogCaptureFixture
) -> None:
    mock_connection.cursor.return_value.rowcount = 2

    with caplog.at_level(logging.DEBUG, logger="sqlsparrow.driver"):
        driver.execute("UPDATE user SET age=1")

    (record,) = [r for r in caplog.records if r.getMessage() == "Executed statement"]
    fields = record.extra_fields  # type: ignore[attr-defined]
    assert fields["sql"] == "UPDATE user SET age=1"
    assert fields["dialect"] == "fake"
    assert fields["affected"] == 2
    assert fields["rows"] == 0
    assert fields["insert_id"] == NO_INSERT_ID


def test_failed_statement_is_logged_with_error(
    driver: FakeDriver, mock_connection: MagicMock, caplog: pytest.LogCaptureFixture
) -> None:
    mock_connection.cursor.return_value.execute.side_effect = FakeDatabaseError("syntax error")

    with caplog.at_level(logging.DEBUG, logger="sqlsparrow.driver"), pytest.raises(QueryExecutionError):
        driver.execute("SELEC 1")

    (record,) = [r for r in caplog.records if r.getMessage() == "Statement failed"]
    assert record.extra_fields == {"dialect": "fake", "sql": "SELEC 1", "error": "syntax error"}  # type: ignore[attr-defined]


def test_failed_statements_are_not_recorded(mock_connection: MagicMock) -> None:
    stats = StatsCollector()
    driver = FakeDriver(connection=mock_connection, stats=stats)
    mock_connection.cursor.return_value.execute.side_effect = FakeDatabaseError("boom")

    with pytest.raises(QueryExecutionError):
        driver.execute("SELECT 1")

    assert len(stats) == 0


def test_connection_is_opened_lazily() -> None:
    factory = MagicMock(side_effect=make_connection)
    driver = FakeDriver(config=ConnectionConfig(engine=EngineKind.SQLITE), connection_factory=factory)

    assert not driver.is_connected
    factory.assert_not_called()

    connection = driver.connection
    assert driver.is_connected
    assert driver.connect() is connection
    factory.assert_called_once()


def test_connection_failure_raises_connection_error() -> None:
    factory = MagicMock(side_effect=FakeDatabaseError("access denied"))
    driver = FakeDriver(config=ConnectionConfig(engine=EngineKind.SQLITE), connection_factory=factory)

    with pytest.raises(ConnectionError, match="access denied"):
        driver.execute("SELECT 1")


def test_close_only_owned_connections(mock_connection: MagicMock) -> None:
    injected = FakeDriver(connection=mock_connection)
    injected.close()
    mock_connection.close.assert_not_called()
    assert injected.is_connected

    owned = FakeDriver(config=ConnectionConfig(engine=EngineKind.SQLITE))
    connection = owned.connect()
    owned.close()
    connection.close.assert_called_once()
    assert not owned.is_connected


def test_escape(driver: FakeDriver) -> None:
    assert driver.escape("O'Brien") == "O''Brien"


def test_escape_failure_raises_escape_error() -> None:
    factory = MagicMock(side_effect=FakeDatabaseError("no server"))
    driver = FakeDriver(config=ConnectionConfig(engine=EngineKind.SQLITE), connection_factory=factory)

    with pytest.raises(EscapeError, match="no server"):
        driver.escape("x")


@pytest.mark.parametrize(
    "sql,expected",
    [
        ("INSERT INTO user VALUES (1)", True),
        ("  insert into user VALUES (1)", True),
        ("REPLACE INTO user VALUES (1)", True),
        ("UPDATE user SET id=1", False),
        ("SELECT 'INSERT'", False),
        ("INSERTED", False),
    ],
)
def test_is_insert_statement(sql: str, expected: bool) -> None:
    assert is_insert_statement(sql) is expected
