"""Unit tests for logging helpers."""

import io
import logging
from collections.abc import Iterator

import pytest

from sqlsparrow import Sparrow
from sqlsparrow.utils.logging import (
    ContextFormatter,
    CorrelationIDFilter,
    StructuredFormatter,
    configure_logging,
    correlation_context,
    get_correlation_id,
    get_logger,
    log_with_context,
    set_correlation_id,
)
from sqlsparrow.utils.serializers import from_json


@pytest.fixture
def correlation_id() -> Iterator[str]:
    set_correlation_id("req-123")
    yield "req-123"
    set_correlation_id(None)


@pytest.fixture
def restore_root_logger() -> Iterator[logging.Logger]:
    root = logging.getLogger("sqlsparrow")
    handlers, level, propagate = list(root.handlers), root.level, root.propagate
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    root.propagate = propagate


def test_get_logger_namespacing() -> None:
    assert get_logger().name == "sqlsparrow"
    assert get_logger("driver").name == "sqlsparrow.driver"
    assert get_logger("sqlsparrow.cache").name == "sqlsparrow.cache"


def test_get_logger_adds_filter_once() -> None:
    logger = get_logger("test_utils.filters")
    get_logger("test_utils.filters")

    assert sum(isinstance(f, CorrelationIDFilter) for f in logger.filters) == 1


def test_correlation_id_roundtrip(correlation_id: str) -> None:
    assert get_correlation_id() == correlation_id


def test_correlation_context_restores_previous_id() -> None:
    with correlation_context("outer"):
        with correlation_context("inner") as current:
            assert current == "inner"
            assert get_correlation_id() == "inner"
        assert get_correlation_id() == "outer"
    assert get_correlation_id() is None


def test_correlation_filter_sets_attribute(correlation_id: str) -> None:
    record = logging.LogRecord("sqlsparrow.test", logging.INFO, __file__, 1, "msg", None, None)

    assert CorrelationIDFilter().filter(record) is True
    assert record.correlation_id == correlation_id  # type: ignore[attr-defined]


def test_log_with_context_attaches_fields(caplog: pytest.LogCaptureFixture) -> None:
    logger = get_logger("test_utils.context")

    with caplog.at_level(logging.DEBUG, logger="sqlsparrow"):
        log_with_context(logger, logging.DEBUG, "Executed statement", sql="SELECT 1", rows=1)

    (record,) = caplog.records
    assert record.getMessage() == "Executed statement"
    assert record.extra_fields == {"sql": "SELECT 1", "rows": 1}  # type: ignore[attr-defined]
    assert record.funcName == "test_log_with_context_attaches_fields"


def test_log_with_context_skips_disabled_levels(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="sqlsparrow"):
        log_with_context(get_logger("test_utils.context"), logging.DEBUG, "quiet", sql="SELECT 1")

    assert caplog.records == []


def test_structured_formatter(correlation_id: str) -> None:
    record = logging.LogRecord("sqlsparrow.test", logging.WARNING, __file__, 10, "hello %s", ("world",), None)
    record.extra_fields = {"rows": 3}

    payload = from_json(StructuredFormatter().format(record))

    assert payload["message"] == "hello world"
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "sqlsparrow.test"
    assert payload["correlation_id"] == correlation_id
    assert payload["rows"] == 3


def test_structured_formatter_without_correlation_id() -> None:
    record = logging.LogRecord("sqlsparrow.test", logging.INFO, __file__, 10, "plain", None, None)

    assert "correlation_id" not in from_json(StructuredFormatter().format(record))


def test_context_formatter_appends_fields() -> None:
    record = logging.LogRecord("sqlsparrow.cache", logging.DEBUG, __file__, 10, "Cache hit", None, None)
    record.extra_fields = {"cache_key": "app:users", "hit": True}

    line = ContextFormatter("%(message)s").format(record)

    assert line == "Cache hit cache_key='app:users' hit=True"


def test_context_formatter_without_fields() -> None:
    record = logging.LogRecord("sqlsparrow.cache", logging.DEBUG, __file__, 10, "plain", None, None)

    assert ContextFormatter("%(message)s").format(record) == "plain"


def test_configure_logging(restore_root_logger: logging.Logger) -> None:
    extra = logging.NullHandler()

    logger = configure_logging(level="DEBUG", structured=False, handlers=[extra])

    assert logger is restore_root_logger
    assert restore_root_logger.level == logging.DEBUG
    assert restore_root_logger.propagate is False
    assert extra in restore_root_logger.handlers
    assert isinstance(restore_root_logger.handlers[0], logging.StreamHandler)
    assert isinstance(restore_root_logger.handlers[0].formatter, ContextFormatter)


def test_configured_stream_receives_statement_events(restore_root_logger: logging.Logger) -> None:
    stream = io.StringIO()
    configure_logging(logging.DEBUG, stream=stream)

    with correlation_context("req-9"), Sparrow("sqlite://:memory:") as db:
        db.execute("SELECT 1 AS one")

    events = [from_json(line) for line in stream.getvalue().splitlines()]
    (executed,) = [event for event in events if event["message"] == "Executed statement"]
    assert executed["sql"] == "SELECT 1 AS one"
    assert executed["dialect"] == "sqlite"
    assert executed["rows"] == 1
    assert executed["correlation_id"] == "req-9"
    assert executed["elapsed"] >= 0
