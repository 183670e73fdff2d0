"""Unit tests for statement statistics."""

import pytest

from sqlsparrow.observability import StatEntry, StatsCollector, get_stats_collector, reset_stats_collector


@pytest.fixture
def collector() -> StatsCollector:
    return StatsCollector()


def test_empty_summary(collector: StatsCollector) -> None:
    summary = collector.summary()

    assert summary.num_queries == 0
    assert summary.total_time == 0.0
    assert summary.avg_query_time == 0.0
    assert summary.queries == ()
    assert summary.cached == {}


def test_summary_aggregates(collector: StatsCollector) -> None:
    collector.record("SELECT * FROM user", 0.5, rows=3)
    collector.record("UPDATE user SET a=1", 0.25, affected=2)
    collector.record("SELECT 1", 0.25, rows=1)

    summary = collector.summary()

    assert summary.num_queries == 3
    assert summary.total_time == 1.0
    assert summary.avg_query_time == pytest.approx(1 / 3)
    assert summary.fastest == 0.25
    assert summary.slowest == 0.5
    assert summary.num_rows == 4
    assert summary.num_changes == 2
    assert [entry.query for entry in summary.queries] == ["SELECT * FROM user", "UPDATE user SET a=1", "SELECT 1"]


def test_entries_keep_order_and_are_immutable(collector: StatsCollector) -> None:
    entry = collector.record("SELECT 1", 0.1, rows=1)

    assert collector.entries == (entry,)
    assert len(collector) == 1
    with pytest.raises(AttributeError):
        entry.rows = 2  # type: ignore[misc]


def test_entry_as_dict() -> None:
    entry = StatEntry(query="SELECT 1", elapsed=0.1, rows=1, affected=0)

    assert entry.as_dict() == {"query": "SELECT 1", "time": 0.1, "rows": 1, "changes": 0}


def test_record_cached(collector: StatsCollector) -> None:
    collector.record_cached("app:users", "SELECT * FROM user")

    assert collector.cached == {"app:users": "SELECT * FROM user"}
    assert collector.summary().cached == {"app:users": "SELECT * FROM user"}
    assert len(collector) == 0


def test_reset(collector: StatsCollector) -> None:
    collector.record("SELECT 1", 0.1)
    collector.record_cached("k", "SELECT 1")

    collector.reset()

    assert len(collector) == 0
    assert collector.cached == {}


def test_process_collector_is_shared() -> None:
    collector = get_stats_collector()
    collector.record("SELECT 1", 0.1)

    assert get_stats_collector() is collector
    reset_stats_collector()
    assert len(get_stats_collector()) == 0
