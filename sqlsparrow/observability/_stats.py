"""Per-query statistics collection."""

from dataclasses import dataclass, field
from typing import Any, Optional

from sqlsparrow.utils.logging import get_logger

__all__ = ("StatEntry", "StatsCollector", "StatsSummary", "get_stats_collector", "reset_stats_collector")

logger = get_logger("observability.stats")


@dataclass(frozen=True)
class StatEntry:
    """Timing and counts for one executed statement."""

    query: str
    elapsed: float
    rows: int
    affected: int

    def as_dict(self) -> "dict[str, Any]":
        return {"query": self.query, "time": self.elapsed, "rows": self.rows, "changes": self.affected}


@dataclass(frozen=True)
class StatsSummary:
    """Aggregated view over recorded statements."""

    queries: "tuple[StatEntry, ...]" = ()
    num_queries: int = 0
    total_time: float = 0.0
    avg_query_time: float = 0.0
    fastest: float = 0.0
    slowest: float = 0.0
    num_rows: int = 0
    num_changes: int = 0
    cached: "dict[str, str]" = field(default_factory=dict)


class StatsCollector:
    """Append-only log of executed statements and cache population events.

    Entries are only aggregated on read; nothing is evicted until :meth:`reset`.
    """

    __slots__ = ("_cached", "_entries")

    def __init__(self) -> None:
        self._entries: list[StatEntry] = []
        self._cached: dict[str, str] = {}

    @property
    def entries(self) -> "tuple[StatEntry, ...]":
        return tuple(self._entries)

    @property
    def cached(self) -> "dict[str, str]":
        """Cache keys mapped to the statement whose rows they hold."""
        return dict(self._cached)

    def record(self, query: str, elapsed: float, rows: int = 0, affected: int = 0) -> StatEntry:
        """Record one executed statement."""
        entry = StatEntry(query=query, elapsed=elapsed, rows=rows, affected=affected)
        self._entries.append(entry)
        logger.debug("Recorded statement in %.6fs (rows=%d, changes=%d)", elapsed, rows, affected)
        return entry

    def record_cached(self, key: str, query: str) -> None:
        """Remember which statement populated a cache key."""
        self._cached[key] = query

    def summary(self) -> StatsSummary:
        entries = tuple(self._entries)
        if not entries:
            return StatsSummary(cached=dict(self._cached))
        times = [entry.elapsed for entry in entries]
        total_time = sum(times)
        return StatsSummary(
            queries=entries,
            num_queries=len(entries),
            total_time=total_time,
            avg_query_time=total_time / len(entries),
            fastest=min(times),
            slowest=max(times),
            num_rows=sum(entry.rows for entry in entries),
            num_changes=sum(entry.affected for entry in entries),
            cached=dict(self._cached),
        )

    def reset(self) -> None:
        self._entries.clear()
        self._cached.clear()

    def __len__(self) -> int:
        return len(self._entries)


_default_collector: Optional[StatsCollector] = None


def get_stats_collector() -> StatsCollector:
    """Get the process-wide statistics collector."""
    global _default_collector  # noqa: PLW0603
    if _default_collector is None:
        _default_collector = StatsCollector()
    return _default_collector


def reset_stats_collector() -> None:
    """Clear the process-wide statistics collector."""
    if _default_collector is not None:
        _default_collector.reset()
