"""Statement statistics for sqlsparrow."""

from sqlsparrow.observability._stats import (
    StatEntry,
    StatsCollector,
    StatsSummary,
    get_stats_collector,
    reset_stats_collector,
)

__all__ = ("StatEntry", "StatsCollector", "StatsSummary", "get_stats_collector", "reset_stats_collector")
