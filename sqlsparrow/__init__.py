"""sqlsparrow: a small fluent SQL builder with pluggable drivers and result caching."""

from sqlsparrow import adapters, base, builder, cache, config, driver, exceptions, observability, typing, utils
from sqlsparrow.__metadata__ import __version__
from sqlsparrow.base import Sparrow, create_driver
from sqlsparrow.builder import JoinType, QueryBuilder, ValueQuoter
from sqlsparrow.cache import CacheBackendProtocol, FileCache, MemoryCache, ReadThroughCache, create_cache
from sqlsparrow.config import ConnectionConfig, EngineKind
from sqlsparrow.driver import ExecutionResult, SyncDriverAdapterBase
from sqlsparrow.exceptions import (
    ClassNotDefinedError,
    ConnectionError,
    EscapeError,
    ImproperConfigurationError,
    InvalidCacheTypeError,
    InvalidConditionError,
    InvalidDriverTypeError,
    InvalidJoinTypeError,
    MissingDependencyError,
    QueryExecutionError,
    SparrowError,
    SQLBuilderError,
    TableNotDefinedError,
)
from sqlsparrow.observability import StatsCollector, StatsSummary
from sqlsparrow.typing import ConnectionT, DictRow, ModelT, RowT
from sqlsparrow.utils.logging import configure_logging, correlation_context, set_correlation_id

__all__ = (
    "CacheBackendProtocol",
    "ClassNotDefinedError",
    "ConnectionConfig",
    "ConnectionError",
    "ConnectionT",
    "DictRow",
    "EngineKind",
    "EscapeError",
    "ExecutionResult",
    "FileCache",
    "ImproperConfigurationError",
    "InvalidCacheTypeError",
    "InvalidConditionError",
    "InvalidDriverTypeError",
    "InvalidJoinTypeError",
    "JoinType",
    "MemoryCache",
    "MissingDependencyError",
    "ModelT",
    "QueryBuilder",
    "QueryExecutionError",
    "ReadThroughCache",
    "RowT",
    "SQLBuilderError",
    "Sparrow",
    "SparrowError",
    "StatsCollector",
    "StatsSummary",
    "SyncDriverAdapterBase",
    "TableNotDefinedError",
    "ValueQuoter",
    "__version__",
    "adapters",
    "base",
    "builder",
    "cache",
    "config",
    "configure_logging",
    "correlation_context",
    "create_cache",
    "create_driver",
    "driver",
    "exceptions",
    "observability",
    "set_correlation_id",
    "typing",
    "utils",
)
