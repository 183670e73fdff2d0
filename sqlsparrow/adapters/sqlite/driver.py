import sqlite3
from typing import TYPE_CHECKING, Any, ClassVar, TypedDict

from typing_extensions import NotRequired

from sqlsparrow.config import EngineKind
from sqlsparrow.driver import SyncDriverAdapterBase

if TYPE_CHECKING:
    from sqlsparrow.config import ConnectionConfig

__all__ = ("SqliteConnection", "SqliteConnectionParams", "SqliteDriver")

SqliteConnection = sqlite3.Connection


class SqliteConnectionParams(TypedDict, total=False):
    """SQLite connection options accepted in ``ConnectionConfig.options``."""

    timeout: NotRequired[float]
    detect_types: NotRequired[int]
    check_same_thread: NotRequired[bool]
    cached_statements: NotRequired[int]
    uri: NotRequired[bool]


class SqliteDriver(SyncDriverAdapterBase[SqliteConnection]):
    """Adapter for the embedded SQLite engine via :mod:`sqlite3`."""

    dialect = "sqlite"
    engine: "ClassVar[EngineKind]" = EngineKind.SQLITE
    database_error: "ClassVar[type[BaseException]]" = sqlite3.Error

    def _connect(self, config: "ConnectionConfig") -> SqliteConnection:
        database = config.database or ":memory:"
        options: dict[str, Any] = dict(config.options)
        if database.startswith("file:"):
            options.setdefault("uri", True)
        return sqlite3.connect(database, isolation_level=None, **options)

    def _escape(self, connection: SqliteConnection, value: str) -> str:
        return value.replace("'", "''")
