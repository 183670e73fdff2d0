from typing import TYPE_CHECKING, Any, ClassVar, Optional, TypedDict

import psycopg
from psycopg import pq
from typing_extensions import NotRequired

from sqlsparrow.config import EngineKind
from sqlsparrow.driver import NO_INSERT_ID, SyncDriverAdapterBase
from sqlsparrow.utils.logging import get_logger

if TYPE_CHECKING:
    from sqlsparrow.config import ConnectionConfig
    from sqlsparrow.observability import StatsCollector

__all__ = ("PsycopgConnection", "PsycopgConnectionParams", "PsycopgDriver")

logger = get_logger("adapters.psycopg")

PsycopgConnection = psycopg.Connection[Any]


class PsycopgConnectionParams(TypedDict, total=False):
    """PostgreSQL connection options accepted in ``ConnectionConfig.options``."""

    connect_timeout: NotRequired[int]
    sslmode: NotRequired[str]
    application_name: NotRequired[str]
    options: NotRequired[str]
    prepare_threshold: NotRequired["int | None"]


class PsycopgDriver(SyncDriverAdapterBase[PsycopgConnection]):
    """Adapter for PostgreSQL via psycopg 3.

    With ``prepare=True`` every statement is prepared server-side before it
    is bound and executed; otherwise psycopg decides based on its prepare
    threshold.
    """

    dialect = "postgres"
    engine: "ClassVar[EngineKind]" = EngineKind.POSTGRES
    database_error: "ClassVar[type[BaseException]]" = psycopg.Error

    def __init__(
        self,
        config: "Optional[ConnectionConfig]" = None,
        connection: "Optional[PsycopgConnection]" = None,
        *,
        verbose_errors: bool = False,
        stats: "Optional[StatsCollector]" = None,
        prepare: Optional[bool] = None,
    ) -> None:
        super().__init__(config, connection, verbose_errors=verbose_errors, stats=stats)
        self.prepare = prepare

    def _connect(self, config: "ConnectionConfig") -> PsycopgConnection:
        params: dict[str, Any] = {
            "host": config.host,
            "dbname": config.database,
            "user": config.username,
            "password": config.password,
            "port": config.port,
        }
        params.update(config.options)
        return psycopg.connect(autocommit=True, **{k: v for k, v in params.items() if v is not None})

    def _execute_statement(self, cursor: "psycopg.Cursor[Any]", sql: str) -> None:
        cursor.execute(sql, prepare=self.prepare)

    def _escape(self, connection: PsycopgConnection, value: str) -> str:
        escaped = pq.Escaping(connection.pgconn).escape_string(value.encode(connection.info.encoding))
        return escaped.decode(connection.info.encoding)

    def _last_insert_id(self, cursor: "psycopg.Cursor[Any]") -> int:
        pgresult = cursor.pgresult
        oid = pgresult.oid_value if pgresult is not None else 0
        return int(oid) if oid else NO_INSERT_ID

    def _error_message(self, error: BaseException) -> str:
        if isinstance(error, psycopg.Error) and error.diag.message_primary:
            return str(error.diag.message_primary)
        return str(error).strip()
