from typing import TYPE_CHECKING, Any, ClassVar, TypedDict

import pymysql
from pymysql.connections import Connection
from typing_extensions import NotRequired

from sqlsparrow.config import EngineKind
from sqlsparrow.driver import SyncDriverAdapterBase

if TYPE_CHECKING:
    from sqlsparrow.config import ConnectionConfig

__all__ = ("PyMySQLConnection", "PyMySQLConnectionParams", "PyMySQLDriver")

PyMySQLConnection = Connection

DEFAULT_PORT = 3306


class PyMySQLConnectionParams(TypedDict, total=False):
    """MySQL connection options accepted in ``ConnectionConfig.options``."""

    charset: NotRequired[str]
    connect_timeout: NotRequired[int]
    read_timeout: NotRequired[int]
    write_timeout: NotRequired[int]
    unix_socket: NotRequired[str]
    ssl: NotRequired["dict[str, Any]"]


class PyMySQLDriver(SyncDriverAdapterBase[PyMySQLConnection]):
    """Adapter for MySQL and MariaDB via the pure Python PyMySQL client."""

    dialect = "mysql"
    engine: "ClassVar[EngineKind]" = EngineKind.MYSQL
    database_error: "ClassVar[type[BaseException]]" = pymysql.err.MySQLError

    def _connect(self, config: "ConnectionConfig") -> PyMySQLConnection:
        params: dict[str, Any] = {"charset": "utf8mb4"}
        params.update(config.options)
        return pymysql.connect(
            host=config.host or "localhost",
            user=config.username,
            password=config.password or "",
            database=config.database,
            port=config.port or DEFAULT_PORT,
            autocommit=True,
            **params,
        )

    def _escape(self, connection: PyMySQLConnection, value: str) -> str:
        return str(connection.escape_string(value))

    def _error_message(self, error: BaseException) -> str:
        if len(error.args) > 1:
            return str(error.args[1])
        return str(error)
