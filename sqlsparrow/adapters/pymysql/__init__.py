"""MySQL adapter for sqlsparrow, built on PyMySQL."""

from sqlsparrow.adapters.pymysql.driver import PyMySQLConnection, PyMySQLConnectionParams, PyMySQLDriver

__all__ = ("PyMySQLConnection", "PyMySQLConnectionParams", "PyMySQLDriver")
