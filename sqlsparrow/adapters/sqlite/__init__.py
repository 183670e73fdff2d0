"""SQLite adapter for sqlsparrow."""

from sqlsparrow.adapters.sqlite.driver import SqliteConnection, SqliteConnectionParams, SqliteDriver

__all__ = ("SqliteConnection", "SqliteConnectionParams", "SqliteDriver")
