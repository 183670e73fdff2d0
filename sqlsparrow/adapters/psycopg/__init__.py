"""PostgreSQL adapter for sqlsparrow, built on psycopg."""

from sqlsparrow.adapters.psycopg.driver import PsycopgConnection, PsycopgConnectionParams, PsycopgDriver

__all__ = ("PsycopgConnection", "PsycopgConnectionParams", "PsycopgDriver")
