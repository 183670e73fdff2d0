"""Driver protocols and base classes for database adapters."""

from sqlsparrow.driver._common import NO_INSERT_ID, ExecutionResult, FetchedRows, is_insert_statement
from sqlsparrow.driver._sync import SyncDriverAdapterBase

__all__ = ("NO_INSERT_ID", "ExecutionResult", "FetchedRows", "SyncDriverAdapterBase", "is_insert_statement")
