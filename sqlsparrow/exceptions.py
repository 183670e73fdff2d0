from typing import Any, Optional

__all__ = (
    "ClassNotDefinedError",
    "ConnectionError",
    "EscapeError",
    "ImproperConfigurationError",
    "InvalidCacheTypeError",
    "InvalidConditionError",
    "InvalidDriverTypeError",
    "InvalidJoinTypeError",
    "MissingDependencyError",
    "QueryExecutionError",
    "SQLBuilderError",
    "SparrowError",
    "TableNotDefinedError",
)


class SparrowError(Exception):
    """Base exception class from which all sqlsparrow exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``SparrowError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class MissingDependencyError(SparrowError, ImportError):
    """Missing optional dependency.

    This exception is raised only when a module depends on a dependency that has not been installed.
    """

    def __init__(self, package: str, install_package: Optional[str] = None) -> None:
        super().__init__(
            f"Package {package!r} is not installed but required. You can install it by running "
            f"'pip install sqlsparrow[{install_package or package}]' to install sqlsparrow with the required extra "
            f"or 'pip install {install_package or package}' to install the package separately",
        )


class ImproperConfigurationError(SparrowError):
    """Improper Configuration error.

    Raised when a connection or cache configuration cannot be understood.
    """


# -- Builder Errors --
class SQLBuilderError(SparrowError):
    """Issues building or generating SQL statements."""

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "Issues building SQL statement."
        super().__init__(message)


class InvalidJoinTypeError(SQLBuilderError):
    """Raised when a join kind is not one of the supported join kinds."""


class InvalidConditionError(SQLBuilderError):
    """Raised when a condition is neither a field string nor a mapping of fields."""


class TableNotDefinedError(SQLBuilderError):
    """Raised when a statement is built before a table has been selected."""

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or "Table is not defined.")


class ClassNotDefinedError(SQLBuilderError):
    """Raised when a row conversion is requested before a class has been selected."""

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or "Class is not defined.")


# -- Execution Errors --
class ConnectionError(SparrowError):  # noqa: A001
    """Raised when the driver cannot establish a connection."""


class QueryExecutionError(SparrowError):
    """Raised when the driver rejects a statement.

    The SQL text is only attached when verbose errors are enabled on the driver.
    """

    sql: Optional[str]

    def __init__(self, message: str, sql: Optional[str] = None) -> None:
        detail_message = message
        if sql:
            detail_message = f"{message}\nSQL: {sql}"
        super().__init__(detail=detail_message)
        self.message = message
        self.sql = sql


class EscapeError(SparrowError):
    """Raised when a live connection fails to escape a value."""


# -- Backend Selection Errors --
class InvalidCacheTypeError(SparrowError):
    """Raised when a cache backend of an unsupported kind is supplied."""


class InvalidDriverTypeError(SparrowError):
    """Raised when a database driver of an unsupported kind is supplied."""
