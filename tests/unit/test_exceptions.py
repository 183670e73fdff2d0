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


def test_exception_hierarchy():
    """Test exception classes inherit correctly."""
    assert issubclass(InvalidJoinTypeError, SQLBuilderError)
    assert issubclass(InvalidConditionError, SQLBuilderError)
    assert issubclass(TableNotDefinedError, SQLBuilderError)
    assert issubclass(ClassNotDefinedError, SQLBuilderError)
    assert issubclass(SQLBuilderError, SparrowError)

    assert issubclass(ConnectionError, SparrowError)
    assert issubclass(QueryExecutionError, SparrowError)
    assert issubclass(EscapeError, SparrowError)
    assert issubclass(InvalidCacheTypeError, SparrowError)
    assert issubclass(InvalidDriverTypeError, SparrowError)
    assert issubclass(ImproperConfigurationError, SparrowError)
    assert issubclass(MissingDependencyError, ImportError)


def test_default_messages():
    """Test builder errors carry a default message."""
    assert str(TableNotDefinedError()) == "Table is not defined."
    assert str(ClassNotDefinedError()) == "Class is not defined."
    assert str(SQLBuilderError()) == "Issues building SQL statement."
    assert str(InvalidJoinTypeError("Invalid join type: 'CROSS'.")) == "Invalid join type: 'CROSS'."


def test_exception_detail():
    """Test the detail keyword and repr."""
    exc = SparrowError(detail="something broke")

    assert exc.detail == "something broke"
    assert str(exc) == "something broke"
    assert repr(exc) == "SparrowError - something broke"
    assert repr(SparrowError()) == "SparrowError"


def test_query_execution_error():
    """Test the SQL text is only shown when given."""
    quiet = QueryExecutionError("no such table: t")
    verbose = QueryExecutionError("no such table: t", "SELECT * FROM t")

    assert quiet.message == "no such table: t"
    assert quiet.sql is None
    assert str(quiet) == "no such table: t"
    assert verbose.sql == "SELECT * FROM t"
    assert str(verbose) == "no such table: t\nSQL: SELECT * FROM t"


def test_missing_dependency_error():
    """Test the install hint names the extra."""
    exc = MissingDependencyError("psycopg")

    assert "pip install sqlsparrow[psycopg]" in str(exc)
    assert "pip install psycopg" in str(exc)


def test_exception_chaining():
    """Test exceptions support chaining with 'from'."""
    try:
        try:
            raise ValueError("Original error")
        except ValueError as e:
            raise EscapeError("Unable to escape value") from e
    except EscapeError as exc:
        assert exc.__cause__ is not None
        assert isinstance(exc.__cause__, ValueError)
