"""Logging helpers for sqlsparrow.

Every logger handed out by :func:`get_logger` lives under the ``sqlsparrow``
namespace. Statement, connection and cache events are emitted through
:func:`log_with_context`, which attaches their details (SQL text, timings, row
counts, cache keys) to the record as ``extra_fields``. The formatters installed
by :func:`configure_logging` render those fields either as one JSON object per
line or as ``key=value`` pairs after the message.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import IO, TYPE_CHECKING, Any, Optional

from sqlsparrow.utils.serializers import to_json

if TYPE_CHECKING:
    from logging import LogRecord

__all__ = (
    "ContextFormatter",
    "CorrelationIDFilter",
    "StructuredFormatter",
    "configure_logging",
    "correlation_context",
    "correlation_id_var",
    "get_correlation_id",
    "get_logger",
    "log_with_context",
    "set_correlation_id",
)

ROOT_LOGGER_NAME = "sqlsparrow"

correlation_id_var: "ContextVar[Optional[str]]" = ContextVar("sqlsparrow_correlation_id", default=None)


def set_correlation_id(correlation_id: Optional[str]) -> None:
    """Tag the statements issued from the current context, or clear the tag with None."""
    correlation_id_var.set(correlation_id)


def get_correlation_id() -> Optional[str]:
    return correlation_id_var.get()


@contextmanager
def correlation_context(correlation_id: str) -> Iterator[str]:
    """Tag every record logged inside the block with ``correlation_id``."""
    token = correlation_id_var.set(correlation_id)
    try:
        yield correlation_id
    finally:
        correlation_id_var.reset(token)


def _context_fields(record: "LogRecord") -> "dict[str, Any]":
    fields: dict[str, Any] = {}
    correlation_id = getattr(record, "correlation_id", None) or get_correlation_id()
    if correlation_id is not None:
        fields["correlation_id"] = correlation_id
    fields.update(getattr(record, "extra_fields", None) or {})
    return fields


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, with the event fields at the top level."""

    def format(self, record: "LogRecord") -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(_context_fields(record))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return to_json(entry)


class ContextFormatter(logging.Formatter):
    """Plain text lines with the event fields appended as ``key=value`` pairs."""

    def __init__(self, fmt: str = "%(asctime)s %(levelname)s %(name)s: %(message)s", **kwargs: Any) -> None:
        super().__init__(fmt, **kwargs)

    def format(self, record: "LogRecord") -> str:
        line = super().format(record)
        fields = _context_fields(record)
        if not fields:
            return line
        return line + " " + " ".join(f"{key}={value!r}" for key, value in fields.items())


class CorrelationIDFilter(logging.Filter):
    """Copy the current correlation ID onto each record."""

    def filter(self, record: "LogRecord") -> bool:
        record.correlation_id = get_correlation_id()  # type: ignore[attr-defined]
        return True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return ``sqlsparrow.<name>`` (or the package logger) with the correlation filter attached."""
    if name is None:
        name = ROOT_LOGGER_NAME
    elif not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    logger = logging.getLogger(name)
    if not any(isinstance(f, CorrelationIDFilter) for f in logger.filters):
        logger.addFilter(CorrelationIDFilter())
    return logger


def log_with_context(logger: logging.Logger, level: int, message: str, **extra_fields: Any) -> None:
    """Log ``message`` with ``extra_fields`` attached to the record.

    Args:
        logger: Logger to emit on.
        level: Logging level.
        message: Human readable event description.
        **extra_fields: Event details, exposed to formatters as ``record.extra_fields``.
    """
    if not logger.isEnabledFor(level):
        return
    logger.log(level, message, extra={"extra_fields": extra_fields}, stacklevel=2)


def configure_logging(
    level: "int | str" = logging.INFO,
    *,
    structured: bool = True,
    stream: "Optional[IO[str]]" = None,
    handlers: "Optional[list[logging.Handler]]" = None,
) -> logging.Logger:
    """Send sqlsparrow's records to ``stream`` (stdout by default).

    Replaces any handlers previously installed on the ``sqlsparrow`` logger and
    stops propagation to the root logger.

    Args:
        level: Logging level name or number. Statement events are logged at DEBUG.
        structured: JSON lines when True, plain text with ``key=value`` fields otherwise.
        stream: Stream for the console handler.
        handlers: Extra handlers to install alongside it.

    Returns:
        The configured package logger.
    """
    logger = get_logger()
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    logger.handlers.clear()

    console = logging.StreamHandler(stream if stream is not None else sys.stdout)
    console.setFormatter(StructuredFormatter() if structured else ContextFormatter())
    logger.addHandler(console)
    for handler in handlers or ():
        logger.addHandler(handler)
    logger.propagate = False
    return logger
