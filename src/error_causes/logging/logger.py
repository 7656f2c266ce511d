"""Structured logging for dispatch and configuration events.

Each record is one JSON object. Records emitted while an OpenTelemetry span is
recording carry its trace and span ids, so a dispatch failure can be matched
to the request that raised it.

Usage:
    from error_causes.logging import get_logger

    logger = get_logger("dispatch")
    logger.missing_handler("MissingURI", ["NotFound"])
"""

import json
import logging
import sys
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from opentelemetry import trace

from error_causes.types import LogLevel

LOGGER_PREFIX = "error_causes"

# Anything on a record beyond these came in through ``extra``
_RECORD_FIELDS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


def _trace_context() -> dict[str, str]:
    span = trace.get_current_span()
    if not span.is_recording():
        return {}
    ctx = span.get_span_context()
    if not ctx.is_valid:
        return {}
    return {
        "trace_id": format(ctx.trace_id, "032x"),
        "span_id": format(ctx.span_id, "016x"),
    }


def _name_of(value: Any) -> Any:
    cause = getattr(value, "cause", value)
    if isinstance(cause, Mapping):
        return cause.get("name")
    return getattr(cause, "name", None)


def cause_chain(error: BaseException, limit: int = 10) -> list[str]:
    """Names along an error's cause chain, outermost first.

    Follows ``cause["cause"]`` and falls back to ``__cause__``. Links without
    a cause name are listed by exception type.

    Args:
        error: Error to walk
        limit: Maximum number of links reported

    Returns:
        One entry per link
    """
    chain: list[str] = []
    seen: set[int] = set()
    current: Any = error
    while current is not None and len(chain) < limit and id(current) not in seen:
        seen.add(id(current))
        name = _name_of(current)
        if name is None or name == "":
            name = type(current).__name__
        chain.append(str(name))

        cause = getattr(current, "cause", None)
        nested = cause.get("cause") if isinstance(cause, Mapping) else None
        if nested is None:
            nested = getattr(current, "__cause__", None)
        current = nested
    return chain


class StructuredLogFormatter(logging.Formatter):
    """JSON formatter with trace context injection.

    Output fields:
    - timestamp (ISO 8601), level, component (logger name), message
    - trace_id / span_id while a span is recording
    - every field passed through ``extra``
    - exception, when the record carries exc_info
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log string
        """
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "component": record.name,
            "message": record.getMessage(),
            **_trace_context(),
        }
        log_data.update(
            (key, value) for key, value in vars(record).items() if key not in _RECORD_FIELDS
        )
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Cause records may hold exceptions or other non-JSON values
        return json.dumps(log_data, default=repr)


class CausesLogger:
    """Logger for one component (``dispatch``, ``config``) of the library.

    Besides the generic ``log`` it has one method per event the library
    reports, each emitting a fixed set of fields.
    """

    def __init__(self, name: str, level: int = logging.INFO):
        """Initialize logger.

        Args:
            name: Component name, prefixed with ``error_causes.``
            level: Logging level
        """
        self.component = name
        self._logger = logging.getLogger(f"{LOGGER_PREFIX}.{name}")
        self._logger.setLevel(level)

        if not self._logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(StructuredLogFormatter())
            self._logger.addHandler(handler)

    def _log(self, level: LogLevel, message: str, context: dict[str, Any]) -> None:
        self._logger.log(_LEVELS[level], message, extra=context)

    def log(self, level: LogLevel, message: str, **fields: Any) -> None:
        """Log a free-form message with extra fields."""
        self._log(level, message, fields)

    def missing_handler(self, cause_name: str, handler_names: Iterable[str]) -> None:
        """Log a handler table rejected for lacking a cause.

        Args:
            cause_name: Taxonomy name without a callable handler
            handler_names: Names the table does provide
        """
        context = {
            "event": "missing_handler",
            "cause_name": cause_name,
            "handler_names": [str(name) for name in handler_names],
        }
        self._log(LogLevel.ERROR, f"Missing error handler: {cause_name}", context)

    def unhandled(
        self,
        level: LogLevel,
        failure: str,
        error: BaseException,
        detail: str,
    ) -> None:
        """Log an error the dispatcher could not route.

        Args:
            level: Configured dispatch log level
            failure: Library cause raised in its place
            error: Error that was being dispatched
            detail: Message of the raised library error
        """
        cause = getattr(error, "cause", None)
        context = {
            "event": "unhandled_error",
            "failure": failure,
            "cause_name": _name_of(error) if cause is not None else None,
            "error_type": type(error).__name__,
            "error_message": str(error),
            "error_cause": cause,
            "cause_chain": cause_chain(error),
        }
        self._log(level, f"No handler found for this error: {detail}", context)

    def causes_loaded(self, path: str | Path, cause_names: list[str]) -> None:
        """Log a taxonomy read from a configuration file.

        Args:
            path: File the taxonomy came from
            cause_names: Loaded names in declaration order
        """
        context = {
            "event": "causes_loaded",
            "path": str(path),
            "cause_names": cause_names,
        }
        self._log(LogLevel.INFO, f"Loaded {len(cause_names)} error causes from {path}", context)


_loggers: dict[str, CausesLogger] = {}


def get_logger(name: str, level: int = logging.INFO) -> CausesLogger:
    """Get or create a component logger.

    Args:
        name: Component name
        level: Logging level

    Returns:
        CausesLogger instance
    """
    if name not in _loggers:
        _loggers[name] = CausesLogger(name, level)
    return _loggers[name]


def reset_loggers() -> None:
    """Reset logger cache (for testing)."""
    _loggers.clear()
