"""Structured logging utilities for serverless functions.

This module provides JSON-formatted logging with request context, and a
handler that forwards records to the execution log of the function
runtime.

SECURITY NOTES:
- Use hash_for_correlation() when a value must be correlated across logs
- Never log API keys, tokens, or secrets
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
import sys
import traceback
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime
from datetime import timezone
from typing import Any
from typing import Callable
from typing import Iterator
from typing import MutableMapping
from typing import Optional


def hash_for_correlation(value: str) -> str:
    """Generate a short hash for log correlation without exposing the value.

    Args:
        value: The value to hash (e.g., a user ID).

    Returns:
        A short hash suitable for log correlation.
    """
    return hashlib.sha256(value.encode()).hexdigest()[:12]


# Context variable for request tracking
request_id: ContextVar[str] = ContextVar("request_id", default="")


class StructuredLogFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Produces one JSON object per record, including request context and
    exception details.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        req_id = request_id.get()
        if req_id:
            log_data["request_id"] = req_id

        if record.levelno >= logging.ERROR:
            log_data["source"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": traceback.format_exception(*record.exc_info),
            }

        context = getattr(record, "context", None)
        if isinstance(context, dict) and context:
            log_data["context"] = context

        return json.dumps(log_data, default=str)


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that attaches structured context to each record.

    Fields passed through ``extra`` are grouped under a single ``context``
    attribute so they never collide with ``LogRecord`` attributes.
    """

    def process(
        self,
        msg: str,
        kwargs: MutableMapping[str, Any],
    ) -> tuple[str, MutableMapping[str, Any]]:
        context: dict[str, Any] = {}
        if self.extra:
            context.update(self.extra)
        context.update(kwargs.get("extra") or {})

        kwargs["extra"] = {"context": context}
        return msg, kwargs


class RuntimeSinkHandler(logging.Handler):
    """Forward log records to the runtime's log and error sinks.

    Records at ERROR and above go to ``error_sink``, everything else to
    ``log_sink``. When ``owner_id`` is set, only records emitted while
    ``request_id`` equals it are forwarded, so overlapping invocations in
    one process do not write into each other's execution log.
    """

    def __init__(
        self,
        log_sink: Callable[[str], Any],
        error_sink: Callable[[str], Any],
        level: int = logging.NOTSET,
        owner_id: str = "",
    ):
        super().__init__(level)
        self.log_sink = log_sink
        self.error_sink = error_sink
        self.owner_id = owner_id
        self.setFormatter(StructuredLogFormatter())

    def filter(self, record: logging.LogRecord) -> bool:
        if self.owner_id and request_id.get() != self.owner_id:
            return False
        return super().filter(record)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            if record.levelno >= logging.ERROR:
                self.error_sink(message)
            else:
                self.log_sink(message)
        except Exception:
            self.handleError(record)


def configure_logging(level: Optional[str] = None, stream: bool = True) -> None:
    """Configure structured logging for function execution.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to
               LOG_LEVEL environment variable or INFO.
        stream: Also write JSON records to stdout. Disable when the
                runtime sinks already carry the logs.
    """
    log_level: str = level or os.getenv("LOG_LEVEL") or "INFO"

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        if not isinstance(handler, RuntimeSinkHandler):
            root_logger.removeHandler(handler)

    if stream:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredLogFormatter())
        root_logger.addHandler(handler)

    # Reduce noise from libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)


def get_logger(name: str, **extra: Any) -> ContextLogger:
    """Get a context-aware logger.

    Args:
        name: Logger name (typically __name__).
        **extra: Additional context to include in all log messages.

    Returns:
        A ContextLogger instance.
    """
    logger = logging.getLogger(name)
    return ContextLogger(logger, extra)


@contextmanager
def runtime_logging(
    log_sink: Callable[[str], Any],
    error_sink: Callable[[str], Any],
) -> Iterator[RuntimeSinkHandler]:
    """Attach a RuntimeSinkHandler to the root logger for one invocation.

    The handler is bound to the current ``request_id``; call
    set_request_context() first.
    """
    handler = RuntimeSinkHandler(log_sink, error_sink, owner_id=request_id.get())
    root_logger = logging.getLogger()
    root_logger.addHandler(handler)
    try:
        yield handler
    finally:
        root_logger.removeHandler(handler)


def set_request_context(req_id: Optional[str] = None) -> None:
    """Set request context for logging.

    Call this at the start of each invocation to set context that will be
    included in all log messages.

    Args:
        req_id: Execution ID supplied by the runtime.
    """
    if req_id:
        request_id.set(req_id)


def clear_request_context() -> None:
    """Clear request context after the invocation."""
    request_id.set("")


def log_response(
    logger: ContextLogger,
    status_code: int,
    duration_ms: Optional[float] = None,
) -> None:
    """Log function response details.

    Args:
        logger: The logger to use.
        status_code: HTTP status code of the response.
        duration_ms: Request duration in milliseconds.
    """
    log_data: dict[str, Any] = {"status_code": status_code}
    if duration_ms is not None:
        log_data["duration_ms"] = round(duration_ms, 2)

    level = logging.INFO if status_code < 400 else logging.WARNING
    logger.log(level, "Function response", extra=log_data)
