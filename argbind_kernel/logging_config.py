"""
Structured JSON logging for argbind.

Every record leaves the ``argbind`` logger hierarchy as one JSON object per
line. Bind-scoped fields (``bind_id``, ``schema_name``) are carried in
context variables so engines deep inside a bind never have to pass them
along; the formatter merges them into each record.

    configure_logging(level=logging.DEBUG)
    logger = get_logger("services.bind")
    with LogContext.bind(bind_id="b1", schema_name="tester"):
        logger.info("bind_started", extra={"max_distance": 2})

    {"ts": "...", "level": "INFO", "logger": "argbind.services.bind",
     "message": "bind_started", "bind_id": "b1", "schema_name": "tester",
     "max_distance": 2}
"""

__all__ = [
    "ROOT_LOGGER_NAME",
    "StructuredFormatter",
    "LogContext",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, date, datetime, timedelta
from enum import Enum
from typing import Any, TextIO

ROOT_LOGGER_NAME = "argbind"

_CONTEXT_VARS: dict[str, ContextVar[str | None]] = {
    "bind_id": ContextVar("argbind_bind_id", default=None),
    "schema_name": ContextVar("argbind_schema_name", default=None),
}


class LogContext:
    """Bind-scoped log fields, safe across threads and tasks."""

    @staticmethod
    def set(*, bind_id: str | None = None, schema_name: str | None = None) -> None:
        """Set the given fields; None leaves a field unchanged."""
        for name, value in (("bind_id", bind_id), ("schema_name", schema_name)):
            if value is not None:
                _CONTEXT_VARS[name].set(value)

    @staticmethod
    def get_all() -> dict[str, str]:
        """Fields currently set."""
        return {
            name: value
            for name, var in _CONTEXT_VARS.items()
            if (value := var.get()) is not None
        }

    @staticmethod
    def clear() -> None:
        for var in _CONTEXT_VARS.values():
            var.set(None)

    @staticmethod
    @contextmanager
    def bind(**fields: str | None) -> Iterator[None]:
        """
        Set fields for the duration of a ``with`` block.

        Previous values (including unset) come back on exit. Names other
        than the known context fields are ignored.
        """
        tokens = [
            (_CONTEXT_VARS[name], _CONTEXT_VARS[name].set(value))
            for name, value in fields.items()
            if name in _CONTEXT_VARS and value is not None
        ]
        try:
            yield
        finally:
            for var, token in reversed(tokens):
                var.reset(token)


def _json_default(obj: Any) -> Any:
    """Encode the value types a bind puts into log extras."""
    if isinstance(obj, Enum):
        return obj.name if obj.name is not None else obj.value
    if isinstance(obj, timedelta):
        return obj.total_seconds()
    if isinstance(obj, datetime | date):
        return obj.isoformat()
    if isinstance(obj, tuple | set | frozenset):
        return list(obj)
    return str(obj)


# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRIBUTES = frozenset(vars(logging.makeLogRecord({}))) | {"message", "taskName"}


class StructuredFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(LogContext.get_all())
        payload.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRIBUTES and key not in payload
        )
        if record.exc_info and record.exc_info[1] is not None:
            payload.update(self._exception_fields(record))
        return json.dumps(payload, default=_json_default)

    def _exception_fields(self, record: logging.LogRecord) -> dict[str, Any]:
        exc = record.exc_info[1]
        fields: dict[str, Any] = {
            "exc_type": type(exc).__name__,
            "exc_message": str(exc),
        }
        code = getattr(exc, "code", None)
        if code is not None:
            fields["exc_code"] = code
        # ArgBindError subclasses keep their context as public attributes.
        for name, value in vars(exc).items():
            if not name.startswith("_"):
                fields[f"exc_{name}"] = value
        fields["traceback"] = self.formatException(record.exc_info)
        return fields


def get_logger(name: str) -> logging.Logger:
    """Logger ``argbind.<name>``."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


_configure_lock = threading.Lock()
_configured = False


def configure_logging(
    *,
    level: int = logging.INFO,
    stream: TextIO | None = None,
    handler: logging.Handler | None = None,
) -> None:
    """
    Attach a JSON handler to the ``argbind`` logger.

    Only the first call in a process takes effect; later calls return
    without touching the configuration. ``handler`` wins over ``stream``;
    with neither, records go to stderr.
    """
    global _configured
    with _configure_lock:
        if _configured:
            return
        _configured = True

        if handler is None:
            handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
        handler.setFormatter(StructuredFormatter())

        root = logging.getLogger(ROOT_LOGGER_NAME)
        root.setLevel(level)
        root.addHandler(handler)
        root.propagate = False


def reset_logging() -> None:
    """Undo configure_logging. Test suites call this between tests."""
    global _configured
    with _configure_lock:
        _configured = False
        root = logging.getLogger(ROOT_LOGGER_NAME)
        for handler in list(root.handlers):
            root.removeHandler(handler)
        root.setLevel(logging.WARNING)
        root.propagate = True
