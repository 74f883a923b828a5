"""
argbind_engines.tracer -- DEBUG trace records for engine calls.

Responsibility:
    ``@traced_engine`` wraps a conversion engine so each call emits one
    ``ARGBIND_ENGINE_TRACE`` record naming the engine, its version, a short
    fingerprint of the selected inputs, and how long the call took.

Architecture position:
    Engines -- support code for the conversion layer. The wrapped function
    is called unchanged; the wrapper only reads its arguments and logs.

Invariants enforced:
    - Equal inputs give equal fingerprints: values are rendered through
      ``_stable_repr`` (sorted mappings, enum and type names) before hashing.
    - With DEBUG off for ``argbind.engines.tracer`` the wrapper adds no work
      beyond a level check.

Usage:
    @traced_engine("duration", "1.0", fingerprint_fields=("token",))
    def parse_duration(token): ...
"""

from __future__ import annotations

import functools
import hashlib
import inspect
import logging
import time
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

from argbind_kernel.logging_config import get_logger

TRACE_MESSAGE = "ARGBIND_ENGINE_TRACE"

_logger = get_logger("engines.tracer")


def _stable_repr(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, Enum):
        return f"{type(value).__qualname__}.{value.name}"
    if isinstance(value, type):
        return value.__qualname__
    if isinstance(value, Mapping):
        inner = ",".join(f"{k}:{_stable_repr(v)}" for k, v in sorted(value.items()))
        return "{" + inner + "}"
    if isinstance(value, list | tuple):
        return "[" + ",".join(_stable_repr(v) for v in value) + "]"
    return str(value)


def compute_input_fingerprint(
    fingerprint_fields: tuple[str, ...],
    arguments: Mapping[str, Any],
) -> str:
    """16 hex characters of SHA-256 over the named arguments; absent ones hash as null."""
    canonical = "|".join(
        f"{name}={_stable_repr(arguments.get(name))}" for name in fingerprint_fields
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:16]


def traced_engine(
    engine_name: str,
    engine_version: str,
    fingerprint_fields: tuple[str, ...] = (),
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorate an engine entry point with DEBUG trace logging."""

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            if not _logger.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)

            arguments = signature.bind_partial(*args, **kwargs).arguments
            started = time.perf_counter()
            result = func(*args, **kwargs)
            elapsed_ms = (time.perf_counter() - started) * 1000

            _logger.debug(TRACE_MESSAGE, extra={
                "trace_type": TRACE_MESSAGE,
                "engine_name": engine_name,
                "engine_version": engine_version,
                "input_fingerprint": compute_input_fingerprint(fingerprint_fields, arguments),
                "duration_ms": round(elapsed_ms, 3),
                "function": func.__qualname__,
            })
            return result

        return wrapper

    return decorator
