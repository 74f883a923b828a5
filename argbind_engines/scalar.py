"""
Scalar conversion: string -> typed, fail-fast.

Unlike the other converters this one raises: an unconvertible scalar aborts
the bind with ScalarConversionError. Collection assembly catches it per
element.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any

from argbind_kernel.exceptions import ScalarConversionError

_TRUE_TOKENS = frozenset({"true", "yes", "1", "on"})
_FALSE_TOKENS = frozenset({"false", "no", "0", "off"})


def _to_bool(token: str) -> bool:
    low = token.strip().lower()
    if low in _TRUE_TOKENS:
        return True
    if low in _FALSE_TOKENS:
        return False
    raise ValueError(f"not a boolean: {token!r}")


def _to_decimal(token: str) -> Decimal:
    try:
        return Decimal(token.strip())
    except InvalidOperation as exc:
        raise ValueError(f"not a decimal: {token!r}") from exc


# Types whose constructor does not parse command-line text directly.
_CONVERTERS: dict[type, Callable[[str], Any]] = {
    bool: _to_bool,
    Decimal: _to_decimal,
    date: lambda s: date.fromisoformat(s.strip()),
    datetime: lambda s: datetime.fromisoformat(s.strip().replace("Z", "+00:00")),
    time: lambda s: time.fromisoformat(s.strip()),
}


def convert_scalar(token: str, target_type: type) -> Any:
    """
    Convert ``token`` to ``target_type``.

    Types without an entry in the converter table are called with the
    token (``int("5")``, ``float("2.5")``, ``UUID(...)``, ``Path(...)``).

    Raises:
        ScalarConversionError: when the conversion fails.
    """
    if target_type is str:
        return token
    converter = _CONVERTERS.get(target_type, target_type)
    try:
        return converter(token)
    except (ValueError, TypeError, ArithmeticError) as exc:
        raise ScalarConversionError(token, target_type) from exc
