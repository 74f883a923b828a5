"""
argbind_engines.duration -- Duration literal parsing and formatting.

Responsibility:
    Parse command-line durations written either in the standard clock form
    (``[-][d.]hh:mm[:ss[.fffffff]]`` or whole days ``[-]d``) or as a number
    with a one-letter unit suffix (``5S``, ``1.5h``, ``250f``), and render
    a duration back into the suffix form.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Resolves unit suffixes through argbind_engines.enums abbreviation
    matching.

Invariants enforced:
    - A token whose last character is neither a unit letter nor a digit
      parses to zero, not to a failure.
    - A trailing digit is read as the milliseconds unit: "1.5" is 1ms.
    - format_duration(parse_duration("<n><U>").value, unit U) == "<n><U>"
      for integral n.

Failure modes:
    - ConversionResult.failed(INVALID_DURATION) when the number before the
      suffix does not parse or the result is out of timedelta range.

Usage:
    from argbind_engines.duration import DurationUnit, format_duration, parse_duration

    parse_duration("5S").value              # timedelta(seconds=5)
    format_duration(timedelta(minutes=2), DurationUnit.SECONDS)   # "120S"
"""

from __future__ import annotations

import re
from datetime import timedelta
from enum import Enum

from argbind_engines.enums import to_enum
from argbind_engines.tracer import traced_engine
from argbind_kernel.domain.dtos import ConversionResult
from argbind_kernel.logging_config import get_logger

logger = get_logger("engines.duration")


class DurationUnit(str, Enum):
    """Units of the suffix notation; the value is the suffix letter."""

    INVALID = ""
    MILLISECONDS = "F"
    SECONDS = "S"
    MINUTES = "M"
    HOURS = "H"
    DAYS = "D"

    @property
    def suffix(self) -> str:
        return self.value

    @property
    def span(self) -> timedelta:
        """One of this unit as a timedelta."""
        return _UNIT_SPANS[self]


_UNIT_SPANS = {
    DurationUnit.INVALID: timedelta(0),
    DurationUnit.MILLISECONDS: timedelta(milliseconds=1),
    DurationUnit.SECONDS: timedelta(seconds=1),
    DurationUnit.MINUTES: timedelta(minutes=1),
    DurationUnit.HOURS: timedelta(hours=1),
    DurationUnit.DAYS: timedelta(days=1),
}


class _UnitSuffix(Enum):
    # Member names are the suffix letters so abbreviation matching on a
    # single character lands on exactly one unit.
    F = DurationUnit.MILLISECONDS
    S = DurationUnit.SECONDS
    M = DurationUnit.MINUTES
    H = DurationUnit.HOURS
    D = DurationUnit.DAYS


_DAYS_ONLY = re.compile(r"^\s*(?P<sign>-)?(?P<days>\d+)\s*$")
_CLOCK = re.compile(
    r"^\s*(?P<sign>-)?(?:(?P<days>\d+)\.)?"
    r"(?P<hours>\d{1,2}):(?P<minutes>\d{1,2})"
    r"(?::(?P<seconds>\d{1,2})(?:\.(?P<fraction>\d{1,7}))?)?\s*$"
)


def parse_standard_duration(token: str) -> timedelta | None:
    """Parse the clock form, or None when ``token`` is not in it."""
    match = _DAYS_ONLY.match(token) or _CLOCK.match(token)
    if match is None:
        return None

    parts = match.groupdict()
    hours = int(parts.get("hours") or 0)
    minutes = int(parts.get("minutes") or 0)
    seconds = int(parts.get("seconds") or 0)
    if hours > 23 or minutes > 59 or seconds > 59:
        return None

    fraction = parts.get("fraction") or ""
    microseconds = int(fraction.ljust(6, "0")[:6]) if fraction else 0
    try:
        value = timedelta(
            days=int(parts.get("days") or 0),
            hours=hours,
            minutes=minutes,
            seconds=seconds,
            microseconds=microseconds,
        )
    except OverflowError:
        return None
    return -value if parts.get("sign") else value


def unit_for_suffix(suffix: str) -> DurationUnit:
    """
    Unit named by a one-letter suffix, or INVALID.

    A digit is not a unit letter but still converts (to a bare integer),
    and counts as milliseconds.
    """
    if not suffix:
        return DurationUnit.INVALID
    result = to_enum(suffix, _UnitSuffix, single_char=True)
    if not result.success:
        return DurationUnit.INVALID
    if isinstance(result.value, _UnitSuffix):
        return result.value.value
    if isinstance(result.value, int):
        return DurationUnit.MILLISECONDS
    return DurationUnit.INVALID


@traced_engine("duration", "1.0", fingerprint_fields=("token",))
def parse_duration(token: str) -> ConversionResult:
    """Parse a duration literal into a timedelta."""
    standard = parse_standard_duration(token)
    if standard is not None:
        return ConversionResult.ok(standard)

    unit = unit_for_suffix(token[-1:])
    if unit == DurationUnit.INVALID:
        logger.debug("duration_unit_unknown", extra={"token": token})
        return ConversionResult.ok(timedelta(0))

    try:
        magnitude = float(token[:-1])
        return ConversionResult.ok(magnitude * unit.span)
    except (ValueError, OverflowError):
        return ConversionResult.failed(
            "INVALID_DURATION",
            f"Cannot parse {token!r} as a duration in {unit.name.lower()}",
        )


def _format_magnitude(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_duration(duration: timedelta, unit: DurationUnit = DurationUnit.MILLISECONDS) -> str:
    """
    Render ``duration`` as ``<magnitude><suffix>`` in ``unit``.

    INVALID renders as the empty string.
    """
    if unit == DurationUnit.INVALID:
        return ""
    return f"{_format_magnitude(duration / unit.span)}{unit.suffix}"
