"""
argbind_engines.enums -- Token to enumeration conversion.

Responsibility:
    Convert a token to an enum member by number, by (abbreviated) member
    name, or, for ``enum.Flag`` types, by a delimited list of members
    combined with bitwise OR.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Integer tokens are never validated against declared members: an
      undeclared value comes back as the enum's lenient reinterpretation
      or, where the enum refuses it, as the bare int.
    - A flag combination is all-or-nothing: one unknown member fails the
      whole token.
    - Name matching is case-insensitive and follows declaration order.

Failure modes:
    - ConversionResult.failed(NOT_AN_ENUM) for a non-Enum target.
    - ConversionResult.failed(ENUM_NO_MATCH) when no member matches.
    - ConversionResult.failed(FLAG_MEMBER_NO_MATCH) when a flag part fails.
"""

from __future__ import annotations

import re
from enum import Enum, Flag
from typing import Any

from argbind_kernel.domain.dtos import ConversionResult

# Separators between members of a flag combination.
FLAG_DELIMITERS = (",", "-", " ", "|", "_")

_FLAG_SPLIT = re.compile("[" + re.escape("".join(FLAG_DELIMITERS)) + "]")
_INTEGER = re.compile(r"^\s*[+-]?\d+\s*$")


def _parse_int(token: str) -> int | None:
    if _INTEGER.match(token):
        return int(token)
    return None


def _from_value(enum_type: type[Enum], value: int) -> Any:
    try:
        return enum_type(value)
    except ValueError:
        return value


def _int_value(value: Any) -> int:
    return value.value if isinstance(value, Enum) else int(value)


def split_flag_members(token: str) -> list[str]:
    """Split a flag token on FLAG_DELIMITERS, dropping empty parts."""
    return [part for part in _FLAG_SPLIT.split(token) if part]


def match_member_name(token: str, enum_type: type[Enum], single_char: bool = False) -> Enum | None:
    """
    Member whose name equals ``token`` ignoring case.

    With ``single_char`` (abbreviation mode) the first member whose name
    starts with ``token`` wins instead.
    """
    wanted = token.lower()
    for name, member in enum_type.__members__.items():
        lowered = name.lower()
        if lowered.startswith(wanted) if single_char else lowered == wanted:
            return member
    return None


def to_enum(token: str, enum_type: type, single_char: bool = False) -> ConversionResult:
    """Convert ``token`` to a value of ``enum_type``."""
    if not (isinstance(enum_type, type) and issubclass(enum_type, Enum)):
        return ConversionResult.failed("NOT_AN_ENUM", f"{enum_type!r} is not an enumeration")

    number = _parse_int(token)
    if number is not None:
        return ConversionResult.ok(_from_value(enum_type, number))

    if issubclass(enum_type, Flag):
        members = split_flag_members(token)
        if len(members) > 1:
            combined = 0
            for member in members:
                result = to_enum(member, enum_type, len(member) < 2)
                if not result.success:
                    return ConversionResult.failed(
                        "FLAG_MEMBER_NO_MATCH",
                        f"{member!r} in {token!r} is not a member of {enum_type.__name__}",
                    )
                combined |= _int_value(result.value)
            return ConversionResult.ok(_from_value(enum_type, combined))

    member = match_member_name(token, enum_type, single_char)
    if member is None:
        return ConversionResult.failed(
            "ENUM_NO_MATCH",
            f"{token!r} is not a member of {enum_type.__name__}",
        )
    return ConversionResult.ok(member)
