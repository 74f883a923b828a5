"""
DTOs -- Pure domain data transfer objects.

Responsibility:
    Defines the immutable values returned by converters (ConversionResult),
    by the validity query (ValidationError, ValidationResult) and by the bind
    orchestrator (AppliedArgument, SkippedToken, BindResult).

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - Converters report failure through ConversionResult, never by raising
      (the scalar path is the single exception, see ScalarConversionError).
    - BindResult.instance is the only mutable object in a bind.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class ValidationError:
    """One problem found on a bound instance, keyed by ``code`` for callers."""

    code: str
    message: str
    field: str | None = None


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of the validity query over a bound instance.

    Truthy when valid. ``errors`` is empty exactly when ``is_valid``.
    """

    is_valid: bool
    errors: tuple[ValidationError, ...] = ()

    @classmethod
    def success(cls) -> ValidationResult:
        return cls(is_valid=True)

    @classmethod
    def failure(cls, *errors: ValidationError) -> ValidationResult:
        if not errors:
            raise ValueError("A failed ValidationResult needs at least one error")
        return cls(is_valid=False, errors=errors)

    @property
    def fields(self) -> tuple[str, ...]:
        """Names of the fields with errors, in report order."""
        return tuple(e.field for e in self.errors if e.field is not None)

    def __bool__(self) -> bool:
        return self.is_valid


@dataclass(frozen=True)
class ConversionResult:
    """Result of converting a token to a typed value."""

    success: bool
    value: Any = None
    error: ValidationError | None = None

    @classmethod
    def ok(cls, value: Any) -> ConversionResult:
        return cls(success=True, value=value)

    @classmethod
    def failed(cls, code: str, message: str) -> ConversionResult:
        return cls(success=False, error=ValidationError(code=code, message=message))


class SkipReason(str, Enum):
    """Why a token did not reach a field."""

    MALFORMED = "malformed"  # not exactly one key and one value
    UNRESOLVED = "unresolved"  # no field within the distance ceiling
    UNCONVERTIBLE = "unconvertible"  # value did not convert


@dataclass(frozen=True)
class AppliedArgument:
    """A token that was converted and assigned."""

    field: str
    key: str
    value: Any


@dataclass(frozen=True)
class SkippedToken:
    """A token the bind ignored."""

    token: str
    reason: SkipReason
    field: str | None = None


@dataclass(frozen=True)
class BindResult:
    """Populated instance plus a record of what happened to every token."""

    instance: Any
    applied: tuple[AppliedArgument, ...] = ()
    skipped: tuple[SkippedToken, ...] = ()

    @property
    def applied_fields(self) -> frozenset[str]:
        return frozenset(a.field for a in self.applied)
