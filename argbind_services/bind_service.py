"""
Bind service: tokens -> resolved fields -> typed values -> populated instance.

Orchestrates the matching and coercion engines over one argument sequence.
Uses structured logging (LogContext, get_logger("services.bind")).

Error taxonomy of a bind:
    malformed token / unresolved key / unconvertible non-scalar value
        -> skipped, recorded in BindResult.skipped, DEBUG log
    unconvertible scalar value
        -> ScalarConversionError propagates; fields set earlier stay set
    required field left at its default
        -> reported by validate_required, never raised
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any
from uuid import uuid4

from argbind_config.schema import DEFAULT_MAX_DISTANCE, BinderSettings
from argbind_engines.coercion import coerce
from argbind_engines.matching import closest_word
from argbind_kernel.domain.dtos import (
    AppliedArgument,
    BindResult,
    SkippedToken,
    SkipReason,
    ValidationError,
    ValidationResult,
)
from argbind_kernel.domain.schema import Schema
from argbind_kernel.domain.types import RawArgument
from argbind_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.bind")


def _skip(skipped: list[SkippedToken], token: str, reason: SkipReason, field: str | None = None) -> None:
    skipped.append(SkippedToken(token=token, reason=reason, field=field))
    logger.debug("token_skipped", extra={"token": token, "reason": reason.value, "field": field})


def bind_report(
    args: Iterable[str],
    schema: Schema,
    max_distance: int = DEFAULT_MAX_DISTANCE,
) -> BindResult:
    """
    Bind ``args`` onto a new instance of ``schema`` and report every token.

    Raises:
        ScalarConversionError: a scalar field's value did not convert.
        ValueError: ``max_distance`` is negative.
    """
    if max_distance < 0:
        raise ValueError(f"max_distance must be >= 0, got {max_distance}")

    instance = schema.new_instance()
    names = schema.field_names()
    applied: list[AppliedArgument] = []
    skipped: list[SkippedToken] = []

    with LogContext.bind(bind_id=uuid4().hex, schema_name=schema.name):
        logger.info("bind_started", extra={"max_distance": max_distance})

        for token in args:
            argument = RawArgument.parse(token)
            if argument is None:
                _skip(skipped, token, SkipReason.MALFORMED)
                continue

            match = closest_word(argument.key.lower(), names, max_distance)
            descriptor = schema.field_named(match.name) if match.matched else None
            if descriptor is None:
                _skip(skipped, token, SkipReason.UNRESOLVED)
                continue

            result = coerce(argument.value, descriptor.field_type)
            if not result.success:
                _skip(skipped, token, SkipReason.UNCONVERTIBLE, descriptor.name)
                continue

            descriptor.set(instance, result.value)
            applied.append(AppliedArgument(field=descriptor.name, key=argument.key, value=result.value))
            if match.distance:
                logger.debug("key_resolved_approximately", extra={
                    "key": argument.key,
                    "field": descriptor.name,
                    "distance": match.distance,
                })

        logger.info("bind_completed", extra={
            "applied_count": len(applied),
            "skipped_count": len(skipped),
        })

    return BindResult(instance=instance, applied=tuple(applied), skipped=tuple(skipped))


def bind(
    args: Iterable[str],
    schema: Schema,
    max_distance: int = DEFAULT_MAX_DISTANCE,
) -> Any:
    """Bind ``args`` onto a new instance of ``schema`` and return it."""
    return bind_report(args, schema, max_distance).instance


def validate_required(instance: Any, schema: Schema) -> ValidationResult:
    """
    Check that every required field moved off its default.

    A required field is invalid while its value equals the declared default,
    or the type's zero value when no default is declared.
    """
    errors = []
    for fd in schema.required_fields():
        if fd.get(instance) == fd.initial_value():
            errors.append(ValidationError(
                code="MISSING_REQUIRED_FIELD",
                message=f"Required field {fd.name!r} was not set",
                field=fd.name,
            ))
    if errors:
        return ValidationResult.failure(*errors)
    return ValidationResult.success()


def is_valid_instance(instance: Any, schema: Schema) -> bool:
    return validate_required(instance, schema).is_valid


class BindService:
    """
    A schema paired with its settings, for binding repeatedly.

    Holds no per-call state: each bind creates its own instance.
    """

    def __init__(self, schema: Schema, settings: BinderSettings | None = None):
        self._schema = schema
        self._settings = settings or BinderSettings()

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def settings(self) -> BinderSettings:
        return self._settings

    def bind(self, args: Iterable[str]) -> Any:
        return bind(args, self._schema, self._settings.max_distance)

    def bind_report(self, args: Iterable[str]) -> BindResult:
        return bind_report(args, self._schema, self._settings.max_distance)

    def validate(self, instance: Any) -> ValidationResult:
        return validate_required(instance, self._schema)
