"""
Value coercion: dispatch a token to the converter for its field category.

Pure function. Every FieldKind has exactly one branch; only SCALAR can raise.
"""

from __future__ import annotations

from argbind_engines.collection import to_collection
from argbind_engines.duration import parse_duration
from argbind_engines.enums import to_enum
from argbind_engines.scalar import convert_scalar
from argbind_engines.tracer import traced_engine
from argbind_kernel.domain.dtos import ConversionResult
from argbind_kernel.domain.types import FieldKind, FieldType


@traced_engine("coercion", "1.0", fingerprint_fields=("token", "field_type"))
def coerce(token: str, field_type: FieldType) -> ConversionResult:
    """
    Coerce ``token`` to the value ``field_type`` declares.

    Raises:
        ScalarConversionError: for an unconvertible SCALAR token.
    """
    kind = field_type.kind

    if kind == FieldKind.STRING:
        return ConversionResult.ok(token)

    if kind == FieldKind.DURATION:
        return parse_duration(token)

    if kind == FieldKind.COLLECTION:
        return ConversionResult.ok(
            to_collection(token, field_type.collection_kind, field_type.element)
        )

    if kind == FieldKind.ENUMERATION:
        return to_enum(token, field_type.python_type)

    if kind == FieldKind.SCALAR:
        return ConversionResult.ok(convert_scalar(token, field_type.python_type))

    raise AssertionError(f"Unhandled field kind: {kind!r}")
