"""
Pure domain layer.

Field descriptors, schemas and the DTOs a bind produces. No I/O, no
clock, no runtime type discovery outside ``introspection``.
"""

from argbind_kernel.domain.dtos import (
    AppliedArgument,
    BindResult,
    ConversionResult,
    SkippedToken,
    SkipReason,
    ValidationError,
    ValidationResult,
)
from argbind_kernel.domain.introspection import field_type_for, schema_for_dataclass
from argbind_kernel.domain.schema import Schema, SchemaBuilder
from argbind_kernel.domain.types import (
    ARGUMENT_DELIMITER,
    CollectionKind,
    FieldDescriptor,
    FieldKind,
    FieldType,
    MatchResult,
    RawArgument,
)

__all__ = [
    "ARGUMENT_DELIMITER",
    "AppliedArgument",
    "BindResult",
    "CollectionKind",
    "ConversionResult",
    "FieldDescriptor",
    "FieldKind",
    "FieldType",
    "MatchResult",
    "RawArgument",
    "Schema",
    "SchemaBuilder",
    "SkipReason",
    "SkippedToken",
    "ValidationError",
    "ValidationResult",
    "field_type_for",
    "schema_for_dataclass",
]
