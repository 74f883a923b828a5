"""
Typed Exception Hierarchy for argbind.

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

All exceptions inherit from ArgBindError:

    ArgBindError (base)
    |
    +-- SchemaError
    |   +-- DuplicateFieldError
    |   +-- UnsupportedFieldTypeError
    |
    +-- ConversionError
        +-- ScalarConversionError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Schema          | DUPLICATE_FIELD             | Two fields share a name (ignoring case)
                | UNSUPPORTED_FIELD_TYPE      | Annotation has no field category
----------------|-----------------------------|-----------------------------------------
Conversion      | SCALAR_CONVERSION_FAILED    | Scalar token cannot be converted

===============================================================================
HANDLING PATTERNS
===============================================================================

Only the scalar path raises during a bind. Every other unconvertible token is
skipped and reported through ``BindResult.skipped``:

    try:
        options = bind(sys.argv[1:], schema)
    except ScalarConversionError as e:
        parser_error(f"{e.token!r} is not a valid {e.type_name}")

Required-field violations are never raised; query them with
``validate_required`` after the bind.
"""


class ArgBindError(Exception):
    """
    Base exception for all argbind errors.

    All subclasses carry a ``code`` class attribute for machine-readable
    error identification.
    """

    code: str = "ARGBIND_ERROR"


# Schema-related exceptions


class SchemaError(ArgBindError):
    """Base exception for schema declaration errors."""

    code: str = "SCHEMA_ERROR"


class DuplicateFieldError(SchemaError):
    """Two descriptors resolve to the same case-insensitive name."""

    code: str = "DUPLICATE_FIELD"

    def __init__(self, schema_name: str, field_name: str):
        self.schema_name = schema_name
        self.field_name = field_name
        super().__init__(
            f"Duplicate field {field_name!r} in schema {schema_name!r}"
        )


class UnsupportedFieldTypeError(SchemaError):
    """A declared type cannot be mapped onto a field category."""

    code: str = "UNSUPPORTED_FIELD_TYPE"

    def __init__(self, field_name: str, annotation: object):
        self.field_name = field_name
        self.annotation = annotation
        super().__init__(
            f"Unsupported type {annotation!r} for field {field_name!r}"
        )


# Conversion-related exceptions


class ConversionError(ArgBindError):
    """Base exception for value conversion errors."""

    code: str = "CONVERSION_ERROR"


class ScalarConversionError(ConversionError):
    """
    A token could not be converted to a scalar type.

    This is the one fail-fast conversion: it aborts the bind call that
    triggered it. Fields already assigned in that call keep their values.
    """

    code: str = "SCALAR_CONVERSION_FAILED"

    def __init__(self, token: str, target_type: type):
        self.token = token
        self.target_type = target_type
        self.type_name = getattr(target_type, "__name__", repr(target_type))
        super().__init__(f"Cannot convert {token!r} to {self.type_name}")
