"""
argbind_config -- YAML schema definitions and binder settings.

Public API:
    load_schema(path, enums) -> (Schema, BinderSettings)
    BinderSettings, DEFAULT_MAX_DISTANCE
"""

from argbind_config.loader import (
    build_schema,
    compute_checksum,
    load_schema,
    load_schema_definition,
    parse_schema_definition,
)
from argbind_config.schema import (
    DEFAULT_MAX_DISTANCE,
    BinderSettings,
    FieldDef,
    SchemaDefinition,
)

__all__ = [
    "DEFAULT_MAX_DISTANCE",
    "BinderSettings",
    "FieldDef",
    "SchemaDefinition",
    "build_schema",
    "compute_checksum",
    "load_schema",
    "load_schema_definition",
    "parse_schema_definition",
]
