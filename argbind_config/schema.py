"""
Binder configuration schema.

Defines the human-authored source artifact for a bind: a named set of field
definitions plus tuning settings. YAML files are parsed into these types by
the loader and turned into a runtime ``argbind_kernel`` Schema by
``loader.build_schema``.

Key distinction:
  SchemaDefinition = source artifact (type names as strings, no classes)
  Schema           = runtime artifact (FieldTypes bound to Python types)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DEFAULT_MAX_DISTANCE = 2


@dataclass(frozen=True)
class BinderSettings:
    """Tunable parameters of a bind."""

    max_distance: int = DEFAULT_MAX_DISTANCE  # 0 = exact (case-insensitive) keys only

    def __post_init__(self) -> None:
        if self.max_distance < 0:
            raise ValueError(f"max_distance must be >= 0, got {self.max_distance}")


@dataclass(frozen=True)
class FieldDef:
    """One field as written in configuration."""

    name: str
    type: str  # see loader.SCALAR_TYPE_NAMES and the structural names
    required: bool = False
    default: Any = None
    element: str | None = None  # array / list element type name
    enum: str | None = None  # registry key for enum fields and enum elements
    description: str | None = None


@dataclass(frozen=True)
class SchemaDefinition:
    """A named, ordered set of field definitions."""

    name: str
    fields: tuple[FieldDef, ...]
    settings: BinderSettings = BinderSettings()
    description: str = ""
