"""
Configuration Loader (``argbind_config.loader``).

Responsibility
--------------
Loads YAML schema definition files, parses them into typed
``argbind_config.schema`` dataclasses, and builds the runtime
``argbind_kernel`` Schema from them.

Architecture position
---------------------
**Config layer** -- infrastructure tooling.  Depends on the kernel (to
build schemas) and on the coercion engine (to convert declared defaults).
Nothing in kernel or engines imports it.

Invariants enforced
-------------------
* Every parsed object is a frozen dataclass from ``schema.py``.
* Enum classes come from a caller-supplied registry; YAML never names a
  Python import path.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  definition identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys in parsed dict  -> ``KeyError`` propagates.
* Unknown type name, unknown enum key, or an unconvertible default
  -> ``ValueError``.

Example
-------
::

    name: tester
    max_distance: 2
    fields:
      - {name: Iterations, type: int, required: true}
      - {name: Time, type: duration}
      - {name: Script, type: array, element: str}
      - {name: Access, type: enum, enum: access}
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from dataclasses import asdict
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any
from uuid import UUID

import yaml

from argbind_config.schema import (
    DEFAULT_MAX_DISTANCE,
    BinderSettings,
    FieldDef,
    SchemaDefinition,
)
from argbind_engines.coercion import coerce
from argbind_kernel.domain.schema import Schema
from argbind_kernel.domain.types import CollectionKind, FieldDescriptor, FieldType
from argbind_kernel.exceptions import ScalarConversionError

SCALAR_TYPE_NAMES: dict[str, type] = {
    "str": str,
    "string": str,
    "int": int,
    "float": float,
    "bool": bool,
    "decimal": Decimal,
    "date": date,
    "datetime": datetime,
    "uuid": UUID,
    "path": Path,
}

COLLECTION_TYPE_NAMES: dict[str, CollectionKind] = {
    "array": CollectionKind.ARRAY,
    "list": CollectionKind.LIST,
}

STRUCTURAL_TYPE_NAMES = frozenset({"duration", "enum"}) | frozenset(COLLECTION_TYPE_NAMES)


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_field(data: dict[str, Any]) -> FieldDef:
    """Parse a FieldDef from a dict."""
    type_name = str(data["type"]).lower()
    if type_name not in SCALAR_TYPE_NAMES and type_name not in STRUCTURAL_TYPE_NAMES:
        raise ValueError(f"Unknown type {data['type']!r} for field {data['name']!r}")
    element = data.get("element")
    if type_name in COLLECTION_TYPE_NAMES and not element:
        raise ValueError(f"Collection field {data['name']!r} needs an element type")
    return FieldDef(
        name=data["name"],
        type=type_name,
        required=bool(data.get("required", False)),
        default=data.get("default"),
        element=str(element).lower() if element else None,
        enum=data.get("enum"),
        description=data.get("description"),
    )


def parse_schema_definition(data: dict[str, Any]) -> SchemaDefinition:
    """Parse a SchemaDefinition from a dict."""
    return SchemaDefinition(
        name=data["name"],
        fields=tuple(parse_field(f) for f in data.get("fields", [])),
        settings=BinderSettings(
            max_distance=int(data.get("max_distance", DEFAULT_MAX_DISTANCE)),
        ),
        description=data.get("description", ""),
    )


def load_schema_definition(path: Path) -> SchemaDefinition:
    """Load and parse one YAML schema definition file."""
    return parse_schema_definition(load_yaml_file(path))


def _lookup_enum(fd: FieldDef, enums: Mapping[str, type[Enum]]) -> type[Enum]:
    if not fd.enum:
        raise ValueError(f"Field {fd.name!r} needs an 'enum' key")
    if fd.enum not in enums:
        raise ValueError(f"Unknown enum {fd.enum!r} for field {fd.name!r}")
    return enums[fd.enum]


def _element_type(fd: FieldDef, enums: Mapping[str, type[Enum]]) -> FieldType:
    if fd.element == "enum":
        return FieldType.enumeration(_lookup_enum(fd, enums))
    if fd.element not in SCALAR_TYPE_NAMES:
        raise ValueError(f"Unsupported element type {fd.element!r} for field {fd.name!r}")
    return FieldType.of(SCALAR_TYPE_NAMES[fd.element])


def field_type_for_def(fd: FieldDef, enums: Mapping[str, type[Enum]]) -> FieldType:
    """Resolve a FieldDef's type names to a FieldType."""
    if fd.type == "duration":
        return FieldType.duration()
    if fd.type == "enum":
        return FieldType.enumeration(_lookup_enum(fd, enums))
    if fd.type in COLLECTION_TYPE_NAMES:
        return FieldType.collection(_element_type(fd, enums), COLLECTION_TYPE_NAMES[fd.type])
    return FieldType.of(SCALAR_TYPE_NAMES[fd.type])


def _default_value(fd: FieldDef, field_type: FieldType) -> Any:
    """Convert a declared default the same way a bind converts a token."""
    if fd.default is None:
        return None
    if isinstance(fd.default, list):
        token = ",".join(str(item) for item in fd.default)
    elif isinstance(fd.default, bool):
        token = "true" if fd.default else "false"
    else:
        token = str(fd.default)
    try:
        result = coerce(token, field_type)
    except ScalarConversionError as exc:
        raise ValueError(f"Invalid default {fd.default!r} for field {fd.name!r}") from exc
    if not result.success:
        raise ValueError(f"Invalid default {fd.default!r} for field {fd.name!r}")
    return result.value


def build_schema(
    definition: SchemaDefinition,
    enums: Mapping[str, type[Enum]] | None = None,
) -> Schema:
    """Build the runtime Schema for a definition."""
    enums = enums or {}
    descriptors = []
    for fd in definition.fields:
        field_type = field_type_for_def(fd, enums)
        descriptors.append(
            FieldDescriptor(
                name=fd.name,
                field_type=field_type,
                required=fd.required,
                default=_default_value(fd, field_type),
                description=fd.description,
            )
        )
    return Schema(name=definition.name, fields=tuple(descriptors))


def load_schema(
    path: Path,
    enums: Mapping[str, type[Enum]] | None = None,
) -> tuple[Schema, BinderSettings]:
    """Load a YAML definition and return its runtime Schema and settings."""
    definition = load_schema_definition(path)
    return build_schema(definition, enums), definition.settings


def compute_checksum(definition: SchemaDefinition) -> str:
    """Deterministic SHA-256 hex digest of a schema definition."""
    canonical = json.dumps(asdict(definition), sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
