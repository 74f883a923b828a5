"""
Schema construction from dataclass declarations.

The bind core never inspects types at runtime; this module is the one place
that does, turning a dataclass into an explicit Schema once, up front.

    @dataclass
    class Options:
        iterations: int = field(default=0, metadata={"required": True})
        time: timedelta = timedelta(0)
        script: tuple[str, ...] = ()

    schema = schema_for_dataclass(Options)

Field metadata keys honoured: ``required`` (bool), ``description`` (str),
``name`` (bind name when it should differ from the attribute).
"""

from __future__ import annotations

import dataclasses
import types
import typing
from datetime import timedelta
from typing import Any

from argbind_kernel.domain.schema import Schema
from argbind_kernel.domain.types import CollectionKind, FieldDescriptor, FieldType
from argbind_kernel.exceptions import UnsupportedFieldTypeError


def _unwrap_optional(annotation: Any) -> Any:
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def field_type_for(name: str, annotation: Any) -> FieldType:
    """Map a type annotation onto a FieldType."""
    annotation = _unwrap_optional(annotation)
    origin = typing.get_origin(annotation)

    if origin is None:
        if not isinstance(annotation, type):
            raise UnsupportedFieldTypeError(name, annotation)
        if annotation in (list, tuple):
            # Bare containers hold strings.
            kind = CollectionKind.LIST if annotation is list else CollectionKind.ARRAY
            return FieldType.collection(FieldType.string(), kind)
        if annotation is timedelta:
            return FieldType.duration()
        return FieldType.of(annotation)

    args = typing.get_args(annotation)
    if origin is list and len(args) == 1:
        element, kind = args[0], CollectionKind.LIST
    elif origin is tuple and len(args) == 2 and args[1] is Ellipsis:
        element, kind = args[0], CollectionKind.ARRAY
    else:
        raise UnsupportedFieldTypeError(name, annotation)

    element = _unwrap_optional(element)
    if (
        typing.get_origin(element) is not None
        or not isinstance(element, type)
        or element in (list, tuple, dict, timedelta)
    ):
        raise UnsupportedFieldTypeError(name, annotation)
    return FieldType.collection(FieldType.of(element), kind)


def _declared_default(f: dataclasses.Field) -> Any:
    if f.default is not dataclasses.MISSING:
        return f.default
    if f.default_factory is not dataclasses.MISSING:
        return f.default_factory()
    return None


def schema_for_dataclass(cls: type, name: str | None = None) -> Schema:
    """
    Build a Schema from a dataclass.

    Raises:
        TypeError: if ``cls`` is not a dataclass.
        UnsupportedFieldTypeError: for annotations with no field category.
    """
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise TypeError(f"{cls!r} is not a dataclass")

    hints = typing.get_type_hints(cls)
    descriptors: list[FieldDescriptor] = []
    for f in dataclasses.fields(cls):
        if not f.init:
            continue
        if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
            # The dataclass is the bind factory and is called without arguments.
            raise TypeError(f"Field {f.name!r} of {cls.__name__} needs a default")
        descriptors.append(
            FieldDescriptor(
                name=f.metadata.get("name", f.name),
                field_type=field_type_for(f.name, hints[f.name]),
                required=bool(f.metadata.get("required", False)),
                default=_declared_default(f),
                attribute=f.name,
                description=f.metadata.get("description"),
            )
        )
    return Schema(name=name or cls.__name__, fields=tuple(descriptors), factory=cls)
