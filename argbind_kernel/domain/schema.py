"""
Result schema data structures.

Provides the immutable set of field descriptors a bind resolves keys against,
and a declarative builder for assembling one. This is part of the functional
core - no I/O, no reflection.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from types import SimpleNamespace
from typing import Any

from argbind_kernel.domain.types import CollectionKind, FieldDescriptor, FieldType
from argbind_kernel.exceptions import DuplicateFieldError


@dataclass(frozen=True)
class Schema:
    """
    Complete schema definition for a result object.

    Field order is significant: key resolution scans fields in the
    declared order.
    """

    name: str
    fields: tuple[FieldDescriptor, ...]
    factory: Callable[[], Any] | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Schema name is required")
        seen: set[str] = set()
        for fd in self.fields:
            lowered = fd.name.lower()
            if lowered in seen:
                raise DuplicateFieldError(self.name, fd.name)
            seen.add(lowered)

    def field_names(self) -> tuple[str, ...]:
        """Lower-cased field names in declared order."""
        return tuple(fd.name.lower() for fd in self.fields)

    def field_named(self, name: str) -> FieldDescriptor | None:
        """Case-insensitive lookup."""
        lowered = name.lower()
        for fd in self.fields:
            if fd.name.lower() == lowered:
                return fd
        return None

    def required_fields(self) -> tuple[FieldDescriptor, ...]:
        return tuple(fd for fd in self.fields if fd.required)

    def new_instance(self) -> Any:
        """
        Create the result object for one bind call.

        With a factory, the factory decides initial values. Without one, a
        namespace is populated with a copy of each field's default, or its
        zero value.
        """
        if self.factory is not None:
            return self.factory()
        return SimpleNamespace(**{fd.attribute_name: fd.initial_value() for fd in self.fields})


class SchemaBuilder:
    """
    Declarative builder for Schema.

    Usage:
        schema = (
            SchemaBuilder("tester")
            .scalar("Iterations", int, required=True)
            .string("Output", required=True)
            .duration("Time")
            .collection("Script", str)
            .build()
        )
    """

    def __init__(self, name: str, factory: Callable[[], Any] | None = None):
        self._name = name
        self._factory = factory
        self._fields: list[FieldDescriptor] = []

    def field(self, descriptor: FieldDescriptor) -> SchemaBuilder:
        self._fields.append(descriptor)
        return self

    def _add(self, name: str, field_type: FieldType, **options: Any) -> SchemaBuilder:
        return self.field(FieldDescriptor(name=name, field_type=field_type, **options))

    def string(self, name: str, **options: Any) -> SchemaBuilder:
        return self._add(name, FieldType.string(), **options)

    def duration(self, name: str, **options: Any) -> SchemaBuilder:
        return self._add(name, FieldType.duration(), **options)

    def scalar(self, name: str, python_type: type, **options: Any) -> SchemaBuilder:
        return self._add(name, FieldType.scalar(python_type), **options)

    def enumeration(self, name: str, enum_type: type[Enum], **options: Any) -> SchemaBuilder:
        return self._add(name, FieldType.enumeration(enum_type), **options)

    def collection(
        self,
        name: str,
        element: FieldType | type,
        kind: CollectionKind = CollectionKind.ARRAY,
        **options: Any,
    ) -> SchemaBuilder:
        return self._add(name, FieldType.collection(element, kind), **options)

    def build(self) -> Schema:
        return Schema(name=self._name, fields=tuple(self._fields), factory=self._factory)
