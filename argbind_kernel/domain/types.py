"""
argbind_kernel.domain.types -- Field categories and descriptors.

Responsibility:
    Defines the declared type of a bindable field (FieldType), the field
    descriptor carrying explicit metadata (FieldDescriptor), and the small
    ephemeral values that flow through a bind (RawArgument, MatchResult).

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - FieldKind has exactly five members; every declared type maps to one.
    - FieldType and FieldDescriptor are frozen: a field's category never
      changes during a bind.
    - Collection elements are STRING, SCALAR or ENUMERATION only.

Failure modes:
    - ValueError from FieldType.__post_init__ on an inconsistent combination.
    - ValueError from FieldDescriptor.__post_init__ on an empty name.
"""

from __future__ import annotations

import copy
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Any

# Splits a token into key and value.
ARGUMENT_DELIMITER = "="


class FieldKind(str, Enum):
    """Semantic category of a bindable field."""

    STRING = "string"
    DURATION = "duration"
    COLLECTION = "collection"
    ENUMERATION = "enumeration"
    SCALAR = "scalar"  # int, float, bool, Decimal, date, ...


class CollectionKind(str, Enum):
    """Container shape produced for a COLLECTION field."""

    ARRAY = "array"  # fixed size, materialized as a tuple
    LIST = "list"  # growable, materialized as a list


_ELEMENT_KINDS = frozenset({FieldKind.STRING, FieldKind.SCALAR, FieldKind.ENUMERATION})


@dataclass(frozen=True)
class FieldType:
    """
    Declared type of a field.

    Build instances with the factory classmethods rather than the
    constructor; they fill in the fields each category needs.
    """

    kind: FieldKind
    python_type: type | None = None
    collection_kind: CollectionKind | None = None
    element: FieldType | None = None

    def __post_init__(self) -> None:
        if self.kind == FieldKind.SCALAR and not callable(self.python_type):
            raise ValueError("SCALAR field type requires a callable python_type")
        if self.kind == FieldKind.ENUMERATION and not (
            isinstance(self.python_type, type) and issubclass(self.python_type, Enum)
        ):
            raise ValueError(
                f"ENUMERATION field type requires an Enum subclass, got {self.python_type!r}"
            )
        if self.kind == FieldKind.COLLECTION:
            if self.element is None or self.collection_kind is None:
                raise ValueError("COLLECTION field type requires element and collection_kind")
            if self.element.kind not in _ELEMENT_KINDS:
                raise ValueError(
                    f"Collection elements must be string, scalar or enumeration, "
                    f"got {self.element.kind.value}"
                )

    # -- factories ----------------------------------------------------------

    @classmethod
    def string(cls) -> FieldType:
        return cls(kind=FieldKind.STRING, python_type=str)

    @classmethod
    def duration(cls) -> FieldType:
        return cls(kind=FieldKind.DURATION, python_type=timedelta)

    @classmethod
    def scalar(cls, python_type: type) -> FieldType:
        return cls(kind=FieldKind.SCALAR, python_type=python_type)

    @classmethod
    def enumeration(cls, enum_type: type[Enum]) -> FieldType:
        return cls(kind=FieldKind.ENUMERATION, python_type=enum_type)

    @classmethod
    def collection(
        cls,
        element: FieldType | type,
        kind: CollectionKind = CollectionKind.ARRAY,
    ) -> FieldType:
        """Collection of ``element``; a bare type is promoted to a FieldType."""
        if not isinstance(element, FieldType):
            element = cls.of(element)
        return cls(kind=FieldKind.COLLECTION, collection_kind=kind, element=element)

    @classmethod
    def of(cls, python_type: type) -> FieldType:
        """Pick the category for a plain (non-generic) Python type."""
        if python_type is str:
            return cls.string()
        if python_type is timedelta:
            return cls.duration()
        if isinstance(python_type, type) and issubclass(python_type, Enum):
            return cls.enumeration(python_type)
        return cls.scalar(python_type)

    # -- queries ------------------------------------------------------------

    def zero_value(self) -> Any:
        """Value an unassigned field of this type holds."""
        if self.kind == FieldKind.DURATION:
            return timedelta(0)
        if self.kind == FieldKind.ENUMERATION:
            try:
                return self.python_type(0)
            except ValueError:
                return None
        if self.kind == FieldKind.SCALAR:
            try:
                return self.python_type()
            except TypeError:
                return None
        return None


@dataclass(frozen=True)
class FieldDescriptor:
    """
    Schema metadata for one bindable field.

    ``required`` and ``default`` are plain metadata consumed by the validity
    query. Access to the target object goes through ``getter``/``setter``
    when supplied, otherwise through the attribute named ``attribute``
    (``name`` by default).
    """

    name: str
    field_type: FieldType
    required: bool = False
    default: Any = None
    attribute: str | None = None
    getter: Callable[[Any], Any] | None = None
    setter: Callable[[Any, Any], None] | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Field name is required")

    @property
    def attribute_name(self) -> str:
        return self.attribute or self.name

    def get(self, target: Any) -> Any:
        if self.getter is not None:
            return self.getter(target)
        return getattr(target, self.attribute_name)

    def set(self, target: Any, value: Any) -> None:
        if self.setter is not None:
            self.setter(target, value)
        else:
            setattr(target, self.attribute_name, value)

    def initial_value(self) -> Any:
        """
        Declared default, falling back to the type's zero value.

        Each call returns its own copy of the default.
        """
        if self.default is not None:
            return copy.deepcopy(self.default)
        return self.field_type.zero_value()


@dataclass(frozen=True)
class RawArgument:
    """One ``key=value`` token split into its two parts."""

    key: str
    value: str

    @classmethod
    def parse(cls, token: str) -> RawArgument | None:
        """
        Split ``token`` on ``=`` dropping empty fragments.

        Only exactly two fragments form an argument; anything else
        (``"x"``, ``"=x"``, ``"a=b=c"``) gives None.
        """
        parts = [p for p in token.split(ARGUMENT_DELIMITER) if p]
        if len(parts) != 2:
            return None
        return cls(key=parts[0], value=parts[1])


@dataclass(frozen=True)
class MatchResult:
    """Outcome of resolving a key against candidate names."""

    name: str | None
    distance: int

    @property
    def matched(self) -> bool:
        return self.name is not None
