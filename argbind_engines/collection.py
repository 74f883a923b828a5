"""
argbind_engines.collection -- Delimited token to homogeneous collection.

Responsibility:
    Split a token on commas and spaces, convert each element through the
    enum or scalar path, and assemble an ARRAY (tuple) or LIST (list).

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Never fails: elements that do not convert are dropped.
    - ARRAY results have one slot per input element; a dropped element
      leaves the element type's zero value in its slot.
    - LIST results hold only converted elements, in input order.
"""

from __future__ import annotations

import re
from typing import Any

from argbind_engines.enums import to_enum
from argbind_engines.scalar import convert_scalar
from argbind_engines.tracer import traced_engine
from argbind_kernel.domain.types import CollectionKind, FieldKind, FieldType
from argbind_kernel.exceptions import ScalarConversionError
from argbind_kernel.logging_config import get_logger

logger = get_logger("engines.collection")

COLLECTION_DELIMITERS = (",", " ")

_SPLIT = re.compile("[" + re.escape("".join(COLLECTION_DELIMITERS)) + "]")


def split_elements(token: str) -> list[str]:
    """Split on COLLECTION_DELIMITERS, dropping empty fragments."""
    return [part for part in _SPLIT.split(token) if part]


def _convert_element(item: str, element_type: FieldType) -> tuple[bool, Any]:
    if element_type.kind == FieldKind.ENUMERATION:
        result = to_enum(item, element_type.python_type)
        return result.success, result.value
    try:
        return True, convert_scalar(item, element_type.python_type)
    except ScalarConversionError:
        return False, None


@traced_engine("collection", "1.0", fingerprint_fields=("token", "collection_kind"))
def to_collection(
    token: str,
    collection_kind: CollectionKind,
    element_type: FieldType,
) -> tuple[Any, ...] | list[Any]:
    """Convert ``token`` into a collection of ``element_type`` values."""
    items = split_elements(token)

    if collection_kind == CollectionKind.ARRAY:
        slots: list[Any] = [element_type.zero_value()] * len(items)
        for index, item in enumerate(items):
            converted, value = _convert_element(item, element_type)
            if converted:
                slots[index] = value
            else:
                logger.debug("collection_element_dropped", extra={
                    "element": item,
                    "index": index,
                })
        return tuple(slots)

    values: list[Any] = []
    for item in items:
        converted, value = _convert_element(item, element_type)
        if converted:
            values.append(value)
        else:
            logger.debug("collection_element_dropped", extra={"element": item})
    return values
