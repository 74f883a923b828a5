"""
Module: argbind_engines
Responsibility:
    Package entrypoint that re-exports the pure matching and conversion
    engines. This is the import surface for argbind_services.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import argbind_kernel (and sibling engine modules).
    MUST NOT import argbind_services or argbind_config.

Invariants enforced:
    - Determinism: identical inputs always produce identical outputs.
    - Converters report failure through ConversionResult; only
      convert_scalar (and coerce on its behalf) raises.

Usage:
    from argbind_engines import closest_word, coerce, parse_duration
"""

from argbind_engines.coercion import coerce
from argbind_engines.collection import COLLECTION_DELIMITERS, split_elements, to_collection
from argbind_engines.duration import (
    DurationUnit,
    format_duration,
    parse_duration,
    parse_standard_duration,
    unit_for_suffix,
)
from argbind_engines.enums import FLAG_DELIMITERS, match_member_name, split_flag_members, to_enum
from argbind_engines.matching import UNMATCHABLE, closest_word, resolve, word_distance
from argbind_engines.scalar import convert_scalar

__all__ = [
    "COLLECTION_DELIMITERS",
    "DurationUnit",
    "FLAG_DELIMITERS",
    "UNMATCHABLE",
    "closest_word",
    "coerce",
    "convert_scalar",
    "format_duration",
    "match_member_name",
    "parse_duration",
    "parse_standard_duration",
    "resolve",
    "split_elements",
    "split_flag_members",
    "to_collection",
    "to_enum",
    "unit_for_suffix",
    "word_distance",
]
