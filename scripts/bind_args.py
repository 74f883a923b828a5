#!/usr/bin/env python3
"""
Bind key=value arguments onto a schema and report the result.

With no --schema, binds onto the built-in sample schema:
    Iterations (int, required), Output (str, required), Inputs (str, required),
    Time (duration), Script (array of str)

Usage:
    python3 scripts/bind_args.py [options] key=value [key=value ...]

Examples:
    # Keys match approximately; prints the bound values and the time in days
    python3 scripts/bind_args.py itterations=5 output=out.txt inputs=in.txt time=36H

    # Exact keys only
    python3 scripts/bind_args.py --max-distance 0 iterations=5

    # Bind against a YAML schema definition
    python3 scripts/bind_args.py --schema tester.yaml iterations=5
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from argbind_config import BinderSettings, load_schema
from argbind_engines.duration import DurationUnit, format_duration
from argbind_kernel.domain.schema import Schema, SchemaBuilder
from argbind_kernel.domain.types import FieldKind
from argbind_kernel.exceptions import ScalarConversionError
from argbind_kernel.logging_config import configure_logging
from argbind_services import BindService

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_CONVERSION_ERROR = 2


def sample_schema() -> Schema:
    return (
        SchemaBuilder("tester")
        .scalar("Iterations", int, required=True)
        .string("Output", required=True)
        .string("Inputs", required=True)
        .duration("Time")
        .collection("Script", str)
        .build()
    )


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Bind key=value arguments onto a schema.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "tokens",
        nargs="*",
        help="Arguments in key=value form.",
    )
    parser.add_argument(
        "--schema",
        type=Path,
        default=None,
        help="YAML schema definition (default: built-in sample schema).",
    )
    parser.add_argument(
        "--max-distance",
        type=int,
        default=None,
        help="Maximum edit distance for key matching; 0 for exact keys (default: 2).",
    )
    parser.add_argument(
        "--unit",
        choices=[u.name.lower() for u in DurationUnit if u != DurationUnit.INVALID],
        default="days",
        help="Unit used to print duration fields (default: days).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Emit structured DEBUG logs on stderr.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.schema is not None:
        schema, settings = load_schema(args.schema)
    else:
        schema, settings = sample_schema(), BinderSettings()
    if args.max_distance is not None:
        settings = BinderSettings(max_distance=args.max_distance)

    service = BindService(schema, settings)
    try:
        result = service.bind_report(args.tokens)
    except ScalarConversionError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_CONVERSION_ERROR

    unit = DurationUnit[args.unit.upper()]
    for fd in schema.fields:
        value = fd.get(result.instance)
        if fd.field_type.kind == FieldKind.DURATION:
            value = format_duration(value, unit)
        print(f"{fd.name} = {value}")

    for skipped in result.skipped:
        print(f"ignored {skipped.token!r} ({skipped.reason.value})")

    validation = service.validate(result.instance)
    for error in validation.errors:
        print(f"invalid: {error.message}")
    return EXIT_OK if validation else EXIT_INVALID


if __name__ == "__main__":
    raise SystemExit(main())
