"""
Pytest fixtures for the argbind test suite.

Provides:
- The sample "tester" schema used across engine and service tests
- Logging reset between tests
"""

import pytest

from argbind_kernel.domain.schema import Schema, SchemaBuilder
from argbind_kernel.domain.types import CollectionKind
from argbind_kernel.logging_config import LogContext, reset_logging
from tests.sample_types import Access, Color, Level


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


@pytest.fixture
def tester_schema() -> Schema:
    """Iterations/Output/Inputs required, plus Time and Script."""
    return (
        SchemaBuilder("tester")
        .scalar("Iterations", int, required=True)
        .string("Output", required=True)
        .string("Inputs", required=True)
        .duration("Time")
        .collection("Script", str)
        .build()
    )


@pytest.fixture
def rich_schema() -> Schema:
    """One field of every category, including flag and list collections."""
    return (
        SchemaBuilder("rich")
        .scalar("Count", int)
        .scalar("Ratio", float)
        .scalar("Enabled", bool)
        .string("Name")
        .duration("Timeout")
        .enumeration("Access", Access)
        .enumeration("Color", Color)
        .collection("Levels", Level, CollectionKind.LIST)
        .collection("Numbers", int)
        .build()
    )
