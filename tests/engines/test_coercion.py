"""Tests for category dispatch in coerce()."""

from datetime import timedelta

import pytest

from argbind_engines.coercion import coerce
from argbind_kernel.domain.dtos import ConversionResult
from argbind_kernel.domain.types import CollectionKind, FieldKind, FieldType
from argbind_kernel.exceptions import ScalarConversionError
from tests.sample_types import Access, Color


class TestCoerce:
    def test_string_unchanged(self):
        r = coerce("a,b c", FieldType.string())
        assert r.success and r.value == "a,b c"

    def test_duration(self):
        assert coerce("5S", FieldType.duration()).value == timedelta(seconds=5)

    def test_duration_failure_is_soft(self):
        assert not coerce("xS", FieldType.duration()).success

    def test_collection(self):
        r = coerce("a,b,c", FieldType.collection(str))
        assert r.success and r.value == ("a", "b", "c")

    def test_list_collection(self):
        r = coerce("1,2", FieldType.collection(int, CollectionKind.LIST))
        assert r.value == [1, 2]

    def test_enumeration(self):
        assert coerce("Read,Write", FieldType.enumeration(Access)).value == 3

    def test_enumeration_failure_is_soft(self):
        assert not coerce("purple", FieldType.enumeration(Color)).success

    def test_scalar(self):
        assert coerce("5", FieldType.scalar(int)).value == 5

    def test_scalar_failure_raises(self):
        with pytest.raises(ScalarConversionError):
            coerce("five", FieldType.scalar(int))

    def test_every_kind_is_handled(self):
        samples = {
            FieldKind.STRING: FieldType.string(),
            FieldKind.DURATION: FieldType.duration(),
            FieldKind.COLLECTION: FieldType.collection(str),
            FieldKind.ENUMERATION: FieldType.enumeration(Color),
            FieldKind.SCALAR: FieldType.scalar(str),
        }
        assert set(samples) == set(FieldKind)
        for field_type in samples.values():
            assert isinstance(coerce("red", field_type), ConversionResult)
