"""Tests for collection assembly."""

import pytest

from argbind_engines.collection import COLLECTION_DELIMITERS, split_elements, to_collection
from argbind_kernel.domain.types import CollectionKind, FieldType
from tests.sample_types import Access, Color, Level


class TestSplitElements:
    def test_commas_and_spaces(self):
        assert split_elements("a,b c") == ["a", "b", "c"]

    def test_empty_fragments_dropped(self):
        assert split_elements(",a,, b ,") == ["a", "b"]

    @pytest.mark.parametrize("delimiter", COLLECTION_DELIMITERS)
    def test_every_delimiter_splits(self, delimiter):
        assert split_elements(delimiter.join(["x", "y"])) == ["x", "y"]


class TestArray:
    def test_strings(self):
        assert to_collection("a,b,c", CollectionKind.ARRAY, FieldType.string()) == ("a", "b", "c")

    def test_ints(self):
        assert to_collection("1 2 3", CollectionKind.ARRAY, FieldType.scalar(int)) == (1, 2, 3)

    def test_dropped_element_leaves_zero_slot(self):
        result = to_collection("1,x,3", CollectionKind.ARRAY, FieldType.scalar(int))
        assert result == (1, 0, 3)

    def test_enum_elements(self):
        result = to_collection("red,blue", CollectionKind.ARRAY, FieldType.enumeration(Color))
        assert result == (Color.RED, Color.BLUE)

    def test_enum_without_zero_member_leaves_none(self):
        result = to_collection("low,bogus", CollectionKind.ARRAY, FieldType.enumeration(Level))
        assert result == (Level.LOW, None)

    def test_flag_elements_are_single_members(self):
        # Commas split the collection before flag parsing sees the token.
        result = to_collection("read,write", CollectionKind.ARRAY, FieldType.enumeration(Access))
        assert result == (Access.READ, Access.WRITE)

    def test_empty_token(self):
        assert to_collection("", CollectionKind.ARRAY, FieldType.string()) == ()


class TestList:
    def test_growable(self):
        result = to_collection("1,2", CollectionKind.LIST, FieldType.scalar(int))
        assert result == [1, 2]
        assert isinstance(result, list)

    def test_dropped_elements_shrink(self):
        assert to_collection("1,x,3,y", CollectionKind.LIST, FieldType.scalar(float)) == [1.0, 3.0]

    def test_numeric_enum_elements(self):
        assert to_collection("3 low", CollectionKind.LIST, FieldType.enumeration(Level)) == [
            Level.HIGH,
            Level.LOW,
        ]
