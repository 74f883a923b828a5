"""Tests for edit-distance matching and closest-name resolution."""

import pytest

from argbind_engines.matching import UNMATCHABLE, closest_word, resolve, word_distance


class TestWordDistance:
    def test_identical_is_zero(self):
        assert word_distance("iterations", "iterations") == 0

    def test_case_insensitive_equality_is_zero(self):
        assert word_distance("Iterations", "iTERATIONS") == 0

    def test_single_edits(self):
        assert word_distance("itterations", "iterations") == 1  # insertion
        assert word_distance("iteration", "iterations") == 1  # deletion
        assert word_distance("iterbtions", "iterations") == 1  # substitution

    def test_classic_examples(self):
        assert word_distance("kitten", "sitting") == 3
        assert word_distance("flaw", "lawn") == 2
        assert word_distance("abc", "xyz") == 3

    def test_completely_different_lengths(self):
        assert word_distance("a", "abcd") == 3

    def test_empty_is_unmatchable(self):
        assert word_distance("", "abc") == UNMATCHABLE
        assert word_distance("abc", "") == UNMATCHABLE

    def test_two_empty_names_are_equal(self):
        assert word_distance("", "") == 0

    def test_symmetric(self):
        assert word_distance("output", "outptu") == word_distance("outptu", "output")


class TestClosestWord:
    NAMES = ("iterations", "output", "inputs", "time", "script")

    def test_exact_match(self):
        result = closest_word("output", self.NAMES, 2)
        assert result.name == "output"
        assert result.distance == 0
        assert result.matched

    def test_typo_within_ceiling(self):
        result = closest_word("itterations", self.NAMES, 2)
        assert result.name == "iterations"
        assert result.distance == 1

    def test_typo_beyond_ceiling(self):
        result = closest_word("itterations", self.NAMES, 0)
        assert result.name is None
        assert not result.matched

    def test_zero_ceiling_accepts_case_insensitive_equality(self):
        assert closest_word("OUTPUT", self.NAMES, 0).name == "output"

    def test_exact_match_wins_over_earlier_close_candidate(self):
        # "time" is distance 1 from "tima"; the exact candidate comes later.
        assert closest_word("tima", ("time", "tima"), 2).name == "tima"

    def test_ties_go_to_later_candidate(self):
        # "cat" is distance 1 from both.
        assert closest_word("cat", ("bat", "hat"), 2).name == "hat"
        assert closest_word("cat", ("hat", "bat"), 2).name == "bat"

    def test_closer_later_candidate_tightens_bound(self):
        result = closest_word("abcd", ("abxy", "abcx", "zzzz"), 3)
        assert result.name == "abcx"
        assert result.distance == 1

    def test_farther_later_candidate_does_not_replace(self):
        assert closest_word("abcd", ("abcx", "abxy"), 3).name == "abcx"

    def test_no_candidates(self):
        assert closest_word("abc", (), 2).name is None

    def test_empty_candidate_never_selected(self):
        assert closest_word("ab", ("",), 1000).name is None

    def test_negative_ceiling_rejected(self):
        with pytest.raises(ValueError):
            closest_word("abc", ("abc",), -1)


class TestResolve:
    def test_returns_name_or_none(self):
        assert resolve("scirpt", ["script"], 2) == "script"
        assert resolve("zzz", ["script"], 2) is None
