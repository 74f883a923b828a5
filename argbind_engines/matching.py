"""
argbind_engines.matching -- Edit-distance key matching.

Responsibility:
    Score two names by Levenshtein distance and pick the closest of a
    candidate set under a distance ceiling.

Architecture position:
    Engines -- pure calculation layer, zero I/O, no state.

Invariants enforced:
    - word_distance(a, a) == 0 and, for non-empty a and b,
      word_distance(a, b) == word_distance(b, a).
    - An empty name scores UNMATCHABLE, which exceeds every finite ceiling.
    - closest_word with max_distance=0 accepts case-insensitive equality only.
    - Equal-distance ties go to the later candidate in scan order.

Failure modes:
    - ValueError from closest_word on a negative max_distance.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable

from argbind_kernel.domain.types import MatchResult
from argbind_kernel.logging_config import get_logger

logger = get_logger("engines.matching")

# Score for an empty name; larger than any ceiling a caller can pass usefully.
UNMATCHABLE = sys.maxsize


def word_distance(a: str, b: str) -> int:
    """
    Levenshtein distance between ``a`` and ``b``.

    Case-insensitive equality short-circuits to 0, so two empty names are
    0 apart; otherwise an empty name is UNMATCHABLE. The table itself
    compares characters exactly, so callers lower-case names first.
    """
    if a.lower() == b.lower():
        return 0

    if not a or not b:
        return UNMATCHABLE

    # Two rolling rows of the (len(a)+1) x (len(b)+1) table.
    previous = list(range(len(b) + 1))
    for i in range(1, len(a) + 1):
        current = [i] + [0] * len(b)
        for j in range(1, len(b) + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            current[j] = min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + cost,
            )
        previous = current

    return previous[len(b)]


def closest_word(word: str, words: Iterable[str], max_distance: int) -> MatchResult:
    """
    Find the candidate nearest to ``word`` within ``max_distance``.

    Candidates are scanned in order. An exact match returns at once.
    Otherwise each candidate no farther than the best distance so far
    becomes the answer and tightens the bound, so a later candidate at
    the same distance replaces an earlier one.
    """
    if max_distance < 0:
        raise ValueError(f"max_distance must be >= 0, got {max_distance}")

    best = max_distance
    answer: str | None = None

    for entry in words:
        current = word_distance(word, entry)
        if current == 0:
            return MatchResult(name=entry, distance=0)
        if current == UNMATCHABLE or current > best:
            continue
        answer = entry
        best = current

    if answer is None:
        logger.debug("closest_word_no_match", extra={
            "word": word,
            "max_distance": max_distance,
        })
    return MatchResult(name=answer, distance=best)


def resolve(key: str, candidate_names: Iterable[str], max_distance: int) -> str | None:
    """Name of the closest candidate, or None."""
    return closest_word(key, candidate_names, max_distance).name
