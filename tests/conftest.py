"""pytest configuration and shared fixtures."""

from __future__ import annotations

import os
import sys

import pytest

# Ensure tests/ dir is on path so test_fpbase imports work
sys.path.insert(0, os.path.dirname(__file__))


# ---------------------------------------------------------------------------
# Textbook example: 11 transactions over items a..i, with repeated items
# ---------------------------------------------------------------------------

TEXTBOOK = [
    ["e", "c", "a", "b", "f", "h"],
    ["a", "c", "g"],
    ["e"],
    ["e", "c", "a", "g", "d"],
    ["a", "c", "e", "g"],
    ["e"],
    ["a", "c", "e", "b", "f"],
    ["a", "c", "d"],
    ["g", "c", "e", "a"],
    ["a", "c", "e", "g"],
    ["i"],
]


@pytest.fixture
def textbook_transactions() -> list[list[str]]:
    return [list(t) for t in TEXTBOOK]


def brute_force_patterns(transactions: list[list], minimum_support: int) -> dict[frozenset, int]:
    """Enumerate every itemset of every transaction and count it directly."""
    from itertools import combinations

    baskets = [frozenset(t) for t in transactions]
    candidates: set[frozenset] = set()
    for basket in baskets:
        items = sorted(basket)
        for size in range(1, len(items) + 1):
            candidates.update(frozenset(c) for c in combinations(items, size))

    patterns = {}
    for candidate in candidates:
        support = sum(1 for basket in baskets if candidate <= basket)
        if support >= minimum_support:
            patterns[candidate] = support
    return patterns
