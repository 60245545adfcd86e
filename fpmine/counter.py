"""Item counting and the canonical item order used by the FP-tree builder."""

from __future__ import annotations

import numbers
from collections import Counter
from collections.abc import Callable, Hashable, Iterable, Sequence
from typing import Any

from ._errors import InvalidInputError


def check_min_support(minimum_support: Any) -> int:
    """Return *minimum_support* as an ``int`` or raise :class:`InvalidInputError`."""
    if isinstance(minimum_support, bool) or not isinstance(minimum_support, numbers.Integral):
        raise InvalidInputError(
            f"`minimum_support` must be an integer transaction count >= 1. Got {minimum_support!r}."
        )
    if minimum_support < 1:
        raise InvalidInputError(f"`minimum_support` must be >= 1. Got {minimum_support}.")
    return int(minimum_support)


def dedupe(transaction: Iterable[Hashable]) -> list[Any]:
    """Drop repeated items, keeping the first occurrence of each."""
    return list(dict.fromkeys(transaction))


def count_items(
    transactions: Iterable[Sequence[Hashable]],
    weights: Iterable[int] | None = None,
) -> Counter:
    """Count in how many transactions each item occurs.

    Repeated items inside one transaction are counted once.  When *weights*
    is given, each transaction contributes its weight instead of ``1``.
    """
    counts: Counter = Counter()
    if weights is None:
        for transaction in transactions:
            counts.update(set(transaction))
    else:
        for transaction, weight in zip(transactions, weights):
            for item in dict.fromkeys(transaction):
                counts[item] += weight
    return counts


def frequent_items(counts: Counter, minimum_support: int) -> dict[Any, int]:
    """Keep the items whose count reaches *minimum_support*."""
    return {item: count for item, count in counts.items() if count >= minimum_support}


def order_key(counts: dict[Any, int]) -> Callable[[Any], tuple[int, Any]]:
    # Descending count; equal counts fall back to the items' own ordering.
    return lambda item: (-counts[item], item)


def sort_transaction(transaction: Iterable[Hashable], counts: dict[Any, int]) -> list[Any]:
    """Filter, deduplicate and order one transaction for insertion into a tree."""
    kept = [item for item in dict.fromkeys(transaction) if item in counts]
    kept.sort(key=order_key(counts))
    return kept
