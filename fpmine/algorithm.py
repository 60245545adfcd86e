"""FP-Growth frequent pattern mining over an :class:`~fpmine.tree.FPTree`.

:class:`FPGrowth` holds the transactions and the minimum support; calling
:meth:`FPGrowth.find_frequent_patterns` builds the root tree, mines it
recursively through conditional trees and returns an :class:`FPResult`.
"""

from __future__ import annotations

import logging
import numbers
import os
import time
from collections.abc import Hashable, Iterable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from concurrent.futures import TimeoutError as FuturesTimeoutError
from itertools import combinations
from typing import TYPE_CHECKING, Any

from ._errors import InvalidInputError, MiningTimeoutError
from .counter import check_min_support
from .tree import FPTree

if TYPE_CHECKING:
    import pandas as pd

logger = logging.getLogger(__name__)

_DEADLINE_STRIDE = 1024


class FPResult:
    """Frequent itemsets found by one mining pass.

    Parameters
    ----------
    frequent_patterns:
        Mapping from itemset to support count.
    elimination_sets:
        Distinct input transactions (deduplicated) that lost at least one
        item to support pruning.
    n_transactions:
        Number of input transactions.
    minimum_support:
        Threshold the patterns were mined with.
    """

    def __init__(
        self,
        frequent_patterns: dict[frozenset, int],
        elimination_sets: set[frozenset] | None = None,
        n_transactions: int = 0,
        minimum_support: int = 1,
    ) -> None:
        self.frequent_patterns = frequent_patterns
        self.elimination_sets = elimination_sets if elimination_sets is not None else set()
        self.n_transactions = n_transactions
        self.minimum_support = minimum_support

    def frequent_patterns_num(self) -> int:
        return len(self.frequent_patterns)

    def elimination_sets_num(self) -> int:
        return len(self.elimination_sets)

    def items(self) -> Iterator[tuple[frozenset, int]]:
        return iter(self.frequent_patterns.items())

    def support(self, itemset: Iterable[Hashable]) -> int:
        """Support count of *itemset*, ``0`` when it is not frequent."""
        return self.frequent_patterns.get(frozenset(itemset), 0)

    def to_frame(self, use_fraction: bool = True) -> pd.DataFrame:
        """Return the patterns as a ``support`` / ``itemsets`` DataFrame.

        ``support`` is the fraction of transactions when *use_fraction* is
        true and the raw count otherwise.  Each itemset is a sorted list.
        """
        from ._core import build_result

        itemsets = [sorted(itemset) for itemset in self.frequent_patterns]
        counts = list(self.frequent_patterns.values())
        return build_result(
            itemsets,
            counts,
            self.n_transactions if use_fraction else 1,
        )

    def __len__(self) -> int:
        return len(self.frequent_patterns)

    def __contains__(self, itemset: Iterable[Hashable]) -> bool:
        return frozenset(itemset) in self.frequent_patterns

    def __getitem__(self, itemset: Iterable[Hashable]) -> int:
        return self.frequent_patterns[frozenset(itemset)]

    def __repr__(self) -> str:
        return (
            f"FPResult(frequent_patterns={len(self.frequent_patterns)}, "
            f"elimination_sets={len(self.elimination_sets)}, "
            f"n_transactions={self.n_transactions}, "
            f"minimum_support={self.minimum_support})"
        )


class FPGrowth:
    """FP-Growth miner for an in-memory list of transactions.

    Parameters
    ----------
    transactions:
        Sequence of transactions; each is a sequence of hashable, mutually
        comparable items.  Repeated items inside one transaction count once.
    minimum_support:
        Minimum number of transactions an itemset must occur in (``>= 1``).
    max_len:
        Maximum length of the itemsets to return.  ``None`` means no limit.
    n_jobs:
        Number of worker threads used to mine the top-level items.  ``1``
        mines sequentially, ``-1`` uses one worker per CPU.
    timeout:
        Seconds the whole mining pass may take.  ``None`` means no limit.

    Examples
    --------
    >>> result = FPGrowth([["a", "b"], ["a", "c"], ["a", "b", "c"]], 2).find_frequent_patterns()
    >>> result[{"a", "b"}]
    2
    """

    def __init__(
        self,
        transactions: Iterable[Sequence[Hashable]],
        minimum_support: int,
        max_len: int | None = None,
        n_jobs: int = 1,
        timeout: float | None = None,
    ) -> None:
        self.minimum_support = check_min_support(minimum_support)
        if max_len is not None and (not isinstance(max_len, numbers.Integral) or max_len < 1):
            raise InvalidInputError(f"`max_len` must be a positive integer or None. Got {max_len!r}.")
        if not isinstance(n_jobs, numbers.Integral) or (n_jobs < 1 and n_jobs != -1):
            raise InvalidInputError(f"`n_jobs` must be a positive integer or -1. Got {n_jobs!r}.")
        if timeout is not None and (
            isinstance(timeout, bool) or not isinstance(timeout, numbers.Real) or not timeout > 0
        ):
            raise InvalidInputError(f"`timeout` must be a positive number of seconds. Got {timeout!r}.")

        self.transactions = [list(transaction) for transaction in transactions]
        self.max_len = max_len
        self.n_jobs = n_jobs
        self.timeout = timeout

    def find_frequent_patterns(self) -> FPResult:
        """Mine every itemset whose support reaches ``minimum_support``."""
        t0 = time.perf_counter()
        deadline = self._deadline()
        eliminated: set[frozenset] = set()
        tree = FPTree.build(self.transactions, self.minimum_support, pruned=eliminated)
        logger.debug(
            "root tree built from %d transactions: %d items, %d nodes (%.3fs)",
            len(self.transactions),
            len(tree.header),
            tree.node_count,
            time.perf_counter() - t0,
        )

        if self.n_jobs == 1 or tree.is_single_path():
            patterns = self._mine_tree(tree, frozenset(), deadline)
        else:
            patterns = self._mine_parallel(tree, deadline)

        logger.debug(
            "found %d frequent itemsets in %.3fs", len(patterns), time.perf_counter() - t0
        )
        return FPResult(patterns, eliminated, len(self.transactions), self.minimum_support)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _deadline(self) -> float | None:
        return None if self.timeout is None else time.monotonic() + self.timeout

    def _check_deadline(self, deadline: float | None) -> None:
        if deadline is not None and time.monotonic() > deadline:
            raise MiningTimeoutError(f"Mining did not finish within {self.timeout} seconds.")

    def _room_for(self, itemset: frozenset) -> bool:
        return self.max_len is None or len(itemset) < self.max_len

    def _mine_tree(
        self, tree: FPTree, suffix: frozenset, deadline: float | None = None
    ) -> dict[frozenset, int]:
        if tree.is_single_path():
            return self._mine_single_path(tree.single_path(), suffix, deadline)

        patterns: dict[frozenset, int] = {}
        for item in tree.items_ascending():
            self._check_deadline(deadline)
            patterns.update(self._mine_item(tree, item, suffix, deadline))
        return patterns

    def _mine_item(
        self, tree: FPTree, item: Hashable, suffix: frozenset, deadline: float | None = None
    ) -> dict[frozenset, int]:
        itemset = suffix | {item}
        patterns = {itemset: tree.item_count(item)}
        if self._room_for(itemset):
            conditional = tree.conditional_tree(item, self.minimum_support)
            if not conditional.is_empty():
                patterns.update(self._mine_tree(conditional, itemset, deadline))
        return patterns

    def _mine_single_path(
        self, path: list[tuple[Any, int]], suffix: frozenset, deadline: float | None = None
    ) -> dict[frozenset, int]:
        limit = len(path)
        if self.max_len is not None:
            limit = min(limit, self.max_len - len(suffix))
        if path:
            logger.debug("single path of %d items under suffix of %d", len(path), len(suffix))

        patterns: dict[frozenset, int] = {}
        for size in range(1, limit + 1):
            for n, combo in enumerate(combinations(path, size)):
                # A long path expands to 2**len(path) itemsets.
                if n % _DEADLINE_STRIDE == 0:
                    self._check_deadline(deadline)
                itemset = suffix.union(item for item, _ in combo)
                patterns[itemset] = min(count for _, count in combo)
        return patterns

    def _mine_parallel(self, tree: FPTree, deadline: float | None = None) -> dict[frozenset, int]:
        items = tree.items_ascending()
        max_workers = (os.cpu_count() or 1) if self.n_jobs == -1 else self.n_jobs
        max_workers = max(1, min(max_workers, len(items)))
        logger.debug("mining %d top-level items on %d threads", len(items), max_workers)

        patterns: dict[frozenset, int] = {}
        pool = ThreadPoolExecutor(max_workers=max_workers)
        try:
            futures = [pool.submit(self._mine_item, tree, item, frozenset(), deadline) for item in items]
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            for future in as_completed(futures, timeout=remaining):
                patterns.update(future.result())
        except FuturesTimeoutError as exc:
            raise MiningTimeoutError(f"Mining did not finish within {self.timeout} seconds.") from exc
        finally:
            # Running workers stop at their next deadline check.
            pool.shutdown(wait=True, cancel_futures=True)
        return patterns


def find_frequent_patterns(
    transactions: Iterable[Sequence[Hashable]],
    minimum_support: int,
    max_len: int | None = None,
    n_jobs: int = 1,
    timeout: float | None = None,
) -> dict[frozenset, int]:
    """Shorthand for ``FPGrowth(...).find_frequent_patterns().frequent_patterns``."""
    return FPGrowth(
        transactions, minimum_support, max_len=max_len, n_jobs=n_jobs, timeout=timeout
    ).find_frequent_patterns().frequent_patterns
