"""FP-tree: a prefix tree over frequency-ordered transactions.

Nodes are stored in an arena of parallel lists and addressed by integer
handles.  Handle ``0`` is the synthetic root, which carries no item.  Each
node keeps the handle of its parent, a mapping from item to child handle,
and the handle of the next node holding the same item (``-1`` ends the
chain).  The header table maps every item to its total count in the tree
and to the first and last node of its chain.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable, Iterator, Sequence
from types import MappingProxyType
from typing import Any

from .counter import count_items, dedupe, frequent_items, order_key, sort_transaction

logger = logging.getLogger(__name__)

ROOT = 0
NO_NODE = -1


class HeaderEntry:
    """Total count of an item in one tree plus the ends of its node-link chain."""

    __slots__ = ("count", "head", "tail")

    def __init__(self, head: int) -> None:
        self.count = 0
        self.head = head
        self.tail = head

    def __repr__(self) -> str:
        return f"HeaderEntry(count={self.count}, head={self.head}, tail={self.tail})"


class FPTree:
    """Prefix tree with a per-item header table.

    Parameters
    ----------
    item_counts:
        Frequencies of the items allowed in this tree.  They define the
        insertion order (descending count, ties by item order) used by
        :meth:`build`; :meth:`insert` trusts the caller's ordering.
    """

    def __init__(self, item_counts: dict[Any, int] | None = None) -> None:
        self.item_counts: dict[Any, int] = dict(item_counts or {})
        self._items: list[Any] = [None]
        self._counts: list[int] = [0]
        self._parents: list[int] = [NO_NODE]
        self._children: list[dict[Any, int]] = [{}]
        self._links: list[int] = [NO_NODE]
        self._header: dict[Any, HeaderEntry] = {}

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def build(
        cls,
        transactions: Iterable[Sequence[Hashable]],
        minimum_support: int,
        weights: Iterable[int] | None = None,
        pruned: set[frozenset] | None = None,
    ) -> FPTree:
        """Count items, prune those below *minimum_support* and insert every transaction.

        *weights* gives the number of transactions each entry stands for; it
        is ``1`` for raw input and the carried count for conditional pattern
        bases.  When a *pruned* set is passed, every transaction that lost at
        least one item is added to it (deduplicated, as a ``frozenset``).
        """
        transactions = [list(t) for t in transactions]
        weights = [1] * len(transactions) if weights is None else list(weights)
        if len(weights) != len(transactions):
            raise ValueError(
                f"Got {len(weights)} weights for {len(transactions)} transactions."
            )

        counts = frequent_items(count_items(transactions, weights), minimum_support)
        tree = cls(counts)
        for transaction, weight in zip(transactions, weights):
            ordered = sort_transaction(transaction, counts)
            if pruned is not None:
                unique = dedupe(transaction)
                if len(ordered) != len(unique):
                    pruned.add(frozenset(unique))
            if ordered:
                tree.insert(ordered, weight)
        return tree

    def insert(self, items: Sequence[Hashable], weight: int = 1) -> None:
        """Insert one already-ordered transaction, adding *weight* along its path."""
        node = ROOT
        for item in items:
            child = self._children[node].get(item)
            if child is None:
                child = self._new_node(item, node)
            self._counts[child] += weight
            self._header[item].count += weight
            node = child

    def _new_node(self, item: Hashable, parent: int) -> int:
        handle = len(self._items)
        self._items.append(item)
        self._counts.append(0)
        self._parents.append(parent)
        self._children.append({})
        self._links.append(NO_NODE)
        self._children[parent][item] = handle

        entry = self._header.get(item)
        if entry is None:
            self._header[item] = HeaderEntry(handle)
        else:
            self._links[entry.tail] = handle
            entry.tail = handle
        return handle

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def header(self) -> MappingProxyType:
        return MappingProxyType(self._header)

    @property
    def node_count(self) -> int:
        """Number of nodes, not counting the root."""
        return len(self._items) - 1

    def is_empty(self) -> bool:
        return self.node_count == 0

    def item_count(self, item: Hashable) -> int:
        entry = self._header.get(item)
        return 0 if entry is None else entry.count

    def node_item(self, node: int) -> Any:
        return self._items[node]

    def node_support(self, node: int) -> int:
        return self._counts[node]

    def parent(self, node: int) -> int:
        return self._parents[node]

    def children(self, node: int) -> dict[Any, int]:
        return dict(self._children[node])

    def nodes(self, item: Hashable) -> Iterator[int]:
        """Iterate the node-link chain of *item*."""
        entry = self._header.get(item)
        node = NO_NODE if entry is None else entry.head
        while node != NO_NODE:
            yield node
            node = self._links[node]

    def items_ascending(self) -> list[Any]:
        """Header items from least to most frequent (ties by reverse item order)."""
        totals = {item: entry.count for item, entry in self._header.items()}
        return sorted(totals, key=order_key(totals), reverse=True)

    def is_single_path(self) -> bool:
        return all(len(children) <= 1 for children in self._children)

    def single_path(self) -> list[tuple[Any, int]]:
        """``(item, count)`` pairs from the root down; only valid for single-path trees."""
        path = []
        children = self._children[ROOT]
        while children:
            (node,) = children.values()
            path.append((self._items[node], self._counts[node]))
            children = self._children[node]
        return path

    # ------------------------------------------------------------------
    # Conditional pattern bases
    # ------------------------------------------------------------------

    def prefix_path(self, node: int) -> list[Any]:
        """Items from the root down to *node*, excluding the root and *node* itself."""
        path = []
        parent = self._parents[node]
        while parent != ROOT and parent != NO_NODE:
            path.append(self._items[parent])
            parent = self._parents[parent]
        path.reverse()
        return path

    def conditional_pattern_base(self, item: Hashable) -> list[tuple[list[Any], int]]:
        """One ``(prefix_path, count)`` pair per occurrence of *item* in the tree."""
        return [(self.prefix_path(node), self._counts[node]) for node in self.nodes(item)]

    def conditional_tree(self, item: Hashable, minimum_support: int) -> FPTree:
        """Build the FP-tree of *item*'s conditional pattern base."""
        base = self.conditional_pattern_base(item)
        tree = FPTree.build(
            (path for path, _ in base),
            minimum_support,
            weights=[count for _, count in base],
        )
        logger.debug(
            "conditional tree for %r: %d paths, %d nodes", item, len(base), tree.node_count
        )
        return tree

    # ------------------------------------------------------------------
    # Debug output
    # ------------------------------------------------------------------

    def render(self) -> str:
        """Indented text dump of the tree followed by the header table."""
        lines = ["Tree:", " <(root)>"]
        stack = [(child, 2) for child in reversed(list(self._children[ROOT].values()))]
        while stack:
            node, depth = stack.pop()
            lines.append(f"{' ' * depth}<{self._items[node]!r} {self._counts[node]}>")
            stack.extend((child, depth + 1) for child in reversed(list(self._children[node].values())))
        lines.append("Header:")
        for item in reversed(self.items_ascending()):
            chain = ", ".join(str(self._counts[node]) for node in self.nodes(item))
            lines.append(f" {item!r}: {self._header[item].count} [{chain}]")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"FPTree(items={len(self._header)}, nodes={self.node_count})"
