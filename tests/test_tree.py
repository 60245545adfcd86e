from __future__ import annotations

import pytest

from fpmine import FPTree
from fpmine.tree import ROOT


@pytest.fixture
def textbook_tree(textbook_transactions) -> FPTree:
    return FPTree.build(textbook_transactions, 2)


def test_header_totals_match_node_link_chains(textbook_tree) -> None:
    expected = {"a": 8, "c": 8, "e": 8, "g": 5, "b": 2, "f": 2, "d": 2}
    assert set(textbook_tree.header) == set(expected)
    for item, total in expected.items():
        chain = list(textbook_tree.nodes(item))
        assert textbook_tree.item_count(item) == total
        assert sum(textbook_tree.node_support(node) for node in chain) == total
        assert all(textbook_tree.node_item(node) == item for node in chain)


def test_infrequent_items_are_not_in_the_tree(textbook_tree) -> None:
    assert "h" not in textbook_tree.header
    assert "i" not in textbook_tree.header
    assert list(textbook_tree.nodes("h")) == []
    assert textbook_tree.item_count("h") == 0


def test_shared_prefixes(textbook_tree) -> None:
    root_children = textbook_tree.children(ROOT)
    assert sorted(root_children) == ["a", "e"]
    a = root_children["a"]
    assert textbook_tree.node_support(a) == 8
    c = textbook_tree.children(a)["c"]
    assert textbook_tree.node_support(c) == 8
    assert sorted(textbook_tree.children(c)) == ["d", "e", "g"]
    assert textbook_tree.node_support(root_children["e"]) == 2
    assert textbook_tree.node_count == 10


def test_children_have_distinct_items(textbook_tree) -> None:
    for node in range(textbook_tree.node_count + 1):
        items = [textbook_tree.node_item(child) for child in textbook_tree.children(node).values()]
        assert len(items) == len(set(items))


def test_conditional_pattern_base(textbook_tree) -> None:
    assert textbook_tree.conditional_pattern_base("g") == [(["a", "c"], 1), (["a", "c", "e"], 4)]
    assert textbook_tree.conditional_pattern_base("d") == [(["a", "c", "e", "g"], 1), (["a", "c"], 1)]
    assert textbook_tree.conditional_pattern_base("e") == [(["a", "c"], 6), ([], 2)]
    assert textbook_tree.conditional_pattern_base("missing") == []


def test_conditional_tree_is_single_path(textbook_tree) -> None:
    conditional = textbook_tree.conditional_tree("g", 2)
    assert conditional.is_single_path()
    assert conditional.single_path() == [("a", 5), ("c", 5), ("e", 4)]


def test_conditional_tree_prunes_below_support(textbook_tree) -> None:
    conditional = textbook_tree.conditional_tree("d", 2)
    assert conditional.single_path() == [("a", 2), ("c", 2)]
    assert conditional.is_empty() is False
    assert textbook_tree.conditional_tree("f", 3).is_empty()


def test_single_path_detection(textbook_tree) -> None:
    assert not textbook_tree.is_single_path()
    assert FPTree().is_single_path()
    assert FPTree().single_path() == []


def test_items_ascending(textbook_tree) -> None:
    assert textbook_tree.items_ascending() == ["f", "d", "b", "g", "e", "c", "a"]


def test_weighted_build() -> None:
    tree = FPTree.build([["x", "y"], ["y"]], 2, weights=[3, 1])
    assert tree.item_count("y") == 4
    assert tree.item_count("x") == 3
    assert tree.single_path() == [("y", 4), ("x", 3)]


def test_weights_must_match_transactions() -> None:
    with pytest.raises(ValueError, match="weights"):
        FPTree.build([["x"]], 1, weights=[1, 2])


def test_prefix_path(textbook_tree) -> None:
    (deep_d, shallow_d) = list(textbook_tree.nodes("d"))
    assert textbook_tree.prefix_path(deep_d) == ["a", "c", "e", "g"]
    assert textbook_tree.prefix_path(shallow_d) == ["a", "c"]
    assert textbook_tree.prefix_path(ROOT) == []


def test_render(textbook_tree) -> None:
    text = textbook_tree.render()
    assert text.startswith("Tree:")
    assert "<'a' 8>" in text
    assert "Header:" in text
    assert "'e': 8 [6, 2]" in text


def test_empty_build() -> None:
    tree = FPTree.build([], 1)
    assert tree.is_empty()
    assert repr(tree) == "FPTree(items=0, nodes=0)"


def test_build_reports_pruned_transactions(textbook_transactions) -> None:
    pruned: set[frozenset] = set()
    FPTree.build(textbook_transactions, 2, pruned=pruned)
    assert pruned == {frozenset("abcefh"), frozenset("i")}

    pruned.clear()
    FPTree.build([["x", "x"], ["y"]], 3, pruned=pruned)
    assert pruned == {frozenset("x"), frozenset("y")}
