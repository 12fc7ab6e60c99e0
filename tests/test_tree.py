from __future__ import annotations

from huffcodec.core.frequency import FrequencyTable, count_frequencies
from huffcodec.core.tree import Internal, Leaf, build_code_tree, iter_leaves, tree_depth


def test_empty_table_gives_no_tree() -> None:
    assert build_code_tree(FrequencyTable()) is None
    assert list(iter_leaves(None)) == []
    assert tree_depth(None) == 0


def test_single_symbol_is_wrapped_on_the_left() -> None:
    root = build_code_tree(FrequencyTable({"a": 5}))
    assert isinstance(root, Internal)
    assert root.left == Leaf("a", 5)
    assert root.right is None
    assert root.weight == 5
    assert tree_depth(root) == 1


def test_merge_order_with_ties() -> None:
    root = build_code_tree(FrequencyTable({"a": 4, "b": 2, "c": 1, "d": 1}))
    # (c,d) -> 2 ; (b,(c,d)) -> 4 ; (a,(b,(c,d))) -> 8
    assert root == Internal(
        8,
        Leaf("a", 4),
        Internal(4, Leaf("b", 2), Internal(2, Leaf("c", 1), Leaf("d", 1))),
    )


def test_weight_conservation() -> None:
    table = count_frequencies("she sells sea shells by the sea shore")
    root = build_code_tree(table)
    assert root is not None
    leaves = list(iter_leaves(root))
    assert root.weight == sum(leaf.weight for leaf in leaves) == table.total
    assert {leaf.symbol for leaf in leaves} == set(table)


def test_insertion_order_does_not_change_tree() -> None:
    t1 = FrequencyTable({"x": 3, "y": 3, "z": 3, "w": 1})
    t2 = FrequencyTable({"w": 1, "z": 3, "y": 3, "x": 3})
    assert build_code_tree(t1) == build_code_tree(t2)


def test_every_internal_node_has_two_children() -> None:
    root = build_code_tree(count_frequencies(bytes(range(37)) * 2 + b"abc"))
    stack = [root]
    while stack:
        node = stack.pop()
        if isinstance(node, Internal):
            assert node.right is not None
            assert node.weight == node.left.weight + node.right.weight
            stack.extend([node.left, node.right])


def test_zero_count_symbol_gets_no_leaf() -> None:
    root = build_code_tree(FrequencyTable({"a": 0, "b": 3}))
    assert isinstance(root, Internal)
    assert root.left == Leaf("b", 3)
    assert root.right is None
