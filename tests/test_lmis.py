import time
import unittest

from solvers.constants import DEFAULT_SEQUENCE, MAX_TREE_NODES, ROOT_ID, ROOT_INDEX
from solvers.lmis import (
    TreeTooLargeError,
    best_lengths,
    build_lmis_tree,
    count_tree_nodes,
    iter_nodes,
    parse_sequence,
)


def _lis_length(seq: list[int]) -> int:
    """Textbook O(n^2) LIS length, ending-at-index formulation."""
    ending = [1] * len(seq)
    for i in range(len(seq)):
        for j in range(i):
            if seq[j] < seq[i]:
                ending[i] = max(ending[i], ending[j] + 1)
    return max(ending, default=0)


class TestBestLengths(unittest.TestCase):
    def test_default_sequence(self):
        self.assertEqual(best_lengths(list(DEFAULT_SEQUENCE)), [4, 4, 1, 3, 4, 3, 2, 1, 1])

    def test_strictness(self):
        self.assertEqual(best_lengths([2, 2, 2]), [1, 1, 1])

    def test_empty(self):
        self.assertEqual(best_lengths([]), [])


class TestBuildTree(unittest.TestCase):
    def test_default_sequence_chain(self):
        seq = list(DEFAULT_SEQUENCE)
        tree = build_lmis_tree(seq)
        self.assertEqual(tree.overall_max, _lis_length(seq))
        self.assertEqual(tree.overall_max, 4)
        self.assertEqual(len(tree.longest_chain), tree.overall_max)
        values = tree.chain_values()
        self.assertEqual(values, [4, 7, 8, 11])
        self.assertTrue(all(a < b for a, b in zip(values, values[1:])))
        self.assertEqual([n.index for n in tree.chain_nodes()], [0, 3, 6, 7])
        self.assertEqual([n.id for n in tree.chain_nodes()], tree.longest_chain)

    def test_root_has_one_child_per_index(self):
        for seq in ([5, 3, 9], list(DEFAULT_SEQUENCE), [7, 6, 5, 4]):
            with self.subTest(seq=seq):
                tree = build_lmis_tree(seq)
                self.assertEqual(tree.root.id, ROOT_ID)
                self.assertEqual(tree.root.index, ROOT_INDEX)
                self.assertIsNone(tree.root.value)
                self.assertFalse(tree.root.on_longest_chain)
                self.assertEqual([c.index for c in tree.root.children], list(range(len(seq))))

    def test_children_strictly_greater(self):
        seq = list(DEFAULT_SEQUENCE)
        tree = build_lmis_tree(seq)
        for node in iter_nodes(tree.root):
            if node.is_root:
                continue
            self.assertEqual(node.value, seq[node.index])
            indices = [c.index for c in node.children]
            self.assertEqual(indices, sorted(indices))
            for child in node.children:
                self.assertGreater(child.index, node.index)
                self.assertGreater(child.value, node.value)

    def test_marked_node_count_equals_overall_max(self):
        for seq in ([3, 1, 2], list(DEFAULT_SEQUENCE), [1, 5, 2, 6, 3, 7]):
            with self.subTest(seq=seq):
                tree = build_lmis_tree(seq)
                marked = [n for n in iter_nodes(tree.root) if n.on_longest_chain]
                self.assertEqual(len(marked), tree.overall_max)
                self.assertEqual(tree.overall_max, _lis_length(seq))

    def test_idempotent(self):
        first = build_lmis_tree(list(DEFAULT_SEQUENCE))
        second = build_lmis_tree(list(DEFAULT_SEQUENCE))
        self.assertEqual(first.root.to_dict(), second.root.to_dict())
        self.assertEqual(first.longest_chain, second.longest_chain)

    def test_increasing_three(self):
        tree = build_lmis_tree([1, 2, 3])
        root = tree.root
        self.assertEqual([c.index for c in root.children], [0, 1, 2])
        self.assertEqual([c.index for c in root.children[0].children], [1, 2])
        self.assertEqual(tree.overall_max, 3)
        self.assertEqual([n.index for n in tree.chain_nodes()], [0, 1, 2])
        # 2^3 - 1 non-root nodes: the same index is re-created per branch.
        self.assertEqual(sum(1 for _ in iter_nodes(root)) - 1, 7)
        index_two = [n for n in iter_nodes(root) if n.index == 2]
        self.assertEqual(len(index_two), 4)
        self.assertEqual(len({n.id for n in index_two}), 4)

    def test_single_element(self):
        tree = build_lmis_tree([42])
        self.assertEqual(len(tree.root.children), 1)
        self.assertTrue(tree.root.children[0].on_longest_chain)
        self.assertEqual(tree.overall_max, 1)

    def test_empty_sequence(self):
        tree = build_lmis_tree([])
        self.assertEqual(tree.root.children, [])
        self.assertEqual(tree.overall_max, 0)
        self.assertEqual(tree.longest_chain, [])

    def test_first_match_tie_break(self):
        # Both 1 and 0 start a chain of length 2; index 0 wins.
        tree = build_lmis_tree([1, 0, 5])
        self.assertEqual(tree.chain_values(), [1, 5])

    def test_ids_unique(self):
        tree = build_lmis_tree(list(DEFAULT_SEQUENCE))
        ids = [n.id for n in iter_nodes(tree.root)]
        self.assertEqual(len(ids), len(set(ids)))
        for node in iter_nodes(tree.root):
            if not node.is_root:
                self.assertTrue(node.id.startswith(f"node-{node.index}-"))


class TestNodeGuard(unittest.TestCase):
    def test_count_matches_built_tree(self):
        for seq in ([], [1, 2, 3], list(DEFAULT_SEQUENCE), [9, 1, 8, 2, 7, 3], [2, 2, 3, 1, 3]):
            with self.subTest(seq=seq):
                tree = build_lmis_tree(seq)
                walked = sum(1 for _ in iter_nodes(tree.root))
                self.assertEqual(count_tree_nodes(seq), walked)
                self.assertEqual(tree.node_count, walked)

    def test_increasing_sequence_count(self):
        self.assertEqual(count_tree_nodes(list(range(10))), 2 ** 10)
        self.assertEqual(count_tree_nodes(list(range(10, 0, -1))), 11)

    def test_count_stops_above_limit(self):
        count = count_tree_nodes(list(range(40)), limit=1_000)
        self.assertGreater(count, 1_000)
        self.assertLess(count, 2 ** 40)
        self.assertEqual(count_tree_nodes(list(range(10)), limit=2 ** 10), 2 ** 10)

    def test_long_input_rejected_quickly(self):
        start = time.monotonic()
        count = count_tree_nodes(list(range(200_000, 0, -1)), limit=MAX_TREE_NODES)
        self.assertGreater(count, MAX_TREE_NODES)
        with self.assertRaises(TreeTooLargeError):
            build_lmis_tree(list(range(60_000, 0, -1)))
        self.assertLess(time.monotonic() - start, 1.0)

    def test_long_descending_count_is_fast(self):
        start = time.monotonic()
        self.assertEqual(count_tree_nodes(list(range(20_000, 0, -1))), 20_001)
        self.assertLess(time.monotonic() - start, 2.0)

    def test_too_large_rejected(self):
        with self.assertRaises(TreeTooLargeError) as ctx:
            build_lmis_tree(list(range(20)))
        self.assertIsInstance(ctx.exception, ValueError)
        self.assertGreater(ctx.exception.node_count, MAX_TREE_NODES)
        self.assertEqual(ctx.exception.max_nodes, MAX_TREE_NODES)

    def test_custom_cap(self):
        with self.assertRaises(TreeTooLargeError):
            build_lmis_tree([1, 2, 3], max_nodes=7)
        self.assertEqual(build_lmis_tree([1, 2, 3], max_nodes=8).overall_max, 3)

    def test_cap_disabled(self):
        tree = build_lmis_tree(list(range(12)), max_nodes=None)
        self.assertEqual(tree.overall_max, 12)


class TestParseSequence(unittest.TestCase):
    def test_default_text(self):
        self.assertEqual(parse_sequence("4, 1, 13, 7, 0, 2, 8, 11, 3"), list(DEFAULT_SEQUENCE))

    def test_leading_integer_taken_and_junk_dropped(self):
        self.assertEqual(parse_sequence("4, 1, x, 13abc, -2, 1.5, "), [4, 1, 13, -2, 1])

    def test_empty(self):
        self.assertEqual(parse_sequence(""), [])
        self.assertEqual(parse_sequence("a, b"), [])


if __name__ == "__main__":
    unittest.main()
