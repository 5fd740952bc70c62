"""
Recursion tree for the Longest Monotonically Increasing Subsequence (LMIS).

The tree materialises every call made by the naive recursive LIS solution:
a virtual root branches to every index of the sequence, and the node for
index i branches to every later index j whose value is strictly greater.
Nodes are never shared between branches. The same index appears as a
separate node under every ancestor path that reaches it, which is the point
of the visualisation, so the tree is exponential in the worst case: a
strictly increasing sequence of n values yields 2^n - 1 non-root nodes.
build_lmis_tree() counts the nodes first and refuses inputs above a cap.

One longest chain is then highlighted. best_lengths[i] is the length of the
longest increasing subsequence starting at index i. Walking down from the
root with a target of overall_max, the first child (in ascending index
order) whose best length equals the remaining target is marked and entered,
until the target reaches zero. Ties are broken by that scan order, so the
marked chain is deterministic but not necessarily the only longest one.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Iterator, Sequence

from solvers.constants import MAX_TREE_NODES, ROOT_ID, ROOT_INDEX

_log = logging.getLogger(__name__)

# parseInt-style token: optional sign and digits at the start of the token.
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


class TreeTooLargeError(ValueError):
    """Raised when a sequence would produce more tree nodes than allowed.

    node_count is the running total at the point counting stopped, which is
    already above max_nodes but may be below the full tree size.
    """

    def __init__(self, node_count: int, max_nodes: int) -> None:
        super().__init__(
            f"Recursion tree would have more than {max_nodes} nodes "
            f"(counted {node_count} before stopping); "
            f"use a shorter or less increasing sequence"
        )
        self.node_count = node_count
        self.max_nodes = max_nodes


@dataclass
class LmisNode:
    """
    One call in the recursion tree.

    Attributes:
        id:               Unique within one tree ("root" or "node-<index>-<n>").
        value:            sequence[index], or None for the virtual root.
        index:            Source index in the sequence, ROOT_INDEX for the root.
        children:         Owned child nodes in ascending index order.
        on_longest_chain: True for the nodes of the highlighted longest chain.
    """

    id: str
    value: int | None
    index: int
    children: list["LmisNode"] = field(default_factory=list)
    on_longest_chain: bool = False

    @property
    def is_root(self) -> bool:
        return self.index == ROOT_INDEX

    def fields(self) -> dict:
        """This node's own attributes, without children."""
        return {
            "id": self.id,
            "value": self.value,
            "index": self.index,
            "on_longest_chain": self.on_longest_chain,
        }

    def to_dict(self) -> dict:
        data = self.fields()
        data["children"] = [child.to_dict() for child in self.children]
        return data


@dataclass
class LmisTree:
    """Result of build_lmis_tree(): the tree plus the numbers used to mark it."""

    root: LmisNode
    sequence: list[int]
    best_lengths: list[int]
    overall_max: int
    longest_chain: list[str]
    node_count: int

    def chain_nodes(self) -> list[LmisNode]:
        """Marked nodes in root-to-leaf order."""
        nodes = []
        node = self.root
        while True:
            node = next((c for c in node.children if c.on_longest_chain), None)
            if node is None:
                return nodes
            nodes.append(node)

    def chain_values(self) -> list[int]:
        return [node.value for node in self.chain_nodes()]


def iter_nodes(node: LmisNode) -> Iterator[LmisNode]:
    """Pre-order traversal of a (sub)tree."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def parse_sequence(text: str) -> list[int]:
    """
    Parse a comma-delimited list of integers.

    Each token contributes its leading integer ("13abc" -> 13, " -2" -> -2,
    "1.5" -> 1). Tokens with no leading integer are dropped silently.
    """
    values = []
    for token in text.split(","):
        match = _INT_PREFIX.match(token)
        if match:
            values.append(int(match.group(1)))
    return values


def count_tree_nodes(sequence: Sequence[int], limit: int | None = None) -> int:
    """
    Node count of the recursion tree for `sequence`, root included.

    The subtree at index i has one node for i plus the subtrees of every
    later, strictly greater index. Scanning right to left, a Fenwick tree
    keyed by value rank sums the subtrees of the greater values already seen,
    so the count takes O(n log n).

    With `limit`, counting stops as soon as the total passes it and the
    partial total (already above `limit`) is returned. A tree always has at
    least len(sequence) + 1 nodes, so overlong input returns at once.
    """
    n = len(sequence)
    if limit is not None and n + 1 > limit:
        return n + 1

    ranks = {value: rank for rank, value in enumerate(sorted(set(sequence)), start=1)}
    size = len(ranks)
    fenwick = [0] * (size + 1)

    def _prefix(rank: int) -> int:
        total = 0
        while rank > 0:
            total += fenwick[rank]
            rank -= rank & -rank
        return total

    seen = 0
    total = 1
    for value in reversed(sequence):
        rank = ranks[value]
        subtree = 1 + seen - _prefix(rank)
        seen += subtree
        total += subtree
        if limit is not None and total > limit:
            return total
        while rank <= size:
            fenwick[rank] += subtree
            rank += rank & -rank
    return total


def best_lengths(sequence: Sequence[int]) -> list[int]:
    """
    Length of the longest strictly increasing subsequence starting at each index.

    Top-down memoised recursion over indices: each index is computed once.
    """
    memo: dict[int, int] = {}

    def _best(i: int) -> int:
        if i in memo:
            return memo[i]
        length = 1
        for j in range(i + 1, len(sequence)):
            if sequence[j] > sequence[i]:
                length = max(length, 1 + _best(j))
        memo[i] = length
        return length

    return [_best(i) for i in range(len(sequence))]


def _build_subtree(sequence: Sequence[int], index: int, counter: list[int]) -> LmisNode:
    # counter is a one-element list so ids stay unique across the whole tree.
    node = LmisNode(id=f"node-{index}-{counter[0]}", value=sequence[index], index=index)
    counter[0] += 1
    for j in range(index + 1, len(sequence)):
        if sequence[j] > sequence[index]:
            node.children.append(_build_subtree(sequence, j, counter))
    return node


def _mark_longest_chain(root: LmisNode, lengths: list[int], overall_max: int) -> list[str]:
    chain = []
    node = root
    target = overall_max
    while target > 0:
        node = next(c for c in node.children if lengths[c.index] == target)
        node.on_longest_chain = True
        chain.append(node.id)
        target -= 1
    return chain


def build_lmis_tree(
    sequence: Sequence[int],
    max_nodes: int | None = MAX_TREE_NODES,
) -> LmisTree:
    """
    Build the full LMIS recursion tree for `sequence` and mark one longest chain.

    Args:
        sequence:  The integer sequence. An empty sequence gives a bare root
                   with overall_max 0; callers normally reject it beforehand.
        max_nodes: Refuse to build trees with more nodes than this (root
                   included). None disables the check.

    Returns:
        LmisTree whose root has one child per index, with exactly overall_max
        nodes flagged on_longest_chain.

    Raises:
        TreeTooLargeError: If the tree would exceed max_nodes.
    """
    values = list(sequence)

    if max_nodes is not None:
        node_count = count_tree_nodes(values, limit=max_nodes)
        if node_count > max_nodes:
            _log.debug("lmis rejected: %d nodes > %d", node_count, max_nodes)
            raise TreeTooLargeError(node_count, max_nodes)

    lengths = best_lengths(values)
    overall_max = max(lengths, default=0)

    root = LmisNode(id=ROOT_ID, value=None, index=ROOT_INDEX)
    counter = [0]
    for i in range(len(values)):
        root.children.append(_build_subtree(values, i, counter))

    chain = _mark_longest_chain(root, lengths, overall_max)
    node_count = counter[0] + 1
    _log.debug("lmis n=%d nodes=%d overall_max=%d", len(values), node_count, overall_max)

    return LmisTree(
        root=root,
        sequence=values,
        best_lengths=lengths,
        overall_max=overall_max,
        longest_chain=chain,
        node_count=node_count,
    )
