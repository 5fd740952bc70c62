"""
Tree layout: 2-D coordinates for an arbitrary rooted tree.

The layout is a single post-order pass:

- y is depth * gap_y.
- Leaves take x from one cursor shared by the whole traversal. Each leaf is
  placed at the cursor, then the cursor advances by node_size + gap_x, so
  leaves come out evenly spaced left to right in traversal order.
- An internal node sits at the midpoint of its first and last child. Middle
  children only matter through how far they pushed the cursor.

With asymmetric subtrees the midpoint rule can leave a parent visibly off
centre over its children. The rule is kept as is; existing renderings and
tests depend on these exact coordinates.

Any object with a `children` sequence can be laid out; the positioned tree
keeps a reference to the source node for the caller's labels and styling.
"""

from dataclasses import dataclass, field
from typing import Any, Iterator

from solvers.constants import GAP_X, GAP_Y, NODE_SIZE


@dataclass
class PositionedNode:
    """
    A tree node decorated with layout coordinates.

    Attributes:
        node:     The source node this position belongs to.
        x, y:     Centre of the node in layout units.
        width:    Horizontal span of the subtree (leaf count * slot width).
        depth:    Distance from the root.
        children: Positioned children, in the source node's order.
    """

    node: Any
    x: float
    y: float
    width: float
    depth: int
    children: list["PositionedNode"] = field(default_factory=list)

    def to_dict(self) -> dict:
        data = self.node.fields() if hasattr(self.node, "fields") else {}
        data.update(
            x=self.x,
            y=self.y,
            width=self.width,
            children=[child.to_dict() for child in self.children],
        )
        return data


@dataclass
class TreeLayout:
    """Positioned tree plus the bounding box needed to draw it."""

    root: PositionedNode
    width: float
    height: float

    def to_dict(self) -> dict:
        return {"root": self.root.to_dict(), "width": self.width, "height": self.height}


def iter_positioned(node: PositionedNode) -> Iterator[PositionedNode]:
    """Pre-order traversal of a positioned tree."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def _place(
    node: Any,
    depth: int,
    cursor: float,
    slot: float,
    gap_y: float,
) -> tuple[PositionedNode, float]:
    """
    Lay out the subtree at `node` starting at leaf position `cursor`.

    Returns the positioned subtree and the cursor after its last leaf.
    """
    children = []
    for child in node.children:
        placed, cursor = _place(child, depth + 1, cursor, slot, gap_y)
        children.append(placed)

    if children:
        x = (children[0].x + children[-1].x) / 2
        width = sum(child.width for child in children)
    else:
        x = cursor
        width = slot
        cursor += slot

    return PositionedNode(node=node, x=x, y=depth * gap_y, width=width, depth=depth, children=children), cursor


def calculate_tree_layout(
    root: Any,
    node_size: float = NODE_SIZE,
    gap_x: float = GAP_X,
    gap_y: float = GAP_Y,
) -> TreeLayout:
    """
    Assign coordinates to every node of the tree rooted at `root`.

    The tree must be finite and acyclic; trees built by build_lmis_tree()
    always are.

    Args:
        root:      Root of the tree. Nodes only need a `children` sequence.
        node_size: Rendered node diameter.
        gap_x:     Horizontal gap between neighbouring leaves.
        gap_y:     Vertical distance between levels.

    Returns:
        TreeLayout with width = max x + node_size + gap_x and
        height = max y + node_size + gap_y.
    """
    positioned, _ = _place(root, 0, 0, node_size + gap_x, gap_y)

    max_x = 0
    max_y = 0
    for placed in iter_positioned(positioned):
        max_x = max(max_x, placed.x)
        max_y = max(max_y, placed.y)

    return TreeLayout(
        root=positioned,
        width=max_x + node_size + gap_x,
        height=max_y + node_size + gap_y,
    )
