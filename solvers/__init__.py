"""
Algorithm visualizer solvers package.

This package holds the pure algorithmic core behind the visualizer: a
Knight's Tour backtracking search and the LMIS recursion tree with its
layout. Nothing here renders, animates, or performs I/O; callers (the CLI in
interface/ and the web API in web/) turn the results into pictures.

Modules:
    constants  - Board geometry, search budgets, tree caps, layout sizes
    cells      - Cell type, python-chess square conversions, visit-order grids
    warnsdorff - Degree computation and Warnsdorff candidate ordering
    tour       - Backtracking Knight's Tour search with cancellation
    lmis       - LMIS recursion tree construction and longest-chain marking
    layout     - Post-order tree layout (leaf cursor, midpoint parents)
"""

from solvers.cells import Cell, cell_from_square, square_of
from solvers.constants import DEFAULT_SEQUENCE
from solvers.layout import PositionedNode, TreeLayout, calculate_tree_layout
from solvers.lmis import LmisNode, LmisTree, TreeTooLargeError, build_lmis_tree, parse_sequence
from solvers.tour import TourSearchAborted, find_tour, solve_knights_tour

__all__ = [
    "Cell",
    "DEFAULT_SEQUENCE",
    "LmisNode",
    "LmisTree",
    "PositionedNode",
    "TreeLayout",
    "TourSearchAborted",
    "TreeTooLargeError",
    "build_lmis_tree",
    "calculate_tree_layout",
    "cell_from_square",
    "find_tour",
    "parse_sequence",
    "solve_knights_tour",
    "square_of",
]
