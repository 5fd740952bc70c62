"""
Warnsdorff move ordering for the Knight's Tour search.

Warnsdorff's rule: from the current square, move to the neighbour that has
the fewest onward moves of its own. Squares with few exits are the ones the
tour is most likely to strand, so visiting them early keeps the remaining
board connected and lets a depth-first search finish with little or no
backtracking.

The degree of a candidate is always measured against the board as it is at
the moment of ordering (current square already marked visited). It shrinks as
the search fills the board, so it is recomputed on every call rather than
cached.
"""

from solvers.cells import Cell, on_board
from solvers.constants import KNIGHT_OFFSETS, UNVISITED


def is_open(row: int, col: int, board: list[list[int]]) -> bool:
    """True if (row, col) is on the board and not yet visited."""
    return on_board(row, col) and board[row][col] == UNVISITED


def degree(row: int, col: int, board: list[list[int]]) -> int:
    """Number of unvisited on-board knight neighbours of (row, col)."""
    return sum(1 for dr, dc in KNIGHT_OFFSETS if is_open(row + dr, col + dc, board))


def ordered_candidates(cell: Cell, board: list[list[int]]) -> list[tuple[Cell, int]]:
    """
    Return the legal next cells from `cell` in the order the search tries them.

    Candidates are the on-board, unvisited knight moves. They are sorted by
    ascending degree; the sort is stable, so candidates with equal degree keep
    KNIGHT_OFFSETS order. That tie-break makes the search deterministic.

    Args:
        cell:  The knight's current cell (already marked visited on the board).
        board: The visit-order grid.

    Returns:
        List of (candidate cell, degree) pairs, most constrained first.
    """
    candidates = []
    for dr, dc in KNIGHT_OFFSETS:
        row, col = cell.row + dr, cell.col + dc
        if is_open(row, col, board):
            candidates.append((Cell(row, col), degree(row, col, board)))
    return sorted(candidates, key=lambda item: item[1])
