"""
Board cells and visit-order grids for the Knight's Tour.

A Cell is a (row, col) pair in board-drawing order: row 0 is rank 8, column 0
is the a-file. python-chess squares use the opposite rank order (a1 = 0), so
conversions between the two go through chess.square() with the rank flipped.

The visit-order grid is the representation callers render: an 8x8 list of
ints where UNVISITED marks empty cells and any other value is the 0-based
step at which the knight landed there.
"""

from typing import Iterator, NamedTuple

import chess

from solvers.constants import BOARD_SIZE, UNVISITED


class Cell(NamedTuple):
    """A board cell. Equality is by value."""

    row: int
    col: int


def on_board(row: int, col: int) -> bool:
    """Return True if (row, col) lies on the 8x8 board."""
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def new_board() -> list[list[int]]:
    """Return a fresh 8x8 grid with every cell UNVISITED."""
    return [[UNVISITED] * BOARD_SIZE for _ in range(BOARD_SIZE)]


def to_chess_square(cell: Cell) -> chess.Square:
    """Convert a Cell to a python-chess square index."""
    if not on_board(cell.row, cell.col):
        raise ValueError(f"Cell off the board: {cell}")
    return chess.square(cell.col, BOARD_SIZE - 1 - cell.row)


def from_chess_square(square: chess.Square) -> Cell:
    """Convert a python-chess square index to a Cell."""
    return Cell(BOARD_SIZE - 1 - chess.square_rank(square), chess.square_file(square))


def square_of(cell: Cell) -> str:
    """Algebraic name of a cell, e.g. Cell(0, 0) -> "a8"."""
    return chess.square_name(to_chess_square(cell))


def cell_from_square(name: str) -> Cell:
    """
    Parse an algebraic square name ("e4", "A8") into a Cell.

    Raises:
        ValueError: If the name is not a valid square.
    """
    return from_chess_square(chess.parse_square(name.strip().lower()))


def is_knight_move(a: Cell, b: Cell) -> bool:
    """True if a knight on cell a attacks cell b."""
    return bool(chess.BB_KNIGHT_ATTACKS[to_chess_square(a)] & chess.BB_SQUARES[to_chess_square(b)])


def visit_order_board(path: list[Cell], steps: int | None = None) -> list[list[int]]:
    """
    Build the visit-order grid for the first `steps` cells of a tour path.

    Args:
        path:  Tour path in visit order.
        steps: Number of cells to reveal. None reveals the whole path.

    Returns:
        8x8 grid; revealed cells hold their step index, the rest UNVISITED.
    """
    board = new_board()
    count = len(path) if steps is None else max(0, min(steps, len(path)))
    for step, cell in enumerate(path[:count]):
        board[cell.row][cell.col] = step
    return board


def tour_frames(path: list[Cell]) -> Iterator[list[list[int]]]:
    """Yield the visit-order grid after each step of the path, one frame per cell."""
    board = new_board()
    for step, cell in enumerate(path):
        board[cell.row][cell.col] = step
        yield [row[:] for row in board]
