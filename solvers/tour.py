"""
Knight's Tour search: depth-first backtracking with Warnsdorff move ordering.

The search keeps one mutable 8x8 visit-order grid and one path list for the
whole call. Entering a cell marks it with its step index and appends it to
the path; a failing return unmarks it and pops it again, so the grid is
always exactly the current partial tour. The first complete tour found is
returned immediately without exploring sibling branches.

Open vs closed tours:
    An open tour succeeds as soon as all 64 cells are visited. A closed tour
    additionally requires the 64th cell to be a knight move from the start;
    when it is not, that leaf is a dead end and the search backtracks.

Search budget:
    Warnsdorff ordering converges almost immediately for open tours, but the
    closed constraint is only tested at the last step and can force a long
    search. The search therefore accepts a node budget, a time budget and an
    external stop event, all carried in TourSearchState. None of them is on
    by default; callers serving requests pass TOUR_NODE_LIMIT. find_tour()
    reports an aborted search as a result, solve_knights_tour() raises
    TourSearchAborted, so its None always means "no tour exists".

Recursion depth is bounded by the number of squares (64).
"""

import logging
import threading
import time
from dataclasses import dataclass, field

from solvers.cells import Cell, is_knight_move, new_board, on_board
from solvers.constants import SQUARE_COUNT, TIME_CHECK_NODES, UNVISITED
from solvers.warnsdorff import ordered_candidates

_log = logging.getLogger(__name__)


class TourSearchAborted(RuntimeError):
    """Raised by solve_knights_tour when cancellation or a budget stops the search."""

    def __init__(self, start: Cell, closed: bool, nodes: int) -> None:
        super().__init__(
            f"{'closed' if closed else 'open'} tour search from {tuple(start)} "
            f"stopped after {nodes} nodes before finding a tour"
        )
        self.start = start
        self.closed = closed
        self.nodes = nodes


@dataclass
class TourSearchState:
    """
    Mutable state shared by every level of one tour search.

    Attributes:
        start:          The starting cell (needed for the closed-tour check).
        closed:         Whether the tour must end a knight move from start.
        board:          Visit-order grid, marked and unmarked as the search moves.
        path:           Cells of the current partial tour in visit order.
        stop_event:     Set by the caller to cancel, or by the search itself
                        when a budget runs out. Checked at every node.
        node_limit:     Maximum number of nodes to visit, or None for no cap.
        time_limit_ms:  Wall-clock budget in milliseconds, or None for no cap.
                        Checked every TIME_CHECK_NODES nodes.
        node_count:     Nodes visited so far (one per cell entered).
        start_time:     Monotonic clock timestamp when the search began.
    """

    start: Cell
    closed: bool
    board: list[list[int]] = field(default_factory=new_board)
    path: list[Cell] = field(default_factory=list)
    stop_event: threading.Event = field(default_factory=threading.Event)
    node_limit: int | None = None
    time_limit_ms: float | None = None
    node_count: int = 0
    start_time: float = field(default_factory=time.monotonic)


def _out_of_budget(state: TourSearchState) -> bool:
    """Check the node and time budgets; set the stop event when either is spent."""
    if state.node_limit is not None and state.node_count > state.node_limit:
        state.stop_event.set()
        return True

    if state.time_limit_ms is not None and state.node_count % TIME_CHECK_NODES == 0:
        elapsed_ms = (time.monotonic() - state.start_time) * 1000
        if elapsed_ms >= state.time_limit_ms:
            state.stop_event.set()
            return True

    return False


def _visit(cell: Cell, step: int, state: TourSearchState) -> bool:
    """
    Enter `cell` as move number `step` and try to complete the tour from it.

    Returns True when a complete tour is on state.path. On False the grid and
    path are exactly what they were before the call.
    """
    if state.stop_event.is_set():
        return False

    state.node_count += 1
    if _out_of_budget(state):
        return False

    state.board[cell.row][cell.col] = step
    state.path.append(cell)

    if step == SQUARE_COUNT - 1:
        if not state.closed or is_knight_move(cell, state.start):
            return True
    else:
        for nxt, _ in ordered_candidates(cell, state.board):
            if _visit(nxt, step + 1, state):
                return True

    # Dead end: undo this cell so the caller can try its next candidate.
    state.board[cell.row][cell.col] = UNVISITED
    state.path.pop()
    return False


def find_tour(
    start: Cell,
    closed: bool,
    stop_event: threading.Event | None = None,
    node_limit: int | None = None,
    time_limit_ms: float | None = None,
) -> tuple[list[Cell] | None, int, bool]:
    """
    Search for a Knight's Tour from `start` and report search statistics.

    Args:
        start:         Starting cell. Must be on the board.
        closed:        Require the last cell to be a knight move from start.
        stop_event:    Optional cancellation event. When set (by the caller or
                       by a budget check) the search unwinds and returns aborted.
        node_limit:    Maximum number of search nodes, or None for no cap.
        time_limit_ms: Wall-clock budget in milliseconds, or None for no cap.

    Returns:
        Tuple of (path, nodes, aborted):
            - path:    The 64 cells in visit order, or None.
            - nodes:   Number of search nodes visited.
            - aborted: True if the search stopped before deciding. A None path
                       with aborted=False means no tour exists from start.

    Raises:
        ValueError: If start is off the board.
    """
    start = Cell(*start)
    if not on_board(start.row, start.col):
        raise ValueError(f"Start cell off the board: {start}")

    state = TourSearchState(
        start=start,
        closed=closed,
        stop_event=stop_event if stop_event is not None else threading.Event(),
        node_limit=node_limit,
        time_limit_ms=time_limit_ms,
    )
    if state.stop_event.is_set():
        return (None, 0, True)

    found = _visit(start, 0, state)
    aborted = not found and state.stop_event.is_set()

    _log.debug(
        "tour start=%s closed=%s found=%s aborted=%s nodes=%d time=%.3fs",
        tuple(start),
        closed,
        found,
        aborted,
        state.node_count,
        time.monotonic() - state.start_time,
    )
    return (list(state.path) if found else None, state.node_count, aborted)


def solve_knights_tour(
    start: Cell,
    closed: bool,
    stop_event: threading.Event | None = None,
    node_limit: int | None = None,
    time_limit_ms: float | None = None,
) -> list[Cell] | None:
    """
    Return a Knight's Tour from `start` as a list of 64 cells, or None.

    None means no tour exists from start under the open/closed constraint.
    The search runs to completion unless a stop event or budget is given.

    Raises:
        ValueError: If start is off the board.
        TourSearchAborted: If the stop event or a budget ended the search
            before it could decide.
    """
    path, nodes, aborted = find_tour(
        start,
        closed,
        stop_event=stop_event,
        node_limit=node_limit,
        time_limit_ms=time_limit_ms,
    )
    if aborted:
        raise TourSearchAborted(Cell(*start), closed, nodes)
    return path
