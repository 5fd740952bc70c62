"""
Solver constants: board geometry, search budgets, tree caps, and layout sizes.

All numeric constants used by the solvers, the CLI, and the web API are
defined here so that callers never need to introduce new magic numbers.
Tuning a budget or a layout gap is a one-line change in this file.
"""

# ---------------------------------------------------------------------------
# Board geometry
# ---------------------------------------------------------------------------
# The tour is always searched on a standard 8x8 chessboard. Row 0 is the top
# rank (rank 8) and column 0 is the a-file, matching how the board is drawn.

BOARD_SIZE: int = 8
SQUARE_COUNT: int = BOARD_SIZE * BOARD_SIZE

# Marker for a cell the knight has not visited yet.
UNVISITED: int = -1

# Knight offsets as (row delta, col delta). The order matters: candidates with
# equal Warnsdorff degree are tried in this order, so changing it changes
# which tour is found.
KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (2, 1), (1, 2), (-1, 2), (-2, 1),
    (-2, -1), (-1, -2), (1, -2), (2, -1),
)

# ---------------------------------------------------------------------------
# Tour search budget
# ---------------------------------------------------------------------------
# Warnsdorff ordering finds an open tour with little or no backtracking, but
# closed tours can force a long search from some squares. TOUR_NODE_LIMIT
# caps the number of visited search nodes before the search gives up and
# reports an aborted result. Callers pass it explicitly; the solver functions
# themselves search without a cap unless given one.
TOUR_NODE_LIMIT: int = 2_000_000

# How often (in nodes) the search checks the clock when a time budget is set.
# Reading the clock on every node is measurable overhead in the hot loop.
TIME_CHECK_NODES: int = 1_024

# ---------------------------------------------------------------------------
# LMIS recursion tree
# ---------------------------------------------------------------------------
# The recursion tree is exponential in the sequence length (a strictly
# increasing sequence of n values produces 2^n nodes including the root).
# Trees above this size are rejected before any node is allocated.
MAX_TREE_NODES: int = 50_000

# Longest sequence the web API accepts. Building and marking the tree is
# quadratic in the sequence length even when the node count is small.
MAX_SEQUENCE_LENGTH: int = 1_000
MAX_SEQUENCE_TEXT_LENGTH: int = 20_000

DEFAULT_SEQUENCE: tuple[int, ...] = (4, 1, 13, 7, 0, 2, 8, 11, 3)

ROOT_ID: str = "root"
ROOT_INDEX: int = -1

# ---------------------------------------------------------------------------
# Tree layout
# ---------------------------------------------------------------------------
# NODE_SIZE is the rendered node diameter. Leaves are GAP_X apart, levels are
# GAP_Y apart.
NODE_SIZE: int = 50
GAP_X: int = 20
GAP_Y: int = 100

# ---------------------------------------------------------------------------
# Animation cadence presets (milliseconds per revealed step)
# ---------------------------------------------------------------------------
# The solvers never animate anything; these are handed to callers that reveal
# a tour one square at a time.
ANIMATION_SPEEDS_MS: dict[str, int] = {
    "slow": 500,
    "normal": 200,
    "fast": 50,
    "hyper": 10,
}
DEFAULT_ANIMATION_SPEED: str = "normal"
