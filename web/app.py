"""
FastAPI web application for the algorithm visualizer.

Exposes the solvers over a small REST API and serves the single-page
frontend that renders the results:

    POST /api/tour    Knight's Tour from a start square (open or closed)
    POST /api/lmis    LMIS recursion tree with its layout and marked chain
    GET  /api/speeds  Animation cadence presets for revealing a tour

Notes:
- Tour requests carry their own node budget (capped at TOUR_NODE_LIMIT) and
  report "aborted" rather than holding a worker until a closed tour turns up.
- LMIS requests are length-bounded by the request model and node-bounded by
  the builder, so oversized input is answered with 4xx without a long count.
- The page under static/ does the step-by-step reveal and pan/zoom itself;
  the API only returns finished results.
"""

import logging
import threading
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, Field, field_validator

from solvers.cells import cell_from_square, square_of, visit_order_board
from solvers.constants import (
    ANIMATION_SPEEDS_MS,
    DEFAULT_ANIMATION_SPEED,
    DEFAULT_SEQUENCE,
    MAX_SEQUENCE_LENGTH,
    MAX_SEQUENCE_TEXT_LENGTH,
    TOUR_NODE_LIMIT,
)
from solvers.layout import calculate_tree_layout
from solvers.lmis import build_lmis_tree, parse_sequence
from solvers.tour import find_tour

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

logging.basicConfig(level=logging.INFO)
_log = logging.getLogger(__name__)

# Absolute path resolved at import time, immune to working-directory changes.
_STATIC_DIR = Path(__file__).parent / "static"

app = FastAPI(title="Algorithm Visualizer", version="1.0.0")


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class TourRequest(BaseModel):
    """
    Client request for a Knight's Tour.

    Fields:
        start: Algebraic start square, e.g. "a8" (top-left of the drawn board).
        closed: Require the tour to end a knight move away from start.
        node_limit: Search node budget, clamped to [1, TOUR_NODE_LIMIT] so a
                    request cannot tie up a worker thread indefinitely.
    """

    start: str
    closed: bool = False
    node_limit: int = TOUR_NODE_LIMIT

    @field_validator("node_limit")
    @classmethod
    def clamp_node_limit(cls, v: int) -> int:
        """Clamp node_limit to a safe operating range."""
        return max(1, min(v, TOUR_NODE_LIMIT))


class CellModel(BaseModel):
    row: int
    col: int
    square: str


class TourResponse(BaseModel):
    """
    Tour search result.

    Fields:
        status: "completed" when a tour was found, "failed" when none exists
                from start, "aborted" when the node budget ran out first.
        path: The 64 cells in visit order, or null.
        board: 8x8 visit-order grid (-1 for unvisited cells).
        nodes: Search nodes visited.
    """

    status: str
    start: str
    closed: bool
    path: list[CellModel] | None
    board: list[list[int]]
    nodes: int


class LmisRequest(BaseModel):
    """
    Client request for an LMIS recursion tree.

    Either `sequence` or `text` (comma-separated, parsed like the input box)
    may be given; with neither, the default sequence is used. Both are
    bounded so an oversized body is refused before any work is done.
    """

    sequence: list[int] | None = Field(default=None, max_length=MAX_SEQUENCE_LENGTH)
    text: str | None = Field(default=None, max_length=MAX_SEQUENCE_TEXT_LENGTH)

    def resolve(self) -> list[int]:
        if self.sequence is not None:
            return list(self.sequence)
        if self.text is not None:
            return parse_sequence(self.text)
        return list(DEFAULT_SEQUENCE)


class LmisResponse(BaseModel):
    """
    LMIS result.

    Fields:
        best_lengths: Longest increasing run starting at each index.
        overall_max: Length of the longest increasing subsequence.
        longest_chain: Ids of the marked nodes, root to leaf.
        chain_values: Values of the marked nodes, root to leaf.
        node_count: Nodes in the tree, root included.
        layout: Positioned tree and its bounding box ({root, width, height}).
    """

    sequence: list[int]
    best_lengths: list[int]
    overall_max: int
    longest_chain: list[str]
    chain_values: list[int]
    node_count: int
    layout: dict


class SpeedsResponse(BaseModel):
    default: str
    speeds_ms: dict[str, int]


# ---------------------------------------------------------------------------
# API routes (registered BEFORE StaticFiles mount)
# ---------------------------------------------------------------------------


@app.post("/api/tour", response_model=TourResponse)
def api_tour(request: TourRequest) -> TourResponse:
    """
    Search for a Knight's Tour from the requested square.

    Raises:
        HTTPException 400: Malformed start square.
        HTTPException 500: The search itself failed unexpectedly.
    """
    try:
        start = cell_from_square(request.start)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid square: {request.start!r}") from exc

    # A fresh stop_event per request; the node budget sets it if exhausted.
    stop_event = threading.Event()

    try:
        path, nodes, aborted = find_tour(
            start, request.closed, stop_event=stop_event, node_limit=request.node_limit
        )
    except Exception as exc:
        _log.exception("Tour search failed for start=%s", request.start)
        raise HTTPException(status_code=500, detail=f"Solver error: {exc}") from exc

    if path is not None:
        status = "completed"
    elif aborted:
        status = "aborted"
    else:
        status = "failed"

    _log.info(
        "Tour start=%s closed=%s status=%s nodes=%d",
        square_of(start),
        request.closed,
        status,
        nodes,
    )

    return TourResponse(
        status=status,
        start=square_of(start),
        closed=request.closed,
        path=None if path is None else [
            CellModel(row=c.row, col=c.col, square=square_of(c)) for c in path
        ],
        board=visit_order_board(path or []),
        nodes=nodes,
    )


@app.post("/api/lmis", response_model=LmisResponse)
def api_lmis(request: LmisRequest) -> LmisResponse:
    """
    Build the LMIS recursion tree, mark one longest chain, and lay it out.

    Raises:
        HTTPException 400: Empty or overlong sequence, or a tree above the
                           node cap.
    """
    sequence = request.resolve()
    if not sequence:
        raise HTTPException(status_code=400, detail="Sequence is empty")
    if len(sequence) > MAX_SEQUENCE_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Sequence has {len(sequence)} values (limit {MAX_SEQUENCE_LENGTH})",
        )

    try:
        tree = build_lmis_tree(sequence)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    layout = calculate_tree_layout(tree.root)

    _log.info(
        "LMIS n=%d nodes=%d overall_max=%d chain=%s",
        len(sequence),
        tree.node_count,
        tree.overall_max,
        tree.chain_values(),
    )

    return LmisResponse(
        sequence=tree.sequence,
        best_lengths=tree.best_lengths,
        overall_max=tree.overall_max,
        longest_chain=tree.longest_chain,
        chain_values=tree.chain_values(),
        node_count=tree.node_count,
        layout=layout.to_dict(),
    )


@app.get("/api/speeds", response_model=SpeedsResponse)
def api_speeds() -> SpeedsResponse:
    """Animation cadence presets (ms per step) for revealing a tour."""
    return SpeedsResponse(default=DEFAULT_ANIMATION_SPEED, speeds_ms=dict(ANIMATION_SPEEDS_MS))


@app.get("/", include_in_schema=False)
def serve_root() -> FileResponse:
    """Serve the visualizer UI."""
    return FileResponse(_STATIC_DIR / "index.html")


# ---------------------------------------------------------------------------
# Static file mount, MUST be last (catch-all for /static/* assets)
# ---------------------------------------------------------------------------

app.mount("/static", StaticFiles(directory=_STATIC_DIR), name="static")
