#!/usr/bin/env python3
"""
Benchmark: measure search nodes and time per start square for the tour solver.

Runs the Knight's Tour search from all 64 squares, open and closed, and
prints one row per square. Run it before and after changing the move
ordering to see how much backtracking the change adds or removes. With
Warnsdorff ordering an open tour needs exactly 64 nodes when no
backtracking happens, so any count above 64 is backtracking.

Usage: python3 tools/bench.py [--node-limit N] [--open-only]
"""
import argparse
import os
import sys
import time

REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO not in sys.path:
    sys.path.insert(0, REPO)

from solvers.cells import Cell, square_of
from solvers.constants import BOARD_SIZE, TOUR_NODE_LIMIT
from solvers.tour import find_tour


def run_square(cell: Cell, closed: bool, node_limit: int) -> dict:
    """Search one start square and return its metrics.

    Args:
        cell: Start cell.
        closed: Whether a closed tour is required.
        node_limit: Node budget for the search.

    Returns:
        Dict with keys: square, status, nodes, time_ms.
    """
    start = time.monotonic()
    path, nodes, aborted = find_tour(cell, closed, node_limit=node_limit)
    elapsed_ms = int((time.monotonic() - start) * 1000)

    if path is not None:
        status = "ok"
    elif aborted:
        status = "budget"
    else:
        status = "none"

    return {"square": square_of(cell), "status": status, "nodes": nodes, "time_ms": elapsed_ms}


def main(argv: list[str] | None = None) -> None:
    """Run all start squares and print a summary table."""
    ap = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    ap.add_argument("--node-limit", type=int, default=TOUR_NODE_LIMIT)
    ap.add_argument("--open-only", action="store_true")
    args = ap.parse_args(argv)

    modes = [False] if args.open_only else [False, True]

    print(f"Knight's Tour benchmark ({sys.executable})")
    print(f"Node limit: {args.node_limit:,}")
    print()
    print(f"{'Square':<7} {'Mode':<7} {'Status':<7} {'Nodes':>10} {'Time(ms)':>9}")
    print("-" * 44)

    results = []
    for closed in modes:
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                r = run_square(Cell(row, col), closed, args.node_limit)
                r["mode"] = "closed" if closed else "open"
                results.append(r)
                print(
                    f"{r['square']:<7} {r['mode']:<7} {r['status']:<7} "
                    f"{r['nodes']:>10,} {r['time_ms']:>9,}"
                )

    print("-" * 44)
    for mode in ("open", "closed"):
        rows = [r for r in results if r["mode"] == mode]
        if not rows:
            continue
        solved = sum(1 for r in rows if r["status"] == "ok")
        total_nodes = sum(r["nodes"] for r in rows)
        total_ms = sum(r["time_ms"] for r in rows)
        print(
            f"{mode.upper():<7} solved {solved}/{len(rows)}  "
            f"nodes {total_nodes:,}  time {total_ms:,} ms"
        )


if __name__ == "__main__":
    main()
