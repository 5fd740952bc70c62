"""
Command-line front end for the solvers.

Subcommands:
    tour <square>      Solve a Knight's Tour and print the visit-order board,
                       optionally revealing it step by step.
    lmis [values...]   Print the LMIS recursion tree with the longest chain
                       marked by '*'.
    layout [values...] Print the layout coordinates of the LMIS tree.
    serve              Run the web app under uvicorn.

Results go to stdout; errors and diagnostics go to stderr through logging,
so the board and tree output can be piped or diffed cleanly.

Exit codes: 0 on success, 1 when no tour was found, 2 on bad input.
"""

import argparse
import logging
import os
import sys
import time

# ---------------------------------------------------------------------------
# Path setup: make 'solvers' importable when this script is run directly.
# When run as `python interface/cli.py` from the repo root, sys.path may not
# include the repo root, so `import solvers` would fail. We fix this by
# inserting the repo root at the front of sys.path.
# ---------------------------------------------------------------------------
_REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

from solvers.cells import cell_from_square, square_of, tour_frames, visit_order_board
from solvers.constants import (
    ANIMATION_SPEEDS_MS,
    BOARD_SIZE,
    DEFAULT_ANIMATION_SPEED,
    DEFAULT_SEQUENCE,
    TOUR_NODE_LIMIT,
    UNVISITED,
)
from solvers.layout import calculate_tree_layout, iter_positioned
from solvers.lmis import LmisNode, build_lmis_tree, parse_sequence
from solvers.tour import find_tour

_log = logging.getLogger("interface.cli")


def format_board(board: list[list[int]]) -> str:
    """
    Render a visit-order grid as text, rank 8 at the top.

    Visited cells show their 1-based step number, unvisited cells a dot.
    """
    lines = []
    for row in range(BOARD_SIZE):
        cells = [
            "  ." if board[row][col] == UNVISITED else f"{board[row][col] + 1:3d}"
            for col in range(BOARD_SIZE)
        ]
        lines.append(f"{BOARD_SIZE - row} " + " ".join(cells))
    lines.append("  " + " ".join(f"  {f}" for f in "abcdefgh"))
    return "\n".join(lines)


def format_tree(node: LmisNode, depth: int = 0) -> list[str]:
    """One line per node, indented by depth; '*' marks the longest chain."""
    if node.is_root:
        lines = ["S"]
    else:
        marker = "*" if node.on_longest_chain else "-"
        lines = [f"{'  ' * depth}{marker} {node.value} [{node.index}]"]
    for child in node.children:
        lines.extend(format_tree(child, depth + 1))
    return lines


def _resolve_sequence(args: argparse.Namespace) -> list[int]:
    if args.values:
        return list(args.values)
    if args.text is not None:
        return parse_sequence(args.text)
    return list(DEFAULT_SEQUENCE)


def cmd_tour(args: argparse.Namespace) -> int:
    try:
        start = cell_from_square(args.square)
    except ValueError:
        _log.error("invalid square: %r", args.square)
        return 2

    path, nodes, aborted = find_tour(start, args.closed, node_limit=args.node_limit)
    if path is None:
        reason = "search budget exhausted" if aborted else "no tour exists"
        print(f"No {'closed' if args.closed else 'open'} tour from {square_of(start)}: {reason} ({nodes} nodes)")
        return 1

    if args.animate:
        delay = ANIMATION_SPEEDS_MS[args.animate] / 1000
        for frame in tour_frames(path):
            print(format_board(frame))
            print()
            time.sleep(delay)
    else:
        print(format_board(visit_order_board(path)))
        print()

    print(" ".join(square_of(cell) for cell in path))
    print(f"Tour Completed! {len(path)} squares, {nodes} nodes searched")
    return 0


def cmd_lmis(args: argparse.Namespace) -> int:
    sequence = _resolve_sequence(args)
    if not sequence:
        _log.error("sequence is empty")
        return 2
    try:
        tree = build_lmis_tree(sequence)
    except ValueError as exc:
        _log.error("%s", exc)
        return 2

    print("\n".join(format_tree(tree.root)))
    print()
    print(f"Sequence: {tree.sequence}")
    print(f"LIS length: {tree.overall_max}")
    print(f"Longest chain: {' < '.join(str(v) for v in tree.chain_values())}")
    return 0


def cmd_layout(args: argparse.Namespace) -> int:
    sequence = _resolve_sequence(args)
    if not sequence:
        _log.error("sequence is empty")
        return 2
    try:
        tree = build_lmis_tree(sequence)
    except ValueError as exc:
        _log.error("%s", exc)
        return 2

    layout = calculate_tree_layout(tree.root)
    for placed in iter_positioned(layout.root):
        label = "S" if placed.node.is_root else str(placed.node.value)
        print(f"{placed.node.id:<16} {label:>4} x={placed.x:g} y={placed.y:g}")
    print(f"width={layout.width:g} height={layout.height:g}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("web.app:app", host=args.host, port=args.port)
    return 0


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="algo-visualizer")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = ap.add_subparsers(dest="cmd", required=True)

    st = sub.add_parser("tour", help="Solve a Knight's Tour")
    st.add_argument("square", help="start square, e.g. a8")
    st.add_argument("--closed", action="store_true", help="require a closed tour")
    st.add_argument("--animate", choices=sorted(ANIMATION_SPEEDS_MS), default=None,
                    help=f"reveal the tour step by step (e.g. {DEFAULT_ANIMATION_SPEED})")
    st.add_argument("--node-limit", type=int, default=TOUR_NODE_LIMIT)
    st.set_defaults(fn=cmd_tour)

    for name, fn, help_text in (
        ("lmis", cmd_lmis, "Print the LMIS recursion tree"),
        ("layout", cmd_layout, "Print LMIS tree layout coordinates"),
    ):
        sp = sub.add_parser(name, help=help_text)
        sp.add_argument("values", nargs="*", type=int)
        sp.add_argument("--text", type=str, default=None, help='comma-separated, e.g. "4, 1, 13"')
        sp.set_defaults(fn=fn)

    sv = sub.add_parser("serve", help="Run the web app")
    sv.add_argument("--host", default="127.0.0.1")
    sv.add_argument("--port", type=int, default=8000)
    sv.set_defaults(fn=cmd_serve)

    args = ap.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    return int(args.fn(args))


if __name__ == "__main__":
    raise SystemExit(main())
