from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from .puzzle import Puzzle
from .solver import SolveTimeoutError, solve_puzzle
from .viz import write_plotly_html

logger = logging.getLogger(__name__)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="lyne_solver", description="Offline Lyne puzzle solver + visualizer")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log search statistics")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_viz = sub.add_parser("visualize", help="Render the puzzle graph to an HTML file")
    p_viz.add_argument("puzzle", type=str, help="Path to .lyne or .json puzzle file")
    p_viz.add_argument("--out", type=str, default="out/graph.html", help="Output HTML path")

    p_solve = sub.add_parser("solve", help="Solve a puzzle and render the solution to an HTML file")
    p_solve.add_argument("puzzle", type=str, help="Path to .lyne or .json puzzle file")
    p_solve.add_argument("--out", type=str, default="out/solution.html", help="Output HTML path")
    p_solve.add_argument("--no-html", action="store_true", help="Only print the solution paths")
    p_solve.add_argument("--timeout-ms", type=int, default=30_000, help="Solver timeout in milliseconds")

    args = parser.parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    puzzle_path = Path(args.puzzle)
    puzzle = Puzzle.from_file(puzzle_path)

    if args.cmd == "visualize":
        out = write_plotly_html(puzzle, out_path=args.out, title=f"Graph: {puzzle_path.name}")
        print(f"Wrote graph visualization: {out}")
        return 0

    if args.cmd == "solve":
        try:
            res = solve_puzzle(puzzle, timeout_ms=args.timeout_ms)
        except SolveTimeoutError as e:
            logger.error("%s: %s", puzzle_path.name, e)
            return 2
        except ValueError as e:
            print(f"{puzzle_path.name}: {e}")
            return 1

        print(f"Solved {puzzle_path.name}: colors={len(res.paths)}, nodes={len(puzzle.graph)}, edges={len(puzzle.edges())}")
        for color, path in res.paths.items():
            print(f"  {color.value}: {' -> '.join(n.id for n in path)}")
        logger.debug("search stats: %s", res.stats)
        if not args.no_html:
            out = write_plotly_html(puzzle, out_path=args.out, edge_kind=res.edge_kind, title=f"Solution: {puzzle_path.name}")
            print(f"Wrote solution visualization: {out}")
        return 0

    raise AssertionError("unreachable")
