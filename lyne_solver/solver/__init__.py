from __future__ import annotations

from typing import Dict, FrozenSet, Optional, Tuple

from ..graph import Edge, Kind, Node
from ..pair import Pair
from ..puzzle import Puzzle
from .paths import reconstruct, solution_paths
from .pipeline import MULTI_TIME_INFERENCE, ONE_TIME_INFERENCE, Chain, Fixpoint
from .search import Solver, SolveTimeoutError, select_edge
from .types import Contradicted, Narrowed, Outcome, SolveResult


def solve(puzzle: Puzzle) -> Optional[FrozenSet[Tuple[Node, ...]]]:
    """Solve a puzzle; one node sequence per color, or None if unsolvable."""
    paths = Solver().solve(puzzle)
    if paths is None:
        return None
    return frozenset(tuple(p) for p in paths.values())


def solve_puzzle(puzzle: Puzzle, *, timeout_ms: int | None = None) -> SolveResult:
    solver = Solver(timeout_ms=timeout_ms)
    paths = solver.solve(puzzle)
    if paths is None:
        raise ValueError("No solution found.")

    edge_kind: Dict[Edge, Kind] = {}
    for color, path in paths.items():
        for a, b in zip(path, path[1:]):
            edge_kind[Pair.sorted(a, b)] = color
    return SolveResult(paths=paths, edge_kind=edge_kind, stats=solver.stats)


__all__ = [
    "Chain",
    "Contradicted",
    "Fixpoint",
    "MULTI_TIME_INFERENCE",
    "Narrowed",
    "ONE_TIME_INFERENCE",
    "Outcome",
    "SolveResult",
    "SolveTimeoutError",
    "Solver",
    "reconstruct",
    "select_edge",
    "solution_paths",
    "solve",
    "solve_puzzle",
]
