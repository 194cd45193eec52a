from __future__ import annotations

from ..graph import EMPTY
from ..puzzle import Puzzle


class CrossingEdgesRule:
    """Paths may not cross: of two diagonals in one square, at most one is used."""

    def __call__(self, puzzle: Puzzle) -> Puzzle:
        graph = puzzle.graph
        for edge in puzzle.edges():
            other = graph.crossing(edge)
            if other is None:
                continue
            if EMPTY not in puzzle.possibilities(*edge):
                puzzle = puzzle.set(other.first, other.second, EMPTY)
        return puzzle

    def __repr__(self) -> str:
        return "CrossingEdgesRule()"
