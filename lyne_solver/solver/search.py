from __future__ import annotations

import logging
import time
from typing import Callable, Dict, List, Optional, Sequence

from ..graph import Edge, Kind, Node, sorted_kinds
from ..puzzle import ContradictionError, Puzzle
from ..rules import Rule
from .paths import solution_paths
from .pipeline import MULTI_TIME_INFERENCE, ONE_TIME_INFERENCE
from .types import Contradicted, Narrowed, Outcome

logger = logging.getLogger(__name__)

BranchHook = Callable[[Puzzle, Edge, Sequence[Kind]], None]


class SolveTimeoutError(ValueError):
    pass


def attempt(step: Callable[[Puzzle], Puzzle], puzzle: Puzzle) -> Outcome:
    """Run one narrowing step, turning a contradiction into a value."""
    try:
        return Narrowed(step(puzzle))
    except ContradictionError as e:
        return Contradicted(str(e))


def select_edge(puzzle: Puzzle) -> Optional[Edge]:
    """The undetermined edge with the fewest possibilities.

    Ties go to the first such edge in enumeration (sorted) order. Returns
    None when every edge is determined.
    """
    best: Optional[Edge] = None
    best_size = 0
    for edge, kinds in puzzle.possibility_items():
        size = len(kinds)
        if size > 1 and (best is None or size < best_size):
            best, best_size = edge, size
    return best


class Solver:
    """Constraint propagation plus most-constrained-edge backtracking.

    `one_time` runs once on the initial puzzle, `multi_time` at every search
    node. `on_branch(puzzle, edge, kinds)` is called each time the search
    branches, before any kind is tried.
    """

    def __init__(
        self,
        *,
        one_time: Rule = ONE_TIME_INFERENCE,
        multi_time: Rule = MULTI_TIME_INFERENCE,
        timeout_ms: int | None = None,
        on_branch: Optional[BranchHook] = None,
    ) -> None:
        self.one_time = one_time
        self.multi_time = multi_time
        self.timeout_ms = timeout_ms
        self.on_branch = on_branch
        self.steps = 0
        self.branches = 0
        self.contradictions = 0
        self._start_time = 0.0

    @property
    def stats(self) -> Dict[str, int]:
        return {"steps": self.steps, "branches": self.branches, "contradictions": self.contradictions}

    def solve(self, puzzle: Puzzle) -> Optional[Dict[Kind, List[Node]]]:
        """Return one path per color, or None if the puzzle has no solution."""
        self.steps = self.branches = self.contradictions = 0
        self._start_time = time.monotonic()

        outcome = attempt(self.one_time, puzzle)
        if isinstance(outcome, Contradicted):
            logger.debug("initial inference found a contradiction: %s", outcome.reason)
            return None

        paths = self._search(outcome.puzzle)
        logger.debug(
            "search finished (%s): steps=%d branches=%d contradictions=%d",
            "solved" if paths is not None else "no solution",
            self.steps,
            self.branches,
            self.contradictions,
        )
        return paths

    def _check_timeout(self) -> None:
        if self.timeout_ms is None:
            return
        elapsed_ms = (time.monotonic() - self._start_time) * 1000.0
        if elapsed_ms > self.timeout_ms:
            raise SolveTimeoutError(f"Search timed out after {self.timeout_ms}ms")

    def _search(self, puzzle: Puzzle) -> Optional[Dict[Kind, List[Node]]]:
        self.steps += 1
        if self.steps % 1000 == 0:
            self._check_timeout()

        outcome = attempt(self.multi_time, puzzle)
        if isinstance(outcome, Contradicted):
            self.contradictions += 1
            logger.debug("pruned branch: %s", outcome.reason)
            return None
        puzzle = outcome.puzzle

        edge = select_edge(puzzle)
        if edge is None:
            return solution_paths(puzzle)

        kinds = sorted_kinds(puzzle.possibilities(*edge))
        self.branches += 1
        if self.on_branch is not None:
            self.on_branch(puzzle, edge, kinds)

        for kind in kinds:
            # kind comes from the edge's own possibilities, so fixing it cannot contradict
            found = self._search(puzzle.set(edge.first, edge.second, kind))
            if found is not None:
                return found
        return None
