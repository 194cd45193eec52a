from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..puzzle import Puzzle


@runtime_checkable
class Rule(Protocol):
    """A pure inference step.

    Returns a puzzle whose possibility sets are subsets of the input's
    (the input itself if nothing could be concluded) and raises
    `ContradictionError` when the input admits no solution.
    """

    def __call__(self, puzzle: Puzzle) -> Puzzle: ...
