from __future__ import annotations

from ..graph import EMPTY
from ..puzzle import ContradictionError, Puzzle


class DesiredEdgesRule:
    """Match each node's used edges against its desired edge count.

    An edge is *present* once EMPTY is ruled out and *open* while it could
    still go either way. When the present edges already reach the count the
    open ones are dropped; when present plus open is exactly the count the
    open ones are all used.
    """

    def __call__(self, puzzle: Puzzle) -> Puzzle:
        for node in puzzle.nodes():
            present = 0
            open_ = []
            for nb in puzzle.neighbors(node):
                kinds = puzzle.possibilities(node, nb)
                if EMPTY not in kinds:
                    present += 1
                elif len(kinds) > 1:
                    open_.append(nb)

            want = node.desired_edges
            if present > want:
                raise ContradictionError(f"{node!r} has {present} edges but wants {want}")
            if present + len(open_) < want:
                raise ContradictionError(
                    f"{node!r} can have at most {present + len(open_)} edges but wants {want}"
                )
            if not open_:
                continue
            if present == want:
                for nb in open_:
                    puzzle = puzzle.set(node, nb, EMPTY)
            elif present + len(open_) == want:
                for nb in open_:
                    puzzle = puzzle.remove(node, nb, EMPTY)
        return puzzle

    def __repr__(self) -> str:
        return "DesiredEdgesRule()"
