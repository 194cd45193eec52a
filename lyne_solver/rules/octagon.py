from __future__ import annotations

from ..graph import Kind
from ..puzzle import ContradictionError, Puzzle


class OctagonOneEdgeOfColorRule:
    """A path passing an octagon enters and leaves in its own color, so the
    edges of any one color meeting at an octagon come in pairs.

    A lone edge that could carry a color can't, and a single open edge left
    next to an odd number of fixed ones must take the color.
    """

    def __call__(self, puzzle: Puzzle) -> Puzzle:
        for node in puzzle.nodes():
            if node.kind is not Kind.OCTAGON:
                continue
            for color in puzzle.colors():
                carrying = []
                fixed = 0
                for nb in puzzle.neighbors(node):
                    kinds = puzzle.possibilities(node, nb)
                    if color not in kinds:
                        continue
                    carrying.append(nb)
                    if len(kinds) == 1:
                        fixed += 1

                if len(carrying) == 1:
                    puzzle = puzzle.remove(node, carrying[0], color)
                    continue
                if fixed % 2 == 0:
                    continue
                open_ = len(carrying) - fixed
                if open_ == 0:
                    raise ContradictionError(f"{node!r} has an odd number of {color.value} edges")
                if open_ == 1:
                    nb = next(n for n in carrying if len(puzzle.possibilities(node, n)) > 1)
                    puzzle = puzzle.set(node, nb, color)
        return puzzle

    def __repr__(self) -> str:
        return "OctagonOneEdgeOfColorRule()"
