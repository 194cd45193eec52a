from __future__ import annotations

from typing import Dict, FrozenSet

from ..graph import EMPTY, Edge, Kind
from ..puzzle import Puzzle


class ColorColorRule:
    """Edges between colored nodes carry their shared color or nothing."""

    def __call__(self, puzzle: Puzzle) -> Puzzle:
        changes: Dict[Edge, FrozenSet[Kind]] = {}
        for edge in puzzle.edges():
            a, b = edge
            if not (a.kind.is_color and b.kind.is_color):
                continue
            if a.kind is b.kind:
                changes[edge] = frozenset((a.kind, EMPTY))
            else:
                changes[edge] = frozenset((EMPTY,))
        return puzzle.narrow(changes)

    def __repr__(self) -> str:
        return "ColorColorRule()"


class ColorOctagonRule:
    """An edge from a colored node to an octagon can only carry that node's color."""

    def __call__(self, puzzle: Puzzle) -> Puzzle:
        changes: Dict[Edge, FrozenSet[Kind]] = {}
        for edge in puzzle.edges():
            a, b = edge
            if a.kind.is_color == b.kind.is_color:
                continue
            color = a.kind if a.kind.is_color else b.kind
            changes[edge] = frozenset((color, EMPTY))
        return puzzle.narrow(changes)

    def __repr__(self) -> str:
        return "ColorOctagonRule()"


class TerminalTerminalRule:
    """Two terminals of one color are not joined directly if other nodes of
    that color still need visiting."""

    def __call__(self, puzzle: Puzzle) -> Puzzle:
        changes: Dict[Edge, FrozenSet[Kind]] = {}
        for edge in puzzle.edges():
            a, b = edge
            if not (a.terminal and b.terminal and a.kind is b.kind):
                continue
            if len(puzzle.members(a.kind)) > 2:
                changes[edge] = frozenset((EMPTY,))
        return puzzle.narrow(changes)

    def __repr__(self) -> str:
        return "TerminalTerminalRule()"
