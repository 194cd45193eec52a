from __future__ import annotations

from collections import defaultdict
from typing import DefaultDict, List, Sequence

from .graph import Graph, Kind, Node

_COLOR_TOKENS = {
    "t": Kind.TRIANGLE,
    "s": Kind.SQUARE,
    "d": Kind.DIAMOND,
}
_EMPTY_TOKENS = {".", "#", "_"}

# 8-neighbourhood; only half the directions so each edge is added once.
_DIRECTIONS = ((0, 1), (1, -1), (1, 0), (1, 1))


def node_from_token(tok: str, row: int, col: int) -> Node | None:
    """Build the node for one grid token, or None for an empty cell.

    Supported tokens:
    - '.', '#', '_' no node
    - 'T', 'S', 'D' terminal of triangle/square/diamond
    - 't', 's', 'd' interior node of that color
    - '1'-'9' octagon the paths must pass through that many times
    """
    if tok in _EMPTY_TOKENS:
        return None
    if tok.lower() in _COLOR_TOKENS:
        kind = _COLOR_TOKENS[tok.lower()]
        if tok.isupper():
            return Node.terminal_of(row, col, kind)
        return Node.color(row, col, kind)
    if tok.isdigit():
        return Node.octagon(row, col, int(tok))
    raise ValueError(f"Unknown token {tok!r} at row {row}, column {col}")


def build_grid_from_tokens(token_rows: Sequence[Sequence[str]]) -> Graph:
    """Build a Lyne board from a 2D token grid.

    Nodes connect to all eight neighbours. Every color that appears on the
    board must have exactly two terminals.
    """

    height = len(token_rows)
    if height == 0:
        raise ValueError("token_rows is empty")
    width = len(token_rows[0])
    if any(len(r) != width for r in token_rows):
        raise ValueError("All rows must have equal width")

    g = Graph()
    terminal_locs: DefaultDict[Kind, List[Node]] = defaultdict(list)
    colors_seen = set()

    for y in range(height):
        for x in range(width):
            node = node_from_token(str(token_rows[y][x]), y, x)
            if node is None:
                continue
            g.add_node(node)
            if node.kind.is_color:
                colors_seen.add(node.kind)
            if node.terminal:
                terminal_locs[node.kind].append(node)

    for y in range(height):
        for x in range(width):
            u = g.at(y, x)
            if u is None:
                continue
            for dy, dx in _DIRECTIONS:
                v = g.at(y + dy, x + dx)
                if v is not None:
                    g.add_edge(u, v)

    for kind in sorted(colors_seen, key=lambda k: k.value):
        found = len(terminal_locs.get(kind, []))
        if found != 2:
            raise ValueError(f"Color {kind.value!r} must have exactly two terminals (found {found})")

    if not terminal_locs:
        raise ValueError("No terminals found (need at least one T/S/D pair)")

    return g
