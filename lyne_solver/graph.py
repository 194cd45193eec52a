from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .pair import Pair

NodeId = str
Edge = Pair  # Pair[Node, Node], always sorted


class Kind(Enum):
    TRIANGLE = "triangle"
    SQUARE = "square"
    DIAMOND = "diamond"
    OCTAGON = "octagon"

    @property
    def is_color(self) -> bool:
        return self is not Kind.OCTAGON


# On an edge, OCTAGON means no color flows through it (the edge is unused).
EMPTY = Kind.OCTAGON
COLORS: Tuple[Kind, ...] = tuple(k for k in Kind if k.is_color)
_KIND_ORDER = {k: i for i, k in enumerate(Kind)}


def sorted_kinds(kinds: Iterable[Kind]) -> List[Kind]:
    """Kinds in declaration order (colors first, EMPTY last)."""
    return sorted(kinds, key=_KIND_ORDER.__getitem__)


@dataclass(frozen=True, order=True)
class Node:
    """A puzzle node. Identity and ordering are by grid position only."""

    row: int
    col: int
    kind: Kind = field(compare=False)
    terminal: bool = field(default=False, compare=False)
    desired_edges: int = field(default=2, compare=False)

    @staticmethod
    def terminal_of(row: int, col: int, kind: Kind) -> "Node":
        if not kind.is_color:
            raise ValueError(f"Terminals must have a color kind, got {kind.value!r}")
        return Node(row, col, kind, terminal=True, desired_edges=1)

    @staticmethod
    def color(row: int, col: int, kind: Kind) -> "Node":
        if not kind.is_color:
            raise ValueError(f"Colored nodes must have a color kind, got {kind.value!r}")
        return Node(row, col, kind, terminal=False, desired_edges=2)

    @staticmethod
    def octagon(row: int, col: int, passes: int) -> "Node":
        if passes < 1:
            raise ValueError(f"Octagon at ({row}, {col}) needs at least one pass (got {passes})")
        return Node(row, col, Kind.OCTAGON, terminal=False, desired_edges=2 * passes)

    @property
    def id(self) -> NodeId:
        return f"{self.row},{self.col}"

    @property
    def pos(self) -> Tuple[float, float, float]:
        # y-up coordinates for plotting
        return (float(self.col), float(-self.row), 0.0)

    def __repr__(self) -> str:
        tag = self.kind.value
        if self.terminal:
            tag += "*"
        return f"Node({self.row},{self.col} {tag})"


class Graph:
    """Static puzzle topology: nodes placed on a grid and their adjacency.

    Edges are undirected and keyed by `Pair.sorted`. Enumeration order is the
    sorted order of those keys, so anything iterating edges is deterministic.
    """

    def __init__(self) -> None:
        self.nodes: Dict[NodeId, Node] = {}
        self._at: Dict[Tuple[int, int], Node] = {}
        self._adj: Dict[Node, Set[Node]] = {}
        self._edges: Optional[List[Edge]] = None

    def add_node(self, node: Node) -> None:
        if node.id in self.nodes:
            raise ValueError(f"Node already exists: {node.id!r}")
        self.nodes[node.id] = node
        self._at[(node.row, node.col)] = node
        self._adj[node] = set()
        self._edges = None

    def add_edge(self, u: Node, v: Node) -> None:
        if u == v:
            raise ValueError("Self-loops are not supported")
        if u not in self._adj or v not in self._adj:
            raise KeyError(f"Both endpoints must exist (u={u!r}, v={v!r})")
        self._adj[u].add(v)
        self._adj[v].add(u)
        self._edges = None

    def at(self, row: int, col: int) -> Optional[Node]:
        return self._at.get((row, col))

    def neighbors(self, u: Node) -> List[Node]:
        return sorted(self._adj[u])

    def has_edge(self, u: Node, v: Node) -> bool:
        return v in self._adj.get(u, ())

    def edges(self) -> List[Edge]:
        if self._edges is None:
            self._edges = sorted(
                Pair(u, v) for u, nbs in self._adj.items() for v in nbs if u < v
            )
        return self._edges

    def crossing(self, edge: Edge) -> Optional[Edge]:
        """Return the diagonal edge crossing `edge` inside its unit square, if any."""
        a, b = edge
        if abs(a.row - b.row) != 1 or abs(a.col - b.col) != 1:
            return None
        c = self.at(a.row, b.col)
        d = self.at(b.row, a.col)
        if c is None or d is None or not self.has_edge(c, d):
            return None
        return Pair.sorted(c, d)

    def __len__(self) -> int:
        return len(self.nodes)

    def to_networkx(self):
        """Convert to a networkx.Graph keyed by node id."""
        import networkx as nx

        g = nx.Graph()
        for node_id, node in self.nodes.items():
            g.add_node(
                node_id,
                pos=node.pos,
                kind=node.kind.value,
                terminal=node.terminal,
                desired_edges=node.desired_edges,
            )
        g.add_edges_from((u.id, v.id) for u, v in self.edges())
        return g
