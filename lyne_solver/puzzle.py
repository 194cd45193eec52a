from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from .graph import COLORS, EMPTY, Edge, Graph, Kind, Node
from .grid import build_grid_from_tokens
from .pair import Pair

Possibilities = FrozenSet[Kind]


class ContradictionError(ValueError):
    """Narrowing would leave an edge with no possible kind."""


@dataclass(frozen=True)
class _Layout:
    """Everything a puzzle state shares with the states derived from it."""

    graph: Graph
    edges: Tuple[Edge, ...]
    index: Dict[Edge, int]
    terminals: Tuple[Pair, ...]
    colors: Tuple[Kind, ...]
    members: Dict[Kind, Tuple[Node, ...]]
    meta: Dict[str, Any] = field(default_factory=dict)


class Puzzle:
    """An immutable puzzle state: the possibility set of every edge.

    Narrowing operations (`set`, `remove`, `restrict`, `narrow`) never modify
    the receiver; they return a new state sharing the graph and the edge
    index, and raise `ContradictionError` instead of producing an empty set.
    Operations that change nothing return the receiver itself.
    """

    __slots__ = ("_layout", "_possibilities")

    def __init__(self, graph: Graph, *, meta: Optional[Dict[str, Any]] = None) -> None:
        edges = tuple(graph.edges())
        by_color: Dict[Kind, List[Node]] = {}
        for node in sorted(graph.nodes.values()):
            if node.kind.is_color:
                by_color.setdefault(node.kind, []).append(node)

        colors = tuple(k for k in COLORS if k in by_color)
        terminals = []
        for kind in colors:
            ends = [n for n in by_color[kind] if n.terminal]
            if len(ends) != 2:
                raise ValueError(f"Color {kind.value!r} must have exactly two terminals (found {len(ends)})")
            terminals.append(Pair(ends[0], ends[1]))

        self._layout = _Layout(
            graph=graph,
            edges=edges,
            index={e: i for i, e in enumerate(edges)},
            terminals=tuple(terminals),
            colors=colors,
            members={k: tuple(v) for k, v in by_color.items()},
            meta=dict(meta or {}),
        )
        initial = frozenset(colors) | {EMPTY}
        self._possibilities: Tuple[Possibilities, ...] = (initial,) * len(edges)

    @classmethod
    def _derive(cls, layout: _Layout, possibilities: Tuple[Possibilities, ...]) -> "Puzzle":
        p = cls.__new__(cls)
        p._layout = layout
        p._possibilities = possibilities
        return p

    # -- topology ---------------------------------------------------------

    @property
    def graph(self) -> Graph:
        return self._layout.graph

    @property
    def meta(self) -> Dict[str, Any]:
        return self._layout.meta

    def nodes(self) -> List[Node]:
        return sorted(self._layout.graph.nodes.values())

    def edges(self) -> Tuple[Edge, ...]:
        return self._layout.edges

    def neighbors(self, node: Node) -> List[Node]:
        return self._layout.graph.neighbors(node)

    def terminals(self) -> Tuple[Pair, ...]:
        """One (first, second) terminal pair per color, in color order."""
        return self._layout.terminals

    def colors(self) -> Tuple[Kind, ...]:
        return self._layout.colors

    def members(self, kind: Kind) -> Tuple[Node, ...]:
        """All nodes of a color, terminals included."""
        return self._layout.members.get(kind, ())

    # -- possibilities ----------------------------------------------------

    def _slot(self, a: Node, b: Node) -> int:
        edge = Pair.sorted(a, b)
        try:
            return self._layout.index[edge]
        except KeyError as e:
            raise KeyError(f"No edge between {a!r} and {b!r}") from e

    def possibilities(self, a: Node, b: Node) -> Possibilities:
        return self._possibilities[self._slot(a, b)]

    def possibility_items(self) -> Iterator[Tuple[Edge, Possibilities]]:
        """(edge, possibilities) in edge enumeration order."""
        return zip(self._layout.edges, self._possibilities)

    def is_solved(self) -> bool:
        return all(len(p) == 1 for p in self._possibilities)

    def kind_of(self, a: Node, b: Node) -> Kind:
        kinds = self.possibilities(a, b)
        if len(kinds) != 1:
            raise AssertionError(f"Edge {a!r}-{b!r} is not determined: {sorted(k.value for k in kinds)}")
        return next(iter(kinds))

    # -- narrowing --------------------------------------------------------

    def set(self, a: Node, b: Node, kind: Kind) -> "Puzzle":
        """Fix the edge to exactly `kind`."""
        slot = self._slot(a, b)
        current = self._possibilities[slot]
        if kind not in current:
            raise ContradictionError(f"{kind.value} is not possible for edge {a!r}-{b!r}")
        if len(current) == 1:
            return self
        return self._replace({slot: frozenset((kind,))})

    def remove(self, a: Node, b: Node, kind: Kind) -> "Puzzle":
        return self.restrict(a, b, self.possibilities(a, b) - {kind})

    def restrict(self, a: Node, b: Node, kinds: Iterable[Kind]) -> "Puzzle":
        """Intersect the edge's possibilities with `kinds`."""
        return self.narrow({Pair.sorted(a, b): kinds})

    def narrow(self, changes: Mapping[Edge, Iterable[Kind]]) -> "Puzzle":
        """Intersect several edges' possibilities at once."""
        updates: Dict[int, Possibilities] = {}
        for edge, kinds in changes.items():
            a, b = edge
            slot = self._slot(a, b)
            current = updates.get(slot, self._possibilities[slot])
            narrowed = current & frozenset(kinds)
            if not narrowed:
                raise ContradictionError(f"No possibilities left for edge {a!r}-{b!r}")
            if narrowed != current:
                updates[slot] = narrowed
        if not updates:
            return self
        return self._replace(updates)

    def _replace(self, updates: Mapping[int, Possibilities]) -> "Puzzle":
        table = list(self._possibilities)
        for slot, kinds in updates.items():
            table[slot] = kinds
        return Puzzle._derive(self._layout, tuple(table))

    # -- value semantics --------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Puzzle):
            return NotImplemented
        if self is other:
            return True
        return self._layout.edges == other._layout.edges and self._possibilities == other._possibilities

    def __hash__(self) -> int:
        return hash(self._possibilities)

    def __repr__(self) -> str:
        undetermined = sum(1 for p in self._possibilities if len(p) > 1)
        return f"Puzzle(nodes={len(self.graph)}, edges={len(self._possibilities)}, undetermined={undetermined})"

    def to_networkx(self):
        return self.graph.to_networkx()

    # -- parsing ----------------------------------------------------------

    @staticmethod
    def from_file(path: str | Path) -> "Puzzle":
        path = Path(path)
        if path.suffix.lower() == ".json":
            return Puzzle.from_json(path.read_text(encoding="utf-8"))
        return Puzzle.from_lyne_text(path.read_text(encoding="utf-8"), source_name=str(path))

    @staticmethod
    def from_json(text: str) -> "Puzzle":
        obj = json.loads(text)
        if not isinstance(obj, dict) or "grid" not in obj:
            raise ValueError("JSON puzzle must be an object with a 'grid' entry")
        rows = obj["grid"]
        if not isinstance(rows, list):
            raise ValueError("'grid' must be a list of rows")
        token_rows: List[List[str]] = []
        for row in rows:
            if isinstance(row, str):
                token_rows.append(_tokenize_row(row))
            elif isinstance(row, list):
                token_rows.append([str(t) for t in row])
            else:
                raise ValueError(f"Grid rows must be strings or lists, got {type(row).__name__}")
        meta = obj.get("meta", {})
        if not isinstance(meta, dict):
            raise ValueError("'meta' must be an object")
        return Puzzle.from_grid_tokens(token_rows, meta=dict(meta))

    @staticmethod
    def from_lyne_text(text: str, *, source_name: str = "<text>") -> "Puzzle":
        meta, token_rows = scan_lyne_text(text)
        meta.setdefault("source", source_name)
        if not token_rows:
            raise ValueError("No grid found in .lyne text")
        width = max(len(r) for r in token_rows)
        for r in token_rows:
            if len(r) != width:
                raise ValueError("All grid rows must have the same width in .lyne")
        return Puzzle.from_grid_tokens(token_rows, meta=meta)

    @staticmethod
    def from_grid_tokens(
        token_rows: Sequence[Sequence[str]],
        *,
        meta: Optional[Dict[str, Any]] = None,
    ) -> "Puzzle":
        return Puzzle(build_grid_from_tokens(token_rows), meta=meta)


def _tokenize_row(row: str) -> List[str]:
    # whitespace-separated tokens if the row has spaces, else one token per char
    if " " in row.strip():
        return [t for t in row.strip().split() if t]
    return list(row.strip())


def scan_lyne_text(text: str) -> Tuple[Dict[str, Any], List[List[str]]]:
    """Split `.lyne` text into metadata and token rows.

    - "# key: value" lines are metadata
    - "# " lines without a colon are comments
    - anything else (including rows starting with '#', a hole token) is a grid row
    """
    meta: Dict[str, Any] = {}
    token_rows: List[List[str]] = []
    for ln in text.splitlines():
        raw = ln.strip()
        if not raw:
            continue
        if raw.startswith("#"):
            hdr = raw[1:].strip()
            if ":" in hdr:
                k, v = [x.strip() for x in hdr.split(":", 1)]
                meta[k.lower()] = v
                continue
            if len(raw) >= 2 and raw[1].isspace():
                continue
        toks = _tokenize_row(raw)
        if toks:
            token_rows.append(toks)
    return meta, token_rows
