from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Union

from ..graph import Edge, Kind, Node
from ..puzzle import Puzzle


@dataclass(frozen=True)
class Narrowed:
    puzzle: Puzzle


@dataclass(frozen=True)
class Contradicted:
    reason: str


# What became of a branch after propagation or fixing an edge.
Outcome = Union[Narrowed, Contradicted]


@dataclass
class SolveResult:
    paths: Dict[Kind, List[Node]]  # ordered nodes from terminal->terminal
    edge_kind: Dict[Edge, Kind]  # used edges only
    stats: Dict[str, int] = field(default_factory=dict)
