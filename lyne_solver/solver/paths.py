from __future__ import annotations

from collections import Counter
from typing import Dict, FrozenSet, List, Optional, Set, Tuple

from ..graph import Edge, Kind, Node
from ..pair import Pair
from ..puzzle import Puzzle


def solution_paths(puzzle: Puzzle) -> Optional[Dict[Kind, List[Node]]]:
    """Trace one path per color through a fully determined puzzle.

    Returns None when the edge assignment doesn't form valid paths (a color
    can't be traced through all of its nodes, or some node is visited the
    wrong number of times).
    """
    if not puzzle.is_solved():
        raise AssertionError("solution_paths needs a puzzle with every edge determined")

    used: Set[Edge] = set()
    paths: Dict[Kind, List[Node]] = {}
    for pair in puzzle.terminals():
        start, dest = pair
        path = _find_path(puzzle, [start], dest, used)
        if path is None:
            return None
        paths[dest.kind] = path

    # colored nodes were already checked while tracing; this catches octagons
    counts = Counter(n for path in paths.values() for n in path)
    for node in puzzle.nodes():
        if counts[node] != (node.desired_edges + 1) // 2:
            return None
    return paths


def reconstruct(puzzle: Puzzle) -> Optional[FrozenSet[Tuple[Node, ...]]]:
    paths = solution_paths(puzzle)
    if paths is None:
        return None
    return frozenset(tuple(p) for p in paths.values())


def _find_path(puzzle: Puzzle, path: List[Node], dest: Node, used: Set[Edge]) -> Optional[List[Node]]:
    cur = path[-1]
    if cur == dest:
        if all(path.count(n) == 1 for n in puzzle.members(dest.kind)):
            return path
        return None

    candidates = [
        n
        for n in puzzle.neighbors(cur)
        if dest.kind in puzzle.possibilities(cur, n)
        and Pair.sorted(cur, n) not in used
        # never come back to a terminal already on the path
        and not (n.terminal and n in path)
    ]
    # step onto the destination only once nothing else is left
    candidates.sort(key=lambda n: n == dest)

    for nxt in candidates:
        edge = Pair.sorted(cur, nxt)
        path.append(nxt)
        used.add(edge)
        found = _find_path(puzzle, path, dest, used)
        if found is not None:
            return found
        path.pop()
        used.discard(edge)
    return None
