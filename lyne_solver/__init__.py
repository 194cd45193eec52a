from .graph import EMPTY, Graph, Kind, Node
from .pair import Pair
from .puzzle import ContradictionError, Puzzle
from .solver import SolveResult, solve, solve_puzzle

__all__ = [
    "ContradictionError",
    "EMPTY",
    "Graph",
    "Kind",
    "Node",
    "Pair",
    "Puzzle",
    "SolveResult",
    "solve",
    "solve_puzzle",
]
