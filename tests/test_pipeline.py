import pytest

from lyne_solver.graph import EMPTY, Kind
from lyne_solver.puzzle import ContradictionError, Puzzle
from lyne_solver.solver import MULTI_TIME_INFERENCE, ONE_TIME_INFERENCE, Chain, Fixpoint


def _subset_everywhere(narrow, wide):
    return all(a <= b for (_, a), (_, b) in zip(narrow.possibility_items(), wide.possibility_items()))


class _Counting:
    """Removes EMPTY from one more edge per call, so it needs several passes."""

    def __init__(self):
        self.calls = 0

    def __call__(self, puzzle):
        self.calls += 1
        for edge, kinds in puzzle.possibility_items():
            if EMPTY in kinds and len(kinds) > 1:
                return puzzle.remove(edge.first, edge.second, EMPTY)
        return puzzle


def test_chain_applies_rules_in_order():
    seen = []

    def first(p):
        seen.append("first")
        return p

    def second(p):
        seen.append("second")
        return p

    p = Puzzle.from_grid_tokens(["TT"])
    assert Chain(first, second)(p) is p
    assert seen == ["first", "second"]


def test_fixpoint_iterates_until_unchanged():
    rule = _Counting()
    p = Puzzle.from_grid_tokens(["TtT"])
    out = Fixpoint(rule)(p)
    assert all(kinds == {Kind.TRIANGLE} for _, kinds in out.possibility_items())
    # two narrowing calls plus the one that changes nothing
    assert rule.calls == 3


def test_pipeline_propagates_contradictions():
    with pytest.raises(ContradictionError):
        MULTI_TIME_INFERENCE(ONE_TIME_INFERENCE(Puzzle.from_grid_tokens(["T2T"])))


@pytest.mark.parametrize("rows", [["Tt", "tT"], ["TS", "11", "TS"], ["T1T", "S1S"]])
def test_fixpoint_pass_is_idempotent(rows):
    p = ONE_TIME_INFERENCE(Puzzle.from_grid_tokens(rows))
    once = MULTI_TIME_INFERENCE(p)
    assert MULTI_TIME_INFERENCE(once) == once


@pytest.mark.parametrize("rows", [["Tt", "tT"], ["TS", "11", "TS"], ["T1T", "S1S"], ["TtT"]])
def test_propagation_only_narrows(rows):
    p = Puzzle.from_grid_tokens(rows)
    one = ONE_TIME_INFERENCE(p)
    assert _subset_everywhere(one, p)
    multi = MULTI_TIME_INFERENCE(one)
    assert _subset_everywhere(multi, one)


def test_propagation_after_fixing_an_edge_only_narrows():
    p = ONE_TIME_INFERENCE(Puzzle.from_grid_tokens(["TS", "11", "TS"]))
    g = p.graph
    fixed = p.set(g.at(0, 0), g.at(1, 0), Kind.TRIANGLE)
    assert _subset_everywhere(fixed, p)
    assert _subset_everywhere(MULTI_TIME_INFERENCE(fixed), fixed)


def test_one_time_pass_on_two_octagons():
    p = ONE_TIME_INFERENCE(Puzzle.from_grid_tokens(["TS", "11", "TS"]))
    g = p.graph
    assert p.possibilities(g.at(0, 0), g.at(0, 1)) == {EMPTY}
    assert p.possibilities(g.at(2, 0), g.at(2, 1)) == {EMPTY}
    assert p.possibilities(g.at(0, 0), g.at(1, 1)) == {Kind.TRIANGLE, EMPTY}
    assert p.possibilities(g.at(1, 0), g.at(1, 1)) == {Kind.TRIANGLE, Kind.SQUARE, EMPTY}
