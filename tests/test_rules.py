import pytest

from lyne_solver.graph import EMPTY, Kind
from lyne_solver.puzzle import ContradictionError, Puzzle
from lyne_solver.rules import (
    ColorColorRule,
    ColorOctagonRule,
    CrossingEdgesRule,
    DesiredEdgesRule,
    OctagonOneEdgeOfColorRule,
    Rule,
    TerminalTerminalRule,
)

T, S = Kind.TRIANGLE, Kind.SQUARE


def _at(p, row, col):
    return p.graph.at(row, col)


def test_rules_satisfy_protocol():
    for rule in (
        ColorColorRule(),
        ColorOctagonRule(),
        TerminalTerminalRule(),
        DesiredEdgesRule(),
        CrossingEdgesRule(),
        OctagonOneEdgeOfColorRule(),
    ):
        assert isinstance(rule, Rule)


def test_color_color_rule():
    p = ColorColorRule()(Puzzle.from_grid_tokens(["TS", "TS"]))
    assert p.possibilities(_at(p, 0, 0), _at(p, 0, 1)) == {EMPTY}
    assert p.possibilities(_at(p, 0, 0), _at(p, 1, 0)) == {T, EMPTY}
    assert p.possibilities(_at(p, 0, 1), _at(p, 1, 1)) == {S, EMPTY}


def test_color_octagon_rule():
    p = ColorOctagonRule()(Puzzle.from_grid_tokens(["T1T", "S1S"]))
    assert p.possibilities(_at(p, 0, 0), _at(p, 0, 1)) == {T, EMPTY}
    assert p.possibilities(_at(p, 1, 0), _at(p, 0, 1)) == {S, EMPTY}
    # octagon-octagon edges are untouched
    assert p.possibilities(_at(p, 0, 1), _at(p, 1, 1)) == {T, S, EMPTY}
    # and so are color-color edges
    assert p.possibilities(_at(p, 0, 0), _at(p, 1, 0)) == {T, S, EMPTY}


def test_terminal_terminal_rule_only_when_color_has_more_nodes():
    alone = Puzzle.from_grid_tokens(["TT"])
    assert TerminalTerminalRule()(alone) is alone

    p = TerminalTerminalRule()(Puzzle.from_grid_tokens(["TT", "t."]))
    assert p.possibilities(_at(p, 0, 0), _at(p, 0, 1)) == {EMPTY}


def test_desired_edges_forces_the_only_edges():
    p = DesiredEdgesRule()(Puzzle.from_grid_tokens(["TtT"]))
    assert p.possibilities(_at(p, 0, 0), _at(p, 0, 1)) == {T}
    assert p.possibilities(_at(p, 0, 1), _at(p, 0, 2)) == {T}


def test_desired_edges_drops_extra_edges():
    p = Puzzle.from_grid_tokens(["Tt", "tT"])
    p = p.set(_at(p, 0, 0), _at(p, 0, 1), T)
    p = DesiredEdgesRule()(p)
    assert p.possibilities(_at(p, 0, 0), _at(p, 1, 0)) == {EMPTY}
    assert p.possibilities(_at(p, 0, 0), _at(p, 1, 1)) == {EMPTY}


@pytest.mark.parametrize("rows", [["T2T"], ["T.T"]])
def test_desired_edges_unreachable_count(rows):
    with pytest.raises(ContradictionError):
        DesiredEdgesRule()(Puzzle.from_grid_tokens(rows))


def test_desired_edges_too_many_present():
    p = Puzzle.from_grid_tokens(["Tt", "tT"])
    p = p.set(_at(p, 0, 0), _at(p, 0, 1), T).set(_at(p, 0, 0), _at(p, 1, 0), T)
    with pytest.raises(ContradictionError):
        DesiredEdgesRule()(p)


def test_crossing_edges_rule():
    p = Puzzle.from_grid_tokens(["Tt", "tT"])
    p = p.set(_at(p, 0, 1), _at(p, 1, 0), T)
    q = CrossingEdgesRule()(p)
    assert q.possibilities(_at(q, 0, 0), _at(q, 1, 1)) == {EMPTY}

    both = p.set(_at(p, 0, 0), _at(p, 1, 1), T)
    with pytest.raises(ContradictionError):
        CrossingEdgesRule()(both)


def test_octagon_rule_removes_lone_color_edge():
    p = Puzzle.from_grid_tokens(["T1T"])
    p = p.remove(_at(p, 0, 1), _at(p, 0, 2), T)
    q = OctagonOneEdgeOfColorRule()(p)
    assert q.possibilities(_at(q, 0, 0), _at(q, 0, 1)) == {EMPTY}


def test_octagon_rule_contradiction_on_fixed_lone_edge():
    p = Puzzle.from_grid_tokens(["T1T"])
    p = p.set(_at(p, 0, 0), _at(p, 0, 1), T).set(_at(p, 0, 1), _at(p, 0, 2), EMPTY)
    with pytest.raises(ContradictionError):
        OctagonOneEdgeOfColorRule()(p)


def test_octagon_rule_pairs_up_odd_edges():
    p = Puzzle.from_grid_tokens(["T1T", ".1."])
    o = _at(p, 0, 1)
    p = p.set(_at(p, 0, 0), o, T).set(o, _at(p, 0, 2), EMPTY)
    q = OctagonOneEdgeOfColorRule()(p)
    assert q.possibilities(o, _at(q, 1, 1)) == {T}


def test_rules_never_widen():
    p = ColorOctagonRule()(ColorColorRule()(Puzzle.from_grid_tokens(["TS", "11", "TS"])))
    for rule in (TerminalTerminalRule(), DesiredEdgesRule(), CrossingEdgesRule(), OctagonOneEdgeOfColorRule()):
        q = rule(p)
        for (edge, before), (_, after) in zip(p.possibility_items(), q.possibility_items()):
            assert after <= before, (rule, edge)
