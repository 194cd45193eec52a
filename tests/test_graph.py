import pytest

from lyne_solver.graph import EMPTY, Kind, Node, sorted_kinds
from lyne_solver.grid import build_grid_from_tokens
from lyne_solver.pair import Pair


def test_node_identity_is_position():
    a = Node.terminal_of(0, 0, Kind.TRIANGLE)
    b = Node.color(0, 0, Kind.SQUARE)
    assert a == b
    assert hash(a) == hash(b)
    assert Node.octagon(1, 0, 2) > a


def test_node_desired_edges():
    assert Node.terminal_of(0, 0, Kind.SQUARE).desired_edges == 1
    assert Node.color(0, 0, Kind.SQUARE).desired_edges == 2
    assert Node.octagon(0, 0, 3).desired_edges == 6
    with pytest.raises(ValueError):
        Node.terminal_of(0, 0, Kind.OCTAGON)
    with pytest.raises(ValueError):
        Node.octagon(0, 0, 0)


def test_sorted_kinds_puts_empty_last():
    assert sorted_kinds({EMPTY, Kind.DIAMOND, Kind.TRIANGLE}) == [Kind.TRIANGLE, Kind.DIAMOND, EMPTY]


def test_grid_uses_eight_neighbourhood():
    g = build_grid_from_tokens(["Tt", "tT"])
    assert len(g) == 4
    assert len(g.edges()) == 6
    assert g.edges() == sorted(g.edges())
    assert [n.id for n in g.neighbors(g.at(0, 0))] == ["0,1", "1,0", "1,1"]


def test_grid_skips_holes():
    g = build_grid_from_tokens(["T.T"])
    assert len(g) == 2
    assert g.edges() == []


def test_crossing_diagonals():
    g = build_grid_from_tokens(["Tt", "tT"])
    n00, n01, n10, n11 = g.at(0, 0), g.at(0, 1), g.at(1, 0), g.at(1, 1)
    assert g.crossing(Pair.sorted(n00, n11)) == Pair.sorted(n01, n10)
    assert g.crossing(Pair.sorted(n01, n10)) == Pair.sorted(n00, n11)
    assert g.crossing(Pair.sorted(n00, n01)) is None


def test_crossing_needs_both_diagonal_nodes():
    g = build_grid_from_tokens(["T.", "tT"])
    assert g.crossing(Pair.sorted(g.at(0, 0), g.at(1, 1))) is None


@pytest.mark.parametrize(
    "rows, message",
    [
        (["T.."], "exactly two terminals"),
        (["TtT", "TTx"], "Unknown token"),
        (["TT", "T"], "equal width"),
        (["111"], "No terminals"),
        (["TT", "s."], "'square' must have exactly two terminals"),
    ],
)
def test_grid_rejects_bad_boards(rows, message):
    with pytest.raises(ValueError, match=message):
        build_grid_from_tokens(rows)


def test_to_networkx():
    g = build_grid_from_tokens(["T1T"])
    nxg = g.to_networkx()
    assert set(nxg.nodes) == {"0,0", "0,1", "0,2"}
    assert nxg.number_of_edges() == 2
    assert nxg.nodes["0,1"]["desired_edges"] == 2
    assert nxg.nodes["0,0"]["terminal"] is True
