import sys

import pytest

from ghtree.lib.algorithms.max_flow import calc_max_flow
from ghtree.lib.algorithms.min_cut import cut_edges, cut_value, reachable_set
from ghtree.lib.graph import CapacityGraph


def test_reachable_set_follows_positive_residual_only():
    residual = [
        [0, 3, 0, 0],
        [0, 0, 0, 2],
        [1, 0, 0, 0],
        [0, 0, 0, 0],
    ]
    assert reachable_set(residual, 0) == {0, 1, 3}
    assert reachable_set(residual, 2) == {0, 1, 2, 3}
    assert reachable_set(residual, 3) == {3}


def test_reachable_set_with_adjacency_matches_full_scan(diamond4):
    _, residual = calc_max_flow(diamond4, 1, 2, return_residual=True)
    assert reachable_set(residual, 1, diamond4.adjacency()) == reachable_set(
        residual, 1
    )


def test_reachable_set_out_of_range():
    with pytest.raises(ValueError, match="out of range"):
        reachable_set([[0]], 1)


def test_reachable_set_long_chain_no_recursion_limit():
    """A chain longer than the recursion limit is traversed without error."""
    n = sys.getrecursionlimit() + 500
    g = CapacityGraph.from_edges(n, [(i, i + 1, 1) for i in range(n - 1)])
    reachable = reachable_set(g.residual(), 0, g.adjacency())
    assert len(reachable) == n


def test_cut_edges_and_value(line3):
    assert cut_edges(line3, {0, 1}) == [(1, 2)]
    assert cut_value(line3, {0, 1}) == 2
    assert cut_edges(line3, {0}) == [(0, 1)]
    assert cut_value(line3, {0}) == 7


def test_cut_edges_directed_ignores_incoming_arcs(clrs6):
    # Arc (3, 2) points into the set and does not count.
    assert cut_edges(clrs6, {0, 1, 2, 4}) == [(1, 3), (4, 3), (4, 5)]
    assert cut_value(clrs6, {0, 1, 2, 4}) == 23


def test_cut_value_empty_when_disconnected(two_components):
    assert cut_edges(two_components, {0, 1, 2}) == []
    assert cut_value(two_components, {0, 1, 2}) == 0
