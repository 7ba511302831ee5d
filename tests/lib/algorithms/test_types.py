import networkx as nx
import numpy as np
import pytest

from ghtree.lib.algorithms.types import FlowSummary, GomoryHuTree, TreeEdge


@pytest.fixture
def star_tree():
    #        1
    #        │[4]
    #  2 ─[6]─ 0 ─[3]─ 3 ─[9]─ 4
    return GomoryHuTree(
        num_vertices=5,
        edges=[TreeEdge(1, 0, 4), TreeEdge(2, 0, 6), TreeEdge(3, 0, 3), TreeEdge(4, 3, 9)],
        parent=[None, 0, 0, 0, 3],
    )


def test_flow_summary_is_frozen():
    summary = FlowSummary(
        total_flow=1, edge_flow={}, residual_cap={}, reachable={0}, min_cut=[]
    )
    with pytest.raises(AttributeError):
        summary.total_flow = 2


def test_tree_len_and_iter(star_tree):
    assert len(star_tree) == 4
    assert list(star_tree) == star_tree.edges


def test_tree_path(star_tree):
    assert star_tree.path(1, 4) == [1, 0, 3, 4]
    assert star_tree.path(4, 2) == [4, 3, 0, 2]
    assert star_tree.path(3, 3) == [3]


def test_tree_path_out_of_range(star_tree):
    with pytest.raises(ValueError, match="out of range"):
        star_tree.path(0, 5)


def test_tree_min_cut_value(star_tree):
    assert star_tree.min_cut_value(1, 2) == 4
    assert star_tree.min_cut_value(2, 4) == 3
    assert star_tree.min_cut_value(3, 4) == 9
    assert star_tree.min_cut_value(4, 3) == 9


def test_tree_min_cut_edge(star_tree):
    assert star_tree.min_cut_edge(1, 4) == TreeEdge(0, 3, 3)
    assert star_tree.min_cut_edge(4, 1) == TreeEdge(3, 0, 3)


def test_tree_min_cut_same_vertex_raises(star_tree):
    with pytest.raises(ValueError, match="must differ"):
        star_tree.min_cut_value(2, 2)


@pytest.mark.parametrize("v", ["1", 1.0, True, None])
def test_tree_rejects_non_integer_vertex(star_tree, v):
    with pytest.raises(ValueError, match="out of range"):
        star_tree.min_cut_value(0, v)
    with pytest.raises(ValueError, match="out of range"):
        star_tree.neighbors(v)


def test_tree_neighbors(star_tree):
    assert sorted(star_tree.neighbors(0)) == [(1, 4), (2, 6), (3, 3)]
    assert star_tree.neighbors(4) == [(3, 9)]


def test_tree_all_pairs(star_tree):
    matrix = star_tree.all_pairs_min_cut()
    assert matrix.shape == (5, 5)
    assert matrix.dtype == np.int64
    assert (matrix == matrix.T).all()
    assert (np.diag(matrix) == 0).all()
    for u in range(5):
        for v in range(5):
            if u != v:
                assert matrix[u, v] == star_tree.min_cut_value(u, v)


def test_tree_iter_pairs_sorted(star_tree):
    assert list(star_tree.iter_pairs()) == [
        TreeEdge(0, 1, 4),
        TreeEdge(0, 2, 6),
        TreeEdge(0, 3, 3),
        TreeEdge(3, 4, 9),
    ]


def test_tree_to_networkx(star_tree):
    T = star_tree.to_networkx()
    assert isinstance(T, nx.Graph)
    assert nx.is_tree(T)
    assert T[3][4]["weight"] == 9


def test_empty_tree():
    tree = GomoryHuTree(num_vertices=1, edges=[], parent=[None])
    assert len(tree) == 0
    assert tree.all_pairs_min_cut().tolist() == [[0]]
    assert tree.path(0, 0) == [0]


def test_all_pairs_beyond_int64():
    big = 2**70
    tree = GomoryHuTree(
        num_vertices=3,
        edges=[TreeEdge(1, 0, big), TreeEdge(2, 1, big + 1)],
        parent=[None, 0, 1],
    )
    matrix = tree.all_pairs_min_cut()
    assert matrix.dtype == object
    assert matrix[0, 2] == big
    assert matrix[1, 2] == big + 1
    assert matrix.tolist() == [[0, big, big], [big, 0, big + 1], [big, big + 1, 0]]


def test_all_pairs_stays_int64_when_it_fits(star_tree):
    assert star_tree.all_pairs_min_cut().dtype == np.int64
