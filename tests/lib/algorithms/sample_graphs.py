import random

import pytest

from ghtree.lib.graph import CapacityGraph


def random_graph(
    num_vertices: int,
    edge_prob: float,
    max_cap: int,
    seed: int,
    directed: bool = False,
) -> CapacityGraph:
    """Seeded Erdos-Renyi style graph with capacities in [1, max_cap]."""
    rng = random.Random(seed)
    g = CapacityGraph(num_vertices, directed=directed)
    for u in range(num_vertices):
        start = 0 if directed else u + 1
        for v in range(start, num_vertices):
            if u != v and rng.random() < edge_prob:
                g.add_edge(u, v, rng.randint(1, max_cap))
    return g


@pytest.fixture
def single_edge():
    #  0 ◄──[5]──► 1
    return CapacityGraph.from_edges(2, [(0, 1, 5)])


@pytest.fixture
def diamond4():
    # Capacity:
    #        [3]      [2]
    #    ┌───────►1───────┐
    #    │        │[1]    ▼
    #    0        │       3
    #    │        ▼       ▲
    #    └───────►2───────┘
    #        [2]      [3]
    # Undirected; every pairwise min cut equals 5.
    return CapacityGraph.from_edges(
        4, [(0, 1, 3), (0, 2, 2), (1, 2, 1), (1, 3, 2), (2, 3, 3)]
    )


@pytest.fixture
def empty3():
    # Three isolated vertices.
    return CapacityGraph(3)


@pytest.fixture
def line3():
    #  0 ◄──[7]──► 1 ◄──[2]──► 2
    return CapacityGraph.from_edges(3, [(0, 1, 7), (1, 2, 2)])


@pytest.fixture
def clrs6():
    # Directed textbook network; max flow 0 -> 5 is 23.
    return CapacityGraph.from_edges(
        6,
        [
            (0, 1, 16),
            (0, 2, 13),
            (1, 2, 10),
            (2, 1, 4),
            (1, 3, 12),
            (3, 2, 9),
            (2, 4, 14),
            (4, 3, 7),
            (3, 5, 20),
            (4, 5, 4),
        ],
        directed=True,
    )


@pytest.fixture
def gusfield6():
    # Undirected six-vertex network with distinct cut values.
    return CapacityGraph.from_edges(
        6,
        [
            (0, 1, 1),
            (0, 2, 7),
            (1, 2, 1),
            (1, 3, 3),
            (1, 4, 2),
            (2, 4, 4),
            (3, 4, 1),
            (3, 5, 6),
            (4, 5, 2),
        ],
    )


@pytest.fixture
def two_components():
    # {0, 1, 2} triangle and {3, 4} edge, no link between them.
    return CapacityGraph.from_edges(
        5, [(0, 1, 4), (1, 2, 4), (0, 2, 1), (3, 4, 9)]
    )


@pytest.fixture
def complete5():
    # K5 with unit capacities.
    return CapacityGraph.from_edges(
        5, [(u, v, 1) for u in range(5) for v in range(u + 1, 5)]
    )
