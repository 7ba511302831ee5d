"""ghtree: maximum flow, minimum cut and Gomory-Hu tree construction.

ghtree builds Gomory-Hu trees of undirected integer-capacity graphs: weighted
spanning trees in which the lightest edge on the path between two vertices
equals their minimum cut in the original graph.

Primary API:
    CapacityGraph - Dense capacity matrix (graph store)
    calc_max_flow() - Shortest augmenting path max flow
    calc_min_cut() - Max flow value plus minimum cut arcs
    build_gomory_hu_tree() - V - 1 max-flow runs yielding a GomoryHuTree
    from_networkx() / to_networkx() - NetworkX conversion

Example:
    from ghtree import CapacityGraph, build_gomory_hu_tree, calc_max_flow

    g = CapacityGraph.from_edges(4, [(0, 1, 3), (1, 2, 1), (2, 3, 3)])
    calc_max_flow(g, 0, 3)                      # 1
    tree = build_gomory_hu_tree(g)
    tree.min_cut_value(0, 3)                    # 1
"""

from __future__ import annotations

from ghtree import cli, logging
from ghtree._version import __version__
from ghtree.config import GRAPH_CONFIG, GraphConfig
from ghtree.lib.algorithms.base import DuplicateEdgePolicy, GomoryHuInvariantError
from ghtree.lib.algorithms.gomory_hu import build_gomory_hu_tree
from ghtree.lib.algorithms.max_flow import (
    calc_max_flow,
    calc_min_cut,
    saturated_edges,
)
from ghtree.lib.algorithms.min_cut import cut_edges, cut_value, reachable_set
from ghtree.lib.algorithms.types import FlowSummary, GomoryHuTree, TreeEdge
from ghtree.lib.graph import CapacityGraph
from ghtree.lib.io import FlowProblem, load_flow_problem, parse_flow_problem
from ghtree.lib.nx import NodeMap, from_networkx, from_numpy, to_networkx, to_numpy

__all__ = [
    # Version
    "__version__",
    # Graph store and configuration
    "CapacityGraph",
    "GraphConfig",
    "GRAPH_CONFIG",
    "DuplicateEdgePolicy",
    # Algorithms
    "calc_max_flow",
    "calc_min_cut",
    "saturated_edges",
    "reachable_set",
    "cut_edges",
    "cut_value",
    "build_gomory_hu_tree",
    # Types
    "FlowSummary",
    "GomoryHuTree",
    "TreeEdge",
    "GomoryHuInvariantError",
    # I/O
    "FlowProblem",
    "load_flow_problem",
    "parse_flow_problem",
    # Library integrations
    "NodeMap",
    "from_networkx",
    "to_networkx",
    "from_numpy",
    "to_numpy",
    # Utilities
    "cli",
    "logging",
]
