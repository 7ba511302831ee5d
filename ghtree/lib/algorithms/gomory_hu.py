from __future__ import annotations

from typing import List, Optional

from ghtree.lib.algorithms.base import TREE_ROOT, GomoryHuInvariantError, VertexID
from ghtree.lib.algorithms.max_flow import calc_max_flow
from ghtree.lib.algorithms.min_cut import reachable_set
from ghtree.lib.algorithms.types import GomoryHuTree, TreeEdge
from ghtree.lib.graph import CapacityGraph
from ghtree.logging import get_logger

logger = get_logger(__name__)


def build_gomory_hu_tree(graph: CapacityGraph) -> GomoryHuTree:
    """Build a Gomory-Hu tree of an undirected graph with V - 1 max-flow runs.

    Every vertex starts attached to vertex 0. Stage ``s`` (for s = 1 .. V-1):
      1. Takes ``t = parent[s]``.
      2. Computes the max flow between s and t; its value is the weight of the
         tree edge {s, t}.
      3. Finds the s side of the resulting minimum cut.
      4. Moves every later vertex that is attached to t and lies on the s
         side over to s.

    Only vertices attached to the *old* parent t move, and only when they
    fall on s's side. Any other re-parenting breaks the pairwise min-cut
    property of the result. Since parents always point to lower indices,
    each stage joins s to an existing tree vertex and no cycle can form.

    Args:
        graph (CapacityGraph): An undirected graph. It is never modified.

    Returns:
        GomoryHuTree: ``V - 1`` edges; empty when the graph has one vertex.
        Disconnected vertex pairs yield zero-weight edges.

    Raises:
        ValueError: If the graph is directed.
        GomoryHuInvariantError: If the parent array becomes inconsistent or a
            max-flow stage is rejected; no partial tree is returned.

    Examples:
        >>> g = CapacityGraph.from_edges(2, [(0, 1, 5)])
        >>> build_gomory_hu_tree(g).edges
        [TreeEdge(u=1, v=0, weight=5)]
    """
    if graph.directed:
        raise ValueError("Gomory-Hu trees are defined for undirected graphs only.")

    n = graph.num_vertices
    adjacency = graph.adjacency()
    parent: List[Optional[VertexID]] = [TREE_ROOT] * n
    parent[TREE_ROOT] = None
    edges: List[TreeEdge] = []

    for s in range(1, n):
        t = parent[s]
        if t is None or not 0 <= t < s:
            raise GomoryHuInvariantError(
                f"Stage {s}: parent {t!r} is not an already processed vertex."
            )

        try:
            cut_value, residual = calc_max_flow(graph, s, t, return_residual=True)
        except ValueError as e:
            raise GomoryHuInvariantError(
                f"Stage {s}: max flow between {s} and {t} failed: {e}"
            ) from e

        edges.append(TreeEdge(s, t, cut_value))
        s_side = reachable_set(residual, s, adjacency)

        moved = []
        for i in range(s + 1, n):
            if parent[i] == t and i in s_side:
                parent[i] = s
                moved.append(i)

        logger.debug(
            f"Stage {s}: tree edge ({s}, {t}) weight {cut_value}, "
            f"re-parented {moved or 'none'}"
        )

    logger.debug(f"Built Gomory-Hu tree with {len(edges)} edges over {n} vertices")
    return GomoryHuTree(num_vertices=n, edges=edges, parent=parent)
