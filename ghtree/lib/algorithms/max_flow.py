from __future__ import annotations

from typing import List, Literal, Tuple, Union, overload

from ghtree.lib.algorithms.base import Capacity, Matrix, VertexID
from ghtree.lib.algorithms.bfs import find_augmenting_path
from ghtree.lib.algorithms.min_cut import cut_edges, reachable_set
from ghtree.lib.algorithms.types import Arc, FlowSummary
from ghtree.lib.graph import CapacityGraph
from ghtree.logging import get_logger

logger = get_logger(__name__)


@overload
def calc_max_flow(
    graph: CapacityGraph,
    src: VertexID,
    dst: VertexID,
    *,
    return_summary: Literal[False] = False,
    return_residual: Literal[False] = False,
) -> Capacity: ...


@overload
def calc_max_flow(
    graph: CapacityGraph,
    src: VertexID,
    dst: VertexID,
    *,
    return_summary: Literal[True],
    return_residual: Literal[False] = False,
) -> Tuple[Capacity, FlowSummary]: ...


@overload
def calc_max_flow(
    graph: CapacityGraph,
    src: VertexID,
    dst: VertexID,
    *,
    return_summary: Literal[False] = False,
    return_residual: Literal[True],
) -> Tuple[Capacity, Matrix]: ...


@overload
def calc_max_flow(
    graph: CapacityGraph,
    src: VertexID,
    dst: VertexID,
    *,
    return_summary: Literal[True],
    return_residual: Literal[True],
) -> Tuple[Capacity, FlowSummary, Matrix]: ...


def calc_max_flow(
    graph: CapacityGraph,
    src: VertexID,
    dst: VertexID,
    *,
    return_summary: bool = False,
    return_residual: bool = False,
) -> Union[Capacity, tuple]:
    """Compute the maximum flow from ``src`` to ``dst`` with shortest
    augmenting paths.

    The function:
      1. Allocates a fresh residual matrix from ``graph.residual()``.
      2. Repeatedly finds a shortest src -> dst path in the residual graph by
         breadth-first search over arcs with positive residual capacity.
      3. Pushes the path's bottleneck: forward arcs lose it, reverse arcs
         gain it.
      4. Stops when no augmenting path remains.

    Breadth-first path selection bounds the number of augmentations by
    O(V * E), giving O(V * E^2) overall.

    Args:
        graph (CapacityGraph):
            The original graph. It is never modified.
        src (VertexID):
            The source vertex.
        dst (VertexID):
            The sink vertex. Must differ from ``src``.
        return_summary (bool):
            If True, also return a FlowSummary with flows, residual
            capacities and the minimum cut. Defaults to False.
        return_residual (bool):
            If True, also return the exhausted residual matrix. It is owned
            by the caller and can be fed to ``reachable_set``.
            Defaults to False.

    Returns:
        Union[Capacity, tuple]:
            - If neither flag: int (total flow)
            - If return_summary only: tuple[int, FlowSummary]
            - If return_residual only: tuple[int, Matrix]
            - If both flags: tuple[int, FlowSummary, Matrix]

    Raises:
        ValueError: If a vertex is out of range or ``src == dst``.

    Examples:
        >>> g = CapacityGraph.from_edges(3, [(0, 1, 10), (1, 2, 5)])
        >>> calc_max_flow(g, 0, 2)
        5
        >>> flow, summary = calc_max_flow(g, 0, 2, return_summary=True)
        >>> summary.min_cut
        [(1, 2)]
    """
    graph.check_vertex(src)
    graph.check_vertex(dst)
    if src == dst:
        raise ValueError(f"Source and sink must differ, got {src} for both.")

    residual = graph.residual()
    adjacency = graph.adjacency()
    max_flow = 0
    augmentations = 0

    while True:
        path = find_augmenting_path(residual, adjacency, src, dst)
        if path is None:
            # No path found; we've reached max flow.
            break

        bottleneck = min(residual[u][v] for u, v in zip(path, path[1:]))
        for u, v in zip(path, path[1:]):
            residual[u][v] -= bottleneck
            residual[v][u] += bottleneck

        max_flow += bottleneck
        augmentations += 1

    logger.debug(
        f"Max flow {src} -> {dst}: {max_flow} after {augmentations} augmentations"
    )

    if not (return_summary or return_residual):
        return max_flow

    ret: list = [max_flow]
    if return_summary:
        ret.append(_build_flow_summary(max_flow, graph, residual, src))
    if return_residual:
        ret.append(residual)
    return tuple(ret)


def _build_flow_summary(
    total_flow: Capacity,
    graph: CapacityGraph,
    residual: Matrix,
    src: VertexID,
) -> FlowSummary:
    """Build a FlowSummary from the exhausted residual state."""
    edge_flow = {}
    residual_cap = {}

    original = graph.to_matrix()
    adjacency = graph.adjacency()
    for u in range(graph.num_vertices):
        for v in adjacency[u]:
            if original[u][v] > 0:
                residual_cap[(u, v)] = residual[u][v]
            # capacity - residual is skew-symmetric; keep the positive half
            net = original[u][v] - residual[u][v]
            if net > 0:
                edge_flow[(u, v)] = net

    reachable = reachable_set(residual, src, adjacency)

    return FlowSummary(
        total_flow=total_flow,
        edge_flow=edge_flow,
        residual_cap=residual_cap,
        reachable=reachable,
        min_cut=cut_edges(graph, reachable),
    )


def calc_min_cut(
    graph: CapacityGraph,
    src: VertexID,
    dst: VertexID,
) -> Tuple[Capacity, List[Arc]]:
    """
    Return the max-flow value and the arcs of a minimum ``src``-``dst`` cut.

    Args:
        graph: The original graph.
        src: Source vertex.
        dst: Sink vertex.

    Returns:
        Tuple of (flow value, list of ``(u, v)`` arcs leaving the source side).

    Raises:
        ValueError: If a vertex is out of range or ``src == dst``.
    """
    flow, summary = calc_max_flow(graph, src, dst, return_summary=True)
    return flow, summary.min_cut


def saturated_edges(
    graph: CapacityGraph,
    src: VertexID,
    dst: VertexID,
) -> List[Arc]:
    """Identify saturated (bottleneck) arcs in the max flow solution.

    Args:
        graph: The graph to analyze
        src: Source vertex
        dst: Sink vertex

    Returns:
        List of ``(u, v)`` arcs of the original graph whose residual capacity
        dropped to zero.
    """
    _, summary = calc_max_flow(graph, src, dst, return_summary=True)
    return [arc for arc, residual in summary.residual_cap.items() if residual == 0]
