"""Minimum cut extraction from an exhausted residual graph."""

from __future__ import annotations

from typing import List, Optional, Sequence, Set

from ghtree.lib.algorithms.base import Capacity, Matrix, VertexID
from ghtree.lib.algorithms.types import Arc
from ghtree.lib.graph import CapacityGraph


def reachable_set(
    residual: Matrix,
    src: VertexID,
    adjacency: Optional[Sequence[Sequence[VertexID]]] = None,
) -> Set[VertexID]:
    """
    Vertices reachable from ``src`` over arcs with positive residual capacity.

    After a max-flow run has exhausted every augmenting path, this set is
    the source side of a minimum cut. The traversal uses an explicit stack,
    so its depth does not grow with the graph.

    Args:
        residual: The exhausted residual matrix returned by ``calc_max_flow``.
        src: The source vertex of that run.
        adjacency: Optional neighbor lists restricting the scan. When
            omitted, every column of each row is examined.

    Returns:
        Set[VertexID]: The reachable vertices, ``src`` included.
    """
    n = len(residual)
    if not 0 <= src < n:
        raise ValueError(f"Vertex {src!r} is out of range [0, {n}).")

    reachable = set()
    stack = [src]
    while stack:
        node = stack.pop()
        if node in reachable:
            continue
        reachable.add(node)
        row = residual[node]
        candidates = adjacency[node] if adjacency is not None else range(n)
        for nbr in candidates:
            if row[nbr] > 0 and nbr not in reachable:
                stack.append(nbr)
    return reachable


def cut_edges(graph: CapacityGraph, reachable: Set[VertexID]) -> List[Arc]:
    """
    Original-graph arcs with positive capacity leaving ``reachable``.

    Args:
        graph: The original graph.
        reachable: Source side of the cut.

    Returns:
        List[Arc]: ``(u, v)`` pairs with u inside and v outside, in
        row-major order.
    """
    adjacency = graph.adjacency()
    return [
        (u, v)
        for u in sorted(reachable)
        for v in adjacency[u]
        if v not in reachable and graph.capacity(u, v) > 0
    ]


def cut_value(graph: CapacityGraph, reachable: Set[VertexID]) -> Capacity:
    """Sum of capacities on the arcs returned by ``cut_edges``."""
    return sum(graph.capacity(u, v) for u, v in cut_edges(graph, reachable))
