from __future__ import annotations

from dataclasses import replace
from numbers import Integral
from typing import Any, Iterable, Iterator, List, Optional, Tuple

from ghtree.config import GRAPH_CONFIG, GraphConfig
from ghtree.lib.algorithms.base import (
    Capacity,
    DuplicateEdgePolicy,
    Matrix,
    VertexID,
    check_vertex_id,
)
from ghtree.logging import get_logger

logger = get_logger(__name__)

#: An edge as given by callers: (source vertex, target vertex, capacity).
EdgeTuple = Tuple[VertexID, VertexID, Capacity]


def check_capacity(capacity: Any) -> Capacity:
    """
    Validate a capacity value and return it as a plain int.

    Args:
        capacity: The value to check.

    Returns:
        Capacity: The capacity as ``int``.

    Raises:
        TypeError: If the value is not an integer (bools are rejected too).
        ValueError: If the value is negative.
    """
    if isinstance(capacity, bool) or not isinstance(capacity, Integral):
        raise TypeError(
            f"Capacity must be an integer, got {type(capacity).__name__} {capacity!r}"
        )
    if capacity < 0:
        raise ValueError(f"Capacity must be non-negative, got {capacity}")
    return int(capacity)


class CapacityGraph:
    """
    A dense capacity matrix over vertices ``0 .. num_vertices - 1``.

    This class enforces:
      - A fixed, positive vertex count chosen at construction.
      - Integer, non-negative capacities (TypeError / ValueError otherwise).
      - Out-of-range vertex ids raise ValueError.
      - Self-loops are dropped; the diagonal always stays zero.
      - Undirected graphs keep ``capacity(u, v) == capacity(v, u)``.
      - Repeated edges follow ``GraphConfig.duplicate_edges``.

    The graph is the immutable input of every algorithm in
    ``ghtree.lib.algorithms``; they never write to it and work on the
    fresh matrix returned by ``residual()`` instead.
    """

    def __init__(
        self,
        num_vertices: int,
        directed: bool = False,
        config: Optional[GraphConfig] = None,
    ) -> None:
        """
        Initialize an edgeless graph.

        Args:
            num_vertices (int): Number of vertices, must be positive.
            directed (bool): If False, every edge is mirrored. Defaults to False.
            config (Optional[GraphConfig]): Graph building options. Defaults
                to the global ``GRAPH_CONFIG``. The graph keeps its own copy.

        Raises:
            TypeError: If num_vertices is not an int.
            ValueError: If num_vertices is not positive or exceeds the
                configured limit.
        """
        if isinstance(num_vertices, bool) or not isinstance(num_vertices, Integral):
            raise TypeError(
                f"Vertex count must be an integer, got {type(num_vertices).__name__}"
            )
        if num_vertices < 1:
            raise ValueError(f"Vertex count must be positive, got {num_vertices}")

        # Snapshot, so later edits to the shared config leave this graph alone
        self.config = replace(config if config is not None else GRAPH_CONFIG)
        self.config.check_vertex_count(num_vertices)

        self._num_vertices = int(num_vertices)
        self.directed = directed
        self._matrix: Matrix = [[0] * self._num_vertices for _ in range(num_vertices)]
        self._adjacency: Optional[List[List[VertexID]]] = None

    @classmethod
    def from_edges(
        cls,
        num_vertices: int,
        edges: Iterable[EdgeTuple],
        directed: bool = False,
        config: Optional[GraphConfig] = None,
    ) -> CapacityGraph:
        """
        Build a graph from an iterable of ``(u, v, capacity)`` tuples.

        Args:
            num_vertices (int): Number of vertices.
            edges (Iterable[EdgeTuple]): Edges to add.
            directed (bool): Whether the graph is directed. Defaults to False.
            config (Optional[GraphConfig]): Graph building options.

        Returns:
            CapacityGraph: The new graph.
        """
        graph = cls(num_vertices, directed=directed, config=config)
        graph.add_edges_from(edges)
        return graph

    @property
    def num_vertices(self) -> int:
        return self._num_vertices

    def copy(self) -> CapacityGraph:
        """Return an independent copy of this graph."""
        other = CapacityGraph(self._num_vertices, self.directed, self.config)
        other._matrix = [row[:] for row in self._matrix]
        return other

    #
    # Edge management
    #
    def add_edge(self, u: VertexID, v: VertexID, capacity: Capacity) -> None:
        """
        Add capacity between u and v.

        For undirected graphs the reverse direction receives the same
        capacity. A zero capacity is accepted and stored, which makes it a
        no-op under ``DuplicateEdgePolicy.SUM``.

        Args:
            u (VertexID): Source vertex.
            v (VertexID): Target vertex.
            capacity (Capacity): Non-negative integer capacity.

        Raises:
            ValueError: If a vertex is out of range, the capacity is negative,
                or the edge already exists under ``DuplicateEdgePolicy.ERROR``.
            TypeError: If the capacity is not an integer.
        """
        self.check_vertex(u)
        self.check_vertex(v)
        capacity = check_capacity(capacity)

        if u == v:
            logger.debug(f"Ignoring self-loop on vertex {u} (capacity {capacity})")
            return

        policy = self.config.duplicate_edges
        current = self._matrix[u][v]
        if policy == DuplicateEdgePolicy.SUM:
            new_value = current + capacity
        elif policy == DuplicateEdgePolicy.REPLACE:
            new_value = capacity
        else:
            if current > 0:
                raise ValueError(f"Edge ({u}, {v}) already exists.")
            new_value = capacity

        self._matrix[u][v] = new_value
        if not self.directed:
            self._matrix[v][u] = new_value
        self._adjacency = None

    def add_edges_from(self, edges: Iterable[EdgeTuple]) -> None:
        """
        Add every ``(u, v, capacity)`` tuple from ``edges``.

        Args:
            edges (Iterable[EdgeTuple]): Edges to add.

        Raises:
            ValueError: If an item is not a 3-tuple or fails ``add_edge``.
        """
        for edge in edges:
            try:
                u, v, capacity = edge
            except (TypeError, ValueError) as e:
                raise ValueError(
                    f"Edge must be a (u, v, capacity) tuple, got {edge!r}"
                ) from e
            self.add_edge(u, v, capacity)

    #
    # Queries
    #
    def check_vertex(self, v: Any) -> None:
        """
        Raise ValueError unless ``v`` is a vertex of this graph.

        Args:
            v: The candidate vertex id.
        """
        check_vertex_id(v, self._num_vertices)

    def capacity(self, u: VertexID, v: VertexID) -> Capacity:
        """
        Return the capacity of the arc from u to v (0 if absent).

        Raises:
            ValueError: If a vertex is out of range.
        """
        self.check_vertex(u)
        self.check_vertex(v)
        return self._matrix[u][v]

    def neighbors(self, u: VertexID) -> List[VertexID]:
        """
        Vertices joined to u by positive capacity in either direction.

        These are exactly the vertices a residual arc out of u can ever
        point to, so augmenting-path searches only need to scan this list.

        Args:
            u (VertexID): The vertex.

        Returns:
            List[VertexID]: Neighbor ids in ascending order.
        """
        self.check_vertex(u)
        return self.adjacency()[u]

    def adjacency(self) -> List[List[VertexID]]:
        """
        Return neighbor lists for all vertices (see ``neighbors``).

        The lists are cached until the next ``add_edge``; callers must not
        mutate them.
        """
        if self._adjacency is None:
            n = self._num_vertices
            m = self._matrix
            self._adjacency = [
                [v for v in range(n) if m[u][v] > 0 or m[v][u] > 0]
                for u in range(n)
            ]
        return self._adjacency

    def edges(self) -> Iterator[EdgeTuple]:
        """
        Iterate over edges with positive capacity.

        Undirected edges are reported once, as ``(u, v, capacity)`` with
        ``u < v``. Directed graphs report every arc.
        """
        for u, row in enumerate(self._matrix):
            start = 0 if self.directed else u + 1
            for v in range(start, self._num_vertices):
                if row[v] > 0:
                    yield (u, v, row[v])

    def num_edges(self) -> int:
        """Number of edges reported by ``edges()``."""
        return sum(1 for _ in self.edges())

    def total_capacity(self, u: VertexID) -> Capacity:
        """Sum of capacities on arcs leaving u."""
        self.check_vertex(u)
        return sum(self._matrix[u])

    def residual(self) -> Matrix:
        """
        Return a freshly allocated copy of the capacity matrix.

        Each max-flow call owns the returned matrix and mutates it as its
        residual graph; the graph itself is never touched.
        """
        return [row[:] for row in self._matrix]

    def to_matrix(self) -> Matrix:
        """Return a copy of the capacity matrix as a list of lists."""
        return self.residual()

    #
    # Dunder helpers
    #
    def __len__(self) -> int:
        return self._num_vertices

    def __contains__(self, v: object) -> bool:
        return (
            isinstance(v, Integral)
            and not isinstance(v, bool)
            and 0 <= v < self._num_vertices
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CapacityGraph):
            return NotImplemented
        return self.directed == other.directed and self._matrix == other._matrix

    def __repr__(self) -> str:
        kind = "directed" if self.directed else "undirected"
        return (
            f"CapacityGraph(num_vertices={self._num_vertices}, {kind}, "
            f"edges={self.num_edges()})"
        )
