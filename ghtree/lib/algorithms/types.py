"""Types and data structures for algorithm results."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import (
    TYPE_CHECKING,
    Dict,
    Iterator,
    List,
    NamedTuple,
    Optional,
    Set,
    Tuple,
)

import numpy as np

from ghtree.lib.algorithms.base import (
    Capacity,
    VertexID,
    check_vertex_id,
    fits_int64,
)

if TYPE_CHECKING:
    import networkx as nx

    from ghtree.lib.nx import NodeMap

# Arc identifier tuple: (source_vertex, target_vertex)
Arc = Tuple[VertexID, VertexID]


@dataclass(frozen=True)
class FlowSummary:
    """Summary of a max-flow computation with min-cut analysis.

    Attributes:
        total_flow: The maximum flow value achieved.
        edge_flow: Net flow on each arc that carries positive flow,
            indexed by (u, v). Derived from capacity minus residual.
        residual_cap: Remaining capacity on each arc of the original graph.
        reachable: Vertices reachable from the source in the exhausted
            residual graph (the source side of the minimum cut).
        min_cut: Original-graph arcs crossing from ``reachable`` to the
            rest of the vertices.
    """

    total_flow: Capacity
    edge_flow: Dict[Arc, Capacity]
    residual_cap: Dict[Arc, Capacity]
    reachable: Set[VertexID]
    min_cut: List[Arc]


class TreeEdge(NamedTuple):
    """One weighted edge of a Gomory-Hu tree, emitted as (vertex, parent)."""

    u: VertexID
    v: VertexID
    weight: Capacity


@dataclass
class GomoryHuTree:
    """A flow-equivalent tree over the vertices of an undirected graph.

    For every pair of distinct vertices, the smallest weight on the tree path
    between them equals the minimum cut between them in the source graph.

    Attributes:
        num_vertices: Number of vertices in the source graph.
        edges: The ``num_vertices - 1`` tree edges in construction order.
            Edge ``i`` joins vertex ``i + 1`` to its parent.
        parent: Final parent of each vertex; ``None`` for the root.
    """

    num_vertices: int
    edges: List[TreeEdge] = field(default_factory=list)
    parent: List[Optional[VertexID]] = field(default_factory=list)
    _adj: Optional[List[List[Tuple[VertexID, Capacity]]]] = field(
        default=None, init=False, repr=False, compare=False
    )

    def __len__(self) -> int:
        return len(self.edges)

    def __iter__(self) -> Iterator[TreeEdge]:
        return iter(self.edges)

    def _adjacency(self) -> List[List[Tuple[VertexID, Capacity]]]:
        if self._adj is None:
            adj: List[List[Tuple[VertexID, Capacity]]] = [
                [] for _ in range(self.num_vertices)
            ]
            for u, v, w in self.edges:
                adj[u].append((v, w))
                adj[v].append((u, w))
            self._adj = adj
        return self._adj

    def _check_vertex(self, v: VertexID) -> None:
        check_vertex_id(v, self.num_vertices)

    def neighbors(self, u: VertexID) -> List[Tuple[VertexID, Capacity]]:
        """Return ``(neighbor, weight)`` pairs adjacent to u in the tree."""
        self._check_vertex(u)
        return list(self._adjacency()[u])

    def path(self, u: VertexID, v: VertexID) -> List[VertexID]:
        """
        Return the unique tree path from u to v, both endpoints included.

        Raises:
            ValueError: If a vertex is out of range or the tree does not
                connect u and v.
        """
        self._check_vertex(u)
        self._check_vertex(v)
        adj = self._adjacency()

        pred: Dict[VertexID, Optional[VertexID]] = {u: None}
        queue = deque([u])
        while queue and v not in pred:
            node = queue.popleft()
            for nbr, _ in adj[node]:
                if nbr not in pred:
                    pred[nbr] = node
                    queue.append(nbr)

        if v not in pred:
            raise ValueError(f"Vertices {u} and {v} are not connected in the tree.")

        nodes = [v]
        while nodes[-1] != u:
            prev = pred[nodes[-1]]
            assert prev is not None
            nodes.append(prev)
        nodes.reverse()
        return nodes

    def min_cut_edge(self, u: VertexID, v: VertexID) -> TreeEdge:
        """
        Return the lightest edge on the tree path between u and v.

        Ties resolve to the edge closest to u.

        Raises:
            ValueError: If u == v or a vertex is out of range.
        """
        if u == v:
            raise ValueError(f"Source and sink must differ, got {u} twice.")
        nodes = self.path(u, v)
        weights = {}
        for a, b, w in self.edges:
            weights[(a, b)] = w
            weights[(b, a)] = w

        best: Optional[TreeEdge] = None
        for a, b in zip(nodes, nodes[1:]):
            w = weights[(a, b)]
            if best is None or w < best.weight:
                best = TreeEdge(a, b, w)
        assert best is not None
        return best

    def min_cut_value(self, u: VertexID, v: VertexID) -> Capacity:
        """
        Minimum cut value between u and v in the source graph.

        Raises:
            ValueError: If u == v or a vertex is out of range.
        """
        return self.min_cut_edge(u, v).weight

    def all_pairs_min_cut(self) -> np.ndarray:
        """
        Return the symmetric matrix of pairwise minimum cut values.

        One traversal per vertex, tracking the running minimum, so the whole
        matrix costs O(V^2). The diagonal is zero.

        Returns:
            np.ndarray: ``num_vertices x num_vertices`` matrix, int64 when
            every weight fits and an object array of Python ints otherwise.
        """
        n = self.num_vertices
        wide = any(not fits_int64(w) for _, _, w in self.edges)
        result = np.zeros((n, n), dtype=object if wide else np.int64)
        adj = self._adjacency()
        for src in range(n):
            stack: List[Tuple[VertexID, Optional[VertexID], Optional[Capacity]]] = [
                (src, None, None)
            ]
            while stack:
                node, prev, low = stack.pop()
                if low is not None:
                    result[src, node] = low
                for nbr, w in adj[node]:
                    if nbr != prev:
                        stack.append((nbr, node, w if low is None else min(low, w)))
        return result

    def iter_pairs(self) -> Iterator[TreeEdge]:
        """Yield each tree edge once, lower endpoint first, sorted by endpoints."""
        pairs = sorted(
            TreeEdge(min(u, v), max(u, v), w) for u, v, w in self.edges
        )
        yield from pairs

    def to_networkx(self, node_map: Optional["NodeMap"] = None) -> "nx.Graph":
        """
        Convert the tree to an undirected ``networkx.Graph``.

        Args:
            node_map: Optional mapping to restore original vertex names.

        Returns:
            nx.Graph with a ``weight`` attribute on each edge.
        """
        from ghtree.lib.nx import tree_to_networkx

        return tree_to_networkx(self, node_map)
