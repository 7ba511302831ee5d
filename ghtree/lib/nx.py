"""NetworkX and NumPy conversion utilities.

This module converts between NetworkX graphs (or dense NumPy matrices) and
the integer-indexed ``CapacityGraph`` used by the algorithms.

Example:
    >>> import networkx as nx
    >>> from ghtree.lib.nx import from_networkx
    >>> from ghtree.lib.algorithms.gomory_hu import build_gomory_hu_tree
    >>>
    >>> G = nx.Graph()
    >>> G.add_edge("A", "B", capacity=3)
    >>> G.add_edge("B", "C", capacity=1)
    >>>
    >>> graph, node_map = from_networkx(G)
    >>> tree = build_gomory_hu_tree(graph)
    >>> T = tree.to_networkx(node_map)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Hashable, List, Optional, Tuple, Union

import numpy as np

from ghtree.lib.algorithms.base import fits_int64
from ghtree.lib.graph import CapacityGraph

if TYPE_CHECKING:
    import networkx as nx

    from ghtree.lib.algorithms.types import GomoryHuTree

    NxGraph = Union[nx.DiGraph, nx.MultiDiGraph, nx.Graph, nx.MultiGraph]
else:
    NxGraph = Any


@dataclass
class NodeMap:
    """Bidirectional mapping between node names and vertex indices.

    When converting a NetworkX graph, node names (any hashable type) are
    mapped to contiguous integer indices starting from 0.

    Attributes:
        to_index: Maps original node names to vertex indices
        to_name: Maps vertex indices back to original node names

    Example:
        >>> node_map = NodeMap.from_names(["A", "B", "C"])
        >>> node_map.to_index["A"]
        0
        >>> node_map.to_name[1]
        'B'
    """

    to_index: Dict[Hashable, int] = field(default_factory=dict)
    to_name: Dict[int, Hashable] = field(default_factory=dict)

    @classmethod
    def from_names(cls, names: List[Hashable]) -> "NodeMap":
        """Create a NodeMap from a list of node names in index order."""
        to_index = {name: i for i, name in enumerate(names)}
        to_name = {i: name for i, name in enumerate(names)}
        return cls(to_index=to_index, to_name=to_name)

    def name(self, index: int) -> Hashable:
        """Return the original name of ``index`` (the index itself if unknown)."""
        return self.to_name.get(index, index)

    def __len__(self) -> int:
        return len(self.to_index)


def _as_capacity(value: Any, u: Hashable, v: Hashable) -> int:
    """Coerce a NetworkX capacity attribute to int, rejecting fractions."""
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(
                f"Edge ({u!r}, {v!r}) has non-integral capacity {value}"
            )
        return int(value)
    return value


def from_networkx(
    G: NxGraph,
    *,
    capacity_attr: str = "capacity",
    default_capacity: int = 1,
) -> Tuple[CapacityGraph, NodeMap]:
    """Convert a NetworkX graph to a ``CapacityGraph``.

    Directed NetworkX graphs give directed capacity graphs, undirected ones
    give undirected graphs. Parallel edges of multigraphs accumulate.

    Args:
        G: NetworkX graph (Graph, DiGraph, MultiGraph or MultiDiGraph)
        capacity_attr: Edge attribute name for capacity (default: "capacity")
        default_capacity: Capacity used when the attribute is missing
            (default: 1)

    Returns:
        Tuple of (graph, node_map). Nodes are indexed in ``str`` sort order.

    Raises:
        TypeError: If G is not a NetworkX graph or a capacity is not a number
        ValueError: If G has no nodes or a capacity is negative or fractional
    """
    import networkx as nx

    if not isinstance(G, (nx.DiGraph, nx.MultiDiGraph, nx.Graph, nx.MultiGraph)):
        raise TypeError(
            f"Expected NetworkX graph (Graph, DiGraph, MultiGraph, MultiDiGraph), "
            f"got {type(G).__name__}"
        )

    if G.number_of_nodes() == 0:
        raise ValueError("Graph has no nodes")

    # Sorted for deterministic ordering
    node_names = sorted(G.nodes(), key=str)
    node_map = NodeMap.from_names(node_names)

    graph = CapacityGraph(len(node_names), directed=G.is_directed())
    for u, v, data in G.edges(data=True):
        cap = _as_capacity(data.get(capacity_attr, default_capacity), u, v)
        graph.add_edge(node_map.to_index[u], node_map.to_index[v], cap)

    return graph, node_map


def to_networkx(
    graph: CapacityGraph,
    node_map: Optional[NodeMap] = None,
    *,
    capacity_attr: str = "capacity",
) -> "nx.Graph":
    """Convert a ``CapacityGraph`` back to NetworkX.

    Args:
        graph: Graph to convert
        node_map: Optional NodeMap to restore original node names.
            If None, nodes are labeled 0, 1, 2, ...
        capacity_attr: Edge attribute name for capacity (default: "capacity")

    Returns:
        ``nx.DiGraph`` for directed graphs, ``nx.Graph`` otherwise.
    """
    import networkx as nx

    G = nx.DiGraph() if graph.directed else nx.Graph()
    label = node_map.name if node_map is not None else (lambda i: i)

    G.add_nodes_from(label(i) for i in range(graph.num_vertices))
    for u, v, cap in graph.edges():
        G.add_edge(label(u), label(v), **{capacity_attr: cap})
    return G


def tree_to_networkx(
    tree: "GomoryHuTree",
    node_map: Optional[NodeMap] = None,
    *,
    weight_attr: str = "weight",
) -> "nx.Graph":
    """Convert a Gomory-Hu tree to an undirected ``nx.Graph``.

    Args:
        tree: The tree to convert
        node_map: Optional NodeMap to restore original node names
        weight_attr: Edge attribute name for the cut value (default: "weight")

    Returns:
        nx.Graph containing every vertex and tree edge
    """
    import networkx as nx

    T = nx.Graph()
    label = node_map.name if node_map is not None else (lambda i: i)

    T.add_nodes_from(label(i) for i in range(tree.num_vertices))
    for u, v, w in tree.edges:
        T.add_edge(label(u), label(v), **{weight_attr: w})
    return T


def from_numpy(matrix: Any, directed: bool = False) -> CapacityGraph:
    """Build a graph from a dense square capacity matrix.

    Args:
        matrix: Square array-like of non-negative integers (an object array
            of Python ints is accepted for values beyond int64)
        directed: If False, the matrix must be symmetric (default: False)

    Returns:
        CapacityGraph with one edge per positive off-diagonal entry.

    Raises:
        TypeError: If the matrix does not hold integers
        ValueError: If the matrix is not square, not symmetric for an
            undirected graph, or holds negative values
    """
    arr = np.asarray(matrix)
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        raise ValueError(f"Capacity matrix must be square, got shape {arr.shape}")
    if arr.size and arr.dtype != object and not np.issubdtype(arr.dtype, np.integer):
        raise TypeError(f"Capacity matrix must hold integers, got {arr.dtype}")
    if (arr < 0).any():
        raise ValueError("Capacity matrix holds negative values")
    if not directed and not np.array_equal(arr, arr.T):
        raise ValueError("Undirected capacity matrix must be symmetric")

    graph = CapacityGraph(arr.shape[0], directed=directed)
    rows, cols = np.nonzero(arr)
    for u, v in zip(rows.tolist(), cols.tolist()):
        if u == v or (not directed and u > v):
            continue
        graph.add_edge(u, v, int(arr[u, v]))
    return graph


def to_numpy(graph: CapacityGraph) -> np.ndarray:
    """Return the capacity matrix as a NumPy array.

    The array is int64 unless a capacity does not fit, in which case it is an
    object array of Python ints.
    """
    rows = graph.to_matrix()
    largest = max(max(row) for row in rows)
    return np.array(rows, dtype=np.int64 if fits_int64(largest) else object)
