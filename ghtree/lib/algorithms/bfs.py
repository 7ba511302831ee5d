from collections import deque
from typing import List, Optional, Sequence

from ghtree.lib.algorithms.base import Matrix, VertexID


def find_augmenting_path(
    residual: Matrix,
    adjacency: Sequence[Sequence[VertexID]],
    src: VertexID,
    dst: VertexID,
) -> Optional[List[VertexID]]:
    """
    Breadth-first search for a shortest src -> dst path in the residual graph.

    Only arcs with strictly positive residual capacity are followed. The
    search stops as soon as ``dst`` is discovered.

    Args:
        residual: Residual capacity matrix.
        adjacency: Neighbor lists covering every arc that can carry residual
            capacity (see ``CapacityGraph.adjacency``).
        src: Source vertex.
        dst: Destination vertex.

    Returns:
        Optional[List[VertexID]]: The path as a vertex list from src to dst,
        or None if dst is unreachable.
    """
    pred: List[Optional[VertexID]] = [None] * len(residual)
    visited = [False] * len(residual)
    visited[src] = True
    queue = deque([src])

    while queue:
        node = queue.popleft()
        row = residual[node]
        for nbr in adjacency[node]:
            if not visited[nbr] and row[nbr] > 0:
                visited[nbr] = True
                pred[nbr] = node
                if nbr == dst:
                    return _unwind(pred, src, dst)
                queue.append(nbr)

    return None


def _unwind(pred: List[Optional[VertexID]], src: VertexID, dst: VertexID) -> List[VertexID]:
    path = [dst]
    while path[-1] != src:
        prev = pred[path[-1]]
        assert prev is not None
        path.append(prev)
    path.reverse()
    return path
