from __future__ import annotations

from enum import IntEnum
from numbers import Integral
from typing import List

#: Vertex identifier: an index in ``range(num_vertices)``.
VertexID = int

#: Integer edge capacity. Python ints are unbounded, so accumulated flow
#: never overflows.
Capacity = int

#: Dense square matrix of capacities, indexed ``matrix[u][v]``.
Matrix = List[List[Capacity]]

#: Root vertex every non-root vertex is attached to before the first stage.
TREE_ROOT: VertexID = 0


class DuplicateEdgePolicy(IntEnum):
    """
    How a repeated edge between the same pair of vertices is stored.
    """

    #: Add the new capacity to the stored one (parallel edges).
    SUM = 1
    #: Overwrite the stored capacity with the new one.
    REPLACE = 2
    #: Raise ValueError on a repeated edge.
    ERROR = 3


class GomoryHuInvariantError(RuntimeError):
    """
    Raised when tree construction reaches an inconsistent internal state,
    e.g. a vertex attached to itself or to a vertex not yet processed.

    This signals a bug rather than bad input; input problems raise
    ValueError or TypeError before any computation starts.
    """


#: Largest value that can be stored in an int64 array.
INT64_MAX = 2**63 - 1


def fits_int64(value: int) -> bool:
    """Return True if ``value`` can be stored in an int64 array without overflow."""
    return -INT64_MAX - 1 <= value <= INT64_MAX


def check_vertex_id(v: object, num_vertices: int) -> None:
    """
    Raise ValueError unless ``v`` is an int in ``range(num_vertices)``.

    Bools are rejected even though they are ints.
    """
    if (
        isinstance(v, bool)
        or not isinstance(v, Integral)
        or not 0 <= v < num_vertices
    ):
        raise ValueError(f"Vertex {v!r} is out of range [0, {num_vertices}).")
