"""Configuration classes for ghtree components."""

from dataclasses import dataclass
from typing import Optional

from ghtree.lib.algorithms.base import DuplicateEdgePolicy


@dataclass
class GraphConfig:
    """Configuration for building capacity graphs."""

    # How a repeated (u, v) edge combines with the capacity already stored
    duplicate_edges: DuplicateEdgePolicy = DuplicateEdgePolicy.SUM

    # Upper bound on the vertex count; None disables the check
    max_vertices: Optional[int] = None

    def check_vertex_count(self, num_vertices: int) -> None:
        """Raise ValueError if ``num_vertices`` exceeds ``max_vertices``."""
        if self.max_vertices is not None and num_vertices > self.max_vertices:
            raise ValueError(
                f"Graph has {num_vertices} vertices, limit is {self.max_vertices}"
            )


# Global configuration instance
GRAPH_CONFIG = GraphConfig()
