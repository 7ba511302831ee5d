"""Library utilities for ghtree.

This package holds the graph store, file I/O helpers and the networkx/numpy
integration module.
"""

from ghtree.lib.graph import CapacityGraph
from ghtree.lib.nx import NodeMap, from_networkx, to_networkx

__all__ = [
    "CapacityGraph",
    "NodeMap",
    "from_networkx",
    "to_networkx",
]
