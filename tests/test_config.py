import pytest

from ghtree.config import GRAPH_CONFIG, GraphConfig
from ghtree.lib.algorithms.base import DuplicateEdgePolicy


def test_graph_config_defaults():
    config = GraphConfig()
    assert config.duplicate_edges == DuplicateEdgePolicy.SUM
    assert config.max_vertices is None


def test_global_config_instance():
    assert isinstance(GRAPH_CONFIG, GraphConfig)
    assert GRAPH_CONFIG.duplicate_edges == DuplicateEdgePolicy.SUM


def test_check_vertex_count():
    GraphConfig().check_vertex_count(10**6)
    config = GraphConfig(max_vertices=10)
    config.check_vertex_count(10)
    with pytest.raises(ValueError, match="11 vertices, limit is 10"):
        config.check_vertex_count(11)
