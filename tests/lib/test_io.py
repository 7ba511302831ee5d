import json

import pytest
import yaml

from ghtree.lib.algorithms.gomory_hu import build_gomory_hu_tree
from ghtree.lib.graph import CapacityGraph
from ghtree.lib.io import (
    FlowProblem,
    edgelist_to_graph,
    graph_to_node_link,
    load_flow_problem,
    node_link_to_graph,
    parse_flow_problem,
    tree_to_dict,
)

DIRECTED_TEXT = """\
4 4
D
0 1 3
1 3 2
0 2 1
2 3 5
0 3
"""


def test_parse_flow_problem_directed():
    problem = parse_flow_problem(DIRECTED_TEXT)
    assert isinstance(problem, FlowProblem)
    assert problem.graph.directed
    assert problem.graph.num_vertices == 4
    assert problem.graph.capacity(0, 1) == 3
    assert problem.graph.capacity(1, 0) == 0
    assert (problem.source, problem.sink) == (0, 3)


def test_parse_flow_problem_undirected_type_token():
    problem = parse_flow_problem("2 1 u\n0 1 4\n")
    assert not problem.graph.directed
    assert problem.graph.capacity(1, 0) == 4
    assert problem.source is None and problem.sink is None


def test_parse_flow_problem_no_type_token_defaults_undirected():
    problem = parse_flow_problem("3 2\n0 1 4\n1 2 6\n")
    assert not problem.graph.directed
    assert problem.graph.num_edges() == 2


def test_parse_flow_problem_duplicate_edges_sum():
    problem = parse_flow_problem("2 2\n0 1 4\n1 0 6\n")
    assert problem.graph.capacity(0, 1) == 10


@pytest.mark.parametrize(
    "text,match",
    [
        ("", "end of input"),
        ("3 2\n0 1 4\n", "end of input"),
        ("3 x\n", "integer"),
        ("2 1\n0 1 -4\n", "non-negative"),
        ("2 1\n0 5 4\n", "out of range"),
        ("2 1\n0 1 4\n0 1\n9", "trailing"),
        ("2 1\n0 1 4\n0 7\n", "out of range"),
        ("2 -1\n", "non-negative"),
    ],
)
def test_parse_flow_problem_errors(text, match):
    with pytest.raises(ValueError, match=match):
        parse_flow_problem(text)


def test_parse_flow_problem_source_without_sink():
    with pytest.raises(ValueError, match="end of input while reading sink"):
        parse_flow_problem("2 1\n0 1 4\n0")


def test_edgelist_to_graph():
    lines = ["# comment", "", "0 1 5", "1 2 3"]
    g = edgelist_to_graph(lines)
    assert g.num_vertices == 3
    assert g.capacity(2, 1) == 3


def test_edgelist_to_graph_explicit_size_and_separator():
    g = edgelist_to_graph(["0,1,5"], num_vertices=4, directed=True, separator=",")
    assert g.num_vertices == 4
    assert g.capacity(0, 1) == 5
    assert g.capacity(1, 0) == 0


def test_edgelist_to_graph_errors():
    with pytest.raises(ValueError, match="Line 1"):
        edgelist_to_graph(["0 1"])
    with pytest.raises(ValueError, match="empty edge list"):
        edgelist_to_graph(["# nothing"])


def test_node_link_roundtrip():
    g = CapacityGraph.from_edges(3, [(0, 1, 5), (1, 2, 2)])
    data = graph_to_node_link(g, source=0, sink=2)
    assert data == {
        "directed": False,
        "num_vertices": 3,
        "edges": [
            {"source": 0, "target": 1, "capacity": 5},
            {"source": 1, "target": 2, "capacity": 2},
        ],
        "source": 0,
        "sink": 2,
    }
    problem = node_link_to_graph(data)
    assert problem.graph == g
    assert (problem.source, problem.sink) == (0, 2)


def test_node_link_list_edges():
    problem = node_link_to_graph(
        {"num_vertices": 2, "directed": True, "edges": [[0, 1, 3]]}
    )
    assert problem.graph.directed
    assert problem.graph.capacity(0, 1) == 3


def test_node_link_errors():
    with pytest.raises(ValueError, match="num_vertices"):
        node_link_to_graph({"edges": []})
    with pytest.raises(ValueError, match="missing key"):
        node_link_to_graph({"num_vertices": 2, "edges": [{"source": 0, "target": 1}]})
    with pytest.raises(ValueError, match="mapping"):
        node_link_to_graph([1, 2, 3])
    with pytest.raises(ValueError, match=r"\(u, v, capacity\) list"):
        node_link_to_graph({"num_vertices": 2, "edges": [5]})


def test_load_flow_problem_formats(tmp_path):
    g = CapacityGraph.from_edges(3, [(0, 1, 5), (1, 2, 2)])
    data = graph_to_node_link(g, source=0, sink=2)

    json_path = tmp_path / "g.json"
    json_path.write_text(json.dumps(data))
    yaml_path = tmp_path / "g.yaml"
    yaml_path.write_text(yaml.safe_dump(data))
    text_path = tmp_path / "g.txt"
    text_path.write_text("3 2\n0 1 5\n1 2 2\n0 2\n")

    for path in (json_path, yaml_path, text_path):
        problem = load_flow_problem(path)
        assert problem.graph == g
        assert (problem.source, problem.sink) == (0, 2)


def test_load_flow_problem_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_flow_problem(tmp_path / "missing.txt")


def test_tree_to_dict():
    g = CapacityGraph.from_edges(2, [(0, 1, 5)])
    tree = build_gomory_hu_tree(g)
    assert tree_to_dict(tree) == {
        "num_vertices": 2,
        "edges": [{"u": 1, "v": 0, "weight": 5}],
    }
