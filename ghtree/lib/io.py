from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import yaml

from ghtree.lib.algorithms.base import VertexID
from ghtree.lib.algorithms.types import GomoryHuTree
from ghtree.lib.graph import CapacityGraph, EdgeTuple
from ghtree.logging import get_logger

logger = get_logger(__name__)


@dataclass
class FlowProblem:
    """
    A graph together with an optional source/sink pair read from input.

    Attributes:
        graph: The capacity graph.
        source: Source vertex, if the input names one.
        sink: Sink vertex, if the input names one.
    """

    graph: CapacityGraph
    source: Optional[VertexID] = None
    sink: Optional[VertexID] = None


def _to_int(token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError as e:
        raise ValueError(f"Expected integer {what}, got {token!r}") from e


def parse_flow_problem(text: str) -> FlowProblem:
    """
    Parse the whitespace-separated problem format.

    Layout (tokens may be split across lines freely)::

        V E
        [U|D]            optional graph type, undirected if omitted
        u v capacity     repeated E times
        [source sink]    optional

    Args:
        text: The full input text.

    Returns:
        FlowProblem: Parsed graph and optional terminals.

    Raises:
        ValueError: On missing or malformed tokens, trailing garbage, or
            invalid edges.
    """
    tokens = text.split()
    pos = 0

    def take(what: str) -> str:
        nonlocal pos
        if pos >= len(tokens):
            raise ValueError(f"Unexpected end of input while reading {what}")
        token = tokens[pos]
        pos += 1
        return token

    num_vertices = _to_int(take("vertex count"), "vertex count")
    num_edges = _to_int(take("edge count"), "edge count")
    if num_edges < 0:
        raise ValueError(f"Edge count must be non-negative, got {num_edges}")

    directed = False
    if pos < len(tokens) and tokens[pos].upper() in ("U", "D"):
        directed = take("graph type").upper() == "D"

    edges: List[EdgeTuple] = []
    for i in range(num_edges):
        u = _to_int(take(f"edge {i} source"), "vertex")
        v = _to_int(take(f"edge {i} target"), "vertex")
        cap = _to_int(take(f"edge {i} capacity"), "capacity")
        edges.append((u, v, cap))

    graph = CapacityGraph.from_edges(num_vertices, edges, directed=directed)

    source = sink = None
    if pos < len(tokens):
        source = _to_int(take("source"), "source")
        sink = _to_int(take("sink"), "sink")
        graph.check_vertex(source)
        graph.check_vertex(sink)
    if pos < len(tokens):
        raise ValueError(f"Unexpected trailing input: {' '.join(tokens[pos:])!r}")

    logger.debug(
        f"Parsed problem: {num_vertices} vertices, {num_edges} edges, "
        f"{'directed' if directed else 'undirected'}"
    )
    return FlowProblem(graph=graph, source=source, sink=sink)


def edgelist_to_graph(
    lines: Iterable[str],
    num_vertices: Optional[int] = None,
    directed: bool = False,
    separator: Optional[str] = None,
) -> CapacityGraph:
    """
    Build a CapacityGraph from ``u v capacity`` lines.

    Blank lines and lines starting with ``#`` are skipped.

    Args:
        lines: An iterable of strings, each representing one edge.
        num_vertices: Vertex count. If None, one more than the largest vertex
            id seen.
        directed: Whether the graph is directed.
        separator: Token separator (default: any whitespace).

    Returns:
        The new CapacityGraph.

    Raises:
        ValueError: If a line does not hold exactly three integers, or the
            edge list is empty and ``num_vertices`` is not given.
    """
    edges: List[EdgeTuple] = []
    for lineno, line in enumerate(lines, start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        tokens = line.split(separator)
        if len(tokens) != 3:
            raise ValueError(
                f"Line {lineno}: expected 'u v capacity', got {line!r}"
            )
        u, v, cap = (_to_int(t, "value") for t in tokens)
        edges.append((u, v, cap))

    if num_vertices is None:
        if not edges:
            raise ValueError("Cannot infer vertex count from an empty edge list")
        num_vertices = max(max(u, v) for u, v, _ in edges) + 1

    return CapacityGraph.from_edges(num_vertices, edges, directed=directed)


def graph_to_node_link(
    graph: CapacityGraph,
    source: Optional[VertexID] = None,
    sink: Optional[VertexID] = None,
) -> Dict[str, Any]:
    """
    Convert a CapacityGraph into a dict suitable for JSON or YAML.

    The returned dict has the following structure:
        {
            "directed": bool,
            "num_vertices": int,
            "edges": [
                {"source": u, "target": v, "capacity": c},
                ...
            ],
            "source": s,     # only when given
            "sink": t,       # only when given
        }
    """
    data: Dict[str, Any] = {
        "directed": graph.directed,
        "num_vertices": graph.num_vertices,
        "edges": [
            {"source": u, "target": v, "capacity": cap} for u, v, cap in graph.edges()
        ],
    }
    if source is not None:
        data["source"] = source
    if sink is not None:
        data["sink"] = sink
    return data


def node_link_to_graph(data: Dict[str, Any]) -> FlowProblem:
    """
    Reconstruct a FlowProblem from the dict form of ``graph_to_node_link``.

    Edges may also be given as ``[u, v, capacity]`` lists.

    Raises:
        ValueError: If required keys are missing or an edge is malformed.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping, got {type(data).__name__}")
    if "num_vertices" not in data:
        raise ValueError("Missing required key 'num_vertices'")

    edges: List[EdgeTuple] = []
    for item in data.get("edges") or []:
        if isinstance(item, dict):
            try:
                edges.append((item["source"], item["target"], item["capacity"]))
            except KeyError as e:
                raise ValueError(f"Edge {item!r} is missing key {e}") from e
        else:
            try:
                edges.append(tuple(item))
            except TypeError as e:
                raise ValueError(
                    f"Edge must be a (u, v, capacity) list, got {item!r}"
                ) from e

    graph = CapacityGraph.from_edges(
        data["num_vertices"], edges, directed=bool(data.get("directed", False))
    )
    source = data.get("source")
    sink = data.get("sink")
    for v in (source, sink):
        if v is not None:
            graph.check_vertex(v)
    return FlowProblem(graph=graph, source=source, sink=sink)


def load_flow_problem(path: Union[str, Path]) -> FlowProblem:
    """
    Read a FlowProblem from a file, picking the format from the suffix.

    ``.json`` and ``.yaml``/``.yml`` files hold the node-link dict; any
    other suffix is read with ``parse_flow_problem``.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the content is malformed.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()

    if suffix == ".json":
        return node_link_to_graph(json.loads(text))
    if suffix in (".yaml", ".yml"):
        return node_link_to_graph(yaml.safe_load(text))
    return parse_flow_problem(text)


def tree_to_dict(tree: GomoryHuTree) -> Dict[str, Any]:
    """Convert a Gomory-Hu tree into a JSON-serializable dict."""
    return {
        "num_vertices": tree.num_vertices,
        "edges": [{"u": u, "v": v, "weight": w} for u, v, w in tree.edges],
    }
