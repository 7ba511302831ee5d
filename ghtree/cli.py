"""Command-line interface for ghtree."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from contextlib import nullcontext
from pathlib import Path
from time import perf_counter
from typing import List, Optional

from ghtree.lib.algorithms.gomory_hu import build_gomory_hu_tree
from ghtree.lib.algorithms.max_flow import calc_max_flow
from ghtree.lib.io import graph_to_node_link, load_flow_problem, tree_to_dict
from ghtree.logging import get_logger, log_stream, set_global_log_level

logger = get_logger(__name__)


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s"; 75.2 -> "1m 15.2s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    if seconds < 60.0:
        return f"{seconds:.2f} s"
    minutes = int(seconds // 60)
    rem = seconds - minutes * 60
    return f"{minutes}m {rem:.1f}s"


def _format_matrix(rows: List[List[int]]) -> str:
    """Format a square integer matrix with right-aligned columns."""
    if not rows:
        return ""
    width = max(len(str(x)) for row in rows for x in row)
    return "\n".join(" ".join(f"{x:>{width}}" for x in row) for row in rows)


def _run_max_flow(
    path: Path,
    source: Optional[int],
    sink: Optional[int],
    as_json: bool,
) -> None:
    """Compute and print the max flow and min-cut edges for a problem file."""
    logger.info(f"Loading flow problem: {path}")
    _start_time = perf_counter()

    try:
        problem = load_flow_problem(path)
        src = source if source is not None else problem.source
        dst = sink if sink is not None else problem.sink
        if src is None or dst is None:
            raise ValueError(
                "Source and sink must be given in the file or via --source/--sink"
            )

        flow, summary = calc_max_flow(problem.graph, src, dst, return_summary=True)

        if as_json:
            payload = {
                "source": src,
                "sink": dst,
                "max_flow": flow,
                "min_cut": [list(arc) for arc in summary.min_cut],
                "source_side": sorted(summary.reachable),
            }
            print(json.dumps(payload, indent=2))
        else:
            print(f"\nThe maximum possible flow is: {flow}")
            print("\nEdges in the minimum cut are:")
            for u, v in summary.min_cut:
                print(f"{u} - {v}")

        logger.info(
            f"Max flow computed in {_format_duration(perf_counter() - _start_time)}"
        )

    except FileNotFoundError:
        print(f"ERROR: Problem file not found: {path}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to compute max flow: {e}")
        print("ERROR: Failed to compute max flow")
        print(f"  {type(e).__name__}: {e}")
        sys.exit(1)


def _run_tree(path: Path, as_json: bool, matrix: bool) -> None:
    """Build and print the Gomory-Hu tree for a graph file."""
    logger.info(f"Loading graph: {path}")
    _start_time = perf_counter()

    try:
        problem = load_flow_problem(path)
        tree = build_gomory_hu_tree(problem.graph)

        if as_json:
            payload = {
                "graph": graph_to_node_link(problem.graph),
                "tree": tree_to_dict(tree),
            }
            if matrix:
                payload["min_cut_matrix"] = tree.all_pairs_min_cut().tolist()
            print(json.dumps(payload, indent=2))
        else:
            print("\n--- Gomory-Hu Tree Edges (Min-Cuts) ---")
            for u, v, w in tree.iter_pairs():
                print(f"Min-cut between ({u}, {v}) is {w}")
            if matrix:
                print("\n--- All-Pairs Min-Cut Values ---")
                print(_format_matrix(tree.all_pairs_min_cut().tolist()))

        logger.info(
            f"Gomory-Hu tree with {len(tree)} edges built in "
            f"{_format_duration(perf_counter() - _start_time)}"
        )

    except FileNotFoundError:
        print(f"ERROR: Graph file not found: {path}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to build Gomory-Hu tree: {e}")
        print("ERROR: Failed to build Gomory-Hu tree")
        print(f"  {type(e).__name__}: {e}")
        sys.exit(1)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``ghtree`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="ghtree",
        description="Compute maximum flows, minimum cuts and Gomory-Hu trees.",
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{maxflow,tree}",
        help="Available commands",
    )

    maxflow_parser = subparsers.add_parser(
        "maxflow", help="Compute a maximum flow and its minimum cut"
    )
    maxflow_parser.add_argument(
        "graph", type=Path, help="Problem file (text, .json, .yaml)"
    )
    maxflow_parser.add_argument(
        "--source", "-s", type=int, default=None, help="Override the source vertex"
    )
    maxflow_parser.add_argument(
        "--sink", "-t", type=int, default=None, help="Override the sink vertex"
    )

    tree_parser = subparsers.add_parser("tree", help="Build a Gomory-Hu tree")
    tree_parser.add_argument("graph", type=Path, help="Graph file (text, .json, .yaml)")
    tree_parser.add_argument(
        "--matrix",
        "-m",
        action="store_true",
        help="Also print the all-pairs minimum cut matrix",
    )

    for p in (maxflow_parser, tree_parser):
        p.add_argument("--json", action="store_true", help="Print results as JSON")

    effective_args = sys.argv[1:] if argv is None else argv

    # If no arguments are provided, show help and exit cleanly
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    # Keep stdout for the JSON document alone
    routing = log_stream(sys.stderr) if args.json else nullcontext()
    with routing:
        if args.verbose:
            set_global_log_level(logging.DEBUG)
            logger.debug("Debug logging enabled")
        elif args.quiet:
            set_global_log_level(logging.WARNING)
        else:
            set_global_log_level(logging.INFO)

        if args.command == "maxflow":
            _run_max_flow(args.graph, args.source, args.sink, args.json)
        elif args.command == "tree":
            _run_tree(args.graph, args.json, args.matrix)


if __name__ == "__main__":
    main()
