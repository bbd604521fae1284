"""Command-line interface for routegen."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import List, Optional, Sequence, Tuple

import networkx as nx

from routegen.builder import ACCEPTED_ROAD_TYPES, build_graph
from routegen.config import (
    LOGGING_CONFIG,
    SEARCH_CONFIG,
    load_config,
    load_logging_config,
)
from routegen.engine import RouteEngine, SearchAlgorithm
from routegen.graph import Graph
from routegen.io import load_records, paths_to_dict
from routegen.logging import configure_logging, get_logger, set_global_log_level
from routegen.nx import to_networkx

logger = get_logger(__name__)


def _parse_coord(text: str) -> Tuple[float, float]:
    """Parse ``"LAT,LON"`` into a float pair for argparse."""
    parts = text.split(",")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"Expected LAT,LON but got '{text}'")
    try:
        return float(parts[0]), float(parts[1])
    except ValueError:
        raise argparse.ArgumentTypeError(f"Coordinates must be numbers: '{text}'") from None


def _format_duration(seconds: float) -> str:
    """Return a short duration string, e.g. ``"123.0 ms"`` or ``"1.23 s"``."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    return f"{seconds:.2f} s"


def _load_graph(path: Path, highways: Optional[Sequence[str]]) -> Graph:
    t0 = perf_counter()
    nodes, ways = load_records(path)
    graph = build_graph(nodes, ways, accepted=highways)
    logger.info(f"Loaded {path} in {_format_duration(perf_counter() - t0)}")
    return graph


def _inspect(path: Path, highways: Optional[Sequence[str]]) -> None:
    try:
        graph = _load_graph(path, highways)

        G = to_networkx(graph)
        components = sorted((len(c) for c in nx.connected_components(G)), reverse=True)
        total_m = sum(length for _, _, length in G.edges(data="length_m"))
        summary = {
            "nodes": graph.num_nodes,
            "edges": graph.num_edges,
            "total_length_m": round(total_m, 1),
            "components": len(components),
            "largest_component": components[0] if components else 0,
        }
        print(json.dumps(summary, indent=2))

    except FileNotFoundError:
        print(f"ERROR: Records file not found: {path}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to inspect graph: {e}")
        print("ERROR: Failed to inspect graph")
        print(f"  {type(e).__name__}: {e}")
        sys.exit(1)


def _search(args: argparse.Namespace, highways: Optional[Sequence[str]]) -> None:
    try:
        config = load_config(args.config) if args.config else SEARCH_CONFIG
        graph = _load_graph(args.records, highways)

        if graph.num_nodes == 0:
            print("ERROR: Graph has no nodes; nothing to search")
            sys.exit(1)

        tolerance = (
            args.tolerance if args.tolerance is not None else config.default_tolerance_m
        )
        engine = RouteEngine(graph, config=config, seed=args.seed)
        t0 = perf_counter()
        paths = engine.find_routes(
            args.start[0],
            args.start[1],
            args.goal[0],
            args.goal[1],
            k=args.k,
            target_distance=args.target,
            tolerance=tolerance,
            algorithm=SearchAlgorithm.from_name(args.algorithm),
        )
        logger.info(
            f"Found {len(paths)} route(s) with {args.algorithm} in "
            f"{_format_duration(perf_counter() - t0)}"
        )
        print(json.dumps(paths_to_dict(paths), indent=2))

    except FileNotFoundError as e:
        logger.error(f"File not found: {e.filename}")
        print(f"ERROR: File not found: {e.filename}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to search routes: {type(e).__name__}: {e}")
        print(f"ERROR: Failed to search routes: {type(e).__name__}: {e}")
        sys.exit(1)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``routegen`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="routegen",
        description="Find routes of a target length on a road graph.",
    )
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
        metavar="{search,inspect}",
        help="Available commands",
    )

    search_parser = subparsers.add_parser("search", help="Search for routes")
    search_parser.add_argument("records", type=Path, help="Node/way records (YAML or JSON)")
    search_parser.add_argument(
        "--start", type=_parse_coord, required=True, help="Start as LAT,LON"
    )
    search_parser.add_argument(
        "--goal",
        type=_parse_coord,
        default=None,
        help="Goal as LAT,LON (default: same as --start, i.e. a loop)",
    )
    search_parser.add_argument(
        "--target", type=float, required=True, help="Target route length in meters"
    )
    search_parser.add_argument(
        "--tolerance",
        type=float,
        default=None,
        help="Allowed deviation in meters (default: config default_tolerance_m)",
    )
    search_parser.add_argument("-k", type=int, default=1, help="Maximum number of routes")
    search_parser.add_argument(
        "--algorithm",
        "-a",
        choices=[alg.name.lower() for alg in SearchAlgorithm],
        default="window",
        help="Search algorithm (default: window)",
    )
    search_parser.add_argument(
        "--seed", type=int, default=None, help="Master seed for the hybrid search"
    )
    search_parser.add_argument(
        "--config", type=Path, default=None, help="Search config YAML"
    )

    inspect_parser = subparsers.add_parser("inspect", help="Summarize the road graph")
    inspect_parser.add_argument("records", type=Path, help="Node/way records (YAML or JSON)")

    for p in (search_parser, inspect_parser):
        p.add_argument(
            "--highways",
            nargs="+",
            default=list(ACCEPTED_ROAD_TYPES),
            help="Accepted 'highway' tag values (default: common road types)",
        )
        p.add_argument(
            "--all-ways",
            action="store_true",
            help="Use every way regardless of its tags",
        )

    effective_args = sys.argv[1:] if argv is None else argv
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    # Config-file logging settings first; command-line flags override the level
    log_config = LOGGING_CONFIG
    config_path = getattr(args, "config", None)
    try:
        if config_path is not None:
            log_config = load_logging_config(config_path)
        configure_logging(log_config)
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {config_path}")
        sys.exit(1)
    except Exception as e:
        print("ERROR: Invalid logging config")
        print(f"  {type(e).__name__}: {e}")
        sys.exit(1)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)

    highways = None if args.all_ways else args.highways

    if args.command == "search":
        if args.goal is None:
            args.goal = args.start
        _search(args, highways)
    elif args.command == "inspect":
        _inspect(args.records, highways)


if __name__ == "__main__":
    main()
