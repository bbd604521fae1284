"""routegen: target-distance route search on road graphs.

routegen builds a dense-indexed graph from map node/way records and searches
it for routes whose length falls within a tolerance of a target distance,
e.g. running or cycling loops of about 5 km.

Primary API:
    GraphBuilder, build_graph() - Assemble a Graph from node/way records
    Graph - Immutable dense-indexed road graph
    RouteEngine, SearchAlgorithm - Snap coordinates and run a search
    SearchConfig - Search tunables

Example:
    from routegen import RouteEngine, SearchAlgorithm, build_graph

    graph = build_graph(nodes, ways)
    engine = RouteEngine(graph, seed=7)
    paths = engine.find_routes(
        52.52, 13.40, 52.52, 13.40,
        k=3, target_distance=5000, tolerance=200,
        algorithm=SearchAlgorithm.HYBRID,
    )
"""

from __future__ import annotations

from routegen import logging
from routegen.builder import ACCEPTED_ROAD_TYPES, GraphBuilder, build_graph
from routegen.config import SEARCH_CONFIG, SearchConfig, load_config
from routegen.engine import RouteEngine, SearchAlgorithm
from routegen.geo import distance
from routegen.graph import Graph
from routegen.model import EdgeData, Neighbor, Node, Path, Way
from routegen.seed_manager import SeedManager

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Model
    "Node",
    "Way",
    "EdgeData",
    "Neighbor",
    "Path",
    "Graph",
    # Construction
    "GraphBuilder",
    "build_graph",
    "ACCEPTED_ROAD_TYPES",
    # Search
    "RouteEngine",
    "SearchAlgorithm",
    "SearchConfig",
    "SEARCH_CONFIG",
    "load_config",
    "SeedManager",
    # Utilities
    "distance",
    "logging",
]
