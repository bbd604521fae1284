"""Route search facade.

``RouteEngine`` snaps the caller's coordinates onto the graph, runs one of the
search algorithms and materializes the index sequences into ``Path`` records.
It holds no per-search state besides a call counter, so one engine can serve
concurrent callers.
"""

from __future__ import annotations

from enum import IntEnum
from itertools import count
from time import perf_counter
from typing import List, Optional

from routegen.algorithms.bfs import bfs
from routegen.algorithms.heuristic import heuristic_search
from routegen.algorithms.hybrid import hybrid_search
from routegen.algorithms.window import window_search
from routegen.config import SEARCH_CONFIG, SearchConfig
from routegen.graph import Graph
from routegen.logging import get_logger
from routegen.model import Path
from routegen.seed_manager import SeedManager

logger = get_logger(__name__)


class SearchAlgorithm(IntEnum):
    """
    Route search algorithms
    """

    #: Fewest-edges path, ignores the target distance.
    BFS = 1
    #: Breadth-first enumeration of paths inside the target window.
    WINDOW = 2
    #: Best-first enumeration ordered by closeness to the target.
    HEURISTIC = 3
    #: Random outbound walk plus exact shortest path back.
    HYBRID = 4

    @classmethod
    def from_name(cls, name: str) -> SearchAlgorithm:
        try:
            return cls[name.strip().upper()]
        except KeyError:
            valid = ", ".join(alg.name.lower() for alg in cls)
            raise ValueError(f"Unknown algorithm '{name}'. Expected one of: {valid}") from None


class RouteEngine:
    """Runs route searches against one built Graph.

    Args:
        graph: The graph to search. Must be fully built.
        config: Search tunables; defaults to :data:`routegen.config.SEARCH_CONFIG`.
        seed: Master seed for the hybrid search. ``None`` gives non-reproducible
            results.
    """

    def __init__(
        self,
        graph: Graph,
        config: Optional[SearchConfig] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.graph = graph
        self.config = config if config is not None else SEARCH_CONFIG
        self.seeds = SeedManager(seed)
        self._calls = count()

    def nearest_node(self, lat: float, lon: float) -> int:
        """Return the dense index of the node closest to ``(lat, lon)``."""
        return self.graph.nearest_node(lat, lon)

    def _deadline(self) -> Optional[float]:
        if self.config.time_budget_s is None:
            return None
        return perf_counter() + self.config.time_budget_s

    def find_routes(
        self,
        start_lat: float,
        start_lon: float,
        goal_lat: float,
        goal_lon: float,
        k: int,
        target_distance: float,
        tolerance: float,
        algorithm: SearchAlgorithm = SearchAlgorithm.WINDOW,
    ) -> List[Path]:
        """Find up to ``k`` routes between two coordinates.

        Both coordinates are snapped to their nearest graph node first.

        Args:
            start_lat: Origin latitude in degrees.
            start_lon: Origin longitude in degrees.
            goal_lat: Destination latitude in degrees.
            goal_lon: Destination longitude in degrees.
            k: Maximum number of routes.
            target_distance: Desired route length in meters.
            tolerance: Allowed deviation from ``target_distance`` in meters.
            algorithm: Which search to run.

        Returns:
            Materialized paths, in the order the algorithm produced them. Empty
            when nothing fits. ``BFS`` ignores the target window and returns at
            most one path.
        """
        start = self.nearest_node(start_lat, start_lon)
        goal = self.nearest_node(goal_lat, goal_lon)
        return self.find_routes_between(
            start, goal, k, target_distance, tolerance, algorithm
        )

    def find_routes_between(
        self,
        start: int,
        goal: int,
        k: int,
        target_distance: float,
        tolerance: float,
        algorithm: SearchAlgorithm = SearchAlgorithm.WINDOW,
    ) -> List[Path]:
        """Same as :meth:`find_routes` for already-snapped dense indices."""
        call_no = next(self._calls)
        t0 = perf_counter()
        cfg = self.config

        if algorithm == SearchAlgorithm.BFS:
            path = bfs(self.graph, start, goal)
            found = [] if path is None else [(path, self.graph.path_length(path))]
        elif algorithm == SearchAlgorithm.WINDOW:
            found = window_search(
                self.graph,
                start,
                goal,
                k,
                target_distance,
                tolerance,
                lookback=cfg.lookback,
                max_states=cfg.max_states,
                deadline=self._deadline(),
            )
        elif algorithm == SearchAlgorithm.HEURISTIC:
            found = heuristic_search(
                self.graph,
                start,
                goal,
                k,
                target_distance,
                tolerance,
                lookback=cfg.lookback,
                max_states=cfg.max_states,
                deadline=self._deadline(),
            )
        elif algorithm == SearchAlgorithm.HYBRID:
            rng = self.seeds.create_random_state("hybrid", start, goal, call_no)
            hybrid = hybrid_search(
                self.graph, start, goal, k, target_distance, tolerance, rng=rng
            )
            if hybrid is None:
                logger.info(
                    f"No route possible from node {start} to node {goal} "
                    f"within {target_distance + tolerance:,.0f} m"
                )
                hybrid = []
            found = hybrid
        else:
            raise ValueError(f"Unsupported search algorithm: {algorithm!r}")

        paths = [self.graph.materialize(indices, dist) for indices, dist in found]
        logger.debug(
            f"{algorithm.name.lower()} search {start}->{goal} "
            f"(target={target_distance}, tolerance={tolerance}, k={k}): "
            f"{len(paths)} path(s) in {perf_counter() - t0:.3f} s"
        )
        return paths
