"""Distance-windowed enumeration search.

Breadth-first over search states rather than graph nodes: a node may be
reached again through a different partial path. Each path whose length falls
in ``[target - tolerance, target + tolerance]`` and ends at the goal is
recorded, in the order the frontier discovers it, until ``k`` are found.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Dict, List, Optional

from routegen.algorithms.base import (
    DEFAULT_LOOKBACK,
    Distance,
    NodeIndex,
    RouteResult,
    StateArena,
    TargetWindow,
    check_endpoints,
    deadline_passed,
)
from routegen.geo import distance
from routegen.graph import Graph
from routegen.logging import get_logger

logger = get_logger(__name__)


class StraightLine:
    """Memoised great-circle distance from any node to a fixed goal node.

    Never exceeds the length of a road path between the two nodes, so it is a
    safe lower bound for pruning.
    """

    def __init__(self, graph: Graph, goal: NodeIndex) -> None:
        self._nodes = graph.nodes
        goal_node = graph.node(goal)
        self._goal_lat = goal_node.lat
        self._goal_lon = goal_node.lon
        self._cache: Dict[NodeIndex, Distance] = {}

    def __call__(self, node: NodeIndex) -> Distance:
        cached = self._cache.get(node)
        if cached is None:
            rec = self._nodes[node]
            cached = distance(rec.lat, rec.lon, self._goal_lat, self._goal_lon)
            self._cache[node] = cached
        return cached


def window_search(
    graph: Graph,
    start: NodeIndex,
    goal: NodeIndex,
    k: int,
    target: Distance,
    tolerance: Distance,
    lookback: int = DEFAULT_LOOKBACK,
    max_states: Optional[int] = None,
    deadline: Optional[float] = None,
) -> List[RouteResult]:
    """Enumerate up to ``k`` start-to-goal paths within the target window.

    Args:
        graph: Graph to search.
        start: Dense index of the origin.
        goal: Dense index of the destination; may equal ``start`` for loops.
        k: Maximum number of results.
        target: Desired path length in meters.
        tolerance: Allowed deviation from ``target`` in meters.
        lookback: How many predecessor states the cycle check inspects. The
            goal itself may always be revisited.
        max_states: Optional cap on arena size; the search stops with what it
            has once the cap is hit.
        deadline: Optional ``time.perf_counter()`` value after which the search
            stops with what it has.

    Returns:
        List of ``(node_indices, length)`` in discovery order. Empty when no
        path fits the window.

    Raises:
        IndexError: If ``start`` or ``goal`` is not a valid index.
        ValueError: If ``tolerance`` is negative.
    """
    check_endpoints(graph, start, goal)
    window = TargetWindow(target, tolerance)
    results: List[RouteResult] = []
    if k <= 0:
        return results

    adjacency = graph.adjacency
    straight_line = StraightLine(graph, goal)
    arena = StateArena()
    frontier: Deque[int] = deque([arena.add(start, None, 0.0)])

    while frontier:
        if deadline_passed(deadline):
            logger.warning(
                f"Window search stopped at deadline with {len(results)} result(s) "
                f"after {len(arena):,} states"
            )
            break

        state_idx = frontier.popleft()
        node, _, dist = arena[state_idx]

        if node == goal and window.accepts(dist):
            results.append((arena.path_to(state_idx), dist))
            if len(results) >= k:
                break

        for nbr in adjacency[node]:
            cand = nbr.index
            if cand != goal and arena.in_lookback(state_idx, cand, lookback):
                continue
            new_dist = dist + nbr.edge.length_m
            if new_dist > window.upper:
                continue
            if new_dist + straight_line(cand) > window.upper:
                continue
            if max_states is not None and len(arena) >= max_states:
                logger.warning(
                    f"Window search hit the state cap ({max_states:,}); "
                    f"returning {len(results)} result(s)"
                )
                return results
            frontier.append(arena.add(cand, state_idx, new_dist))

    logger.debug(
        f"Window search {start}->{goal}: {len(results)} result(s), "
        f"{len(arena):,} states"
    )
    return results
