"""Closeness-first priority search.

Best-first over search states, ordered by how far the optimistic total
``distance_so_far + straight_line(node, goal)`` is from the target. States
most likely to land inside the target window are expanded first. This is a
heuristic: results are not shortest and not guaranteed to be the best fits.
"""

from __future__ import annotations

from heapq import heappop, heappush
from typing import List, Optional, Tuple

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
from routegen.algorithms.window import StraightLine
from routegen.graph import Graph
from routegen.logging import get_logger

logger = get_logger(__name__)

#: Default hard cap on stored states.
DEFAULT_MAX_STATES = 2_000_000


def heuristic_search(
    graph: Graph,
    start: NodeIndex,
    goal: NodeIndex,
    k: int,
    target: Distance,
    tolerance: Distance,
    lookback: int = DEFAULT_LOOKBACK,
    max_states: Optional[int] = DEFAULT_MAX_STATES,
    deadline: Optional[float] = None,
) -> List[RouteResult]:
    """Find up to ``k`` paths within the target window, closest estimates first.

    Uses the same bounded-lookback cycle check and pruning as
    :func:`routegen.algorithms.window.window_search`. A goal state is accepted
    as soon as it is popped if its length is inside the window.

    Args:
        graph: Graph to search.
        start: Dense index of the origin.
        goal: Dense index of the destination.
        k: Maximum number of results.
        target: Desired path length in meters.
        tolerance: Allowed deviation from ``target`` in meters.
        lookback: Predecessor states inspected by the cycle check.
        max_states: Hard cap on arena size. When reached, the search logs a
            warning and returns the results found so far. ``None`` disables it.
        deadline: Optional ``time.perf_counter()`` value after which the search
            stops with what it has.

    Returns:
        List of ``(node_indices, length)`` in the order they were accepted.

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

    def priority(dist: Distance, node: NodeIndex) -> Distance:
        return abs(dist + straight_line(node) - target)

    # Ties are broken by arena index, i.e. insertion order
    min_pq: List[Tuple[Distance, int]] = []
    root = arena.add(start, None, 0.0)
    heappush(min_pq, (priority(0.0, start), root))

    while min_pq:
        if deadline_passed(deadline):
            logger.warning(
                f"Heuristic search stopped at deadline with {len(results)} result(s) "
                f"after {len(arena):,} states"
            )
            break

        _, state_idx = heappop(min_pq)
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
                    f"Heuristic search hit the state cap ({max_states:,}); "
                    f"returning {len(results)} result(s)"
                )
                return results
            child = arena.add(cand, state_idx, new_dist)
            heappush(min_pq, (priority(new_dist, cand), child))

    logger.debug(
        f"Heuristic search {start}->{goal}: {len(results)} result(s), "
        f"{len(arena):,} states"
    )
    return results
