"""Randomized outbound walk stitched to an exact inbound shortest path.

1. A bounded Dijkstra rooted at the goal gives every nearby node its exact
   distance to the goal and its next hop toward it.
2. Each of ``k`` iterations runs a randomized depth-first walk from the start.
   The first node (other than the start) whose walk distance plus exact
   residual lands in the target window becomes the midpoint.
3. The walk (start -> midpoint) is joined with the shortest path
   (midpoint -> goal), dropping the duplicated midpoint.
"""

from __future__ import annotations

import random
from typing import Dict, List, Optional, Set, Tuple

from routegen.algorithms.base import (
    Distance,
    IndexPath,
    NodeIndex,
    RouteResult,
    TargetWindow,
    check_endpoints,
)
from routegen.algorithms.spf import path_to_root, reverse_spf
from routegen.graph import Graph
from routegen.logging import get_logger

logger = get_logger(__name__)


def random_walk(
    graph: Graph,
    start: NodeIndex,
    residual: Dict[NodeIndex, Distance],
    window: TargetWindow,
    rng: random.Random,
) -> Optional[Tuple[IndexPath, Distance]]:
    """Walk depth-first from ``start`` in random neighbor order.

    Uses an explicit stack. Each frame holds a node, its walk distance and its
    remaining shuffled neighbors. A node is visited at most once per walk.

    Args:
        graph: Graph to walk.
        start: Dense index to start from.
        residual: Exact distance to the goal per node; missing means too far.
        window: Target window the walk plus residual must hit.
        rng: Random source for neighbor shuffling.

    Returns:
        ``(walk_nodes, walk_distance)`` ending at the midpoint, or None if the
        walk exhausts every branch without finding one.
    """
    adjacency = graph.adjacency
    visited: Set[NodeIndex] = {start}

    def shuffled(node: NodeIndex) -> List:
        neighbors = list(adjacency[node])
        rng.shuffle(neighbors)
        return neighbors

    stack: List[Tuple[NodeIndex, Distance, List]] = [(start, 0.0, shuffled(start))]

    while stack:
        node, dist, pending = stack[-1]
        if not pending:
            stack.pop()
            continue

        nbr = pending.pop()
        cand = nbr.index
        if cand in visited:
            continue
        new_dist = dist + nbr.edge.length_m
        if new_dist > window.upper:
            continue
        cand_residual = residual.get(cand)
        if cand_residual is None or new_dist + cand_residual > window.upper:
            continue

        visited.add(cand)
        if window.accepts(new_dist + cand_residual):
            walk = [frame[0] for frame in stack]
            walk.append(cand)
            return walk, new_dist
        stack.append((cand, new_dist, shuffled(cand)))

    return None


def hybrid_search(
    graph: Graph,
    start: NodeIndex,
    goal: NodeIndex,
    k: int,
    target: Distance,
    tolerance: Distance,
    rng: Optional[random.Random] = None,
) -> Optional[List[RouteResult]]:
    """Build up to ``k`` routes from independent random walks.

    Args:
        graph: Graph to search.
        start: Dense index of the origin.
        goal: Dense index of the destination; may equal ``start``.
        k: Number of walks to attempt, hence maximum number of results.
        target: Desired route length in meters.
        tolerance: Allowed deviation from ``target`` in meters.
        rng: Random source. A fresh unseeded ``random.Random`` when omitted.

    Returns:
        None if ``start`` cannot reach ``goal`` within ``target + tolerance``
        (no walk is attempted). Otherwise a list of at most ``k``
        ``(node_indices, length)`` results; walks that find no midpoint add
        nothing.

    Raises:
        IndexError: If ``start`` or ``goal`` is not a valid index.
        ValueError: If ``tolerance`` is negative.
    """
    check_endpoints(graph, start, goal)
    window = TargetWindow(target, tolerance)
    if rng is None:
        rng = random.Random()

    residual, next_hop = reverse_spf(graph, goal, window.upper)
    if start not in residual:
        logger.debug(f"Hybrid search {start}->{goal}: start not reachable from goal")
        return None

    results: List[RouteResult] = []
    for _ in range(max(k, 0)):
        found = random_walk(graph, start, residual, window, rng)
        if found is None:
            continue
        walk, walk_dist = found
        midpoint = walk[-1]
        inbound = path_to_root(midpoint, goal, next_hop)
        results.append((walk + inbound[1:], walk_dist + residual[midpoint]))

    logger.debug(
        f"Hybrid search {start}->{goal}: {len(results)}/{k} walk(s) found a midpoint"
    )
    return results
