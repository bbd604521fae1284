"""Bounded single-source shortest paths.

Dijkstra over the undirected road graph, rooted at one node and cut off at a
maximum distance. Because every edge is stored in both directions, distances
*from* the root equal distances *to* it, so the predecessor of a node in the
tree is its next hop toward the root.
"""

from __future__ import annotations

from heapq import heappop, heappush
from typing import Dict, List, Tuple

from routegen.algorithms.base import Distance, IndexPath, NodeIndex
from routegen.graph import Graph


def reverse_spf(
    graph: Graph,
    root: NodeIndex,
    max_distance: Distance = float("inf"),
) -> Tuple[Dict[NodeIndex, Distance], Dict[NodeIndex, NodeIndex]]:
    """Compute exact distances to ``root`` for every node within ``max_distance``.

    Stale heap entries are skipped by comparing against the best known
    distance when popped. Relaxation stops once the smallest tentative
    distance in the heap exceeds ``max_distance``.

    Args:
        graph: Graph to search.
        root: Dense index the distances are measured to.
        max_distance: Cutoff in meters.

    Returns:
        A tuple of (dist, next_hop):
          - dist: Maps each settled node to its distance to ``root``.
          - next_hop: Maps each settled node other than ``root`` to the
            neighbor one step closer to ``root``.

    Raises:
        IndexError: If ``root`` is not a valid index.
    """
    graph.node(root)
    adjacency = graph.adjacency

    dist: Dict[NodeIndex, Distance] = {root: 0.0}
    next_hop: Dict[NodeIndex, NodeIndex] = {}
    min_pq: List[Tuple[Distance, NodeIndex]] = [(0.0, root)]
    settled: Dict[NodeIndex, Distance] = {}

    while min_pq:
        current_dist, node = heappop(min_pq)
        if current_dist > max_distance:
            break
        if current_dist > dist[node]:
            continue
        settled[node] = current_dist

        for nbr in adjacency[node]:
            new_dist = current_dist + nbr.edge.length_m
            if nbr.index not in dist or new_dist < dist[nbr.index]:
                dist[nbr.index] = new_dist
                next_hop[nbr.index] = node
                heappush(min_pq, (new_dist, nbr.index))

    return settled, {n: hop for n, hop in next_hop.items() if n in settled}


def path_to_root(
    node: NodeIndex, root: NodeIndex, next_hop: Dict[NodeIndex, NodeIndex]
) -> IndexPath:
    """Follow ``next_hop`` pointers from ``node`` to ``root``, both inclusive.

    Raises:
        KeyError: If the chain breaks before reaching ``root``.
    """
    path = [node]
    while node != root:
        node = next_hop[node]
        path.append(node)
    return path
