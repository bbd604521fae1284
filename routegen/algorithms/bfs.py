from __future__ import annotations

from collections import deque
from typing import List, Optional

from routegen.algorithms.base import IndexPath, NodeIndex, check_endpoints
from routegen.graph import Graph


def bfs(graph: Graph, start: NodeIndex, goal: NodeIndex) -> Optional[IndexPath]:
    """
    Breadth-first search from ``start`` to ``goal``.

    Returns the first path found (fewest edges) as dense node indices, or
    None if ``goal`` is unreachable.
    """
    check_endpoints(graph, start, goal)

    adjacency = graph.adjacency
    visited = [False] * len(adjacency)
    prev: List[Optional[NodeIndex]] = [None] * len(adjacency)
    queue = deque([start])
    visited[start] = True

    while queue:
        current = queue.popleft()
        if current == goal:
            path: IndexPath = []
            node: Optional[NodeIndex] = goal
            while node is not None:
                path.append(node)
                node = prev[node]
            path.reverse()
            return path

        for nbr in adjacency[current]:
            if not visited[nbr.index]:
                visited[nbr.index] = True
                prev[nbr.index] = current
                queue.append(nbr.index)
    return None
