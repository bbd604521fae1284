"""Immutable dense-indexed road graph.

Nodes live in a contiguous tuple; a node's position is its dense index.
``adjacency[i]`` holds the neighbors of node ``i``. Every undirected edge is
stored as two ``Neighbor`` entries, one per endpoint. A built ``Graph`` is
never mutated, so any number of searches may read it concurrently.
"""

from __future__ import annotations

from typing import Iterable, Sequence, Tuple

import numpy as np

from routegen.geo import distance_many
from routegen.model import Neighbor, Node, Path


class Graph:
    """Read-only node array plus index-aligned adjacency array.

    Args:
        nodes: Node records; index ``i`` is node ``i``'s dense index.
        adjacency: One neighbor sequence per node.

    Raises:
        ValueError: If the arrays are not aligned or a neighbor index is out of
            range.
    """

    def __init__(
        self,
        nodes: Iterable[Node],
        adjacency: Iterable[Iterable[Neighbor]],
    ) -> None:
        self._nodes: Tuple[Node, ...] = tuple(nodes)
        self._adj: Tuple[Tuple[Neighbor, ...], ...] = tuple(
            tuple(neighbors) for neighbors in adjacency
        )

        n = len(self._nodes)
        if len(self._adj) != n:
            raise ValueError(
                f"Adjacency has {len(self._adj)} entries for {n} nodes."
            )
        for idx, neighbors in enumerate(self._adj):
            for nbr in neighbors:
                if not 0 <= nbr.index < n:
                    raise ValueError(
                        f"Node {idx} has neighbor index {nbr.index} outside 0..{n - 1}."
                    )

        # Coordinate columns for vectorised nearest-node lookups
        self._lats = np.fromiter((node.lat for node in self._nodes), float, n)
        self._lons = np.fromiter((node.lon for node in self._nodes), float, n)

    @property
    def nodes(self) -> Tuple[Node, ...]:
        return self._nodes

    @property
    def adjacency(self) -> Tuple[Tuple[Neighbor, ...], ...]:
        return self._adj

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"Graph(nodes={self.num_nodes}, edges={self.num_edges})"

    @property
    def num_nodes(self) -> int:
        return len(self._nodes)

    @property
    def num_edges(self) -> int:
        """Number of undirected edges (each is stored twice)."""
        return sum(len(neighbors) for neighbors in self._adj) // 2

    def _check_index(self, idx: int) -> None:
        if not 0 <= idx < len(self._nodes):
            raise IndexError(
                f"Node index {idx} is out of range for a graph of {len(self._nodes)} nodes."
            )

    def node(self, idx: int) -> Node:
        """Return the Node at dense index ``idx``.

        Raises:
            IndexError: If ``idx`` is negative or past the end.
        """
        self._check_index(idx)
        return self._nodes[idx]

    def neighbors(self, idx: int) -> Tuple[Neighbor, ...]:
        """Return the adjacency entries of node ``idx``.

        Raises:
            IndexError: If ``idx`` is negative or past the end.
        """
        self._check_index(idx)
        return self._adj[idx]

    def edge_length(self, u: int, v: int) -> float:
        """Return the length of the shortest edge between ``u`` and ``v``.

        Raises:
            IndexError: If ``u`` is out of range.
            KeyError: If the nodes are not adjacent.
        """
        lengths = [nbr.edge.length_m for nbr in self.neighbors(u) if nbr.index == v]
        if not lengths:
            raise KeyError(f"Nodes {u} and {v} are not adjacent.")
        return min(lengths)

    def path_length(self, indices: Sequence[int]) -> float:
        """Sum the edge lengths along consecutive pairs of ``indices``."""
        return sum(self.edge_length(u, v) for u, v in zip(indices, indices[1:]))

    def nearest_node(self, lat: float, lon: float) -> int:
        """Return the index of the node closest to ``(lat, lon)``.

        Scans every node. On equal distances the lowest index wins.

        Raises:
            ValueError: If the graph has no nodes.
        """
        if not self._nodes:
            raise ValueError("Cannot snap a coordinate onto an empty graph.")
        # argmin returns the first occurrence of the minimum
        return int(np.argmin(distance_many(lat, lon, self._lats, self._lons)))

    def materialize(self, indices: Sequence[int], distance: float) -> Path:
        """Turn a dense-index sequence into a Path with a fresh identifier."""
        return Path.create(tuple(self.node(idx) for idx in indices), distance)
