"""Graph construction from node and way records.

``GraphBuilder`` maps external (OSM) node identifiers to dense indices,
deduplicates nodes, and accumulates bidirectional edges way by way. Calling
``build()`` consumes the builder and returns an immutable :class:`Graph`.

The module-level helpers reproduce the road filtering the map service applies
before handing ways to the builder.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from routegen.geo import distance
from routegen.graph import Graph
from routegen.logging import get_logger
from routegen.model import EdgeData, Neighbor, Node, Way

logger = get_logger(__name__)

#: ``highway`` tag values that make up the routable road network.
ACCEPTED_ROAD_TYPES = (
    "residential",
    "unclassified",
    "track",
    "service",
    "tertiary",
    "road",
    "secondary",
    "primary",
    "trunk",
    "primary_link",
    "trunk_link",
    "tertiary_link",
    "secondary_link",
    "highway",
)


class GraphBuilder:
    """Accumulates nodes and edges, then yields a :class:`Graph` once."""

    def __init__(self) -> None:
        self._id_to_idx: Dict[int, int] = {}
        self._nodes: List[Node] = []
        self._adj: List[List[Neighbor]] = []
        self._built = False

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, osm_id: object) -> bool:
        return osm_id in self._id_to_idx

    def _ensure_open(self) -> None:
        if self._built:
            raise RuntimeError("GraphBuilder has already been consumed by build().")

    def index_of(self, osm_id: int) -> int:
        """Return the dense index assigned to ``osm_id``.

        Raises:
            KeyError: If the identifier was never registered.
        """
        try:
            return self._id_to_idx[osm_id]
        except KeyError:
            raise KeyError(f"Node '{osm_id}' is not registered.") from None

    def add_node(self, node: Node) -> int:
        """Register ``node`` and return its dense index.

        A node whose identifier is already registered is not added again; the
        index assigned on first registration is returned.
        """
        self._ensure_open()
        existing = self._id_to_idx.get(node.id)
        if existing is not None:
            return existing

        idx = len(self._nodes)
        self._id_to_idx[node.id] = idx
        self._nodes.append(node)
        self._adj.append([])
        return idx

    def add_edge_bidirectional(
        self, from_id: int, to_id: int, edge_data: EdgeData
    ) -> None:
        """Connect two registered nodes in both directions.

        Both identifiers are resolved before anything is appended, so a bad
        identifier leaves the builder untouched.

        Raises:
            KeyError: If either identifier is not registered.
        """
        self._ensure_open()
        from_idx = self.index_of(from_id)
        to_idx = self.index_of(to_id)
        self._adj[from_idx].append(Neighbor(osm_id=to_id, index=to_idx, edge=edge_data))
        self._adj[to_idx].append(Neighbor(osm_id=from_id, index=from_idx, edge=edge_data))

    def add_way(self, way: Way) -> None:
        """Add an edge for every consecutive pair of the way's nodes."""
        self._ensure_open()
        for src, dst in zip(way.nodes, way.nodes[1:]):
            self.add_node(src)
            self.add_node(dst)
            edge_data = EdgeData(
                way_id=way.id,
                length_m=distance(src.lat, src.lon, dst.lat, dst.lon),
            )
            self.add_edge_bidirectional(src.id, dst.id, edge_data)

    def build(self) -> Graph:
        """Return the finished Graph. The builder cannot be used afterwards."""
        self._ensure_open()
        self._built = True
        graph = Graph(self._nodes, self._adj)
        self._nodes, self._adj, self._id_to_idx = [], [], {}
        return graph


def select_ways(
    ways: Iterable[Way], accepted: Sequence[str] = ACCEPTED_ROAD_TYPES
) -> List[Way]:
    """Keep ways whose ``highway`` tag is one of ``accepted``."""
    accepted_set = set(accepted)
    return [way for way in ways if way.tags.get("highway") in accepted_set]


def ways_with_tag_keys(ways: Iterable[Way], keys: Sequence[str]) -> List[Way]:
    """Keep ways that carry at least one of the tag ``keys``, whatever the value."""
    wanted = set(keys)
    return [way for way in ways if wanted.intersection(way.tags)]


def filter_nodes_on_ways(nodes: Iterable[Node], ways: Iterable[Way]) -> List[Node]:
    """Drop nodes that no way references."""
    referenced = {ref for way in ways for ref in way.node_refs}
    return [node for node in nodes if node.id in referenced]


def resolve_way_nodes(ways: Iterable[Way], nodes: Iterable[Node]) -> List[Way]:
    """Attach Node records to each way in ``node_refs`` order.

    Raises:
        KeyError: If a way references a node that is not in ``nodes``.
    """
    by_id: Mapping[int, Node] = {node.id: node for node in nodes}
    resolved = []
    for way in ways:
        try:
            way_nodes = tuple(by_id[ref] for ref in way.node_refs)
        except KeyError as exc:
            raise KeyError(
                f"Way '{way.id}' references unknown node '{exc.args[0]}'."
            ) from None
        resolved.append(Way(way.id, way.node_refs, way_nodes, way.tags))
    return resolved


def build_graph(
    nodes: Iterable[Node],
    ways: Iterable[Way],
    accepted: Optional[Sequence[str]] = ACCEPTED_ROAD_TYPES,
) -> Graph:
    """Filter, resolve and assemble records into a Graph.

    Args:
        nodes: Node records from the map data.
        ways: Way records; their ``nodes`` are resolved here from ``node_refs``.
        accepted: ``highway`` values to keep. ``None`` keeps every way.

    Returns:
        The built Graph.
    """
    ways = list(ways)
    selected = ways if accepted is None else select_ways(ways, accepted)
    road_nodes = filter_nodes_on_ways(nodes, selected)

    builder = GraphBuilder()
    for way in resolve_way_nodes(selected, road_nodes):
        builder.add_way(way)
    graph = builder.build()

    logger.info(
        f"Built graph from {len(selected)}/{len(ways)} ways: "
        f"{graph.num_nodes:,} nodes, {graph.num_edges:,} edges"
    )
    return graph
