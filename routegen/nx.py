"""NetworkX graph conversion utilities.

Converts between routegen's dense-indexed :class:`~routegen.graph.Graph` and
``networkx.MultiGraph``, e.g. to analyse connectivity or to import a road
graph produced by another NetworkX-based tool.

Example:
    >>> from routegen.nx import to_networkx, from_networkx
    >>> G = to_networkx(graph)
    >>> G.nodes[0]["osm_id"]
    1001
    >>> graph2 = from_networkx(G)
"""

from __future__ import annotations

from typing import Any

import networkx as nx

from routegen.builder import GraphBuilder
from routegen.geo import distance
from routegen.graph import Graph
from routegen.model import EdgeData, Node


def to_networkx(graph: Graph) -> nx.MultiGraph:
    """Convert a Graph to an undirected ``networkx.MultiGraph``.

    Nodes are labelled by dense index and carry ``osm_id``, ``lat`` and
    ``lon``. Each undirected edge becomes one NetworkX edge with ``way_id`` and
    ``length_m``; parallel edges are preserved.
    """
    G = nx.MultiGraph()
    for idx, node in enumerate(graph.nodes):
        G.add_node(idx, osm_id=node.id, lat=node.lat, lon=node.lon)

    # Each undirected edge is stored once per endpoint. Pair them up by
    # counting how many (u, v, edge) entries were seen from the lower side.
    pending: dict = {}
    for u, neighbors in enumerate(graph.adjacency):
        for nbr in neighbors:
            v = nbr.index
            key = (min(u, v), max(u, v), nbr.edge)
            if u == v:
                # Self-loop: both entries sit in the same list
                pending[key] = pending.get(key, 0) + 1
                if pending[key] % 2 == 0:
                    G.add_edge(u, v, way_id=nbr.edge.way_id, length_m=nbr.edge.length_m)
                continue
            if u < v:
                G.add_edge(u, v, way_id=nbr.edge.way_id, length_m=nbr.edge.length_m)
    return G


def from_networkx(
    G: Any,
    *,
    lat_attr: str = "lat",
    lon_attr: str = "lon",
    length_attr: str = "length_m",
    way_attr: str = "way_id",
) -> Graph:
    """Build a Graph from an undirected NetworkX graph.

    Node labels must be integers (used as external identifiers) and nodes must
    carry latitude and longitude attributes. Edge length comes from
    ``length_attr`` when present, otherwise from the haversine distance between
    the endpoints.

    Raises:
        TypeError: If ``G`` is not a NetworkX ``Graph`` or ``MultiGraph``.
        ValueError: If a node lacks coordinates.
    """
    if not isinstance(G, (nx.Graph, nx.MultiGraph)) or G.is_directed():
        raise TypeError(
            f"Expected an undirected NetworkX graph (Graph or MultiGraph), "
            f"got {type(G).__name__}"
        )

    builder = GraphBuilder()
    records = {}
    for label, attrs in G.nodes(data=True):
        if lat_attr not in attrs or lon_attr not in attrs:
            raise ValueError(f"Node '{label}' has no '{lat_attr}'/'{lon_attr}' attributes")
        osm_id = int(attrs.get("osm_id", label))
        node = Node(id=osm_id, lat=float(attrs[lat_attr]), lon=float(attrs[lon_attr]))
        records[label] = node
        builder.add_node(node)

    for u, v, attrs in G.edges(data=True):
        src, dst = records[u], records[v]
        length = attrs.get(length_attr)
        if length is None:
            length = distance(src.lat, src.lon, dst.lat, dst.lon)
        edge = EdgeData(way_id=int(attrs.get(way_attr, 0)), length_m=float(length))
        builder.add_edge_bidirectional(src.id, dst.id, edge)

    return builder.build()
