"""Value types shared by the builder, the graph and the search engine.

Nodes and ways come from the map-data collaborator; ``EdgeData`` and
``Neighbor`` are the adjacency entries the builder produces; ``Path`` is what
a search hands back to the calling service.
"""

from __future__ import annotations

import base64
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple


def new_path_id() -> str:
    """Return a 22-character URL-safe Base64 UUID4 without padding.

    The 16 raw UUID bytes encode to 24 Base64 characters, the last two of
    which are always ``==`` padding and are dropped.
    """
    return base64.urlsafe_b64encode(uuid.uuid4().bytes)[:-2].decode("ascii")


@dataclass(frozen=True)
class Node:
    """A map node.

    Attributes:
        id: External (OSM) identifier.
        lat: Latitude in degrees.
        lon: Longitude in degrees.
    """

    id: int
    lat: float
    lon: float

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "lat": self.lat, "lon": self.lon}


@dataclass(frozen=True)
class EdgeData:
    """Payload carried by both directed entries of an undirected edge."""

    way_id: int
    length_m: float

    def __post_init__(self) -> None:
        if self.length_m < 0:
            raise ValueError(
                f"Edge length must be non-negative, got {self.length_m} "
                f"(way {self.way_id})"
            )


@dataclass(frozen=True)
class Neighbor:
    """One adjacency entry.

    Attributes:
        osm_id: External identifier of the neighbor node.
        index: Dense index of the neighbor node.
        edge: Way id and length of the connecting edge.
    """

    osm_id: int
    index: int
    edge: EdgeData


@dataclass(frozen=True)
class Way:
    """An ordered run of connected nodes from the map data.

    ``nodes`` holds the Node records resolved against ``node_refs``; the
    builder only reads ``nodes``. ``tags`` keeps the way's map tags
    (e.g. ``{"highway": "residential"}``) for road-type filtering.
    """

    id: int
    node_refs: Tuple[int, ...]
    nodes: Tuple[Node, ...] = ()
    tags: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "node_refs", tuple(self.node_refs))
        object.__setattr__(self, "nodes", tuple(self.nodes))


@dataclass(frozen=True)
class Path:
    """A materialized search result.

    Attributes:
        id: Unique identifier generated at materialization time.
        distance: Total length in meters.
        nodes: Node records from origin to destination, inclusive.
    """

    id: str
    distance: float
    nodes: Tuple[Node, ...]

    @classmethod
    def create(cls, nodes: Tuple[Node, ...], distance: float) -> Path:
        """Wrap ``nodes`` and ``distance`` with a fresh identifier."""
        return cls(id=new_path_id(), distance=float(distance), nodes=tuple(nodes))

    @property
    def node_ids(self) -> Tuple[int, ...]:
        """External identifiers of the path's nodes, in order."""
        return tuple(node.id for node in self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation of the path."""
        return {
            "id": self.id,
            "distance": self.distance,
            "nodes": [node.to_dict() for node in self.nodes],
        }
