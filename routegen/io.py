"""Record adapters between routegen and its collaborators.

Input records are plain mappings as produced by the map-data parser:

    {
        "nodes": [{"id": 1, "lat": 52.5, "lon": 13.4}, ...],
        "ways": [
            {"id": 10, "node_refs": [1, 2, 3], "tags": {"highway": "residential"}},
            ...
        ]
    }

Output is the service-layer shape of a list of paths.
"""

from __future__ import annotations

from pathlib import Path as FilePath
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Union

import yaml

from routegen.model import Node, Path, Way


def node_from_dict(obj: Mapping[str, Any]) -> Node:
    """Build a Node from ``{"id", "lat", "lon"}``."""
    try:
        return Node(id=int(obj["id"]), lat=float(obj["lat"]), lon=float(obj["lon"]))
    except KeyError as exc:
        raise ValueError(f"Node record {dict(obj)!r} is missing '{exc.args[0]}'") from None
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Node record {dict(obj)!r} is malformed: {exc}") from None


def way_from_dict(obj: Mapping[str, Any]) -> Way:
    """Build a Way from ``{"id", "node_refs", "tags"}``; ``tags`` is optional.

    Only references are read here; Node records are attached later by
    :func:`routegen.builder.resolve_way_nodes`.
    """
    try:
        way_id = int(obj["id"])
        refs = tuple(int(ref) for ref in obj["node_refs"])
    except KeyError as exc:
        raise ValueError(f"Way record {dict(obj)!r} is missing '{exc.args[0]}'") from None
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Way record {dict(obj)!r} is malformed: {exc}") from None
    tags = {str(k): str(v) for k, v in (obj.get("tags") or {}).items()}
    return Way(id=way_id, node_refs=refs, tags=tags)


def records_from_dict(data: Mapping[str, Any]) -> Tuple[List[Node], List[Way]]:
    """Split a records mapping into Node and Way lists."""
    nodes = [node_from_dict(obj) for obj in data.get("nodes") or []]
    ways = [way_from_dict(obj) for obj in data.get("ways") or []]
    return nodes, ways


def load_records(path: Union[str, FilePath]) -> Tuple[List[Node], List[Way]]:
    """Read node and way records from a YAML or JSON file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file does not hold a records mapping.
    """
    with open(path, "r", encoding="utf-8") as fh:
        # JSON is a subset of YAML 1.2 for these documents
        data = yaml.safe_load(fh)
    if not isinstance(data, dict):
        raise ValueError(f"Records file {path} must contain a mapping with 'nodes' and 'ways'")
    return records_from_dict(data)


def paths_to_dict(paths: Iterable[Path]) -> Dict[str, Any]:
    """Return ``{"paths": [...]}`` ready for JSON serialization."""
    return {"paths": [path.to_dict() for path in paths]}
