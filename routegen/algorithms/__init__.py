"""Search algorithms over a built :class:`routegen.graph.Graph`.

All functions take dense node indices and return node-index sequences; the
engine turns those into :class:`routegen.model.Path` records.
"""

from routegen.algorithms.bfs import bfs
from routegen.algorithms.heuristic import heuristic_search
from routegen.algorithms.hybrid import hybrid_search
from routegen.algorithms.spf import reverse_spf
from routegen.algorithms.window import window_search

__all__ = [
    "bfs",
    "window_search",
    "heuristic_search",
    "hybrid_search",
    "reverse_spf",
]
