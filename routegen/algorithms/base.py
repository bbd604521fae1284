"""Shared types for the target-distance searches.

Searches keep every partial path as a ``SearchState`` in an append-only
``StateArena``. A state points back at its predecessor by arena index, so a
path is rebuilt by walking back-pointers to the origin and reversing. The
same graph node can appear in many states at different cumulative distances.
"""

from __future__ import annotations

from dataclasses import dataclass
from time import perf_counter
from typing import List, NamedTuple, Optional, Tuple

from routegen.graph import Graph

#: Dense node index.
NodeIndex = int

#: Length in meters.
Distance = float

#: Ordered dense node indices from origin to destination.
IndexPath = List[NodeIndex]

#: A search result: node indices plus total length.
RouteResult = Tuple[IndexPath, Distance]

#: Number of predecessor states inspected by the cycle check.
DEFAULT_LOOKBACK = 100


class SearchState(NamedTuple):
    """One partial path: a node, the arena index of its parent, and its length."""

    node: NodeIndex
    parent: Optional[int]
    distance: Distance


class StateArena:
    """Append-only store of search states addressed by integer index."""

    def __init__(self) -> None:
        self._states: List[SearchState] = []

    def __len__(self) -> int:
        return len(self._states)

    def __getitem__(self, state_idx: int) -> SearchState:
        if not 0 <= state_idx < len(self._states):
            raise IndexError(
                f"State index {state_idx} is out of range for an arena of {len(self._states)}."
            )
        return self._states[state_idx]

    def add(self, node: NodeIndex, parent: Optional[int], distance: Distance) -> int:
        """Append a state and return its arena index."""
        self._states.append(SearchState(node, parent, distance))
        return len(self._states) - 1

    def path_to(self, state_idx: int) -> IndexPath:
        """Return the node sequence from the origin to ``state_idx``."""
        path: IndexPath = []
        cur: Optional[int] = state_idx
        while cur is not None:
            state = self[cur]
            path.append(state.node)
            cur = state.parent
        path.reverse()
        return path

    def in_lookback(self, state_idx: int, node: NodeIndex, lookback: int) -> bool:
        """Check whether ``node`` occurs among the last ``lookback`` states of a path.

        The walk starts at ``state_idx`` itself and follows back-pointers. Cycles
        longer than the window go undetected.
        """
        cur: Optional[int] = state_idx
        steps = 0
        while cur is not None and steps < lookback:
            state = self[cur]
            if state.node == node:
                return True
            cur = state.parent
            steps += 1
        return False


@dataclass(frozen=True)
class TargetWindow:
    """Acceptance interval ``[target - tolerance, target + tolerance]``."""

    target: Distance
    tolerance: Distance

    def __post_init__(self) -> None:
        if self.tolerance < 0:
            raise ValueError(f"Tolerance must be non-negative, got {self.tolerance}")

    @property
    def upper(self) -> Distance:
        return self.target + self.tolerance

    def accepts(self, distance: Distance) -> bool:
        return abs(distance - self.target) <= self.tolerance


def check_endpoints(graph: Graph, start: NodeIndex, goal: NodeIndex) -> None:
    """Raise IndexError unless both endpoints are valid dense indices."""
    graph.node(start)
    graph.node(goal)


def deadline_passed(deadline: Optional[float]) -> bool:
    """True when ``deadline`` (a ``perf_counter`` value) has been reached."""
    return deadline is not None and perf_counter() >= deadline
