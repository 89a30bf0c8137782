"""A* pathfinding over any collection of objects that know their neighbours.

A Graph is built once from a snapshot of values and then answers any
number of path queries. Search state (G, H, parent) lives in a scratch
structure created per query, so queries never see each other's results
and may run concurrently against the same Graph.
"""

from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass
from typing import (Any, Generic, Hashable, Iterable, Iterator, NamedTuple,
                    Optional, Protocol, Sequence, TypeVar)

from .config import config
from .exceptions import GraphConstructionError

logger = logging.getLogger(__name__)


class Graphable(Protocol):
    """Anything that can be placed in a Graph."""

    def neighbours(self) -> Sequence[Any]:
        """Objects directly reachable from this one."""
        ...

    def cost(self, other: Any) -> float:
        """Cost of moving from this object to other."""
        ...


T = TypeVar("T", bound=Hashable)


@dataclass(frozen=True)
class GraphNode(Generic[T]):
    """A value wrapped with its graph id and the ids of its neighbours."""

    id: int
    value: T
    neighbours: tuple[int, ...]


class SearchResult(NamedTuple):
    """Outcome of a single path query."""

    path: list  # start..goal inclusive, empty if none found
    iterations: int  # nodes expanded
    exhausted: bool  # stopped on the iteration budget with nodes still open


class _SearchState:
    """Per-query scratch: costs, parents and the open heap, keyed by id."""

    def __init__(self):
        self.g: dict[int, float] = {}
        self.h: dict[int, float] = {}
        self.parent: dict[int, int] = {}
        self.closed: set[int] = set()
        self._heap: list[list] = []
        self._open: dict[int, list] = {}  # id -> live heap entry

    def is_open(self, node_id: int) -> bool:
        return node_id in self._open

    def has_open(self) -> bool:
        return bool(self._open)

    def open(self, node_id: int, g: float, h: float):
        """Insert or re-insert a node ordered by (F, id)."""
        self.g[node_id] = g
        self.h[node_id] = h
        stale = self._open.get(node_id)
        if stale is not None:
            stale[2] = False
        entry = [g + h, node_id, True]
        self._open[node_id] = entry
        heapq.heappush(self._heap, entry)

    def pop(self) -> int:
        """Remove and return the open node with the lowest (F, id)."""
        while True:
            _, node_id, live = heapq.heappop(self._heap)
            if live:
                del self._open[node_id]
                return node_id


class Graph(Generic[T]):
    """
    Immutable topology over a set of values.

    Use Graph.build() to construct one. Each distinct value gets a stable
    integer id in input order.
    """

    def __init__(self, nodes: Sequence[GraphNode[T]], index: dict[T, int]):
        self._nodes = tuple(nodes)
        self._index = dict(index)

    # ========== CONSTRUCTION ==========
    @classmethod
    def build(cls, values: Iterable[T]) -> "Graph[T]":
        """
        Build a graph around the given values.

        Parameters
        ----------
        values : iterable
            Hashable objects exposing neighbours() and cost(other).
            Repeated values are wrapped once, at their first position.

        Returns
        -------
        Graph

        Raises
        ------
        GraphConstructionError
            If a value lists a neighbour that is not among values
        """
        ordered: list[T] = []
        index: dict[T, int] = {}
        for value in values:
            if value not in index:
                index[value] = len(ordered)
                ordered.append(value)

        nodes = []
        for node_id, value in enumerate(ordered):
            neighbour_ids = []
            for neighbour in value.neighbours():
                neighbour_id = index.get(neighbour)
                if neighbour_id is None:
                    raise GraphConstructionError(
                        f"{value!r} lists neighbour {neighbour!r} "
                        f"which is not part of the graph"
                    )
                neighbour_ids.append(neighbour_id)
            nodes.append(GraphNode(node_id, value,
                                   tuple(dict.fromkeys(neighbour_ids))))

        graph = cls(nodes, index)
        logger.debug("Built graph with %d nodes and %d links",
                     len(graph), graph.edge_count)
        return graph

    # ========== PROPERTY ACCESS ==========
    @property
    def nodes(self) -> tuple[GraphNode[T], ...]:
        return self._nodes

    @property
    def values(self) -> list[T]:
        return [node.value for node in self._nodes]

    @property
    def edge_count(self) -> int:
        """Number of directed neighbour links"""
        return sum(len(node.neighbours) for node in self._nodes)

    def node(self, node_id: int) -> GraphNode[T]:
        return self._nodes[node_id]

    def node_for(self, value: T) -> Optional[GraphNode[T]]:
        """Wrapped node for value, or None if value is not in the graph."""
        node_id = self._index.get(value)
        return None if node_id is None else self._nodes[node_id]

    # ========== PATHFINDING ==========
    def find_path(self, start: T, goal: T,
                  max_iterations: Optional[int] = None) -> list[T]:
        """
        Best path between two values.

        Parameters
        ----------
        start, goal : value
            Endpoints, as passed to build()
        max_iterations : int, optional
            Expansion budget, defaults to config.DEFAULT_MAX_ITERATIONS

        Returns
        -------
        list
            Values from start to goal inclusive. Empty if either endpoint
            is not in the graph, the goal is unreachable, or the budget ran
            out (use search() to tell these apart).
        """
        return self.search(start, goal, max_iterations).path

    def search(self, start: T, goal: T,
               max_iterations: Optional[int] = None) -> SearchResult:
        """
        A* search from start to goal.

        The open set is ordered by ascending F = G + H with ties broken by
        ascending node id. Edge cost is current.cost(neighbour) and the
        heuristic is neighbour.cost(goal), recomputed for every query. The
        heuristic is not required to be admissible, so the returned path
        is not guaranteed to be the cheapest.

        Returns
        -------
        SearchResult
        """
        if max_iterations is None:
            max_iterations = config.DEFAULT_MAX_ITERATIONS
        if max_iterations < 0:
            raise ValueError(
                f"max_iterations must be non-negative, got {max_iterations}")

        start_id = self._index.get(start)
        goal_id = self._index.get(goal)
        if start_id is None or goal_id is None:
            return SearchResult([], 0, False)

        state = _SearchState()
        state.open(start_id, 0.0, float(start.cost(goal)))

        iterations = 0
        while state.has_open() and iterations < max_iterations:
            iterations += 1
            current_id = state.pop()
            if current_id == goal_id:
                return SearchResult(self._reconstruct(state.parent, current_id),
                                    iterations, False)

            state.closed.add(current_id)
            current = self._nodes[current_id]
            for neighbour_id in current.neighbours:
                if neighbour_id in state.closed:
                    continue
                neighbour = self._nodes[neighbour_id].value
                step = float(current.value.cost(neighbour))
                tentative_g = state.g[current_id] + step
                if (not state.is_open(neighbour_id)
                        or tentative_g < state.g[neighbour_id]):
                    state.parent[neighbour_id] = current_id
                    state.open(neighbour_id, tentative_g,
                               float(neighbour.cost(goal)))

        exhausted = state.has_open()
        if exhausted:
            logger.debug("Search %r -> %r stopped after %d iterations",
                         start, goal, iterations)
        else:
            logger.debug("No path %r -> %r (%d nodes expanded)",
                         start, goal, iterations)
        return SearchResult([], iterations, exhausted)

    def _reconstruct(self, parent: dict[int, int], node_id: int) -> list[T]:
        """Walk parents back from node_id and return the path start-first."""
        path = [self._nodes[node_id].value]
        while node_id in parent:
            node_id = parent[node_id]
            path.append(self._nodes[node_id].value)
        path.reverse()
        return path

    # ========== SPECIAL METHODS ==========
    def __contains__(self, value) -> bool:
        try:
            return value in self._index
        except TypeError:
            return False

    def __iter__(self) -> Iterator[GraphNode[T]]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self):
        return f"Graph(nodes={len(self)}, links={self.edge_count})"


def find_path(graph: Graph[T], start: T, goal: T,
              max_iterations: Optional[int] = None) -> list[T]:
    """Function form of Graph.find_path()."""
    return graph.find_path(start, goal, max_iterations)
