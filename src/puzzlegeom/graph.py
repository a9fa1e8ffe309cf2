"""
Weighted graphs and shortest paths for puzzle solutions.

This module defines:

- `PriorityQueue`: a min-priority queue (lowest priority value first,
  first-in first-out among equal priorities).
- `Graph`: nodes are arbitrary hashable objects (grid coordinates, state
  tuples, ...), edges are directed and carry a non-negative weight.

Shortest paths use Dijkstra's algorithm:

    graph = Graph()
    for node in "abcd":
        graph.add_node(node)
    graph.add_undirected_edge("a", "b", 1)
    graph.add_undirected_edge("b", "d", 1)
    graph.add_undirected_edge("a", "c", 1)
    graph.add_undirected_edge("c", "d", 1)

    graph.find_shortest_path("a", "d")       -> ["a", "b", "d"]
    graph.find_all_shortest_paths("a", "d")  -> [["a", "b", "d"], ["a", "c", "d"]]

Ties between equally short paths are broken by edge insertion order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Hashable, List, Set, Tuple

import heapq
import itertools
import logging
import math

from .errors import EmptyInputError, GraphLookupError, PathNotFoundError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Priority queue
# ---------------------------------------------------------------------------

class PriorityQueue:
    """
    Min-priority queue backed by `heapq`.

    Values never need to be comparable: ties on priority are resolved by
    insertion order.
    """

    def __init__(self) -> None:
        self._heap: List[Tuple[float, int, Any]] = []
        self._counter = itertools.count()

    def enqueue(self, value: Any, priority: float) -> None:
        """
        Add `value` with `priority` (lower number is served first).
        """
        heapq.heappush(self._heap, (priority, next(self._counter), value))

    def dequeue(self) -> Any:
        """
        Remove and return the value with the lowest priority.

        Raises
        ------
        EmptyInputError
            If the queue is empty.
        """
        if not self._heap:
            raise EmptyInputError("Cannot dequeue from an empty PriorityQueue.")
        return heapq.heappop(self._heap)[2]

    def peek_priority(self) -> float:
        if not self._heap:
            raise EmptyInputError("Cannot peek into an empty PriorityQueue.")
        return self._heap[0][0]

    def size(self) -> int:
        return len(self._heap)

    def __len__(self) -> int:
        return len(self._heap)


# ---------------------------------------------------------------------------
# Graph
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GraphEdge:
    """
    Directed, weighted edge between two node objects.
    """

    source: Hashable
    destination: Hashable
    weight: float


class Graph:
    """
    Directed weighted graph keyed by node objects.

    Undirected edges are stored as a pair of directed edges.
    """

    def __init__(self) -> None:
        self._edges: Dict[Hashable, List[GraphEdge]] = {}

    # -- construction -------------------------------------------------------

    def add_node(self, node: Hashable) -> None:
        """
        Add a node. Adding an existing node is a no-op.
        """
        if node not in self._edges:
            self._edges[node] = []

    def add_directed_edge(self, source: Hashable, destination: Hashable, weight: float) -> None:
        """
        Add an edge from `source` to `destination`.

        Raises
        ------
        GraphLookupError
            If either node has not been added.
        ValueError
            If `weight` is negative.
        """
        self._require_node(source, "Source")
        self._require_node(destination, "Destination")
        self._check_weight(weight)
        self._edges[source].append(GraphEdge(source, destination, weight))

    def add_undirected_edge(self, node1: Hashable, node2: Hashable, weight: float) -> None:
        """
        Add edges in both directions between `node1` and `node2`.
        """
        self._require_node(node1, "Node 1")
        self._require_node(node2, "Node 2")
        self._check_weight(weight)
        self._edges[node1].append(GraphEdge(node1, node2, weight))
        self._edges[node2].append(GraphEdge(node2, node1, weight))

    # -- queries ------------------------------------------------------------

    @property
    def nodes(self) -> List[Hashable]:
        return list(self._edges)

    def __contains__(self, node: Hashable) -> bool:
        return node in self._edges

    def __len__(self) -> int:
        return len(self._edges)

    def edges(self, node: Hashable) -> Tuple[GraphEdge, ...]:
        """
        Outgoing edges of `node`, in insertion order.
        """
        self._require_node(node, "Node")
        return tuple(self._edges[node])

    def edge_weight(self, source: Hashable, destination: Hashable) -> float:
        """
        Weight of the first edge from `source` to `destination`.

        Raises
        ------
        GraphLookupError
            If either node or the edge does not exist.
        """
        self._require_node(source, "Source")
        self._require_node(destination, "Destination")
        for edge in self._edges[source]:
            if edge.destination == destination:
                return edge.weight
        raise GraphLookupError(f"No edge from {source!r} to {destination!r}.")

    def shortest_distance(self, start: Hashable, end: Hashable) -> float:
        """
        Total weight of a shortest path from `start` to `end`.
        """
        distance, _ = self._search(start, end, all_paths=False)
        return distance

    def find_shortest_path(self, start: Hashable, end: Hashable) -> List[Hashable]:
        """
        One shortest path from `start` to `end`, both included.

        Raises
        ------
        GraphLookupError
            If `start` or `end` is not a node of the graph.
        PathNotFoundError
            If `end` cannot be reached from `start`.
        """
        _, previous = self._search(start, end, all_paths=False)
        return self._collect_paths(previous, start, end)[0]

    def find_all_shortest_paths(self, start: Hashable, end: Hashable) -> List[List[Hashable]]:
        """
        Every shortest path from `start` to `end`.

        The first path is the one `find_shortest_path` returns. Raises the
        same errors as `find_shortest_path`.
        """
        _, previous = self._search(start, end, all_paths=True)
        return self._collect_paths(previous, start, end)

    # -- internals ----------------------------------------------------------

    def _require_node(self, node: Hashable, role: str) -> None:
        if node not in self._edges:
            raise GraphLookupError(f"{role} node {node!r} not found in the graph.")

    @staticmethod
    def _check_weight(weight: float) -> None:
        if weight < 0:
            raise ValueError(f"Edge weights must be non-negative, got {weight}.")

    def _search(
        self,
        start: Hashable,
        end: Hashable,
        all_paths: bool,
    ) -> Tuple[float, Dict[Hashable, List[Hashable]]]:
        """
        Dijkstra from `start`, stopping once `end` is settled.

        Returns the distance to `end` and, for every reached node, its
        predecessors on shortest paths (only the first one unless
        `all_paths`). A predecessor is only recorded while its successor
        is unsettled, which keeps the predecessor graph acyclic even with
        zero-weight edges.
        """
        self._require_node(start, "Path start")
        self._require_node(end, "Path end")

        distance: Dict[Hashable, float] = {start: 0}
        previous: Dict[Hashable, List[Hashable]] = {start: []}
        settled: Set[Hashable] = set()

        queue = PriorityQueue()
        queue.enqueue(start, 0)
        while queue:
            node = queue.dequeue()
            if node in settled:
                continue
            settled.add(node)
            if node == end:
                break

            for edge in self._edges[node]:
                neighbor = edge.destination
                new_distance = distance[node] + edge.weight
                old_distance = distance.get(neighbor, math.inf)
                if new_distance < old_distance:
                    distance[neighbor] = new_distance
                    previous[neighbor] = [node]
                    queue.enqueue(neighbor, new_distance)
                elif (
                    all_paths
                    and new_distance == old_distance
                    and neighbor not in settled
                    and node not in previous[neighbor]
                ):
                    previous[neighbor].append(node)

        if end not in settled:
            raise PathNotFoundError(f"No path from {start!r} to {end!r}.")

        logger.debug("Shortest path %r -> %r: distance %s, %d nodes settled.", start, end, distance[end], len(settled))
        return distance[end], previous

    @staticmethod
    def _collect_paths(
        previous: Dict[Hashable, List[Hashable]],
        start: Hashable,
        end: Hashable,
    ) -> List[List[Hashable]]:
        # Walk predecessors back from `end`; first predecessors first
        paths: List[List[Hashable]] = []
        stack: List[List[Hashable]] = [[end]]
        while stack:
            path = stack.pop()
            last = path[-1]
            if last == start:
                paths.append(path[::-1])
                continue
            for node in reversed(previous[last]):
                stack.append(path + [node])
        return paths


__all__ = [
    "PriorityQueue",
    "GraphEdge",
    "Graph",
]
