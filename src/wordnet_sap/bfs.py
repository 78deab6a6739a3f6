"""Resumable multi-source breadth-first search advanced one layer at a time."""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterable, List

from .digraph import Digraph

__all__ = ["LayeredBFS", "UNREACHED"]

UNREACHED = -1


class LayeredBFS:
    """Breadth-first search that pauses after every full frontier layer.

    The engine keeps per-vertex state in arrays sized to the graph, but only
    the vertices recorded in ``touched`` are cleared on :meth:`reset`, so a
    query that explores a small neighbourhood of a large graph pays for that
    neighbourhood only.
    """

    def __init__(self, graph: Digraph) -> None:
        self._graph = graph
        self._adjacency = graph.adjacency()
        num_vertices = graph.num_vertices
        self._distance: List[int] = [UNREACHED] * num_vertices
        self._reached: List[bool] = [False] * num_vertices
        self._queue: Deque[int] = deque()
        self._touched: List[int] = []
        self.layers_expanded = 0

    @property
    def graph(self) -> Digraph:
        return self._graph

    def init_sources(self, sources: Iterable[int]) -> None:
        """Mark every vertex of ``sources`` as reached at distance zero.

        All ids are validated before any state changes. Sources that are
        already reached are skipped, so calling this twice before a reset is
        harmless.
        """

        validated = [self._graph.validate_vertex(s) for s in sources]
        for s in validated:
            if self._reached[s]:
                continue
            self._mark(s, 0)

    def expand_frontier(self) -> List[int]:
        """Expand exactly one BFS layer and return the vertices it discovered."""

        discovered: List[int] = []
        queue = self._queue
        if not queue:
            return discovered
        distance = self._distance
        reached = self._reached
        adjacency = self._adjacency
        layer = distance[queue[0]]
        while queue and distance[queue[0]] == layer:
            v = queue.popleft()
            for w in adjacency[v]:
                if not reached[w]:
                    self._mark(w, layer + 1)
                    discovered.append(w)
        self.layers_expanded += 1
        return discovered

    def has_frontier(self) -> bool:
        return bool(self._queue)

    def frontier_depth(self) -> int:
        """Distance of the layer waiting to be expanded, or ``UNREACHED`` when idle."""

        if not self._queue:
            return UNREACHED
        return self._distance[self._queue[0]]

    def distance_to(self, v: int) -> int:
        return self._distance[self._graph.validate_vertex(v)]

    def is_reached(self, v: int) -> bool:
        return self._reached[self._graph.validate_vertex(v)]

    def touched_count(self) -> int:
        return len(self._touched)

    def reset(self) -> None:
        """Undo every vertex touched since the last reset and drop the frontier."""

        distance = self._distance
        reached = self._reached
        touched = self._touched
        while touched:
            v = touched.pop()
            reached[v] = False
            distance[v] = UNREACHED
        self._queue.clear()

    def _mark(self, v: int, dist: int) -> None:
        self._reached[v] = True
        self._distance[v] = dist
        self._queue.append(v)
        self._touched.append(v)

    def __repr__(self) -> str:
        return (
            f"LayeredBFS(V={self._graph.num_vertices}, touched={len(self._touched)}, "
            f"frontier={len(self._queue)})"
        )
