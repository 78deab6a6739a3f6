"""Shortest ancestral path (SAP) queries over a directed graph.

An ancestral path between ``v`` and ``w`` is a directed path from ``v`` to a
common ancestor ``x`` together with a directed path from ``w`` to the same
``x``.  :class:`SAP` finds the shortest such path and its ancestor by running
two :class:`~wordnet_sap.bfs.LayeredBFS` engines in lockstep, one full layer
per side at a time, and stops each side as soon as its next layer can no
longer beat the best candidate found so far.

Both engines are reused across queries and reset in time proportional to the
vertices they touched, so a consumer issuing many queries against a large
graph never pays ``O(V)`` per query for bookkeeping.  Instances are not safe
for concurrent use; give each thread its own :class:`SAP` (the
:class:`~wordnet_sap.digraph.Digraph` itself can be shared).
"""

from __future__ import annotations

import logging
import sys
from collections import OrderedDict
from dataclasses import dataclass
from numbers import Integral
from typing import Iterable, Tuple, Union

from .bfs import LayeredBFS
from .digraph import Digraph

__all__ = ["SAP", "SapResult", "SapStats", "NO_ANCESTOR"]

LOGGER = logging.getLogger(__name__)

NO_ANCESTOR = -1
_INFINITY = sys.maxsize

VertexArg = Union[int, Iterable[int]]
_Key = Tuple[Tuple[int, ...], Tuple[int, ...]]


@dataclass(frozen=True)
class SapResult:
    """Length of a shortest ancestral path and the ancestor it passes through.

    Both fields are ``-1`` when the two sides share no common ancestor.
    """

    length: int
    ancestor: int

    @property
    def found(self) -> bool:
        return self.ancestor != NO_ANCESTOR


@dataclass(frozen=True)
class SapStats:
    """Counters describing the work a :class:`SAP` instance has done."""

    queries: int
    cache_hits: int
    searches: int
    layers_expanded: int


_NOT_FOUND = SapResult(-1, NO_ANCESTOR)


class SAP:
    """Shortest ancestral path engine bound to one directed graph.

    Parameters
    ----------
    graph:
        The digraph to search. A private copy is taken, so later changes to
        the object passed in are not observed.
    cache_size:
        Number of recent query results remembered. The default of ``1``
        remembers only the most recent query, which is what repeated
        ``length``/``ancestor`` calls on the same pair need. ``0`` disables
        caching.
    """

    def __init__(self, graph: Digraph, *, cache_size: int = 1) -> None:
        if graph is None:
            raise ValueError("The graph argument cannot be None")
        if not isinstance(graph, Digraph):
            raise TypeError(f"Expected a Digraph, got {type(graph).__name__}")
        if cache_size < 0:
            raise ValueError("cache_size must be non-negative")
        self._graph = Digraph(graph.num_vertices, graph.adjacency())
        self._bfs_a = LayeredBFS(self._graph)
        self._bfs_b = LayeredBFS(self._graph)
        self._cache_size = cache_size
        self._cache: "OrderedDict[_Key, SapResult]" = OrderedDict()
        self._queries = 0
        self._cache_hits = 0
        self._searches = 0

    @property
    def graph(self) -> Digraph:
        return self._graph

    @property
    def num_vertices(self) -> int:
        return self._graph.num_vertices

    @property
    def stats(self) -> SapStats:
        return SapStats(
            queries=self._queries,
            cache_hits=self._cache_hits,
            searches=self._searches,
            layers_expanded=self._bfs_a.layers_expanded + self._bfs_b.layers_expanded,
        )

    def length(self, v: VertexArg, w: VertexArg) -> int:
        """Length of a shortest ancestral path between ``v`` and ``w``, or ``-1``.

        ``v`` and ``w`` are vertex ids or iterables of vertex ids.
        """

        return self.query(v, w).length

    def ancestor(self, v: VertexArg, w: VertexArg) -> int:
        """A common ancestor on a shortest ancestral path, or ``-1``.

        Ties between equally short paths go to the smallest vertex id.
        """

        return self.query(v, w).ancestor

    def query(self, v: VertexArg, w: VertexArg) -> SapResult:
        sources_a = self._validate(v)
        sources_b = self._validate(w)
        self._queries += 1

        if isinstance(v, Integral) and isinstance(w, Integral) and sources_a == sources_b:
            return SapResult(0, sources_a[0])

        key = _cache_key(sources_a, sources_b)
        cached = self._cache.get(key)
        if cached is not None:
            self._cache.move_to_end(key)
            self._cache_hits += 1
            LOGGER.debug("Cache hit for %s / %s -> %s", sources_a, sources_b, cached)
            return cached

        result = self._compute(sources_a, sources_b)
        self._remember(key, result)
        return result

    def clear_cache(self) -> None:
        self._cache.clear()

    def _compute(self, sources_a: Tuple[int, ...], sources_b: Tuple[int, ...]) -> SapResult:
        if not sources_a or not sources_b:
            LOGGER.debug("Empty source set; no ancestral path")
            return _NOT_FOUND

        shared = set(sources_a).intersection(sources_b)
        if shared:
            ancestor = min(shared)
            LOGGER.debug("Source sets intersect at %d", ancestor)
            return SapResult(0, ancestor)

        return self._search(sources_a, sources_b)

    def _search(self, sources_a: Tuple[int, ...], sources_b: Tuple[int, ...]) -> SapResult:
        self._searches += 1
        bfs_a, bfs_b = self._bfs_a, self._bfs_b
        best_length = _INFINITY
        best_ancestor = NO_ANCESTOR
        try:
            bfs_a.init_sources(sources_a)
            bfs_b.init_sources(sources_b)
            while True:
                advanced = False
                for engine, other in ((bfs_a, bfs_b), (bfs_b, bfs_a)):
                    # anything found past this frontier would be longer than best_length
                    if not engine.has_frontier() or engine.frontier_depth() >= best_length:
                        continue
                    advanced = True
                    for x in engine.expand_frontier():
                        if not other.is_reached(x):
                            continue
                        candidate = engine.distance_to(x) + other.distance_to(x)
                        if candidate < best_length or (candidate == best_length and x < best_ancestor):
                            best_length = candidate
                            best_ancestor = x
                if not advanced:
                    break
        finally:
            bfs_a.reset()
            bfs_b.reset()

        if best_ancestor == NO_ANCESTOR:
            LOGGER.debug("No common ancestor for %s / %s", sources_a, sources_b)
            return _NOT_FOUND
        LOGGER.debug(
            "SAP for %s / %s: length=%d ancestor=%d", sources_a, sources_b, best_length, best_ancestor
        )
        return SapResult(best_length, best_ancestor)

    def _remember(self, key: _Key, result: SapResult) -> None:
        if self._cache_size == 0:
            return
        self._cache[key] = result
        self._cache.move_to_end(key)
        while len(self._cache) > self._cache_size:
            self._cache.popitem(last=False)

    def _validate(self, arg: VertexArg) -> Tuple[int, ...]:
        if arg is None:
            raise ValueError("Vertex argument cannot be None")
        if isinstance(arg, Integral) and not isinstance(arg, bool):
            return (self._graph.validate_vertex(arg),)
        if isinstance(arg, (str, bytes)):
            raise ValueError(f"Expected a vertex id or an iterable of vertex ids, got {arg!r}")
        try:
            items = list(arg)
        except TypeError as exc:
            raise ValueError(f"Expected a vertex id or an iterable of vertex ids, got {arg!r}") from exc
        return tuple(sorted({self._graph.validate_vertex(item) for item in items}))

    def __repr__(self) -> str:
        return f"SAP({self._graph!r}, cache_size={self._cache_size})"


def _cache_key(sources_a: Tuple[int, ...], sources_b: Tuple[int, ...]) -> _Key:
    if sources_b < sources_a:
        return sources_b, sources_a
    return sources_a, sources_b
