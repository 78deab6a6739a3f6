"""Immutable directed graph over dense integer vertex ids."""

from __future__ import annotations

import logging
from numbers import Integral
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence, Tuple

import networkx as nx
import pandas as pd

__all__ = [
    "Digraph",
    "read_digraph",
    "load_edge_table",
    "normalise_vertex",
]

LOGGER = logging.getLogger(__name__)

_SOURCE_ALIASES = ("source", "src", "from", "v", "tail", "hyponym")
_TARGET_ALIASES = ("target", "dst", "to", "w", "head", "hypernym")


class Digraph:
    """Directed graph on vertices ``0 .. V-1``.

    The adjacency is copied into tuples on construction, so mutating the
    lists handed to the constructor afterwards has no effect on the graph.
    """

    __slots__ = ("_adjacency", "_num_edges", "_indegree")

    def __init__(self, num_vertices: int, adjacency: Sequence[Iterable[int]] | None = None) -> None:
        num_vertices = normalise_vertex(num_vertices)
        if num_vertices < 0:
            raise ValueError("Number of vertices must be non-negative")
        if adjacency is None:
            adjacency = [() for _ in range(num_vertices)]
        if len(adjacency) != num_vertices:
            raise ValueError(
                f"Adjacency has {len(adjacency)} rows but the graph declares {num_vertices} vertices"
            )
        rows: List[Tuple[int, ...]] = []
        indegree = [0] * num_vertices
        edges = 0
        for vertex, successors in enumerate(adjacency):
            row = tuple(normalise_vertex(w) for w in successors)
            for w in row:
                if w < 0 or w >= num_vertices:
                    raise ValueError(f"Edge {vertex}->{w} points outside 0..{num_vertices - 1}")
                indegree[w] += 1
            edges += len(row)
            rows.append(row)
        self._adjacency: Tuple[Tuple[int, ...], ...] = tuple(rows)
        self._indegree: Tuple[int, ...] = tuple(indegree)
        self._num_edges = edges

    @classmethod
    def from_edges(cls, num_vertices: int, edges: Iterable[Tuple[int, int]]) -> "Digraph":
        num_vertices = normalise_vertex(num_vertices)
        if num_vertices < 0:
            raise ValueError("Number of vertices must be non-negative")
        adjacency: List[List[int]] = [[] for _ in range(num_vertices)]
        for v, w in edges:
            v = normalise_vertex(v)
            if v < 0 or v >= num_vertices:
                raise ValueError(f"Edge source {v} is outside 0..{num_vertices - 1}")
            adjacency[v].append(w)
        return cls(num_vertices, adjacency)

    @classmethod
    def from_networkx(cls, graph: nx.DiGraph) -> "Digraph":
        """Build a digraph from a :class:`networkx.DiGraph` labelled ``0..V-1``."""

        if not graph.is_directed():
            raise ValueError("Expected a directed networkx graph")
        num_vertices = graph.number_of_nodes()
        nodes = sorted(normalise_vertex(node) for node in graph.nodes)
        if nodes != list(range(num_vertices)):
            raise ValueError("networkx graph nodes must be the integers 0..V-1")
        return cls.from_edges(num_vertices, graph.edges())

    def to_networkx(self) -> nx.DiGraph:
        graph = nx.DiGraph()
        graph.add_nodes_from(range(self.num_vertices))
        graph.add_edges_from(self.edges())
        return graph

    @property
    def num_vertices(self) -> int:
        return len(self._adjacency)

    @property
    def num_edges(self) -> int:
        return self._num_edges

    def validate_vertex(self, v: object) -> int:
        """Return ``v`` as an ``int`` or raise if it is not a vertex of this graph."""

        vertex = normalise_vertex(v)
        if vertex < 0 or vertex >= self.num_vertices:
            raise ValueError(f"vertex {vertex} is not between 0 and {self.num_vertices - 1}")
        return vertex

    def successors(self, v: int) -> Tuple[int, ...]:
        return self._adjacency[self.validate_vertex(v)]

    def outdegree(self, v: int) -> int:
        return len(self.successors(v))

    def indegree(self, v: int) -> int:
        return self._indegree[self.validate_vertex(v)]

    def adjacency(self) -> Tuple[Tuple[int, ...], ...]:
        """Return the raw adjacency rows; index ``v`` holds the successors of ``v``."""

        return self._adjacency

    def edges(self) -> Iterator[Tuple[int, int]]:
        for v, row in enumerate(self._adjacency):
            for w in row:
                yield v, w

    def reverse(self) -> "Digraph":
        return Digraph.from_edges(self.num_vertices, ((w, v) for v, w in self.edges()))

    def __len__(self) -> int:
        return self.num_vertices

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Digraph):
            return NotImplemented
        return self._adjacency == other._adjacency

    def __hash__(self) -> int:
        return hash(self._adjacency)

    def __repr__(self) -> str:
        return f"Digraph(V={self.num_vertices}, E={self.num_edges})"


def read_digraph(path: Path) -> Digraph:
    """Read the whitespace separated ``V E v1 w1 v2 w2 ...`` digraph format."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)
    tokens = path.read_text(encoding="utf8").split()
    if len(tokens) < 2:
        raise ValueError(f"{path} must start with the vertex and edge counts")
    try:
        values = [int(token) for token in tokens]
    except ValueError as exc:
        raise ValueError(f"Non-integer token in {path}") from exc
    num_vertices, num_edges = values[0], values[1]
    if num_edges < 0:
        raise ValueError("Number of edges must be non-negative")
    pairs = values[2:]
    if len(pairs) != 2 * num_edges:
        raise ValueError(f"{path} declares {num_edges} edges but lists {len(pairs) // 2}")
    graph = Digraph.from_edges(num_vertices, zip(pairs[0::2], pairs[1::2]))
    LOGGER.info("Loaded %r from %s", graph, path)
    return graph


def load_edge_table(
    path: Path,
    *,
    source_column: str | None = None,
    target_column: str | None = None,
) -> Digraph:
    """Build a :class:`Digraph` from a CSV, TSV or Parquet edge list."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)
    suffix = path.suffix.lower()
    if suffix in {".parquet", ".pq"}:
        table = pd.read_parquet(path)
    elif suffix == ".csv":
        table = pd.read_csv(path)
    elif suffix == ".tsv":
        table = pd.read_csv(path, sep="\t")
    else:
        raise ValueError(f"Unsupported edge table format: {path.suffix}")

    src_col = source_column or _find_column(table, _SOURCE_ALIASES)
    tgt_col = target_column or _find_column(table, _TARGET_ALIASES)
    table = table.dropna(subset=[src_col, tgt_col])
    sources = [normalise_vertex(value) for value in table[src_col].tolist()]
    targets = [normalise_vertex(value) for value in table[tgt_col].tolist()]
    num_vertices = max(sources + targets, default=-1) + 1
    graph = Digraph.from_edges(num_vertices, zip(sources, targets))
    LOGGER.info("Loaded %r from edge table %s (%s -> %s)", graph, path, src_col, tgt_col)
    return graph


def normalise_vertex(value: object) -> int:
    if value is None:
        raise ValueError("Vertex identifiers cannot be None")
    if isinstance(value, bool):
        raise ValueError("Boolean values are not valid vertex identifiers")
    if isinstance(value, Integral):
        return int(value)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise ValueError(f"Invalid vertex identifier {value!r}")


def _find_column(table: pd.DataFrame, candidates: Sequence[str]) -> str:
    lower_map = {str(column).lower(): column for column in table.columns}
    for candidate in candidates:
        if candidate in lower_map:
            return lower_map[candidate]
    raise ValueError("Required column not found. Provide explicit source/target column names.")
