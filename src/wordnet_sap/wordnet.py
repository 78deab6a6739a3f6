"""WordNet lexicon: nouns grouped into synsets linked by hypernym edges.

Each synset is a vertex of a rooted DAG in which an edge ``v -> w`` means
``w`` is a hypernym (a more general synset) of ``v``.  A noun may appear in
several synsets, one per meaning, so noun queries are answered with
set-to-set shortest ancestral path queries.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

import networkx as nx

from .digraph import Digraph
from .sap import SAP

__all__ = ["WordNet", "read_synsets", "read_hypernyms"]

LOGGER = logging.getLogger(__name__)


class WordNet:
    """Noun lexicon backed by a shortest ancestral path engine."""

    def __init__(self, synsets: Path, hypernyms: Path, *, cache_size: int = 1) -> None:
        if synsets is None or hypernyms is None:
            raise ValueError("The synsets and hypernyms paths cannot be None")
        self._synsets = read_synsets(Path(synsets))
        self._noun_index: Dict[str, Tuple[int, ...]] = _index_nouns(self._synsets)
        self._graph = read_hypernyms(Path(hypernyms), len(self._synsets))
        _check_rooted_dag(self._graph)
        self._sap = SAP(self._graph, cache_size=cache_size)
        LOGGER.info(
            "Loaded WordNet with %d synsets, %d nouns and %d hypernym edges",
            len(self._synsets),
            len(self._noun_index),
            self._graph.num_edges,
        )

    @property
    def graph(self) -> Digraph:
        return self._graph

    @property
    def engine(self) -> SAP:
        return self._sap

    def __len__(self) -> int:
        return len(self._synsets)

    def nouns(self) -> Iterator[str]:
        """Iterate over every distinct noun in alphabetical order."""

        return iter(sorted(self._noun_index))

    def is_noun(self, word: str) -> bool:
        if word is None:
            raise ValueError("The word argument cannot be None")
        return word in self._noun_index

    def synset(self, synset_id: int) -> str:
        """Return the space separated nouns of ``synset_id``."""

        return self._synsets[self._graph.validate_vertex(synset_id)]

    def synset_ids(self, noun: str) -> Tuple[int, ...]:
        self._validate_noun(noun)
        return self._noun_index[noun]

    def distance(self, noun_a: str, noun_b: str) -> int:
        """Length of the shortest ancestral path between two nouns, or ``-1``."""

        return self._sap.length(self.synset_ids(noun_a), self.synset_ids(noun_b))

    def sap(self, noun_a: str, noun_b: str) -> Optional[str]:
        """Synset that is a shortest common ancestor of both nouns.

        Returns ``None`` when the nouns share no ancestor, which cannot
        happen in a rooted DAG but is reported rather than raised.
        """

        ancestor = self._sap.ancestor(self.synset_ids(noun_a), self.synset_ids(noun_b))
        if ancestor < 0:
            return None
        return self._synsets[ancestor]

    def _validate_noun(self, noun: str) -> None:
        if noun is None:
            raise ValueError("The noun argument cannot be None")
        if noun not in self._noun_index:
            raise ValueError(f"'{noun}' is not a WordNet noun")


def read_synsets(path: Path) -> List[str]:
    """Parse ``id,nouns,gloss`` lines and return the noun field indexed by id."""

    if not path.exists():
        raise FileNotFoundError(path)
    synsets: List[str] = []
    with path.open(encoding="utf8") as handle:
        for lineno, line in enumerate(handle, start=1):
            stripped = line.rstrip("\r\n")
            if not stripped.strip():
                continue
            fields = stripped.split(",", 2)
            if len(fields) < 2:
                raise ValueError(f"{path}:{lineno}: expected 'id,nouns,gloss'")
            synset_id = _parse_id(fields[0], path, lineno)
            if synset_id != len(synsets):
                raise ValueError(f"{path}:{lineno}: synset id {synset_id} is out of sequence")
            nouns = fields[1].strip()
            if not nouns:
                raise ValueError(f"{path}:{lineno}: synset {synset_id} has no nouns")
            synsets.append(nouns)
    return synsets


def read_hypernyms(path: Path, num_synsets: int) -> Digraph:
    """Parse ``id,hypernym,hypernym...`` lines into a :class:`Digraph`."""

    if not path.exists():
        raise FileNotFoundError(path)
    edges: List[Tuple[int, int]] = []
    with path.open(encoding="utf8") as handle:
        for lineno, line in enumerate(handle, start=1):
            stripped = line.strip()
            if not stripped:
                continue
            fields = [field for field in stripped.split(",") if field.strip()]
            synset_id = _parse_id(fields[0], path, lineno)
            for field in fields[1:]:
                edges.append((synset_id, _parse_id(field, path, lineno)))
    return Digraph.from_edges(num_synsets, edges)


def _index_nouns(synsets: List[str]) -> Dict[str, Tuple[int, ...]]:
    index: Dict[str, List[int]] = {}
    for synset_id, nouns in enumerate(synsets):
        for noun in nouns.split():
            ids = index.setdefault(noun, [])
            if not ids or ids[-1] != synset_id:
                ids.append(synset_id)
    return {noun: tuple(ids) for noun, ids in index.items()}


def _check_rooted_dag(graph: Digraph) -> None:
    if not nx.is_directed_acyclic_graph(graph.to_networkx()):
        raise ValueError("The hypernym graph contains a cycle; a rooted DAG is required")
    roots = [v for v in range(graph.num_vertices) if graph.outdegree(v) == 0]
    if len(roots) != 1:
        raise ValueError(f"The hypernym graph must have exactly one root, found {len(roots)}")
    LOGGER.debug("Hypernym graph is a rooted DAG with root %d", roots[0])


def _parse_id(text: str, path: Path, lineno: int) -> int:
    try:
        return int(text.strip())
    except ValueError as exc:
        raise ValueError(f"{path}:{lineno}: invalid synset id {text!r}") from exc
