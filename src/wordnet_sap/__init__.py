"""Shortest ancestral path queries over directed graphs and the WordNet lexicon."""

from importlib import metadata

from .bfs import LayeredBFS
from .digraph import Digraph, load_edge_table, read_digraph
from .outcast import Outcast
from .sap import SAP, SapResult, SapStats
from .wordnet import WordNet

__all__ = [
    "Digraph",
    "LayeredBFS",
    "Outcast",
    "SAP",
    "SapResult",
    "SapStats",
    "WordNet",
    "load_edge_table",
    "read_digraph",
    "__version__",
]


def __getattr__(name: str):
    if name == "__version__":
        try:
            return metadata.version("wordnet-sap")
        except metadata.PackageNotFoundError:  # pragma: no cover - best effort
            return "0"
    raise AttributeError(name)
