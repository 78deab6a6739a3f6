"""Top-level package for the wordnet-sap CLI."""

from .config import DEFAULT_CACHE_SIZE, EngineOptions

__all__ = [
    "DEFAULT_CACHE_SIZE",
    "EngineOptions",
]
