"""Configuration helpers for the wordnet-sap CLI.

The module centralises defaults to keep them consistent between the CLI, tests,
and library callers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

DEFAULT_CACHE_SIZE = 1
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True, slots=True)
class EngineOptions:
    """Options used when constructing SAP engines from the CLI.

    Parameters
    ----------
    cache_size:
        Number of recent query results each engine remembers. ``0`` disables
        the cache.
    log_level:
        Name of the :mod:`logging` level applied to the root logger.
    """

    cache_size: int = DEFAULT_CACHE_SIZE
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        if self.cache_size < 0:
            raise ValueError("cache_size must be >= 0")

    def describe(self) -> str:
        """Return a human readable description.

        >>> EngineOptions().describe()
        'cache_size=1 log_level=WARNING'
        >>> EngineOptions(cache_size=0, log_level="debug").describe()
        'cache_size=0 log_level=DEBUG'
        """

        return f"cache_size={self.cache_size} log_level={self.log_level.upper()}"

    def resolved_log_level(self) -> int:
        return getattr(logging, self.log_level.upper(), logging.WARNING)


def configure_logging(options: EngineOptions) -> None:
    logging.basicConfig(level=options.resolved_log_level())
