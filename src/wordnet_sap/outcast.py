"""Pick the noun least related to the rest of a group."""

from __future__ import annotations

import logging
from typing import Sequence

from .wordnet import WordNet

__all__ = ["Outcast"]

LOGGER = logging.getLogger(__name__)


class Outcast:
    def __init__(self, wordnet: WordNet) -> None:
        if wordnet is None:
            raise ValueError("The wordnet argument cannot be None")
        self._wordnet = wordnet

    def distances(self, nouns: Sequence[str]) -> list[int]:
        """Sum of distances from each noun to every other noun in ``nouns``."""

        totals = []
        for noun in nouns:
            total = 0
            for other in nouns:
                if other != noun:
                    total += self._wordnet.distance(noun, other)
            totals.append(total)
        return totals

    def outcast(self, nouns: Sequence[str]) -> str:
        """Return the noun whose summed distance to the others is largest.

        The first noun wins when several share the maximum.
        """

        if nouns is None:
            raise ValueError("The nouns argument cannot be None")
        nouns = list(nouns)
        if len(nouns) < 2:
            raise ValueError("At least two nouns are required to find an outcast")
        totals = self.distances(nouns)
        best = max(range(len(nouns)), key=lambda idx: (totals[idx], -idx))
        LOGGER.debug("Outcast of %s is %s (distance %d)", nouns, nouns[best], totals[best])
        return nouns[best]
