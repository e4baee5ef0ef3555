"""Last-query-wins coordination for rank passes.

Each query edit opens a new generation. A pass computed for an older
generation is dropped when it finishes, so the displayed list always
comes from exactly one pass for the most recent query.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from dataclasses import dataclass

from ..models.match import DEFAULT_SCORE_CONFIG, RankedItem, ScoreConfig
from .fuzzy import rank_items

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankPass:
    """Result of ranking the full candidate set for one query."""

    generation: int
    query: str
    items: list[RankedItem]


class RankCoordinator:
    """Hands out query generations and filters stale rank passes."""

    def __init__(self) -> None:
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def generation(self) -> int:
        """The most recent generation handed out."""
        return self._generation

    def begin(self, query: str) -> int:
        """Start a new generation for query, superseding older ones."""
        with self._lock:
            self._generation += 1
            generation = self._generation
        logger.debug(f"Rank generation {generation} started ({len(query)}-char query)")
        return generation

    def is_current(self, generation: int) -> bool:
        """Check whether generation is still the latest."""
        with self._lock:
            return generation == self._generation

    def complete(self, rank_pass: RankPass) -> bool:
        """Accept a finished pass only if no newer query has started."""
        if self.is_current(rank_pass.generation):
            return True
        logger.debug(
            f"Dropping superseded rank pass {rank_pass.generation} "
            f"(current is {self._generation})"
        )
        return False

    def run(
        self,
        generation: int,
        query: str,
        candidates: Sequence[str],
        config: ScoreConfig = DEFAULT_SCORE_CONFIG,
    ) -> RankPass:
        """Rank candidates for query, tagged with generation.

        Safe to call from a worker thread; candidates are only read.
        """
        return RankPass(
            generation=generation,
            query=query,
            items=rank_items(query, candidates, config),
        )
