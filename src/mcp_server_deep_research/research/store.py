"""Accumulated state shared by every branch of one research run."""

import logging
from collections.abc import Iterable
from typing import Any

from .models import Learning, SearchResult

logger = logging.getLogger(__name__)


class ResearchStore:
    """Single mutable accumulator for a top-level research run.

    Created once per run and handed to every recursive call. Runs are strictly
    sequential, so mutations are ordered by call order and need no locking.

    Invariants:
    - every completed query is also a planned query
    - no two stored results share a URL
    - the topic is set once and never overwritten
    """

    def __init__(self, max_learnings: int | None = None):
        self.topic: str | None = None
        self.max_learnings = max_learnings
        # dicts double as insertion-ordered sets
        self._queries: dict[str, None] = {}
        self._completed: dict[str, None] = {}
        self._results: dict[str, SearchResult] = {}
        self.learnings: list[Learning] = []

    @property
    def queries(self) -> list[str]:
        return list(self._queries)

    @property
    def completed_queries(self) -> list[str]:
        return list(self._completed)

    @property
    def search_results(self) -> list[SearchResult]:
        return list(self._results.values())

    def set_topic(self, prompt: str) -> bool:
        """Record the overall topic on the first call only. Returns True if it was set."""
        if self.topic is not None:
            return False
        self.topic = prompt
        return True

    def add_queries(self, queries: Iterable[str]) -> None:
        for query in queries:
            self._queries.setdefault(query, None)

    def is_completed(self, query: str) -> bool:
        return query in self._completed

    def mark_completed(self, query: str) -> None:
        self._queries.setdefault(query, None)
        self._completed.setdefault(query, None)

    def has_url(self, url: str) -> bool:
        return url in self._results

    def known_urls(self) -> list[str]:
        return list(self._results)

    def add_results(self, results: Iterable[SearchResult]) -> list[SearchResult]:
        """Merge results into the pool, skipping URLs already present.

        Returns:
            The results that were actually inserted.
        """
        added = []
        for result in results:
            if result.url in self._results:
                logger.debug(f"Skipping already stored result: {result.url}")
                continue
            self._results[result.url] = result
            added.append(result)
        return added

    def add_learning(self, learning: Learning) -> None:
        self.learnings.append(learning)

    @property
    def budget_exhausted(self) -> bool:
        """True once the optional learnings budget has been reached."""
        return self.max_learnings is not None and len(self.learnings) >= self.max_learnings

    @property
    def is_empty(self) -> bool:
        return not self.learnings and not self._results

    def summary(self) -> dict[str, Any]:
        return {
            "topic": self.topic,
            "queries": len(self._queries),
            "completed_queries": len(self._completed),
            "search_results": len(self._results),
            "learnings": len(self.learnings),
        }

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready snapshot of everything gathered, used as the report input."""
        return {
            "query": self.topic,
            "queries": self.queries,
            "completedQueries": self.completed_queries,
            "searchResults": [r.model_dump() for r in self._results.values()],
            "learnings": [
                {"learning": item.learning, "followUpQuestions": list(item.follow_up_questions)}
                for item in self.learnings
            ],
        }
