"""Recursive research driver bounded by depth and decaying breadth."""

import logging
import math
from collections.abc import Awaitable, Callable

from .evaluator import ResultEvaluator
from .extractor import LearningExtractor
from .planner import QueryPlanner
from .prompts import get_follow_up_prompt
from .store import ResearchStore

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], Awaitable[None]]


def next_breadth(breadth: int) -> int:
    """Breadth handed to a recursive call: halved, rounded up, never below 1."""
    return max(1, math.ceil(breadth / 2))


class ResearchMachine:
    """Depth-first recursive expansion of a research topic.

    Every level plans sub-queries, runs the search/evaluate dialogue for each
    new one, extracts a learning per admitted result and recurses on that
    learning's follow-up questions with ``depth - 1``. All work is sequential:
    each recursive call finishes before the next result or query is handled.
    """

    def __init__(
        self,
        planner: QueryPlanner,
        evaluator: ResultEvaluator,
        extractor: LearningExtractor,
        on_progress: ProgressCallback | None = None,
    ):
        self.planner = planner
        self.evaluator = evaluator
        self.extractor = extractor
        self.on_progress = on_progress
        self.initial_depth: int | None = None

    async def _report_progress(self, message: str) -> None:
        """Report progress if a callback is available."""
        if self.on_progress:
            await self.on_progress(message)

    async def deep_research(self, prompt: str, depth: int, breadth: int, store: ResearchStore) -> ResearchStore:
        """Expand ``prompt`` into the shared ``store`` and return it."""
        if store.set_topic(prompt):
            self.initial_depth = depth
        level = (self.initial_depth or depth) - depth + 1
        logger.info(f"--- Depth Level {level} ---")
        logger.info(f'Researching for: "{prompt}" (Current Depth Remaining: {depth}, Breadth: {breadth})')

        if depth <= 0:
            logger.info("Maximum depth reached for this research path.")
            return store

        if store.budget_exhausted:
            logger.info(f"Learning budget of {store.max_learnings} reached, not expanding further.")
            return store

        await self._report_progress(f"Planning (depth {level}): {prompt[:80]}")
        queries = await self.planner.plan(prompt, breadth)
        store.add_queries(queries)

        for query in queries:
            if store.is_completed(query):
                logger.info(f'Skipping already processed query: "{query}"')
                continue

            logger.info(f'Processing sub-query: "{query}"')
            await self._report_progress(f"Searching: {query}")
            admitted = await self.evaluator.evaluate(query, store)
            store.add_results(admitted)
            store.mark_completed(query)

            for result in admitted:
                learning = await self.extractor.extract(query, result, store.topic)
                store.add_learning(learning)
                logger.info(f'Learning: "{learning.learning}"')
                logger.info(f"Follow-up questions: {'; '.join(learning.follow_up_questions) or 'None'}")

                if learning.follow_up_questions:
                    next_prompt = get_follow_up_prompt(store.topic, query, learning.learning, learning.follow_up_questions)
                    await self.deep_research(next_prompt, depth - 1, next_breadth(breadth), store)

        return store
