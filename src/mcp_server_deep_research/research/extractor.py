"""Distills one admitted result into a learning plus follow-up questions."""

import logging

from .generation import Generator
from .models import Learning, SearchResult
from .prompts import get_learning_prompt

logger = logging.getLogger(__name__)


class LearningExtractor:
    def __init__(self, generator: Generator):
        self.generator = generator

    async def extract(self, sub_query: str, result: SearchResult, topic: str | None) -> Learning:
        """Generate a learning for ``result`` in the context of its sub-query and the overall topic."""
        logger.info(f'Generating learnings for: "{result.url}" related to query: "{sub_query}"')
        prompt = get_learning_prompt(topic, sub_query, result.title, result.url, result.content)
        return await self.generator.generate_object(prompt, Learning)
