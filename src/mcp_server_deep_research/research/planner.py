"""Turns one research prompt into candidate sub-queries."""

import logging

from .generation import Generator
from .models import QueryPlan
from .prompts import get_planning_prompt

logger = logging.getLogger(__name__)


class QueryPlanner:
    def __init__(self, generator: Generator):
        self.generator = generator

    async def plan(self, prompt: str, breadth: int) -> list[str]:
        """Ask the model for ``breadth`` sub-queries (1-5). The list is returned unfiltered."""
        plan = await self.generator.generate_object(get_planning_prompt(prompt, breadth), QueryPlan)
        logger.info(f"Generated sub-queries: {plan.queries}")
        return plan.queries
