"""Turns the final research store into a narrative report."""

import logging

from .generation import Generator
from .prompts import FALLBACK_REPORT, get_report_prompt, get_report_system_prompt
from .store import ResearchStore

logger = logging.getLogger(__name__)


class ReportSynthesizer:
    def __init__(self, generator: Generator):
        self.generator = generator

    async def synthesize(self, store: ResearchStore) -> str:
        """Return the report text; an empty store yields the fixed fallback without any model call."""
        logger.info("--- Generating Final Report ---")
        if store.is_empty:
            return FALLBACK_REPORT
        return await self.generator.generate_text(
            get_report_prompt(store.to_payload()),
            system=get_report_system_prompt(),
            report=True,
        )
