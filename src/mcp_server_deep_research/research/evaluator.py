"""Search-and-filter dialogue that admits fresh, relevant, non-duplicate results for one sub-query."""

import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .generation import Generator
from .models import EvaluationState, RelevanceVerdict, SearchResult, ToolCall
from .prompts import EVALUATOR_SYSTEM_PROMPT, get_evaluator_prompt, get_relevance_prompt
from .store import ResearchStore

if TYPE_CHECKING:
    from ..search import SearchProvider

logger = logging.getLogger(__name__)


@dataclass
class EvaluationDialogue:
    """Branch-local state of one search/evaluate dialogue."""

    sub_query: str
    state: EvaluationState = EvaluationState.AWAITING_SEARCH
    pending: SearchResult | None = None
    admitted: list[SearchResult] = field(default_factory=list)
    transcript: list[str] = field(default_factory=list)
    turns: int = 0


class ResultEvaluator:
    """Runs the search/evaluate dialogue for a sub-query as an explicit state machine.

    AWAITING_SEARCH -> AWAITING_EVALUATION -> DONE. Each turn the model picks a
    tool; the dialogue ends once a result has been evaluated or after
    ``max_turns`` turns, whichever comes first. A search holds only its most
    recent result in a single pending slot, so at most one candidate per
    search is ever judged.
    """

    def __init__(self, generator: Generator, search_provider: "SearchProvider", max_turns: int = 4):
        self.generator = generator
        self.search_provider = search_provider
        self.max_turns = max_turns

    async def evaluate(self, sub_query: str, store: ResearchStore) -> list[SearchResult]:
        """Return the results admitted for ``sub_query``. The store is read, never written."""
        dialogue = EvaluationDialogue(sub_query=sub_query)

        while dialogue.state is not EvaluationState.DONE and dialogue.turns < self.max_turns:
            dialogue.turns += 1
            call = await self.generator.generate_object(
                get_evaluator_prompt(sub_query, dialogue.transcript),
                ToolCall,
                system=EVALUATOR_SYSTEM_PROMPT,
            )
            if call.tool == "search":
                query = (call.query or "").strip() or sub_query
                observation = await self._search(dialogue, query)
                dialogue.transcript.append(f"search(query={json.dumps(query)}) -> {observation}")
            else:
                justification = call.justification or ""
                observation = await self._evaluate(dialogue, justification, store)
                dialogue.transcript.append(f"evaluate(justification={json.dumps(justification)}) -> {observation}")

        if dialogue.state is not EvaluationState.DONE:
            logger.warning(f'Evaluation for "{sub_query}" stopped after {dialogue.turns} turns without a verdict')
        return dialogue.admitted

    async def _search(self, dialogue: EvaluationDialogue, query: str) -> str:
        try:
            results = await self.search_provider.search(query)
        except Exception as e:
            logger.error(f'Error searching for query "{query}": {e}')
            results = []

        if not results:
            return f'No results found for "{query}". Try a different query.'

        # Last pushed is evaluated first; a new search replaces whatever was pending
        dialogue.pending = results[-1]
        dialogue.state = EvaluationState.AWAITING_EVALUATION
        return f'Found {len(results)} result(s) for "{query}". First result URL: {results[0].url}. Now evaluate this result.'

    async def _evaluate(self, dialogue: EvaluationDialogue, justification: str, store: ResearchStore) -> str:
        if dialogue.pending is None:
            return "No pending search results to evaluate."

        candidate = dialogue.pending
        dialogue.pending = None
        dialogue.state = EvaluationState.DONE

        if store.has_url(candidate.url) or any(r.url == candidate.url for r in dialogue.admitted):
            logger.info(f'Evaluated: "{candidate.url}" as DUPLICATE. Justification: {justification}')
            return f"Result from {candidate.url} is a duplicate. Ignored."

        prompt = get_relevance_prompt(
            dialogue.sub_query,
            candidate.title,
            candidate.url,
            candidate.content,
            store.known_urls(),
            justification,
        )
        verdict = await self.generator.generate_object(prompt, RelevanceVerdict)

        if verdict.is_relevant:
            dialogue.admitted.append(candidate)
            logger.info(f'Evaluated: "{candidate.url}" as RELEVANT. Justification: {justification}')
            return f"Result from {candidate.url} is relevant and has been stored. Justification: {justification}"

        logger.info(f'Evaluated: "{candidate.url}" as IRRELEVANT. Justification: {justification}')
        return f"Result from {candidate.url} is irrelevant. Ignored. Justification: {justification}"
