"""Web search providers that turn a query into content results."""

import logging
from typing import Any, Protocol

from tavily import AsyncTavilyClient

from .research.models import SearchResult

logger = logging.getLogger(__name__)


class SearchProvider(Protocol):
    """Anything that can turn a query into a short, ordered list of results."""

    async def search(self, query: str) -> list[SearchResult]: ...


class TavilySearchProvider:
    """Search backed by the Tavily API.

    In fresh mode the live page contents are fetched at query time
    (``include_raw_content``) instead of relying on the indexed snippet.
    """

    def __init__(self, api_key: str, num_results: int = 1, fresh: bool = True, client: AsyncTavilyClient | None = None):
        self.num_results = num_results
        self.fresh = fresh
        self.client = client or AsyncTavilyClient(api_key=api_key)

    async def search(self, query: str) -> list[SearchResult]:
        logger.info(f'Searching web for: "{query}"')
        response = await self.client.search(
            query,
            max_results=self.num_results,
            search_depth="advanced" if self.fresh else "basic",
            include_raw_content=self.fresh,
        )
        return [_to_search_result(hit) for hit in response.get("results", []) if hit.get("url")]


def _to_search_result(hit: dict[str, Any]) -> SearchResult:
    content = hit.get("raw_content") or hit.get("content")
    return SearchResult(
        title=hit.get("title") or "No title",
        url=hit["url"],
        content=content or "No content",
    )
