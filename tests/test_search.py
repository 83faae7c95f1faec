"""Tests for the Tavily search provider."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from mcp_server_deep_research.search import TavilySearchProvider


def make_client(response):
    client = MagicMock()
    client.search = AsyncMock(return_value=response)
    return client


class TestTavilySearchProvider:
    @pytest.mark.asyncio
    async def test_fresh_mode_requests_live_content(self):
        client = make_client({"results": [{"title": "T", "url": "https://a.example", "content": "snippet", "raw_content": "full page"}]})
        provider = TavilySearchProvider(api_key="k", client=client)

        results = await provider.search("quantum")

        client.search.assert_awaited_once_with("quantum", max_results=1, search_depth="advanced", include_raw_content=True)
        assert len(results) == 1
        assert results[0].url == "https://a.example"
        assert results[0].content == "full page"

    @pytest.mark.asyncio
    async def test_snippet_mode(self):
        client = make_client({"results": [{"title": "T", "url": "https://a.example", "content": "snippet"}]})
        provider = TavilySearchProvider(api_key="k", num_results=3, fresh=False, client=client)

        results = await provider.search("quantum")

        client.search.assert_awaited_once_with("quantum", max_results=3, search_depth="basic", include_raw_content=False)
        assert results[0].content == "snippet"

    @pytest.mark.asyncio
    async def test_missing_fields_get_placeholders(self):
        client = make_client({"results": [{"url": "https://a.example", "title": None, "raw_content": None, "content": ""}]})
        provider = TavilySearchProvider(api_key="k", client=client)

        [result] = await provider.search("q")

        assert result.title == "No title"
        assert result.content == "No content"

    @pytest.mark.asyncio
    async def test_results_without_url_are_dropped(self):
        client = make_client({"results": [{"title": "no url"}, {"title": "T", "url": "https://b.example", "content": "c"}]})
        provider = TavilySearchProvider(api_key="k", client=client)

        results = await provider.search("q")

        assert [r.url for r in results] == ["https://b.example"]

    @pytest.mark.asyncio
    async def test_empty_response(self):
        provider = TavilySearchProvider(api_key="k", client=make_client({}))
        assert await provider.search("q") == []

    @pytest.mark.asyncio
    async def test_errors_propagate_to_caller(self):
        client = MagicMock()
        client.search = AsyncMock(side_effect=RuntimeError("quota exceeded"))
        provider = TavilySearchProvider(api_key="k", client=client)

        with pytest.raises(RuntimeError, match="quota exceeded"):
            await provider.search("q")
