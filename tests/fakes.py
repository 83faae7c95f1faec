"""Fake chat model and search provider used across the test suite."""

from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

from mcp_server_deep_research.research.models import SearchResult


class FakeChatModel:
    """Stands in for a LangChain chat model.

    ``responses`` maps an output schema to either a list of values (handed out
    in order) or a callable ``prompt -> value``. Free-text calls return ``text``.
    """

    def __init__(self, responses: dict[type, list | Callable[[str], Any]] | None = None, text: str = "# Report"):
        self.responses = responses or {}
        self.text = text
        self.calls: list[tuple[type | None, str, str | None]] = []

    def with_structured_output(self, schema: type) -> "_StructuredModel":
        return _StructuredModel(self, schema)

    async def ainvoke(self, messages):
        self.calls.append((None, messages[-1].content, _system_of(messages)))
        return SimpleNamespace(content=self.text)

    def calls_for(self, schema: type | None) -> list[str]:
        return [prompt for called_schema, prompt, _ in self.calls if called_schema is schema]


class _StructuredModel:
    def __init__(self, llm: FakeChatModel, schema: type):
        self.llm = llm
        self.schema = schema

    async def ainvoke(self, messages):
        prompt = messages[-1].content
        self.llm.calls.append((self.schema, prompt, _system_of(messages)))
        response = self.llm.responses[self.schema]
        if callable(response):
            return response(prompt)
        return response.pop(0)


def _system_of(messages) -> str | None:
    return messages[0].content if len(messages) > 1 else None


class FakeSearchProvider:
    """Returns canned results per query; an Exception value is raised instead."""

    def __init__(self, results: dict[str, list[SearchResult] | Exception] | None = None, default: list[SearchResult] | None = None):
        self.results = results or {}
        self.default = default or []
        self.queries: list[str] = []

    async def search(self, query: str) -> list[SearchResult]:
        self.queries.append(query)
        result = self.results.get(query, self.default)
        if isinstance(result, Exception):
            raise result
        return list(result)


def make_result(url: str, title: str | None = None, content: str | None = None) -> SearchResult:
    return SearchResult(title=title or f"Title for {url}", url=url, content=content or f"Content about {url}")
