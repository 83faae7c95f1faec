"""MCP server and CLI for recursive deep research."""

from .config import settings
from .exceptions import DeepResearchError, LLMProviderError, ResearchFailedError, SearchProviderError
from .providers import get_generator, get_llm, get_search_provider
from .research import ResearchStore, run_research

__all__ = [
    "settings",
    "get_llm",
    "get_generator",
    "get_search_provider",
    "run_research",
    "ResearchStore",
    "DeepResearchError",
    "LLMProviderError",
    "SearchProviderError",
    "ResearchFailedError",
]
