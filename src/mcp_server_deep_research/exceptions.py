"""Custom exceptions for the deep research server."""


class DeepResearchError(Exception):
    """Base exception for deep research errors."""

    pass


class LLMProviderError(DeepResearchError):
    """Raised when LLM provider configuration is invalid."""

    pass


class SearchProviderError(DeepResearchError):
    """Raised when the search backend is misconfigured or a search call fails."""

    pass


class ResearchFailedError(DeepResearchError):
    """Raised at an entry point when a research run aborts before producing a report."""

    pass
