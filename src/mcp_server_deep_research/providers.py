"""LLM and search provider factories."""

from typing import TYPE_CHECKING

from langchain.chat_models import init_chat_model

from .config import NO_KEY_PROVIDERS, STANDARD_ENV_VAR_NAMES
from .exceptions import LLMProviderError, SearchProviderError
from .research.generation import Generator
from .search import TavilySearchProvider

if TYPE_CHECKING:
    from langchain_core.language_models.chat_models import BaseChatModel

    from .config import LLMSettings, SearchSettings
    from .search import SearchProvider

# OpenAI-compatible gateways reached through the openai integration
OPENAI_COMPATIBLE_BASE_URLS = {
    "deepseek": "https://api.deepseek.com/v1",
    "openrouter": "https://openrouter.ai/api/v1",
}


def get_llm(
    provider: str,
    model: str,
    api_key: str | None = None,
    base_url: str | None = None,
    **kwargs,
) -> "BaseChatModel":
    """Create a LangChain chat model for the configured provider.

    Supports 8 providers:
    - openai: OpenAI GPT models
    - anthropic: Claude models
    - google: Gemini models
    - azure_openai: Azure-hosted OpenAI models
    - groq: Groq-hosted models
    - deepseek: DeepSeek models (OpenAI-compatible endpoint)
    - ollama: Local Ollama models (no API key required)
    - openrouter: OpenRouter API (OpenAI-compatible endpoint)

    Args:
        provider: LLM provider name
        model: Model name/identifier
        api_key: API key for the provider (not required for ollama)
        base_url: Custom base URL for OpenAI-compatible APIs
        **kwargs: Provider-specific options:
            - azure_endpoint: Azure OpenAI endpoint URL
            - azure_api_version: Azure OpenAI API version (default: 2024-02-01)

    Returns:
        Configured chat model instance

    Raises:
        LLMProviderError: If provider is unsupported or API key is missing
    """
    requires_api_key = provider not in NO_KEY_PROVIDERS and not base_url
    if requires_api_key and not api_key:
        standard_var = STANDARD_ENV_VAR_NAMES.get(provider, "API key")
        raise LLMProviderError(f"API key required for provider '{provider}'. Set {standard_var} or MCP_LLM_API_KEY environment variable.")

    try:
        match provider:
            case "openai":
                return init_chat_model(model, model_provider="openai", api_key=api_key, base_url=base_url)

            case "anthropic":
                return init_chat_model(model, model_provider="anthropic", api_key=api_key)

            case "google":
                return init_chat_model(model, model_provider="google_genai", google_api_key=api_key)

            case "azure_openai":
                azure_endpoint = kwargs.get("azure_endpoint")
                azure_api_version = kwargs.get("azure_api_version") or "2024-02-01"
                if not azure_endpoint:
                    raise LLMProviderError("Azure OpenAI requires MCP_LLM_AZURE_ENDPOINT to be set.")
                return init_chat_model(
                    model,
                    model_provider="azure_openai",
                    api_key=api_key,
                    azure_endpoint=azure_endpoint,
                    api_version=azure_api_version,
                    azure_deployment=model,
                )

            case "groq":
                return init_chat_model(model, model_provider="groq", api_key=api_key)

            case "deepseek" | "openrouter":
                return init_chat_model(
                    model,
                    model_provider="openai",
                    api_key=api_key,
                    base_url=base_url or OPENAI_COMPATIBLE_BASE_URLS[provider],
                )

            case "ollama":
                return init_chat_model(model, model_provider="ollama", base_url=base_url)

            case _:
                raise LLMProviderError(f"Unsupported provider: {provider}")

    except LLMProviderError:
        raise
    except Exception as e:
        raise LLMProviderError(f"Failed to initialize {provider} LLM: {e}") from e


def get_search_provider(search_settings: "SearchSettings") -> "SearchProvider":
    """Create the web search provider selected by settings.

    Raises:
        SearchProviderError: If the backend is unsupported or its API key is missing
    """
    match search_settings.backend:
        case "tavily":
            api_key = search_settings.get_api_key()
            if not api_key:
                raise SearchProviderError("API key required for Tavily search. Set TAVILY_API_KEY or MCP_SEARCH_API_KEY environment variable.")
            return TavilySearchProvider(
                api_key=api_key,
                num_results=search_settings.num_results,
                fresh=search_settings.fresh,
            )
        case _:
            raise SearchProviderError(f"Unsupported search backend: {search_settings.backend}")


def get_generator(llm_settings: "LLMSettings") -> Generator:
    """Build the generation wrapper (main model plus optional report model) from settings."""
    options = dict(
        api_key=llm_settings.get_api_key_for_provider(),
        base_url=llm_settings.base_url,
        azure_endpoint=llm_settings.azure_endpoint,
        azure_api_version=llm_settings.azure_api_version,
    )
    llm = get_llm(provider=llm_settings.provider, model=llm_settings.model_name, **options)
    report_llm = None
    if llm_settings.report_model_name and llm_settings.report_model_name != llm_settings.model_name:
        report_llm = get_llm(provider=llm_settings.provider, model=llm_settings.report_model_name, **options)
    return Generator(llm, report_llm)
