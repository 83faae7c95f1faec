"""Tests for configuration and API key resolution."""

import os

import pydantic
import pytest

from mcp_server_deep_research.config import (
    NO_KEY_PROVIDERS,
    STANDARD_ENV_VAR_NAMES,
    AppSettings,
    LLMSettings,
    ResearchSettings,
    SearchSettings,
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove any API key or MCP_ env vars that would leak into settings."""
    for var in list(os.environ.keys()):
        if "API_KEY" in var or var.startswith("MCP_"):
            monkeypatch.delenv(var, raising=False)


class TestStandardEnvVarNames:
    def test_standard_names_format(self):
        """Standard names should follow PROVIDER_API_KEY format."""
        for provider, env_vars in STANDARD_ENV_VAR_NAMES.items():
            vars_to_check = env_vars if isinstance(env_vars, list) else [env_vars]
            for env_var in vars_to_check:
                assert env_var.endswith("_API_KEY"), f"{provider} env var {env_var} should end with _API_KEY"
                assert env_var.isupper(), f"{provider} env var {env_var} should be uppercase"

    def test_ollama_no_key(self):
        assert "ollama" in NO_KEY_PROVIDERS


@pytest.mark.usefixtures("clean_env")
class TestApiKeyResolution:
    """Test API key resolution priority logic."""

    def test_generic_override_takes_priority(self, monkeypatch):
        monkeypatch.setenv("MCP_LLM_API_KEY", "generic-key")
        monkeypatch.setenv("OPENAI_API_KEY", "standard-key")
        monkeypatch.setenv("MCP_LLM_OPENAI_API_KEY", "mcp-key")
        monkeypatch.setenv("MCP_LLM_PROVIDER", "openai")

        assert LLMSettings().get_api_key_for_provider() == "generic-key"

    def test_standard_name_over_mcp_prefix(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "standard-key")
        monkeypatch.setenv("MCP_LLM_OPENAI_API_KEY", "mcp-key")
        monkeypatch.setenv("MCP_LLM_PROVIDER", "openai")

        assert LLMSettings().get_api_key_for_provider() == "standard-key"

    def test_mcp_prefix_fallback(self, monkeypatch):
        monkeypatch.setenv("MCP_LLM_OPENAI_API_KEY", "mcp-key")
        monkeypatch.setenv("MCP_LLM_PROVIDER", "openai")

        assert LLMSettings().get_api_key_for_provider() == "mcp-key"

    def test_google_prefers_gemini_key(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "gemini-key")
        monkeypatch.setenv("GOOGLE_API_KEY", "google-key")
        monkeypatch.setenv("MCP_LLM_PROVIDER", "google")

        assert LLMSettings().get_api_key_for_provider() == "gemini-key"

    def test_ollama_no_key_required(self, monkeypatch):
        monkeypatch.setenv("MCP_LLM_PROVIDER", "ollama")

        settings = LLMSettings()
        assert settings.get_api_key_for_provider() is None
        assert not settings.requires_api_key()

    def test_search_key_resolution(self, monkeypatch):
        monkeypatch.setenv("TAVILY_API_KEY", "tvly-standard")
        assert SearchSettings().get_api_key() == "tvly-standard"

        monkeypatch.setenv("MCP_SEARCH_API_KEY", "tvly-override")
        assert SearchSettings().get_api_key() == "tvly-override"


@pytest.mark.usefixtures("clean_env")
class TestDefaults:
    def test_research_defaults(self):
        settings = ResearchSettings()
        assert settings.depth == 2
        assert settings.breadth == 2
        assert settings.max_turns == 4
        assert settings.max_learnings is None
        assert settings.output_path == "deep_research_report.md"

    def test_search_defaults(self):
        settings = SearchSettings()
        assert settings.backend == "tavily"
        assert settings.num_results == 1
        assert settings.fresh is True

    def test_breadth_is_bounded(self, monkeypatch):
        monkeypatch.setenv("MCP_RESEARCH_BREADTH", "6")
        with pytest.raises(pydantic.ValidationError):
            ResearchSettings()


@pytest.mark.usefixtures("clean_env")
class TestMissingCredentials:
    def test_both_missing(self):
        assert AppSettings().missing_credentials() == ["OPENAI_API_KEY", "TAVILY_API_KEY"]

    def test_search_key_missing(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        assert AppSettings().missing_credentials() == ["TAVILY_API_KEY"]

    def test_all_present(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        monkeypatch.setenv("TAVILY_API_KEY", "tvly-test")
        assert AppSettings().missing_credentials() == []

    def test_keyless_provider_only_needs_search_key(self, monkeypatch):
        monkeypatch.setenv("MCP_LLM_PROVIDER", "ollama")
        assert AppSettings().missing_credentials() == ["TAVILY_API_KEY"]

    def test_save_excludes_secrets(self, monkeypatch, tmp_path):
        import mcp_server_deep_research.config as config_module

        monkeypatch.setattr(config_module, "CONFIG_FILE", tmp_path / "config.json")
        monkeypatch.setenv("MCP_LLM_API_KEY", "secret")
        monkeypatch.setenv("MCP_SEARCH_API_KEY", "secret")

        path = AppSettings().save()

        text = path.read_text()
        assert "secret" not in text
        assert '"depth": 2' in text
