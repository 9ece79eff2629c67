"""Tests for provider selection and agent configuration validation."""
from __future__ import annotations

import pytest

from research_agent.config import (
    AgentConfig,
    ProviderKind,
    Settings,
    is_configured,
    load_agent_config,
    resolve_provider_kind,
)
from research_agent.exceptions import ConfigError


def make_settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestResolveProviderKind:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("brave", ProviderKind.BRAVE),
            ("  Google ", ProviderKind.GOOGLE),
            ("SERPER", ProviderKind.SERPER),
            ("tavily\n", ProviderKind.TAVILY),
        ],
    )
    def test_maps_case_insensitive_trimmed_values(self, value, expected):
        assert resolve_provider_kind(value) == expected

    def test_defaults_to_brave(self):
        assert resolve_provider_kind(None) == ProviderKind.BRAVE

    def test_unknown_provider_is_fatal(self):
        with pytest.raises(ConfigError) as exc_info:
            resolve_provider_kind("bing")
        message = str(exc_info.value)
        assert "WEB_SEARCH_PROVIDER=bing" in message
        assert "brave|google|serper|tavily" in message


class TestProviderKind:
    def test_required_env_vars(self):
        assert ProviderKind.BRAVE.required_env_vars == ("BRAVE_API_KEY",)
        assert ProviderKind.GOOGLE.required_env_vars == ("GOOGLE_API_KEY", "GOOGLE_SEARCH_ENGINE_ID")
        assert ProviderKind.SERPER.required_env_vars == ("SERPER_API_KEY",)
        assert ProviderKind.TAVILY.required_env_vars == ("TAVILY_API_KEY",)

    def test_display_names(self):
        assert [k.display_name for k in ProviderKind] == ["Brave", "Google", "Serper", "Tavily"]


def test_is_configured_treats_placeholder_as_unset():
    assert is_configured("key")
    assert not is_configured(None)
    assert not is_configured("   ")
    assert not is_configured("changeme")
    assert not is_configured(" changeme ")


class TestLoadAgentConfig:
    def test_builds_config_for_valid_settings(self):
        cfg = make_settings(llm_model="llama3", web_search_provider="Tavily", tavily_api_key="tvly-key")

        config = load_agent_config(cfg)

        assert config == AgentConfig(model_name="llama3", provider_kind=ProviderKind.TAVILY)

    def test_placeholder_model_is_fatal(self):
        cfg = make_settings(llm_model="changeme", brave_api_key="key")
        with pytest.raises(ConfigError, match="LLM_MODEL"):
            load_agent_config(cfg)

    def test_blank_model_is_fatal(self):
        cfg = make_settings(llm_model="  ", brave_api_key="key")
        with pytest.raises(ConfigError):
            load_agent_config(cfg)

    def test_unknown_provider_is_fatal(self):
        cfg = make_settings(llm_model="gpt-4", web_search_provider="duckduckgo")
        with pytest.raises(ConfigError, match="Unsupported WEB_SEARCH_PROVIDER"):
            load_agent_config(cfg)

    def test_missing_credential_names_variable_and_provider(self):
        cfg = make_settings(llm_model="gpt-4", web_search_provider="brave", brave_api_key="")
        with pytest.raises(ConfigError) as exc_info:
            load_agent_config(cfg)
        assert "BRAVE_API_KEY" in str(exc_info.value)
        assert "Brave" in str(exc_info.value)

    def test_google_requires_engine_id(self):
        cfg = make_settings(
            llm_model="gpt-4",
            web_search_provider="google",
            google_api_key="key",
            google_search_engine_id="changeme",
        )
        with pytest.raises(ConfigError) as exc_info:
            load_agent_config(cfg)
        assert "GOOGLE_SEARCH_ENGINE_ID" in str(exc_info.value)
        assert "Google web search" in str(exc_info.value)


class TestModelEnvPriority:
    def test_component_variable_wins(self, monkeypatch):
        monkeypatch.setenv("AGGO_LLM_MODEL", "qwen2.5")
        monkeypatch.setenv("LLM_MODEL", "gpt-4o")
        assert make_settings().llm_model == "qwen2.5"

    def test_falls_back_to_llm_model(self, monkeypatch):
        monkeypatch.setenv("LLM_MODEL", "gpt-4o")
        assert make_settings().llm_model == "gpt-4o"

    def test_defaults_to_gpt_4(self):
        assert make_settings().llm_model == "gpt-4"
