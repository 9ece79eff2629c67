from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

from research_agent.exceptions import ConfigError

PLACEHOLDER_VALUE = "changeme"


class Settings(BaseSettings):
    # LLM (AGGO_LLM_MODEL wins over LLM_MODEL)
    llm_model: str = Field(
        default="gpt-4",
        validation_alias=AliasChoices("aggo_llm_model", "llm_model"),
    )
    # Raw values of the two model variables, reported in LLM failure diagnostics
    env_aggo_llm_model: str | None = Field(default=None, validation_alias="aggo_llm_model")
    env_llm_model: str | None = Field(default=None, validation_alias="llm_model")
    llm_api_key: str = ""
    llm_base_url: str = "https://openrouter.ai/api/v1"
    ollama_base_url: str = ""  # alternate OpenAI-compatible backend, e.g. http://localhost:11434

    # Web search provider
    web_search_provider: str = "brave"  # brave | google | serper | tavily
    brave_api_key: str = ""
    google_api_key: str = ""
    google_search_engine_id: str = ""
    serper_api_key: str = ""
    tavily_api_key: str = ""
    search_timeout_seconds: float = 30.0

    # App
    app_log_level: str = "INFO"
    noisy_log_level: str = "WARNING"
    log_dir: str = "logs"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }


settings = Settings()


class ProviderKind(Enum):
    BRAVE = "brave"
    GOOGLE = "google"
    SERPER = "serper"
    TAVILY = "tavily"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def required_env_vars(self) -> tuple[str, ...]:
        return _REQUIRED_ENV_VARS[self]


_REQUIRED_ENV_VARS: dict[ProviderKind, tuple[str, ...]] = {
    ProviderKind.BRAVE: ("BRAVE_API_KEY",),
    ProviderKind.GOOGLE: ("GOOGLE_API_KEY", "GOOGLE_SEARCH_ENGINE_ID"),
    ProviderKind.SERPER: ("SERPER_API_KEY",),
    ProviderKind.TAVILY: ("TAVILY_API_KEY",),
}


@dataclass(frozen=True)
class AgentConfig:
    model_name: str
    provider_kind: ProviderKind

    def __post_init__(self):
        if not is_configured(self.model_name):
            raise ConfigError(f"Unusable model name {self.model_name!r} for the research agent.")
        if not isinstance(self.provider_kind, ProviderKind):
            raise ConfigError(f"Unknown web search provider {self.provider_kind!r}.")


def is_configured(value: str | None) -> bool:
    """True when a config value is set and is not the placeholder sentinel."""
    if value is None:
        return False
    stripped = value.strip()
    return bool(stripped) and stripped != PLACEHOLDER_VALUE


def resolve_provider_kind(value: str | None) -> ProviderKind:
    """Map a WEB_SEARCH_PROVIDER value onto a ProviderKind."""
    normalized = (value or "brave").strip().lower()
    try:
        return ProviderKind(normalized)
    except ValueError:
        supported = "|".join(kind.value for kind in ProviderKind)
        raise ConfigError(
            f"Unsupported WEB_SEARCH_PROVIDER={normalized}. Supported: {supported}"
        ) from None


def load_agent_config(cfg: Settings) -> AgentConfig:
    """Validate settings and build the immutable agent configuration.

    Raises ConfigError for an unusable model name, an unknown provider or a
    missing credential. The agent must not start in any of those states.
    """
    model = cfg.llm_model
    if not is_configured(model):
        raise ConfigError(
            "LLM_MODEL env var not configured. Set AGGO_LLM_MODEL or LLM_MODEL in the environment or .env file."
        )

    provider_kind = resolve_provider_kind(cfg.web_search_provider)

    for env_var in provider_kind.required_env_vars:
        if not is_configured(getattr(cfg, env_var.lower(), None)):
            raise ConfigError(
                f"{env_var} env var not configured (required for {provider_kind.display_name} web search). "
                "Set it in the environment or .env file."
            )

    return AgentConfig(model_name=model, provider_kind=provider_kind)
