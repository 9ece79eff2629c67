from __future__ import annotations

import os

import pytest

# Keep test runs off the file log handler and away from real credentials.
os.environ["LOG_DIR"] = ""

AGENT_ENV_VARS = (
    "AGGO_LLM_MODEL",
    "LLM_MODEL",
    "LLM_API_KEY",
    "LLM_BASE_URL",
    "OLLAMA_BASE_URL",
    "WEB_SEARCH_PROVIDER",
    "BRAVE_API_KEY",
    "GOOGLE_API_KEY",
    "GOOGLE_SEARCH_ENGINE_ID",
    "SERPER_API_KEY",
    "TAVILY_API_KEY",
)

for _var in AGENT_ENV_VARS:
    os.environ.pop(_var, None)


@pytest.fixture(autouse=True)
def clean_agent_env(monkeypatch):
    for var in AGENT_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    yield
