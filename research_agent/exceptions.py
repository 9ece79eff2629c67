"""Exceptions raised by the research agent."""

from __future__ import annotations


class ResearchAgentError(Exception):
    """Base exception for research agent errors."""

    pass


class ConfigError(ResearchAgentError):
    """Raised when the agent configuration is unusable. Fatal at construction."""

    pass


class SearchError(ResearchAgentError):
    """Raised when a web search backend call fails."""

    def __init__(self, message: str, *, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class LLMError(ResearchAgentError):
    """Raised when the language-model backend call fails."""

    pass
