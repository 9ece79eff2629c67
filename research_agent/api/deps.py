from __future__ import annotations

from fastapi import Request

from research_agent.agents.research_agent import ResearchAgent


def get_agent(request: Request) -> ResearchAgent:
    """Return the agent built at application startup."""
    return request.app.state.agent
