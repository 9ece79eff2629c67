from __future__ import annotations

from pydantic import BaseModel, Field


# --- Requests ---


class ResearchRequest(BaseModel):
    topic: str = Field(min_length=1)


# --- Responses ---


class ResearchResponse(BaseModel):
    topic: str
    report: str


class AgentInfo(BaseModel):
    model: str
    search_provider: str
