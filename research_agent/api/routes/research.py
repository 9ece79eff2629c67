from __future__ import annotations

from fastapi import APIRouter, Depends

from research_agent.agents.research_agent import ResearchAgent
from research_agent.api.deps import get_agent
from research_agent.models.schemas import AgentInfo, ResearchRequest, ResearchResponse

router = APIRouter(prefix="/api/research", tags=["research"])


@router.post("", response_model=ResearchResponse)
async def research(request: ResearchRequest, agent: ResearchAgent = Depends(get_agent)):
    """Research and summarize a topic."""
    report = await agent.research(request.topic)
    return ResearchResponse(topic=request.topic, report=report)


@router.get("/agent", response_model=AgentInfo)
async def agent_info(agent: ResearchAgent = Depends(get_agent)):
    return AgentInfo(model=agent.model, search_provider=agent.config.provider_kind.value)
