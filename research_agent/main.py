from contextlib import asynccontextmanager

from fastapi import FastAPI

from research_agent.agents.research_agent import ResearchAgent
from research_agent.api.routes import research


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: a misconfigured agent raises ConfigError and the app never serves.
    app.state.agent = ResearchAgent()
    yield
    # Shutdown


app = FastAPI(
    title="Research Agent",
    description="Web search backed topic research",
    version="0.1.0",
    lifespan=lifespan,
)

# Routes
app.include_router(research.router)


@app.get("/api/health")
async def health():
    return {"status": "ok", "service": "research-agent"}
