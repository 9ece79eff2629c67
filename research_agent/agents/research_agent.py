from __future__ import annotations

import time

from research_agent import llm_client
from research_agent.config import AgentConfig, load_agent_config, settings
from research_agent.llm_client import LLMConfig, Message, MessageResponse
from research_agent.prompt_builder import build_prompt
from research_agent.services import logger as log_service
from research_agent.services.prompt_store import render_prompt
from research_agent.tools import search_provider


class ResearchAgent:
    """Researches a topic: web search, then a single model call over the results.

    Construction validates configuration and raises ConfigError when it is
    unusable. `research` never raises; search and model failures come back as
    annotated text.
    """

    name = render_prompt("research.agent_name")

    def __init__(self, config: AgentConfig | None = None):
        self.config = config or load_agent_config(settings)
        log_service.log_event(
            event_type="agent_ready",
            message="Research agent configured",
            model=self.config.model_name,
            search_provider=self.config.provider_kind.value,
        )

    @property
    def model(self) -> str:
        return self.config.model_name

    async def research(self, topic: str) -> str:
        results = await search_provider.aggregate(self.config.provider_kind, topic)
        log_service.log_research_step(
            topic,
            "search",
            "completed",
            {"provider": self.config.provider_kind.value, "results": len(results)},
        )

        prompt = build_prompt(topic, results)
        conversation = [Message(role="assistant", name=self.name, content=prompt)]
        config = LLMConfig(model=self.model)

        t0 = time.monotonic()
        try:
            response = await llm_client.send(conversation, config)
        except Exception as e:
            log_service.log_llm_call(
                model=self.model,
                caller=self.name,
                duration_ms=int((time.monotonic() - t0) * 1000),
                status="failed",
                error=str(e),
            )
            return self.llm_failure_report(e)

        log_service.log_llm_call(
            model=self.model,
            caller=self.name,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
            duration_ms=int((time.monotonic() - t0) * 1000),
        )
        return self.format_report(topic, response)

    @staticmethod
    def format_report(topic: str, response: MessageResponse) -> str:
        text_result = "\n".join(response.text_blocks)
        return f"Finished research for topic {topic}:\n{text_result}"

    def llm_failure_report(self, error: BaseException) -> str:
        """Diagnostic text returned in place of a report when the model call fails."""
        return render_prompt(
            "diagnostics.llm_failure",
            model=repr(self.model),
            model_name=self.model,
            env_aggo_llm_model=repr(settings.env_aggo_llm_model),
            env_llm_model=repr(settings.env_llm_model),
            ollama_base_url=repr(settings.ollama_base_url or None),
            error_display=str(error),
            error_debug=repr(error),
        )
