"""Research Agent

Simple CLI for researching a topic.
"""

import argparse
import asyncio
import sys

from research_agent.agents.research_agent import ResearchAgent
from research_agent.config import AgentConfig, load_agent_config, settings
from research_agent.exceptions import ConfigError


async def run_research(topic: str, config: AgentConfig) -> str:
    """Run research on the given topic."""
    print(f"Research topic: {topic}")
    print(f"Model: {config.model_name} | Search: {config.provider_kind.display_name}")
    print("-" * 50)

    agent = ResearchAgent(config)
    return await agent.research(topic)


def main():
    parser = argparse.ArgumentParser(description="Research Agent")
    parser.add_argument("--topic", "-t", required=True, help="Topic to research")
    parser.add_argument("--model", "-m", help="Model to use (default: AGGO_LLM_MODEL / LLM_MODEL)")
    parser.add_argument(
        "--provider",
        "-p",
        choices=["brave", "google", "serper", "tavily"],
        help="Web search provider (default: WEB_SEARCH_PROVIDER)",
    )

    args = parser.parse_args()

    overrides = {}
    if args.model:
        overrides["llm_model"] = args.model
    if args.provider:
        overrides["web_search_provider"] = args.provider

    try:
        config = load_agent_config(settings.model_copy(update=overrides))
    except ConfigError as e:
        print(f"[!] Configuration error: {e}", file=sys.stderr)
        sys.exit(2)

    report = asyncio.run(run_research(args.topic, config))
    print(report)


if __name__ == "__main__":
    main()
