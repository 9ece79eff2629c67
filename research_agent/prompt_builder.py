from __future__ import annotations

import json

from research_agent.services.prompt_store import render_prompt
from research_agent.tools.web_search import SearchResult, results_to_dicts


def serialize_results(results: list[SearchResult]) -> str:
    """JSON array of results; "[]" if they cannot be serialized."""
    try:
        return json.dumps(results_to_dicts(results), ensure_ascii=False)
    except (TypeError, ValueError):
        return "[]"


def build_prompt(topic: str, results: list[SearchResult]) -> str:
    """Render the research instruction for the model from a topic and its search results."""
    return render_prompt(
        "research.report_prompt",
        topic=topic,
        search_results_json=serialize_results(results),
    )
