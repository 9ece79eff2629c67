from __future__ import annotations

from typing import Any

import httpx

from research_agent.config import is_configured, settings
from research_agent.exceptions import SearchError
from research_agent.tools.web_search import SearchResult
from research_agent.tools.web_utils import parse_search_json, raise_for_search_status

BRAVE_SEARCH_URL = "https://api.search.brave.com/res/v1/web/search"

# Brave caps count at 20 per request.
MAX_COUNT = 20
NO_TITLE = "(no title)"


def parse_results(payload: dict[str, Any]) -> list[SearchResult]:
    """Map a Brave web search payload onto SearchResults.

    A payload without a `web` section is an empty result set. Items without a
    usable url are skipped.
    """
    web = payload.get("web")
    if not isinstance(web, dict):
        return []

    mapped: list[SearchResult] = []
    for item in web.get("results") or []:
        url = item.get("url")
        if not isinstance(url, str) or not url.strip():
            continue
        title = item.get("title")
        snippet = item.get("description")
        mapped.append(
            SearchResult(
                url=url,
                title=title if title is not None else NO_TITLE,
                snippet=snippet if snippet is not None else "",
            )
        )
    return mapped


async def search(query: str, *, max_results: int = 10) -> list[SearchResult]:
    """Execute a single Brave web search request and normalize results."""
    token = settings.brave_api_key
    if not is_configured(token):
        raise SearchError("BRAVE_API_KEY env var not configured")

    params: dict[str, Any] = {
        "q": query,
        "count": min(max_results, MAX_COUNT),
        "offset": 0,
        "search_lang": "en",
        "safesearch": "off",
    }

    try:
        async with httpx.AsyncClient(timeout=settings.search_timeout_seconds) as client:
            response = await client.get(
                BRAVE_SEARCH_URL,
                params=params,
                headers={
                    "Accept": "application/json",
                    # No gzip: the body is read as plain text.
                    "Accept-Encoding": "identity",
                    "X-Subscription-Token": token,
                },
            )
    except httpx.HTTPError as exc:
        raise SearchError(f"Brave HTTP request failed: {exc}") from exc

    raise_for_search_status(response, "Brave")
    return parse_results(parse_search_json(response, "Brave"))
