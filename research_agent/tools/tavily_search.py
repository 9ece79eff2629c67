from __future__ import annotations

from typing import Any

from tavily import AsyncTavilyClient

from research_agent.config import is_configured, settings
from research_agent.exceptions import SearchError
from research_agent.tools.web_search import SearchParams, SearchResult, SearchSession, result_from_item


class TavilySearchSession(SearchSession):
    """Tavily search session.

    Tavily has no result offset, so the whole result set arrives with the
    first page and every later page is empty.
    """

    provider = "Tavily"

    def __init__(self, params: SearchParams, *, client: AsyncTavilyClient):
        super().__init__(params)
        self.client = client

    def _search_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "query": self.params.query,
            "search_depth": "advanced",
            "max_results": self.page_size,
        }
        if self.params.advanced_answer:
            kwargs["include_answer"] = "advanced"
        if self.params.time_range:
            kwargs["time_range"] = self.params.time_range
        if self.params.include_domains:
            kwargs["include_domains"] = self.params.include_domains
        if self.params.exclude_domains:
            kwargs["exclude_domains"] = self.params.exclude_domains
        if self.params.include_images is not None:
            kwargs["include_images"] = self.params.include_images
        if self.params.include_html:
            kwargs["include_raw_content"] = True
        return kwargs

    async def _fetch_page(self, page_index: int) -> list[SearchResult]:
        if page_index > 0:
            return []
        try:
            response = await self.client.search(**self._search_kwargs())
        except Exception as e:
            raise SearchError(f"Tavily search request failed: {e}") from e

        return [
            result_from_item(r, url_key="url", snippet_key="content")
            for r in response.get("results", [])
        ]


def start_session(params: SearchParams) -> TavilySearchSession:
    if not is_configured(settings.tavily_api_key):
        raise SearchError("TAVILY_API_KEY env var not configured")
    return TavilySearchSession(params, client=AsyncTavilyClient(api_key=settings.tavily_api_key))
