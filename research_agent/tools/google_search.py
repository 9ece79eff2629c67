from __future__ import annotations

from typing import Any

import httpx

from research_agent.config import is_configured, settings
from research_agent.exceptions import SearchError
from research_agent.tools.web_search import SafeSearchLevel, SearchParams, SearchResult, SearchSession, result_from_item
from research_agent.tools.web_utils import parse_search_json, raise_for_search_status

GOOGLE_SEARCH_URL = "https://www.googleapis.com/customsearch/v1"

# Custom Search returns at most 10 items per request.
MAX_NUM = 10


class GoogleSearchSession(SearchSession):
    """Google Custom Search JSON API, paginated with the 1-based `start` offset."""

    provider = "Google"

    def __init__(self, params: SearchParams, *, api_key: str, engine_id: str):
        super().__init__(params)
        self.api_key = api_key
        self.engine_id = engine_id

    @property
    def page_size(self) -> int:
        return max(1, min(super().page_size, MAX_NUM))

    def _request_params(self, page_index: int) -> dict[str, Any]:
        params: dict[str, Any] = {
            "key": self.api_key,
            "cx": self.engine_id,
            "q": self.params.query,
            "num": self.page_size,
            "start": 1 + page_index * self.page_size,
        }
        if self.params.safe_search is not None:
            params["safe"] = "off" if self.params.safe_search == SafeSearchLevel.OFF else "active"
        if self.params.language:
            params["lr"] = self.params.language
        if self.params.region:
            params["gl"] = self.params.region.lower()
        if self.params.time_range:
            params["dateRestrict"] = self.params.time_range
        if self.params.include_domains:
            params["siteSearch"] = self.params.include_domains[0]
            params["siteSearchFilter"] = "i"
        elif self.params.exclude_domains:
            params["siteSearch"] = self.params.exclude_domains[0]
            params["siteSearchFilter"] = "e"
        return params

    async def _fetch_page(self, page_index: int) -> list[SearchResult]:
        try:
            async with httpx.AsyncClient(timeout=settings.search_timeout_seconds) as client:
                response = await client.get(GOOGLE_SEARCH_URL, params=self._request_params(page_index))
        except httpx.HTTPError as exc:
            raise SearchError(f"Google HTTP request failed: {exc}") from exc

        raise_for_search_status(response, "Google")
        payload = parse_search_json(response, "Google")
        return [result_from_item(item) for item in payload.get("items") or []]


def start_session(params: SearchParams) -> GoogleSearchSession:
    if not is_configured(settings.google_api_key):
        raise SearchError("GOOGLE_API_KEY env var not configured")
    if not is_configured(settings.google_search_engine_id):
        raise SearchError("GOOGLE_SEARCH_ENGINE_ID env var not configured")
    return GoogleSearchSession(
        params,
        api_key=settings.google_api_key,
        engine_id=settings.google_search_engine_id,
    )
