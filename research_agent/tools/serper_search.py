from __future__ import annotations

from typing import Any

import httpx

from research_agent.config import is_configured, settings
from research_agent.exceptions import SearchError
from research_agent.tools.web_search import SearchParams, SearchResult, SearchSession, result_from_item
from research_agent.tools.web_utils import parse_search_json, raise_for_search_status

SERPER_SEARCH_URL = "https://google.serper.dev/search"

TIME_RANGE_MAP = {
    "day": "qdr:d",
    "week": "qdr:w",
    "month": "qdr:m",
    "year": "qdr:y",
}


class SerperSearchSession(SearchSession):
    """Serper.dev Google SERP API, paginated with the 1-based `page` field."""

    provider = "Serper"

    def __init__(self, params: SearchParams, *, api_key: str):
        super().__init__(params)
        self.api_key = api_key

    def _request_body(self, page_index: int) -> dict[str, Any]:
        body: dict[str, Any] = {
            "q": self.params.query,
            "num": self.page_size,
            "page": page_index + 1,
        }
        if self.params.language_code:
            body["hl"] = self.params.language_code
        if self.params.region:
            body["gl"] = self.params.region.lower()
        if self.params.time_range and self.params.time_range in TIME_RANGE_MAP:
            body["tbs"] = TIME_RANGE_MAP[self.params.time_range]
        return body

    async def _fetch_page(self, page_index: int) -> list[SearchResult]:
        try:
            async with httpx.AsyncClient(timeout=settings.search_timeout_seconds) as client:
                response = await client.post(
                    SERPER_SEARCH_URL,
                    json=self._request_body(page_index),
                    headers={
                        "Content-Type": "application/json",
                        "X-API-KEY": self.api_key,
                    },
                )
        except httpx.HTTPError as exc:
            raise SearchError(f"Serper HTTP request failed: {exc}") from exc

        raise_for_search_status(response, "Serper")
        payload = parse_search_json(response, "Serper")
        return [result_from_item(item) for item in payload.get("organic") or []]


def start_session(params: SearchParams) -> SerperSearchSession:
    if not is_configured(settings.serper_api_key):
        raise SearchError("SERPER_API_KEY env var not configured")
    return SerperSearchSession(params, api_key=settings.serper_api_key)
