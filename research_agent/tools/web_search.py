"""Shared search types and the paginated search-session abstraction."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any


@dataclass
class SearchResult:
    url: str
    title: str
    snippet: str


class SafeSearchLevel(Enum):
    OFF = "off"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class SearchParams:
    """Normalized parameters for opening a search session."""

    query: str
    language: str | None = "lang_en"
    safe_search: SafeSearchLevel | None = SafeSearchLevel.OFF
    max_results: int | None = 10
    time_range: str | None = None
    include_domains: list[str] | None = None
    exclude_domains: list[str] | None = None
    include_images: bool | None = None
    include_html: bool | None = None
    advanced_answer: bool | None = True
    region: str | None = None

    @property
    def language_code(self) -> str | None:
        """Two-letter language code, e.g. "en" for "lang_en"."""
        if not self.language:
            return None
        return self.language.removeprefix("lang_")


class SearchSession(ABC):
    """Stateful handle over a multi-page result stream.

    Pages are fetched one at a time; each call to `next_page` advances the
    session. Implementations raise SearchError on failure.
    """

    provider: str = "base"

    def __init__(self, params: SearchParams):
        self.params = params
        self.page_index = 0

    @property
    def page_size(self) -> int:
        return self.params.max_results or 10

    async def next_page(self) -> list[SearchResult]:
        results = await self._fetch_page(self.page_index)
        self.page_index += 1
        return results

    @abstractmethod
    async def _fetch_page(self, page_index: int) -> list[SearchResult]:
        ...


def result_from_item(item: dict[str, Any], *, url_key: str = "link", snippet_key: str = "snippet") -> SearchResult:
    """Flatten one backend result item into a SearchResult."""
    return SearchResult(
        url=item.get(url_key, "") or "",
        title=item.get("title", "") or "",
        snippet=item.get(snippet_key, "") or "",
    )


def results_to_dicts(results: list[SearchResult]) -> list[dict[str, Any]]:
    """Convert SearchResult list to JSON-serializable dicts."""
    return [asdict(r) for r in results]
