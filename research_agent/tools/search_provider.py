from __future__ import annotations

from loguru import logger

from research_agent.config import ProviderKind
from research_agent.exceptions import SearchError
from research_agent.services.env_safety import sanitize_ssl_keylogfile
from research_agent.tools import brave_search, google_search, serper_search, tavily_search
from research_agent.tools.web_search import SearchParams, SearchResult, SearchSession

PAGES_TO_RETRIEVE = 3
FAILED_TITLE = "search-failed"


def start_search(kind: ProviderKind, params: SearchParams) -> SearchSession:
    """Open a paginated search session for a session-based provider."""
    if kind == ProviderKind.GOOGLE:
        return google_search.start_session(params)
    if kind == ProviderKind.SERPER:
        return serper_search.start_session(params)
    if kind == ProviderKind.TAVILY:
        return tavily_search.start_session(params)
    raise SearchError(f"{kind.display_name} does not support search sessions")


async def _session_search(kind: ProviderKind, topic: str) -> list[SearchResult]:
    params = SearchParams(query=topic)
    try:
        session = start_search(kind, params)
    except Exception as e:
        raise SearchError(
            f"Failed to start web search (provider: {kind.display_name}, query: {topic!r}). "
            f"Display: {e}. Debug: {e!r}"
        ) from e

    content: list[SearchResult] = []
    for page_index in range(PAGES_TO_RETRIEVE):
        try:
            page = await session.next_page()
        except Exception as e:
            raise SearchError(
                f"Failed to retrieve web search page {page_index + 1}/{PAGES_TO_RETRIEVE} "
                f"(provider: {kind.display_name}, query: {topic!r}). Display: {e}. Debug: {e!r}",
                status_code=getattr(e, "status_code", None),
                body=getattr(e, "body", None),
            ) from e
        content.extend(page)
    return content


async def search_web_for_topic(kind: ProviderKind, topic: str) -> list[SearchResult]:
    """Collect search results for a topic, raising SearchError on failure."""
    sanitize_ssl_keylogfile()
    if kind == ProviderKind.BRAVE:
        return await brave_search.search(topic)
    return await _session_search(kind, topic)


async def aggregate(kind: ProviderKind, topic: str) -> list[SearchResult]:
    """Collect search results for a topic. Never raises.

    A failed search yields a single annotated placeholder result so the
    language-model call can still go ahead.
    """
    try:
        results = await search_web_for_topic(kind, topic)
    except Exception as e:
        logger.warning(f"Web search failed (provider: {kind.display_name}): {e}")
        return [SearchResult(url="", title=FAILED_TITLE, snippet=f"Web search failed: {e}")]

    logger.info(f"Web search returned {len(results)} results (provider: {kind.display_name})")
    return results
