from __future__ import annotations

from typing import Any

import httpx

from research_agent.exceptions import SearchError

MAX_LOGGED_BODY_CHARS = 2000


def truncate_for_log(text: str, max_length: int = MAX_LOGGED_BODY_CHARS) -> str:
    """Trim a response body for error messages."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "…<truncated>"


def raise_for_search_status(response: httpx.Response, provider: str) -> None:
    """Raise SearchError carrying the status code and a trimmed body on non-2xx."""
    if response.is_success:
        return
    body = truncate_for_log(response.text)
    raise SearchError(
        f"{provider} HTTP error status={response.status_code} body={body}",
        status_code=response.status_code,
        body=body,
    )


def parse_search_json(response: httpx.Response, provider: str) -> dict[str, Any]:
    """Decode a JSON object body, raising SearchError on anything else."""
    try:
        payload = response.json()
    except ValueError as exc:
        raise SearchError(
            f"Failed to parse {provider} JSON: {exc} body={truncate_for_log(response.text)}"
        ) from exc
    if not isinstance(payload, dict):
        raise SearchError(
            f"Unexpected {provider} response shape: {truncate_for_log(response.text)}"
        )
    return payload
