"""Google Custom Search JSON API client.

Returns one page of results per call; pagination lives in SourceSearchService.
"""

from typing import Any
from urllib.parse import urlparse

import httpx

from models.sources import SearchResult
from utils.logger import get_logger

from .contracts import (
    MAX_PAGE_SIZE,
    SearchErrorCategory,
    SearchPage,
    SearchProviderError,
    classify_http_status,
)

logger = get_logger(__name__)

GOOGLE_SEARCH_URL = "https://www.googleapis.com/customsearch/v1"


class GoogleSearchClient:
    """Thin wrapper over the Custom Search ``/customsearch/v1`` endpoint."""

    provider_name = "google"

    def __init__(
        self,
        api_key: str | None,
        engine_id: str | None,
        timeout_s: float = 10.0,
        base_url: str = GOOGLE_SEARCH_URL,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Args:
            api_key: Custom Search API key
            engine_id: Programmable Search Engine id (``cx``)
            timeout_s: Per-request timeout in seconds
            base_url: Endpoint override (tests, proxies)
            transport: Optional httpx transport (tests inject ``httpx.MockTransport``)
        """
        self.api_key = api_key
        self.engine_id = engine_id
        self.timeout_s = timeout_s
        self.base_url = base_url
        self._transport = transport

    def fetch_page(self, query: str, start: int, num: int) -> SearchPage:
        if not self.api_key:
            raise SearchProviderError(SearchErrorCategory.CONFIGURATION, "GOOGLE_SEARCH_API_KEY is not set")
        if not self.engine_id:
            raise SearchProviderError(SearchErrorCategory.CONFIGURATION, "GOOGLE_SEARCH_ENGINE_ID is not set")

        params = {
            "key": self.api_key,
            "cx": self.engine_id,
            "q": query,
            "num": str(max(1, min(num, MAX_PAGE_SIZE))),
            "start": str(start),
        }

        try:
            with httpx.Client(timeout=self.timeout_s, transport=self._transport) as client:
                response = client.get(self.base_url, params=params)
        except httpx.TimeoutException as exc:
            raise SearchProviderError(
                SearchErrorCategory.TRANSIENT, f"Google Search timed out after {self.timeout_s}s"
            ) from exc
        except httpx.RequestError as exc:
            raise SearchProviderError(
                SearchErrorCategory.TRANSIENT, f"Google Search request failed: {exc}"
            ) from exc

        if response.status_code >= 400:
            message, reason = _extract_error(response)
            category = classify_http_status(response.status_code, f"{reason} {message}")
            logger.warning(
                "Google Search returned an error",
                extra={
                    "extra_fields": {
                        "status_code": response.status_code,
                        "reason": reason,
                        "category": category.value,
                        "start": start,
                    }
                },
            )
            raise SearchProviderError(category, message, status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            raise SearchProviderError(
                SearchErrorCategory.TRANSIENT, "Google Search returned a non-JSON body"
            ) from exc

        items = [result for result in (_to_search_result(raw) for raw in data.get("items") or []) if result]
        has_next = bool((data.get("queries") or {}).get("nextPage"))

        logger.debug(f"Google page start={start}: {len(items)} items (has_next={has_next})")
        return SearchPage(items=items, has_next=has_next)


def _to_search_result(raw: Any) -> SearchResult | None:
    if not isinstance(raw, dict):
        return None
    link = raw.get("link")
    if not link:
        return None
    return SearchResult(
        title=raw.get("title") or "Untitled",
        link=link,
        snippet=raw.get("snippet") or "",
        display_link=raw.get("displayLink") or urlparse(link).netloc,
    )


def _extract_error(response: httpx.Response) -> tuple[str, str]:
    """Return (message, reason) from a Google API error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or f"HTTP {response.status_code}", ""

    error = body.get("error") if isinstance(body, dict) else None
    if not isinstance(error, dict):
        return f"HTTP {response.status_code}", ""

    message = str(error.get("message") or f"HTTP {response.status_code}")
    reason = ""
    details = error.get("errors")
    if isinstance(details, list) and details and isinstance(details[0], dict):
        reason = str(details[0].get("reason") or "")
    return message, reason
