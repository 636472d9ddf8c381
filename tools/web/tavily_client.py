"""Tavily search backend.

Tavily has no offset parameter, so it serves a single page: the first call
returns up to ``num`` results and any later page is reported as the end of
results.
"""

from urllib.parse import urlparse

from models.sources import SearchResult
from utils.logger import get_logger

from .contracts import MAX_PAGE_SIZE, SearchErrorCategory, SearchPage, SearchProviderError

logger = get_logger(__name__)

_ERROR_CATEGORIES = {
    "InvalidAPIKeyError": SearchErrorCategory.AUTHENTICATION,
    "MissingAPIKeyError": SearchErrorCategory.CONFIGURATION,
    "UsageLimitExceededError": SearchErrorCategory.QUOTA,
    "ForbiddenError": SearchErrorCategory.AUTHORIZATION,
    "BadRequestError": SearchErrorCategory.BAD_REQUEST,
    "TimeoutError": SearchErrorCategory.TRANSIENT,
}


class TavilySearchClient:
    """Tavily-powered search page provider."""

    provider_name = "tavily"

    def __init__(self, api_key: str | None, search_depth: str = "basic", client=None):
        """
        Initialize Tavily client.

        Args:
            api_key: Tavily API key
            search_depth: "basic" (faster) or "advanced" (deeper)
            client: Pre-built client exposing ``search(**kwargs)`` (tests)
        """
        self.api_key = api_key
        self.search_depth = search_depth
        self._client = client

    def _get_client(self):
        if self._client is not None:
            return self._client
        if not self.api_key:
            raise SearchProviderError(SearchErrorCategory.CONFIGURATION, "TAVILY_API_KEY is not set")

        # Lazy import so the Google backend works without tavily installed
        try:
            from tavily import TavilyClient
        except ModuleNotFoundError as e:
            raise SearchProviderError(
                SearchErrorCategory.CONFIGURATION,
                "Optional dependency 'tavily' is not installed: pip install tavily-python",
            ) from e

        self._client = TavilyClient(api_key=self.api_key)
        logger.info("Tavily client initialized")
        return self._client

    def fetch_page(self, query: str, start: int, num: int) -> SearchPage:
        if start > 1:
            return SearchPage(items=[], has_next=False)

        client = self._get_client()
        try:
            response = client.search(
                query=query,
                max_results=max(1, min(num, MAX_PAGE_SIZE)),
                search_depth=self.search_depth,
                include_answer=False,
                include_raw_content=False,
            )
        except Exception as e:
            category = _ERROR_CATEGORIES.get(type(e).__name__, SearchErrorCategory.UNKNOWN)
            raise SearchProviderError(category, f"Tavily search failed: {e}") from e

        items = []
        for result in response.get("results", []):
            url = result.get("url")
            if not url:
                continue
            items.append(
                SearchResult(
                    title=result.get("title") or "Untitled",
                    link=url,
                    snippet=result.get("content") or "",
                    display_link=urlparse(url).netloc,
                )
            )

        logger.info(f"Tavily returned {len(items)} results")
        return SearchPage(items=items, has_next=False)
