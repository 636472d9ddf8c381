"""Source search: pagination over a page provider plus multi-query merging."""

import asyncio
import math

from models.sources import SearchResult
from utils.logger import get_logger

from .contracts import (
    MAX_PAGE_SIZE,
    SearchErrorCategory,
    SearchPageProvider,
    SearchProviderError,
)

logger = get_logger(__name__)


class SourceSearchService:
    """
    Collects search results for a query across as many provider pages as needed.

    Only the first page may fail the search; a failure or an empty page later on
    ends pagination and keeps what was already collected.
    """

    def __init__(self, provider: SearchPageProvider, query_timeout_s: float | None = None):
        """
        Args:
            provider: Page provider (Google, Tavily, or a fake in tests)
            query_timeout_s: Upper bound for one whole query in multi-query mode
        """
        self.provider = provider
        self.query_timeout_s = query_timeout_s

    @property
    def provider_name(self) -> str:
        return getattr(self.provider, "provider_name", type(self.provider).__name__)

    def search(self, query: str, desired_count: int = 10) -> list[SearchResult]:
        """
        Search one query, paging until ``desired_count`` results are collected.

        Args:
            query: Search query
            desired_count: Number of results wanted

        Returns:
            At most ``desired_count`` results in provider order

        Raises:
            SearchProviderError: If the first page request fails
        """
        if desired_count <= 0:
            return []

        collected: list[SearchResult] = []
        max_pages = math.ceil(desired_count / MAX_PAGE_SIZE)
        stop_reason = "page_limit"

        for page_index in range(max_pages):
            needed = min(MAX_PAGE_SIZE, desired_count - len(collected))
            if needed <= 0:
                stop_reason = "filled"
                break
            start = page_index * MAX_PAGE_SIZE + 1

            try:
                page = self.provider.fetch_page(query, start, needed)
            except SearchProviderError as e:
                if page_index == 0:
                    raise
                logger.warning(f"Stopping pagination at start={start}: {e}")
                stop_reason = "page_error"
                break
            except Exception as e:
                if page_index == 0:
                    raise SearchProviderError(SearchErrorCategory.UNKNOWN, str(e)) from e
                logger.warning(f"Stopping pagination at start={start}: {e}")
                stop_reason = "page_error"
                break

            if not page.items:
                stop_reason = "exhausted"
                break

            collected.extend(page.items)

            if not page.has_next:
                stop_reason = "no_next_page"
                break

        results = collected[:desired_count]
        logger.info(
            "Search finished",
            extra={
                "extra_fields": {
                    "provider": self.provider_name,
                    "desired_count": desired_count,
                    "result_count": len(results),
                    "stop_reason": stop_reason if len(results) < desired_count else "filled",
                }
            },
        )
        return results

    async def search_multiple(self, queries: list[str], results_per_query: int = 5) -> list[SearchResult]:
        """
        Run several queries concurrently and merge their results.

        Results keep query order, then provider order; later duplicates of a
        link are dropped. Failed queries are logged and skipped.

        Raises:
            SearchProviderError: Only if every query failed
        """
        if not queries:
            return []

        outcomes = await asyncio.gather(
            *(self._search_with_timeout(query, results_per_query) for query in queries),
            return_exceptions=True,
        )

        merged: list[SearchResult] = []
        seen_links: set[str] = set()
        errors: list[SearchProviderError] = []

        for query, outcome in zip(queries, outcomes):
            if isinstance(outcome, BaseException):
                error = _as_provider_error(outcome)
                logger.warning(f"Query failed, skipping: '{query[:50]}' ({error})")
                errors.append(error)
                continue
            for result in outcome:
                if result.link in seen_links:
                    continue
                seen_links.add(result.link)
                merged.append(result)

        if len(errors) == len(queries):
            raise errors[0]

        logger.info(f"Multi-query search: {len(queries)} queries, {len(merged)} unique results")
        return merged

    async def _search_with_timeout(self, query: str, desired_count: int) -> list[SearchResult]:
        call = asyncio.to_thread(self.search, query, desired_count)
        if self.query_timeout_s is None:
            return await call
        return await asyncio.wait_for(call, timeout=self.query_timeout_s)


def _as_provider_error(exc: BaseException) -> SearchProviderError:
    if isinstance(exc, SearchProviderError):
        return exc
    if isinstance(exc, asyncio.TimeoutError):
        return SearchProviderError(SearchErrorCategory.TRANSIENT, "Search query timed out")
    return SearchProviderError(SearchErrorCategory.UNKNOWN, str(exc))
