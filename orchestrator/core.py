"""
SourcePipeline - finds and ranks the likely origins of a piece of text.

normalize -> search -> score -> select top N. Every request ends in exactly
one PipelineOutcome; the pipeline never raises to its caller.
"""

import asyncio
import math
import time
import uuid
from typing import Awaitable, Callable

from models.pipeline_outcome import PipelineOutcome
from orchestrator.input_normalizer import EmptyInputError, normalize
from orchestrator.ranking import select_top
from orchestrator.relevance_scorer import RelevanceScorer
from tools.web.contracts import MAX_PAGE_SIZE, SearchErrorCategory, SearchProviderError
from tools.web.search_service import SourceSearchService
from tools.web.source_filters import filter_by_source_type
from utils.logger import get_logger

logger = get_logger(__name__)

ProgressNotifier = Callable[[str], Awaitable[None]]

STAGE_PROCESSING = "processing"
STAGE_SEARCHING = "searching"
STAGE_ANALYZING = "analyzing"


class SourcePipeline:
    """
    Example usage:
        pipeline = SourcePipeline(search_service, scorer)
        outcome = await pipeline.run("The quick brown fox ...")
        if outcome.is_success:
            for result in outcome.results:
                print(result.confidence, result.link)
    """

    def __init__(
        self,
        search_service: SourceSearchService,
        scorer: RelevanceScorer,
        result_count: int = 10,
        top_n: int = 3,
        search_timeout_s: float = 15.0,
        notify_timeout_s: float = 15.0,
        post_extractor: Callable[[str], str] | None = None,
    ):
        """
        Args:
            search_service: Paginating search over the configured provider
            scorer: Relevance scorer (never raises)
            result_count: Search results requested per query
            top_n: Size of the final selection
            search_timeout_s: Timeout per provider page call
            notify_timeout_s: Timeout for a single progress notification
            post_extractor: Transport hook that turns a post link into its text
        """
        self.search_service = search_service
        self.scorer = scorer
        self.result_count = result_count
        self.top_n = top_n
        self.search_timeout_s = search_timeout_s
        self.notify_timeout_s = notify_timeout_s
        self.post_extractor = post_extractor

    async def run(
        self,
        raw_text: str | None,
        fallback_caption: str | None = None,
        notify: ProgressNotifier | None = None,
        extra_queries: list[str] | None = None,
        source_type: str | None = None,
    ) -> PipelineOutcome:
        request_id = str(uuid.uuid4())
        start_time = time.time()

        try:
            outcome = await self._run(raw_text, fallback_caption, notify, extra_queries, source_type)
        except Exception as e:
            logger.error(
                f"Unexpected pipeline failure: {e}",
                exc_info=True,
                extra={"extra_fields": {"request_id": request_id}},
            )
            outcome = PipelineOutcome.unexpected_error(f"{type(e).__name__}: {e}")

        logger.info(
            "Pipeline finished",
            extra={
                "extra_fields": {
                    "request_id": request_id,
                    "outcome": outcome.kind.value,
                    "result_count": len(outcome.results),
                    "degraded": outcome.degraded,
                    "latency_ms": int((time.time() - start_time) * 1000),
                }
            },
        )
        return outcome

    async def _run(
        self,
        raw_text: str | None,
        fallback_caption: str | None,
        notify: ProgressNotifier | None,
        extra_queries: list[str] | None,
        source_type: str | None,
    ) -> PipelineOutcome:
        await self._notify(notify, STAGE_PROCESSING)

        try:
            query = normalize(raw_text, fallback_caption, self.post_extractor)
        except EmptyInputError:
            return PipelineOutcome.empty_input()

        await self._notify(notify, STAGE_SEARCHING)

        try:
            results = await self._search(query, extra_queries)
        except SearchProviderError as e:
            logger.error(f"Search failed: {e}")
            return PipelineOutcome.search_provider_error(str(e), e.category.value)

        if source_type:
            results = filter_by_source_type(results, source_type)

        if not results:
            return PipelineOutcome.no_sources_found()

        await self._notify(notify, STAGE_ANALYZING)

        report = await self.scorer.score(query, results)
        top_results = select_top(report.results, self.top_n)

        if not top_results:
            return PipelineOutcome.no_relevant_sources_found(degraded=report.degraded)
        return PipelineOutcome.success(top_results, degraded=report.degraded)

    async def _search(self, query: str, extra_queries: list[str] | None):
        queries = [query] + [q.strip() for q in (extra_queries or []) if q and q.strip()]
        if len(queries) > 1:
            return await self.search_service.search_multiple(queries, self.result_count)

        pages = max(1, math.ceil(self.result_count / MAX_PAGE_SIZE))
        timeout_s = self.search_timeout_s * pages
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self.search_service.search, query, self.result_count),
                timeout=timeout_s,
            )
        except asyncio.TimeoutError as e:
            raise SearchProviderError(
                SearchErrorCategory.TRANSIENT, f"Search timed out after {timeout_s}s"
            ) from e

    async def _notify(self, notify: ProgressNotifier | None, stage: str) -> None:
        if notify is None:
            return
        try:
            await asyncio.wait_for(notify(stage), timeout=self.notify_timeout_s)
        except Exception as e:
            logger.warning(f"Progress notification '{stage}' failed: {e}")
