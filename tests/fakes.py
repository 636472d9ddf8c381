"""Offline fakes and builders shared by the test modules."""

import json
import time

from models.sources import ScoredResult, SearchResult
from tools.web.contracts import SearchPage


def make_result(i: int, domain: str = "example.com") -> SearchResult:
    return SearchResult(
        title=f"Result {i}",
        link=f"https://{domain}/article-{i}",
        snippet=f"Snippet number {i}",
        display_link=domain,
    )


def make_scored(i: int, confidence: int, explanation: str = "matches") -> ScoredResult:
    return ScoredResult.from_result(make_result(i), confidence, explanation)


class FakePageProvider:
    """
    In-memory page provider.

    ``pages`` maps a 1-based start offset to a list of results, a SearchPage,
    or an exception to raise. Offsets not present return an empty page.
    """

    provider_name = "fake"

    def __init__(self, pages=None, delay_s: float = 0.0):
        self.pages = pages or {}
        self.delay_s = delay_s
        self.calls: list[tuple[str, int, int]] = []

    def fetch_page(self, query: str, start: int, num: int) -> SearchPage:
        self.calls.append((query, start, num))
        if self.delay_s:
            time.sleep(self.delay_s)
        page = self.pages.get(start, [])
        if isinstance(page, Exception):
            raise page
        if isinstance(page, SearchPage):
            return page
        return SearchPage(items=list(page)[:num], has_next=True)


class QueryPageProvider(FakePageProvider):
    """Serves results per query string; a query mapped to an exception fails."""

    def __init__(self, by_query):
        super().__init__()
        self.by_query = by_query

    def fetch_page(self, query: str, start: int, num: int) -> SearchPage:
        self.calls.append((query, start, num))
        outcome = self.by_query.get(query, [])
        if isinstance(outcome, Exception):
            raise outcome
        if start > 1:
            return SearchPage(items=[], has_next=False)
        return SearchPage(items=list(outcome)[:num], has_next=False)


class FakeScoringClient:
    """Scoring client returning a canned answer (or raising) and recording prompts."""

    provider_name = "fake"

    def __init__(self, content=None, error: Exception | None = None, delay_s: float = 0.0):
        self.content = content
        self.error = error
        self.delay_s = delay_s
        self.prompts: list[str] = []

    def get_json_completion(self, system_prompt: str, prompt: str, **kwargs) -> str:
        self.prompts.append(prompt)
        if self.delay_s:
            time.sleep(self.delay_s)
        if self.error is not None:
            raise self.error
        if isinstance(self.content, (dict, list)):
            return json.dumps(self.content)
        return self.content


def scoring_answer(*pairs: tuple[int, int]) -> dict:
    """Build a provider answer from (index, confidence) pairs."""
    return {
        "results": [
            {"index": index, "confidence": confidence, "explanation": f"reason {index}"}
            for index, confidence in pairs
        ]
    }
