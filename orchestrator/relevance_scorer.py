"""
LLM-based relevance scoring of search candidates against the original text.

The scorer has two explicit outcomes:

- scored: the provider answered with valid JSON; every candidate gets the
  provider's confidence, or 0 with "No explanation provided" when the
  provider skipped its index;
- degraded: the provider was unavailable (not configured, network error,
  timeout, empty or malformed answer). Every candidate gets the fallback
  confidence and a generic explanation, and ``degraded`` is set so callers
  can tell the two apart.

``score`` never raises.
"""

import asyncio
import json
import math
from dataclasses import dataclass, field
from typing import Any

from api.base_client import BaseAIClient
from models.sources import ScoredResult, SearchResult
from utils.logger import get_logger

logger = get_logger(__name__)

MAX_CANDIDATES = 10
FALLBACK_CONFIDENCE = 50
FALLBACK_EXPLANATION = "AI analysis unavailable, showing search result"
MISSING_EXPLANATION = "No explanation provided"

SYSTEM_PROMPT = (
    "You are an expert at analyzing text sources and determining relevance. "
    "Always respond with valid JSON."
)


@dataclass(frozen=True)
class RelevanceReport:
    """Scored candidates, sorted by confidence descending (stable)."""

    results: list[ScoredResult] = field(default_factory=list)
    degraded: bool = False
    reason: str | None = None


def format_candidates(candidates: list[SearchResult]) -> str:
    blocks = []
    for index, result in enumerate(candidates, start=1):
        blocks.append(
            f"[{index}] {result.title}\nURL: {result.link}\nSnippet: {result.snippet or 'No snippet'}"
        )
    return "\n\n".join(blocks)


def build_scoring_prompt(original_text: str, candidates: list[SearchResult]) -> str:
    return f'''You are analyzing search results to find the sources of the text below. Compare MEANING and CONTEXT, not just literal matches: the text may be paraphrased or translated.

Original text:
"""
{original_text}
"""

Search results:
"""
{format_candidates(candidates)}
"""

For each search result, provide:
1. confidence: an integer from 0 to 100, how well the source matches the meaning of the original text
2. explanation: 1-2 sentences on why the source is or is not relevant

Consider semantic similarity, contextual relevance, factual alignment and source reliability (official sites, news and research are preferred).

Respond in JSON:
{{
  "results": [
    {{"index": 1, "confidence": 85, "explanation": "The source discusses the same event with matching facts."}}
  ]
}}'''


def parse_scoring_response(content: str, candidates: list[SearchResult]) -> list[ScoredResult]:
    """
    Map the provider's JSON answer onto the candidates (1-based indices).

    Raises:
        ValueError: If the answer is not a JSON object with a ``results`` list
    """
    data = json.loads(content)
    if not isinstance(data, dict) or not isinstance(data.get("results"), list):
        raise ValueError("Scoring response has no 'results' list")

    by_index: dict[int, dict[str, Any]] = {}
    for item in data["results"]:
        if not isinstance(item, dict):
            continue
        index = _as_int(item.get("index"))
        if index is not None and index not in by_index:
            by_index[index] = item

    scored: list[ScoredResult] = []
    for index, candidate in enumerate(candidates, start=1):
        item = by_index.get(index)
        if item is None:
            scored.append(ScoredResult.from_result(candidate, 0, MISSING_EXPLANATION))
            continue
        confidence = _as_int(item.get("confidence")) or 0
        explanation = item.get("explanation")
        if not isinstance(explanation, str) or not explanation.strip():
            explanation = MISSING_EXPLANATION
        scored.append(ScoredResult.from_result(candidate, confidence, explanation.strip()))

    return scored


def sort_by_confidence(results: list[ScoredResult]) -> list[ScoredResult]:
    # sorted() is stable, so equal confidences keep provider order
    return sorted(results, key=lambda result: result.confidence, reverse=True)


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (int, float)):
        try:
            return int(round(value))
        except (ValueError, OverflowError):
            return None
    return None


class RelevanceScorer:
    def __init__(
        self,
        client: BaseAIClient | None,
        timeout_s: float = 15.0,
        max_candidates: int = MAX_CANDIDATES,
        fallback_confidence: int = FALLBACK_CONFIDENCE,
    ):
        """
        Args:
            client: Scoring provider client; None means scoring is not configured
            timeout_s: Upper bound for the provider call
            max_candidates: How many leading candidates are scored
            fallback_confidence: Confidence assigned in degraded mode
        """
        self.client = client
        self.timeout_s = timeout_s
        self.max_candidates = max_candidates
        self.fallback_confidence = fallback_confidence

    def fallback(self, candidates: list[SearchResult], reason: str) -> RelevanceReport:
        """Degraded result: every candidate keeps provider order with the fallback confidence."""
        limited = candidates[: self.max_candidates]
        logger.warning(
            "Relevance scoring degraded to fallback confidence",
            extra={"extra_fields": {"reason": reason, "candidates": len(limited)}},
        )
        return RelevanceReport(
            results=[
                ScoredResult.from_result(c, self.fallback_confidence, FALLBACK_EXPLANATION)
                for c in limited
            ],
            degraded=True,
            reason=reason,
        )

    async def score(self, original_text: str, candidates: list[SearchResult]) -> RelevanceReport:
        limited = candidates[: self.max_candidates]
        if not limited:
            return RelevanceReport()

        if self.client is None:
            return self.fallback(limited, "scoring provider not configured")

        prompt = build_scoring_prompt(original_text, limited)
        try:
            content = await asyncio.wait_for(
                asyncio.to_thread(self.client.get_json_completion, SYSTEM_PROMPT, prompt),
                timeout=self.timeout_s,
            )
            scored = parse_scoring_response(content, limited)
        except asyncio.TimeoutError:
            return self.fallback(limited, f"scoring timed out after {self.timeout_s}s")
        except Exception as e:
            return self.fallback(limited, f"{type(e).__name__}: {e}")

        ranked = sort_by_confidence(scored)
        logger.info(
            "Relevance scoring complete",
            extra={
                "extra_fields": {
                    "candidates": len(ranked),
                    "top_confidence": ranked[0].confidence,
                    "zero_confidence": sum(1 for r in ranked if r.confidence <= 0),
                }
            },
        )
        return RelevanceReport(results=ranked, degraded=False)
