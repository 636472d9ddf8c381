from enum import Enum

from models.sources import ScoredResult

HIGH_CONFIDENCE = 80
MEDIUM_CONFIDENCE = 60


class ConfidenceTier(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


def confidence_tier(confidence: int) -> ConfidenceTier:
    if confidence >= HIGH_CONFIDENCE:
        return ConfidenceTier.HIGH
    if confidence >= MEDIUM_CONFIDENCE:
        return ConfidenceTier.MEDIUM
    return ConfidenceTier.LOW


def select_top(scored: list[ScoredResult], n: int = 3) -> list[ScoredResult]:
    """
    Top ``n`` entries by confidence, minus zero-confidence ones.

    The sort is stable, so ties keep provider order. An empty return value
    means nothing relevant was found.
    """
    if n <= 0:
        return []
    ranked = sorted(scored, key=lambda result: result.confidence, reverse=True)
    return [result for result in ranked[:n] if result.confidence > 0]
