from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SearchResult:
    """A single web page returned by the search provider. Unique by ``link``."""

    title: str
    link: str
    snippet: str
    display_link: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "link": self.link,
            "snippet": self.snippet,
            "displayLink": self.display_link,
        }


@dataclass(frozen=True)
class ScoredResult(SearchResult):
    """A search result with a relevance confidence (0-100) and a short explanation."""

    confidence: int
    explanation: str

    def __post_init__(self):
        # Providers occasionally answer with floats or out-of-range values
        try:
            value = int(round(float(self.confidence)))
        except (TypeError, ValueError, OverflowError):
            value = 0
        object.__setattr__(self, "confidence", max(0, min(100, value)))
        object.__setattr__(self, "explanation", str(self.explanation or ""))

    @classmethod
    def from_result(cls, result: SearchResult, confidence: int, explanation: str) -> "ScoredResult":
        return cls(
            title=result.title,
            link=result.link,
            snippet=result.snippet,
            display_link=result.display_link,
            confidence=confidence,
            explanation=explanation,
        )

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["confidence"] = self.confidence
        data["explanation"] = self.explanation
        return data
