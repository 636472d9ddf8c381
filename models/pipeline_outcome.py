"""
PipelineOutcome - the single terminal result of one source-finding request.

Exactly one variant is produced per request. Front-ends (chat bot, web form,
console) render it; they never inspect intermediate pipeline state.
"""

from dataclasses import dataclass, field
from enum import Enum

from models.sources import ScoredResult


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    EMPTY_INPUT = "empty_input"
    NO_SOURCES_FOUND = "no_sources_found"
    NO_RELEVANT_SOURCES_FOUND = "no_relevant_sources_found"
    SEARCH_PROVIDER_ERROR = "search_provider_error"
    UNEXPECTED_ERROR = "unexpected_error"


@dataclass(frozen=True)
class PipelineOutcome:
    """
    Tagged union of the six terminal states.

    Attributes:
        kind: Which terminal state was reached
        results: Ranked results (non-empty only for SUCCESS)
        detail: Internal diagnostic text for error variants (never shown to users)
        error_category: Search error category for SEARCH_PROVIDER_ERROR
        degraded: True when results carry the fallback confidence instead of a real score
    """

    kind: OutcomeKind
    results: tuple[ScoredResult, ...] = field(default_factory=tuple)
    detail: str | None = None
    error_category: str | None = None
    degraded: bool = False

    def __post_init__(self):
        if self.kind == OutcomeKind.SUCCESS and not self.results:
            raise ValueError("A successful outcome needs at least one result")
        if self.kind != OutcomeKind.SUCCESS and self.results:
            raise ValueError(f"{self.kind.value} outcome cannot carry results")

    @classmethod
    def success(cls, results: list[ScoredResult], degraded: bool = False) -> "PipelineOutcome":
        return cls(kind=OutcomeKind.SUCCESS, results=tuple(results), degraded=degraded)

    @classmethod
    def empty_input(cls) -> "PipelineOutcome":
        return cls(kind=OutcomeKind.EMPTY_INPUT)

    @classmethod
    def no_sources_found(cls) -> "PipelineOutcome":
        return cls(kind=OutcomeKind.NO_SOURCES_FOUND)

    @classmethod
    def no_relevant_sources_found(cls, degraded: bool = False) -> "PipelineOutcome":
        return cls(kind=OutcomeKind.NO_RELEVANT_SOURCES_FOUND, degraded=degraded)

    @classmethod
    def search_provider_error(cls, detail: str, category: str) -> "PipelineOutcome":
        return cls(kind=OutcomeKind.SEARCH_PROVIDER_ERROR, detail=detail, error_category=category)

    @classmethod
    def unexpected_error(cls, detail: str) -> "PipelineOutcome":
        return cls(kind=OutcomeKind.UNEXPECTED_ERROR, detail=detail)

    @property
    def is_success(self) -> bool:
        return self.kind == OutcomeKind.SUCCESS

    @property
    def is_error(self) -> bool:
        return self.kind in {OutcomeKind.SEARCH_PROVIDER_ERROR, OutcomeKind.UNEXPECTED_ERROR}
