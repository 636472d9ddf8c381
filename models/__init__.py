"""
Models package for search results and pipeline outcomes.
"""

from .pipeline_outcome import OutcomeKind, PipelineOutcome
from .sources import ScoredResult, SearchResult

__all__ = ["OutcomeKind", "PipelineOutcome", "ScoredResult", "SearchResult"]
