"""Pydantic response models (DTOs) for FastAPI endpoints."""

from pydantic import BaseModel, Field


class ScoredResultDTO(BaseModel):
    title: str
    link: str
    snippet: str
    displayLink: str
    confidence: int
    explanation: str

    @classmethod
    def from_scored_result(cls, result):
        return cls(**result.to_dict())


class SearchResponseDTO(BaseModel):
    success: bool
    results: list[ScoredResultDTO] | None = None
    error: str | None = None
    degraded: bool = False

    @classmethod
    def from_outcome(cls, outcome, error_message: str | None = None):
        """Convert a PipelineOutcome to the web-form response body."""
        if outcome.is_success:
            return cls(
                success=True,
                results=[ScoredResultDTO.from_scored_result(r) for r in outcome.results],
                degraded=outcome.degraded,
            )
        return cls(success=False, error=error_message, degraded=outcome.degraded)


class WebhookAckDTO(BaseModel):
    ok: bool
    message: str | None = None
    error: str | None = None


class WebhookStatusDTO(BaseModel):
    status: str
    message: str
    timestamp: str


class HealthResponseDTO(BaseModel):
    status: str
    timestamp: str
    version: str = "1.0.0"
    missing_config: list[str] = Field(default_factory=list)
