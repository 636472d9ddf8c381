"""Shared utilities for FastAPI routes."""

from collections.abc import Mapping

from fastapi import status

from models.pipeline_outcome import OutcomeKind, PipelineOutcome

SENSITIVE_HEADERS = {"authorization", "x-telegram-bot-api-secret-token", "cookie"}

OUTCOME_STATUS_CODES = {
    OutcomeKind.SUCCESS: status.HTTP_200_OK,
    OutcomeKind.EMPTY_INPUT: status.HTTP_400_BAD_REQUEST,
    OutcomeKind.NO_SOURCES_FOUND: status.HTTP_404_NOT_FOUND,
    OutcomeKind.NO_RELEVANT_SOURCES_FOUND: status.HTTP_404_NOT_FOUND,
    OutcomeKind.SEARCH_PROVIDER_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    OutcomeKind.UNEXPECTED_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def outcome_status_code(outcome: PipelineOutcome) -> int:
    return OUTCOME_STATUS_CODES[outcome.kind]


def redact_sensitive_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """
    Redact auth-bearing headers before logging.
    """
    redacted: dict[str, str] = {}
    for key, value in headers.items():
        if key.lower() in SENSITIVE_HEADERS and value:
            redacted[key] = "[REDACTED]"
        else:
            redacted[key] = value
    return redacted
