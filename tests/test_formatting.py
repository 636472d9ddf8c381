import pytest

from fakes import make_result
from models.pipeline_outcome import PipelineOutcome
from models.sources import ScoredResult
from tools.telegram.formatting import (
    confidence_indicator,
    format_outcome_message,
    format_results_message,
    outcome_error_message,
    truncate_snippet,
)

pytestmark = pytest.mark.unit


def _scored(i: int, confidence: int, snippet: str = "short snippet") -> ScoredResult:
    base = make_result(i)
    return ScoredResult(
        title=base.title,
        link=base.link,
        snippet=snippet,
        display_link=base.display_link,
        confidence=confidence,
        explanation=f"why {i}",
    )


def test_results_message_layout(catalog):
    text = format_results_message([_scored(1, 92), _scored(2, 65), _scored(3, 12)], catalog)
    lines = text.splitlines()

    assert lines[0] == catalog.results_header
    assert lines[2] == "1. Result 1"
    assert lines[3] == "https://example.com/article-1"
    assert lines[4] == f"🟢 {catalog.confidence_label}: 92%"
    assert lines[5] == "💡 why 1"
    assert lines[6] == "📄 short snippet"
    assert f"🟡 {catalog.confidence_label}: 65%" in lines
    assert f"🔴 {catalog.confidence_label}: 12%" in lines
    assert "3. Result 3" in lines


def test_long_snippets_are_truncated(catalog):
    text = format_results_message([_scored(1, 90, snippet="x" * 300)], catalog)

    assert "📄 " + "x" * 150 + "..." in text
    assert "x" * 151 not in text


def test_truncate_snippet_boundary():
    assert truncate_snippet("a" * 150) == "a" * 150
    assert truncate_snippet("a" * 151) == "a" * 150 + "..."


@pytest.mark.parametrize("confidence,expected", [(80, "🟢"), (60, "🟡"), (59, "🔴")])
def test_confidence_indicator(confidence, expected):
    assert confidence_indicator(confidence) == expected


def test_error_messages_never_leak_detail(catalog):
    outcome = PipelineOutcome.search_provider_error("[quota] HTTP 429: secret internals", "quota")
    message = outcome_error_message(outcome, catalog)

    assert message == catalog.search_errors["quota"]
    assert "secret" not in message


@pytest.mark.parametrize(
    "outcome,key",
    [
        (PipelineOutcome.empty_input(), "empty_input"),
        (PipelineOutcome.no_sources_found(), "no_sources"),
        (PipelineOutcome.no_relevant_sources_found(), "no_relevant_sources"),
        (PipelineOutcome.unexpected_error("KeyError: 'x'"), "unexpected"),
    ],
)
def test_outcome_error_messages(catalog, outcome, key):
    assert format_outcome_message(outcome, catalog) == catalog.errors[key]


def test_unknown_search_category_uses_generic_message(catalog):
    outcome = PipelineOutcome.search_provider_error("x", "martian")
    assert outcome_error_message(outcome, catalog) == catalog.search_errors["unknown"]


def test_success_outcome_renders_results(catalog):
    outcome = PipelineOutcome.success([_scored(1, 90)])
    assert format_outcome_message(outcome, catalog).startswith(catalog.results_header)


def test_degraded_results_carry_notice_after_header(catalog):
    outcome = PipelineOutcome.success([_scored(1, 50)], degraded=True)
    lines = format_outcome_message(outcome, catalog).splitlines()

    assert lines[0] == catalog.results_header
    assert lines[2] == catalog.degraded_notice
    assert lines[4] == "1. Result 1"


def test_scored_results_have_no_degraded_notice(catalog):
    outcome = PipelineOutcome.success([_scored(1, 90)])
    assert catalog.degraded_notice not in format_outcome_message(outcome, catalog)
