from config.messages import MessageCatalog
from models.pipeline_outcome import OutcomeKind, PipelineOutcome
from models.sources import ScoredResult
from orchestrator.ranking import ConfidenceTier, confidence_tier

SNIPPET_LIMIT = 150

CONFIDENCE_INDICATORS = {
    ConfidenceTier.HIGH: "🟢",
    ConfidenceTier.MEDIUM: "🟡",
    ConfidenceTier.LOW: "🔴",
}


def confidence_indicator(confidence: int) -> str:
    return CONFIDENCE_INDICATORS[confidence_tier(confidence)]


def truncate_snippet(snippet: str, limit: int = SNIPPET_LIMIT) -> str:
    if len(snippet) <= limit:
        return snippet
    return snippet[:limit] + "..."


def format_results_message(
    results: list[ScoredResult], catalog: MessageCatalog, degraded: bool = False
) -> str:
    lines = [catalog.results_header, ""]
    if degraded:
        lines.extend([catalog.degraded_notice, ""])

    for rank, result in enumerate(results, start=1):
        lines.append(f"{rank}. {result.title}")
        lines.append(result.link)
        lines.append(
            f"{confidence_indicator(result.confidence)} {catalog.confidence_label}: {result.confidence}%"
        )
        if result.explanation:
            lines.append(f"💡 {result.explanation}")
        if result.snippet:
            lines.append(f"📄 {truncate_snippet(result.snippet)}")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


def outcome_error_message(outcome: PipelineOutcome, catalog: MessageCatalog) -> str:
    """User-facing text for every non-success outcome. Internal detail is never included."""
    if outcome.kind == OutcomeKind.EMPTY_INPUT:
        return catalog.errors["empty_input"]
    if outcome.kind == OutcomeKind.NO_SOURCES_FOUND:
        return catalog.errors["no_sources"]
    if outcome.kind == OutcomeKind.NO_RELEVANT_SOURCES_FOUND:
        return catalog.errors["no_relevant_sources"]
    if outcome.kind == OutcomeKind.SEARCH_PROVIDER_ERROR:
        return catalog.search_error(outcome.error_category or "unknown")
    return catalog.errors["unexpected"]


def format_outcome_message(outcome: PipelineOutcome, catalog: MessageCatalog) -> str:
    if outcome.is_success:
        return format_results_message(list(outcome.results), catalog, degraded=outcome.degraded)
    return outcome_error_message(outcome, catalog)
