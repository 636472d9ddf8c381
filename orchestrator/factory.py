"""Wire a SourcePipeline from configuration."""

from typing import Callable

from api.base_client import BaseAIClient
from config.config import Config, ScoringProviderType
from orchestrator.core import SourcePipeline
from orchestrator.relevance_scorer import RelevanceScorer
from tools.web.factory import create_search_service
from utils.logger import get_logger

logger = get_logger(__name__)


def create_scoring_client(config: Config) -> BaseAIClient | None:
    """
    Initialize the scoring client for the configured provider.

    Returns None (scoring degrades to the fallback confidence) when the
    provider is unknown or its key is missing.
    """
    provider = config.SCORING_PROVIDER

    try:
        if provider == ScoringProviderType.OPENAI.value:
            from api.openai_client import OpenAIClient

            return OpenAIClient(
                api_key=config.OPENAI_API_KEY,
                model_name=config.SCORING_MODEL,
                timeout_s=config.PROVIDER_TIMEOUT_S,
            )
        if provider == ScoringProviderType.GEMINI.value:
            from api.google_gemini_client import GeminiClient

            return GeminiClient(
                api_key=config.GOOGLE_GEMINI_API_KEY,
                model_name=config.SCORING_MODEL,
                timeout_s=config.PROVIDER_TIMEOUT_S,
            )
    except ValueError as e:
        logger.warning(f"Scoring client unavailable, results will not be scored: {e}")
        return None

    logger.warning(f"Unsupported SCORING_PROVIDER '{provider}', results will not be scored")
    return None


def create_pipeline(config: Config, post_extractor: Callable[[str], str] | None = None) -> SourcePipeline:
    scorer = RelevanceScorer(create_scoring_client(config), timeout_s=config.PROVIDER_TIMEOUT_S)
    return SourcePipeline(
        search_service=create_search_service(config),
        scorer=scorer,
        result_count=config.SEARCH_RESULT_COUNT,
        top_n=config.TOP_N,
        search_timeout_s=config.PROVIDER_TIMEOUT_S,
        notify_timeout_s=config.PROVIDER_TIMEOUT_S,
        post_extractor=post_extractor,
    )
