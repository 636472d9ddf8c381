"""Factory for creating the source search service from configuration."""

import math

from config.config import Config, SearchProviderType
from utils.logger import get_logger

from .contracts import MAX_PAGE_SIZE
from .google_search_client import GoogleSearchClient
from .search_service import SourceSearchService
from .tavily_client import TavilySearchClient

logger = get_logger(__name__)


def create_search_service(config: Config) -> SourceSearchService:
    """
    Create a SourceSearchService for the configured provider.

    Missing credentials do not raise here: the first page request reports them
    as a ``configuration`` SearchProviderError, so the server can still start.
    """
    if config.SEARCH_PROVIDER == SearchProviderType.TAVILY.value:
        provider = TavilySearchClient(api_key=config.TAVILY_API_KEY)
    else:
        if config.SEARCH_PROVIDER != SearchProviderType.GOOGLE.value:
            logger.warning(f"Unknown SEARCH_PROVIDER '{config.SEARCH_PROVIDER}', using google")
        provider = GoogleSearchClient(
            api_key=config.GOOGLE_SEARCH_API_KEY,
            engine_id=config.GOOGLE_SEARCH_ENGINE_ID,
            timeout_s=config.PROVIDER_TIMEOUT_S,
        )

    logger.info(f"Using {provider.provider_name} for web search")
    pages = max(1, math.ceil(config.SEARCH_RESULT_COUNT / MAX_PAGE_SIZE))
    return SourceSearchService(provider, query_timeout_s=config.PROVIDER_TIMEOUT_S * pages)
