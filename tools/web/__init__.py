"""Web search tools for FindOrigin."""

from .contracts import SearchErrorCategory, SearchPage, SearchProviderError
from .factory import create_search_service
from .search_service import SourceSearchService

__all__ = [
    "SearchErrorCategory",
    "SearchPage",
    "SearchProviderError",
    "SourceSearchService",
    "create_search_service",
]
