"""Data contracts for the web search module."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from models.sources import SearchResult

# Search APIs cap a single call at 10 items
MAX_PAGE_SIZE = 10


class SearchErrorCategory(str, Enum):
    CONFIGURATION = "configuration"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    QUOTA = "quota"
    BAD_REQUEST = "bad_request"
    TRANSIENT = "transient"
    UNKNOWN = "unknown"


class SearchProviderError(Exception):
    """A categorized failure of the search provider."""

    def __init__(
        self,
        category: SearchErrorCategory,
        message: str,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.category = category
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"[{self.category.value}] HTTP {self.status_code}: {self.message}"
        return f"[{self.category.value}] {self.message}"


@dataclass(frozen=True)
class SearchPage:
    """One page of provider results.

    Attributes:
        items: Results on this page, in provider order
        has_next: False when the provider reports there is nothing after this page
    """

    items: list[SearchResult] = field(default_factory=list)
    has_next: bool = True


class SearchPageProvider(Protocol):
    """A search backend able to return one page of results at a 1-based offset."""

    provider_name: str

    def fetch_page(self, query: str, start: int, num: int) -> SearchPage:
        ...


def classify_http_status(status_code: int, reason: str = "") -> SearchErrorCategory:
    """Map a provider HTTP status (and its error reason text) to an error category."""
    reason_lower = reason.lower()
    if status_code == 400:
        return SearchErrorCategory.BAD_REQUEST
    if status_code == 401:
        return SearchErrorCategory.AUTHENTICATION
    if status_code == 403:
        if "quota" in reason_lower or "rate" in reason_lower or "limit" in reason_lower:
            return SearchErrorCategory.QUOTA
        return SearchErrorCategory.AUTHORIZATION
    if status_code == 429:
        return SearchErrorCategory.QUOTA
    if status_code >= 500 or status_code == 408:
        return SearchErrorCategory.TRANSIENT
    return SearchErrorCategory.UNKNOWN
