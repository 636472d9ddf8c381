"""Turn raw user input (text, caption, or a post link) into a search query."""

import re
from typing import Callable

from utils.logger import get_logger

logger = get_logger(__name__)

POST_LINK_PATTERN = re.compile(
    r"^(?:https?://)?(?:www\.)?t\.me/(?P<channel>[A-Za-z0-9_]+)/(?P<post_id>\d+)/?(?:\?\S*)?$",
    re.IGNORECASE,
)


class EmptyInputError(ValueError):
    """Raised when neither the text nor the caption holds anything to search for."""


def is_post_link(text: str) -> bool:
    return bool(POST_LINK_PATTERN.match(text.strip()))


def normalize(
    raw_text: str | None,
    fallback_caption: str | None = None,
    post_extractor: Callable[[str], str] | None = None,
) -> str:
    """
    Build a non-empty query from user input.

    The caption is used only when ``raw_text`` is absent or blank. For post links the
    extractor is tried; any failure (including an unsupported transport)
    keeps the link itself as the query.

    Raises:
        EmptyInputError: If there is no non-blank text
    """
    text = raw_text if raw_text and raw_text.strip() else fallback_caption
    query = (text or "").strip()
    if not query:
        raise EmptyInputError("No text found in input")

    if post_extractor is not None and is_post_link(query):
        try:
            extracted = (post_extractor(query) or "").strip()
        except Exception as e:
            logger.warning(f"Post text extraction failed, using link as query: {e}")
            return query
        if extracted:
            return extracted
        logger.warning("Post text extraction returned nothing, using link as query")

    return query
