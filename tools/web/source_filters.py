import re

from models.sources import SearchResult

SOURCE_TYPE_PATTERNS: dict[str, list[re.Pattern]] = {
    "official": [
        re.compile(r"\.gov\.", re.I),
        re.compile(r"\.org", re.I),
        re.compile(r"official", re.I),
    ],
    "news": [
        re.compile(r"\.news", re.I),
        re.compile(r"rbc\.ru", re.I),
        re.compile(r"ria\.ru", re.I),
        re.compile(r"tass\.ru", re.I),
        re.compile(r"interfax\.ru", re.I),
        re.compile(r"lenta\.ru", re.I),
        re.compile(r"vedomosti\.ru", re.I),
    ],
    "blogs": [
        re.compile(r"medium\.com", re.I),
        re.compile(r"habr\.com", re.I),
        re.compile(r"blog", re.I),
    ],
    "research": [
        re.compile(r"\.edu", re.I),
        re.compile(r"academic", re.I),
        re.compile(r"research", re.I),
        re.compile(r"scholar", re.I),
        re.compile(r"arxiv\.org", re.I),
    ],
}


def filter_by_source_type(results: list[SearchResult], source_type: str | None) -> list[SearchResult]:
    """Keep results whose link or display link matches the source type. Unknown types pass through."""
    patterns = SOURCE_TYPE_PATTERNS.get((source_type or "").lower(), [])
    if not patterns:
        return list(results)

    return [
        result
        for result in results
        if any(p.search(result.link) or p.search(result.display_link) for p in patterns)
    ]
