"""Case-insensitive substring search over the wiki's markdown files"""

import logging
from pathlib import PurePosixPath

from stratawiki.core.frontmatter import split_lines
from stratawiki.core.models import SearchResult
from stratawiki.errors import WikiError
from stratawiki.services.files import FileService


PHRASE_SCORE = 10.0
WORD_SCORE = 2.0
FIRST_LINE_SCORE = 5.0


def relevance(content: str, query: str) -> float:
    """Phrase hit, per-word hits, and a bonus when the first line contains the phrase."""
    content_lower = content.lower()
    query_lower = query.lower()
    score = 0.0
    if query_lower in content_lower:
        score += PHRASE_SCORE
    score += WORD_SCORE * sum(1 for word in query_lower.split() if word in content_lower)
    first_line = split_lines(content)[0] if content else ''
    if query_lower in first_line.lower():
        score += FIRST_LINE_SCORE
    return score


def excerpt(content: str, query: str, radius: int = 50) -> str:
    """Text around the first hit, with '...' where it was cut; first line if no hit."""
    pos = content.lower().find(query.lower())
    if pos == -1:
        return split_lines(content)[0] if content else ''
    start = max(pos - radius, 0)
    end = min(pos + len(query) + radius, len(content))
    snippet = content[start:end]
    prefix = '...' if start > 0 else ''
    suffix = '...' if end < len(content) else ''
    return f"{prefix}{snippet}{suffix}"


class SearchService:
    def __init__(self, files: FileService, excerpt_radius: int = 50, logger: logging.Logger = None) -> None:
        self.files = files
        self.excerpt_radius = excerpt_radius
        self.log = logger or logging.getLogger(__name__)

    def search(self, query: str) -> list[SearchResult]:
        """Every markdown file containing query, best match first. Blank query: no results."""
        query = query.strip()
        if not query:
            return []

        needle = query.lower()
        results: list[SearchResult] = []
        for rel in self.files.iter_markdown():
            try:
                content = self.files.read_file(rel)
            except WikiError as e:
                self.log.warning("Skipping unreadable file %s: %s", rel, e)
                continue
            if needle not in content.lower():
                continue
            results.append(SearchResult(
                title=PurePosixPath(rel).stem,
                path=rel,
                excerpt=excerpt(content, query, self.excerpt_radius),
                relevance=relevance(content, query),
            ))

        results.sort(key=lambda r: (-r.relevance, r.path))
        self.log.debug("Search for %r matched %d file(s)", query, len(results))
        return results
