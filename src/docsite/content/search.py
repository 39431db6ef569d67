"""Keyword search over the document tree."""
import re
from pathlib import Path

import structlog

from docsite.content.documents import get_content
from docsite.content.frontmatter import split_frontmatter
from docsite.content.navigation import document_url
from docsite.content.schemas import SearchResponse, SearchResult
from docsite.content.walker import build_tree, iter_documents
from docsite.errors import DocsiteError

logger = structlog.get_logger()

MAX_RESULTS = 20
SNIPPET_LENGTH = 200
TITLE_WEIGHT = 10
WHOLE_WORD_BONUS = 5

TERM_SPLIT_PATTERN = re.compile(r"[\s+\-_/\\]+")
MARKDOWN_SYMBOLS = re.compile(r"[#*`_~\[\]()]")
WHITESPACE = re.compile(r"\s+")


def split_terms(query: str) -> list[str]:
    """Lower-case a query and split it into search terms."""
    return [term for term in TERM_SPLIT_PATTERN.split(query.lower()) if term]


def normalize_text(text: str) -> str:
    """Strip markdown punctuation and collapse whitespace."""
    return WHITESPACE.sub(" ", MARKDOWN_SYMBOLS.sub(" ", text)).strip()


def score_text(text: str, terms: list[str], is_title: bool = False) -> tuple[int, int]:
    """Score how well a text matches the search terms.

    Each occurrence counts once, ten times for titles, plus a bonus per
    occurrence when the term also appears as a standalone word.

    Args:
        text: Text to score.
        terms: Lower-cased search terms.
        is_title: Apply the title weight.

    Returns:
        Tuple of (score, match count).
    """
    normalized = normalize_text(text).lower()
    score = 0
    match_count = 0

    for term in terms:
        hits = normalized.count(term)
        if not hits:
            continue

        match_count += hits
        score += hits * (TITLE_WEIGHT if is_title else 1)

        if (
            f" {term} " in normalized
            or normalized.startswith(f"{term} ")
            or normalized.endswith(f" {term}")
            or normalized == term
        ):
            score += hits * WHOLE_WORD_BONUS

    return score, match_count


def build_snippet(content: str, terms: list[str], max_length: int = SNIPPET_LENGTH) -> str:
    """Pick the best-matching line with its neighbours and highlight terms.

    Args:
        content: Document body.
        terms: Lower-cased search terms.
        max_length: Truncation length before the ellipsis.

    Returns:
        Snippet with matches wrapped in ``**``.
    """
    lines = content.split("\n")
    best_snippet = ""
    best_score = 0

    for i, line in enumerate(lines):
        if not line.strip():
            continue

        line_score, _ = score_text(line, terms)
        if line_score > best_score:
            best_score = line_score
            context = lines[max(0, i - 1) : i + 2]
            best_snippet = " ".join(part.strip() for part in context if part.strip())

    if terms and best_snippet:
        alternation = "|".join(re.escape(term) for term in sorted(terms, key=len, reverse=True))
        best_snippet = re.sub(
            f"({alternation})", r"**\1**", best_snippet, flags=re.IGNORECASE
        )

    if len(best_snippet) > max_length:
        return best_snippet[:max_length] + "..."
    return best_snippet


def rank_results(results: list[SearchResult]) -> list[SearchResult]:
    """Order hits and keep the best content hit per document.

    Title hits come first, then by score descending.
    """
    ordered = sorted(results, key=lambda r: (r.type != "title", -r.score))

    ranked: list[SearchResult] = []
    content_index: dict[str, int] = {}
    for result in ordered:
        if result.type == "content":
            existing = content_index.get(result.path)
            if existing is not None:
                if result.score > ranked[existing].score:
                    ranked[existing] = result
                continue
            content_index[result.path] = len(ranked)
        ranked.append(result)

    return ranked[:MAX_RESULTS]


def search_documents(
    root: Path,
    query: str | None,
    docs_base_url: str = "/docs",
) -> SearchResponse:
    """Search document titles and bodies under the content root.

    Args:
        root: The content root directory.
        query: Raw query string.
        docs_base_url: Route of the document viewer.

    Returns:
        Ranked search response; empty results for a blank query.
    """
    if not query or not query.strip():
        return SearchResponse(results=[])

    search_query = query.strip()
    terms = split_terms(search_query)
    if not terms:
        return SearchResponse(results=[])

    hits: list[SearchResult] = []

    for node in iter_documents(build_tree(root)):
        url = document_url(node.path, docs_base_url)

        title_score, title_matches = score_text(node.title, terms, is_title=True)
        if title_score > 0:
            hits.append(
                SearchResult(
                    title=node.title,
                    path=node.path,
                    url=url,
                    type="title",
                    match_count=title_matches,
                    score=title_score,
                )
            )

        try:
            content = get_content(root, node.path)
        except DocsiteError as e:
            logger.warning("search_document_unreadable", path=node.path, error=str(e))
            continue

        _, body = split_frontmatter(content)
        body_score, body_matches = score_text(body, terms)
        if body_score > 0:
            hits.append(
                SearchResult(
                    title=node.title,
                    path=node.path,
                    url=url,
                    type="content",
                    snippet=build_snippet(body, terms),
                    match_count=body_matches,
                    score=body_score,
                )
            )

    results = rank_results(hits)
    logger.debug("search_completed", query=search_query, total=len(results))

    return SearchResponse(
        results=results,
        query=search_query,
        search_terms=terms,
        total=len(results),
    )
