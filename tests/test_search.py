"""Document search tests."""

from pathlib import Path

from fastapi.testclient import TestClient

from docsite.content.schemas import SearchResult
from docsite.content.search import (
    build_snippet,
    rank_results,
    score_text,
    search_documents,
    split_terms,
)


def test_split_terms() -> None:
    """Queries split on whitespace and path-like separators."""
    assert split_terms("Fast-API  docs/setup_guide") == ["fast", "api", "docs", "setup", "guide"]


def test_score_title_weighting() -> None:
    """Title matches weigh ten times a body match."""
    assert score_text("deploying", ["deploy"]) == (1, 1)
    assert score_text("deploying", ["deploy"], is_title=True) == (10, 1)


def test_score_whole_word_bonus() -> None:
    """Standalone words earn a bonus per occurrence."""
    assert score_text("how to deploy apps", ["deploy"]) == (6, 1)


def test_score_is_literal() -> None:
    """Regex metacharacters in terms are matched literally."""
    assert score_text("use c++ today", ["c.."]) == (0, 0)


def test_snippet_highlights_best_line() -> None:
    """The best line is chosen with its neighbours and terms are bolded."""
    body = "intro\n\nnothing here\nwe install things\nthe end"
    assert build_snippet(body, ["install"]) == (
        "nothing here we **install** things the end"
    )


def test_snippet_truncates() -> None:
    """Long snippets are cut and marked with an ellipsis."""
    snippet = build_snippet("match " + "x" * 300, ["match"], max_length=20)
    assert snippet.endswith("...")
    assert len(snippet) == 23


def test_rank_results_dedupes_content_hits() -> None:
    """Titles come first and only the best content hit per path survives."""

    def hit(path: str, kind: str, score: int) -> SearchResult:
        return SearchResult(
            title=path, path=path, url="#", type=kind, match_count=1, score=score
        )

    ranked = rank_results(
        [hit("a", "content", 2), hit("a", "content", 9), hit("b", "title", 1)]
    )
    assert [(r.path, r.type, r.score) for r in ranked] == [
        ("b", "title", 1),
        ("a", "content", 9),
    ]


def test_search_documents(content_root: Path) -> None:
    """Title hits precede content hits for the same document."""
    response = search_documents(content_root, "install")
    assert response.total == 2
    assert response.search_terms == ["install"]
    title_hit, content_hit = response.results
    assert title_hit.type == "title"
    assert title_hit.path == "01-Guides/01-Install.md"
    assert title_hit.score == 15
    assert content_hit.type == "content"
    assert content_hit.snippet == "Run pip **install** docsite to **install** the server."
    assert content_hit.url == "/docs?path=01-Guides%2F01-Install.md"


def test_search_ignores_frontmatter(content_root: Path) -> None:
    """Frontmatter values are not searched as body text."""
    assert search_documents(content_root, "cdn.example.com").results == []


def test_search_blank_query(content_root: Path) -> None:
    """Blank queries return no results."""
    response = search_documents(content_root, "   ")
    assert response.results == []
    assert response.query is None


def test_search_endpoint(client: TestClient) -> None:
    """The endpoint serialises camelCase keys."""
    response = client.get("/api/v1/search", params={"q": "welcome"})
    assert response.status_code == 200
    data = response.json()
    assert data["searchTerms"] == ["welcome"]
    assert data["total"] == 1
    assert data["results"][0]["path"] == "02-Intro.md"
    assert data["results"][0]["matchCount"] == 1


def test_search_endpoint_without_query(client: TestClient) -> None:
    """A missing query is not an error."""
    response = client.get("/api/v1/search")
    assert response.status_code == 200
    assert response.json() == {"results": []}


def test_search_endpoint_long_query(client: TestClient) -> None:
    """Long queries are searched, not rejected."""
    query = "a" * 201
    response = client.get("/api/v1/search", params={"q": query})
    assert response.status_code == 200
    data = response.json()
    assert data["query"] == query
    assert data["results"] == []
    assert data["total"] == 0
