"""Pydantic schemas for content API responses."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys for the site frontend."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NavIcon(str, Enum):
    """Symbolic icon names understood by the sidebar."""

    FOLDER_OPEN = "FolderOpen"
    FILE_TEXT = "FileText"
    BOOK_OPEN = "BookOpen"


class ContentNode(BaseModel):
    """Document tree node."""

    name: str = Field(description="Entry name on disk")
    title: str = Field(description="Display title without order prefix or extension")
    path: str = Field(description="Relative POSIX path from the content root")
    type: Literal["file", "folder"]
    order: int = Field(description="Numeric ordering prefix, 999 when absent")
    children: list["ContentNode"] | None = None


class NavSubItem(CamelModel):
    """Second-level navigation link."""

    title: str
    url: str


class NavItem(CamelModel):
    """Top-level navigation entry."""

    title: str
    url: str
    icon: NavIcon
    is_active: bool = False
    items: list[NavSubItem] | None = None


class NavTree(CamelModel):
    """Sidebar navigation response."""

    nav_main: list[NavItem]


class PostMetadata(BaseModel):
    """Frontmatter fields recognised on a document."""

    title: str | None = None
    summary: str | None = None
    date: str | None = Field(default=None, description="Date string as written")
    cover: str | None = None


class DocumentContent(BaseModel):
    """Raw document response."""

    content: str = Field(description="Raw markdown content, frontmatter included")


class SearchResult(CamelModel):
    """Single search hit.

    Attributes:
        title: Document title.
        path: Relative document path.
        url: Site URL that renders the document.
        type: Whether the title or the body matched.
        snippet: Highlighted body excerpt for content hits.
        match_count: Number of term occurrences.
        score: Relevance score, higher is better.
    """

    title: str
    path: str
    url: str
    type: Literal["title", "content"]
    snippet: str | None = None
    match_count: int
    score: int


class SearchResponse(CamelModel):
    """Search response envelope."""

    results: list[SearchResult]
    query: str | None = None
    search_terms: list[str] | None = None
    total: int | None = None


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    detail: str | None = None
