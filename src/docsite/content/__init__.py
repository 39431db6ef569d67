"""Content module for the markdown document tree."""

from docsite.content.documents import get_content, get_metadata
from docsite.content.frontmatter import parse_frontmatter, split_frontmatter
from docsite.content.navigation import build_navigation, fallback_navigation, to_nav_model
from docsite.content.paths import (
    PathTraversalError,
    is_excluded,
    parse_entry_name,
    resolve_document_path,
)
from docsite.content.schemas import (
    ContentNode,
    DocumentContent,
    ErrorResponse,
    NavIcon,
    NavItem,
    NavSubItem,
    NavTree,
    PostMetadata,
    SearchResponse,
    SearchResult,
)
from docsite.content.search import search_documents
from docsite.content.walker import build_tree

__all__ = [
    "ContentNode",
    "DocumentContent",
    "ErrorResponse",
    "NavIcon",
    "NavItem",
    "NavSubItem",
    "NavTree",
    "PathTraversalError",
    "PostMetadata",
    "SearchResponse",
    "SearchResult",
    "build_navigation",
    "build_tree",
    "fallback_navigation",
    "get_content",
    "get_metadata",
    "is_excluded",
    "parse_entry_name",
    "parse_frontmatter",
    "resolve_document_path",
    "search_documents",
    "split_frontmatter",
    "to_nav_model",
]
