"""Content REST API endpoints."""
from urllib.parse import unquote

import structlog
from fastapi import APIRouter, Query, Request, status
from fastapi.responses import JSONResponse

from docsite.config import Settings
from docsite.content.documents import get_content, get_metadata
from docsite.content.navigation import build_navigation
from docsite.content.schemas import (
    DocumentContent,
    ErrorResponse,
    NavTree,
    PostMetadata,
    SearchResponse,
)
from docsite.content.search import search_documents
from docsite.errors import ClientInputError

logger = structlog.get_logger()

router = APIRouter(tags=["content"])


@router.get(
    "/content-tree",
    response_model=NavTree,
    summary="Get sidebar navigation",
    description="Returns two-level navigation built from the content tree.",
)
async def content_tree(request: Request) -> NavTree:
    """Get sidebar navigation for the content root.

    Always succeeds; falls back to a fixed navigation model.

    Args:
        request: FastAPI request (provides access to settings).

    Returns:
        Navigation tree with ``navMain`` entries.
    """
    settings: Settings = request.app.state.settings
    return build_navigation(settings.content_root, settings.docs_base_url)


@router.get(
    "/content",
    response_model=DocumentContent,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Get document content",
    description="Returns the raw markdown of a document.",
)
async def document_content(
    request: Request,
    path: str | None = Query(default=None, description="Relative document path"),
) -> DocumentContent:
    """Get the raw text of a document.

    Args:
        request: FastAPI request (provides access to settings).
        path: Relative document path.

    Returns:
        Document content.

    Raises:
        ClientInputError: 400 if path is missing or invalid.
        NotFoundError: 404 if the document does not exist.
        DocumentReadError: 500 if the document cannot be read.
    """
    if not path:
        raise ClientInputError("File path is required")

    settings: Settings = request.app.state.settings
    return DocumentContent(content=get_content(settings.content_root, path))


@router.get(
    "/metadata",
    response_model=PostMetadata,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Get document metadata",
    description="Returns the frontmatter fields of a document.",
)
async def document_metadata(
    request: Request,
    path: str | None = Query(default=None, description="URL-encoded document path"),
) -> PostMetadata:
    """Get the frontmatter metadata of a document.

    Args:
        request: FastAPI request (provides access to settings).
        path: URL-encoded relative document path.

    Returns:
        Metadata fields present in the document.

    Raises:
        ClientInputError: 400 if path is missing or invalid.
        NotFoundError: 404 if the document does not exist.
        DocumentReadError: 500 if the document cannot be read.
    """
    if not path:
        raise ClientInputError("Path parameter is required")

    settings: Settings = request.app.state.settings
    return get_metadata(settings.content_root, unquote(path))


@router.get(
    "/search",
    response_model=SearchResponse,
    response_model_exclude_none=True,
    summary="Search documents",
    description="Keyword search across document titles and bodies.",
)
async def search(
    request: Request,
    q: str | None = Query(default=None, description="Search query"),
) -> SearchResponse | JSONResponse:
    """Search document titles and bodies.

    Args:
        request: FastAPI request (provides access to settings).
        q: Search query string.

    Returns:
        Ranked results, or a 500 body with empty results on failure.
    """
    settings: Settings = request.app.state.settings
    try:
        return search_documents(settings.content_root, q, settings.docs_base_url)
    except Exception as e:
        logger.error("search_failed", query=q, error=str(e))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Search failed", "results": []},
        )
