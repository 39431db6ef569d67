"""External metadata endpoints for link previews and video embeds."""

from fastapi import APIRouter, Query, Request, Response

from docsite.content.schemas import ErrorResponse
from docsite.meta.schemas import ExternalMeta, VideoMeta
from docsite.meta.site import resolve_site_meta
from docsite.meta.video import VideoMetaResolver

router = APIRouter(tags=["meta"])


@router.get(
    "/site-meta",
    response_model=ExternalMeta,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}},
    summary="Get link preview metadata",
    description="Fetches a page and extracts its title, description and icon.",
)
async def site_meta(
    request: Request,
    url: str | None = Query(default=None, description="Absolute page URL"),
) -> ExternalMeta:
    """Get head metadata for an external page.

    Args:
        request: FastAPI request (provides access to the HTTP client).
        url: Page to summarise.

    Returns:
        Best-effort page metadata.

    Raises:
        InvalidURLError: 400 if url is missing or unparseable.
    """
    return await resolve_site_meta(request.app.state.http_client, url)


@router.get(
    "/video-meta/bilibili",
    response_model=VideoMeta,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
    summary="Get video metadata",
    description="Returns cover image and duration of a Bilibili video part.",
)
async def bilibili_video_meta(
    request: Request,
    response: Response,
    bvid: str | None = Query(default=None, description="Bilibili video id"),
    page: str | None = Query(default=None, description="1-based part index"),
) -> VideoMeta:
    """Get cover image and duration for a video part.

    Args:
        request: FastAPI request (provides access to app state).
        response: Outgoing response, used to set cache headers.
        bvid: Video identifier.
        page: Part index, defaults to 1.

    Returns:
        Video metadata.

    Raises:
        ClientInputError: 400 if bvid is missing.
        UpstreamFailure: 502 if the upstream rejects the lookup.
        UnexpectedFailure: 500 on any other failure.
    """
    resolver: VideoMetaResolver = request.app.state.video_resolver
    meta = await resolver.resolve(request.app.state.http_client, bvid, page)
    response.headers["Cache-Control"] = f"public, max-age={int(resolver.cache.ttl)}"
    return meta
