"""Bilibili video metadata lookups with a process-local cache."""
from typing import Any

import httpx
import structlog

from docsite.errors import ClientInputError, UnexpectedFailure, UpstreamFailure
from docsite.meta.cache import TTLCache
from docsite.meta.schemas import VideoMeta

logger = structlog.get_logger()

DEFAULT_CACHE_TTL = 60 * 60


def clamp_page(page: int | str | None) -> int:
    """Normalize a part index to an integer of at least 1.

    Args:
        page: Raw part index; missing or non-numeric values mean 1.

    Returns:
        Part index, 1-based.
    """
    if page is None or page == "":
        return 1
    try:
        value = int(page)
    except (TypeError, ValueError):
        return 1
    return max(1, value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def select_duration(data: dict[str, Any], page: int) -> int | float | None:
    """Pick the duration of one part, falling back to the whole video.

    Args:
        data: The ``data`` object of the upstream payload.
        page: 1-based part index.

    Returns:
        Duration in seconds, or None if the payload has none.
    """
    duration = data.get("duration")
    if not _is_number(duration):
        duration = None

    pages = data.get("pages")
    if isinstance(pages, list) and len(pages) >= page:
        part = pages[page - 1]
        if isinstance(part, dict) and _is_number(part.get("duration")):
            duration = part["duration"]

    return duration


def normalize_payload(payload: Any, page: int) -> VideoMeta:
    """Reduce an upstream view payload to cover image and duration."""
    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, dict):
        return VideoMeta()

    pic = data.get("pic")
    return VideoMeta(
        pic=pic if isinstance(pic, str) else None,
        duration=select_duration(data, page),
    )


class VideoMetaResolver:
    """Resolves video metadata through the upstream view API.

    Successful lookups are cached per (bvid, page) so repeated embeds of
    the same video do not reach the upstream within the cache window.

    Attributes:
        api_url: Upstream view endpoint.
        cache: Cache of resolved VideoMeta.
    """

    def __init__(
        self,
        api_url: str,
        user_agent: str,
        cache: TTLCache[VideoMeta] | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            api_url: Upstream view endpoint.
            user_agent: User-Agent header sent upstream.
            cache: Result cache, a one hour cache if None.
        """
        self.api_url = api_url
        self.user_agent = user_agent
        self.cache = cache if cache is not None else TTLCache(DEFAULT_CACHE_TTL)

    async def resolve(
        self,
        client: httpx.AsyncClient,
        bvid: str | None,
        page: int | str | None = 1,
    ) -> VideoMeta:
        """Look up cover image and duration for a video part.

        Args:
            client: Shared HTTP client.
            bvid: Video identifier.
            page: 1-based part index, clamped to at least 1.

        Returns:
            Normalized video metadata.

        Raises:
            ClientInputError: If bvid is missing.
            UpstreamFailure: If the upstream answers with a non-2xx status.
            UnexpectedFailure: On any other fetch or decode failure.
        """
        if not bvid or not bvid.strip():
            raise ClientInputError("missing bvid")

        bvid = bvid.strip()
        part = clamp_page(page)
        key = (bvid, part)

        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("video_meta_cache_hit", bvid=bvid, page=part)
            return cached

        try:
            response = await client.get(
                self.api_url,
                params={"bvid": bvid},
                headers={"user-agent": self.user_agent},
            )
        except httpx.HTTPError as e:
            logger.error("video_meta_fetch_error", bvid=bvid, error=str(e))
            raise UnexpectedFailure("unexpected_error", detail=str(e)) from e

        if not response.is_success:
            logger.warning(
                "video_meta_upstream_failed",
                bvid=bvid,
                status=response.status_code,
            )
            raise UpstreamFailure("upstream_failed")

        try:
            meta = normalize_payload(response.json(), part)
        except ValueError as e:
            logger.error("video_meta_decode_error", bvid=bvid, error=str(e))
            raise UnexpectedFailure("unexpected_error", detail=str(e)) from e

        self.cache.set(key, meta)
        return meta
