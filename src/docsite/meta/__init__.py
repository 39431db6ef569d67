"""External resource metadata: link previews and video embeds."""

from docsite.meta.cache import TTLCache
from docsite.meta.schemas import ExternalMeta, VideoMeta
from docsite.meta.site import resolve_site_meta
from docsite.meta.video import VideoMetaResolver

__all__ = [
    "ExternalMeta",
    "TTLCache",
    "VideoMeta",
    "VideoMetaResolver",
    "resolve_site_meta",
]
