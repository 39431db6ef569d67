"""Head metadata extraction for link previews.

Pages are matched with tolerant regular expressions rather than parsed:
only a handful of head fields are needed. Each extractor looks for one
source of a field, and per-field chains try extractors in priority order
until one yields a non-empty value.
"""
import html as html_lib
import re
from collections.abc import Callable, Sequence
from urllib.parse import urljoin

import httpx
import structlog

from docsite.errors import InvalidURLError
from docsite.meta.schemas import ExternalMeta

logger = structlog.get_logger()

FAVICON_PATH = "/favicon.ico"
ALLOWED_SCHEMES = frozenset({"http", "https"})

META_TAG_PATTERN = re.compile(r"<meta\b[^>]*>", re.IGNORECASE)
LINK_TAG_PATTERN = re.compile(r"<link\b[^>]*>", re.IGNORECASE)
TITLE_TAG_PATTERN = re.compile(r"<title[^>]*>(.*?)</title>", re.IGNORECASE | re.DOTALL)
ATTRIBUTE_PATTERN = re.compile(
    r"""([\w:-]+)\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'>]+))"""
)
JSON_CONTENT_TYPE = re.compile(r"json", re.IGNORECASE)

Extractor = Callable[[str], str | None]


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = html_lib.unescape(value).strip()
    return cleaned or None


def tag_attributes(tag: str) -> dict[str, str]:
    """Parse the attributes of a single markup tag.

    Args:
        tag: Full tag text, e.g. ``<meta name="x" content="y">``.

    Returns:
        Mapping of lower-cased attribute name to raw value.
    """
    attributes: dict[str, str] = {}
    for match in ATTRIBUTE_PATTERN.finditer(tag):
        name = match.group(1).lower()
        value = next((g for g in match.groups()[1:] if g is not None), "")
        attributes.setdefault(name, value)
    return attributes


def meta_content(markup: str, key: str) -> str | None:
    """Find the content of the first meta tag whose name or property is key."""
    for tag in META_TAG_PATTERN.findall(markup):
        attributes = tag_attributes(tag)
        names = (attributes.get("property", ""), attributes.get("name", ""))
        if key in (n.lower() for n in names):
            content = _clean(attributes.get("content"))
            if content:
                return content
    return None


def link_href(markup: str, rel: str) -> str | None:
    """Find the href of the first link tag whose rel list contains rel."""
    for tag in LINK_TAG_PATTERN.findall(markup):
        attributes = tag_attributes(tag)
        if rel in attributes.get("rel", "").lower().split():
            href = _clean(attributes.get("href"))
            if href:
                return href
    return None


def extract_og_title(markup: str) -> str | None:
    return meta_content(markup, "og:title")


def extract_twitter_title(markup: str) -> str | None:
    return meta_content(markup, "twitter:title")


def extract_document_title(markup: str) -> str | None:
    match = TITLE_TAG_PATTERN.search(markup)
    return _clean(match.group(1)) if match else None


def extract_meta_description(markup: str) -> str | None:
    return meta_content(markup, "description")


def extract_og_description(markup: str) -> str | None:
    return meta_content(markup, "og:description")


def extract_twitter_description(markup: str) -> str | None:
    return meta_content(markup, "twitter:description")


def extract_icon_link(markup: str) -> str | None:
    return link_href(markup, "icon")


def extract_apple_touch_icon(markup: str) -> str | None:
    return link_href(markup, "apple-touch-icon")


TITLE_EXTRACTORS: tuple[Extractor, ...] = (
    extract_og_title,
    extract_twitter_title,
    extract_document_title,
)
DESCRIPTION_EXTRACTORS: tuple[Extractor, ...] = (
    extract_meta_description,
    extract_og_description,
    extract_twitter_description,
)
ICON_EXTRACTORS: tuple[Extractor, ...] = (
    extract_icon_link,
    extract_apple_touch_icon,
)


def first_match(markup: str, extractors: Sequence[Extractor]) -> str | None:
    """Run extractors in order and return the first non-empty result."""
    for extractor in extractors:
        value = extractor(markup)
        if value:
            return value
    return None


def absolutize(base_url: str, href: str | None) -> str | None:
    """Resolve a possibly relative href against a base URL.

    Args:
        base_url: URL the href was found on.
        href: Relative or absolute reference.

    Returns:
        Absolute URL, or None if href is empty or cannot be joined.
    """
    if not href:
        return None
    try:
        return urljoin(base_url, href)
    except ValueError:
        return None


def parse_head(markup: str, base_url: str) -> ExternalMeta:
    """Extract title, description and icon from page markup.

    Args:
        markup: Page body.
        base_url: Final URL the page was served from.

    Returns:
        ExternalMeta with an absolute icon URL.
    """
    icon_href = first_match(markup, ICON_EXTRACTORS) or FAVICON_PATH
    return ExternalMeta(
        title=first_match(markup, TITLE_EXTRACTORS),
        description=first_match(markup, DESCRIPTION_EXTRACTORS),
        icon=absolutize(base_url, icon_href),
    )


def parse_target_url(url: str | None) -> httpx.URL:
    """Validate a client supplied URL.

    Args:
        url: Raw ``url`` query parameter.

    Returns:
        Parsed http(s) URL with a host.

    Raises:
        InvalidURLError: If the URL is missing, not absolute or not http(s).
    """
    if not url or not url.strip():
        raise InvalidURLError("missing url")

    try:
        parsed = httpx.URL(url.strip())
    except (httpx.InvalidURL, TypeError, ValueError) as e:
        raise InvalidURLError("bad url", detail=str(e)) from e

    if parsed.scheme not in ALLOWED_SCHEMES or not parsed.host:
        raise InvalidURLError("bad url", detail="URL must be absolute http(s)")

    return parsed


def _json_meta(response: httpx.Response, final_url: httpx.URL) -> ExternalMeta:
    try:
        data = response.json()
    except ValueError:
        data = None

    if not isinstance(data, dict):
        data = {}

    title = data.get("title")
    description = data.get("description")
    return ExternalMeta(
        title=title if isinstance(title, str) else final_url.host,
        description=description if isinstance(description, str) else "",
        icon=absolutize(str(final_url), FAVICON_PATH),
    )


def fallback_meta(target: httpx.URL) -> ExternalMeta:
    """Best-effort metadata when the page cannot be fetched."""
    return ExternalMeta(
        title=target.host,
        description="",
        icon=absolutize(str(target), FAVICON_PATH),
    )


async def resolve_site_meta(client: httpx.AsyncClient, url: str | None) -> ExternalMeta:
    """Fetch a page and summarise its head metadata for a link preview.

    Every fetch or parse failure degrades to hostname-based metadata;
    only an unusable input URL is reported.

    Args:
        client: Shared HTTP client.
        url: Target page URL.

    Returns:
        ExternalMeta for the page.

    Raises:
        InvalidURLError: If the URL is missing or cannot be parsed.
    """
    target = parse_target_url(url)

    try:
        response = await client.get(target, follow_redirects=True)
        final_url = response.url

        if JSON_CONTENT_TYPE.search(response.headers.get("content-type", "")):
            return _json_meta(response, final_url)

        return parse_head(response.text, str(final_url))
    except Exception as e:
        logger.warning(
            "site_meta_fetch_failed",
            url=str(target),
            error=str(e),
            error_type=type(e).__name__,
        )
        return fallback_meta(target)
