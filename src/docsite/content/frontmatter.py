"""Frontmatter parsing for markdown documents."""
import re

from docsite.content.schemas import PostMetadata

FRONTMATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)(.*)\Z",
    re.DOTALL,
)

METADATA_FIELDS: frozenset[str] = frozenset({"title", "summary", "date", "cover"})

QUOTES = ("'", '"')


def split_frontmatter(content: str) -> tuple[str | None, str]:
    """Separate a leading frontmatter block from the document body.

    Args:
        content: Raw file content with optional frontmatter.

    Returns:
        Tuple of (block text, body). Block is None when the document has
        no closed frontmatter block, in which case body is the full text.
    """
    match = FRONTMATTER_PATTERN.match(content)
    if not match:
        return None, content

    return match.group(1), match.group(2)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] in QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def parse_frontmatter(content: str) -> PostMetadata:
    """Extract the recognised metadata fields from a document.

    Keys outside ``METADATA_FIELDS`` and lines without a colon are ignored.
    Values are kept as strings; colons inside a value are preserved.

    Args:
        content: Raw file content.

    Returns:
        PostMetadata, empty when there is no frontmatter block.
    """
    block, _ = split_frontmatter(content)
    if block is None:
        return PostMetadata()

    fields: dict[str, str] = {}
    for line in block.splitlines():
        key, sep, value = line.partition(":")
        if not sep:
            continue

        key = key.strip()
        if key in METADATA_FIELDS:
            fields[key] = _unquote(value.strip())

    return PostMetadata(**fields)
