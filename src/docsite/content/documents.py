"""Document lookup by relative path."""
import errno
from pathlib import Path

import structlog

from docsite.content.frontmatter import parse_frontmatter
from docsite.content.paths import resolve_document_path
from docsite.content.schemas import PostMetadata
from docsite.errors import DocumentReadError, NotFoundError

logger = structlog.get_logger()


def get_content(root: Path, relative_path: str) -> str:
    """Read the raw text of a document under the content root.

    Args:
        root: The content root directory.
        relative_path: Root-anchored document path.

    Returns:
        Document text, frontmatter included.

    Raises:
        PathTraversalError: If the path escapes the content root.
        NotFoundError: If no regular file exists at the path.
        DocumentReadError: If the file cannot be read or decoded.
    """
    filepath = resolve_document_path(root, relative_path)

    if not filepath.is_file():
        raise NotFoundError("File not found", detail=relative_path)

    try:
        return filepath.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise NotFoundError("File not found", detail=relative_path) from e
    except PermissionError as e:
        raise DocumentReadError(
            f"Permission denied: {relative_path}",
            relative_path,
            "EACCES",
        ) from e
    except UnicodeDecodeError as e:
        raise DocumentReadError(
            f"File is not valid UTF-8: {relative_path}",
            relative_path,
            "EILSEQ",
        ) from e
    except OSError as e:
        raise DocumentReadError(
            f"Failed to read file: {e}",
            relative_path,
            errno.errorcode.get(e.errno) if e.errno else None,
        ) from e


def get_metadata(root: Path, relative_path: str) -> PostMetadata:
    """Read a document and extract its frontmatter metadata.

    Args:
        root: The content root directory.
        relative_path: Root-anchored document path.

    Returns:
        Parsed metadata, empty if the document has no frontmatter.

    Raises:
        PathTraversalError: If the path escapes the content root.
        NotFoundError: If no regular file exists at the path.
        DocumentReadError: If the file cannot be read or decoded.
    """
    content = get_content(root, relative_path)
    metadata = parse_frontmatter(content)
    logger.debug(
        "document_metadata_parsed",
        path=relative_path,
        fields=sorted(metadata.model_dump(exclude_none=True)),
    )
    return metadata
