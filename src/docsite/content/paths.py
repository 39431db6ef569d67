"""Security-first path resolution for the content root."""
import re
from pathlib import Path, PurePosixPath

from docsite.errors import ClientInputError

DOCUMENT_EXTENSIONS: frozenset[str] = frozenset({".md"})

EXCLUDED_PATTERNS: frozenset[str] = frozenset({
    ".git",
    "node_modules",
    ".DS_Store",
    "__pycache__",
    "README.md",
})

DEFAULT_ORDER = 999

ORDER_PREFIX_PATTERN = re.compile(r"^(\d+)-(.+?)(\.[^.]*)?$")


class PathTraversalError(ClientInputError):
    """Raised when a relative path would escape the content root.

    Attributes:
        path: The offending path value.
    """

    def __init__(self, message: str, path: str) -> None:
        """Initialize traversal error.

        Args:
            message: Error description.
            path: The offending path value.
        """
        super().__init__("Invalid path", detail=message)
        self.path = path


def is_within(path: Path, root: Path) -> bool:
    """Check whether a canonical path lies inside a canonical root.

    Args:
        path: Resolved path to test.
        root: Resolved root directory.

    Returns:
        True if path equals root or is nested below it.
    """
    return path == root or path.is_relative_to(root)


def resolve_document_path(root: Path, relative_path: str) -> Path:
    """Resolve a relative document path to an absolute path within the root.

    Args:
        root: The content root directory.
        relative_path: Root-anchored path as used in navigation URLs.

    Returns:
        Canonical absolute Path for the document.

    Raises:
        PathTraversalError: If the path is empty, contains null bytes or
            traversal segments, is absolute, or resolves outside the root.
    """
    if not relative_path or not relative_path.strip():
        raise PathTraversalError("Path is empty", relative_path)

    if "\0" in relative_path:
        raise PathTraversalError("Path contains null byte", relative_path)

    normalized = relative_path.replace("\\", "/")
    posix = PurePosixPath(normalized)

    if posix.is_absolute():
        raise PathTraversalError("Path must be relative", relative_path)

    if ".." in posix.parts:
        raise PathTraversalError(
            "Path contains directory traversal sequence", relative_path
        )

    root_path = root.resolve()
    resolved = root_path.joinpath(*posix.parts).resolve()

    if not is_within(resolved, root_path):
        raise PathTraversalError(
            f"Path resolves outside content root: {root_path}", relative_path
        )

    return resolved


def is_excluded(name: str) -> bool:
    """Check if an entry should be left out of the document tree.

    Args:
        name: File or directory name.

    Returns:
        True if the entry is hidden or on the exclusion list.
    """
    if name in EXCLUDED_PATTERNS:
        return True

    return name.startswith(".")


def is_document(name: str) -> bool:
    """Check if a filename has a renderable document extension."""
    return PurePosixPath(name).suffix.lower() in DOCUMENT_EXTENSIONS


def parse_entry_name(name: str) -> tuple[int, str]:
    """Split an entry name into its ordering prefix and display title.

    ``01-Getting Started.md`` becomes ``(1, "Getting Started")``. Names
    without a numeric prefix sort after prefixed ones.

    Args:
        name: File or directory name.

    Returns:
        Tuple of (order, title) with any extension stripped from the title.
    """
    match = ORDER_PREFIX_PATTERN.match(name)
    if match:
        return int(match.group(1)), match.group(2)

    return DEFAULT_ORDER, re.sub(r"\.[^.]*$", "", name) or name
