"""Directory tree traversal for the document index."""

from collections.abc import Iterator
from pathlib import Path

import structlog

from docsite.content.paths import is_document, is_excluded, is_within, parse_entry_name
from docsite.content.schemas import ContentNode

logger = structlog.get_logger()


class WalkState:
    """Mutable state container for directory traversal.

    Attributes:
        root: Canonical content root.
        node_count: Number of nodes emitted so far.
    """

    def __init__(self, root: Path) -> None:
        """Initialize walk state.

        Args:
            root: Canonical content root.
        """
        self.root = root
        self.node_count = 0


def sort_key(node: ContentNode) -> tuple[int, int, str, str]:
    """Sibling ordering: prefix order, folders first, then title, then name."""
    return (
        node.order,
        0 if node.type == "folder" else 1,
        node.title.casefold(),
        node.name,
    )


def walk_directory(
    absolute_path: Path,
    relative_path: str,
    state: WalkState,
    ancestors: frozenset[Path] = frozenset(),
) -> list[ContentNode]:
    """Recursively list the documents and folders below a directory.

    Symlinks are followed only while their target stays inside the root.
    A directory whose canonical path is already on the current ancestor
    chain is a cycle and is not listed; the same directory reached through
    unrelated branches is listed under each of them.

    Args:
        absolute_path: Directory to list.
        relative_path: Its path relative to the content root.
        state: Shared traversal state.
        ancestors: Canonical paths of the directories above this one.

    Returns:
        Sorted child nodes of the directory.
    """
    chain = ancestors | {absolute_path.resolve()}

    try:
        entries = sorted(absolute_path.iterdir())
    except OSError as e:
        logger.warning(
            "content_directory_unreadable",
            path=relative_path or ".",
            error=str(e),
        )
        return []

    nodes: list[ContentNode] = []

    for entry in entries:
        if is_excluded(entry.name):
            continue

        try:
            target = entry.resolve()
            is_dir = target.is_dir()
            is_file = target.is_file()
        except OSError:
            continue

        if not is_within(target, state.root):
            logger.warning("content_entry_outside_root", entry=entry.name)
            continue

        child_rel = f"{relative_path}/{entry.name}" if relative_path else entry.name
        order, title = parse_entry_name(entry.name)

        if is_dir:
            if target in chain:
                logger.warning("content_tree_cycle_skipped", path=child_rel)
                continue
            children = walk_directory(entry, child_rel, state, chain)
            state.node_count += 1
            nodes.append(
                ContentNode(
                    name=entry.name,
                    title=title,
                    path=child_rel,
                    type="folder",
                    order=order,
                    children=children or None,
                )
            )
        elif is_file and is_document(entry.name):
            state.node_count += 1
            nodes.append(
                ContentNode(
                    name=entry.name,
                    title=title,
                    path=child_rel,
                    type="file",
                    order=order,
                )
            )

    nodes.sort(key=sort_key)
    return nodes


def build_tree(root_dir: Path) -> list[ContentNode]:
    """Build the ordered document tree for a content root.

    Fails closed: a missing or unreadable root yields an empty list.

    Args:
        root_dir: The content root directory.

    Returns:
        Top-level nodes of the tree.
    """
    try:
        root = root_dir.resolve()
        if not root.is_dir():
            logger.warning("content_root_not_found", path=str(root_dir))
            return []
    except OSError as e:
        logger.error("content_root_error", path=str(root_dir), error=str(e))
        return []

    state = WalkState(root)
    nodes = walk_directory(root, "", state)
    logger.debug("content_tree_built", path=str(root), node_count=state.node_count)
    return nodes


def iter_documents(nodes: list[ContentNode]) -> Iterator[ContentNode]:
    """Yield every file node of a tree in display order."""
    for node in nodes:
        if node.type == "file":
            yield node
        elif node.children:
            yield from iter_documents(node.children)
