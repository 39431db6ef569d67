"""Sidebar navigation built from the document tree."""
from pathlib import Path
from urllib.parse import quote

import structlog

from docsite.content.schemas import ContentNode, NavIcon, NavItem, NavSubItem, NavTree
from docsite.content.walker import build_tree

logger = structlog.get_logger()

FOLDER_URL = "#"


def fallback_navigation() -> list[NavItem]:
    """Fixed navigation served when the content tree is unavailable."""
    return [
        NavItem(
            title="Blog Docs",
            url=FOLDER_URL,
            icon=NavIcon.BOOK_OPEN,
            is_active=True,
            items=[
                NavSubItem(title="Welcome", url=FOLDER_URL),
                NavSubItem(title="Quick Start", url=FOLDER_URL),
            ],
        )
    ]


def document_url(path: str, docs_base_url: str = "/docs") -> str:
    """Build the site URL that renders a document.

    Args:
        path: Relative document path.
        docs_base_url: Route of the document viewer.

    Returns:
        Viewer URL with the path percent-encoded as a query parameter.
    """
    return f"{docs_base_url}?path={quote(path, safe='')}"


def node_url(node: ContentNode, docs_base_url: str = "/docs") -> str:
    if node.type == "folder":
        return FOLDER_URL
    return document_url(node.path, docs_base_url)


def to_nav_model(
    tree: list[ContentNode],
    docs_base_url: str = "/docs",
) -> list[NavItem]:
    """Project a document tree onto two-level sidebar navigation.

    Third-level and deeper nodes are dropped.

    Args:
        tree: Top-level nodes from ``build_tree``.
        docs_base_url: Route of the document viewer.

    Returns:
        One NavItem per top-level node, in tree order.
    """
    nav: list[NavItem] = []

    for node in tree:
        items = None
        if node.children:
            items = [
                NavSubItem(title=child.title, url=node_url(child, docs_base_url))
                for child in node.children
            ]

        nav.append(
            NavItem(
                title=node.title,
                url=node_url(node, docs_base_url),
                icon=NavIcon.FOLDER_OPEN if node.type == "folder" else NavIcon.FILE_TEXT,
                is_active=False,
                items=items,
            )
        )

    return nav


def build_navigation(root_dir: Path, docs_base_url: str = "/docs") -> NavTree:
    """Build sidebar navigation, degrading to the fallback model.

    Never raises and never returns an empty model.

    Args:
        root_dir: The content root directory.
        docs_base_url: Route of the document viewer.

    Returns:
        NavTree for the sidebar.
    """
    try:
        tree = build_tree(root_dir)
        nav = to_nav_model(tree, docs_base_url)
    except Exception as e:
        logger.error("navigation_build_failed", path=str(root_dir), error=str(e))
        return NavTree(nav_main=fallback_navigation())

    if not nav:
        logger.warning("navigation_empty_using_fallback", path=str(root_dir))
        return NavTree(nav_main=fallback_navigation())

    return NavTree(nav_main=nav)
