"""Pytest configuration and fixtures."""

import sys
from collections.abc import Callable
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import httpx
import pytest
from fastapi.testclient import TestClient

from docsite.app import create_app
from docsite.config import Settings

INSTALL_DOC = """---
title: "Installing: the basics"
summary: 'Get set up'
date: 2024-05-01
cover: https://cdn.example.com/c.png
tags: setup
---
# Install

Run pip install docsite to install the server.
"""

INTRO_DOC = "# Intro\n\nWelcome to the docs.\n"


def write(path: Path, text: str) -> None:
    """Write a UTF-8 file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


class FakeUpstream:
    """Records outbound requests and answers them with a swappable handler.

    Attributes:
        handler: Callable producing the response for each request.
        requests: Every request seen, in order.
    """

    def __init__(self) -> None:
        """Initialize with a handler that refuses all connections."""
        self.handler: Callable[[httpx.Request], httpx.Response] = self._refuse
        self.requests: list[httpx.Request] = []

    @staticmethod
    def _refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    """Create a small document tree.

    Layout::

        01-Guides/01-Install.md
        01-Guides/02-Advanced/deep.md
        01-Guides/10-FAQ.md
        02-Intro.md
        Zeta/z.md
        notes.md
        README.md, .hidden.md, image.png   (not listed)
    """
    root = tmp_path / "content"
    write(root / "01-Guides" / "01-Install.md", INSTALL_DOC)
    write(root / "01-Guides" / "02-Advanced" / "deep.md", "# Deep\n\nNested page.\n")
    write(root / "01-Guides" / "10-FAQ.md", "# FAQ\n\nCommon questions.\n")
    write(root / "02-Intro.md", INTRO_DOC)
    write(root / "Zeta" / "z.md", "# Zeta\n")
    write(root / "notes.md", "Plain notes.\n")
    write(root / "README.md", "Repository readme.\n")
    write(root / ".hidden.md", "Hidden.\n")
    (root / "image.png").write_bytes(b"\x89PNG\r\n")
    return root


@pytest.fixture
def settings(content_root: Path) -> Settings:
    """Create test settings."""
    return Settings(
        host="127.0.0.1",
        port=8000,
        debug=False,
        content_root=content_root,
    )


@pytest.fixture
def upstream() -> FakeUpstream:
    """Fake outbound HTTP endpoint."""
    return FakeUpstream()


@pytest.fixture
def client(settings: Settings, upstream: FakeUpstream) -> TestClient:
    """Create test client with configured app and faked outbound HTTP."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    app = create_app(settings, http_client=http_client)
    return TestClient(app)
