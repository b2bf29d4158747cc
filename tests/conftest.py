"""Shared pytest fixtures for the initsu test suite.

Provides reusable fixtures for:
- Temporary project directories with a ``package.json``
- A mock raw-content host built on ``httpx.MockTransport``
- A small template registry pointing at that host
- A patched ``run_command`` for code that shells out
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from initsu.scaffolder.fetcher import ContentFetcher
from initsu.scaffolder.sources import TemplateDefinition, TemplateSource


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Temporary directory standing in for a freshly generated project."""
    project_dir = tmp_path / "test-project"
    project_dir.mkdir()
    yield project_dir


@pytest.fixture
def package_json_project(tmp_project_dir: Path) -> Path:
    """Project directory with a minimal ``package.json`` as create-next-app leaves it."""
    package_json = {
        "name": "test-project",
        "version": "0.1.0",
        "private": True,
        "scripts": {
            "dev": "next dev",
            "build": "next build",
            "lint": "next lint",
        },
        "dependencies": {"next": "15.0.0", "react": "19.0.0"},
    }
    (tmp_project_dir / "package.json").write_text(
        json.dumps(package_json, indent=2), encoding="utf-8"
    )
    return tmp_project_dir


# ---------------------------------------------------------------------------
# Mock raw-content host
# ---------------------------------------------------------------------------

class RecordingTransport(httpx.MockTransport):
    """``MockTransport`` that serves canned files and records every request.

    *routes* maps a URL path suffix to ``(status_code, body)``; a value that
    is an exception instance is raised instead.  Unmatched paths get a 404.
    """

    def __init__(self, routes: dict[str, Any]) -> None:
        self.routes = routes
        self.requests: list[httpx.Request] = []
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for suffix, result in self.routes.items():
            if request.url.path.endswith(suffix):
                if isinstance(result, Exception):
                    raise result
                status_code, body = result
                return httpx.Response(status_code, text=body)
        return httpx.Response(404, text="404: Not Found")


@pytest.fixture
def mock_host():
    """Factory for a ``(ContentFetcher, RecordingTransport)`` pair.

    Usage:
        def test_fetch(mock_host):
            fetcher, transport = mock_host({"page.tsx": (200, "PAGE")})
    """
    def factory(routes: dict[str, Any] | None = None) -> tuple[ContentFetcher, RecordingTransport]:
        transport = RecordingTransport(routes or {})
        fetcher = ContentFetcher(host="raw.example.test", timeout=5.0, transport=transport)
        return fetcher, transport

    return factory


@pytest.fixture
def sample_source() -> TemplateSource:
    """Two-file source mirroring the shape of the built-in default template."""
    return TemplateSource(
        owner="o",
        repo="r",
        branch="main",
        files=("src/app/page.tsx", "src/app/globals.css"),
    )


@pytest.fixture
def sample_registry(sample_source: TemplateSource) -> dict[str, TemplateDefinition]:
    """Registry with a single ``default`` entry backed by ``sample_source``."""
    return {
        "default": TemplateDefinition(
            name="default",
            description="Test template",
            source=sample_source,
        ),
    }


# ---------------------------------------------------------------------------
# Mock command execution
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_run_command():
    """Patch ``initsu.utils.run_command`` to succeed without spawning anything.

    Yields the ``AsyncMock`` so tests can inspect the commands issued or
    change ``return_value`` to simulate failures.
    """
    mock = AsyncMock(return_value=(0, "", ""))
    with patch("initsu.utils.run_command", mock):
        yield mock
