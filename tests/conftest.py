"""Shared test fixtures for pwacheck."""

from __future__ import annotations

import copy
import json
from typing import TYPE_CHECKING, Any

import pytest

from pwacheck.manifest.parser import parse_manifest

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from pwacheck.manifest.parser import Manifest

MANIFEST_URL = "https://example.com/manifest.json"
DOCUMENT_URL = "https://example.com/index.html"

VALID_MANIFEST: dict[str, Any] = {
    "name": "Example Progressive App",
    "short_name": "Example",
    "start_url": "/?utm_source=homescreen",
    "display": "standalone",
    "background_color": "#ffffff",
    "theme_color": "#3367d6",
    "icons": [
        {"src": "/icons/icon-192.png", "sizes": "192x192", "type": "image/png"},
        {"src": "/icons/icon-512.png", "sizes": "512x512", "type": "image/png"},
    ],
}


@pytest.fixture()
def manifest_data() -> dict[str, Any]:
    """A fresh copy of a manifest that passes every check."""
    return copy.deepcopy(VALID_MANIFEST)


@pytest.fixture()
def build_manifest() -> Callable[..., Manifest]:
    """Return a helper that serializes a dict and parses it as a manifest."""

    def _build(data: dict[str, Any], *, document_url: str | None = DOCUMENT_URL) -> Manifest:
        return parse_manifest(json.dumps(data), MANIFEST_URL, document_url)

    return _build


@pytest.fixture()
def tmp_project(tmp_path: Path) -> Path:
    """Create an empty project directory for config and manifest files."""
    project = tmp_path / "proj"
    project.mkdir()
    return project
