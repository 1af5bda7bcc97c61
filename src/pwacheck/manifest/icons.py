# pwacheck:domain=manifest
"""Icon queries over a normalized manifest value."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pwacheck.manifest.parser import ManifestField, ManifestValue

_SIZE_RE = re.compile(r"^(\d+(?:\.\d+)?)x(\d+(?:\.\d+)?)$", re.IGNORECASE)


def _parse_size(size: str) -> tuple[float, float] | None:
    match = _SIZE_RE.match(size)
    if match is None:
        return None
    return float(match.group(1)), float(match.group(2))


def _declared_sizes(icon: ManifestField) -> list[str]:
    sizes = icon.value["sizes"].value
    return list(sizes) if sizes else []


def icons_exist(value: ManifestValue) -> bool:
    """Return True if the manifest declares at least one icon."""
    icons = value.get("icons")
    if icons is None or not icons.value:
        return False
    return len(icons.value) > 0


def icons_at_least(size: int, value: ManifestValue) -> list[ManifestField]:
    """Return icons declaring a ``WxH`` size with both dimensions >= *size*.

    Icons are returned in declaration order. Tokens such as ``any`` or
    malformed sizes never match.
    """
    if not icons_exist(value):
        return []

    matching: list[ManifestField] = []
    for icon in value["icons"].value:
        for token in _declared_sizes(icon):
            pair = _parse_size(token)
            if pair is not None and pair[0] >= size and pair[1] >= size:
                matching.append(icon)
                break
    return matching

