"""In-memory memoization of manifest evaluations."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pwacheck.manifest.values import compute_manifest_values

if TYPE_CHECKING:
    from pwacheck.manifest.parser import Manifest
    from pwacheck.manifest.values import ManifestValues

logger = logging.getLogger(__name__)

# Cache key: (manifest url, document url, raw manifest text)
CacheKey = tuple[str, str | None, str]


@dataclass
class CacheEntry:
    """A cached report with its creation time."""

    report: ManifestValues
    created_at: float


class ManifestValuesCache:
    """Memoizes :func:`compute_manifest_values` per manifest.

    Entries are keyed by manifest url, document url and raw text; the document
    url takes part because it changes the normalized ``start_url``.

    Evaluation is pure, so entries never go stale; ``clear`` exists for
    callers that want to bound memory between runs.
    """

    def __init__(self) -> None:
        self._store: dict[CacheKey, CacheEntry] = {}
        self._hits = 0
        self._misses = 0

    @staticmethod
    def _key(manifest: Manifest) -> CacheKey:
        return (manifest.url, manifest.document_url, manifest.raw)

    def get(self, manifest: Manifest) -> ManifestValues | None:
        """Return the cached report for *manifest*, or None on a miss."""
        entry = self._store.get(self._key(manifest))
        if entry is None:
            return None
        return entry.report

    def put(self, manifest: Manifest, report: ManifestValues) -> None:
        """Store *report* for *manifest*."""
        self._store[self._key(manifest)] = CacheEntry(
            report=report, created_at=time.monotonic()
        )

    def compute(self, manifest: Manifest | None) -> ManifestValues:
        """Return the report for *manifest*, evaluating it on a cache miss.

        ``None`` manifests are never cached.
        """
        if manifest is None:
            return compute_manifest_values(None)

        cached = self.get(manifest)
        if cached is not None:
            self._hits += 1
            logger.debug("Manifest values cache hit for %s", manifest.url)
            return cached

        self._misses += 1
        report = compute_manifest_values(manifest)
        self.put(manifest, report)
        return report

    def clear(self) -> None:
        """Clear all cached entries."""
        self._store.clear()

    def stats(self) -> dict[str, int]:
        """Return cache statistics."""
        return {"entries": len(self._store), "hits": self._hits, "misses": self._misses}
