"""pwacheck - Web app manifest installability checks."""

__version__ = "0.3.0"

from pwacheck.cache import ManifestValuesCache  # noqa: E402

__all__ = ["ManifestValuesCache", "__version__"]
