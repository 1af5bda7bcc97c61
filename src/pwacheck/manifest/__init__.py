"""Manifest domain: normalization, icon queries, check catalog and evaluator."""

# pwacheck:domain=manifest

from pwacheck.manifest.icons import icons_at_least, icons_exist
from pwacheck.manifest.parser import (
    Manifest,
    ManifestField,
    ManifestValue,
    load_manifest,
    parse_manifest,
)
from pwacheck.manifest.values import (
    CHECK_IDS,
    MANIFEST_CHECKS,
    NO_MANIFEST_REASON,
    PWA_DISPLAY_VALUES,
    SUGGESTED_SHORTNAME_LENGTH,
    UNPARSEABLE_MANIFEST_REASON,
    VALIDITY_IDS,
    CheckResult,
    ManifestCheck,
    ManifestValues,
    compute_manifest_values,
    validity_id_for,
)

__all__ = [
    "CHECK_IDS",
    "MANIFEST_CHECKS",
    "NO_MANIFEST_REASON",
    "PWA_DISPLAY_VALUES",
    "SUGGESTED_SHORTNAME_LENGTH",
    "UNPARSEABLE_MANIFEST_REASON",
    "VALIDITY_IDS",
    "CheckResult",
    "Manifest",
    "ManifestCheck",
    "ManifestField",
    "ManifestValue",
    "ManifestValues",
    "compute_manifest_values",
    "icons_at_least",
    "icons_exist",
    "load_manifest",
    "parse_manifest",
    "validity_id_for",
]
