# pwacheck:domain=manifest
"""Manifest values: the installability check catalog and its evaluator."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pwacheck.manifest.icons import icons_at_least, icons_exist

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from pwacheck.manifest.parser import Manifest, ManifestValue

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

PWA_DISPLAY_VALUES: tuple[str, ...] = ("minimal-ui", "fullscreen", "standalone")

# Chrome historically truncated short names longer than this on the homescreen.
SUGGESTED_SHORTNAME_LENGTH = 12

NO_MANIFEST_REASON = "No manifest was fetched"
UNPARSEABLE_MANIFEST_REASON = "Manifest failed to parse as valid JSON"

VALIDITY_IDS: tuple[str, ...] = ("hasManifest", "hasParseableManifest")

_VALIDITY_ID_BY_REASON: dict[str, str] = {
    NO_MANIFEST_REASON: "hasManifest",
    UNPARSEABLE_MANIFEST_REASON: "hasParseableManifest",
}

# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ManifestCheck:
    """A single named predicate over a normalized manifest value."""

    id: str
    failure_text: str
    validate: Callable[[ManifestValue], bool]


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one :class:`ManifestCheck`."""

    id: str
    failure_text: str
    passing: bool

    def to_dict(self) -> dict[str, object]:
        return {"id": self.id, "failureText": self.failure_text, "passing": self.passing}


@dataclass(frozen=True)
class ManifestValues:
    """Report produced by :func:`compute_manifest_values`.

    ``parse_failure_reason`` is only set when ``is_parse_failure`` is true,
    and ``all_checks`` is empty in that case.
    """

    is_parse_failure: bool
    parse_failure_reason: str | None = None
    all_checks: tuple[CheckResult, ...] = ()

    @property
    def failing_checks(self) -> tuple[CheckResult, ...]:
        return tuple(c for c in self.all_checks if not c.passing)

    def get(self, check_id: str) -> CheckResult | None:
        """Return the result for *check_id*, or ``None`` if it was not evaluated."""
        for result in self.all_checks:
            if result.id == check_id:
                return result
        return None

    def to_dict(self) -> dict[str, object]:
        return {
            "isParseFailure": self.is_parse_failure,
            "parseFailureReason": self.parse_failure_reason,
            "allChecks": [c.to_dict() for c in self.all_checks],
        }


# ---------------------------------------------------------------------------
# Check predicates
# ---------------------------------------------------------------------------


def _has_start_url(value: ManifestValue) -> bool:
    return bool(value["start_url"].value)


def _has_icons_at_least_192px(value: ManifestValue) -> bool:
    return icons_exist(value) and len(icons_at_least(192, value)) > 0


def _has_icons_at_least_512px(value: ManifestValue) -> bool:
    return icons_exist(value) and len(icons_at_least(512, value)) > 0


def _has_pwa_display_value(value: ManifestValue) -> bool:
    return value["display"].value in PWA_DISPLAY_VALUES


def _has_background_color(value: ManifestValue) -> bool:
    return bool(value["background_color"].value)


def _has_theme_color(value: ManifestValue) -> bool:
    return bool(value["theme_color"].value)


def _has_short_name(value: ManifestValue) -> bool:
    return bool(value["short_name"].value)


def _short_name_length(value: ManifestValue) -> bool:
    short_name = value["short_name"].value
    return bool(short_name) and len(short_name) <= SUGGESTED_SHORTNAME_LENGTH


def _has_name(value: ManifestValue) -> bool:
    return bool(value["name"].value)


# Order is the report order; downstream consumers key on the ids.
MANIFEST_CHECKS: tuple[ManifestCheck, ...] = (
    ManifestCheck(
        id="hasStartUrl",
        failure_text="Manifest does not contain a `start_url`",
        validate=_has_start_url,
    ),
    ManifestCheck(
        id="hasIconsAtLeast192px",
        failure_text="Manifest does not have icons at least 192px",
        validate=_has_icons_at_least_192px,
    ),
    ManifestCheck(
        id="hasIconsAtLeast512px",
        failure_text="Manifest does not have icons at least 512px",
        validate=_has_icons_at_least_512px,
    ),
    ManifestCheck(
        id="hasPWADisplayValue",
        failure_text=(
            "Manifest's `display` value is not one of: " + " | ".join(PWA_DISPLAY_VALUES)
        ),
        validate=_has_pwa_display_value,
    ),
    ManifestCheck(
        id="hasBackgroundColor",
        failure_text="Manifest does not have `background_color`",
        validate=_has_background_color,
    ),
    ManifestCheck(
        id="hasThemeColor",
        failure_text="Manifest does not have `theme_color`",
        validate=_has_theme_color,
    ),
    ManifestCheck(
        id="hasShortName",
        failure_text="Manifest does not have `short_name`",
        validate=_has_short_name,
    ),
    ManifestCheck(
        id="shortNameLength",
        failure_text="Manifest `short_name` will be truncated when displayed on the homescreen",
        validate=_short_name_length,
    ),
    ManifestCheck(
        id="hasName",
        failure_text="Manifest does not have `name`",
        validate=_has_name,
    ),
)

CHECK_IDS: tuple[str, ...] = tuple(check.id for check in MANIFEST_CHECKS)


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


def validity_id_for(reason: str | None) -> str | None:
    """Map a parse-failure reason to its validity id (``None`` for no failure)."""
    if reason is None:
        return None
    return _VALIDITY_ID_BY_REASON.get(reason)


def compute_manifest_values(
    manifest: Manifest | None,
    *,
    checks: Sequence[ManifestCheck] = MANIFEST_CHECKS,
) -> ManifestValues:
    """Evaluate every check in *checks* against *manifest*.

    A missing manifest or one whose value failed to parse is reported as a
    parse failure with no check results. Otherwise every check runs, in
    order, with no early exit. Exceptions raised by a predicate are not
    caught.
    """
    if manifest is None:
        logger.debug("No manifest to evaluate")
        return ManifestValues(is_parse_failure=True, parse_failure_reason=NO_MANIFEST_REASON)

    manifest_value = manifest.value
    if manifest_value is None:
        logger.debug("Manifest at %s did not parse", manifest.url)
        return ManifestValues(
            is_parse_failure=True, parse_failure_reason=UNPARSEABLE_MANIFEST_REASON
        )

    results = tuple(
        CheckResult(
            id=check.id,
            failure_text=check.failure_text,
            passing=check.validate(manifest_value),
        )
        for check in checks
    )
    logger.debug(
        "Evaluated %d manifest checks for %s, %d failing",
        len(results),
        manifest.url,
        sum(1 for r in results if not r.passing),
    )
    return ManifestValues(is_parse_failure=False, all_checks=results)
