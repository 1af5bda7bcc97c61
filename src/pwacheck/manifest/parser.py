# pwacheck:domain=manifest
"""Manifest normalization: raw JSON text into per-field wrappers.

Every known field is always present in the resulting mapping, wrapped in a
:class:`ManifestField` whose ``value`` is ``None`` when the field was missing
or malformed. Check predicates rely on that guarantee and never test for
key existence.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any
from urllib.parse import urljoin, urlsplit

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

ALLOWED_DISPLAY_VALUES: frozenset[str] = frozenset(
    {"fullscreen", "standalone", "minimal-ui", "browser"}
)
DEFAULT_DISPLAY_MODE = "browser"

_WHITESPACE_RE = re.compile(r"\s+")

_HEX_COLOR_RE = re.compile(r"#(?:[0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})")
_NUMBER = r"[+-]?(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?"
_ARG = rf"(?:{_NUMBER}(?:%|deg|grad|rad|turn)?|none)"
# Comma-separated (legacy) or space-separated with an optional "/ alpha".
_FUNCTIONAL_COLOR_RE = re.compile(
    rf"(?:rgba?|hsla?)\(\s*(?:"
    rf"{_ARG}\s*,\s*{_ARG}\s*,\s*{_ARG}(?:\s*,\s*{_ARG})?"
    rf"|{_ARG}\s+{_ARG}\s+{_ARG}(?:\s*/\s*{_ARG})?"
    rf")\s*\)"
)

CSS_NAMED_COLORS: frozenset[str] = frozenset(
    {
        "transparent", "currentcolor",
        "aliceblue", "antiquewhite", "aqua", "aquamarine", "azure", "beige",
        "bisque", "black", "blanchedalmond", "blue", "blueviolet", "brown",
        "burlywood", "cadetblue", "chartreuse", "chocolate", "coral",
        "cornflowerblue", "cornsilk", "crimson", "cyan", "darkblue", "darkcyan",
        "darkgoldenrod", "darkgray", "darkgreen", "darkgrey", "darkkhaki",
        "darkmagenta", "darkolivegreen", "darkorange", "darkorchid", "darkred",
        "darksalmon", "darkseagreen", "darkslateblue", "darkslategray",
        "darkslategrey", "darkturquoise", "darkviolet", "deeppink",
        "deepskyblue", "dimgray", "dimgrey", "dodgerblue", "firebrick",
        "floralwhite", "forestgreen", "fuchsia", "gainsboro", "ghostwhite",
        "gold", "goldenrod", "gray", "green", "greenyellow", "grey", "honeydew",
        "hotpink", "indianred", "indigo", "ivory", "khaki", "lavender",
        "lavenderblush", "lawngreen", "lemonchiffon", "lightblue", "lightcoral",
        "lightcyan", "lightgoldenrodyellow", "lightgray", "lightgreen",
        "lightgrey", "lightpink", "lightsalmon", "lightseagreen",
        "lightskyblue", "lightslategray", "lightslategrey", "lightsteelblue",
        "lightyellow", "lime", "limegreen", "linen", "magenta", "maroon",
        "mediumaquamarine", "mediumblue", "mediumorchid", "mediumpurple",
        "mediumseagreen", "mediumslateblue", "mediumspringgreen",
        "mediumturquoise", "mediumvioletred", "midnightblue", "mintcream",
        "mistyrose", "moccasin", "navajowhite", "navy", "oldlace", "olive",
        "olivedrab", "orange", "orangered", "orchid", "palegoldenrod",
        "palegreen", "paleturquoise", "palevioletred", "papayawhip",
        "peachpuff", "peru", "pink", "plum", "powderblue", "purple",
        "rebeccapurple", "red", "rosybrown", "royalblue", "saddlebrown",
        "salmon", "sandybrown", "seagreen", "seashell", "sienna", "silver",
        "skyblue", "slateblue", "slategray", "slategrey", "snow", "springgreen",
        "steelblue", "tan", "teal", "thistle", "tomato", "turquoise", "violet",
        "wheat", "white", "whitesmoke", "yellow", "yellowgreen",
    }
)


@dataclass(frozen=True)
class ManifestField:
    """A single normalized manifest field.

    ``raw`` is the value as it appeared in the JSON, ``value`` the effective
    value after normalization, and ``warning`` explains any fallback.
    """

    raw: Any
    value: Any
    warning: str | None = None


ManifestValue = dict[str, ManifestField]


@dataclass(frozen=True)
class Manifest:
    """A fetched manifest. ``value`` is ``None`` when the text did not parse.

    ``document_url`` is the page that linked the manifest; it feeds the
    ``start_url`` fallback, so two manifests with equal text can normalize
    differently.
    """

    raw: str
    url: str
    value: ManifestValue | None
    warning: str | None = None
    document_url: str | None = None


# ---------------------------------------------------------------------------
# Field parsers
# ---------------------------------------------------------------------------


def _parse_string(raw: Any, *, trim: bool = False) -> ManifestField:
    if raw is None:
        return ManifestField(raw=raw, value=None)
    if not isinstance(raw, str):
        return ManifestField(raw=raw, value=None, warning="ERROR: expected a string.")
    return ManifestField(raw=raw, value=raw.strip() if trim else raw)


def _origin(url: str) -> tuple[str, str]:
    parts = urlsplit(url)
    return parts.scheme, parts.netloc


def _resolve_url(url: str, base: str) -> str | None:
    """Resolve *url* against *base*; ``None`` when either cannot be parsed."""
    try:
        resolved = urljoin(base, url)
        if not urlsplit(resolved).scheme:
            return None
    except ValueError:
        return None
    return resolved


def _parse_start_url(
    raw: Any, manifest_url: str, document_url: str | None
) -> ManifestField:
    if raw is None:
        return ManifestField(raw=raw, value=document_url)
    if not isinstance(raw, str):
        return ManifestField(raw=raw, value=document_url, warning="ERROR: expected a string.")
    if raw == "":
        return ManifestField(
            raw=raw, value=document_url, warning="ERROR: start_url string empty"
        )

    resolved = _resolve_url(raw, manifest_url)
    if resolved is None:
        return ManifestField(
            raw=raw,
            value=document_url,
            warning=f"ERROR: invalid start_url relative to {manifest_url}",
        )

    try:
        same_origin = document_url is None or _origin(resolved) == _origin(document_url)
    except ValueError:
        same_origin = False
    if not same_origin:
        return ManifestField(
            raw=raw,
            value=document_url,
            warning="ERROR: start_url must be same-origin as document",
        )

    return ManifestField(raw=raw, value=resolved)


def _parse_display(raw: Any) -> ManifestField:
    parsed = _parse_string(raw, trim=True)
    if not parsed.value:
        return ManifestField(raw=raw, value=DEFAULT_DISPLAY_MODE, warning=parsed.warning)

    display = parsed.value.lower()
    if display not in ALLOWED_DISPLAY_VALUES:
        return ManifestField(
            raw=raw,
            value=DEFAULT_DISPLAY_MODE,
            warning=f"ERROR: '{raw}' is not a valid display value.",
        )
    return ManifestField(raw=raw, value=display)


def is_valid_color(text: str) -> bool:
    """Return True when *text* is a CSS color a browser would accept.

    Covers hex notation, the ``rgb()``/``hsl()`` families and named colors.
    ``lab()``, ``color()`` and other CSS Color 4 forms are rejected.
    """
    color = text.strip().lower()
    if color in CSS_NAMED_COLORS:
        return True
    if _HEX_COLOR_RE.fullmatch(color):
        return True
    return _FUNCTIONAL_COLOR_RE.fullmatch(color) is not None


def _parse_color(raw: Any) -> ManifestField:
    parsed = _parse_string(raw, trim=True)
    if not parsed.value:
        return ManifestField(raw=raw, value=None, warning=parsed.warning)
    if not is_valid_color(parsed.value):
        return ManifestField(raw=raw, value=None, warning="ERROR: color parsing failed.")
    return parsed


def _parse_icon(raw: Any, manifest_url: str) -> ManifestField:
    if not isinstance(raw, dict):
        return ManifestField(
            raw=raw,
            value={
                "src": ManifestField(raw=None, value=None),
                "type": ManifestField(raw=None, value=None),
                "sizes": ManifestField(raw=None, value=None),
                "purpose": ManifestField(raw=None, value=None),
            },
            warning="ERROR: icon expected to be an object.",
        )

    src = _parse_string(raw.get("src"), trim=True)
    if src.value:
        resolved_src = _resolve_url(src.value, manifest_url)
        if resolved_src is None:
            src = ManifestField(
                raw=src.raw,
                value=None,
                warning=f"ERROR: invalid icon src relative to {manifest_url}",
            )
        else:
            src = ManifestField(raw=src.raw, value=resolved_src)
    elif src.value == "":
        src = ManifestField(raw=src.raw, value=None, warning=src.warning)

    sizes = _parse_string(raw.get("sizes"), trim=True)
    if sizes.value is not None:
        tokens = [t.lower() for t in _WHITESPACE_RE.split(sizes.value) if t]
        sizes = ManifestField(raw=sizes.raw, value=tokens or None, warning=sizes.warning)

    purpose = _parse_string(raw.get("purpose"), trim=True)
    if purpose.value is not None:
        purpose = ManifestField(
            raw=purpose.raw,
            value=[t.lower() for t in _WHITESPACE_RE.split(purpose.value) if t] or None,
        )

    return ManifestField(
        raw=raw,
        value={
            "src": src,
            "type": _parse_string(raw.get("type"), trim=True),
            "sizes": sizes,
            "purpose": purpose,
        },
    )


def _parse_icons(raw: Any, manifest_url: str) -> ManifestField:
    if raw is None:
        return ManifestField(raw=raw, value=[])
    if not isinstance(raw, list):
        return ManifestField(
            raw=raw,
            value=[],
            warning="ERROR: 'icons' expected to be an array but is not.",
        )
    return ManifestField(raw=raw, value=[_parse_icon(icon, manifest_url) for icon in raw])


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_manifest(
    raw: str, manifest_url: str, document_url: str | None = None
) -> Manifest:
    """Parse manifest JSON text into a :class:`Manifest`.

    Invalid JSON, or JSON whose root is not an object, yields a manifest
    whose ``value`` is ``None``.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.debug("Manifest %s is not valid JSON: %s", manifest_url, exc)
        return Manifest(
            raw=raw,
            url=manifest_url,
            value=None,
            warning=f"ERROR: file isn't valid JSON: {exc}",
            document_url=document_url,
        )

    if not isinstance(data, dict):
        return Manifest(
            raw=raw,
            url=manifest_url,
            value=None,
            warning="ERROR: manifest must be a JSON object.",
            document_url=document_url,
        )

    value: ManifestValue = {
        "name": _parse_string(data.get("name"), trim=True),
        "short_name": _parse_string(data.get("short_name"), trim=True),
        "start_url": _parse_start_url(data.get("start_url"), manifest_url, document_url),
        "display": _parse_display(data.get("display")),
        "orientation": _parse_string(data.get("orientation"), trim=True),
        "icons": _parse_icons(data.get("icons"), manifest_url),
        "theme_color": _parse_color(data.get("theme_color")),
        "background_color": _parse_color(data.get("background_color")),
    }

    for name, field in value.items():
        if field.warning is not None:
            logger.debug("Manifest field %r: %s", name, field.warning)

    return Manifest(raw=raw, url=manifest_url, value=value, document_url=document_url)


def load_manifest(path: Path, document_url: str | None = None) -> Manifest | None:
    """Read and parse the manifest at *path*.

    Returns ``None`` when the file does not exist or cannot be read, which
    callers report as "no manifest fetched".
    """
    if not path.is_file():
        logger.debug("No manifest at %s", path)
        return None

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Cannot read manifest %s: %s", path, exc)
        return None

    return parse_manifest(raw, path.resolve().as_uri(), document_url)
