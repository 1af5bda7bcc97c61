"""Tests for pwacheck.manifest.icons — icon size queries."""

from __future__ import annotations

import json
from typing import Any

from pwacheck.manifest.icons import icons_at_least, icons_exist
from pwacheck.manifest.parser import ManifestValue, parse_manifest


def _value(icons: Any) -> ManifestValue:
    manifest = parse_manifest(json.dumps({"icons": icons}), "https://example.com/m.json")
    assert manifest.value is not None
    return manifest.value


class TestIconsExist:
    def test_empty_list(self) -> None:
        assert icons_exist(_value([])) is False

    def test_missing_field(self) -> None:
        assert icons_exist({}) is False

    def test_present(self) -> None:
        assert icons_exist(_value([{"src": "a.png"}])) is True


class TestIconsAtLeast:
    def test_exact_threshold_matches(self) -> None:
        assert len(icons_at_least(192, _value([{"sizes": "192x192"}]))) == 1

    def test_both_dimensions_required(self) -> None:
        value = _value([{"sizes": "512x128"}, {"sizes": "128x512"}])
        assert icons_at_least(192, value) == []

    def test_any_of_multiple_sizes(self) -> None:
        value = _value([{"src": "a.png", "sizes": "48x48 256x256"}])
        matches = icons_at_least(192, value)
        assert len(matches) == 1
        assert matches[0].value["src"].value == "https://example.com/a.png"

    def test_declaration_order_kept(self) -> None:
        value = _value(
            [
                {"src": "big.png", "sizes": "1024x1024"},
                {"src": "small.png", "sizes": "64x64"},
                {"src": "mid.png", "sizes": "512x512"},
            ]
        )
        srcs = [icon.value["src"].raw for icon in icons_at_least(512, value)]
        assert srcs == ["big.png", "mid.png"]

    def test_any_and_malformed_sizes_ignored(self) -> None:
        value = _value([{"sizes": "any"}, {"sizes": "large"}, {"src": "no-sizes.png"}])
        assert icons_at_least(1, value) == []

    def test_no_icons(self) -> None:
        assert icons_at_least(192, _value([])) == []
