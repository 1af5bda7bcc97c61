"""Tests for pwacheck.manifest.report — output formatters."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from pwacheck.config import CheckConfig
from pwacheck.manifest.parser import Manifest
from pwacheck.manifest.report import (
    format_catalog_json,
    format_catalog_rich,
    format_json,
    format_porcelain,
    format_rich,
    strict_failures,
)
from pwacheck.manifest.values import CHECK_IDS, compute_manifest_values

if TYPE_CHECKING:
    from collections.abc import Callable


class TestStrictFailures:
    def test_no_manifest(self) -> None:
        assert strict_failures(compute_manifest_values(None)) == ["hasManifest"]

    def test_unparseable(self) -> None:
        manifest = Manifest(raw="{", url="https://example.com/m.json", value=None)
        assert strict_failures(compute_manifest_values(manifest)) == ["hasParseableManifest"]

    def test_all_required_by_default(
        self, manifest_data: dict[str, Any], build_manifest: Callable[..., Manifest]
    ) -> None:
        del manifest_data["theme_color"]
        report = compute_manifest_values(build_manifest(manifest_data))
        assert strict_failures(report) == ["hasThemeColor"]

    def test_only_configured_required(
        self, manifest_data: dict[str, Any], build_manifest: Callable[..., Manifest]
    ) -> None:
        del manifest_data["theme_color"]
        report = compute_manifest_values(build_manifest(manifest_data))
        assert strict_failures(report, CheckConfig(required=("hasName",))) == []

    def test_clean_manifest(
        self, manifest_data: dict[str, Any], build_manifest: Callable[..., Manifest]
    ) -> None:
        assert strict_failures(compute_manifest_values(build_manifest(manifest_data))) == []


class TestFormatPorcelain:
    def test_lines_in_catalog_order(
        self, manifest_data: dict[str, Any], build_manifest: Callable[..., Manifest]
    ) -> None:
        manifest_data["display"] = "browser"
        output = format_porcelain(compute_manifest_values(build_manifest(manifest_data)))
        lines = output.splitlines()
        assert [line.split(":")[0] for line in lines] == list(CHECK_IDS)
        assert "hasPWADisplayValue:fail" in lines
        assert "hasName:pass" in lines

    def test_parse_failure(self) -> None:
        assert format_porcelain(compute_manifest_values(None)) == "hasManifest:fail"

    def test_ignored_checks_hidden(
        self, manifest_data: dict[str, Any], build_manifest: Callable[..., Manifest]
    ) -> None:
        report = compute_manifest_values(build_manifest(manifest_data))
        output = format_porcelain(report, config=CheckConfig(ignore=("hasThemeColor",)))
        assert "hasThemeColor" not in output
        assert len(output.splitlines()) == len(CHECK_IDS) - 1


class TestFormatJson:
    def test_structure(
        self, manifest_data: dict[str, Any], build_manifest: Callable[..., Manifest]
    ) -> None:
        data = json.loads(format_json(compute_manifest_values(build_manifest(manifest_data))))
        assert data["isParseFailure"] is False
        assert data["parseFailureReason"] is None
        assert data["validityId"] is None
        assert [c["id"] for c in data["allChecks"]] == list(CHECK_IDS)

    def test_parse_failure(self) -> None:
        data = json.loads(format_json(compute_manifest_values(None)))
        assert data == {
            "isParseFailure": True,
            "parseFailureReason": "No manifest was fetched",
            "allChecks": [],
            "validityId": "hasManifest",
        }


class TestFormatRich:
    def test_failing_check_shows_failure_text(
        self, manifest_data: dict[str, Any], build_manifest: Callable[..., Manifest]
    ) -> None:
        manifest_data["short_name"] = "ThisNameIsWayTooLong"
        output = format_rich(
            compute_manifest_values(build_manifest(manifest_data)), source="manifest.json"
        )
        assert "manifest.json" in output
        assert "shortNameLength" in output
        assert "will be truncated" in output
        assert "1 of 9 checks failing" in output

    def test_all_passing(
        self, manifest_data: dict[str, Any], build_manifest: Callable[..., Manifest]
    ) -> None:
        output = format_rich(compute_manifest_values(build_manifest(manifest_data)))
        assert "All 9 checks passing" in output

    def test_parse_failure(self) -> None:
        output = format_rich(compute_manifest_values(None))
        assert "No manifest was fetched" in output


class TestCatalogFormatters:
    def test_json(self) -> None:
        data = json.loads(format_catalog_json())
        assert [c["id"] for c in data["checks"]] == list(CHECK_IDS)
        assert data["validityIds"] == ["hasManifest", "hasParseableManifest"]

    def test_rich(self) -> None:
        output = format_catalog_rich()
        for check_id in CHECK_IDS:
            assert check_id in output
        assert "hasParseableManifest" in output
