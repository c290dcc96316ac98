"""Tests for sauce_browsers.catalog: record parsing and grouping."""

from __future__ import annotations

import pytest

from sauce_browsers.catalog import ALIASES, Platform, aggregate, parse_catalog
from sauce_browsers.errors import SauceBrowsersClientError


# ---------------------------------------------------------------------------
# Platform
# ---------------------------------------------------------------------------


class TestPlatform:
    def test_from_dict_keeps_metadata(self):
        data = {
            "os": "Windows 10",
            "api_name": "chrome",
            "short_version": "48.0",
            "long_name": "Google Chrome",
        }
        p = Platform.from_dict(data)
        assert p.triple == ("Windows 10", "chrome", "48.0")
        assert p.raw["long_name"] == "Google Chrome"
        assert p.to_dict() == data

    def test_short_version_coerced_to_string(self):
        p = Platform.from_dict({"os": "Linux", "api_name": "firefox", "short_version": 45})
        assert p.short_version == "45"

    def test_missing_field_raises(self):
        with pytest.raises(SauceBrowsersClientError, match="short_version"):
            Platform.from_dict({"os": "Linux", "api_name": "firefox"})

    def test_null_field_raises(self):
        with pytest.raises(SauceBrowsersClientError, match="short_version"):
            Platform.from_dict({"os": "Linux", "api_name": "firefox", "short_version": None})

    def test_identity_semantics(self):
        a = Platform(os="Linux", api_name="firefox", short_version="45")
        b = Platform(os="Linux", api_name="firefox", short_version="45")
        assert a != b
        assert len({a, b}) == 2

    def test_immutable(self):
        p = Platform(os="Linux", api_name="firefox", short_version="45")
        with pytest.raises(AttributeError):
            p.os = "Windows 10"  # type: ignore[misc]


class TestParseCatalog:
    def test_preserves_order_and_length(self, catalog_payload):
        platforms = parse_catalog(catalog_payload)
        assert len(platforms) == len(catalog_payload)
        assert [p.to_dict() for p in platforms] == catalog_payload

    def test_rejects_non_mapping_entries(self):
        with pytest.raises(SauceBrowsersClientError):
            parse_catalog(["chrome"])  # type: ignore[list-item]


# ---------------------------------------------------------------------------
# aggregate
# ---------------------------------------------------------------------------


class TestAggregate:
    def test_groups_by_lowercase_name(self, catalog):
        grouped = aggregate(catalog)
        assert [p.short_version for p in grouped["safari"]] == ["9", "10"]
        assert "Safari" not in grouped

    def test_groups_keep_catalog_order(self, catalog):
        grouped = aggregate(catalog)
        assert [p.os for p in grouped["opera"]] == ["Windows 2003", "Windows 2003"]
        assert [p.short_version for p in grouped["internet explorer"]] == [
            "6", "7", "8", "9", "10", "11", "10", "11", "9",
        ]

    def test_aliases_share_the_target_list(self, catalog):
        grouped = aggregate(catalog)
        assert grouped["ie"] is grouped["internet explorer"]
        assert grouped["iexplore"] is grouped["internet explorer"]
        assert grouped["googlechrome"] is grouped["chrome"]

    def test_missing_alias_target_is_not_registered(self):
        grouped = aggregate([Platform(os="Linux", api_name="firefox", short_version="45")])
        assert set(grouped) == {"firefox"}

    def test_alias_table(self):
        assert ALIASES == {
            "iexplore": "internet explorer",
            "ie": "internet explorer",
            "googlechrome": "chrome",
        }

    def test_empty_catalog(self):
        assert aggregate([]) == {}
