"""Tests for the metadata catalog and asset name resolution."""

import pytest
import requests

from src.dotfonts.core.exceptions import CatalogFormatError
from src.dotfonts.fonts.catalog import FontCatalog, resolve_asset_name

NERD_FONTS_SAMPLE = {
    "fonts": [
        {
            "unpatchedName": "IBM Plex Mono",
            "licenseId": "OFL-1.1-RFN",
            "patchedName": "BlexMono",
            "folderName": "IBMPlexMono",
        },
        {
            "unpatchedName": "Terminus",
            "patchedName": "Terminess",
            "folderName": "Terminus",
        },
        {
            "unpatchedName": "Iosevka",
            "patchedName": "Iosevka",
            "folderName": "Iosevka",
        },
    ]
}


class TestFontCatalogParsing:
    """Test building catalogs from JSON documents."""

    def test_from_nerd_fonts_document(self):
        """Test parsing the upstream ``{"fonts": [...]}`` layout."""
        catalog = FontCatalog.from_json(NERD_FONTS_SAMPLE)

        assert len(catalog) == 3
        assert catalog.entries[0].patched_name == "BlexMono"
        assert catalog.entries[0].folder_name == "IBMPlexMono"

    def test_from_bare_list(self):
        """Test parsing a bare list of entries."""
        catalog = FontCatalog.from_json([{"patchedName": "A", "folderName": "AFolder"}])

        assert len(catalog) == 1

    def test_entries_without_folder_name_are_ignored(self):
        """Test that malformed entries are skipped, not fatal."""
        catalog = FontCatalog.from_json(
            {
                "fonts": [
                    {"patchedName": "NoFolder"},
                    {"patchedName": "Empty", "folderName": ""},
                    "not-a-dict",
                    {"patchedName": "Good", "folderName": "GoodFolder"},
                ]
            }
        )

        assert len(catalog) == 1
        assert catalog.resolve("Good") == "GoodFolder"

    @pytest.mark.parametrize("data", [{"families": []}, "fonts", 42, {"fonts": {"a": 1}}])
    def test_invalid_document_shape(self, data):
        """Test that a document without a fonts array is rejected."""
        with pytest.raises(CatalogFormatError, match="Unexpected catalog format"):
            FontCatalog.from_json(data)


class TestFontCatalogResolve:
    """Test catalog lookups."""

    @pytest.fixture
    def catalog(self):
        return FontCatalog.from_json(NERD_FONTS_SAMPLE)

    def test_resolve_by_patched_name(self, catalog):
        assert catalog.resolve("BlexMono") == "IBMPlexMono"
        assert catalog.resolve("Terminess") == "Terminus"

    def test_resolve_by_folder_name(self, catalog):
        assert catalog.resolve("IBMPlexMono") == "IBMPlexMono"

    def test_resolve_is_case_sensitive(self, catalog):
        assert catalog.resolve("blexmono") is None
        assert catalog.resolve("TERMINESS") is None

    def test_resolve_unknown(self, catalog):
        assert catalog.resolve("MonaspiceNe") is None

    def test_first_match_wins(self):
        catalog = FontCatalog.from_json(
            [
                {"patchedName": "Dup", "folderName": "First"},
                {"patchedName": "Dup", "folderName": "Second"},
            ]
        )

        assert catalog.resolve("Dup") == "First"


class TestResolveAssetName:
    """Test resolution with and without a catalog."""

    def test_no_catalog_uses_name_verbatim(self):
        assert resolve_asset_name("Iosevka", None) == "Iosevka"
        assert resolve_asset_name("Some Font", None) == "Some Font"

    def test_catalog_match_replaces_name(self):
        catalog = FontCatalog.from_json(NERD_FONTS_SAMPLE)

        assert resolve_asset_name("BlexMono", catalog) == "IBMPlexMono"

    def test_catalog_without_match_falls_back(self):
        catalog = FontCatalog.from_json(NERD_FONTS_SAMPLE)

        assert resolve_asset_name("MonaspiceNe", catalog) == "MonaspiceNe"


class TestFontCatalogFetch:
    """Test fetching the catalog over HTTP."""

    def test_fetch_success(self, fake_session, catalog_url):
        session = fake_session({catalog_url: NERD_FONTS_SAMPLE})

        catalog = FontCatalog.fetch(session, catalog_url, timeout=5)

        assert catalog is not None
        assert len(catalog) == 3
        assert session.requested == [catalog_url]

    def test_fetch_http_error_returns_none(self, fake_session, catalog_url):
        session = fake_session({catalog_url: 404})

        assert FontCatalog.fetch(session, catalog_url) is None

    def test_fetch_connection_error_returns_none(self, fake_session, catalog_url):
        session = fake_session({catalog_url: requests.Timeout("read timed out")})

        assert FontCatalog.fetch(session, catalog_url) is None

    def test_fetch_invalid_json_returns_none(self, fake_session, catalog_url):
        session = fake_session({catalog_url: b"<html>rate limited</html>"})

        assert FontCatalog.fetch(session, catalog_url) is None

    def test_fetch_wrong_shape_returns_none(self, fake_session, catalog_url):
        session = fake_session({catalog_url: {"unexpected": True}})

        assert FontCatalog.fetch(session, catalog_url) is None
