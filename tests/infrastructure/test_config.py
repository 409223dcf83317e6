"""Tests for application settings."""

import pytest

from storefront.infrastructure.config import Settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Catalog and presentation defaults."""
        for name in ("RELATED_PRODUCTS_LIMIT", "DESCRIPTION_PREVIEW_CHARS", "RELATED_PREVIEW_CHARS"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.related_products_limit == 3
        assert settings.description_preview_chars == 200
        assert settings.related_preview_chars == 60

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Environment variables override defaults."""
        monkeypatch.setenv("RELATED_PRODUCTS_LIMIT", "5")
        monkeypatch.setenv("CATALOG_API_URL", "http://catalog.internal")

        settings = Settings(_env_file=None)

        assert settings.related_products_limit == 5
        assert settings.catalog_api_url == "http://catalog.internal"
