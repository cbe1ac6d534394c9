"""
Tests for ServiceConfig, .env loading and logging setup.
"""

import json
import logging

import pytest

from order_lookup.config import ServiceConfig, load_env_files
from order_lookup.logging_config import JSONFormatter, setup_logging


class TestServiceConfig:
    """Environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        for name in ("ORDER_CACHE_TTL_SECONDS", "ORDER_CACHE_MAX_KEYS",
                     "ORDER_CACHE_MAX_RESULTS", "ORDER_LOOKUP_WORKERS",
                     "SHOPIFY_API_VERSION", "ORDER_LOOKUP_LOOKBACK_DAYS"):
            monkeypatch.delenv(name, raising=False)

        config = ServiceConfig()

        assert config.CACHE_TTL_SECONDS == 3600
        assert config.CACHE_MAX_KEYS == 1000
        assert config.CACHE_MAX_RESULTS == 1000
        assert config.WORKERS == 5
        assert config.LOOKBACK_DAYS == 0
        assert config.API_VERSION == "2023-04"

    def test_shopify_base_url(self, monkeypatch):
        monkeypatch.setenv("SHOPIFY_SHOP_NAME", "my-store.myshopify.com")
        monkeypatch.setenv("SHOPIFY_API_VERSION", "2024-01")

        assert ServiceConfig().shopify_base_url == (
            "https://my-store.myshopify.com/admin/api/2024-01"
        )

    def test_missing_shop_name(self, monkeypatch):
        monkeypatch.delenv("SHOPIFY_SHOP_NAME", raising=False)
        with pytest.raises(ValueError, match="SHOPIFY_SHOP_NAME"):
            ServiceConfig().shopify_base_url

    def test_summary_hides_token(self, monkeypatch):
        monkeypatch.setenv("SHOPIFY_API_PASSWORD", "shpat_secret")
        summary = ServiceConfig().summary()
        assert "shpat_secret" not in summary
        assert "Access Token:       Set" in summary

    def test_env_files(self, tmp_path, monkeypatch):
        """.env.local overrides .env."""
        monkeypatch.delenv("ORDER_LOOKUP_WORKERS", raising=False)
        monkeypatch.delenv("ORDER_LOOKUP_MAX_PAGES", raising=False)
        (tmp_path / ".env").write_text("ORDER_LOOKUP_WORKERS=3\nORDER_LOOKUP_MAX_PAGES=10\n")
        (tmp_path / ".env.local").write_text("ORDER_LOOKUP_WORKERS=7\n")

        load_env_files(tmp_path)
        config = ServiceConfig()

        assert config.WORKERS == 7
        assert config.MAX_PAGES == 10


class TestLogging:
    """Structured logging setup."""

    def test_json_formatter_includes_extra(self):
        record = logging.LogRecord(
            "order_lookup.test", logging.INFO, __file__, 1, "Cache miss", (), None
        )
        record.contact_type = "email"

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "Cache miss"
        assert data["level"] == "INFO"
        assert data["contact_type"] == "email"

    def test_setup_logging_configures_package_logger(self):
        logger = setup_logging('order_lookup_test', log_level='DEBUG', log_format='pretty')

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert logger.propagate is False
