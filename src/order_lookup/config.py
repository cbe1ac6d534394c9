"""
Order Lookup Configuration

Centralized configuration for the lookup service.
All settings can be overridden via environment variables.
"""

import os
from pathlib import Path
from typing import Optional


def load_env_files(project_root: Optional[Path] = None) -> None:
    """
    Load .env and .env.local from the project root.

    .env is loaded first, then .env.local (which can override).
    """
    from dotenv import load_dotenv

    root = project_root or Path(__file__).resolve().parent.parent.parent
    env_file = root / ".env"
    env_local_file = root / ".env.local"

    if env_file.exists():
        load_dotenv(env_file, override=False)
    if env_local_file.exists():
        load_dotenv(env_local_file, override=True)


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


class ServiceConfig:
    """
    Central configuration for the order lookup service.

    Values are read from the environment when the instance is created.

    Example:
        >>> config = ServiceConfig()
        >>> config.CACHE_TTL_SECONDS
        3600
    """

    def __init__(self):
        # ====================================================================
        # Shopify
        # ====================================================================

        self.SHOP_NAME: Optional[str] = os.getenv("SHOPIFY_SHOP_NAME")
        """Shop domain, e.g. 'my-store.myshopify.com'"""

        self.ACCESS_TOKEN: Optional[str] = os.getenv("SHOPIFY_API_PASSWORD")
        """Admin API access token (sent as X-Shopify-Access-Token)"""

        self.API_VERSION: str = os.getenv("SHOPIFY_API_VERSION", "2023-04")

        self.TIMEOUT_SECONDS: float = float(
            os.getenv("SHOPIFY_TIMEOUT_SECONDS", "30"))
        """Per-call timeout for every upstream request"""

        # ====================================================================
        # Lookup
        # ====================================================================

        self.MAX_PAGES: int = _env_int("ORDER_LOOKUP_MAX_PAGES", 200)
        """Upper bound on REST pages followed for a single email lookup"""

        self.LOOKBACK_DAYS: int = _env_int("ORDER_LOOKUP_LOOKBACK_DAYS", 0)
        """Only return orders newer than N days (0 disables the filter)"""

        self.WORKERS: int = _env_int("ORDER_LOOKUP_WORKERS", 5)
        """Maximum number of lookups in flight at once"""

        # ====================================================================
        # Cache
        # ====================================================================

        self.CACHE_TTL_SECONDS: int = _env_int("ORDER_CACHE_TTL_SECONDS", 3600)
        self.CACHE_MAX_KEYS: int = _env_int("ORDER_CACHE_MAX_KEYS", 1000)
        self.CACHE_MAX_RESULTS: int = _env_int("ORDER_CACHE_MAX_RESULTS", 1000)
        """Result lists longer than this are never cached"""

        # ====================================================================
        # API / Logging
        # ====================================================================

        self.CORS_ALLOW_ORIGIN: str = os.getenv(
            "CORS_ALLOW_ORIGIN", "https://your-shopify-store.myshopify.com")
        self.API_HOST: str = os.getenv("HOST", "0.0.0.0")
        self.API_PORT: int = _env_int("PORT", 3000)

        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
        self.LOG_FORMAT: str = os.getenv("LOG_FORMAT", "json")
        """Log format: 'json' (structured) or 'pretty' (readable)"""
        self.LOG_FILE: Optional[str] = os.getenv("LOG_FILE")

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        return cls()

    @property
    def shopify_base_url(self) -> str:
        """Admin API base URL for the configured shop and API version."""
        if not self.SHOP_NAME:
            raise ValueError(
                "Shop name is required. Set environment variable 'SHOPIFY_SHOP_NAME'"
            )
        shop = self.SHOP_NAME
        if not shop.startswith("http"):
            shop = f"https://{shop}"
        return f"{shop.rstrip('/')}/admin/api/{self.API_VERSION}"

    def summary(self) -> str:
        """Configuration summary without secrets."""
        lines = [
            "=" * 60,
            "Order Lookup Configuration",
            "=" * 60,
            f"  Shop:               {self.SHOP_NAME or 'Not set'}",
            f"  API Version:        {self.API_VERSION}",
            f"  Access Token:       {'Set' if self.ACCESS_TOKEN else 'Not set'}",
            f"  Timeout:            {self.TIMEOUT_SECONDS}s",
            f"  Max Pages:          {self.MAX_PAGES}",
            f"  Lookback Days:      {self.LOOKBACK_DAYS or 'Disabled'}",
            f"  Workers:            {self.WORKERS}",
            f"  Cache TTL:          {self.CACHE_TTL_SECONDS}s",
            f"  Cache Max Keys:     {self.CACHE_MAX_KEYS}",
            f"  Cache Max Results:  {self.CACHE_MAX_RESULTS}",
            f"  Log Level:          {self.LOG_LEVEL}",
            f"  Log Format:         {self.LOG_FORMAT}",
            "=" * 60,
        ]
        return "\n".join(lines)
