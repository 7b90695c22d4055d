"""Configuration for the bundle stock check service.

Reads environment variables for platform access and runtime tuning.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


def normalize_store_domain(value: str) -> str:
    """Strip scheme, whitespace and slashes from a store domain."""
    domain = (value or "").strip()
    lowered = domain.lower()
    if lowered.startswith("https://"):
        domain = domain[8:]
    elif lowered.startswith("http://"):
        domain = domain[7:]
    return domain.strip().strip("/\t\n\r ")


class Settings(BaseSettings):
    """Runtime configuration loaded from environment."""

    # =========================================================================
    # COMMERCE PLATFORM (Shopify Admin REST API)
    # =========================================================================
    SHOPIFY_STORE_DOMAIN: str = Field(
        default="", description="Store domain, e.g. 'your-store.myshopify.com'."
    )
    SHOPIFY_ACCESS_TOKEN: SecretStr = Field(
        default=SecretStr(""), description="Admin API access token (X-Shopify-Access-Token)."
    )
    SHOPIFY_API_VERSION: str = Field(
        default="2024-01", description="Admin REST API version segment."
    )
    SHOPIFY_PAGE_SIZE: int = Field(
        default=250,
        ge=1,
        le=250,
        description="Products requested per catalog page (platform maximum is 250).",
    )
    SHOPIFY_MAX_PAGES: int = Field(
        default=50,
        gt=0,
        description="Upper bound on catalog pages scanned while resolving a SKU.",
    )
    SHOPIFY_TIMEOUT_SECONDS: float = Field(
        default=15.0, gt=0, description="Per-request timeout for platform calls."
    )
    SHOPIFY_MAX_RETRIES: int = Field(
        default=2,
        ge=0,
        description="Retries for transport errors, 429 and 5xx responses.",
    )

    # =========================================================================
    # BUNDLE CHECK
    # =========================================================================
    BUNDLE_ITEM_COUNT: int = Field(
        default=2, gt=0, description="Number of distinct products a bundle must contain."
    )
    VARIANT_CACHE_TTL_SECONDS: int = Field(
        default=300,
        ge=0,
        description="TTL for SKU -> variant resolutions. 0 disables caching.",
    )
    SKU_CATALOG_PATH: str = Field(
        default="",
        description="Optional YAML file overriding the built-in SKU catalog.",
    )

    # =========================================================================
    # HTTP SURFACE
    # =========================================================================
    CORS_ALLOW_ORIGINS: str = Field(
        default="*",
        description="Comma-separated list of origins allowed to call the API.",
    )

    # =========================================================================
    # OBSERVABILITY
    # =========================================================================
    LOG_LEVEL: str = Field(default="INFO", description="Root log level.")
    LOG_JSON: bool = Field(
        default=False,
        description="Emit JSON logs (production) instead of pretty console output.",
    )
    SENTRY_DSN: str = Field(
        default="",
        description="Sentry DSN for error tracking. Leave empty to disable.",
    )
    SENTRY_ENVIRONMENT: str = Field(
        default="development",
        description="Sentry environment (development, staging, production).",
    )
    SENTRY_TRACES_SAMPLE_RATE: float = Field(
        default=0.1,
        description="Sentry traces sample rate (0.0-1.0).",
    )

    @field_validator("SHOPIFY_STORE_DOMAIN")
    @classmethod
    def _normalize_domain(cls, value: str) -> str:
        return normalize_store_domain(value)

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return (value or "INFO").strip().upper()

    @property
    def shopify_enabled(self) -> bool:
        """Check if the commerce platform is configured."""
        return bool(self.SHOPIFY_STORE_DOMAIN and self.SHOPIFY_ACCESS_TOKEN.get_secret_value())

    @property
    def cors_origins(self) -> list[str]:
        """Return parsed CORS origins."""
        return [origin.strip() for origin in self.CORS_ALLOW_ORIGINS.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()  # type: ignore[arg-type]


def validate_required_settings(settings_instance: Settings | None = None) -> list[str]:
    """Check settings needed to reach the commerce platform.

    Missing credentials are not fatal: the service still starts and answers
    health checks, but stock checks fail with a configuration error.

    Returns:
        List of warning messages (empty when fully configured).
    """
    if settings_instance is None:
        settings_instance = get_settings()

    warnings: list[str] = []
    if not settings_instance.SHOPIFY_STORE_DOMAIN:
        warnings.append("SHOPIFY_STORE_DOMAIN is not set")
    if not settings_instance.SHOPIFY_ACCESS_TOKEN.get_secret_value():
        warnings.append("SHOPIFY_ACCESS_TOKEN is not set")

    for message in warnings:
        logger.warning("[CONFIG] %s; stock checks will fail until configured", message)
    return warnings


settings = get_settings()
