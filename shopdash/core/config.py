"""Application configuration via Pydantic Settings v2."""

from functools import lru_cache
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "ShopDash"
    app_env: Literal["development", "testing", "staging", "production"] = "development"
    debug: bool = False

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # API
    api_host: str = "0.0.0.0"  # noqa: S104
    api_port: int = Field(default=8123, ge=1, le=65535)

    # Storage
    storage_backend: Literal["local", "memory"] = "local"
    storage_dir: str = "./data"

    # Shop
    shop_timezone: str = "UTC"

    # Inventory
    inventory_default_min_stock: int = Field(default=5, ge=0)

    # Analytics
    analytics_default_window_days: int = Field(default=30, ge=1, le=365)
    analytics_top_products_limit: int = Field(default=5, ge=1)

    @field_validator("shop_timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate the shop timezone is a known IANA zone.

        Args:
            v: Timezone name.

        Returns:
            Validated timezone name.

        Raises:
            ValueError: If the zone is unknown.
        """
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(
                f"Unknown timezone '{v}'. Expected an IANA name (e.g., 'Europe/London')"
            ) from None
        return v

    @property
    def tzinfo(self) -> ZoneInfo:
        """Shop timezone used for calendar-day truncation."""
        return ZoneInfo(self.shop_timezone)

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.app_env == "testing"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton."""
    return Settings()
