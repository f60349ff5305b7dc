from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import AnyHttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

ALLOWED_RATE_PROVIDERS = {"static", "exchangeratesapi"}


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG,
    UPLOAD_DIR, EXCHANGE_API_KEY, RATES_CACHE_TTL_SECONDS).
    """

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore"
    )

    # Basic app metadata
    app_name: str = "Customization Storefront"
    debug: bool = False
    version: str = "0.1.0"
    api_prefix: str = "/api"
    cors_origins: List[str] = ["http://localhost:4200", "http://localhost:3000"]

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Pricing
    # When true an unmapped product/color combination is rejected instead of priced at 0
    pricing_strict: bool = False

    # Exchange rates / caching
    # Allowed: 'exchangeratesapi' (HTTP), 'static' (fallback table only, no network)
    exchange_rate_provider: str = "exchangeratesapi"
    exchange_api_base_url: AnyHttpUrl = "https://api.exchangeratesapi.io/v1/latest"
    exchange_api_key: str = ""
    rates_cache_ttl_seconds: int = 300  # 5 minutes
    http_timeout_seconds: float = 5.0

    # Uploaded images
    upload_dir: Path = Path("uploads")
    max_upload_bytes: int = 5 * 1024 * 1024

    def init_post_load(self) -> None:
        """Validate derived fields and ensure directories exist."""
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        if self.exchange_rate_provider not in ALLOWED_RATE_PROVIDERS:
            raise ValueError(
                f"Unsupported exchange_rate_provider '{self.exchange_rate_provider}'. "
                f"Allowed: {sorted(ALLOWED_RATE_PROVIDERS)}"
            )
        if self.rates_cache_ttl_seconds <= 0:
            raise ValueError("rates_cache_ttl_seconds must be positive")


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
