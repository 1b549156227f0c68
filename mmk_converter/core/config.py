from functools import lru_cache
from typing import Optional

from fastapi import Request
from pydantic_settings import BaseSettings, SettingsConfigDict

from mmk_converter import __version__

ALLOWED_PROVIDERS = {"static", "external-http"}


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g. DEBUG,
    EXCHANGE_RATE_API_KEY, EXCHANGE_RATE_PROVIDER, HTTP_TIMEOUT_SECONDS).
    """

    # Basic app metadata
    app_name: str = "Myanmar Currency Converter"
    debug: bool = False
    version: str = __version__

    # Rates are always expressed per 1 unit of this currency
    base_currency: str = "MMK"

    # Exchange rate provider
    # Allowed: 'external-http' (exchangerate-api.com v6), 'static' (fixed placeholders)
    exchange_rate_provider: str = "external-http"
    exchange_rate_api_key: Optional[str] = None
    exchange_api_base_url: str = "https://v6.exchangerate-api.com/v6"
    http_timeout_seconds: float = 10.0

    # Automatic refresh once when the app starts serving
    refresh_on_startup: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def init_post_load(self) -> None:
        """Normalize and validate derived fields."""
        self.base_currency = self.base_currency.upper()
        self.exchange_api_base_url = self.exchange_api_base_url.rstrip("/")
        if self.exchange_rate_api_key is not None:
            self.exchange_rate_api_key = self.exchange_rate_api_key.strip() or None
        if self.exchange_rate_provider not in ALLOWED_PROVIDERS:
            raise ValueError(
                f"Unsupported exchange_rate_provider '{self.exchange_rate_provider}'. Allowed: {ALLOWED_PROVIDERS}"
            )


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was built with (honours create_app overrides)."""
    return request.app.state.settings
