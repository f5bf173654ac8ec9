"""Configuration management for pantry-voice."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Inventory API Configuration
    inventory_api_url: str = Field(default="http://127.0.0.1:5000", description="Inventory API base URL")
    inventory_api_key: str | None = Field(default=None, description="Inventory API key (optional)")
    inventory_api_timeout_seconds: float = Field(
        default=10.0, gt=0, description="Timeout for a single inventory API call"
    )

    # Speech Recognition Configuration
    speech_locale: str = Field(default="it-IT", description="Locale passed to the speech recognizer and lexicon")

    # Auto-submit timing (UX only, not correctness-critical)
    auto_submit_delay_seconds: float = Field(
        default=0.5, ge=0, description="Delay before submitting a draft that has a name and a shelf-life"
    )
    partial_auto_submit_delay_seconds: float = Field(
        default=1.0, ge=0, description="Delay before submitting a draft that only has a name"
    )

    # Draft completion defaults
    default_days_to_expiry: int = Field(default=7, gt=0, description="Shelf-life used when a draft has none")
    default_location: str = Field(default="Frigorifero", description="Storage location used when a draft has none")

    # Server Configuration
    api_host: str = Field(default="127.0.0.1", description="Host the API server binds to")
    api_port: int = Field(default=8000, gt=0, description="Port the API server listens on")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")
    environment: str = Field(default="production", description="Deployment environment name")


# Application Constants
class Constants:
    """Application-wide constants."""

    # API Configuration
    API_TIMEOUT_SECONDS: int = 30

    # HTTP Status Codes
    HTTP_OK: int = 200
    HTTP_SERVICE_UNAVAILABLE: int = 503

    # Expiry policies (the badge and query windows differ)
    EXPIRING_BADGE_WINDOW_DAYS: int = 2  # "expiring" status badge, elapsed-days based
    QUERY_SOON_WINDOW_DAYS: int = 3  # "soon" bucket for voice queries, remaining-days based

    # Duration extraction
    MONTH_LENGTH_DAYS: int = 30


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
