"""Pydantic models for Wine Journal configuration.

These models define the structure of config.toml and secrets.env files.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, model_validator


class ServerConfig(BaseModel):
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8000
    workers: int = 2
    debug: bool = False
    enforce_https: bool = False
    rate_limit_per_minute: int = 60
    # Empty list means same-origin only
    cors_origins: list[str] = []


class DatabaseConfig(BaseModel):
    """MongoDB database configuration."""

    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_database: str = "winejournal"
    min_pool_size: int = 10
    max_pool_size: int = 100


class StorageConfig(BaseModel):
    """File storage configuration."""

    data_dir: Path = Field(default_factory=lambda: Path("data"))
    max_upload_mb: int = 10

    @property
    def images_dir(self) -> Path:
        """Get the images directory path."""
        return self.data_dir / "images"

    @property
    def max_upload_bytes(self) -> int:
        """Get max upload size in bytes."""
        return self.max_upload_mb * 1024 * 1024


class AuthConfig(BaseModel):
    """Authentication configuration."""

    enabled: bool = True
    registration_enabled: bool = True
    token_lifetime_minutes: int = 120


class EmailConfig(BaseModel):
    """Email configuration."""

    backend: Literal["console"] = "console"
    from_address: str = "support@winejournal.app"
    from_name: str = "Wine Journal"
    frontend_url: str = "http://localhost:8000"


class WeatherConfig(BaseModel):
    """Weather API configuration (OpenWeatherMap)."""

    base_url: str = "https://api.openweathermap.org/data/2.5"
    units: Literal["metric", "imperial", "standard"] = "metric"
    default_city: str = "Cape Town, South Africa"
    timeout_seconds: float = 10.0


class AIConfig(BaseModel):
    """AI sommelier configuration."""

    enabled: bool = True
    model: str = "claude-sonnet-4-20250514"
    temperature: float = 0.7


class NotificationsConfig(BaseModel):
    """Drink-window alert thresholds (days before the drink-by date)."""

    enabled: bool = True
    high_priority_days: int = 7
    medium_priority_days: int = 14
    low_priority_days: int = 30
    check_interval_seconds: int = 3600

    @model_validator(mode="after")
    def check_thresholds_ordered(self) -> "NotificationsConfig":
        if not (
            0 <= self.high_priority_days
            <= self.medium_priority_days
            <= self.low_priority_days
        ):
            raise ValueError(
                "Drink-window thresholds must satisfy high <= medium <= low"
            )
        return self


class AnalyticsConfig(BaseModel):
    """Product analytics (PostHog) configuration."""

    posthog_enabled: bool = False
    posthog_host: str = "https://eu.posthog.com"
    posthog_debug: bool = False


class WineJournalConfig(BaseModel):
    """Main Wine Journal configuration loaded from config.toml."""

    app_name: str = "Wine Journal"
    server: ServerConfig = Field(default_factory=ServerConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    email: EmailConfig = Field(default_factory=EmailConfig)
    weather: WeatherConfig = Field(default_factory=WeatherConfig)
    ai: AIConfig = Field(default_factory=AIConfig)
    notifications: NotificationsConfig = Field(default_factory=NotificationsConfig)
    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)


class SecretsConfig(BaseModel):
    """Secrets loaded from secrets.env file.

    These are sensitive values that should not be stored in config.toml.
    """

    secret_key: str | None = None
    openweather_api_key: str | None = None
    anthropic_api_key: str | None = None
    posthog_api_key: str | None = None
