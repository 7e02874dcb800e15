"""Global settings instance for Wine Journal.

The settings object combines config.toml, secrets.env and environment
variable overrides behind a flat, read-only interface.
"""

import logging
import secrets as secrets_module
from pathlib import Path

from winejournal.config.loader import load_config, load_secrets
from winejournal.config.schema import NotificationsConfig, SecretsConfig, WineJournalConfig

logger = logging.getLogger(__name__)


class Settings:
    """Unified settings object combining config and secrets."""

    def __init__(
        self,
        config: WineJournalConfig | None = None,
        secrets: SecretsConfig | None = None,
    ):
        """Initialize settings.

        Args:
            config: Optional WineJournalConfig instance. If not provided, loads from file.
            secrets: Optional SecretsConfig instance. If not provided, loads from file.
        """
        self._config = config or load_config()
        self._secrets = secrets or load_secrets()
        self.secret_key_generated = False

        if not self._secrets.secret_key:
            self._secrets.secret_key = secrets_module.token_urlsafe(32)
            self.secret_key_generated = True
            logger.warning(
                "SECURITY WARNING: No secret key configured. "
                "A random secret key has been generated. JWT tokens will be invalidated "
                "when the server restarts. Set WINEJOURNAL_SECRET_KEY for production use."
            )

    @property
    def config(self) -> WineJournalConfig:
        """Get the full configuration object."""
        return self._config

    @property
    def secrets(self) -> SecretsConfig:
        """Get the secrets configuration object."""
        return self._secrets

    # Application
    @property
    def app_name(self) -> str:
        return self._config.app_name

    @property
    def debug(self) -> bool:
        return self._config.server.debug

    # Server
    @property
    def host(self) -> str:
        return self._config.server.host

    @property
    def port(self) -> int:
        return self._config.server.port

    @property
    def enforce_https(self) -> bool:
        return self._config.server.enforce_https

    @property
    def rate_limit_per_minute(self) -> int:
        return self._config.server.rate_limit_per_minute

    @property
    def cors_origins(self) -> list[str]:
        return self._config.server.cors_origins

    # Database
    @property
    def mongodb_url(self) -> str:
        return self._config.database.mongodb_url

    @property
    def mongodb_database(self) -> str:
        return self._config.database.mongodb_database

    @property
    def min_pool_size(self) -> int:
        return self._config.database.min_pool_size

    @property
    def max_pool_size(self) -> int:
        return self._config.database.max_pool_size

    # Storage
    @property
    def data_dir(self) -> Path:
        return self._config.storage.data_dir

    @property
    def image_storage_path(self) -> Path:
        return self._config.storage.images_dir

    @property
    def max_upload_size_bytes(self) -> int:
        return self._config.storage.max_upload_bytes

    # Auth
    @property
    def auth_enabled(self) -> bool:
        return self._config.auth.enabled

    @property
    def registration_enabled(self) -> bool:
        return self._config.auth.registration_enabled

    @property
    def token_lifetime_minutes(self) -> int:
        return self._config.auth.token_lifetime_minutes

    # Email
    @property
    def email_backend(self) -> str:
        return self._config.email.backend

    @property
    def email_sender(self) -> str:
        return self._config.email.from_address

    @property
    def email_sender_name(self) -> str:
        return self._config.email.from_name

    @property
    def frontend_url(self) -> str:
        return self._config.email.frontend_url

    # Weather
    @property
    def weather_base_url(self) -> str:
        return self._config.weather.base_url

    @property
    def weather_units(self) -> str:
        return self._config.weather.units

    @property
    def weather_default_city(self) -> str:
        return self._config.weather.default_city

    @property
    def weather_timeout_seconds(self) -> float:
        return self._config.weather.timeout_seconds

    # AI
    @property
    def ai_enabled(self) -> bool:
        return self._config.ai.enabled

    @property
    def ai_model(self) -> str:
        return self._config.ai.model

    @property
    def ai_temperature(self) -> float:
        return self._config.ai.temperature

    # Notifications
    @property
    def notifications(self) -> NotificationsConfig:
        return self._config.notifications

    # Analytics
    @property
    def posthog_enabled(self) -> bool:
        return self._config.analytics.posthog_enabled

    @property
    def posthog_host(self) -> str:
        return self._config.analytics.posthog_host

    @property
    def posthog_debug(self) -> bool:
        return self._config.analytics.posthog_debug

    # Secrets
    @property
    def secret_key(self) -> str:
        return self._secrets.secret_key or ""

    @property
    def openweather_api_key(self) -> str | None:
        return self._secrets.openweather_api_key

    @property
    def anthropic_api_key(self) -> str | None:
        return self._secrets.anthropic_api_key

    @property
    def posthog_api_key(self) -> str | None:
        return self._secrets.posthog_api_key


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance, loading it on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the global settings instance so the next access reloads it."""
    global _settings
    _settings = None


class _SettingsProxy:
    """Proxy object that lazily loads settings on first access."""

    def __getattr__(self, name: str):
        return getattr(get_settings(), name)

    def __repr__(self) -> str:
        return repr(get_settings())


settings = _SettingsProxy()
