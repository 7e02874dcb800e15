"""Wine Journal configuration module.

This module provides TOML-based configuration with environment variable overrides.

Configuration is loaded from the following locations (in order of priority):
1. Environment variables (highest priority)
2. ./config.toml (project root - for development)
3. ~/.config/winejournal/config.toml (user config)
4. /etc/winejournal/config.toml (system config)

Secrets are loaded from secrets.env files in the same directories.
"""

from winejournal.config.schema import (
    AIConfig,
    AnalyticsConfig,
    AuthConfig,
    DatabaseConfig,
    EmailConfig,
    NotificationsConfig,
    SecretsConfig,
    ServerConfig,
    StorageConfig,
    WeatherConfig,
    WineJournalConfig,
)
from winejournal.config.settings import Settings, get_settings, reset_settings, settings

__all__ = [
    "AIConfig",
    "AnalyticsConfig",
    "AuthConfig",
    "DatabaseConfig",
    "EmailConfig",
    "NotificationsConfig",
    "SecretsConfig",
    "ServerConfig",
    "StorageConfig",
    "WeatherConfig",
    "WineJournalConfig",
    "Settings",
    "get_settings",
    "reset_settings",
    "settings",
]
