"""Configuration loader for Wine Journal.

Loads configuration from TOML files and secrets from .env files.
Environment variables can override any configuration value.
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from winejournal.config.schema import SecretsConfig, WineJournalConfig

logger = logging.getLogger(__name__)

ENV_PREFIX = "WINEJOURNAL"

# Keys converted to int / bool when read from the environment
_INT_KEYS = {
    "port",
    "workers",
    "max_upload_mb",
    "token_lifetime_minutes",
    "high_priority_days",
    "medium_priority_days",
    "low_priority_days",
    "check_interval_seconds",
}
_BOOL_KEYS = {
    "debug",
    "enforce_https",
    "enabled",
    "registration_enabled",
    "posthog_enabled",
    "posthog_debug",
}


def _search_dirs() -> list[Path]:
    """Directories searched for config files, highest priority first."""
    return [
        Path.cwd(),
        Path.home() / ".config" / "winejournal",
        Path("/etc/winejournal"),
    ]


def get_config_search_paths() -> list[Path]:
    """Get the list of paths to search for configuration files.

    Returns paths in priority order (first found wins):
    1. ./config.toml (project root - for development)
    2. ~/.config/winejournal/config.toml (user config)
    3. /etc/winejournal/config.toml (system config)
    """
    return [d / "config.toml" for d in _search_dirs()]


def get_secrets_search_paths() -> list[Path]:
    """Get the list of paths to search for secrets files, in priority order."""
    return [d / "secrets.env" for d in _search_dirs()]


def find_config_file() -> Path | None:
    """Find the first existing config file from search paths."""
    for path in get_config_search_paths():
        if path.is_file():
            logger.debug("Found config file: %s", path)
            return path
    return None


def find_secrets_file() -> Path | None:
    """Find the first existing secrets file from search paths."""
    for path in get_secrets_search_paths():
        if path.is_file():
            logger.debug("Found secrets file: %s", path)
            return path
    return None


def load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents as a dictionary."""
    with open(path, "rb") as f:
        return tomllib.load(f)


def parse_env_file(path: Path) -> dict[str, str]:
    """Parse a simple .env file into a dictionary.

    Supports:
    - KEY=value
    - KEY="quoted value"
    - # comments
    - Empty lines
    """
    env_vars: dict[str, str] = {}

    with open(path) as f:
        for line in f:
            line = line.strip()

            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip()

            if (value.startswith('"') and value.endswith('"')) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]

            env_vars[key] = value

    return env_vars


def apply_env_overrides(config_dict: dict[str, Any], prefix: str = ENV_PREFIX) -> None:
    """Apply environment variable overrides to configuration dictionary.

    Environment variables are mapped as follows:
    - WINEJOURNAL_SERVER_HOST -> config_dict["server"]["host"]
    - WINEJOURNAL_DEBUG -> config_dict["server"]["debug"] (shorthand)
    """
    env_mappings = {
        # Server
        f"{prefix}_SERVER_HOST": ("server", "host"),
        f"{prefix}_SERVER_PORT": ("server", "port"),
        f"{prefix}_SERVER_WORKERS": ("server", "workers"),
        f"{prefix}_SERVER_DEBUG": ("server", "debug"),
        f"{prefix}_DEBUG": ("server", "debug"),
        f"{prefix}_HOST": ("server", "host"),
        f"{prefix}_PORT": ("server", "port"),
        # Database
        f"{prefix}_MONGODB_URL": ("database", "mongodb_url"),
        f"{prefix}_MONGODB_DATABASE": ("database", "mongodb_database"),
        # Storage
        f"{prefix}_STORAGE_DATA_DIR": ("storage", "data_dir"),
        f"{prefix}_STORAGE_MAX_UPLOAD_MB": ("storage", "max_upload_mb"),
        # Auth
        f"{prefix}_AUTH_ENABLED": ("auth", "enabled"),
        f"{prefix}_REGISTRATION_ENABLED": ("auth", "registration_enabled"),
        f"{prefix}_TOKEN_LIFETIME_MINUTES": ("auth", "token_lifetime_minutes"),
        # Email
        f"{prefix}_EMAIL_FROM_ADDRESS": ("email", "from_address"),
        f"{prefix}_FRONTEND_URL": ("email", "frontend_url"),
        # Weather
        f"{prefix}_WEATHER_BASE_URL": ("weather", "base_url"),
        f"{prefix}_WEATHER_DEFAULT_CITY": ("weather", "default_city"),
        # AI
        f"{prefix}_AI_ENABLED": ("ai", "enabled"),
        f"{prefix}_AI_MODEL": ("ai", "model"),
        # Notifications
        f"{prefix}_NOTIFICATIONS_ENABLED": ("notifications", "enabled"),
        f"{prefix}_HIGH_PRIORITY_DAYS": ("notifications", "high_priority_days"),
        f"{prefix}_MEDIUM_PRIORITY_DAYS": ("notifications", "medium_priority_days"),
        f"{prefix}_LOW_PRIORITY_DAYS": ("notifications", "low_priority_days"),
        # Analytics
        f"{prefix}_POSTHOG_ENABLED": ("analytics", "posthog_enabled"),
        f"{prefix}_POSTHOG_HOST": ("analytics", "posthog_host"),
        f"{prefix}_POSTHOG_DEBUG": ("analytics", "posthog_debug"),
    }

    for env_var, (section, key) in env_mappings.items():
        value = os.environ.get(env_var)
        if value is None:
            continue

        config_dict.setdefault(section, {})

        if key in _INT_KEYS:
            config_dict[section][key] = int(value)
        elif key in _BOOL_KEYS:
            config_dict[section][key] = value.lower() in ("true", "1", "yes")
        else:
            config_dict[section][key] = value


# secrets.env key / environment variable -> SecretsConfig field
_SECRET_KEYS = {
    f"{ENV_PREFIX}_SECRET_KEY": "secret_key",
    f"{ENV_PREFIX}_OPENWEATHER_API_KEY": "openweather_api_key",
    "OPENWEATHER_API_KEY": "openweather_api_key",
    f"{ENV_PREFIX}_ANTHROPIC_API_KEY": "anthropic_api_key",
    "ANTHROPIC_API_KEY": "anthropic_api_key",
    f"{ENV_PREFIX}_POSTHOG_API_KEY": "posthog_api_key",
}


def load_secrets(secrets_file: Path | None = None) -> SecretsConfig:
    """Load secrets from environment variables and optional secrets.env file.

    Environment variables take precedence over file values.
    """
    secrets_dict: dict[str, str | None] = {}

    if secrets_file is None:
        secrets_file = find_secrets_file()

    if secrets_file and secrets_file.exists():
        logger.info("Loading secrets from: %s", secrets_file)
        file_secrets = parse_env_file(secrets_file)
        for file_key, config_key in _SECRET_KEYS.items():
            if file_key in file_secrets:
                secrets_dict[config_key] = file_secrets[file_key]

    for env_var, config_key in _SECRET_KEYS.items():
        value = os.environ.get(env_var)
        if value:
            secrets_dict[config_key] = value

    return SecretsConfig(**secrets_dict)


def load_config(config_file: Path | None = None) -> WineJournalConfig:
    """Load configuration from TOML file with environment variable overrides.

    Args:
        config_file: Optional path to config file. If not provided,
                     searches default locations.

    Returns:
        WineJournalConfig instance with all settings loaded.
    """
    config_dict: dict[str, Any] = {}

    if config_file is None:
        config_file = find_config_file()

    if config_file and config_file.exists():
        logger.info("Loading config from: %s", config_file)
        config_dict = load_toml_file(config_file)
    else:
        logger.info("No config file found, using defaults with env overrides")

    apply_env_overrides(config_dict)

    return WineJournalConfig(**config_dict)
