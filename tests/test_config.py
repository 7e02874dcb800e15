"""Tests for the Wine Journal configuration system."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from winejournal.config.loader import (
    apply_env_overrides,
    find_config_file,
    find_secrets_file,
    get_config_search_paths,
    get_secrets_search_paths,
    load_config,
    load_secrets,
    load_toml_file,
    parse_env_file,
)
from winejournal.config.schema import (
    AIConfig,
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
from winejournal.config.settings import Settings, get_settings, reset_settings


class TestSchemaDefaults:
    """Test default values in schema models."""

    def test_server_config_defaults(self):
        """Test ServerConfig has correct defaults."""
        config = ServerConfig()
        assert config.host == "127.0.0.1"
        assert config.port == 8000
        assert config.workers == 2
        assert config.debug is False
        assert config.enforce_https is False
        assert config.rate_limit_per_minute == 60
        assert config.cors_origins == []

    def test_database_config_defaults(self):
        """Test DatabaseConfig has correct defaults."""
        config = DatabaseConfig()
        assert config.mongodb_url == "mongodb://localhost:27017"
        assert config.mongodb_database == "winejournal"

    def test_storage_config_defaults(self):
        """Test StorageConfig has correct defaults."""
        config = StorageConfig()
        assert config.data_dir == Path("data")
        assert config.max_upload_mb == 10
        assert config.images_dir == Path("data/images")
        assert config.max_upload_bytes == 10 * 1024 * 1024

    def test_auth_config_defaults(self):
        config = AuthConfig()
        assert config.enabled is True
        assert config.registration_enabled is True
        assert config.token_lifetime_minutes == 120

    def test_email_config_defaults(self):
        config = EmailConfig()
        assert config.backend == "console"
        assert config.from_name == "Wine Journal"
        assert config.frontend_url == "http://localhost:8000"

    def test_weather_config_defaults(self):
        config = WeatherConfig()
        assert config.base_url == "https://api.openweathermap.org/data/2.5"
        assert config.units == "metric"

    def test_ai_config_defaults(self):
        config = AIConfig()
        assert config.enabled is True
        assert 0 <= config.temperature <= 1

    def test_notification_thresholds_default(self):
        """Test drink-window thresholds default to 7/14/30 days."""
        config = NotificationsConfig()
        assert (config.high_priority_days, config.medium_priority_days, config.low_priority_days) == (7, 14, 30)

    def test_notification_thresholds_must_be_ordered(self):
        with pytest.raises(ValidationError):
            NotificationsConfig(high_priority_days=20, medium_priority_days=14)

    def test_winejournal_config_defaults(self):
        """Test WineJournalConfig has correct defaults."""
        config = WineJournalConfig()
        assert config.app_name == "Wine Journal"
        assert isinstance(config.server, ServerConfig)
        assert isinstance(config.database, DatabaseConfig)
        assert isinstance(config.storage, StorageConfig)
        assert isinstance(config.weather, WeatherConfig)
        assert isinstance(config.notifications, NotificationsConfig)

    def test_secrets_config_defaults(self):
        config = SecretsConfig()
        assert config.secret_key is None
        assert config.openweather_api_key is None
        assert config.anthropic_api_key is None
        assert config.posthog_api_key is None


class TestConfigSearchPaths:
    """Test configuration file search paths."""

    def test_config_search_paths_order(self):
        """Test config search paths are in correct priority order."""
        paths = get_config_search_paths()
        assert len(paths) == 3
        assert paths[0] == Path.cwd() / "config.toml"
        assert paths[1] == Path.home() / ".config" / "winejournal" / "config.toml"
        assert paths[2] == Path("/etc/winejournal/config.toml")

    def test_secrets_search_paths_order(self):
        paths = get_secrets_search_paths()
        assert len(paths) == 3
        assert paths[0] == Path.cwd() / "secrets.env"
        assert paths[2] == Path("/etc/winejournal/secrets.env")


class TestTomlLoading:
    """Test TOML file loading."""

    def test_load_toml_file(self, tmp_path):
        toml_content = """
app_name = "TestApp"

[server]
host = "0.0.0.0"
port = 9000
debug = true

[database]
mongodb_url = "mongodb://testhost:27017"
"""
        config_file = tmp_path / "config.toml"
        config_file.write_text(toml_content)

        data = load_toml_file(config_file)
        assert data["app_name"] == "TestApp"
        assert data["server"]["port"] == 9000
        assert data["server"]["debug"] is True
        assert data["database"]["mongodb_url"] == "mongodb://testhost:27017"

    def test_load_config_from_file(self, tmp_path):
        """Test load_config with a specific file."""
        toml_content = """
app_name = "CustomApp"

[server]
port = 5000
workers = 4

[weather]
default_city = "Stellenbosch, South Africa"

[notifications]
high_priority_days = 3
"""
        config_file = tmp_path / "config.toml"
        config_file.write_text(toml_content)

        config = load_config(config_file)
        assert config.app_name == "CustomApp"
        assert config.server.port == 5000
        assert config.server.workers == 4
        assert config.weather.default_city == "Stellenbosch, South Africa"
        assert config.notifications.high_priority_days == 3
        # Defaults should still apply
        assert config.server.host == "127.0.0.1"
        assert config.notifications.low_priority_days == 30

    def test_load_config_rejects_unordered_thresholds(self, tmp_path):
        config_file = tmp_path / "config.toml"
        config_file.write_text("[notifications]\nlow_priority_days = 5\n")

        with pytest.raises(ValidationError):
            load_config(config_file)


class TestEnvFileParsing:
    """Test .env file parsing."""

    def test_parse_simple_env_file(self, tmp_path):
        env_file = tmp_path / "secrets.env"
        env_file.write_text("WINEJOURNAL_SECRET_KEY=my-secret-key\nOPENWEATHER_API_KEY=abc123\n")

        result = parse_env_file(env_file)
        assert result["WINEJOURNAL_SECRET_KEY"] == "my-secret-key"
        assert result["OPENWEATHER_API_KEY"] == "abc123"

    def test_parse_env_file_with_quotes(self, tmp_path):
        """Test parsing .env file with quoted values."""
        env_content = '''
KEY1="double quoted value"
KEY2='single quoted value'
KEY3=unquoted value
'''
        env_file = tmp_path / "test.env"
        env_file.write_text(env_content)

        result = parse_env_file(env_file)
        assert result["KEY1"] == "double quoted value"
        assert result["KEY2"] == "single quoted value"
        assert result["KEY3"] == "unquoted value"

    def test_parse_env_file_skips_comments_and_blank_lines(self, tmp_path):
        env_content = """
# This is a comment
KEY1=value1

NOT A PAIR
KEY2=value2
"""
        env_file = tmp_path / "test.env"
        env_file.write_text(env_content)

        result = parse_env_file(env_file)
        assert result == {"KEY1": "value1", "KEY2": "value2"}


class TestEnvOverrides:
    """Test environment variable overrides."""

    def test_apply_server_overrides(self):
        config_dict = {}

        with patch.dict(os.environ, {"WINEJOURNAL_HOST": "0.0.0.0", "WINEJOURNAL_PORT": "3000"}):
            apply_env_overrides(config_dict)

        assert config_dict["server"]["host"] == "0.0.0.0"
        assert config_dict["server"]["port"] == 3000

    def test_apply_database_overrides(self):
        config_dict = {}

        with patch.dict(
            os.environ,
            {
                "WINEJOURNAL_MONGODB_URL": "mongodb://custom:27017",
                "WINEJOURNAL_MONGODB_DATABASE": "custom_db",
            },
        ):
            apply_env_overrides(config_dict)

        assert config_dict["database"]["mongodb_url"] == "mongodb://custom:27017"
        assert config_dict["database"]["mongodb_database"] == "custom_db"

    def test_apply_notification_overrides(self):
        config_dict = {}

        with patch.dict(os.environ, {"WINEJOURNAL_HIGH_PRIORITY_DAYS": "2"}):
            apply_env_overrides(config_dict)

        assert config_dict["notifications"]["high_priority_days"] == 2

    def test_apply_boolean_override_true(self):
        config_dict = {}

        with patch.dict(os.environ, {"WINEJOURNAL_DEBUG": "true"}):
            apply_env_overrides(config_dict)

        assert config_dict["server"]["debug"] is True

    def test_apply_boolean_override_false(self):
        config_dict = {"analytics": {"posthog_enabled": True}}

        with patch.dict(os.environ, {"WINEJOURNAL_POSTHOG_ENABLED": "false"}):
            apply_env_overrides(config_dict)

        assert config_dict["analytics"]["posthog_enabled"] is False


class TestSecretsLoading:
    """Test secrets loading."""

    def test_load_secrets_from_file(self, tmp_path):
        secrets_content = """
WINEJOURNAL_SECRET_KEY=file-secret-key
WINEJOURNAL_ANTHROPIC_API_KEY=sk-ant-api-key
OPENWEATHER_API_KEY=weather-key
"""
        secrets_file = tmp_path / "secrets.env"
        secrets_file.write_text(secrets_content)

        with patch.dict(os.environ, {"WINEJOURNAL_SECRET_KEY": ""}):
            secrets = load_secrets(secrets_file)
        assert secrets.secret_key == "file-secret-key"
        assert secrets.anthropic_api_key == "sk-ant-api-key"
        assert secrets.openweather_api_key == "weather-key"

    def test_load_secrets_env_override(self, tmp_path):
        """Test environment variables override file secrets."""
        secrets_file = tmp_path / "secrets.env"
        secrets_file.write_text("WINEJOURNAL_SECRET_KEY=file-secret-key\n")

        with patch.dict(os.environ, {"WINEJOURNAL_SECRET_KEY": "env-secret-key"}):
            secrets = load_secrets(secrets_file)

        assert secrets.secret_key == "env-secret-key"

    def test_load_secrets_anthropic_key_alias(self, tmp_path):
        """Test ANTHROPIC_API_KEY is also checked."""
        with patch.dict(os.environ, {"ANTHROPIC_API_KEY": "sk-common-name"}):
            secrets = load_secrets(tmp_path / "nonexistent.env")

        assert secrets.anthropic_api_key == "sk-common-name"


class TestSettings:
    """Test the Settings class."""

    def setup_method(self):
        reset_settings()

    def teardown_method(self):
        reset_settings()

    def test_settings_generates_secret_key(self):
        """Test that a secret key is generated if not provided."""
        settings = Settings(config=WineJournalConfig(), secrets=SecretsConfig())
        assert settings.secret_key_generated is True
        assert len(settings.secret_key) > 20

    def test_settings_uses_provided_secret_key(self):
        settings = Settings(config=WineJournalConfig(), secrets=SecretsConfig(secret_key="my-provided-key"))
        assert settings.secret_key == "my-provided-key"
        assert settings.secret_key_generated is False

    def test_settings_property_accessors(self):
        """Test all property accessors work correctly."""
        config = WineJournalConfig(
            app_name="TestApp",
            server=ServerConfig(host="0.0.0.0", port=9000),
            database=DatabaseConfig(mongodb_database="testdb"),
            weather=WeatherConfig(default_city="Paarl"),
        )
        secrets = SecretsConfig(
            secret_key="test-key",
            anthropic_api_key="sk-test",
            openweather_api_key="ow-test",
        )
        settings = Settings(config=config, secrets=secrets)

        assert settings.app_name == "TestApp"
        assert settings.host == "0.0.0.0"
        assert settings.port == 9000
        assert settings.mongodb_database == "testdb"
        assert settings.weather_default_city == "Paarl"
        assert settings.secret_key == "test-key"
        assert settings.anthropic_api_key == "sk-test"
        assert settings.openweather_api_key == "ow-test"

        # Computed properties
        assert settings.max_upload_size_bytes == 10 * 1024 * 1024
        assert settings.image_storage_path == Path("data/images")
        assert settings.notifications.medium_priority_days == 14

    def test_get_settings_singleton(self):
        s1 = get_settings()
        s2 = get_settings()
        assert s1 is s2

    def test_reset_settings_clears_cache(self):
        s1 = get_settings()
        reset_settings()
        s2 = get_settings()
        assert s1 is not s2


class TestFindConfigFile:
    """Test config and secrets file discovery."""

    def test_find_config_file_in_cwd(self, tmp_path, monkeypatch):
        config_file = tmp_path / "config.toml"
        config_file.write_text("[server]\nport = 8000\n")

        monkeypatch.chdir(tmp_path)
        assert find_config_file() == config_file

    def test_find_secrets_file_in_cwd(self, tmp_path, monkeypatch):
        secrets_file = tmp_path / "secrets.env"
        secrets_file.write_text("WINEJOURNAL_SECRET_KEY=test\n")

        monkeypatch.chdir(tmp_path)
        assert find_secrets_file() == secrets_file
