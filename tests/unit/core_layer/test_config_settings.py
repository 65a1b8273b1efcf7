"""
Unit Tests for Configuration Settings

Tests the settings loading, validation, and default values.
"""

import pytest
from pydantic import ValidationError

from weathermate.core.config.settings import Settings, get_settings, reload_settings

SETTINGS_VARS = (
    "LYZR_API_KEY",
    "LYZR_BASE_URL",
    "GEMINI_API_KEY",
    "GEMINI_BASE_URL",
    "GEMINI_MODEL",
    "PROVIDER_TIMEOUT",
    "LOG_LEVEL",
    "LOG_FORMAT",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in SETTINGS_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.mark.unit
class TestSettingsDefaults:
    """Test Settings defaults with an empty environment."""

    def test_provider_defaults(self, clean_env):
        settings = Settings(_env_file=None)

        assert settings.LYZR_API_KEY is None
        assert settings.GEMINI_API_KEY is None
        assert settings.LYZR_BASE_URL == "https://agent-prod.studio.lyzr.ai"
        assert settings.GEMINI_BASE_URL == "https://generativelanguage.googleapis.com"
        assert settings.GEMINI_MODEL == "gemini-pro"
        assert settings.PROVIDER_TIMEOUT is None

    def test_grouped_views(self, clean_env):
        settings = Settings(_env_file=None)

        assert settings.lyzr.LYZR_USER_ID == "weathermate_user"
        assert settings.lyzr.LYZR_AGENT_NAME == "WeatherAgent"
        assert settings.gemini.GEMINI_MODEL == "gemini-pro"
        assert settings.logging.LOG_FORMAT == "json"
        assert settings.app.APP_NAME == "WeatherMate"


@pytest.mark.unit
class TestSettingsFromEnvironment:
    """Test environment variable loading."""

    def test_credentials_from_environment(self, clean_env):
        clean_env.setenv("LYZR_API_KEY", "sk-default-env")
        clean_env.setenv("GEMINI_API_KEY", "AIzaEnvKey")

        settings = Settings(_env_file=None)

        assert settings.lyzr.LYZR_API_KEY == "sk-default-env"
        assert settings.gemini.GEMINI_API_KEY == "AIzaEnvKey"

    def test_timeout_from_environment(self, clean_env):
        clean_env.setenv("PROVIDER_TIMEOUT", "12.5")

        assert Settings(_env_file=None).PROVIDER_TIMEOUT == 12.5

    def test_base_url_trailing_slash_stripped(self, clean_env):
        clean_env.setenv("LYZR_BASE_URL", "https://lyzr.example/")

        assert Settings(_env_file=None).LYZR_BASE_URL == "https://lyzr.example"

    def test_log_level_normalised(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "debug")

        assert Settings(_env_file=None).LOG_LEVEL == "DEBUG"


@pytest.mark.unit
class TestSettingsValidation:
    """Test validators reject bad values."""

    def test_invalid_log_level(self, clean_env):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, LOG_LEVEL="VERBOSE")

    def test_invalid_log_format(self, clean_env):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, LOG_FORMAT="xml")

    @pytest.mark.parametrize("timeout", [0, -1.0])
    def test_non_positive_timeout(self, clean_env, timeout):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, PROVIDER_TIMEOUT=timeout)


@pytest.mark.unit
class TestSettingsCache:
    """Test the cached settings accessor."""

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_reload_settings_replaces_cache(self, clean_env):
        before = get_settings()
        clean_env.setenv("GEMINI_MODEL", "gemini-1.5-flash")

        try:
            after = reload_settings()
            assert after is not before
            assert get_settings().GEMINI_MODEL == "gemini-1.5-flash"
        finally:
            clean_env.delenv("GEMINI_MODEL")
            reload_settings()
