"""Unit tests for configuration module."""

import pytest

from email_productivity_agent.config import Settings, get_settings
from email_productivity_agent.exceptions import ConfigurationError


class TestSettings:
    """Test suite for Settings class."""

    def test_default_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that default settings are properly initialized."""
        monkeypatch.delenv("EMAIL_AGENT_LLM_TIMEOUT", raising=False)
        settings = Settings(_env_file=None)

        assert settings.gemini_model == "gemini-2.0-flash"
        assert settings.llm_timeout == 30.0
        assert settings.llm_probe_timeout == 10.0
        assert settings.max_retries == 3
        assert settings.retry_base_delay == 1.0
        assert settings.batch_item_delay == 0.25
        assert settings.batch_max_passes == 3
        assert settings.log_level == "INFO"

    def test_settings_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test loading settings from environment variables."""
        monkeypatch.setenv("EMAIL_AGENT_GEMINI_API_KEY", "env-key")
        monkeypatch.setenv("EMAIL_AGENT_DATABASE_URL", "postgresql://db.example.com/postgres")
        monkeypatch.setenv("EMAIL_AGENT_LOG_LEVEL", "DEBUG")

        # Clear the cache to ensure fresh settings
        get_settings.cache_clear()

        settings = get_settings()

        assert settings.gemini_api_key == "env-key"
        assert settings.database_url == "postgresql://db.example.com/postgres"
        assert settings.log_level == "DEBUG"

        # Clean up
        get_settings.cache_clear()

    def test_get_settings_returns_cached_instance(self) -> None:
        """Test that get_settings returns the same cached instance."""
        get_settings.cache_clear()

        settings1 = get_settings()
        settings2 = get_settings()

        assert settings1 is settings2

        # Clean up
        get_settings.cache_clear()

    def test_missing_gemini_key_only_disables_ai(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("EMAIL_AGENT_GEMINI_API_KEY", raising=False)
        settings = Settings(_env_file=None, database_url="sqlite://", database_key="k")

        assert settings.ai_enabled is False
        settings.require_database()

    def test_require_database_names_missing_settings(self) -> None:
        settings = Settings(_env_file=None, database_url="postgresql://db/postgres")

        with pytest.raises(ConfigurationError, match="EMAIL_AGENT_DATABASE_KEY"):
            settings.require_database()
