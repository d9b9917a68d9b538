"""Configuration management for Email Productivity Agent.

This module handles application configuration using Pydantic settings.
Configuration can be loaded from environment variables or .env files.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from email_productivity_agent.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings with environment variable support.

    All settings can be overridden via environment variables with
    the EMAIL_AGENT_ prefix (e.g., EMAIL_AGENT_GEMINI_API_KEY).
    """

    model_config = SettingsConfigDict(
        env_prefix="EMAIL_AGENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database Configuration
    database_url: str | None = Field(
        default=None,
        description="Hosted Postgres connection URL (e.g. the Supabase pooler URL)",
    )
    database_key: str | None = Field(
        default=None,
        description="Database access credential, injected as the connection password",
    )

    # Gemini Configuration
    gemini_api_key: str | None = Field(
        default=None,
        description="Gemini API key. AI features are disabled when unset.",
    )
    gemini_api_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL of the Gemini REST API",
    )
    gemini_model: str = Field(
        default="gemini-2.0-flash",
        description="Gemini model used for every inference call",
    )
    llm_timeout: float = Field(
        default=30.0,
        description="Timeout for a single Gemini request attempt in seconds",
    )
    llm_probe_timeout: float = Field(
        default=10.0,
        description="Timeout for the connectivity probe used by diagnostics",
    )
    max_retries: int = Field(
        default=3,
        description="Maximum number of attempts for a Gemini request",
    )
    retry_base_delay: float = Field(
        default=1.0,
        description="Base delay in seconds; the n-th retry waits n times this value",
    )

    # Batch processing
    batch_item_delay: float = Field(
        default=0.25,
        description="Pause between emails during batch processing in seconds",
    )
    batch_max_passes: int = Field(
        default=3,
        description="Maximum number of passes over the inbox when processing all emails",
    )
    batch_pass_pause: float = Field(
        default=1.0,
        description="Pause between batch passes in seconds",
    )

    # Application Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    cors_origins: list[str] = Field(
        default=["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed to call the HTTP API",
    )

    @property
    def ai_enabled(self) -> bool:
        """Whether a Gemini API key is configured."""
        return bool(self.gemini_api_key)

    def require_database(self) -> None:
        """Fail fast when the database settings are missing.

        Raises:
            ConfigurationError: If the database URL or credential is unset.
        """
        missing = []
        if not self.database_url:
            missing.append("EMAIL_AGENT_DATABASE_URL")
        if not self.database_key:
            missing.append("EMAIL_AGENT_DATABASE_KEY")
        if missing:
            raise ConfigurationError(f"Missing database configuration: {', '.join(missing)}")


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings: Application settings instance.
    """
    return Settings()
